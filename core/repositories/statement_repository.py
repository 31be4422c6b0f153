from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from core.entities.statement import OperationType, Statement, compute_balance


class StatementRepository(ABC):
    @abstractmethod
    def create(self, user_id: str, type: OperationType, amount: Decimal, description: str) -> Statement:...

    @abstractmethod
    def find_statement_operation(self, user_id: str, statement_id: str) -> Optional[Statement]:...

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[Statement]:...

    def get_user_balance(self, user_id: str) -> Decimal:
        return compute_balance(self.list_by_user(user_id))
