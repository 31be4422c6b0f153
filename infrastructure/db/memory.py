from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import uuid4

from core.entities.user import User
from core.entities.statement import OperationType, Statement
from core.repositories.user_repository import UserRepository
from core.repositories.statement_repository import StatementRepository


class InMemoryUserRepository(UserRepository):
    """Dict-backed users store, used by tests and local experiments."""
    def __init__(self):
        self.users: Dict[str, User] = {}

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        user = User(
            id=str(uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.users[user.id] = user
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)


class InMemoryStatementRepository(StatementRepository):
    """List-backed statements store; keeps insertion order."""
    def __init__(self):
        self.statements: List[Statement] = []

    def create(self, user_id: str, type: OperationType, amount: Decimal, description: str) -> Statement:
        statement = Statement(
            id=str(uuid4()),
            user_id=user_id,
            type=OperationType(type),
            amount=amount,
            description=description,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.statements.append(statement)
        return statement

    def find_statement_operation(self, user_id: str, statement_id: str) -> Optional[Statement]:
        return next(
            (s for s in self.statements if s.id == statement_id and s.user_id == user_id),
            None,
        )

    def list_by_user(self, user_id: str) -> List[Statement]:
        return [s for s in self.statements if s.user_id == user_id]
