from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, List


class OperationType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


@dataclass
class Statement:
    id: str
    user_id: str
    type: OperationType
    amount: Decimal         # always positive, the sign comes from `type`
    description: str
    created_at: str

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == OperationType.DEPOSIT else -self.amount


def compute_balance(statements: Iterable[Statement]) -> Decimal:
    return sum((s.signed_amount for s in statements), Decimal("0"))


@dataclass
class Balance:
    """Derived value, never stored: deposits minus withdrawals at query time."""
    balance: Decimal
    statements: List[Statement] = field(default_factory=list)

    @classmethod
    def of(cls, statements: List[Statement]) -> "Balance":
        return cls(balance=compute_balance(statements), statements=statements)
