import logging
from decimal import Decimal, InvalidOperation

from core.entities.statement import Balance, OperationType, Statement
from core.errors import InsufficientFunds, StatementNotFound, UserNotFound
from core.repositories.statement_repository import StatementRepository
from core.repositories.user_repository import UserRepository


logger = logging.getLogger(__name__)

def _ensure_user(users: UserRepository, user_id: str) -> None:
    if users.get_by_id(user_id) is None:
        raise UserNotFound()

def create_statement(
    users: UserRepository,
    statements: StatementRepository,
    user_id: str,
    type: OperationType,
    amount: Decimal,
    description: str,
) -> Statement:
    """
    Append a deposit or withdrawal for `user_id`.

    Withdrawals are checked against the balance recomputed from all prior
    statements. The check and the append are not atomic: two concurrent
    withdrawals can both pass it.
    """
    _ensure_user(users, user_id)
    type = OperationType(type)
    try:
        amount = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError("Amount must be a number")
    if not amount.is_finite() or amount <= 0:
        raise ValueError("Amount must be a positive finite number")

    if type == OperationType.WITHDRAW:
        balance = statements.get_user_balance(user_id)
        if amount > balance:
            logger.warning("Rejected withdrawal of %s for user %s: balance %s", amount, user_id, balance)
            raise InsufficientFunds()

    statement = statements.create(user_id=user_id, type=type, amount=amount, description=description)
    logger.info("Created %s statement %s for user %s", type.value, statement.id, user_id)
    return statement

def get_balance(users: UserRepository, statements: StatementRepository, user_id: str) -> Balance:
    _ensure_user(users, user_id)
    return Balance.of(statements.list_by_user(user_id))

def get_statement_operation(
    users: UserRepository,
    statements: StatementRepository,
    user_id: str,
    statement_id: str,
) -> Statement:
    _ensure_user(users, user_id)
    statement = statements.find_statement_operation(user_id=user_id, statement_id=statement_id)
    if statement is None:
        raise StatementNotFound()
    return statement
