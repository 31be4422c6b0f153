from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from core.entities.statement import OperationType, Statement
from core.entities.user import User
from core.errors import LedgerError
from core.repositories.statement_repository import StatementRepository
from core.repositories.user_repository import UserRepository
from core.use_cases.statement_use_cases import create_statement, get_balance, get_statement_operation
from infrastructure.web.dependencies import (
    get_current_user,
    get_statement_repo,
    get_user_repo,
    to_http_exception,
)


router = APIRouter(prefix="/api/v1/statements", tags=["statements"])


class StatementRequest(BaseModel):
    # bounded so every accepted amount and any realistic balance fit a JSON number
    amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)
    description: str = ""

class StatementResponse(BaseModel):
    id: str
    user_id: str
    type: OperationType
    amount: float
    description: str
    created_at: str

class BalanceResponse(BaseModel):
    statement: List[StatementResponse]
    balance: float

def _to_response(statement: Statement) -> StatementResponse:
    return StatementResponse(
        id=statement.id,
        user_id=statement.user_id,
        type=statement.type,
        amount=float(statement.amount),
        description=statement.description,
        created_at=statement.created_at,
    )

def _create(
    type: OperationType,
    payload: StatementRequest,
    user: User,
    users: UserRepository,
    statements: StatementRepository,
) -> StatementResponse:
    try:
        statement = create_statement(
            users,
            statements,
            user_id=user.id,
            type=type,
            amount=payload.amount,
            description=payload.description,
        )
    except LedgerError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(statement)

@router.post("/deposit", response_model=StatementResponse, status_code=201)
def deposit(
    payload: StatementRequest,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repo),
    statements: StatementRepository = Depends(get_statement_repo),
):
    return _create(OperationType.DEPOSIT, payload, current_user, users, statements)

@router.post("/withdraw", response_model=StatementResponse, status_code=201)
def withdraw(
    payload: StatementRequest,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repo),
    statements: StatementRepository = Depends(get_statement_repo),
):
    return _create(OperationType.WITHDRAW, payload, current_user, users, statements)

@router.get("/balance", response_model=BalanceResponse)
def balance(
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repo),
    statements: StatementRepository = Depends(get_statement_repo),
):
    try:
        result = get_balance(users, statements, current_user.id)
    except LedgerError as e:
        raise to_http_exception(e)
    return BalanceResponse(
        statement=[_to_response(s) for s in result.statements],
        balance=float(result.balance),
    )

@router.get("/{statement_id}", response_model=StatementResponse)
def get_statement(
    statement_id: str,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repo),
    statements: StatementRepository = Depends(get_statement_repo),
):
    try:
        statement = get_statement_operation(users, statements, current_user.id, statement_id)
    except LedgerError as e:
        raise to_http_exception(e)
    return _to_response(statement)
