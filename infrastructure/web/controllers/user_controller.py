from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field, StringConstraints

from core.entities.user import User
from core.errors import LedgerError
from core.repositories.user_repository import UserRepository
from core.use_cases.user_use_cases import register_user, authenticate_user, show_user_profile
from infrastructure.web.dependencies import (
    create_access_token,
    get_current_user,
    get_user_repo,
    to_http_exception,
)


router = APIRouter(prefix="/api/v1", tags=["users"])


class RegisterRequest(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    email: EmailStr
    password: str = Field(..., min_length=1)

class SessionRequest(BaseModel):
    email: str
    password: str

class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: str

class SessionUser(BaseModel):
    id: str
    name: str
    email: str

class SessionResponse(BaseModel):
    user: SessionUser
    token: str

def _to_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, email=user.email, created_at=user.created_at)

@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(payload: RegisterRequest, repo: UserRepository = Depends(get_user_repo)):
    try:
        user = register_user(repo, name=payload.name, email=payload.email, password=payload.password)
    except LedgerError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(user)

@router.post("/sessions", response_model=SessionResponse)
def create_session(payload: SessionRequest, repo: UserRepository = Depends(get_user_repo)):
    try:
        user = authenticate_user(repo, email=payload.email, password=payload.password)
    except LedgerError as e:
        raise to_http_exception(e)
    token = create_access_token({"sub": user.id})
    return SessionResponse(
        user=SessionUser(id=user.id, name=user.name, email=user.email),
        token=token,
    )

@router.get("/profile", response_model=UserResponse)
def show_profile(
    current_user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user = show_user_profile(repo, current_user.id)
    except LedgerError as e:
        raise to_http_exception(e)
    return _to_response(user)
