import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Header, status
from jose import jwt, JWTError

from config.settings import settings
from core.entities.user import User
from core.errors import ErrorKind, LedgerError
from core.repositories.statement_repository import StatementRepository
from core.repositories.user_repository import UserRepository
from infrastructure.db.sqlite import SQLiteStatementRepository, SQLiteUserRepository


ERROR_STATUS = {
    ErrorKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STATEMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INSUFFICIENT_FUNDS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INCORRECT_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
}

def to_http_exception(error: LedgerError) -> HTTPException:
    return HTTPException(status_code=ERROR_STATUS[error.kind], detail=error.message)

def get_db():
    conn = sqlite3.connect(settings.DB_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()

def get_user_repo(conn: sqlite3.Connection = Depends(get_db)) -> UserRepository:
    return SQLiteUserRepository(conn)

def get_statement_repo(conn: sqlite3.Connection = Depends(get_db)) -> StatementRepository:
    return SQLiteStatementRepository(conn)

# jwt
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return authorization.split(" ", 1)[1]

def get_current_user(
    token: str = Depends(get_bearer_token),
    repo: UserRepository = Depends(get_user_repo),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise credentials_exception
    sub = payload.get("sub")
    if not sub:
        raise credentials_exception

    user = repo.get_by_id(str(sub))
    if user is None:
        raise credentials_exception
    return user
