from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    USER_NOT_FOUND = "user_not_found"
    STATEMENT_NOT_FOUND = "statement_not_found"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    INCORRECT_CREDENTIALS = "incorrect_credentials"


class LedgerError(Exception):
    """
    Base error for ledger use cases.

    Every error carries a `kind`; callers either catch the subclass or
    dispatch on `err.kind`.
    """

    kind: ErrorKind
    default_message: str = "Ledger error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UserNotFound(LedgerError):
    kind = ErrorKind.USER_NOT_FOUND
    default_message = "User not found"


class StatementNotFound(LedgerError):
    kind = ErrorKind.STATEMENT_NOT_FOUND
    default_message = "Statement not found"


class InsufficientFunds(LedgerError):
    kind = ErrorKind.INSUFFICIENT_FUNDS
    default_message = "Insufficient funds"


class EmailAlreadyExists(LedgerError):
    kind = ErrorKind.EMAIL_ALREADY_EXISTS
    default_message = "User with this email already exists"


class IncorrectCredentials(LedgerError):
    kind = ErrorKind.INCORRECT_CREDENTIALS
    default_message = "Incorrect email or password"
