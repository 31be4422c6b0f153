import pytest

from infrastructure.db.memory import InMemoryStatementRepository, InMemoryUserRepository


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def statement_repo():
    return InMemoryStatementRepository()
