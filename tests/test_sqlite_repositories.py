import sqlite3
from decimal import Decimal

import pytest

from core.entities.statement import OperationType
from core.errors import EmailAlreadyExists, InsufficientFunds
from core.use_cases.statement_use_cases import create_statement, get_balance
from core.use_cases.user_use_cases import register_user
from infrastructure.db.sqlite import SQLiteStatementRepository, SQLiteUserRepository, create_schema, init_db


@pytest.fixture
def conn():
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    create_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def users(conn):
    return SQLiteUserRepository(conn)


@pytest.fixture
def statements(conn):
    return SQLiteStatementRepository(conn)


def test_create_and_find_user(users):
    created = users.create_user(name="John Doe", email="johndoe@example.com", password_hash="hash")

    assert users.get_by_id(created.id) == created
    assert users.get_by_email("johndoe@example.com") == created
    assert users.get_by_id("missing") is None
    assert users.get_by_email("missing@example.com") is None


def test_email_is_unique(users):
    users.create_user(name="John", email="johndoe@example.com", password_hash="hash")

    with pytest.raises(EmailAlreadyExists):
        users.create_user(name="Other", email="johndoe@example.com", password_hash="hash")

    assert users.get_by_email("johndoe@example.com").name == "John"


class StaleLookupUserRepository(SQLiteUserRepository):
    """Never sees existing emails, like two registrations racing past the lookup."""

    def get_by_email(self, email):
        return None


def test_register_user_race_on_email_is_a_conflict(conn):
    repo = StaleLookupUserRepository(conn)
    register_user(repo, name="John", email="johndoe@example.com", password="123")

    with pytest.raises(EmailAlreadyExists):
        register_user(repo, name="Other", email="johndoe@example.com", password="456")

    # connection is still usable after the failed insert
    repo.create_user(name="Jane", email="jane@example.com", password_hash="hash")
    assert conn.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 2


def test_statement_requires_existing_user(statements):
    with pytest.raises(sqlite3.IntegrityError):
        statements.create("nobody", OperationType.DEPOSIT, Decimal("1"), "orphan")


def test_statements_keep_exact_amounts_and_order(users, statements):
    user = users.create_user(name="John", email="johndoe@example.com", password_hash="hash")
    first = statements.create(user.id, OperationType.DEPOSIT, Decimal("0.10"), "a")
    second = statements.create(user.id, OperationType.WITHDRAW, Decimal("0.03"), "b")

    listed = statements.list_by_user(user.id)

    assert [s.id for s in listed] == [first.id, second.id]
    assert listed[0].amount == Decimal("0.10")
    assert statements.get_user_balance(user.id) == Decimal("0.07")


def test_find_statement_operation_is_scoped_to_user(users, statements):
    john = users.create_user(name="John", email="johndoe@example.com", password_hash="hash")
    jane = users.create_user(name="Jane", email="jane@example.com", password_hash="hash")
    statement = statements.create(john.id, OperationType.DEPOSIT, Decimal("5"), "cash")

    assert statements.find_statement_operation(john.id, statement.id) == statement
    assert statements.find_statement_operation(jane.id, statement.id) is None


def test_use_cases_against_sqlite(users, statements):
    user = users.create_user(name="John", email="johndoe@example.com", password_hash="hash")
    create_statement(users, statements, user.id, OperationType.DEPOSIT, Decimal("200.5"), "Deposit")
    create_statement(users, statements, user.id, OperationType.WITHDRAW, Decimal("100"), "Withdraw")

    with pytest.raises(InsufficientFunds):
        create_statement(users, statements, user.id, OperationType.WITHDRAW, Decimal("300"), "Too much")

    assert get_balance(users, statements, user.id).balance == Decimal("100.5")
    assert len(statements.list_by_user(user.id)) == 2


def test_init_db_creates_file(tmp_path):
    db_path = tmp_path / "nested" / "finapi.db"

    init_db(str(db_path))

    conn = sqlite3.connect(str(db_path))
    try:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    finally:
        conn.close()
    assert {"users", "statements"} <= tables
