import sqlite3
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, List
from pathlib import Path
from uuid import uuid4

from core.entities.user import User
from core.entities.statement import OperationType, Statement
from core.errors import EmailAlreadyExists
from core.repositories.user_repository import UserRepository
from core.repositories.statement_repository import StatementRepository


def create_schema(conn: sqlite3.Connection) -> None:
    cur = conn.cursor()

    cur.execute("""
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT UNIQUE NOT NULL,
        password_hash TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    """)

    # amount is TEXT so Decimal values survive the round trip exactly
    cur.execute("""
    CREATE TABLE IF NOT EXISTS statements (
        seq INTEGER PRIMARY KEY AUTOINCREMENT,
        id TEXT UNIQUE NOT NULL,
        user_id TEXT NOT NULL,
        type TEXT NOT NULL CHECK (type IN ('deposit', 'withdraw')),
        amount TEXT NOT NULL,
        description TEXT NOT NULL,
        created_at TEXT NOT NULL,
        FOREIGN KEY(user_id) REFERENCES users(id)
    );
    """)
    cur.execute("CREATE INDEX IF NOT EXISTS ix_statements_user_id ON statements(user_id);")
    conn.commit()

def init_db(db_path: str) -> None:
    if db_path != ":memory:" and not db_path.startswith("file:"):
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, check_same_thread=False)
    try:
        create_schema(conn)
    finally:
        conn.close()

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

class SQLiteUserRepository(UserRepository):
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self.conn.row_factory = sqlite3.Row

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=row["created_at"],
        )

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        user = User(id=str(uuid4()), name=name, email=email, password_hash=password_hash, created_at=_now())
        cur = self.conn.cursor()
        try:
            cur.execute(
                "INSERT INTO users (id, name, email, password_hash, created_at) VALUES (?, ?, ?, ?, ?)",
                (user.id, user.name, user.email, user.password_hash, user.created_at),
            )
        except sqlite3.IntegrityError:
            # lost a race with a concurrent registration of the same email
            self.conn.rollback()
            raise EmailAlreadyExists()
        self.conn.commit()
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM users WHERE email = ?", (email,))
        row = cur.fetchone()
        return self._row_to_user(row) if row else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM users WHERE id = ?", (user_id,))
        row = cur.fetchone()
        return self._row_to_user(row) if row else None

class SQLiteStatementRepository(StatementRepository):
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self.conn.row_factory = sqlite3.Row

    def _row_to_statement(self, row: sqlite3.Row) -> Statement:
        return Statement(
            id=row["id"],
            user_id=row["user_id"],
            type=OperationType(row["type"]),
            amount=Decimal(row["amount"]),
            description=row["description"],
            created_at=row["created_at"],
        )

    def create(self, user_id: str, type: OperationType, amount: Decimal, description: str) -> Statement:
        statement = Statement(
            id=str(uuid4()),
            user_id=user_id,
            type=OperationType(type),
            amount=amount,
            description=description,
            created_at=_now(),
        )
        cur = self.conn.cursor()
        cur.execute(
            "INSERT INTO statements (id, user_id, type, amount, description, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (statement.id, statement.user_id, statement.type.value, str(statement.amount),
             statement.description, statement.created_at),
        )
        self.conn.commit()
        return statement

    def find_statement_operation(self, user_id: str, statement_id: str) -> Optional[Statement]:
        cur = self.conn.cursor()
        cur.execute(
            "SELECT * FROM statements WHERE id = ? AND user_id = ?",
            (statement_id, user_id),
        )
        row = cur.fetchone()
        return self._row_to_statement(row) if row else None

    def list_by_user(self, user_id: str) -> List[Statement]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM statements WHERE user_id = ? ORDER BY seq", (user_id,))
        return [self._row_to_statement(r) for r in cur.fetchall()]
