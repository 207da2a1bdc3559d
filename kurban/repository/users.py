"""Storage of user accounts and seeding of the first administrator."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime
from typing import Any, Optional, Sequence

from kurban.models import NotFoundError, User
from kurban.security import generate_password_hash

logger = logging.getLogger(__name__)

_COLUMNS = "id, username, name, email, password, role, is_verified, created_at, updated_at"


def _row_to_user(row: Sequence[Any]) -> User:
    return User(
        id=uuid.UUID(row[0]),
        username=row[1],
        name=row[2],
        email=row[3],
        password=row[4],
        role=row[5],
        is_verified=bool(row[6]),
        created_at=datetime.fromisoformat(row[7]),
        updated_at=datetime.fromisoformat(row[8]),
    )


class UserRepository:
    """Reads and writes the users table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _find_one(self, where: str, *params: Any) -> Optional[User]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE {where}", params
        ).fetchone()
        return _row_to_user(row) if row is not None else None

    def create(self, user: User) -> None:
        with self.conn:
            self.conn.execute(
                f"INSERT INTO users ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    str(user.id),
                    user.username,
                    user.name,
                    user.email,
                    user.password,
                    user.role,
                    int(user.is_verified),
                    user.created_at.isoformat(),
                    user.updated_at.isoformat(),
                ),
            )

    def find_all(self) -> list[User]:
        rows = self.conn.execute(f"SELECT {_COLUMNS} FROM users").fetchall()
        return [_row_to_user(r) for r in rows]

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one("email = ?", email)

    def find_by_email_or_username(self, identifier: str) -> Optional[User]:
        return self._find_one("email = ? OR username = ?", identifier, identifier)

    def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return self._find_one("id = ?", str(user_id))

    def update(self, user: User) -> None:
        with self.conn:
            self.conn.execute(
                "UPDATE users SET username = ?, name = ?, email = ?, role = ?, is_verified = ? "
                "WHERE id = ?",
                (
                    user.username,
                    user.name,
                    user.email,
                    user.role,
                    int(user.is_verified),
                    str(user.id),
                ),
            )

    def update_password(self, user_id: uuid.UUID, new_hashed: str) -> None:
        with self.conn:
            self.conn.execute(
                "UPDATE users SET password = ? WHERE id = ?", (new_hashed, str(user_id))
            )

    def delete(self, user_id: uuid.UUID) -> None:
        with self.conn:
            cur = self.conn.execute("DELETE FROM users WHERE id = ?", (str(user_id),))
        if cur.rowcount == 0:
            raise NotFoundError("User not found")


def seed_initial_admin(user_repo: UserRepository, email: str, password: str) -> Optional[User]:
    """Create the super admin unless an account with that email exists; return it if created."""
    if user_repo.find_by_email_or_username(email) is not None:
        logger.info("Admin already exists. Skipping seed.")
        return None

    now = datetime.now()
    admin = User(
        username="superadmin",
        name="Super Admin",
        email=email,
        password=generate_password_hash(password),
        role="admin",
        is_verified=True,
        created_at=now,
        updated_at=now,
    )
    user_repo.create(admin)
    logger.info("Initial admin seeded successfully!")
    return admin