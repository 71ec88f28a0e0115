"""
Persistence for users.

The ``users.email`` column carries a UNIQUE constraint; inserts and
updates that would duplicate an e-mail raise ``DuplicateKeyError``
even when two writers passed the service level check at the same time.
"""

import sqlite3
from dataclasses import replace
from typing import Optional

from ..models import User
from .base import DuplicateKeyError, SQLiteRepository


class UserRepository(SQLiteRepository[User]):
    table = "users"

    def _from_row(self, row: sqlite3.Row) -> User:
        return User.from_row(row)

    def exists_by_email(self, email: str) -> bool:
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT 1 FROM users WHERE email = ?", (email,)
            ).fetchone()
        return row is not None

    def exists_by_email_excluding_id(self, email: str, user_id: int) -> bool:
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT 1 FROM users WHERE email = ? AND id <> ?", (email, user_id)
            ).fetchone()
        return row is not None

    def insert(self, user: User) -> User:
        """Insert a new user and return it with its assigned id."""
        with self._cursor() as cursor:
            try:
                cursor.execute(
                    "INSERT INTO users (name, email, password, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (user.name, user.email, user.password, user.created_at, user.updated_at),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateKeyError("email", user.email) from e
            user_id = cursor.lastrowid
        return replace(user, id=user_id)

    def update(self, user: User) -> Optional[User]:
        """Write back name, e-mail, password and ``updated_at``.

        ``created_at`` is never touched.  Returns ``None`` when the row
        no longer exists.
        """
        with self._cursor() as cursor:
            try:
                cursor.execute(
                    "UPDATE users SET name = ?, email = ?, password = ?, updated_at = ? "
                    "WHERE id = ?",
                    (user.name, user.email, user.password, user.updated_at, user.id),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateKeyError("email", user.email) from e
            affected = cursor.rowcount
        return user if affected else None
