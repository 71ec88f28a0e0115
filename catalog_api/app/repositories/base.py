"""
Shared SQLite access for the entity repositories.

``SQLiteRepository`` implements the paginated query contract used by
the services: ``query_page(page, size, name)`` returns one page of
records in ascending id order together with the total number of
matching rows.  A ``name`` of ``None`` disables filtering; any other
value (including the empty string) selects rows whose name contains it,
ignoring case.

Infrastructure failures are raised as ``StoreUnavailableError``.
Unique constraint violations are raised as ``DuplicateKeyError`` so
that services can turn them into business errors.
"""

import sqlite3
from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Optional, Tuple, TypeVar

from ..core.db import get_cursor
from ..core.exceptions import StoreUnavailableError

M = TypeVar("M")

LIKE_ESCAPE = "\\"
# Largest value SQLite can bind as an INTEGER.
SQLITE_MAX_INT = 2**63 - 1


class DuplicateKeyError(Exception):
    """A write was rejected by a unique constraint."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"Duplicate value for {field}: {value!r}")
        self.field = field
        self.value = value


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``value`` matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class SQLiteRepository(Generic[M]):
    """Base class holding the queries shared by all tables."""

    table: str = ""

    def __init__(
        self, database_path: Optional[str] = None, timeout: Optional[float] = None
    ) -> None:
        self.database_path = database_path
        self.timeout = timeout

    def _from_row(self, row: sqlite3.Row) -> M:
        raise NotImplementedError

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        try:
            with get_cursor(self.database_path, self.timeout) as cursor:
                # SQLite's LOWER only folds ASCII; register a Unicode aware fold.
                cursor.connection.create_function(
                    "casefold", 1, _casefold, deterministic=True
                )
                yield cursor
        except sqlite3.IntegrityError:
            raise
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Database error on {self.table}: {e}") from e

    def query_page(
        self, page: int, size: int, name: Optional[str] = None
    ) -> Tuple[List[M], int]:
        offset = page * size
        where = ""
        params: List[Any] = []
        if name is not None:
            where = f" WHERE casefold(name) LIKE ? ESCAPE '{LIKE_ESCAPE}'"
            params.append(f"%{escape_like(name.casefold())}%")
        with self._cursor() as cursor:
            total = cursor.execute(
                f"SELECT COUNT(*) FROM {self.table}{where}", tuple(params)
            ).fetchone()[0]
            if offset > SQLITE_MAX_INT:
                # Far past the last row; nothing to fetch.
                rows = []
            else:
                rows = cursor.execute(
                    f"SELECT * FROM {self.table}{where} ORDER BY id ASC LIMIT ? OFFSET ?",
                    (*params, size, offset),
                ).fetchall()
        return [self._from_row(row) for row in rows], total

    def find_by_id(self, entity_id: int) -> Optional[M]:
        if entity_id > SQLITE_MAX_INT:
            return None
        with self._cursor() as cursor:
            row = cursor.execute(
                f"SELECT * FROM {self.table} WHERE id = ?", (entity_id,)
            ).fetchone()
        return self._from_row(row) if row else None

    def exists_by_id(self, entity_id: int) -> bool:
        if entity_id > SQLITE_MAX_INT:
            return False
        with self._cursor() as cursor:
            row = cursor.execute(
                f"SELECT 1 FROM {self.table} WHERE id = ?", (entity_id,)
            ).fetchone()
        return row is not None

    def delete_by_id(self, entity_id: int) -> bool:
        """Delete a row; returns ``False`` when nothing was deleted."""
        if entity_id > SQLITE_MAX_INT:
            return False
        with self._cursor() as cursor:
            cursor.execute(f"DELETE FROM {self.table} WHERE id = ?", (entity_id,))
            affected = cursor.rowcount
        return affected > 0