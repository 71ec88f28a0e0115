"""
Persisted representations of the catalog entities.

These dataclasses mirror the rows of the ``users`` and ``products``
tables.  They are separate from the Pydantic schemas so that server
owned fields (``id`` and the timestamps) and the password hash never
leak into the API representation by accident.  An ``id`` of ``None``
means the record has not been inserted yet.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class User:
    name: str
    email: str
    password: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "User":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password=row["password"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


@dataclass
class Product:
    name: str
    price: Decimal
    quantity: int = 0
    description: Optional[str] = None
    category: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Product":
        # Prices are stored as text to keep their exact decimal value.
        return cls(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            price=Decimal(row["price"]),
            quantity=row["quantity"],
            category=row["category"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


__all__ = ["User", "Product"]
