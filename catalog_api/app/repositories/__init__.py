"""
SQLite repositories backing the services.

Each repository owns one table and opens a fresh connection per call,
so instances can be shared freely between request threads.
"""

from .base import DuplicateKeyError, SQLiteRepository
from .product_repository import ProductRepository
from .user_repository import UserRepository

__all__ = ["DuplicateKeyError", "SQLiteRepository", "ProductRepository", "UserRepository"]
