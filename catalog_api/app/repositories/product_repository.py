"""Persistence for products."""

import sqlite3
from dataclasses import replace
from typing import Optional

from ..models import Product
from .base import SQLiteRepository


class ProductRepository(SQLiteRepository[Product]):
    table = "products"

    def _from_row(self, row: sqlite3.Row) -> Product:
        return Product.from_row(row)

    def insert(self, product: Product) -> Product:
        with self._cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO products (name, description, price, quantity, category, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.name,
                    product.description,
                    str(product.price),
                    product.quantity,
                    product.category,
                    product.created_at,
                    product.updated_at,
                ),
            )
            product_id = cursor.lastrowid
        return replace(product, id=product_id)

    def update(self, product: Product) -> Optional[Product]:
        with self._cursor() as cursor:
            cursor.execute(
                """
                UPDATE products
                SET name = ?, description = ?, price = ?, quantity = ?, category = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    product.name,
                    product.description,
                    str(product.price),
                    product.quantity,
                    product.category,
                    product.updated_at,
                    product.id,
                ),
            )
            affected = cursor.rowcount
        return product if affected else None
