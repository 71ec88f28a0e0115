"""
Generic page wrapper returned by the list endpoints.

``content`` holds at most ``size`` items in ascending id order.
``total_pages`` is ``ceil(total_elements / size)`` and zero for an
empty collection, so a page index beyond the last page yields an empty
``content`` with the real totals.
"""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    content: List[T]
    page: int
    size: int
    total_pages: int
    total_elements: int

    @classmethod
    def of(cls, content: List[T], page: int, size: int, total_elements: int) -> "Page[T]":
        total_pages = math.ceil(total_elements / size) if total_elements else 0
        return cls(
            content=content,
            page=page,
            size=size,
            total_pages=total_pages,
            total_elements=total_elements,
        )