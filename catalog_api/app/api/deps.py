"""
FastAPI dependencies resolving the services wired by ``create_app``.

Services are built once per application and stored on ``app.state``;
they are stateless apart from their collaborators, so one instance is
shared by every request thread.  Paging limits are read from the
settings the application was created with, not from the environment.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Query, Request
from fastapi.exceptions import RequestValidationError

from ..core.config import Settings
from ..core.metrics import MetricsRegistry
from ..services.product_service import ProductService
from ..services.user_service import UserService


@dataclass
class PageRequest:
    page: int
    size: int


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def get_metrics(request: Request) -> MetricsRegistry:
    return request.app.state.metrics


def get_page_request(
    request: Request,
    page: int = Query(0, ge=0, description="Zero based page index"),
    size: Optional[int] = Query(None, ge=1, description="Page size"),
) -> PageRequest:
    """Resolve ``page`` and ``size``, applying the configured page size limits.

    A missing ``size`` falls back to ``default_page_size``; a size above
    ``max_page_size`` is reported like any other invalid query parameter.
    """
    cfg = get_settings(request)
    if size is None:
        size = cfg.default_page_size
    elif size > cfg.max_page_size:
        raise RequestValidationError(
            [
                {
                    "type": "less_than_equal",
                    "loc": ("query", "size"),
                    "msg": f"Input should be less than or equal to {cfg.max_page_size}",
                    "input": size,
                }
            ]
        )
    return PageRequest(page=page, size=size)
