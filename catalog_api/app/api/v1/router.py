"""
Top-level router for version 1 of the API.

This router aggregates the resource routers under a unified prefix.
When new resources are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import metrics, products, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(metrics.router, prefix="/metrics", tags=["metrics"])
