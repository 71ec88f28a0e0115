"""
Product endpoints for API v1.

CRUD over the product catalogue.  ``PUT`` replaces every mutable field
of the product with the request body, so an omitted ``quantity`` resets
the stock to zero.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog_api.app.core.exceptions import CLIENT_ERRORS
from catalog_api.app.schemas.page import Page
from catalog_api.app.schemas.product import ProductCreate, ProductRead
from catalog_api.app.services.product_service import ProductService
from catalog_api.app.api.deps import PageRequest, get_page_request, get_product_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Page[ProductRead])
def list_products(
    paging: PageRequest = Depends(get_page_request),
    name: Optional[str] = Query(None),
    service: ProductService = Depends(get_product_service),
) -> Page[ProductRead]:
    """Return a page of products, optionally filtered by name substring."""
    logger.info("list_products - page: %s, size: %s, name: %s", paging.page, paging.size, name)
    return service.list_products(paging.page, paging.size, name)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, service: ProductService = Depends(get_product_service)) -> ProductRead:
    logger.info("get_product - id: %s", product_id)
    try:
        return service.get_product(product_id)
    except CLIENT_ERRORS as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    product: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    logger.info("create_product - name: %s", product.name)
    return service.create_product(product)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    product: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    logger.info("update_product - id: %s, name: %s", product_id, product.name)
    try:
        return service.update_product(product_id, product)
    except CLIENT_ERRORS as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)) -> None:
    logger.info("delete_product - id: %s", product_id)
    try:
        service.delete_product(product_id)
    except CLIENT_ERRORS as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return None
