"""
Business logic for products.

Products have no uniqueness constraint, so ``ProductService`` only
checks existence and identifier validity.  Updates replace every
mutable field with the values from the payload.
"""

import logging
from typing import NoReturn, Optional

from ..core import metrics as m
from ..core.exceptions import InvalidArgumentError, NotFoundError
from ..mappers import apply_product_update, product_from_create, product_to_read
from ..repositories import ProductRepository
from ..schemas.page import Page
from ..schemas.product import ProductCreate, ProductRead
from .base import BaseService

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


class ProductService(BaseService):
    """Service for the product catalogue."""

    def __init__(self, repository: ProductRepository, metrics: m.CounterSink, clock=None) -> None:
        super().__init__(metrics, clock)
        self.repository = repository

    def list_products(self, page: int, size: int, name: Optional[str] = None) -> Page[ProductRead]:
        logger.debug("Fetching products from database - name filter: %s", name)
        products, total = self.repository.query_page(page, size, name)
        logger.debug("Found %s products (name filter: %s)", total, name)
        return Page[ProductRead].of([product_to_read(p) for p in products], page, size, total)

    def get_product(self, product_id: int) -> ProductRead:
        logger.debug("Searching for product with id: %s", product_id)
        product = self.repository.find_by_id(product_id)
        if product is None:
            self._not_found(product_id)
        return product_to_read(product)

    def create_product(self, data: ProductCreate) -> ProductRead:
        logger.debug("Attempting to create product with name: %s", data.name)
        product = product_from_create(data)
        product.created_at = self.clock()
        saved = self.repository.insert(product)
        self._count(m.PRODUCTS_CREATED)
        logger.info("Product created successfully with id: %s and name: %s", saved.id, saved.name)
        return product_to_read(saved)

    def update_product(self, product_id: int, data: ProductCreate) -> ProductRead:
        logger.debug("Attempting to update product with id: %s", product_id)
        product = self.repository.find_by_id(product_id)
        if product is None:
            self._not_found(product_id)

        apply_product_update(data, product)
        product.updated_at = self._touch(product.updated_at)
        updated = self.repository.update(product)
        if updated is None:
            self._not_found(product_id)
        self._count(m.PRODUCTS_UPDATED)
        logger.info("Product updated successfully with id: %s and name: %s", updated.id, updated.name)
        return product_to_read(updated)

    def delete_product(self, product_id: int) -> None:
        logger.debug("Attempting to delete product with id: %s", product_id)
        if product_id is None or product_id <= 0:
            logger.warning("Invalid product id provided for deletion: %s", product_id)
            raise InvalidArgumentError("Invalid product ID")

        if not self.repository.exists_by_id(product_id):
            self._count(m.PRODUCTS_NOT_FOUND)
            logger.warning("Attempt to delete non-existent product with id: %s", product_id)
            raise NotFoundError(PRODUCT_NOT_FOUND)
        if not self.repository.delete_by_id(product_id):
            # Deleted by another request after the existence check.
            self._not_found(product_id)
        self._count(m.PRODUCTS_DELETED)
        logger.info("Product with id %s deleted successfully", product_id)

    def _not_found(self, product_id: int) -> NoReturn:
        self._count(m.PRODUCTS_NOT_FOUND)
        logger.warning("Product not found with id: %s", product_id)
        raise NotFoundError(PRODUCT_NOT_FOUND)
