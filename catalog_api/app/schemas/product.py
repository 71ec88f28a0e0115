"""
Pydantic models for product data.

``ProductCreate`` is used both for creating a product and for the full
replacement performed by an update: every mutable field is taken from
the payload, and an omitted ``quantity`` means zero.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ProductBase(BaseModel):
    name: str = Field(..., examples=["Widget"])
    description: Optional[str] = Field(None, examples=["A small widget"])
    price: Decimal = Field(..., examples=["9.99"])
    quantity: int = Field(0, examples=[10])
    category: Optional[str] = Field(None, examples=["Tools"])


class ProductCreate(ProductBase):
    """Schema for creating or replacing a product."""

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v

    @field_validator("price")
    @classmethod
    def price_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero")
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_default(cls, v):
        # An explicit null is treated like an omitted quantity.
        return 0 if v is None else v

    @field_validator("quantity")
    @classmethod
    def quantity_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Quantity cannot be negative")
        return v


class ProductRead(ProductBase):
    """Schema for reading a product from the API.

    ``price`` is serialised as a decimal string (``"9.99"``) so the value
    stored in the database reaches the client without rounding.
    """

    id: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
