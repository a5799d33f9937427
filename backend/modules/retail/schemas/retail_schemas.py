# backend/modules/retail/schemas/retail_schemas.py

from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal

from core.response_models import CamelModel


def to_naive_utc(moment: datetime) -> datetime:
    """Stored timestamps are naive UTC; convert aware values to match"""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


# Product schemas
class ProductBase(CamelModel):
    sku: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None

    @field_validator("sku", "name")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    """Only descriptive fields are editable; SKU is the product's identity."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None


class ProductResponse(ProductBase):
    id: int
    created_at: datetime
    updated_at: datetime


# Inventory entry schemas
class InventoryEntryCreate(CamelModel):
    product_id: int
    purchase_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    quantity_received: int = Field(..., gt=0)
    date_purchased: datetime
    grn_number: str = Field(..., min_length=1, max_length=100)

    @field_validator("date_purchased")
    @classmethod
    def normalise_date_purchased(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class InventoryEntryResponse(CamelModel):
    id: int
    product_id: int
    purchase_price: float
    quantity_received: int
    date_purchased: datetime
    grn_number: str
    created_at: datetime


# Sale schemas
class SaleCreate(CamelModel):
    product_id: int
    sales_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    quantity_sold: int = Field(..., gt=0)
    date_sold: datetime

    @field_validator("date_sold")
    @classmethod
    def normalise_date_sold(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class SaleResponse(CamelModel):
    id: int
    product_id: int
    sales_price: float
    quantity_sold: int
    date_sold: datetime
    created_at: datetime
