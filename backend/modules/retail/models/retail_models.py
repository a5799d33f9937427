# backend/modules/retail/models/retail_models.py

from sqlalchemy import (
    Column, Integer, String, Text, ForeignKey, DateTime, Numeric,
    CheckConstraint, Index
)

from core.database import Base
from core.mixins import CreatedAtMixin, TimestampMixin


class Product(Base, TimestampMixin):
    """
    Catalogue item. The only record type that may be edited after
    creation (name and description).
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(64), nullable=False, unique=True, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)


class InventoryEntry(Base, CreatedAtMixin):
    """Stock receipt event, identified by its goods received note (GRN)."""
    __tablename__ = "inventory_entries"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    purchase_price = Column(Numeric(10, 2), nullable=False)
    quantity_received = Column(Integer, nullable=False)
    date_purchased = Column(DateTime, nullable=False, index=True)
    grn_number = Column(String(100), nullable=False)

    __table_args__ = (
        CheckConstraint("quantity_received > 0", name="ck_inventory_quantity_positive"),
        CheckConstraint("purchase_price >= 0", name="ck_inventory_price_non_negative"),
        Index("idx_inventory_product_date", "product_id", "date_purchased"),
    )


class Sale(Base, CreatedAtMixin):
    """Stock depletion event."""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    sales_price = Column(Numeric(10, 2), nullable=False)
    quantity_sold = Column(Integer, nullable=False)
    date_sold = Column(DateTime, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("quantity_sold > 0", name="ck_sale_quantity_positive"),
        CheckConstraint("sales_price >= 0", name="ck_sale_price_non_negative"),
        Index("idx_sale_product_date", "product_id", "date_sold"),
    )
