# backend/modules/retail/services/record_store.py

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError
from ..models.retail_models import Product, InventoryEntry, Sale
from ..schemas.retail_schemas import (
    ProductCreate,
    ProductUpdate,
    InventoryEntryCreate,
    SaleCreate,
    to_naive_utc,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateRange:
    """Inclusive datetime range"""

    start: datetime
    end: datetime

    def __post_init__(self):
        object.__setattr__(self, "start", to_naive_utc(self.start))
        object.__setattr__(self, "end", to_naive_utc(self.end))
        if self.end < self.start:
            raise ValueError("Invalid date range. End date must be after start date.")

    def contains(self, moment: datetime) -> bool:
        return self.start <= to_naive_utc(moment) <= self.end


class RecordStore:
    """
    Durable storage for products, inventory receipts and sales.

    Inventory entries and sales are append-only; products may have their
    name and description edited.
    """

    def __init__(self, db: Session):
        self.db = db

    # Products
    def list_products(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.sku == sku).first()

    def create_product(self, product_data: ProductCreate) -> Product:
        if self.get_product_by_sku(product_data.sku):
            raise ConflictError(
                detail=f"SKU '{product_data.sku}' already exists",
                error_code="DUPLICATE_SKU",
            )

        product = Product(**product_data.model_dump())
        self.db.add(product)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same SKU
            self.db.rollback()
            raise ConflictError(
                detail=f"SKU '{product_data.sku}' already exists",
                error_code="DUPLICATE_SKU",
            )
        self.db.refresh(product)

        logger.info(f"Created product {product.id} ({product.sku})")
        return product

    def update_product(self, product_id: int, update_data: ProductUpdate) -> Product:
        product = self._require_product(product_id)

        changes = update_data.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)

        for field, value in changes.items():
            setattr(product, field, value)

        self.db.commit()
        self.db.refresh(product)
        return product

    # Inventory entries
    def list_inventory_entries(
        self, product_id: Optional[int] = None
    ) -> List[InventoryEntry]:
        """All receipts, oldest purchase first; optionally scoped to a product"""
        query = self.db.query(InventoryEntry)
        if product_id is not None:
            query = query.filter(InventoryEntry.product_id == product_id)
        return query.order_by(InventoryEntry.date_purchased, InventoryEntry.id).all()

    def create_inventory_entry(self, entry_data: InventoryEntryCreate) -> InventoryEntry:
        self._require_product(entry_data.product_id)

        entry = InventoryEntry(**entry_data.model_dump())
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)

        logger.info(
            f"Recorded GRN {entry.grn_number}: {entry.quantity_received} units "
            f"of product {entry.product_id}"
        )
        return entry

    # Sales
    def list_sales(
        self,
        date_range: Optional[DateRange] = None,
        product_id: Optional[int] = None,
    ) -> List[Sale]:
        """Sales in chronological order, optionally bounded by an inclusive range"""
        query = self.db.query(Sale)
        if date_range is not None:
            query = query.filter(
                Sale.date_sold >= date_range.start, Sale.date_sold <= date_range.end
            )
        if product_id is not None:
            query = query.filter(Sale.product_id == product_id)
        return query.order_by(Sale.date_sold, Sale.id).all()

    def create_sale(self, sale_data: SaleCreate) -> Sale:
        self._require_product(sale_data.product_id)

        sale = Sale(**sale_data.model_dump())
        self.db.add(sale)
        self.db.commit()
        self.db.refresh(sale)

        logger.info(
            f"Recorded sale {sale.id}: {sale.quantity_sold} units of product {sale.product_id}"
        )
        return sale

    def _require_product(self, product_id: int) -> Product:
        product = self.get_product(product_id)
        if not product:
            raise NotFoundError(detail=f"Product {product_id} not found")
        return product


def create_record_store(db: Session) -> RecordStore:
    """Create a record store bound to a session"""
    return RecordStore(db)
