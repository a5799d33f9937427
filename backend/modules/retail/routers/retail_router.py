# backend/modules/retail/routers/retail_router.py

from fastapi import APIRouter, Depends, HTTPException, Query, Path
from sqlalchemy.orm import Session
from typing import Optional, List
from datetime import datetime
import logging

from core.database import get_db
from core.exceptions import NotFoundError
from modules.retail.services.record_store import DateRange, RecordStore
from modules.retail.schemas.retail_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    InventoryEntryCreate,
    InventoryEntryResponse,
    SaleCreate,
    SaleResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Retail"])


# Products
@router.get("/products", response_model=List[ProductResponse])
async def list_products(db: Session = Depends(get_db)):
    """List the product catalogue"""
    try:
        return RecordStore(db).list_products()
    except Exception as e:
        logger.error(f"Error listing products: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve products")


@router.post("/products", response_model=ProductResponse, status_code=201)
async def create_product(product_data: ProductCreate, db: Session = Depends(get_db)):
    """Create a product; SKUs must be unique"""
    try:
        return RecordStore(db).create_product(product_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating product: {e}")
        raise HTTPException(status_code=500, detail="Failed to create product")


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int = Path(..., description="Product ID"),
    db: Session = Depends(get_db),
):
    product = RecordStore(db).get_product(product_id)
    if not product:
        raise NotFoundError(detail=f"Product {product_id} not found")
    return product


@router.patch("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    update_data: ProductUpdate,
    product_id: int = Path(..., description="Product ID"),
    db: Session = Depends(get_db),
):
    """Edit a product's name or description"""
    try:
        return RecordStore(db).update_product(product_id, update_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating product {product_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update product")


# Inventory entries
@router.get("/inventory", response_model=List[InventoryEntryResponse])
async def list_inventory_entries(
    product_id: Optional[int] = Query(None, description="Restrict to one product"),
    db: Session = Depends(get_db),
):
    """List stock receipts, oldest purchase first"""
    try:
        return RecordStore(db).list_inventory_entries(product_id=product_id)
    except Exception as e:
        logger.error(f"Error listing inventory entries: {e}")
        raise HTTPException(
            status_code=500, detail="Failed to retrieve inventory entries"
        )


@router.post("/inventory", response_model=InventoryEntryResponse, status_code=201)
async def create_inventory_entry(
    entry_data: InventoryEntryCreate, db: Session = Depends(get_db)
):
    """Record a stock receipt against its GRN"""
    try:
        return RecordStore(db).create_inventory_entry(entry_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error recording inventory entry: {e}")
        raise HTTPException(status_code=500, detail="Failed to record inventory entry")


# Sales
@router.get("/sales", response_model=List[SaleResponse])
async def list_sales(
    start: Optional[datetime] = Query(None, description="Earliest sale date (inclusive)"),
    end: Optional[datetime] = Query(None, description="Latest sale date (inclusive)"),
    db: Session = Depends(get_db),
):
    """List sales in chronological order"""
    try:
        date_range = None
        if start or end:
            date_range = DateRange(
                start=start or datetime.min, end=end or datetime.max
            )
        return RecordStore(db).list_sales(date_range=date_range)
    except ValueError:
        raise
    except Exception as e:
        logger.error(f"Error listing sales: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve sales")


@router.post("/sales", response_model=SaleResponse, status_code=201)
async def create_sale(sale_data: SaleCreate, db: Session = Depends(get_db)):
    """Record a sale"""
    try:
        return RecordStore(db).create_sale(sale_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error recording sale: {e}")
        raise HTTPException(status_code=500, detail="Failed to record sale")
