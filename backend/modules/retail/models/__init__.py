# backend/modules/retail/models/__init__.py

from .retail_models import Product, InventoryEntry, Sale

__all__ = ["Product", "InventoryEntry", "Sale"]
