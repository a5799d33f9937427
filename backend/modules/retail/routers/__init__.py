# backend/modules/retail/routers/__init__.py

from .retail_router import router

__all__ = ["router"]
