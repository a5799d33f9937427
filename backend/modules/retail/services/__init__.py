# backend/modules/retail/services/__init__.py

from .record_store import DateRange, RecordStore, create_record_store

__all__ = ["DateRange", "RecordStore", "create_record_store"]
