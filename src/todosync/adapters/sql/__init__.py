"""
SQL Adapter - SQLAlchemy implementation of ListStorePort.
"""

from .models import Base
from .store import SQLListStore, create_store_engine

__all__ = ["Base", "SQLListStore", "create_store_engine"]
