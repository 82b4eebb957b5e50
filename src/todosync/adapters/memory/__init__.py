"""
Memory Adapter - Process-local implementation of ListStorePort.
"""

from .directory import ReferenceDirectory
from .ledger import Ledger
from .registry import IssueRegistry
from .store import MemoryListStore

__all__ = ["IssueRegistry", "Ledger", "MemoryListStore", "ReferenceDirectory"]
