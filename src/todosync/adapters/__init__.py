"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Stores: in-memory, SQL (SQLAlchemy)
- User directories: static, Mattermost REST API
- Config: Environment variables
"""

from .config import EnvironmentConfigProvider
from .directory import MattermostUserDirectory, StaticUserDirectory
from .memory import MemoryListStore
from .sql import SQLListStore

__all__ = [
    "EnvironmentConfigProvider",
    "MattermostUserDirectory",
    "StaticUserDirectory",
    "MemoryListStore",
    "SQLListStore",
]
