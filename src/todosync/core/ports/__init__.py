"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .config_provider import (
    STORE_BACKENDS,
    AppConfig,
    ConfigProviderPort,
    DirectoryConfig,
    StoreConfig,
)
from .list_store import ListStorePort
from .user_directory import UserDirectoryPort, UserInfo

__all__ = [
    "STORE_BACKENDS",
    "AppConfig",
    "ConfigProviderPort",
    "DirectoryConfig",
    "StoreConfig",
    "ListStorePort",
    "UserDirectoryPort",
    "UserInfo",
]
