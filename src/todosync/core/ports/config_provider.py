"""
Config Provider Port - Abstract interface for loading configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


STORE_BACKENDS = ("memory", "sql")


@dataclass
class StoreConfig:
    """Which storage backend to use and how to reach it."""

    backend: str = "sql"
    database_url: str = "sqlite:///todosync.db"
    echo: bool = False


@dataclass
class DirectoryConfig:
    """
    User directory settings.

    With no url, a static directory is built from users/admins.
    """

    url: str = ""
    token: str = ""
    users: list[str] = field(default_factory=list)
    admins: list[str] = field(default_factory=list)

    @property
    def is_remote(self) -> bool:
        return bool(self.url)


@dataclass
class AppConfig:
    """Complete application configuration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    directory: DirectoryConfig = field(default_factory=DirectoryConfig)
    verbose: bool = False


class ConfigProviderPort(ABC):
    """Abstract interface for configuration sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a single configuration value."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """Return a list of problems; empty when the configuration is usable."""
        ...
