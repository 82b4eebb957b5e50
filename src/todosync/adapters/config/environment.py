"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (TODOSYNC_STORE, TODOSYNC_DATABASE_URL, ...)
- .env files
- Command line argument overrides
"""

import os
from pathlib import Path
from typing import Any, Optional

from ...core.ports.config_provider import (
    STORE_BACKENDS,
    AppConfig,
    ConfigProviderPort,
    DirectoryConfig,
    StoreConfig,
)


def _split_names(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip().lstrip("@") for v in value if str(v).strip()]
    return [part.strip().lstrip("@") for part in str(value).split(",") if part.strip()]


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.
    """

    ENV_PREFIX = "TODOSYNC_"

    ENV_MAPPING = {
        "TODOSYNC_STORE": "store_backend",
        "TODOSYNC_DATABASE_URL": "database_url",
        "TODOSYNC_SQL_ECHO": "sql_echo",
        "TODOSYNC_DIRECTORY_URL": "directory_url",
        "TODOSYNC_DIRECTORY_TOKEN": "directory_token",
        "TODOSYNC_USERS": "users",
        "TODOSYNC_ADMINS": "admins",
        "TODOSYNC_VERBOSE": "verbose",
    }

    def __init__(
        self,
        env_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (auto-detected if not specified)
            cli_overrides: Command line argument overrides
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._cli_overrides = cli_overrides or {}

        # Load configuration
        self._load_env_file()
        self._load_environment()
        self._apply_cli_overrides()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        store = StoreConfig(
            backend=str(self.get("store_backend", "sql")).lower(),
            database_url=self.get("database_url", "sqlite:///todosync.db"),
            echo=self._as_bool(self.get("sql_echo", False)),
        )

        directory = DirectoryConfig(
            url=self.get("directory_url", "") or "",
            token=self.get("directory_token", "") or "",
            users=_split_names(self.get("users")),
            admins=_split_names(self.get("admins")),
        )

        return AppConfig(
            store=store,
            directory=directory,
            verbose=self._as_bool(self.get("verbose", False)),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        # Normalize key
        key = key.lower().replace("-", "_")

        # Check CLI overrides first
        if key in self._cli_overrides and self._cli_overrides[key] is not None:
            return self._cli_overrides[key]

        # Check loaded values
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = []

        backend = str(self.get("store_backend", "sql")).lower()
        if backend not in STORE_BACKENDS:
            errors.append(
                f"Unknown TODOSYNC_STORE '{backend}' - use one of: {', '.join(STORE_BACKENDS)}"
            )
        if backend == "sql" and not self.get("database_url", "sqlite:///todosync.db"):
            errors.append("Missing TODOSYNC_DATABASE_URL - set in environment or .env file")
        if self.get("directory_url") and not self.get("directory_token"):
            errors.append("Missing TODOSYNC_DIRECTORY_TOKEN - required with TODOSYNC_DIRECTORY_URL")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text().splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            # Parse key=value
            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip().upper()
            value = value.strip().strip('"').strip("'")

            config_key = self.ENV_MAPPING.get(key)
            if config_key:
                self._values[config_key] = value

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file is not None:
            return self._env_file if self._env_file.exists() else None

        # Check current directory
        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in self.ENV_MAPPING.items():
            raw_value = os.environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = raw_value

    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        # Map CLI args to config keys
        cli_mapping = {
            "store": "store_backend",
            "database_url": "database_url",
            "verbose": "verbose",
        }

        for cli_key, config_key in cli_mapping.items():
            if cli_key in self._cli_overrides and self._cli_overrides[cli_key] is not None:
                self._values[config_key] = self._cli_overrides[cli_key]

    @staticmethod
    def _as_bool(value: Any) -> bool:
        """Convert boolean-ish values."""
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("true", "1", "yes")
