"""
Directory Adapters - Implementations of UserDirectoryPort.
"""

from .adapter import MattermostUserDirectory, StaticUserDirectory
from .client import MattermostApiClient

__all__ = ["MattermostApiClient", "MattermostUserDirectory", "StaticUserDirectory"]
