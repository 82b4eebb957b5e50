"""
User Directory Port - Abstract interface for resolving users.

The core only needs display names (for list projections) and the
administrator flag (for the authorization predicate).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UserInfo:
    """A user as known to the directory."""

    id: str
    username: str
    is_admin: bool = False


class UserDirectoryPort(ABC):
    """
    Abstract interface for user lookups.

    Implementations raise NotFoundError for unknown users and
    DirectoryError when the backing service fails.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def get_user(self, user_id: str) -> UserInfo:
        """Get a user by id."""
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> UserInfo:
        """Get a user by username (without a leading '@')."""
        ...
