"""
Exceptions - Centralized exception hierarchy.

All errors raised by the core, its ports and adapters derive from
TodoSyncError so callers can map them to a single failure response.
"""

from typing import Optional


class TodoSyncError(Exception):
    """Base exception for all todosync errors."""

    def __init__(
        self,
        message: str,
        issue_id: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.issue_id = issue_id
        self.cause = cause


class NotFoundError(TodoSyncError):
    """A record (issue, reference, comment) does not exist."""


class IssueNotFoundError(NotFoundError):
    """Issue not found in the registry."""


class ReferenceNotFoundError(NotFoundError):
    """Issue is not a member of the requested list(s)."""

    def __init__(
        self,
        message: str,
        issue_id: Optional[str] = None,
        user_id: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, issue_id=issue_id, cause=cause)
        self.user_id = user_id


class CommentNotFoundError(NotFoundError):
    """Comment not found."""


class EmptyListError(TodoSyncError):
    """Pop was requested on a list with no entries."""


class UnauthorizedError(TodoSyncError):
    """The acting user is not allowed to perform the action."""


class ConflictError(TodoSyncError):
    """State changed underneath an operation; treated as a hard stop."""


class DuplicateReferenceError(ConflictError):
    """The issue already occupies the target list."""


class StoreError(TodoSyncError):
    """The storage backend failed (I/O, driver, connection)."""


class DirectoryError(TodoSyncError):
    """The user directory could not be reached or answered with an error."""


class ConfigError(TodoSyncError):
    """Configuration is missing or invalid."""
