"""
Exit Codes - Process exit status for each kind of failure.
"""

from enum import IntEnum

from ..core.exceptions import (
    ConfigError,
    ConflictError,
    EmptyListError,
    NotFoundError,
    TodoSyncError,
    UnauthorizedError,
)


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    NOT_FOUND = 3
    UNAUTHORIZED = 4
    EMPTY_LIST = 5
    CONFLICT = 6

    @classmethod
    def from_error(cls, error: TodoSyncError) -> "ExitCode":
        """Pick the exit code for an error (subclasses map like their parents)."""
        for error_type, code in (
            (NotFoundError, cls.NOT_FOUND),
            (UnauthorizedError, cls.UNAUTHORIZED),
            (EmptyListError, cls.EMPTY_LIST),
            (ConflictError, cls.CONFLICT),
            (ConfigError, cls.CONFIG_ERROR),
        ):
            if isinstance(error, error_type):
                return code
        return cls.ERROR
