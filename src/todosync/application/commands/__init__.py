"""
Commands - Individual operations that can be executed.

Commands represent write operations and can be:
- Executed
- Undone (compensation after a later step fails)
- Batched so a failure rolls back everything before it
"""

from .base import Command, CommandBatch, CommandResult
from .store_commands import (
    AddReferenceCommand,
    RemoveIssueCommand,
    RemoveReferenceCommand,
    SaveIssueCommand,
)

__all__ = [
    "Command",
    "CommandBatch",
    "CommandResult",
    "AddReferenceCommand",
    "RemoveIssueCommand",
    "RemoveReferenceCommand",
    "SaveIssueCommand",
]
