"""
Application Layer - Use cases and orchestration.

This layer contains:
- commands: Undoable storage steps and the batch that compensates them
- sync: The list synchronization engine and audit trail
- comments / preferences: Services around issues
"""

from .commands import Command, CommandBatch, CommandResult
from .comments import CommentService
from .formatting import format_issue_list
from .preferences import PreferenceService
from .sync import AuditTrailRecorder, ListSyncOrchestrator, TransitionResult

__all__ = [
    "Command",
    "CommandBatch",
    "CommandResult",
    "CommentService",
    "format_issue_list",
    "PreferenceService",
    "AuditTrailRecorder",
    "ListSyncOrchestrator",
    "TransitionResult",
]
