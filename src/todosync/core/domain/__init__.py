"""
Domain - Entities, enums and events of the todo hand-off model.
"""

from .entities import (
    AuditLog,
    Comment,
    ExtendedComment,
    ExtendedIssue,
    Issue,
    IssueRef,
    ListsIssue,
    Preferences,
    new_id,
    utcnow,
)
from .enums import LIST_SEARCH_ORDER, AuditAction, IssueStatus, ListKind
from .events import (
    DomainEvent,
    EventBus,
    IssueAccepted,
    IssueAdded,
    IssueBumped,
    IssueCompleted,
    IssueEdited,
    IssueReassigned,
    IssueRemoved,
    IssueSent,
)

__all__ = [
    "AuditLog",
    "Comment",
    "ExtendedComment",
    "ExtendedIssue",
    "Issue",
    "IssueRef",
    "ListsIssue",
    "Preferences",
    "new_id",
    "utcnow",
    "LIST_SEARCH_ORDER",
    "AuditAction",
    "IssueStatus",
    "ListKind",
    "DomainEvent",
    "EventBus",
    "IssueAccepted",
    "IssueAdded",
    "IssueBumped",
    "IssueCompleted",
    "IssueEdited",
    "IssueReassigned",
    "IssueRemoved",
    "IssueSent",
]
