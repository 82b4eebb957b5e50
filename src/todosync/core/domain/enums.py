"""
Domain Enums - Closed sets of values used across the domain.
"""

from enum import Enum


class ListKind(Enum):
    """The three per-user lists an issue reference can occupy."""

    OWN = "my"
    INCOMING = "in"
    OUTGOING = "out"

    @classmethod
    def from_string(cls, s: str) -> "ListKind":
        s = s.strip().lower()
        aliases = {
            "": cls.OWN,
            "my": cls.OWN,
            "own": cls.OWN,
            "in": cls.INCOMING,
            "_in": cls.INCOMING,
            "incoming": cls.INCOMING,
            "out": cls.OUTGOING,
            "_out": cls.OUTGOING,
            "outgoing": cls.OUTGOING,
        }
        if s not in aliases:
            raise ValueError(f"Unknown list: {s!r}")
        return aliases[s]


# Search order used when locating an issue across all lists
LIST_SEARCH_ORDER = (ListKind.OWN, ListKind.INCOMING, ListKind.OUTGOING)


class IssueStatus(Enum):
    OPEN = "open"
    PENDING = "pending"
    COMPLETED = "completed"
    REMOVED = "removed"

    def is_terminal(self) -> bool:
        return self in (IssueStatus.COMPLETED, IssueStatus.REMOVED)


class AuditAction(Enum):
    """Action tags recorded in the audit trail."""

    CREATE = "create"
    SEND = "send"
    RECEIVE = "receive"
    ACCEPT = "accept"
    EDIT = "edit"
    REASSIGN = "reassign"
    COMPLETE = "complete"
    REMOVE = "remove"
    BUMP_BY = "bump_by"
    ADD_COMMENT = "add_comment"
    DELETE_COMMENT = "delete_comment"
