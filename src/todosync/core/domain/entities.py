"""
Domain Entities - Records with identity that the core reads and writes.

Issue: a todo item, one per side of a hand-off
IssueRef: membership of an issue in one of a user's lists
Comment / AuditLog: ledger entries attached to an issue
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from .enums import AuditAction, IssueStatus, ListKind


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid4().hex


@dataclass
class Issue:
    """A todo item as stored on one user's side."""

    id: str
    message: str
    creator_id: str
    assignee_id: str
    status: IssueStatus = IssueStatus.OPEN
    description: str = ""
    post_permalink: str = ""
    post_id: str = ""
    priority: int = 0
    due_at: Optional[datetime] = None
    foreign_issue_id: str = ""
    foreign_user_id: str = ""
    create_at: datetime = field(default_factory=utcnow)
    update_at: Optional[datetime] = None

    def __post_init__(self):
        if self.update_at is None or self.update_at < self.create_at:
            self.update_at = self.create_at

    @classmethod
    def new(
        cls,
        message: str,
        creator_id: str,
        assignee_id: str,
        status: IssueStatus,
        description: str = "",
        post_permalink: str = "",
        post_id: str = "",
        priority: int = 0,
        due_at: Optional[datetime] = None,
    ) -> "Issue":
        """Create a fresh issue with a new identifier."""
        return cls(
            id=new_id(),
            message=message,
            creator_id=creator_id,
            assignee_id=assignee_id,
            status=status,
            description=description,
            post_permalink=post_permalink,
            post_id=post_id,
            priority=priority,
            due_at=due_at,
        )

    @property
    def has_foreign_link(self) -> bool:
        return bool(self.foreign_issue_id)

    def link_to(self, other: "Issue", other_user_id: str) -> None:
        """Point this issue at its mirror on other_user_id's side."""
        self.foreign_issue_id = other.id
        self.foreign_user_id = other_user_id

    def unlink(self) -> None:
        self.foreign_issue_id = ""
        self.foreign_user_id = ""

    def touch(self, when: Optional[datetime] = None) -> None:
        """Advance update_at; never moves it backwards."""
        when = when or utcnow()
        if when > self.update_at:
            self.update_at = when

    def set_status(self, status: IssueStatus) -> None:
        self.status = status
        self.touch()

    def copy(self) -> "Issue":
        return replace(self)

    def message_with_permalink(self) -> str:
        if self.post_permalink:
            return f"{self.message}\n[Permalink]({self.post_permalink})"
        return self.message


@dataclass(frozen=True)
class IssueRef:
    """An entry in a user's list, optionally pointing at a mirror."""

    issue_id: str
    foreign_user_id: str = ""
    foreign_issue_id: str = ""

    @property
    def has_foreign_link(self) -> bool:
        return bool(self.foreign_user_id)


@dataclass
class ExtendedIssue:
    """Issue enriched for display with where its mirror currently sits."""

    issue: Issue
    foreign_user: str = ""
    foreign_list: Optional[ListKind] = None
    foreign_position: int = -1

    def to_dict(self) -> dict:
        issue = self.issue
        return {
            "id": issue.id,
            "message": issue.message,
            "description": issue.description,
            "postPermalink": issue.post_permalink,
            "status": issue.status.value,
            "priority": issue.priority,
            "due_at": issue.due_at.isoformat() if issue.due_at else None,
            "create_at": issue.create_at.isoformat(),
            "update_at": issue.update_at.isoformat(),
            "user": self.foreign_user,
            "list": self.foreign_list.value if self.foreign_list else "",
            "position": self.foreign_position,
        }


@dataclass
class ListsIssue:
    """All three lists of a user, ready for display."""

    incoming: list[ExtendedIssue] = field(default_factory=list)
    own: list[ExtendedIssue] = field(default_factory=list)
    outgoing: list[ExtendedIssue] = field(default_factory=list)

    def get(self, list_kind: ListKind) -> list[ExtendedIssue]:
        return {
            ListKind.OWN: self.own,
            ListKind.INCOMING: self.incoming,
            ListKind.OUTGOING: self.outgoing,
        }[list_kind]

    def to_dict(self) -> dict:
        return {
            "in": [i.to_dict() for i in self.incoming],
            "my": [i.to_dict() for i in self.own],
            "out": [i.to_dict() for i in self.outgoing],
        }


@dataclass
class Comment:
    todo_id: str
    user_id: str
    message: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class ExtendedComment:
    comment: Comment
    username: str


@dataclass(frozen=True)
class AuditLog:
    """Immutable history entry for an issue."""

    todo_id: str
    user_id: str
    action: AuditAction
    metadata: str = ""
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class Preferences:
    """Per-user settings; defaults apply when nothing was stored."""

    user_id: str
    reminder_enabled: bool = True
    last_reminder_at: Optional[datetime] = None
    allow_incoming: bool = True
