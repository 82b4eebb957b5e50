"""
List Store Port - Abstract interface for durable todo storage.

Each method touches exactly one record (an issue, one user's list, a
comment, an audit entry or a preference row) and is atomic with respect
to it. Nothing here is transactional across records; keeping sender and
receiver sides consistent is the orchestrator's job.

Implementations:
- MemoryListStore: process-local, for tests and single-process use
- SQLListStore: SQLAlchemy-backed
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..domain.entities import AuditLog, Comment, Issue, IssueRef
from ..domain.enums import ListKind


class ListStorePort(ABC):
    """
    Abstract interface for issue, reference, ledger and preference storage.

    Errors:
        IssueNotFoundError / ReferenceNotFoundError / CommentNotFoundError
        when the addressed record is absent, EmptyListError on pop of an
        empty list, DuplicateReferenceError on a second add to the same list,
        StoreError for anything the backend itself fails at.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the store name (e.g., 'Memory', 'SQL')."""
        ...

    # -------------------------------------------------------------------------
    # Issue Registry
    # -------------------------------------------------------------------------

    @abstractmethod
    def save_issue(self, issue: Issue) -> None:
        """Insert or replace the issue with issue.id."""
        ...

    @abstractmethod
    def get_issue(self, issue_id: str) -> Issue:
        """Get a copy of the stored issue."""
        ...

    @abstractmethod
    def remove_issue(self, issue_id: str) -> None:
        """Delete the issue."""
        ...

    @abstractmethod
    def get_and_remove_issue(self, issue_id: str) -> Issue:
        """Read then delete the issue as one step."""
        ...

    # -------------------------------------------------------------------------
    # Reference Directory
    # -------------------------------------------------------------------------

    @abstractmethod
    def add_reference(
        self,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
        foreign_user_id: str = "",
        foreign_issue_id: str = "",
    ) -> None:
        """Put issue_id at the front of user_id's list_kind list."""
        ...

    @abstractmethod
    def remove_reference(self, user_id: str, issue_id: str, list_kind: ListKind) -> None:
        """Drop issue_id from user_id's list_kind list."""
        ...

    @abstractmethod
    def pop_reference(self, user_id: str, list_kind: ListKind) -> IssueRef:
        """Remove and return the front entry of the list."""
        ...

    @abstractmethod
    def bump_reference(self, user_id: str, issue_id: str, list_kind: ListKind) -> None:
        """Move issue_id to the front, keeping everything else in order."""
        ...

    @abstractmethod
    def get_issue_reference(
        self,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
    ) -> tuple[IssueRef, int]:
        """Get the entry and its zero-based position in one list."""
        ...

    @abstractmethod
    def get_issue_list_and_reference(
        self,
        user_id: str,
        issue_id: str,
    ) -> tuple[ListKind, IssueRef, int]:
        """Find which of the user's lists holds issue_id."""
        ...

    @abstractmethod
    def get_list(self, user_id: str, list_kind: ListKind) -> list[IssueRef]:
        """Get the entries of a list, front first."""
        ...

    # -------------------------------------------------------------------------
    # Comments and Audit Log
    # -------------------------------------------------------------------------

    @abstractmethod
    def save_comment(self, comment: Comment) -> None:
        ...

    @abstractmethod
    def get_comments(self, todo_id: str) -> list[Comment]:
        """Get comments of an issue, oldest first."""
        ...

    @abstractmethod
    def get_comment(self, comment_id: str) -> Comment:
        ...

    @abstractmethod
    def delete_comment(self, comment_id: str) -> None:
        ...

    @abstractmethod
    def add_audit_log(self, entry: AuditLog) -> None:
        """Append an entry; entries are never changed afterwards."""
        ...

    @abstractmethod
    def get_audit_logs(self, todo_id: str) -> list[AuditLog]:
        """Get audit entries of an issue, newest first."""
        ...

    # -------------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------------

    @abstractmethod
    def set_reminder_preference(self, user_id: str, enabled: bool) -> None:
        ...

    @abstractmethod
    def get_reminder_preference(self, user_id: str) -> bool:
        """Defaults to True when nothing is stored."""
        ...

    @abstractmethod
    def set_last_reminder_time(self, user_id: str, when: datetime) -> None:
        ...

    @abstractmethod
    def get_last_reminder_time(self, user_id: str) -> Optional[datetime]:
        ...

    @abstractmethod
    def set_allow_incoming_task_preference(self, user_id: str, enabled: bool) -> None:
        ...

    @abstractmethod
    def get_allow_incoming_task_preference(self, user_id: str) -> bool:
        """Defaults to True when nothing is stored."""
        ...
