"""
Memory List Store - Implements ListStorePort in process memory.

Composes an IssueRegistry, a ReferenceDirectory and a Ledger that share
one re-entrant lock.
"""

import threading
from datetime import datetime
from typing import Optional

from ...core.domain.entities import AuditLog, Comment, Issue, IssueRef, Preferences
from ...core.domain.enums import ListKind
from ...core.ports.list_store import ListStorePort
from .directory import ReferenceDirectory
from .ledger import Ledger
from .registry import IssueRegistry


class MemoryListStore(ListStorePort):
    """In-memory implementation of the ListStorePort."""

    def __init__(self):
        self._lock = threading.RLock()
        self.issues = IssueRegistry(self._lock)
        self.references = ReferenceDirectory(self._lock)
        self.ledger = Ledger(self._lock)
        self._preferences: dict[str, Preferences] = {}

    @property
    def name(self) -> str:
        return "Memory"

    # -------------------------------------------------------------------------
    # ListStorePort Implementation - Issues
    # -------------------------------------------------------------------------

    def save_issue(self, issue: Issue) -> None:
        self.issues.save(issue)

    def get_issue(self, issue_id: str) -> Issue:
        return self.issues.get(issue_id)

    def remove_issue(self, issue_id: str) -> None:
        self.issues.remove(issue_id)

    def get_and_remove_issue(self, issue_id: str) -> Issue:
        return self.issues.get_and_remove(issue_id)

    # -------------------------------------------------------------------------
    # ListStorePort Implementation - References
    # -------------------------------------------------------------------------

    def add_reference(
        self,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
        foreign_user_id: str = "",
        foreign_issue_id: str = "",
    ) -> None:
        self.references.add(user_id, issue_id, list_kind, foreign_user_id, foreign_issue_id)

    def remove_reference(self, user_id: str, issue_id: str, list_kind: ListKind) -> None:
        self.references.remove(user_id, issue_id, list_kind)

    def pop_reference(self, user_id: str, list_kind: ListKind) -> IssueRef:
        return self.references.pop(user_id, list_kind)

    def bump_reference(self, user_id: str, issue_id: str, list_kind: ListKind) -> None:
        self.references.bump(user_id, issue_id, list_kind)

    def get_issue_reference(
        self,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
    ) -> tuple[IssueRef, int]:
        return self.references.get(user_id, issue_id, list_kind)

    def get_issue_list_and_reference(
        self,
        user_id: str,
        issue_id: str,
    ) -> tuple[ListKind, IssueRef, int]:
        return self.references.find(user_id, issue_id)

    def get_list(self, user_id: str, list_kind: ListKind) -> list[IssueRef]:
        return self.references.entries(user_id, list_kind)

    # -------------------------------------------------------------------------
    # ListStorePort Implementation - Ledger
    # -------------------------------------------------------------------------

    def save_comment(self, comment: Comment) -> None:
        self.ledger.save_comment(comment)

    def get_comments(self, todo_id: str) -> list[Comment]:
        return self.ledger.comments_for(todo_id)

    def get_comment(self, comment_id: str) -> Comment:
        return self.ledger.get_comment(comment_id)

    def delete_comment(self, comment_id: str) -> None:
        self.ledger.delete_comment(comment_id)

    def add_audit_log(self, entry: AuditLog) -> None:
        self.ledger.append(entry)

    def get_audit_logs(self, todo_id: str) -> list[AuditLog]:
        return self.ledger.audit_for(todo_id)

    # -------------------------------------------------------------------------
    # ListStorePort Implementation - Preferences
    # -------------------------------------------------------------------------

    def _prefs(self, user_id: str) -> Preferences:
        with self._lock:
            return self._preferences.setdefault(user_id, Preferences(user_id))

    def set_reminder_preference(self, user_id: str, enabled: bool) -> None:
        self._prefs(user_id).reminder_enabled = enabled

    def get_reminder_preference(self, user_id: str) -> bool:
        return self._prefs(user_id).reminder_enabled

    def set_last_reminder_time(self, user_id: str, when: datetime) -> None:
        self._prefs(user_id).last_reminder_at = when

    def get_last_reminder_time(self, user_id: str) -> Optional[datetime]:
        return self._prefs(user_id).last_reminder_at

    def set_allow_incoming_task_preference(self, user_id: str, enabled: bool) -> None:
        self._prefs(user_id).allow_incoming = enabled

    def get_allow_incoming_task_preference(self, user_id: str) -> bool:
        return self._prefs(user_id).allow_incoming
