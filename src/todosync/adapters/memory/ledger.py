"""
Ledger - In-memory comments and append-only audit entries.
"""

import threading

from ...core.domain.entities import AuditLog, Comment
from ...core.exceptions import CommentNotFoundError


class Ledger:
    """Comments keyed by id and audit entries in append order."""

    def __init__(self, lock: threading.RLock = None):
        self._comments: dict[str, Comment] = {}
        self._audit: list[AuditLog] = []
        self._lock = lock or threading.RLock()

    def save_comment(self, comment: Comment) -> None:
        with self._lock:
            self._comments[comment.id] = comment

    def comments_for(self, todo_id: str) -> list[Comment]:
        with self._lock:
            found = [c for c in self._comments.values() if c.todo_id == todo_id]
        return sorted(found, key=lambda c: c.created_at)

    def get_comment(self, comment_id: str) -> Comment:
        with self._lock:
            comment = self._comments.get(comment_id)
        if comment is None:
            raise CommentNotFoundError(f"Comment not found: {comment_id}")
        return comment

    def delete_comment(self, comment_id: str) -> None:
        with self._lock:
            if self._comments.pop(comment_id, None) is None:
                raise CommentNotFoundError(f"Comment not found: {comment_id}")

    def append(self, entry: AuditLog) -> None:
        with self._lock:
            self._audit.append(entry)

    def audit_size(self) -> int:
        """Number of audit entries across all issues."""
        with self._lock:
            return len(self._audit)

    def audit_for(self, todo_id: str) -> list[AuditLog]:
        with self._lock:
            found = [e for e in self._audit if e.todo_id == todo_id]
        found.reverse()
        return found
