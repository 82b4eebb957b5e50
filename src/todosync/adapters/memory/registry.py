"""
Issue Registry - In-memory issue records keyed by id.

Knows nothing about lists or pairing. Callers always get copies so a
mutated Issue never leaks into storage without an explicit save.
"""

import logging
import threading

from ...core.domain.entities import Issue
from ...core.exceptions import IssueNotFoundError


class IssueRegistry:
    """Thread-safe map of issue id to Issue."""

    def __init__(self, lock: threading.RLock = None):
        self._issues: dict[str, Issue] = {}
        self._lock = lock or threading.RLock()
        self.logger = logging.getLogger("IssueRegistry")

    def save(self, issue: Issue) -> None:
        with self._lock:
            self._issues[issue.id] = issue.copy()
        self.logger.debug(f"Saved issue {issue.id} ({issue.status.value})")

    def get(self, issue_id: str) -> Issue:
        with self._lock:
            issue = self._issues.get(issue_id)
            if issue is None:
                raise IssueNotFoundError(f"Issue not found: {issue_id}", issue_id=issue_id)
            return issue.copy()

    def remove(self, issue_id: str) -> None:
        with self._lock:
            if self._issues.pop(issue_id, None) is None:
                raise IssueNotFoundError(f"Issue not found: {issue_id}", issue_id=issue_id)
        self.logger.debug(f"Removed issue {issue_id}")

    def get_and_remove(self, issue_id: str) -> Issue:
        with self._lock:
            issue = self.get(issue_id)
            del self._issues[issue_id]
        self.logger.debug(f"Removed issue {issue_id}")
        return issue

    def __contains__(self, issue_id: str) -> bool:
        with self._lock:
            return issue_id in self._issues

    def __len__(self) -> int:
        with self._lock:
            return len(self._issues)
