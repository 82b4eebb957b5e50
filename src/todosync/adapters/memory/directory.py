"""
Reference Directory - Per-user, per-list ordered membership.

Index 0 is the front of a list: the most recently added or bumped entry.
"""

import logging
import threading

from ...core.domain.entities import IssueRef
from ...core.domain.enums import LIST_SEARCH_ORDER, ListKind
from ...core.exceptions import (
    DuplicateReferenceError,
    EmptyListError,
    ReferenceNotFoundError,
)


class ReferenceDirectory:
    """
    Ordered lists of IssueRef keyed by (user, list).

    Every public method holds the lock for its whole body, so a single
    call is atomic with respect to the list it touches.
    """

    def __init__(self, lock: threading.RLock = None):
        self._lists: dict[tuple[str, ListKind], list[IssueRef]] = {}
        self._lock = lock or threading.RLock()
        self.logger = logging.getLogger("ReferenceDirectory")

    def add(
        self,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
        foreign_user_id: str = "",
        foreign_issue_id: str = "",
    ) -> None:
        with self._lock:
            entries = self._lists.setdefault((user_id, list_kind), [])
            if self._index_of(entries, issue_id) >= 0:
                raise DuplicateReferenceError(
                    f"Issue {issue_id} already in {list_kind.name} list of {user_id}",
                    issue_id=issue_id,
                )
            entries.insert(0, IssueRef(issue_id, foreign_user_id, foreign_issue_id))
        self.logger.debug(f"Added {issue_id} to {list_kind.name} of {user_id}")

    def remove(self, user_id: str, issue_id: str, list_kind: ListKind) -> None:
        with self._lock:
            entries = self._lists.get((user_id, list_kind), [])
            index = self._index_of(entries, issue_id)
            if index < 0:
                raise self._not_found(user_id, issue_id, list_kind)
            del entries[index]
        self.logger.debug(f"Removed {issue_id} from {list_kind.name} of {user_id}")

    def pop(self, user_id: str, list_kind: ListKind) -> IssueRef:
        with self._lock:
            entries = self._lists.get((user_id, list_kind), [])
            if not entries:
                raise EmptyListError(f"{list_kind.name} list of {user_id} is empty")
            return entries.pop(0)

    def bump(self, user_id: str, issue_id: str, list_kind: ListKind) -> None:
        with self._lock:
            entries = self._lists.get((user_id, list_kind), [])
            index = self._index_of(entries, issue_id)
            if index < 0:
                raise self._not_found(user_id, issue_id, list_kind)
            entries.insert(0, entries.pop(index))

    def get(self, user_id: str, issue_id: str, list_kind: ListKind) -> tuple[IssueRef, int]:
        with self._lock:
            entries = self._lists.get((user_id, list_kind), [])
            index = self._index_of(entries, issue_id)
            if index < 0:
                raise self._not_found(user_id, issue_id, list_kind)
            return entries[index], index

    def find(self, user_id: str, issue_id: str) -> tuple[ListKind, IssueRef, int]:
        with self._lock:
            for list_kind in LIST_SEARCH_ORDER:
                entries = self._lists.get((user_id, list_kind), [])
                index = self._index_of(entries, issue_id)
                if index >= 0:
                    return list_kind, entries[index], index
        raise ReferenceNotFoundError(
            f"Issue {issue_id} not in any list of {user_id}",
            issue_id=issue_id,
            user_id=user_id,
        )

    def entries(self, user_id: str, list_kind: ListKind) -> list[IssueRef]:
        with self._lock:
            return list(self._lists.get((user_id, list_kind), []))

    @staticmethod
    def _index_of(entries: list[IssueRef], issue_id: str) -> int:
        for index, ref in enumerate(entries):
            if ref.issue_id == issue_id:
                return index
        return -1

    @staticmethod
    def _not_found(user_id: str, issue_id: str, list_kind: ListKind) -> ReferenceNotFoundError:
        return ReferenceNotFoundError(
            f"Issue {issue_id} not in {list_kind.name} list of {user_id}",
            issue_id=issue_id,
            user_id=user_id,
        )
