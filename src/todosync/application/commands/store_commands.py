"""
Store Commands - Single storage operations paired with their undo.

These are the forward/compensating steps the orchestrator chains into a
CommandBatch for every multi-record transition.
"""

from typing import Optional

from ...core.domain.entities import Issue, IssueRef
from ...core.domain.enums import ListKind
from ...core.ports.list_store import ListStorePort
from .base import Command


class SaveIssueCommand(Command):
    """
    Save an issue.

    Undo restores `previous` when given, otherwise deletes the issue.
    """

    def __init__(
        self,
        store: ListStorePort,
        issue: Issue,
        previous: Optional[Issue] = None,
    ):
        super().__init__()
        self.store = store
        self.issue = issue
        self.previous = previous

    @property
    def name(self) -> str:
        return f"save issue {self.issue.id}"

    def validate(self) -> Optional[str]:
        if not self.issue.id:
            return "Issue id is required"
        if self.previous is not None and self.previous.id != self.issue.id:
            return "Previous state belongs to a different issue"
        return None

    def _execute(self) -> Issue:
        self.store.save_issue(self.issue)
        return self.issue

    def _undo(self) -> None:
        if self.previous is not None:
            self.store.save_issue(self.previous)
        else:
            self.store.remove_issue(self.issue.id)


class AddReferenceCommand(Command):
    """Add an issue to the front of a user's list; undo removes it."""

    def __init__(
        self,
        store: ListStorePort,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
        foreign_user_id: str = "",
        foreign_issue_id: str = "",
    ):
        super().__init__()
        self.store = store
        self.user_id = user_id
        self.issue_id = issue_id
        self.list_kind = list_kind
        self.foreign_user_id = foreign_user_id
        self.foreign_issue_id = foreign_issue_id

    @property
    def name(self) -> str:
        return f"add {self.issue_id} to {self.list_kind.name} of {self.user_id}"

    def validate(self) -> Optional[str]:
        if not self.user_id or not self.issue_id:
            return "User and issue are required"
        return None

    def _execute(self) -> None:
        self.store.add_reference(
            self.user_id,
            self.issue_id,
            self.list_kind,
            self.foreign_user_id,
            self.foreign_issue_id,
        )

    def _undo(self) -> None:
        self.store.remove_reference(self.user_id, self.issue_id, self.list_kind)


class RemoveReferenceCommand(Command):
    """
    Remove an issue from a user's list.

    Undo re-adds the same entry (at the front of the list).
    """

    def __init__(
        self,
        store: ListStorePort,
        user_id: str,
        list_kind: ListKind,
        ref: IssueRef,
    ):
        super().__init__()
        self.store = store
        self.user_id = user_id
        self.list_kind = list_kind
        self.ref = ref

    @property
    def name(self) -> str:
        return f"remove {self.ref.issue_id} from {self.list_kind.name} of {self.user_id}"

    def _execute(self) -> None:
        self.store.remove_reference(self.user_id, self.ref.issue_id, self.list_kind)

    def _undo(self) -> None:
        self.store.add_reference(
            self.user_id,
            self.ref.issue_id,
            self.list_kind,
            self.ref.foreign_user_id,
            self.ref.foreign_issue_id,
        )


class RemoveIssueCommand(Command):
    """Delete an issue; undo saves the removed copy back."""

    def __init__(self, store: ListStorePort, issue: Issue):
        super().__init__()
        self.store = store
        self.issue = issue

    @property
    def name(self) -> str:
        return f"remove issue {self.issue.id}"

    def _execute(self) -> Issue:
        return self.store.get_and_remove_issue(self.issue.id)

    def _undo(self) -> None:
        self.store.save_issue(self.issue)
