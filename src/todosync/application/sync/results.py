"""
Transition Results - What a list transition hands back to its caller.

The orchestrator never notifies anyone itself; the result carries enough
for the caller to phrase a notification and refresh the right views.
"""

from dataclasses import dataclass, field
from typing import Optional

from ...core.domain.entities import Issue
from ...core.domain.enums import ListKind


@dataclass
class TransitionResult:
    """Result of one orchestrator operation."""

    issue: Optional[Issue] = None
    foreign_user_id: str = ""
    foreign_issue_id: str = ""
    list_kind: Optional[ListKind] = None

    # Remove: True when the remover held the item in their outgoing list
    is_sender: bool = False

    # Edit: message before the change; Accept: message to show
    old_message: str = ""
    message: str = ""

    # Bump/Send: the other side's issue
    foreign_issue: Optional[Issue] = None

    warnings: list[str] = field(default_factory=list)

    # user_id -> lists whose display changed
    refresh: dict[str, set[ListKind]] = field(default_factory=dict)

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def touch(self, user_id: str, *lists: ListKind) -> None:
        """Mark lists of user_id as changed."""
        if not user_id:
            return
        self.refresh.setdefault(user_id, set()).update(lists)

    @property
    def has_foreign_user(self) -> bool:
        return bool(self.foreign_user_id)
