"""
Domain Events - Things that happened in the domain.

Events are immutable records of something that occurred.
The orchestrator publishes them after a transition succeeds so that
callers can refresh views or notify the other party.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

from .enums import ListKind


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class IssueAdded(DomainEvent):
    """Event: A user added a todo to their own list."""

    user_id: str = ""
    issue_id: str = ""


@dataclass(frozen=True)
class IssueSent(DomainEvent):
    """Event: A todo was handed off to another user."""

    sender_id: str = ""
    receiver_id: str = ""
    sender_issue_id: str = ""
    receiver_issue_id: str = ""


@dataclass(frozen=True)
class IssueAccepted(DomainEvent):
    """Event: A received todo was moved to the receiver's own list."""

    user_id: str = ""
    issue_id: str = ""
    sender_id: str = ""


@dataclass(frozen=True)
class IssueCompleted(DomainEvent):
    """Event: A todo was completed (directly or by popping)."""

    user_id: str = ""
    issue_id: str = ""
    foreign_user_id: str = ""
    list_kind: Optional[ListKind] = None
    popped: bool = False


@dataclass(frozen=True)
class IssueRemoved(DomainEvent):
    """Event: A todo was removed or declined."""

    user_id: str = ""
    issue_id: str = ""
    foreign_user_id: str = ""
    list_kind: Optional[ListKind] = None
    is_sender: bool = False


@dataclass(frozen=True)
class IssueEdited(DomainEvent):
    """Event: A todo's fields changed."""

    user_id: str = ""
    issue_id: str = ""
    foreign_user_id: str = ""
    old_message: str = ""
    new_message: str = ""


@dataclass(frozen=True)
class IssueReassigned(DomainEvent):
    """Event: A todo was given to someone else (or reclaimed)."""

    user_id: str = ""
    issue_id: str = ""
    new_receiver_id: str = ""
    old_owner_id: str = ""


@dataclass(frozen=True)
class IssueBumped(DomainEvent):
    """Event: A sender nudged a todo to the top of the receiver's inbox."""

    sender_id: str = ""
    receiver_id: str = ""
    receiver_issue_id: str = ""


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.

    Events are published after the change is stored, so a failing handler
    is logged and never reaches the publisher. Only the newest
    max_history events are kept.
    """

    def __init__(self, max_history: int = 1000):
        self._handlers: dict[type, list] = {}
        self._history: list[DomainEvent] = []
        self.max_history = max_history
        self.logger = logging.getLogger("EventBus")

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        self._history.append(event)
        if len(self._history) > self.max_history:
            del self._history[: len(self._history) - self.max_history]

        # Specific handlers first, then catch-all ones
        handlers = self._handlers.get(type(event), []) + self._handlers.get(DomainEvent, [])
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self.logger.error(f"Handler {handler!r} failed for {event.event_type}: {e}")

    def get_history(self) -> list[DomainEvent]:
        """Get all published events."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear event history."""
        self._history.clear()
