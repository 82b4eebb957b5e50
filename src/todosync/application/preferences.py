"""
Preference Service - Per-user settings and the daily reminder rule.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..core.domain.entities import Preferences
from ..core.domain.enums import ListKind
from ..core.exceptions import TodoSyncError
from ..core.ports.list_store import ListStorePort


REMINDER_MIN_INTERVAL = timedelta(hours=1)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class PreferenceService:
    """Reads and writes preferences and decides when to remind a user."""

    def __init__(self, store: ListStorePort):
        self.store = store
        self.logger = logging.getLogger("PreferenceService")

    def get_preferences(self, user_id: str) -> Preferences:
        return Preferences(
            user_id=user_id,
            reminder_enabled=self.store.get_reminder_preference(user_id),
            last_reminder_at=self.store.get_last_reminder_time(user_id),
            allow_incoming=self.store.get_allow_incoming_task_preference(user_id),
        )

    def update(
        self,
        user_id: str,
        reminder_enabled: Optional[bool] = None,
        allow_incoming: Optional[bool] = None,
    ) -> Preferences:
        """Change the given settings, leaving the others as they are."""
        if reminder_enabled is not None:
            self.store.set_reminder_preference(user_id, reminder_enabled)
        if allow_incoming is not None:
            self.store.set_allow_incoming_task_preference(user_id, allow_incoming)
        return self.get_preferences(user_id)

    def can_receive(self, receiver_id: str) -> bool:
        """
        Check whether receiver_id accepts todos from others.

        A failing read counts as allowed.
        """
        try:
            return self.store.get_allow_incoming_task_preference(receiver_id)
        except TodoSyncError as e:
            self.logger.error(f"Cannot read allow-incoming preference of {receiver_id}: {e}")
            return True

    def should_send_reminder(
        self,
        user_id: str,
        now: datetime,
        tz_offset_minutes: int = 0,
    ) -> bool:
        """
        Decide whether the daily reminder is due.

        Due when reminders are enabled, the own list is not empty, at least
        an hour has passed since the last reminder and the calendar day (in
        the user's time zone) changed since then.

        Args:
            user_id: User to check
            now: Current time (naive values are taken as UTC)
            tz_offset_minutes: Minutes to subtract from UTC to get local
                time, as browsers report it (UTC+2 is -120)
        """
        if not self.store.get_reminder_preference(user_id):
            return False
        if not self.store.get_list(user_id, ListKind.OWN):
            return False

        last = self.store.get_last_reminder_time(user_id) or EPOCH
        local = timezone(timedelta(minutes=-tz_offset_minutes))
        now_local = _as_utc(now).astimezone(local)
        last_local = _as_utc(last).astimezone(local)

        if now_local - last_local < REMINDER_MIN_INTERVAL:
            return False
        return now_local.date() != last_local.date()

    def mark_reminder_sent(self, user_id: str, when: datetime) -> None:
        self.store.set_last_reminder_time(user_id, _as_utc(when))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
