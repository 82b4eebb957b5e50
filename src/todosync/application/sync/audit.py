"""
Audit Trail - Fire-and-forget history of what happened to each issue.
"""

import logging

from ...core.domain.entities import AuditLog
from ...core.domain.enums import AuditAction
from ...core.exceptions import TodoSyncError
from ...core.ports.list_store import ListStorePort


class AuditTrailRecorder:
    """
    Appends audit entries and reads them back.

    Recording never fails the operation that triggered it: store errors
    are logged and dropped.
    """

    def __init__(self, store: ListStorePort):
        self.store = store
        self.logger = logging.getLogger("AuditTrailRecorder")

    def record(
        self,
        todo_id: str,
        user_id: str,
        action: AuditAction,
        metadata: str = "",
    ) -> bool:
        """
        Append one entry.

        Returns:
            True if the entry was stored
        """
        entry = AuditLog(todo_id=todo_id, user_id=user_id, action=action, metadata=metadata)
        try:
            self.store.add_audit_log(entry)
        except TodoSyncError as e:
            self.logger.warning(f"Could not record audit entry {action.value} for {todo_id}: {e}")
            return False
        return True

    def history(self, todo_id: str) -> list[AuditLog]:
        """Get entries of an issue, newest first."""
        return self.store.get_audit_logs(todo_id)
