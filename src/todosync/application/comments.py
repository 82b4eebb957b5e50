"""
Comment Service - Discussion threads attached to issues.
"""

import logging

from ..core.domain.entities import Comment, ExtendedComment
from ..core.domain.enums import AuditAction
from ..core.exceptions import UnauthorizedError
from ..core.ports.list_store import ListStorePort
from .sync.audit import AuditTrailRecorder
from .sync.orchestrator import ListSyncOrchestrator


class CommentService:
    """Adds, lists and deletes comments; every change is audited."""

    def __init__(self, orchestrator: ListSyncOrchestrator):
        self.orchestrator = orchestrator
        self.store: ListStorePort = orchestrator.store
        self.audit: AuditTrailRecorder = orchestrator.audit
        self.logger = logging.getLogger("CommentService")

    def add_comment(self, todo_id: str, user_id: str, message: str) -> Comment:
        comment = Comment(todo_id=todo_id, user_id=user_id, message=message)
        self.store.save_comment(comment)
        self.audit.record(todo_id, user_id, AuditAction.ADD_COMMENT, comment.id)
        self.logger.info(f"User {user_id} commented on issue {todo_id}")
        return comment

    def get_issue_comments(self, todo_id: str) -> list[ExtendedComment]:
        """Get comments oldest first, each with its author's username."""
        return [
            ExtendedComment(comment=c, username=self.orchestrator.get_user_name(c.user_id))
            for c in self.store.get_comments(todo_id)
        ]

    def delete_comment(self, comment_id: str, user_id: str) -> Comment:
        """Delete a comment; only its author may do so."""
        comment = self.store.get_comment(comment_id)
        if comment.user_id != user_id:
            raise UnauthorizedError(
                "Not authorized to delete this comment", issue_id=comment.todo_id
            )

        self.store.delete_comment(comment_id)
        self.audit.record(comment.todo_id, user_id, AuditAction.DELETE_COMMENT, comment_id)
        self.logger.info(f"User {user_id} deleted comment {comment_id}")
        return comment
