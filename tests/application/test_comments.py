"""Tests for CommentService and the audit trail."""

import pytest

from todosync.application import AuditTrailRecorder, CommentService
from todosync.core.domain import AuditAction
from todosync.core.exceptions import CommentNotFoundError, UnauthorizedError


class TestCommentService:
    """Tests for CommentService."""

    @pytest.fixture
    def service(self, orchestrator):
        return CommentService(orchestrator)

    @pytest.fixture
    def issue_id(self, orchestrator):
        return orchestrator.add_issue("alice", "Buy milk").issue.id

    def test_add_and_list(self, service, issue_id, store):
        first = service.add_comment(issue_id, "alice", "Semi-skimmed")
        service.add_comment(issue_id, "nobody", "Whole")

        comments = service.get_issue_comments(issue_id)

        assert [c.comment.message for c in comments] == ["Semi-skimmed", "Whole"]
        assert [c.username for c in comments] == ["alice", "Someone"]
        logs = store.get_audit_logs(issue_id)
        assert logs[0].action == AuditAction.ADD_COMMENT
        assert logs[1].metadata == first.id

    def test_delete_own_comment(self, service, issue_id, store):
        comment = service.add_comment(issue_id, "alice", "Semi-skimmed")

        service.delete_comment(comment.id, "alice")

        assert service.get_issue_comments(issue_id) == []
        assert store.get_audit_logs(issue_id)[0].action == AuditAction.DELETE_COMMENT

    def test_only_author_may_delete(self, service, issue_id):
        comment = service.add_comment(issue_id, "alice", "Semi-skimmed")

        with pytest.raises(UnauthorizedError):
            service.delete_comment(comment.id, "bob")

        assert len(service.get_issue_comments(issue_id)) == 1

    def test_delete_missing_comment(self, service):
        with pytest.raises(CommentNotFoundError):
            service.delete_comment("missing", "alice")


class TestAuditTrailRecorder:
    """Tests for AuditTrailRecorder."""

    def test_history_newest_first(self, store):
        audit = AuditTrailRecorder(store)
        audit.record("1", "alice", AuditAction.CREATE)
        audit.record("1", "alice", AuditAction.EDIT)
        audit.record("2", "bob", AuditAction.CREATE)

        history = audit.history("1")

        assert [e.action for e in history] == [AuditAction.EDIT, AuditAction.CREATE]

    def test_record_swallows_store_errors(self, store, monkeypatch):
        from todosync.core.exceptions import StoreError

        def broken(entry):
            raise StoreError("disk full")

        monkeypatch.setattr(store, "add_audit_log", broken)
        audit = AuditTrailRecorder(store)

        assert audit.record("1", "alice", AuditAction.CREATE) is False
