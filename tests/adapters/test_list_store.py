"""Behaviour shared by every ListStorePort implementation."""

from datetime import datetime, timedelta, timezone

import pytest

from todosync.adapters import MemoryListStore, SQLListStore
from todosync.core.domain import (
    AuditAction,
    AuditLog,
    Comment,
    Issue,
    IssueRef,
    IssueStatus,
    ListKind,
)
from todosync.core.exceptions import (
    CommentNotFoundError,
    DuplicateReferenceError,
    EmptyListError,
    IssueNotFoundError,
    ReferenceNotFoundError,
)


@pytest.fixture(params=["memory", "sql"])
def list_store(request):
    if request.param == "memory":
        yield MemoryListStore()
        return
    store = SQLListStore("sqlite://")
    yield store
    store.close()


def make_issue(message="Buy milk", **kwargs):
    return Issue.new(message, "alice", kwargs.pop("assignee_id", "alice"), IssueStatus.OPEN, **kwargs)


class TestIssueRegistry:
    """Issue save/get/remove."""

    def test_save_and_get(self, list_store):
        due = datetime(2026, 4, 1, 12, 0, tzinfo=timezone.utc)
        issue = make_issue(description="2 litres", priority=2, due_at=due, post_permalink="https://x/p/1")

        list_store.save_issue(issue)
        loaded = list_store.get_issue(issue.id)

        assert loaded == issue

    def test_save_upserts(self, list_store):
        issue = make_issue()
        list_store.save_issue(issue)
        issue.message = "Buy oat milk"
        issue.set_status(IssueStatus.COMPLETED)

        list_store.save_issue(issue)

        loaded = list_store.get_issue(issue.id)
        assert loaded.message == "Buy oat milk"
        assert loaded.status == IssueStatus.COMPLETED

    def test_get_returns_a_copy(self, list_store):
        issue = make_issue()
        list_store.save_issue(issue)

        loaded = list_store.get_issue(issue.id)
        loaded.message = "changed"

        assert list_store.get_issue(issue.id).message == "Buy milk"

    def test_get_missing(self, list_store):
        with pytest.raises(IssueNotFoundError):
            list_store.get_issue("missing")

    def test_remove(self, list_store):
        issue = make_issue()
        list_store.save_issue(issue)

        list_store.remove_issue(issue.id)

        with pytest.raises(IssueNotFoundError):
            list_store.get_issue(issue.id)
        with pytest.raises(IssueNotFoundError):
            list_store.remove_issue(issue.id)

    def test_get_and_remove(self, list_store):
        issue = make_issue()
        list_store.save_issue(issue)

        removed = list_store.get_and_remove_issue(issue.id)

        assert removed.id == issue.id
        with pytest.raises(IssueNotFoundError):
            list_store.get_issue(issue.id)


class TestReferenceDirectory:
    """List membership and ordering."""

    def test_add_inserts_at_front(self, list_store):
        for issue_id in ("a", "b", "c"):
            list_store.add_reference("alice", issue_id, ListKind.OWN)

        assert [r.issue_id for r in list_store.get_list("alice", ListKind.OWN)] == ["c", "b", "a"]

    def test_lists_are_per_user_and_kind(self, list_store):
        list_store.add_reference("alice", "a", ListKind.OWN)
        list_store.add_reference("alice", "b", ListKind.OUTGOING, "bob", "b2")
        list_store.add_reference("bob", "b2", ListKind.INCOMING, "alice", "b")

        assert list_store.get_list("alice", ListKind.INCOMING) == []
        assert list_store.get_list("alice", ListKind.OUTGOING) == [IssueRef("b", "bob", "b2")]
        assert list_store.get_list("bob", ListKind.INCOMING) == [IssueRef("b2", "alice", "b")]

    def test_duplicate_add(self, list_store):
        list_store.add_reference("alice", "a", ListKind.OWN)

        with pytest.raises(DuplicateReferenceError):
            list_store.add_reference("alice", "a", ListKind.OWN)

    def test_remove(self, list_store):
        list_store.add_reference("alice", "a", ListKind.OWN)
        list_store.add_reference("alice", "b", ListKind.OWN)

        list_store.remove_reference("alice", "a", ListKind.OWN)

        assert [r.issue_id for r in list_store.get_list("alice", ListKind.OWN)] == ["b"]
        with pytest.raises(ReferenceNotFoundError):
            list_store.remove_reference("alice", "a", ListKind.OWN)

    def test_pop_takes_front(self, list_store):
        list_store.add_reference("alice", "a", ListKind.OWN)
        list_store.add_reference("alice", "b", ListKind.OWN, "bob", "b2")

        ref = list_store.pop_reference("alice", ListKind.OWN)

        assert ref == IssueRef("b", "bob", "b2")
        assert [r.issue_id for r in list_store.get_list("alice", ListKind.OWN)] == ["a"]

    def test_pop_empty(self, list_store):
        with pytest.raises(EmptyListError):
            list_store.pop_reference("alice", ListKind.OWN)

    def test_bump_moves_to_front(self, list_store):
        for issue_id in ("a", "b", "c", "d"):
            list_store.add_reference("bob", issue_id, ListKind.INCOMING)

        list_store.bump_reference("bob", "b", ListKind.INCOMING)

        assert [r.issue_id for r in list_store.get_list("bob", ListKind.INCOMING)] == ["b", "d", "c", "a"]

    def test_bump_missing(self, list_store):
        with pytest.raises(ReferenceNotFoundError):
            list_store.bump_reference("bob", "x", ListKind.INCOMING)

    def test_get_issue_reference_position(self, list_store):
        for issue_id in ("a", "b", "c"):
            list_store.add_reference("alice", issue_id, ListKind.OWN)

        ref, position = list_store.get_issue_reference("alice", "a", ListKind.OWN)

        assert ref.issue_id == "a"
        assert position == 2
        with pytest.raises(ReferenceNotFoundError):
            list_store.get_issue_reference("alice", "a", ListKind.INCOMING)

    def test_get_issue_list_and_reference(self, list_store):
        list_store.add_reference("alice", "x", ListKind.OUTGOING, "bob", "y")
        list_store.add_reference("alice", "z", ListKind.OUTGOING)

        list_kind, ref, position = list_store.get_issue_list_and_reference("alice", "x")

        assert list_kind == ListKind.OUTGOING
        assert ref.foreign_issue_id == "y"
        assert position == 1
        with pytest.raises(ReferenceNotFoundError):
            list_store.get_issue_list_and_reference("alice", "missing")


class TestLedger:
    """Comments and audit entries."""

    def test_comments_oldest_first(self, list_store):
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        later = Comment("t1", "bob", "second", created_at=base + timedelta(minutes=1))
        earlier = Comment("t1", "alice", "first", created_at=base)
        list_store.save_comment(later)
        list_store.save_comment(earlier)
        list_store.save_comment(Comment("t2", "alice", "elsewhere"))

        comments = list_store.get_comments("t1")

        assert [c.message for c in comments] == ["first", "second"]
        assert list_store.get_comment(earlier.id).user_id == "alice"

    def test_delete_comment(self, list_store):
        comment = Comment("t1", "alice", "hi")
        list_store.save_comment(comment)

        list_store.delete_comment(comment.id)

        with pytest.raises(CommentNotFoundError):
            list_store.get_comment(comment.id)
        with pytest.raises(CommentNotFoundError):
            list_store.delete_comment(comment.id)

    def test_audit_newest_first(self, list_store):
        list_store.add_audit_log(AuditLog("t1", "alice", AuditAction.SEND, "bob"))
        list_store.add_audit_log(AuditLog("t2", "bob", AuditAction.RECEIVE, "alice"))
        list_store.add_audit_log(AuditLog("t1", "alice", AuditAction.EDIT))

        logs = list_store.get_audit_logs("t1")

        assert [e.action for e in logs] == [AuditAction.EDIT, AuditAction.SEND]
        assert logs[1].metadata == "bob"


class TestPreferenceStorage:
    """Preference defaults and updates."""

    def test_defaults(self, list_store):
        assert list_store.get_reminder_preference("alice") is True
        assert list_store.get_allow_incoming_task_preference("alice") is True
        assert list_store.get_last_reminder_time("alice") is None

    def test_set_and_get(self, list_store):
        when = datetime(2026, 2, 3, 8, 0, tzinfo=timezone.utc)

        list_store.set_reminder_preference("alice", False)
        list_store.set_allow_incoming_task_preference("alice", False)
        list_store.set_last_reminder_time("alice", when)

        assert list_store.get_reminder_preference("alice") is False
        assert list_store.get_allow_incoming_task_preference("alice") is False
        assert list_store.get_last_reminder_time("alice") == when
