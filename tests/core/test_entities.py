"""Tests for domain entities and enums."""

from datetime import datetime, timedelta, timezone

import pytest

from todosync.core.domain import (
    ExtendedIssue,
    Issue,
    IssueRef,
    IssueStatus,
    ListKind,
    ListsIssue,
)


class TestListKind:
    """Tests for ListKind parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("", ListKind.OWN),
        ("my", ListKind.OWN),
        ("own", ListKind.OWN),
        ("in", ListKind.INCOMING),
        ("_in", ListKind.INCOMING),
        ("Incoming", ListKind.INCOMING),
        ("out", ListKind.OUTGOING),
        ("_out", ListKind.OUTGOING),
        (" outgoing ", ListKind.OUTGOING),
    ])
    def test_from_string(self, text, expected):
        assert ListKind.from_string(text) == expected

    def test_from_string_unknown(self):
        with pytest.raises(ValueError):
            ListKind.from_string("archive")


class TestIssueStatus:
    def test_terminal_states(self):
        assert IssueStatus.COMPLETED.is_terminal()
        assert IssueStatus.REMOVED.is_terminal()
        assert not IssueStatus.OPEN.is_terminal()
        assert not IssueStatus.PENDING.is_terminal()


class TestIssue:
    """Tests for Issue."""

    def test_new_assigns_unique_ids(self):
        a = Issue.new("A", "alice", "alice", IssueStatus.OPEN)
        b = Issue.new("A", "alice", "alice", IssueStatus.OPEN)
        assert a.id != b.id
        assert a.update_at == a.create_at

    def test_update_at_never_before_create_at(self):
        created = datetime(2026, 1, 2, tzinfo=timezone.utc)
        issue = Issue(
            id="1",
            message="m",
            creator_id="alice",
            assignee_id="alice",
            create_at=created,
            update_at=created - timedelta(days=1),
        )
        assert issue.update_at == created

    def test_touch_is_monotonic(self):
        issue = Issue.new("A", "alice", "alice", IssueStatus.OPEN)
        later = issue.update_at + timedelta(minutes=5)

        issue.touch(later)
        issue.touch(later - timedelta(minutes=10))

        assert issue.update_at == later

    def test_link_and_unlink(self):
        sender = Issue.new("A", "alice", "bob", IssueStatus.PENDING)
        receiver = Issue.new("A", "alice", "bob", IssueStatus.PENDING)

        sender.link_to(receiver, "bob")
        assert sender.has_foreign_link
        assert sender.foreign_issue_id == receiver.id
        assert sender.foreign_user_id == "bob"

        sender.unlink()
        assert not sender.has_foreign_link

    def test_copy_is_independent(self):
        issue = Issue.new("A", "alice", "alice", IssueStatus.OPEN)
        copy = issue.copy()
        copy.message = "B"
        assert issue.message == "A"

    def test_message_with_permalink(self):
        issue = Issue.new("A", "alice", "alice", IssueStatus.OPEN, post_permalink="https://x/p/1")
        assert issue.message_with_permalink() == "A\n[Permalink](https://x/p/1)"
        issue.post_permalink = ""
        assert issue.message_with_permalink() == "A"


class TestIssueRef:
    def test_has_foreign_link(self):
        assert not IssueRef("1").has_foreign_link
        assert IssueRef("1", "bob", "2").has_foreign_link


class TestListsIssue:
    def test_get_and_to_dict(self):
        issue = Issue.new("A", "alice", "bob", IssueStatus.PENDING)
        extended = ExtendedIssue(issue, foreign_user="bob", foreign_list=ListKind.INCOMING, foreign_position=2)
        lists = ListsIssue(outgoing=[extended])

        assert lists.get(ListKind.OUTGOING) == [extended]
        data = lists.to_dict()
        assert data["in"] == [] and data["my"] == []
        assert data["out"][0]["user"] == "bob"
        assert data["out"][0]["list"] == "in"
        assert data["out"][0]["position"] == 2
        assert data["out"][0]["status"] == "pending"
