"""Tests for the todosync command line."""

import json

import pytest

from todosync.adapters import MemoryListStore, StaticUserDirectory
from todosync.adapters.config import EnvironmentConfigProvider
from todosync.cli import ExitCode, run
from todosync.cli.app import create_parser
from todosync.cli.exit_codes import ExitCode as ExitCodes
from todosync.cli.sanitize import sanitize_input, sanitize_multiline
from todosync.core.domain import IssueStatus, ListKind
from todosync.core.exceptions import (
    ConfigError,
    DuplicateReferenceError,
    IssueNotFoundError,
    StoreError,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    for key in EnvironmentConfigProvider.ENV_MAPPING:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli(store):
    """Run a command line against one shared store."""
    directory = StaticUserDirectory(["alice", "bob", "carol"], admins=["root"])

    def invoke(*argv):
        args = create_parser().parse_args(["--store", "memory", *argv])
        return run(args, store=store, directory=directory)

    return invoke


def first_id(store, user_id, list_kind=ListKind.OWN):
    return store.get_list(user_id, list_kind)[0].issue_id


class TestParser:
    """Tests for argument parsing."""

    def test_list_choice(self):
        parser = create_parser()

        assert parser.parse_args(["list", "-u", "a", "--list", "all"]).list_kind is None
        assert parser.parse_args(["list", "-u", "a", "-l", "out"]).list_kind == ListKind.OUTGOING

    def test_bad_list_choice(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["list", "-u", "a", "-l", "archive"])

    def test_user_is_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["pop"])

    def test_on_off(self):
        args = create_parser().parse_args(["prefs", "-u", "a", "--reminder", "off", "--allow-incoming", "ON"])

        assert args.reminder is False
        assert args.allow_incoming is True

    def test_due_date(self):
        args = create_parser().parse_args(["add", "-u", "a", "x", "--due", "2026-05-01T09:00:00+00:00"])

        assert args.due.year == 2026
        assert args.due.tzinfo is not None


class TestAddAndList:
    """Tests for add and list."""

    def test_add_own(self, cli, store, capsys):
        assert cli("add", "--user", "alice", "<b>Buy</b> milk") == ExitCode.SUCCESS

        issue = store.get_issue(first_id(store, "alice"))
        assert issue.message == "Buy milk"
        assert issue.status == IssueStatus.OPEN
        assert "Added todo" in capsys.readouterr().out

    def test_add_to_self_is_own(self, cli, store):
        cli("add", "--user", "alice", "--to", "@alice", "Buy milk")

        assert len(store.get_list("alice", ListKind.OWN)) == 1
        assert store.get_list("alice", ListKind.OUTGOING) == []

    def test_send(self, cli, store, capsys):
        assert cli("add", "--user", "alice", "--to", "bob", "Call the plumber") == ExitCode.SUCCESS

        assert "to @bob" in capsys.readouterr().out
        assert len(store.get_list("alice", ListKind.OUTGOING)) == 1
        assert len(store.get_list("bob", ListKind.INCOMING)) == 1

    def test_send_to_blocked_user(self, cli, store, capsys):
        cli("prefs", "--user", "bob", "--allow-incoming", "off")

        code = cli("add", "--user", "alice", "--to", "bob", "Call the plumber")

        assert code == ExitCode.UNAUTHORIZED
        assert "@bob has blocked Todo requests" in capsys.readouterr().out
        assert store.get_list("bob", ListKind.INCOMING) == []

    def test_list_text(self, cli, capsys):
        cli("add", "--user", "alice", "--to", "bob", "Call the plumber")
        capsys.readouterr()

        cli("list", "--user", "alice")

        out = capsys.readouterr().out
        assert "Received todos (0)" in out
        assert "Sent todos (1)" in out
        assert "Call the plumber" in out
        assert "bob: received todos #1" in out

    def test_list_json(self, cli, capsys):
        cli("add", "--user", "alice", "--to", "bob", "Call the plumber")
        capsys.readouterr()

        cli("list", "--user", "bob", "--list", "in", "--json")

        data = json.loads(capsys.readouterr().out)
        assert [i["message"] for i in data["in"]] == ["Call the plumber"]
        assert data["in"][0]["user"] == "alice"
        assert data["in"][0]["list"] == "out"

    def test_list_all_json(self, cli, capsys):
        cli("add", "--user", "alice", "Buy milk")
        capsys.readouterr()

        cli("list", "--user", "alice", "--json")

        data = json.loads(capsys.readouterr().out)
        assert set(data) == {"in", "my", "out"}
        assert len(data["my"]) == 1

    def test_daily_reminder_once_per_day(self, cli, capsys):
        cli("add", "--user", "alice", "Buy milk")
        capsys.readouterr()

        cli("list", "--user", "alice", "--list", "my", "--reminder")
        first = capsys.readouterr().out
        cli("list", "--user", "alice", "--list", "my", "--reminder")
        second = capsys.readouterr().out

        assert "Daily Reminder:" in first
        assert "* Buy milk" in first
        assert "Daily Reminder:" not in second


class TestTransitions:
    """Tests for the list-changing commands."""

    def test_accept_and_complete(self, cli, store, capsys):
        cli("add", "--user", "alice", "--to", "bob", "Call the plumber", "--permalink", "https://chat/p/1")
        issue_id = first_id(store, "bob", ListKind.INCOMING)

        assert cli("accept", "--user", "bob", issue_id) == ExitCode.SUCCESS
        assert cli("complete", "--user", "bob", issue_id) == ExitCode.SUCCESS

        out = capsys.readouterr().out
        assert "[Permalink](https://chat/p/1)" in out
        assert "Completed: Call the plumber" in out
        assert store.get_list("alice", ListKind.OUTGOING) == []

    def test_decline(self, cli, store, capsys):
        cli("add", "--user", "alice", "--to", "bob", "Call the plumber")
        issue_id = first_id(store, "bob", ListKind.INCOMING)

        cli("remove", "--user", "bob", issue_id)

        assert "Declined: Call the plumber" in capsys.readouterr().out
        assert store.get_list("alice", ListKind.OUTGOING) == []

    def test_sender_withdraws(self, cli, store, capsys):
        cli("add", "--user", "alice", "--to", "bob", "Call the plumber")
        issue_id = first_id(store, "alice", ListKind.OUTGOING)

        cli("remove", "--user", "alice", issue_id)

        out = capsys.readouterr().out
        assert "Removed: Call the plumber (withdrawn from @bob)" in out
        assert store.get_list("bob", ListKind.INCOMING) == []

    def test_remove_own(self, cli, store, capsys):
        cli("add", "--user", "alice", "Buy milk")

        cli("remove", "--user", "alice", first_id(store, "alice"))

        out = capsys.readouterr().out
        assert "Removed: Buy milk" in out
        assert "withdrawn" not in out

    def test_pop(self, cli, store, capsys):
        cli("add", "--user", "alice", "First")
        cli("add", "--user", "alice", "Second")

        cli("pop", "--user", "alice")

        assert "Completed: Second" in capsys.readouterr().out
        assert len(store.get_list("alice", ListKind.OWN)) == 1

    def test_pop_empty(self, cli, capsys):
        assert cli("pop", "--user", "alice") == ExitCode.EMPTY_LIST
        assert "empty" in capsys.readouterr().out

    def test_bump(self, cli, store, capsys):
        cli("add", "--user", "alice", "--to", "bob", "First")
        cli("add", "--user", "carol", "--to", "bob", "Second")
        issue_id = first_id(store, "alice", ListKind.OUTGOING)

        assert cli("bump", "--user", "alice", issue_id) == ExitCode.SUCCESS

        assert "Bumped todo for @bob" in capsys.readouterr().out
        front = store.get_list("bob", ListKind.INCOMING)[0]
        assert front.foreign_issue_id == issue_id

    def test_edit_keeps_omitted_fields(self, cli, store, capsys):
        cli("add", "--user", "alice", "Buy milk", "--description", "2 litres", "--priority", "2")
        issue_id = first_id(store, "alice")

        cli("edit", "--user", "alice", issue_id, "--message", "Buy oat milk")

        issue = store.get_issue(issue_id)
        assert issue.message == "Buy oat milk"
        assert issue.description == "2 litres"
        assert issue.priority == 2
        assert "Buy milk → Buy oat milk" in capsys.readouterr().out

    def test_assign(self, cli, store, capsys):
        cli("add", "--user", "alice", "Buy milk")
        issue_id = first_id(store, "alice")

        assert cli("assign", "--user", "alice", issue_id, "carol") == ExitCode.SUCCESS

        assert "to @carol" in capsys.readouterr().out
        assert store.get_list("alice", ListKind.OWN) == []
        assert len(store.get_list("carol", ListKind.INCOMING)) == 1

    def test_assign_to_blocked_user(self, cli, store):
        cli("add", "--user", "alice", "Buy milk")
        cli("prefs", "--user", "carol", "--allow-incoming", "off")
        issue_id = first_id(store, "alice")

        assert cli("assign", "--user", "alice", issue_id, "carol") == ExitCode.UNAUTHORIZED
        assert len(store.get_list("alice", ListKind.OWN)) == 1

    def test_stranger_is_rejected(self, cli, store, capsys):
        cli("add", "--user", "alice", "Buy milk")
        issue_id = first_id(store, "alice")

        assert cli("complete", "--user", "carol", issue_id) == ExitCode.UNAUTHORIZED
        assert "Not authorized" in capsys.readouterr().out

    def test_admin_may_act(self, cli, store):
        cli("add", "--user", "alice", "Buy milk")
        issue_id = first_id(store, "alice")

        assert cli("history", "--user", "root", issue_id) == ExitCode.SUCCESS

    def test_unknown_issue(self, cli):
        assert cli("complete", "--user", "alice", "missing") == ExitCode.NOT_FOUND


class TestCommentsHistoryPrefs:
    """Tests for comment, history and prefs."""

    def test_comments(self, cli, store, capsys):
        cli("add", "--user", "alice", "Buy milk")
        issue_id = first_id(store, "alice")

        cli("comment", "add", "--user", "alice", issue_id, "<i>Semi</i>-skimmed")
        cli("comment", "list", "--user", "alice", issue_id)

        out = capsys.readouterr().out
        assert "Comments (1)" in out
        assert "@alice: Semi-skimmed" in out

    def test_delete_foreign_comment(self, cli, store):
        cli("add", "--user", "alice", "Buy milk")
        issue_id = first_id(store, "alice")
        cli("comment", "add", "--user", "alice", issue_id, "Semi-skimmed")
        comment_id = store.get_comments(issue_id)[0].id

        assert cli("comment", "delete", "--user", "bob", comment_id) == ExitCode.UNAUTHORIZED
        assert cli("comment", "delete", "--user", "alice", comment_id) == ExitCode.SUCCESS

    def test_history(self, cli, store, capsys):
        cli("add", "--user", "alice", "--to", "bob", "Call the plumber")
        issue_id = first_id(store, "alice", ListKind.OUTGOING)
        capsys.readouterr()

        cli("history", "--user", "alice", issue_id)

        out = capsys.readouterr().out
        assert "send" in out
        assert "bob" in out

    def test_prefs(self, cli, store, capsys):
        cli("prefs", "--user", "alice", "--reminder", "off")

        assert store.get_reminder_preference("alice") is False
        out = capsys.readouterr().out
        assert "Daily reminder" in out
        assert "never" in out


class TestConfiguration:
    """Tests for configuration handling in run()."""

    def test_invalid_configuration(self, monkeypatch, capsys):
        monkeypatch.setenv("TODOSYNC_STORE", "redis")
        args = create_parser().parse_args(["pop", "--user", "alice"])

        assert run(args, store=MemoryListStore()) == ExitCode.CONFIG_ERROR
        assert "redis" in capsys.readouterr().out

    def test_configured_users_are_closed(self, monkeypatch, capsys):
        monkeypatch.setenv("TODOSYNC_USERS", "alice")
        args = create_parser().parse_args(["--store", "memory", "add", "--user", "alice", "--to", "zed", "Hi"])

        assert run(args) == ExitCode.NOT_FOUND
        assert "zed" in capsys.readouterr().out

    def test_open_directory_registers_users(self):
        args = create_parser().parse_args(["--store", "memory", "add", "--user", "dave", "--to", "erin", "Hi"])

        assert run(args) == ExitCode.SUCCESS

    def test_sql_backend(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'cli.db'}"
        args = create_parser().parse_args(["--store", "sql", "--database-url", url, "add", "-u", "alice", "Hi"])

        assert run(args) == ExitCode.SUCCESS
        assert (tmp_path / "cli.db").exists()


class TestExitCodes:
    @pytest.mark.parametrize("error, code", [
        (IssueNotFoundError("x"), ExitCodes.NOT_FOUND),
        (DuplicateReferenceError("x"), ExitCodes.CONFLICT),
        (ConfigError("x"), ExitCodes.CONFIG_ERROR),
        (StoreError("x"), ExitCodes.ERROR),
    ])
    def test_from_error(self, error, code):
        assert ExitCodes.from_error(error) == code


class TestSanitize:
    def test_input_is_one_line(self):
        assert sanitize_input("  <p>Buy\n  milk</p> ") == "Buy milk"

    def test_multiline_keeps_newlines(self):
        assert sanitize_multiline("<b>line one</b>\nline two\n") == "line one\nline two"

    def test_none(self):
        assert sanitize_input(None) == ""
