"""Tests specific to the SQLAlchemy store."""

import pytest
from sqlalchemy import inspect

from todosync.adapters.sql import SQLListStore, create_store_engine
from todosync.application.sync import ListSyncOrchestrator
from todosync.core.domain import IssueStatus, ListKind
from todosync.core.exceptions import StoreError


class TestSQLListStore:
    """Tests for SQLListStore."""

    def test_creates_tables(self):
        store = SQLListStore("sqlite://")

        tables = set(inspect(store.engine).get_table_names())

        assert {
            "todos",
            "todo_references",
            "todo_comments",
            "todo_audit_log",
            "todo_preferences",
        } <= tables
        store.close()

    def test_data_survives_reopen(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'todos.db'}"
        store = SQLListStore(url)
        sent = ListSyncOrchestrator(store).send_issue("alice", "bob", "Call Bob")
        store.close()

        reopened = SQLListStore(url)
        ref, position = reopened.get_issue_reference("bob", sent.foreign_issue_id, ListKind.INCOMING)

        assert ref.foreign_issue_id == sent.issue.id
        assert position == 0
        assert reopened.get_issue(sent.issue.id).status == IssueStatus.PENDING
        reopened.close()

    def test_shared_engine(self):
        engine = create_store_engine("sqlite://")
        first = SQLListStore(engine=engine)
        second = SQLListStore(engine=engine)

        first.add_reference("alice", "a", ListKind.OWN)

        assert [r.issue_id for r in second.get_list("alice", ListKind.OWN)] == ["a"]
        engine.dispose()

    def test_driver_errors_become_store_errors(self):
        store = SQLListStore("sqlite://")
        with store.engine.begin() as conn:
            conn.exec_driver_sql("DROP TABLE todos")

        with pytest.raises(StoreError):
            store.get_issue("anything")
        store.close()

    def test_full_hand_off(self):
        store = SQLListStore("sqlite://")
        orchestrator = ListSyncOrchestrator(store)

        sent = orchestrator.send_issue("alice", "bob", "Call Bob")
        orchestrator.accept_issue("bob", sent.foreign_issue_id)
        orchestrator.complete_issue("bob", sent.foreign_issue_id)

        assert store.get_list("bob", ListKind.OWN) == []
        assert store.get_list("alice", ListKind.OUTGOING) == []
        assert store.get_issue(sent.issue.id).status == IssueStatus.COMPLETED
        store.close()
