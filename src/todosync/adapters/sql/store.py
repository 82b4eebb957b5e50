"""
SQL List Store - Implements ListStorePort on SQLAlchemy.

Every port method runs in its own session and commits once, so each
call is atomic for the record it touches and nothing spans calls.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ...core.domain.entities import AuditLog, Comment, Issue, IssueRef
from ...core.domain.enums import AuditAction, IssueStatus, LIST_SEARCH_ORDER, ListKind
from ...core.exceptions import (
    CommentNotFoundError,
    DuplicateReferenceError,
    EmptyListError,
    IssueNotFoundError,
    ReferenceNotFoundError,
    StoreError,
)
from ...core.ports.list_store import ListStorePort
from .models import (
    Base,
    TodoAuditLogRow,
    TodoCommentRow,
    TodoPreferenceRow,
    TodoReferenceRow,
    TodoRow,
)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; everything stored is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def create_store_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; in-memory SQLite shares one connection."""
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


class SQLListStore(ListStorePort):
    """
    SQLAlchemy implementation of the ListStorePort.

    List order is kept in todo_references.rank: adding or bumping an
    entry gives it a rank above every other entry of that list.
    """

    def __init__(
        self,
        database_url: str = "sqlite://",
        echo: bool = False,
        engine: Optional[Engine] = None,
    ):
        """
        Initialize the store and create missing tables.

        Args:
            database_url: SQLAlchemy database URL
            echo: Log emitted SQL
            engine: Pre-built engine (overrides database_url)
        """
        self.engine = engine or create_store_engine(database_url, echo=echo)
        self._session_factory = sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autoflush=False,
        )
        self.logger = logging.getLogger("SQLListStore")
        self.run_migrations()

    @property
    def name(self) -> str:
        return "SQL"

    def run_migrations(self) -> None:
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to create tables: {e}", cause=e) from e

    def close(self) -> None:
        self.engine.dispose()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            self.logger.error(f"Database error: {e}")
            raise StoreError(f"Database error: {e}", cause=e) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # -------------------------------------------------------------------------
    # ListStorePort Implementation - Issues
    # -------------------------------------------------------------------------

    def save_issue(self, issue: Issue) -> None:
        with self._session() as session:
            session.merge(self._issue_to_row(issue))

    def get_issue(self, issue_id: str) -> Issue:
        with self._session() as session:
            return self._row_to_issue(self._get_todo_row(session, issue_id))

    def remove_issue(self, issue_id: str) -> None:
        with self._session() as session:
            session.delete(self._get_todo_row(session, issue_id))

    def get_and_remove_issue(self, issue_id: str) -> Issue:
        with self._session() as session:
            row = self._get_todo_row(session, issue_id)
            issue = self._row_to_issue(row)
            session.delete(row)
            return issue

    def _get_todo_row(self, session: Session, issue_id: str) -> TodoRow:
        row = session.get(TodoRow, issue_id)
        if row is None:
            raise IssueNotFoundError(f"Issue not found: {issue_id}", issue_id=issue_id)
        return row

    # -------------------------------------------------------------------------
    # ListStorePort Implementation - References
    # -------------------------------------------------------------------------

    def add_reference(
        self,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
        foreign_user_id: str = "",
        foreign_issue_id: str = "",
    ) -> None:
        with self._session() as session:
            if self._find_ref_row(session, user_id, issue_id, list_kind) is not None:
                raise DuplicateReferenceError(
                    f"Issue {issue_id} already in {list_kind.name} list of {user_id}",
                    issue_id=issue_id,
                )
            session.add(TodoReferenceRow(
                user_id=user_id,
                list_kind=list_kind.value,
                issue_id=issue_id,
                foreign_user_id=foreign_user_id,
                foreign_issue_id=foreign_issue_id,
                rank=self._next_rank(session, user_id, list_kind),
            ))

    def remove_reference(self, user_id: str, issue_id: str, list_kind: ListKind) -> None:
        with self._session() as session:
            session.delete(self._get_ref_row(session, user_id, issue_id, list_kind))

    def pop_reference(self, user_id: str, list_kind: ListKind) -> IssueRef:
        with self._session() as session:
            row = session.scalars(
                self._list_query(user_id, list_kind).limit(1)
            ).first()
            if row is None:
                raise EmptyListError(f"{list_kind.name} list of {user_id} is empty")
            ref = self._row_to_ref(row)
            session.delete(row)
            return ref

    def bump_reference(self, user_id: str, issue_id: str, list_kind: ListKind) -> None:
        with self._session() as session:
            row = self._get_ref_row(session, user_id, issue_id, list_kind)
            row.rank = self._next_rank(session, user_id, list_kind)

    def get_issue_reference(
        self,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
    ) -> tuple[IssueRef, int]:
        with self._session() as session:
            row = self._get_ref_row(session, user_id, issue_id, list_kind)
            return self._row_to_ref(row), self._position(session, row)

    def get_issue_list_and_reference(
        self,
        user_id: str,
        issue_id: str,
    ) -> tuple[ListKind, IssueRef, int]:
        with self._session() as session:
            for list_kind in LIST_SEARCH_ORDER:
                row = self._find_ref_row(session, user_id, issue_id, list_kind)
                if row is not None:
                    return list_kind, self._row_to_ref(row), self._position(session, row)
        raise ReferenceNotFoundError(
            f"Issue {issue_id} not in any list of {user_id}",
            issue_id=issue_id,
            user_id=user_id,
        )

    def get_list(self, user_id: str, list_kind: ListKind) -> list[IssueRef]:
        with self._session() as session:
            rows = session.scalars(self._list_query(user_id, list_kind)).all()
            return [self._row_to_ref(row) for row in rows]

    def _list_query(self, user_id: str, list_kind: ListKind):
        return (
            select(TodoReferenceRow)
            .where(
                TodoReferenceRow.user_id == user_id,
                TodoReferenceRow.list_kind == list_kind.value,
            )
            .order_by(TodoReferenceRow.rank.desc())
        )

    def _find_ref_row(
        self,
        session: Session,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
    ) -> Optional[TodoReferenceRow]:
        return session.scalars(
            select(TodoReferenceRow).where(
                TodoReferenceRow.user_id == user_id,
                TodoReferenceRow.list_kind == list_kind.value,
                TodoReferenceRow.issue_id == issue_id,
            )
        ).first()

    def _get_ref_row(
        self,
        session: Session,
        user_id: str,
        issue_id: str,
        list_kind: ListKind,
    ) -> TodoReferenceRow:
        row = self._find_ref_row(session, user_id, issue_id, list_kind)
        if row is None:
            raise ReferenceNotFoundError(
                f"Issue {issue_id} not in {list_kind.name} list of {user_id}",
                issue_id=issue_id,
                user_id=user_id,
            )
        return row

    def _next_rank(self, session: Session, user_id: str, list_kind: ListKind) -> int:
        current = session.scalar(
            select(func.max(TodoReferenceRow.rank)).where(
                TodoReferenceRow.user_id == user_id,
                TodoReferenceRow.list_kind == list_kind.value,
            )
        )
        return (current or 0) + 1

    def _position(self, session: Session, row: TodoReferenceRow) -> int:
        return session.scalar(
            select(func.count()).select_from(TodoReferenceRow).where(
                TodoReferenceRow.user_id == row.user_id,
                TodoReferenceRow.list_kind == row.list_kind,
                TodoReferenceRow.rank > row.rank,
            )
        )

    # -------------------------------------------------------------------------
    # ListStorePort Implementation - Ledger
    # -------------------------------------------------------------------------

    def save_comment(self, comment: Comment) -> None:
        with self._session() as session:
            session.merge(TodoCommentRow(
                id=comment.id,
                todo_id=comment.todo_id,
                user_id=comment.user_id,
                message=comment.message,
                created_at=comment.created_at,
            ))

    def get_comments(self, todo_id: str) -> list[Comment]:
        with self._session() as session:
            rows = session.scalars(
                select(TodoCommentRow)
                .where(TodoCommentRow.todo_id == todo_id)
                .order_by(TodoCommentRow.created_at.asc())
            ).all()
            return [self._row_to_comment(row) for row in rows]

    def get_comment(self, comment_id: str) -> Comment:
        with self._session() as session:
            return self._row_to_comment(self._get_comment_row(session, comment_id))

    def delete_comment(self, comment_id: str) -> None:
        with self._session() as session:
            session.delete(self._get_comment_row(session, comment_id))

    def _get_comment_row(self, session: Session, comment_id: str) -> TodoCommentRow:
        row = session.get(TodoCommentRow, comment_id)
        if row is None:
            raise CommentNotFoundError(f"Comment not found: {comment_id}")
        return row

    def add_audit_log(self, entry: AuditLog) -> None:
        with self._session() as session:
            seq = session.scalar(select(func.max(TodoAuditLogRow.seq))) or 0
            session.add(TodoAuditLogRow(
                id=entry.id,
                todo_id=entry.todo_id,
                user_id=entry.user_id,
                action=entry.action.value,
                metadata_=entry.metadata,
                created_at=entry.created_at,
                seq=seq + 1,
            ))

    def get_audit_logs(self, todo_id: str) -> list[AuditLog]:
        with self._session() as session:
            rows = session.scalars(
                select(TodoAuditLogRow)
                .where(TodoAuditLogRow.todo_id == todo_id)
                .order_by(TodoAuditLogRow.seq.desc())
            ).all()
            return [
                AuditLog(
                    todo_id=row.todo_id,
                    user_id=row.user_id,
                    action=AuditAction(row.action),
                    metadata=row.metadata_,
                    id=row.id,
                    created_at=_aware(row.created_at),
                )
                for row in rows
            ]

    # -------------------------------------------------------------------------
    # ListStorePort Implementation - Preferences
    # -------------------------------------------------------------------------

    def _preference_row(self, session: Session, user_id: str) -> TodoPreferenceRow:
        row = session.get(TodoPreferenceRow, user_id)
        if row is None:
            row = TodoPreferenceRow(
                user_id=user_id,
                reminder_enabled=True,
                allow_incoming_task=True,
            )
            session.add(row)
        return row

    def set_reminder_preference(self, user_id: str, enabled: bool) -> None:
        with self._session() as session:
            self._preference_row(session, user_id).reminder_enabled = enabled

    def get_reminder_preference(self, user_id: str) -> bool:
        with self._session() as session:
            row = session.get(TodoPreferenceRow, user_id)
            return True if row is None else row.reminder_enabled

    def set_last_reminder_time(self, user_id: str, when: datetime) -> None:
        with self._session() as session:
            self._preference_row(session, user_id).last_reminder_at = when

    def get_last_reminder_time(self, user_id: str) -> Optional[datetime]:
        with self._session() as session:
            row = session.get(TodoPreferenceRow, user_id)
            return None if row is None else _aware(row.last_reminder_at)

    def set_allow_incoming_task_preference(self, user_id: str, enabled: bool) -> None:
        with self._session() as session:
            self._preference_row(session, user_id).allow_incoming_task = enabled

    def get_allow_incoming_task_preference(self, user_id: str) -> bool:
        with self._session() as session:
            row = session.get(TodoPreferenceRow, user_id)
            return True if row is None else row.allow_incoming_task

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _issue_to_row(issue: Issue) -> TodoRow:
        return TodoRow(
            id=issue.id,
            message=issue.message,
            description=issue.description,
            post_permalink=issue.post_permalink,
            post_id=issue.post_id,
            creator_id=issue.creator_id,
            assignee_id=issue.assignee_id,
            priority=issue.priority,
            due_at=issue.due_at,
            status=issue.status.value,
            foreign_issue_id=issue.foreign_issue_id,
            foreign_user_id=issue.foreign_user_id,
            created_at=issue.create_at,
            updated_at=issue.update_at,
        )

    @staticmethod
    def _row_to_issue(row: TodoRow) -> Issue:
        return Issue(
            id=row.id,
            message=row.message,
            creator_id=row.creator_id,
            assignee_id=row.assignee_id,
            status=IssueStatus(row.status),
            description=row.description,
            post_permalink=row.post_permalink,
            post_id=row.post_id,
            priority=row.priority,
            due_at=_aware(row.due_at),
            foreign_issue_id=row.foreign_issue_id,
            foreign_user_id=row.foreign_user_id,
            create_at=_aware(row.created_at),
            update_at=_aware(row.updated_at),
        )

    @staticmethod
    def _row_to_ref(row: TodoReferenceRow) -> IssueRef:
        return IssueRef(
            issue_id=row.issue_id,
            foreign_user_id=row.foreign_user_id,
            foreign_issue_id=row.foreign_issue_id,
        )

    @staticmethod
    def _row_to_comment(row: TodoCommentRow) -> Comment:
        return Comment(
            todo_id=row.todo_id,
            user_id=row.user_id,
            message=row.message,
            id=row.id,
            created_at=_aware(row.created_at),
        )
