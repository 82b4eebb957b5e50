"""
SQL Models - SQLAlchemy tables backing SQLListStore.

todos              one row per issue (each side of a hand-off is its own row)
todo_references    list membership; higher rank = nearer the front
todo_comments      comments per issue
todo_audit_log     append-only history
todo_preferences   per-user settings
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class TodoRow(Base):
    __tablename__ = "todos"

    id = Column(String(32), primary_key=True)
    message = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    post_permalink = Column(Text, nullable=False, default="")
    post_id = Column(String(64), nullable=False, default="")
    creator_id = Column(String(64), nullable=False, index=True)
    assignee_id = Column(String(64), nullable=False)
    priority = Column(Integer, nullable=False, default=0)
    due_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False, default="open", index=True)
    foreign_issue_id = Column(String(32), nullable=False, default="")
    foreign_user_id = Column(String(64), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_todos_assignee", "assignee_id", "status"),
    )


class TodoReferenceRow(Base):
    __tablename__ = "todo_references"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False)
    list_kind = Column(String(8), nullable=False)
    issue_id = Column(String(32), nullable=False)
    foreign_user_id = Column(String(64), nullable=False, default="")
    foreign_issue_id = Column(String(32), nullable=False, default="")
    rank = Column(BigInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "list_kind", "issue_id", name="uq_todo_reference"),
        Index("idx_todo_references_list", "user_id", "list_kind", "rank"),
    )


class TodoCommentRow(Base):
    __tablename__ = "todo_comments"

    id = Column(String(32), primary_key=True)
    todo_id = Column(String(32), nullable=False)
    user_id = Column(String(64), nullable=False)
    message = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_todo_comments_todo_id", "todo_id", "created_at"),
    )


class TodoAuditLogRow(Base):
    __tablename__ = "todo_audit_log"

    id = Column(String(32), primary_key=True)
    todo_id = Column(String(32), nullable=False)
    user_id = Column(String(64), nullable=False)
    action = Column(String(50), nullable=False)
    metadata_ = Column("metadata", Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)
    seq = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_todo_audit_log_todo_id", "todo_id", "created_at"),
    )


class TodoPreferenceRow(Base):
    __tablename__ = "todo_preferences"

    user_id = Column(String(64), primary_key=True)
    reminder_enabled = Column(Boolean, nullable=False, default=True)
    last_reminder_at = Column(DateTime(timezone=True), nullable=True)
    allow_incoming_task = Column(Boolean, nullable=False, default=True)
