"""
List Sync Orchestrator - Moves issues between users' lists.

Every shared issue exists twice: once on the sender's side and once on the
receiver's side, each pointing at the other. The store only guarantees
atomicity for a single record, so each multi-record transition is run as a
CommandBatch whose executed steps are undone in reverse when a later step
fails. Work on the other user's side after the primary step has succeeded
is best-effort: failures there become warnings, never errors.
"""

import logging
from datetime import datetime
from typing import Optional

from ...core.domain.entities import (
    ExtendedIssue,
    Issue,
    IssueRef,
    ListsIssue,
    new_id,
)
from ...core.domain.enums import AuditAction, IssueStatus, ListKind
from ...core.domain.events import (
    EventBus,
    IssueAccepted,
    IssueAdded,
    IssueBumped,
    IssueCompleted,
    IssueEdited,
    IssueReassigned,
    IssueRemoved,
    IssueSent,
)
from ...core.exceptions import (
    ConflictError,
    ReferenceNotFoundError,
    TodoSyncError,
    UnauthorizedError,
)
from ...core.ports.list_store import ListStorePort
from ...core.ports.user_directory import UserDirectoryPort
from ..commands import (
    AddReferenceCommand,
    CommandBatch,
    RemoveIssueCommand,
    RemoveReferenceCommand,
    SaveIssueCommand,
)
from .audit import AuditTrailRecorder
from .results import TransitionResult


UNKNOWN_USER_NAME = "Someone"


class ListSyncOrchestrator:
    """
    Owns the lifecycle of issues across the own/incoming/outgoing lists.

    Callers are expected to have checked is_authorized() before invoking
    any mutating operation. Nothing here notifies users; results and
    published events say who needs to hear about what.
    """

    def __init__(
        self,
        store: ListStorePort,
        directory: Optional[UserDirectoryPort] = None,
        event_bus: Optional[EventBus] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            store: Storage for issues, lists and the audit ledger
            directory: User lookups for display names and admin checks
            event_bus: Optional event bus for publishing events
        """
        self.store = store
        self.directory = directory
        self.event_bus = event_bus or EventBus()
        self.audit = AuditTrailRecorder(store)
        self.logger = logging.getLogger("ListSyncOrchestrator")

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def add_issue(
        self,
        user_id: str,
        message: str,
        description: str = "",
        post_permalink: str = "",
        post_id: str = "",
        priority: int = 0,
        due_at: Optional[datetime] = None,
    ) -> TransitionResult:
        """Create an issue in the user's own list."""
        issue = Issue.new(
            message=message,
            creator_id=user_id,
            assignee_id=user_id,
            status=IssueStatus.OPEN,
            description=description,
            post_permalink=post_permalink,
            post_id=post_id,
            priority=priority,
            due_at=due_at,
        )

        batch = CommandBatch()
        batch.add(SaveIssueCommand(self.store, issue))
        batch.add(AddReferenceCommand(self.store, user_id, issue.id, ListKind.OWN))
        self._run(batch, f"add issue {issue.id}", unrecoverable=True)

        self.audit.record(issue.id, user_id, AuditAction.CREATE)
        self.logger.info(f"User {user_id} added issue {issue.id}")

        result = TransitionResult(issue=issue, list_kind=ListKind.OWN)
        result.touch(user_id, ListKind.OWN)
        self.event_bus.publish(IssueAdded(user_id=user_id, issue_id=issue.id))
        return result

    def send_issue(
        self,
        sender_id: str,
        receiver_id: str,
        message: str,
        description: str = "",
        post_permalink: str = "",
        post_id: str = "",
        priority: int = 0,
        due_at: Optional[datetime] = None,
    ) -> TransitionResult:
        """
        Hand an issue to another user.

        Creates a pending issue on each side, linked to each other, then
        lists them in the sender's outgoing and the receiver's incoming list.
        """
        sender_issue = Issue.new(
            message=message,
            creator_id=sender_id,
            assignee_id=receiver_id,
            status=IssueStatus.PENDING,
            description=description,
            post_permalink=post_permalink,
            post_id=post_id,
            priority=priority,
            due_at=due_at,
        )
        receiver_issue = sender_issue.copy()
        receiver_issue.id = new_id()
        sender_issue.link_to(receiver_issue, receiver_id)
        receiver_issue.link_to(sender_issue, sender_id)

        batch = CommandBatch()
        batch.add(SaveIssueCommand(self.store, sender_issue))
        batch.add(SaveIssueCommand(self.store, receiver_issue))
        batch.add(
            AddReferenceCommand(
                self.store,
                sender_id,
                sender_issue.id,
                ListKind.OUTGOING,
                receiver_id,
                receiver_issue.id,
            )
        )
        batch.add(
            AddReferenceCommand(
                self.store,
                receiver_id,
                receiver_issue.id,
                ListKind.INCOMING,
                sender_id,
                sender_issue.id,
            )
        )
        self._run(batch, f"send issue to {receiver_id}")

        self.audit.record(sender_issue.id, sender_id, AuditAction.SEND, receiver_id)
        self.audit.record(receiver_issue.id, receiver_id, AuditAction.RECEIVE, sender_id)
        self.logger.info(f"User {sender_id} sent issue {receiver_issue.id} to {receiver_id}")

        result = TransitionResult(
            issue=sender_issue,
            foreign_user_id=receiver_id,
            foreign_issue_id=receiver_issue.id,
            list_kind=ListKind.OUTGOING,
            foreign_issue=receiver_issue,
        )
        result.touch(sender_id, ListKind.OUTGOING)
        result.touch(receiver_id, ListKind.INCOMING)
        self.event_bus.publish(
            IssueSent(
                sender_id=sender_id,
                receiver_id=receiver_id,
                sender_issue_id=sender_issue.id,
                receiver_issue_id=receiver_issue.id,
            )
        )
        return result

    def accept_issue(self, user_id: str, issue_id: str) -> TransitionResult:
        """Move an incoming issue into the user's own list, keeping the sender link."""
        issue = self.store.get_issue(issue_id)
        ref, _ = self.store.get_issue_reference(user_id, issue_id, ListKind.INCOMING)

        batch = CommandBatch()
        batch.add(
            AddReferenceCommand(
                self.store,
                user_id,
                issue_id,
                ListKind.OWN,
                ref.foreign_user_id,
                ref.foreign_issue_id,
            )
        )
        batch.add(RemoveReferenceCommand(self.store, user_id, ListKind.INCOMING, ref))
        self._run(batch, f"accept issue {issue_id}")

        result = TransitionResult(
            issue=issue,
            foreign_user_id=ref.foreign_user_id,
            foreign_issue_id=ref.foreign_issue_id,
            list_kind=ListKind.OWN,
            message=issue.message_with_permalink(),
        )

        issue.set_status(IssueStatus.OPEN)
        try:
            self.store.save_issue(issue)
        except TodoSyncError as e:
            self._best_effort_failed(result, f"Could not mark issue {issue_id} open", e)

        self.audit.record(issue_id, user_id, AuditAction.ACCEPT, ref.foreign_user_id)
        self.logger.info(f"User {user_id} accepted issue {issue_id}")

        result.touch(user_id, ListKind.INCOMING, ListKind.OWN)
        result.touch(ref.foreign_user_id, ListKind.OUTGOING)
        self.event_bus.publish(
            IssueAccepted(user_id=user_id, issue_id=issue_id, sender_id=ref.foreign_user_id)
        )
        return result

    def complete_issue(self, user_id: str, issue_id: str) -> TransitionResult:
        """Complete an issue from whichever list holds it."""
        list_kind, ref, _ = self.store.get_issue_list_and_reference(user_id, issue_id)
        self.store.remove_reference(user_id, issue_id, list_kind)

        issue = self.store.get_issue(issue_id)
        result = TransitionResult(
            issue=issue,
            foreign_user_id=ref.foreign_user_id,
            foreign_issue_id=ref.foreign_issue_id,
            list_kind=list_kind,
        )
        self._finish(issue, IssueStatus.COMPLETED, result)
        self.audit.record(issue_id, user_id, AuditAction.COMPLETE)

        result.touch(user_id, list_kind)
        if ref.has_foreign_link:
            self._mirror_completion(ref, result)

        self.logger.info(f"User {user_id} completed issue {issue_id}")
        self.event_bus.publish(
            IssueCompleted(
                user_id=user_id,
                issue_id=issue_id,
                foreign_user_id=ref.foreign_user_id,
                list_kind=list_kind,
            )
        )
        return result

    def remove_issue(self, user_id: str, issue_id: str) -> TransitionResult:
        """
        Remove (or decline) an issue.

        When the issue is shared, the other side's copy is deleted outright.
        result.is_sender tells whether the remover was the one who sent it.
        """
        list_kind, ref, _ = self.store.get_issue_list_and_reference(user_id, issue_id)
        self.store.remove_reference(user_id, issue_id, list_kind)

        issue = self.store.get_issue(issue_id)
        result = TransitionResult(
            issue=issue,
            foreign_user_id=ref.foreign_user_id,
            foreign_issue_id=ref.foreign_issue_id,
            list_kind=list_kind,
            is_sender=list_kind == ListKind.OUTGOING,
        )
        self._finish(issue, IssueStatus.REMOVED, result)
        result.touch(user_id, list_kind)

        if ref.has_foreign_link:
            self._remove_mirror(ref, result)

        self.audit.record(issue_id, user_id, AuditAction.REMOVE)
        self.logger.info(f"User {user_id} removed issue {issue_id}")
        self.event_bus.publish(
            IssueRemoved(
                user_id=user_id,
                issue_id=issue_id,
                foreign_user_id=ref.foreign_user_id,
                list_kind=list_kind,
                is_sender=result.is_sender,
            )
        )
        return result

    def edit_issue(
        self,
        user_id: str,
        issue_id: str,
        message: str,
        description: str = "",
        due_at: Optional[datetime] = None,
        priority: int = 0,
    ) -> TransitionResult:
        """Change the fields of an issue, copying them to its mirror if any."""
        issue = self.store.get_issue(issue_id)
        try:
            list_kind, _, _ = self.store.get_issue_list_and_reference(user_id, issue_id)
        except ReferenceNotFoundError:
            list_kind = None

        old_message = issue.message
        self._apply_fields(issue, message, description, due_at, priority)
        self.store.save_issue(issue)

        result = TransitionResult(
            issue=issue,
            foreign_user_id=issue.foreign_user_id,
            foreign_issue_id=issue.foreign_issue_id,
            list_kind=list_kind,
            old_message=old_message,
            message=issue.message,
        )
        if list_kind is not None:
            result.touch(user_id, list_kind)

        if issue.has_foreign_link:
            try:
                foreign = self.store.get_issue(issue.foreign_issue_id)
                self._apply_fields(foreign, message, description, due_at, priority)
                self.store.save_issue(foreign)
                result.foreign_issue = foreign
                self._touch_foreign(result, issue.foreign_user_id, issue.foreign_issue_id)
            except TodoSyncError as e:
                self._best_effort_failed(
                    result, f"Could not update mirror {issue.foreign_issue_id}", e
                )

        self.audit.record(issue_id, user_id, AuditAction.EDIT)
        self.logger.info(f"User {user_id} edited issue {issue_id}")
        self.event_bus.publish(
            IssueEdited(
                user_id=user_id,
                issue_id=issue_id,
                foreign_user_id=issue.foreign_user_id,
                old_message=old_message,
                new_message=issue.message,
            )
        )
        return result

    def change_assignment(self, issue_id: str, user_id: str, send_to: str) -> TransitionResult:
        """
        Give an owned or sent issue to someone else.

        Reassigning an outgoing issue to oneself takes it back into the own
        list. result.foreign_user_id is the previous receiver, if any.
        """
        issue = self.store.get_issue(issue_id)
        list_kind, ref, _ = self.store.get_issue_list_and_reference(user_id, issue_id)

        if list_kind == ListKind.INCOMING:
            raise UnauthorizedError("Cannot reassign a todo you have not accepted", issue_id=issue_id)
        if list_kind == ListKind.OWN and ref.foreign_issue_id:
            raise UnauthorizedError("Cannot reassign a todo received from someone else", issue_id=issue_id)

        result = TransitionResult(
            issue=issue,
            foreign_user_id=ref.foreign_user_id,
            list_kind=list_kind,
        )

        if send_to == user_id and list_kind != ListKind.OUTGOING:
            self.logger.debug(f"Issue {issue_id} already belongs to {user_id}")
            return result

        # The old mirror goes in the same batch so a failure restores it
        batch = CommandBatch()
        foreign_list = self._add_mirror_teardown(batch, ref, result)
        batch.add(RemoveReferenceCommand(self.store, user_id, list_kind, ref))

        updated = issue.copy()
        updated.unlink()

        if send_to == user_id:
            updated.assignee_id = user_id
            updated.set_status(IssueStatus.OPEN)

            batch.add(AddReferenceCommand(self.store, user_id, issue_id, ListKind.OWN))
            batch.add(SaveIssueCommand(self.store, updated, previous=issue))
            self._run(batch, f"reclaim issue {issue_id}")

            self.audit.record(issue_id, user_id, AuditAction.REASSIGN, user_id)
            self.logger.info(f"User {user_id} reclaimed issue {issue_id}")

            result.issue = updated
            result.touch(user_id, ListKind.OUTGOING, ListKind.OWN)
            if foreign_list is not None:
                result.touch(ref.foreign_user_id, foreign_list)
            self.event_bus.publish(
                IssueReassigned(
                    user_id=user_id,
                    issue_id=issue_id,
                    new_receiver_id=user_id,
                    old_owner_id=ref.foreign_user_id,
                )
            )
            return result

        receiver_issue = Issue.new(
            message=issue.message,
            creator_id=user_id,
            assignee_id=send_to,
            status=IssueStatus.PENDING,
            description=issue.description,
            post_permalink=issue.post_permalink,
            post_id=issue.post_id,
            priority=issue.priority,
            due_at=issue.due_at,
        )
        updated.assignee_id = send_to
        updated.set_status(IssueStatus.PENDING)
        updated.link_to(receiver_issue, send_to)
        receiver_issue.link_to(updated, user_id)

        batch.add(SaveIssueCommand(self.store, receiver_issue))
        batch.add(
            AddReferenceCommand(
                self.store,
                user_id,
                issue_id,
                ListKind.OUTGOING,
                send_to,
                receiver_issue.id,
            )
        )
        batch.add(
            AddReferenceCommand(
                self.store,
                send_to,
                receiver_issue.id,
                ListKind.INCOMING,
                user_id,
                issue_id,
            )
        )
        batch.add(SaveIssueCommand(self.store, updated, previous=issue))
        self._run(batch, f"reassign issue {issue_id} to {send_to}")

        self.audit.record(receiver_issue.id, send_to, AuditAction.RECEIVE, user_id)
        self.audit.record(issue_id, user_id, AuditAction.REASSIGN, send_to)
        self.logger.info(f"User {user_id} reassigned issue {issue_id} to {send_to}")

        result.issue = updated
        result.foreign_issue = receiver_issue
        result.foreign_issue_id = receiver_issue.id
        result.touch(user_id, list_kind, ListKind.OUTGOING)
        result.touch(send_to, ListKind.INCOMING)
        if foreign_list is not None:
            result.touch(ref.foreign_user_id, foreign_list)
        self.event_bus.publish(
            IssueReassigned(
                user_id=user_id,
                issue_id=issue_id,
                new_receiver_id=send_to,
                old_owner_id=ref.foreign_user_id,
            )
        )
        return result

    def pop_issue(self, user_id: str) -> TransitionResult:
        """Complete the issue at the front of the user's own list."""
        ref = self.store.pop_reference(user_id, ListKind.OWN)

        try:
            issue = self.store.get_issue(ref.issue_id)
        except TodoSyncError as e:
            self.logger.error(f"Cannot find issue {ref.issue_id} after pop: {e}")
            raise

        result = TransitionResult(
            issue=issue,
            foreign_user_id=ref.foreign_user_id,
            foreign_issue_id=ref.foreign_issue_id,
            list_kind=ListKind.OWN,
        )
        self._finish(issue, IssueStatus.COMPLETED, result)
        self.audit.record(issue.id, user_id, AuditAction.COMPLETE)

        result.touch(user_id, ListKind.OWN)
        if ref.has_foreign_link:
            self._mirror_completion(ref, result)

        self.logger.info(f"User {user_id} popped issue {issue.id}")
        self.event_bus.publish(
            IssueCompleted(
                user_id=user_id,
                issue_id=issue.id,
                foreign_user_id=ref.foreign_user_id,
                list_kind=ListKind.OWN,
                popped=True,
            )
        )
        return result

    def bump_issue(self, user_id: str, issue_id: str) -> TransitionResult:
        """Move a sent issue to the top of the receiver's incoming list."""
        ref, _ = self.store.get_issue_reference(user_id, issue_id, ListKind.OUTGOING)
        if not ref.has_foreign_link:
            raise ConflictError(f"Issue {issue_id} has no receiver to bump", issue_id=issue_id)

        self.store.bump_reference(ref.foreign_user_id, ref.foreign_issue_id, ListKind.INCOMING)

        result = TransitionResult(
            foreign_user_id=ref.foreign_user_id,
            foreign_issue_id=ref.foreign_issue_id,
            list_kind=ListKind.OUTGOING,
        )
        result.touch(ref.foreign_user_id, ListKind.INCOMING)
        try:
            result.foreign_issue = self.store.get_issue(ref.foreign_issue_id)
        except TodoSyncError as e:
            self._best_effort_failed(
                result, f"Cannot find issue {ref.foreign_issue_id} after bump", e
            )

        self.audit.record(ref.foreign_issue_id, ref.foreign_user_id, AuditAction.BUMP_BY, user_id)
        self.logger.info(f"User {user_id} bumped issue {ref.foreign_issue_id} for {ref.foreign_user_id}")
        self.event_bus.publish(
            IssueBumped(
                sender_id=user_id,
                receiver_id=ref.foreign_user_id,
                receiver_issue_id=ref.foreign_issue_id,
            )
        )
        return result

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_issue_list(self, user_id: str, list_kind: ListKind) -> list[ExtendedIssue]:
        """Get a list for display, with where each mirror currently sits."""
        extended = []
        for ref in self.store.get_list(user_id, list_kind):
            try:
                issue = self.store.get_issue(ref.issue_id)
            except TodoSyncError as e:
                self.logger.debug(f"Skipping dangling reference {ref.issue_id}: {e}")
                continue
            extended.append(self._extend_issue(issue, ref))
        return extended

    def get_all_lists(self, user_id: str) -> ListsIssue:
        return ListsIssue(
            incoming=self.get_issue_list(user_id, ListKind.INCOMING),
            own=self.get_issue_list(user_id, ListKind.OWN),
            outgoing=self.get_issue_list(user_id, ListKind.OUTGOING),
        )

    def get_user_name(self, user_id: str) -> str:
        if self.directory is None:
            return UNKNOWN_USER_NAME
        try:
            return self.directory.get_user(user_id).username
        except TodoSyncError:
            return UNKNOWN_USER_NAME

    def is_authorized(self, issue_id: str, user_id: str) -> bool:
        """
        Check whether user_id may act on issue_id.

        Administrators may act on anything; otherwise the user must be the
        issue's creator or assignee. Raises IssueNotFoundError for unknown
        issues.
        """
        if self._is_admin(user_id):
            return True

        issue = self.store.get_issue(issue_id)
        return user_id in (issue.creator_id, issue.assignee_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _run(self, batch: CommandBatch, operation: str, unrecoverable: bool = False) -> None:
        """
        Execute a batch; on failure undo it and re-raise the original error.
        """
        batch.execute_all()
        if batch.all_succeeded:
            return

        failure = batch.first_failure
        level = logging.ERROR if unrecoverable else logging.WARNING
        for undo_failure in batch.rollback():
            self.logger.log(
                level,
                f"Rollback of '{undo_failure.command_name}' failed while undoing {operation}: "
                f"{undo_failure.error}",
            )

        if failure.exception is not None:
            raise failure.exception
        raise TodoSyncError(f"Cannot {operation}: {failure.error}")

    def _finish(self, issue: Issue, status: IssueStatus, result: TransitionResult) -> None:
        issue.set_status(status)
        try:
            self.store.save_issue(issue)
        except TodoSyncError as e:
            self._best_effort_failed(result, f"Cannot update status of issue {issue.id}", e)

    def _mirror_completion(self, ref: IssueRef, result: TransitionResult) -> None:
        """Take the other side's copy off its outgoing list and mark it completed."""
        try:
            self.store.remove_reference(
                ref.foreign_user_id, ref.foreign_issue_id, ListKind.OUTGOING
            )
            result.touch(ref.foreign_user_id, ListKind.OUTGOING)
        except TodoSyncError as e:
            self._best_effort_failed(
                result, f"Cannot clean list of {ref.foreign_user_id} after completion", e
            )

        try:
            foreign = self.store.get_issue(ref.foreign_issue_id)
            foreign.set_status(IssueStatus.COMPLETED)
            self.store.save_issue(foreign)
            result.foreign_issue = foreign
        except TodoSyncError as e:
            self._best_effort_failed(
                result, f"Cannot mark mirror {ref.foreign_issue_id} completed", e
            )

    def _remove_mirror(self, ref: IssueRef, result: TransitionResult) -> None:
        """Take the other side's copy off its list and delete it."""
        try:
            foreign_list, _, _ = self.store.get_issue_list_and_reference(
                ref.foreign_user_id, ref.foreign_issue_id
            )
            self.store.remove_reference(ref.foreign_user_id, ref.foreign_issue_id, foreign_list)
            result.touch(ref.foreign_user_id, foreign_list)
        except TodoSyncError as e:
            self._best_effort_failed(
                result, f"Cannot clean list of {ref.foreign_user_id} after removal", e
            )

        try:
            result.foreign_issue = self.store.get_and_remove_issue(ref.foreign_issue_id)
        except TodoSyncError as e:
            self._best_effort_failed(
                result, f"Cannot delete mirror {ref.foreign_issue_id} after removal", e
            )

    def _add_mirror_teardown(
        self,
        batch: CommandBatch,
        ref: IssueRef,
        result: TransitionResult,
    ) -> Optional[ListKind]:
        """
        Queue removal of the other side's reference and copy.

        The foreign reference must exist; a mirror issue that is already
        gone is only a warning. Returns the foreign list, or None when the
        ref has no foreign link.
        """
        if not ref.has_foreign_link:
            return None

        try:
            foreign_list, foreign_ref, _ = self.store.get_issue_list_and_reference(
                ref.foreign_user_id, ref.foreign_issue_id
            )
        except ReferenceNotFoundError as e:
            raise ConflictError(
                f"Reference of {ref.foreign_issue_id} for {ref.foreign_user_id} disappeared",
                issue_id=ref.foreign_issue_id,
                cause=e,
            ) from e

        batch.add(RemoveReferenceCommand(self.store, ref.foreign_user_id, foreign_list, foreign_ref))
        try:
            mirror = self.store.get_issue(ref.foreign_issue_id)
        except TodoSyncError as e:
            self._best_effort_failed(result, f"Cannot delete mirror {ref.foreign_issue_id}", e)
        else:
            batch.add(RemoveIssueCommand(self.store, mirror))
        return foreign_list

    def _touch_foreign(self, result: TransitionResult, user_id: str, issue_id: str) -> None:
        try:
            foreign_list, _, _ = self.store.get_issue_list_and_reference(user_id, issue_id)
        except ReferenceNotFoundError:
            return
        result.touch(user_id, foreign_list)

    def _extend_issue(self, issue: Issue, ref: IssueRef) -> ExtendedIssue:
        extended = ExtendedIssue(issue=issue)
        if not ref.has_foreign_link:
            return extended

        try:
            foreign_list, _, position = self.store.get_issue_list_and_reference(
                ref.foreign_user_id, ref.foreign_issue_id
            )
            extended.foreign_list = foreign_list
            extended.foreign_position = position
        except ReferenceNotFoundError:
            pass

        extended.foreign_user = self.get_user_name(ref.foreign_user_id)
        return extended

    def _is_admin(self, user_id: str) -> bool:
        if self.directory is None:
            return False
        try:
            return self.directory.get_user(user_id).is_admin
        except TodoSyncError as e:
            self.logger.debug(f"Admin lookup for {user_id} failed: {e}")
            return False

    def _best_effort_failed(self, result: TransitionResult, what: str, error: Exception) -> None:
        message = f"{what}: {error}"
        self.logger.warning(message)
        result.add_warning(message)

    @staticmethod
    def _apply_fields(
        issue: Issue,
        message: str,
        description: str,
        due_at: Optional[datetime],
        priority: int,
    ) -> None:
        issue.message = message
        issue.description = description
        issue.due_at = due_at
        issue.priority = priority
        issue.touch()
