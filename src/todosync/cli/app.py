"""
todosync - Hand todos between users from the command line.

Each invocation acts as one user (--user) and runs one operation against
the configured store.

Usage:
    # Add a todo to your own list
    todosync add --user alice "Buy milk"

    # Send a todo to someone else
    todosync add --user alice --to bob "Call the plumber"

    # See your lists
    todosync list --user bob

    # Accept, complete, remove, bump, reassign
    todosync accept --user bob <issue-id>
    todosync complete --user bob <issue-id>
    todosync assign --user alice <issue-id> carol

Environment:
    TODOSYNC_STORE: memory or sql (default sql)
    TODOSYNC_DATABASE_URL: SQLAlchemy URL (default sqlite:///todosync.db)
    TODOSYNC_DIRECTORY_URL / TODOSYNC_DIRECTORY_TOKEN: Mattermost users API
    TODOSYNC_USERS / TODOSYNC_ADMINS: comma-separated static directory
"""

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from ..adapters import (
    EnvironmentConfigProvider,
    MattermostUserDirectory,
    MemoryListStore,
    SQLListStore,
    StaticUserDirectory,
)
from ..application import (
    CommentService,
    ListSyncOrchestrator,
    PreferenceService,
    format_issue_list,
)
from ..core.domain.entities import utcnow
from ..core.domain.enums import ListKind
from ..core.exceptions import (
    ConfigError,
    NotFoundError,
    TodoSyncError,
    UnauthorizedError,
)
from ..core.ports.config_provider import AppConfig, DirectoryConfig, StoreConfig
from ..core.ports.list_store import ListStorePort
from ..core.ports.user_directory import UserDirectoryPort
from .exit_codes import ExitCode
from .output import Console
from .sanitize import sanitize_input, sanitize_multiline


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _on_off(value: str) -> bool:
    value = value.strip().lower()
    if value in ("on", "true", "yes", "1"):
        return True
    if value in ("off", "false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got '{value}'")


def _timestamp(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{value}' (use ISO 8601)") from e


def _list_choice(value: str) -> Optional[ListKind]:
    if value.strip().lower() == "all":
        return None
    try:
        return ListKind.from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todosync",
        description="Hand todos between users",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--store", choices=["memory", "sql"], help="Storage backend")
    parser.add_argument("--database-url", help="SQLAlchemy URL for the sql backend")
    parser.add_argument("--env-file", type=Path, help="Path to a .env file")
    parser.add_argument("--verbose", "-v", action="store_true", default=None, help="Enable verbose logging")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    acting = argparse.ArgumentParser(add_help=False)
    acting.add_argument("--user", "-u", required=True, help="Acting user")

    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", parents=[acting], help="Add a todo or send it to someone")
    add.add_argument("message")
    add.add_argument("--to", help="Receiver (username)")
    add.add_argument("--description", default="")
    add.add_argument("--permalink", default="", help="Link to the originating post")
    add.add_argument("--post-id", default="")
    add.add_argument("--priority", type=int, default=0)
    add.add_argument("--due", type=_timestamp, help="Due date (ISO 8601)")

    show = commands.add_parser("list", parents=[acting], help="Show todo lists")
    show.add_argument("--list", "-l", dest="list_kind", type=_list_choice, default=None,
                      help="my, in, out or all (default all)")
    show.add_argument("--json", action="store_true", help="Print as JSON")
    show.add_argument("--reminder", action="store_true", help="Print the daily reminder if it is due")
    show.add_argument("--tz-offset", type=int, default=0,
                      help="Minutes to subtract from UTC for local time (UTC+2 is -120)")

    for name, text in (
        ("accept", "Accept a received todo"),
        ("complete", "Complete a todo"),
        ("remove", "Remove or decline a todo"),
        ("bump", "Nudge a sent todo to the top of the receiver's list"),
        ("history", "Show the audit history of a todo"),
    ):
        sub = commands.add_parser(name, parents=[acting], help=text)
        sub.add_argument("issue_id")

    commands.add_parser("pop", parents=[acting], help="Complete the first todo of your list")

    edit = commands.add_parser("edit", parents=[acting], help="Edit a todo")
    edit.add_argument("issue_id")
    edit.add_argument("--message")
    edit.add_argument("--description")
    edit.add_argument("--priority", type=int)
    edit.add_argument("--due", type=_timestamp)
    edit.add_argument("--clear-due", action="store_true")

    assign = commands.add_parser("assign", parents=[acting], help="Give a todo to someone else")
    assign.add_argument("issue_id")
    assign.add_argument("to", help="New receiver (username)")

    comment = commands.add_parser("comment", help="Work with comments")
    comment_commands = comment.add_subparsers(dest="comment_command", required=True)
    comment_add = comment_commands.add_parser("add", parents=[acting], help="Comment on a todo")
    comment_add.add_argument("issue_id")
    comment_add.add_argument("message")
    comment_list = comment_commands.add_parser("list", parents=[acting], help="List comments of a todo")
    comment_list.add_argument("issue_id")
    comment_delete = comment_commands.add_parser("delete", parents=[acting], help="Delete your comment")
    comment_delete.add_argument("comment_id")

    prefs = commands.add_parser("prefs", parents=[acting], help="Show or change preferences")
    prefs.add_argument("--reminder", type=_on_off, help="Daily reminder on/off")
    prefs.add_argument("--allow-incoming", type=_on_off, help="Accept todos from others on/off")

    return parser


# =============================================================================
# Wiring
# =============================================================================

def build_store(config: StoreConfig) -> ListStorePort:
    if config.backend == "memory":
        return MemoryListStore()
    if config.backend == "sql":
        return SQLListStore(database_url=config.database_url, echo=config.echo)
    raise ConfigError(f"Unknown store backend: {config.backend}")


def build_directory(config: DirectoryConfig) -> UserDirectoryPort:
    if config.is_remote:
        return MattermostUserDirectory(base_url=config.url, token=config.token)
    return StaticUserDirectory(usernames=config.users, admins=config.admins)


def load_config(args: argparse.Namespace) -> AppConfig:
    provider = EnvironmentConfigProvider(
        env_file=args.env_file,
        cli_overrides={
            "store": args.store,
            "database_url": args.database_url,
            "verbose": args.verbose,
        },
    )
    errors = provider.validate()
    if errors:
        raise ConfigError("; ".join(errors))
    return provider.load()


class TodoApp:
    """One CLI invocation: services plus the acting user."""

    def __init__(
        self,
        store: ListStorePort,
        directory: UserDirectoryPort,
        console: Console,
        open_directory: bool = False,
    ):
        """
        Args:
            store: Storage backend
            directory: User lookups
            console: Output
            open_directory: Register unknown usernames instead of failing
                (static directory with no configured users)
        """
        self.store = store
        self.directory = directory
        self.console = console
        self.open_directory = open_directory
        self.orchestrator = ListSyncOrchestrator(store, directory)
        self.comments = CommentService(self.orchestrator)
        self.preferences = PreferenceService(store)
        self.logger = logging.getLogger("TodoApp")

    def resolve_user(self, name: str) -> str:
        """Turn a username into a user id."""
        name = name.strip().lstrip("@")
        try:
            return self.directory.get_user_by_username(name).id
        except NotFoundError:
            if self.open_directory and isinstance(self.directory, StaticUserDirectory):
                return self.directory.add_user(name).id
            raise

    def require_access(self, issue_id: str, user_id: str) -> None:
        if not self.orchestrator.is_authorized(issue_id, user_id):
            raise UnauthorizedError(f"Not authorized to act on todo {issue_id}", issue_id=issue_id)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def cmd_add(self, user_id: str, args: argparse.Namespace) -> None:
        message = sanitize_input(args.message)
        fields = dict(
            description=sanitize_multiline(args.description),
            post_permalink=args.permalink,
            post_id=args.post_id,
            priority=args.priority,
            due_at=args.due,
        )

        receiver_id = self.resolve_user(args.to) if args.to else user_id
        if receiver_id == user_id:
            result = self.orchestrator.add_issue(user_id, message, **fields)
            self.console.transition(f"Added todo {result.issue.id}", result)
            return

        if not self.preferences.can_receive(receiver_id):
            raise UnauthorizedError(f"@{args.to.lstrip('@')} has blocked Todo requests")

        result = self.orchestrator.send_issue(user_id, receiver_id, message, **fields)
        receiver = self.orchestrator.get_user_name(receiver_id)
        self.console.transition(f"Sent todo {result.issue.id} to @{receiver}", result)

    def cmd_list(self, user_id: str, args: argparse.Namespace) -> None:
        if args.reminder:
            self._daily_reminder(user_id, args.tz_offset)

        kinds = [args.list_kind] if args.list_kind else [ListKind.INCOMING, ListKind.OWN, ListKind.OUTGOING]

        if args.json:
            if args.list_kind:
                data = {
                    args.list_kind.value: [
                        i.to_dict() for i in self.orchestrator.get_issue_list(user_id, args.list_kind)
                    ]
                }
            else:
                data = self.orchestrator.get_all_lists(user_id).to_dict()
            self.console.print(json.dumps(data, indent=2))
            return

        for kind in kinds:
            self.console.issue_list(kind, self.orchestrator.get_issue_list(user_id, kind))

    def _daily_reminder(self, user_id: str, tz_offset: int) -> None:
        now = utcnow()
        if not self.preferences.should_send_reminder(user_id, now, tz_offset):
            return
        own = self.orchestrator.get_issue_list(user_id, ListKind.OWN)
        self.console.print("Daily Reminder:\n\n" + format_issue_list(own))
        try:
            self.preferences.mark_reminder_sent(user_id, now)
        except TodoSyncError as e:
            self.logger.error(f"Unable to save last reminder for {user_id}: {e}")

    def cmd_accept(self, user_id: str, args: argparse.Namespace) -> None:
        self.require_access(args.issue_id, user_id)
        result = self.orchestrator.accept_issue(user_id, args.issue_id)
        self.console.transition(f"Accepted: {result.message}", result)

    def cmd_complete(self, user_id: str, args: argparse.Namespace) -> None:
        self.require_access(args.issue_id, user_id)
        result = self.orchestrator.complete_issue(user_id, args.issue_id)
        self.console.transition(f"Completed: {result.issue.message}", result)

    def cmd_remove(self, user_id: str, args: argparse.Namespace) -> None:
        self.require_access(args.issue_id, user_id)
        result = self.orchestrator.remove_issue(user_id, args.issue_id)
        text = f"Removed: {result.issue.message}"
        if result.is_sender:
            receiver = self.orchestrator.get_user_name(result.foreign_user_id)
            text = f"{text} (withdrawn from @{receiver})"
        elif result.has_foreign_user:
            text = f"Declined: {result.issue.message}"
        self.console.transition(text, result)

    def cmd_pop(self, user_id: str, args: argparse.Namespace) -> None:
        result = self.orchestrator.pop_issue(user_id)
        self.console.transition(f"Completed: {result.issue.message}", result)

    def cmd_bump(self, user_id: str, args: argparse.Namespace) -> None:
        self.require_access(args.issue_id, user_id)
        result = self.orchestrator.bump_issue(user_id, args.issue_id)
        receiver = self.orchestrator.get_user_name(result.foreign_user_id)
        self.console.transition(f"Bumped todo for @{receiver}", result)

    def cmd_edit(self, user_id: str, args: argparse.Namespace) -> None:
        self.require_access(args.issue_id, user_id)
        current = self.store.get_issue(args.issue_id)

        message = sanitize_input(args.message) if args.message is not None else current.message
        description = (
            sanitize_multiline(args.description) if args.description is not None else current.description
        )
        priority = args.priority if args.priority is not None else current.priority
        due_at = None if args.clear_due else (args.due or current.due_at)

        result = self.orchestrator.edit_issue(user_id, args.issue_id, message, description, due_at, priority)
        self.console.transition(f"Edited: {result.old_message} → {result.message}", result)

    def cmd_assign(self, user_id: str, args: argparse.Namespace) -> None:
        self.require_access(args.issue_id, user_id)
        send_to = self.resolve_user(args.to)
        if send_to != user_id and not self.preferences.can_receive(send_to):
            raise UnauthorizedError(f"@{args.to.lstrip('@')} has blocked Todo requests")

        result = self.orchestrator.change_assignment(args.issue_id, user_id, send_to)
        receiver = self.orchestrator.get_user_name(send_to)
        self.console.transition(f"Assigned todo {args.issue_id} to @{receiver}", result)

    def cmd_comment(self, user_id: str, args: argparse.Namespace) -> None:
        if args.comment_command == "add":
            self.require_access(args.issue_id, user_id)
            comment = self.comments.add_comment(args.issue_id, user_id, sanitize_multiline(args.message))
            self.console.success(f"Added comment {comment.id}")
        elif args.comment_command == "list":
            self.require_access(args.issue_id, user_id)
            self.console.comments(self.comments.get_issue_comments(args.issue_id))
        else:
            self.comments.delete_comment(args.comment_id, user_id)
            self.console.success(f"Deleted comment {args.comment_id}")

    def cmd_history(self, user_id: str, args: argparse.Namespace) -> None:
        self.require_access(args.issue_id, user_id)
        self.console.history(self.orchestrator.audit.history(args.issue_id))

    def cmd_prefs(self, user_id: str, args: argparse.Namespace) -> None:
        prefs = self.preferences.update(
            user_id,
            reminder_enabled=args.reminder,
            allow_incoming=args.allow_incoming,
        )
        self.console.preferences(prefs)

    def dispatch(self, args: argparse.Namespace) -> None:
        handler: Callable[[str, argparse.Namespace], None] = getattr(self, f"cmd_{args.command}")
        user_id = self.resolve_user(args.user)
        handler(user_id, args)


def run(
    args: argparse.Namespace,
    store: Optional[ListStorePort] = None,
    directory: Optional[UserDirectoryPort] = None,
    console: Optional[Console] = None,
) -> int:
    """
    Run one parsed command.

    Args:
        args: Parsed arguments
        store: Use this store instead of building one from configuration
        directory: Use this directory instead of building one from configuration
        console: Output (a default one is created if not given)
    """
    logger = logging.getLogger("main")
    console = console or Console(color=not args.no_color, verbose=bool(args.verbose))

    try:
        config = load_config(args)
    except ConfigError as e:
        console.error(str(e))
        return ExitCode.CONFIG_ERROR

    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    owns_store = store is None
    try:
        if store is None:
            store = build_store(config.store)
        if directory is None:
            directory = build_directory(config.directory)
        open_directory = isinstance(directory, StaticUserDirectory) and not config.directory.users

        app = TodoApp(store, directory, console, open_directory=open_directory)
        app.dispatch(args)
    except TodoSyncError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        console.error(str(e))
        return ExitCode.from_error(e)
    finally:
        if owns_store and isinstance(store, SQLListStore):
            store.close()

    return ExitCode.SUCCESS


def main(argv: Optional[list[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(bool(args.verbose))
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
