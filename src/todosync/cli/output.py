"""
Output - Rich console output formatting.

Provides pretty-printed output with colors and formatting.
"""

import sys
from typing import Optional

from ..application.sync import TransitionResult
from ..core.domain.entities import AuditLog, ExtendedComment, ExtendedIssue, Preferences
from ..core.domain.enums import ListKind


LIST_TITLES = {
    ListKind.OWN: "My todos",
    ListKind.INCOMING: "Received todos",
    ListKind.OUTGOING: "Sent todos",
}


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


class Symbols:
    """Unicode symbols for output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"

    BOX_H = "─"


class Console:
    """Console output helper with colors and formatting."""

    def __init__(self, color: bool = True, verbose: bool = False):
        self.color = color and sys.stdout.isatty()
        self.verbose = verbose

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        """Print text."""
        print(text)

    def header(self, text: str) -> None:
        """Print a header."""
        width = max(len(text) + 4, 50)
        border = Colors.CYAN + Symbols.BOX_H * width + Colors.RESET if self.color else "-" * width

        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()

    def section(self, text: str) -> None:
        """Print a section header."""
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))

    def warning(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        """Print detail text (dimmed)."""
        self.print(self._c(f"    {text}", Colors.DIM))

    def debug(self, text: str) -> None:
        """Print debug message (only in verbose mode)."""
        if self.verbose:
            self.print(self._c(f"  [DEBUG] {text}", Colors.DIM))

    def item(self, text: str, status: Optional[str] = None) -> None:
        """Print a list item."""
        status_str = ""
        if status == "ok":
            status_str = self._c(f" [{Symbols.CHECK}]", Colors.GREEN)
        elif status == "fail":
            status_str = self._c(f" [{Symbols.CROSS}]", Colors.RED)
        elif status:
            status_str = self._c(f" [{status}]", Colors.DIM)

        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print a simple table."""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD)
            for i, h in enumerate(headers)
        )
        self.print(header_line)
        self.print("  " + "  ".join("-" * w for w in widths))

        for row in rows:
            row_line = "  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            self.print(row_line)

    # -------------------------------------------------------------------------
    # Todo views
    # -------------------------------------------------------------------------

    def issue_list(self, list_kind: ListKind, issues: list[ExtendedIssue]) -> None:
        """Print one list, front first."""
        self.section(f"{LIST_TITLES[list_kind]} ({len(issues)})")
        if not issues:
            self.detail("Nothing to do!")
            return

        for extended in issues:
            issue = extended.issue
            self.item(f"{issue.message} ({issue.id})", self._issue_status(extended))
            if issue.description:
                self.detail(issue.description)
            if issue.due_at:
                self.detail(f"Due {issue.due_at:%Y-%m-%d %H:%M}")

    def _issue_status(self, extended: ExtendedIssue) -> Optional[str]:
        if not extended.foreign_user:
            return None
        if extended.foreign_list is None:
            return extended.foreign_user
        where = LIST_TITLES[extended.foreign_list].lower()
        return f"{extended.foreign_user}: {where} #{extended.foreign_position + 1}"

    def transition(self, text: str, result: TransitionResult) -> None:
        """Print the outcome of a list change with any best-effort warnings."""
        self.success(text)
        for warning in result.warnings:
            self.warning(warning)

    def comments(self, comments: list[ExtendedComment]) -> None:
        self.section(f"Comments ({len(comments)})")
        for extended in comments:
            comment = extended.comment
            self.item(f"@{extended.username}: {comment.message}", comment.id)
            self.detail(f"{comment.created_at:%Y-%m-%d %H:%M}")

    def history(self, entries: list[AuditLog]) -> None:
        self.section("History")
        rows = [
            [f"{e.created_at:%Y-%m-%d %H:%M:%S}", e.user_id, e.action.value, e.metadata]
            for e in entries
        ]
        self.table(["When", "User", "Action", "Details"], rows)

    def preferences(self, prefs: Preferences) -> None:
        self.section(f"Preferences of {prefs.user_id}")
        last = f"{prefs.last_reminder_at:%Y-%m-%d %H:%M}" if prefs.last_reminder_at else "never"
        self.table(
            ["Setting", "Value"],
            [
                ["Daily reminder", "on" if prefs.reminder_enabled else "off"],
                ["Last reminder", last],
                ["Allow incoming todos", "on" if prefs.allow_incoming else "off"],
            ],
        )
