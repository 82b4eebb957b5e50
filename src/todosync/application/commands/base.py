"""
Command Base - Executable, undoable units of work.

A CommandBatch runs commands in order. When one fails, the batch can
undo every command that already succeeded, newest first, and keeps going
even if an undo fails so that as much as possible is repaired.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CommandResult:
    """Result of executing (or undoing) a command."""

    success: bool = True
    data: Any = None
    error: Optional[str] = None
    exception: Optional[Exception] = None
    skipped: bool = False
    command_name: str = ""

    @classmethod
    def ok(cls, data: Any = None) -> "CommandResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, exception: Optional[Exception] = None) -> "CommandResult":
        return cls(success=False, error=error, exception=exception)

    @classmethod
    def skip(cls, reason: str) -> "CommandResult":
        return cls(success=True, skipped=True, error=reason)


class Command(ABC):
    """
    Abstract base for commands.

    Subclasses implement _execute() and _undo(); one whose effect cannot be
    reversed returns False from supports_undo. Exceptions from either are
    captured into the CommandResult so the batch decides what happens next.
    """

    def __init__(self):
        self._executed = False
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Short description used in logs."""
        ...

    @property
    def supports_undo(self) -> bool:
        return True

    @property
    def executed(self) -> bool:
        return self._executed

    def validate(self) -> Optional[str]:
        """Return an error message if the command cannot run."""
        return None

    @abstractmethod
    def _execute(self) -> Any:
        ...

    @abstractmethod
    def _undo(self) -> None:
        ...

    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return self._tag(CommandResult.fail(error))

        try:
            data = self._execute()
        except Exception as e:
            self.logger.debug(f"{self.name} failed: {e}")
            return self._tag(CommandResult.fail(str(e), exception=e))

        self._executed = True
        return self._tag(CommandResult.ok(data))

    def undo(self) -> CommandResult:
        if not self._executed:
            return self._tag(CommandResult.skip("not executed"))
        if not self.supports_undo:
            return self._tag(CommandResult.skip("undo not supported"))

        try:
            self._undo()
        except Exception as e:
            return self._tag(CommandResult.fail(str(e), exception=e))

        self._executed = False
        return self._tag(CommandResult.ok())

    def _tag(self, result: CommandResult) -> CommandResult:
        result.command_name = self.name
        return result


class CommandBatch:
    """
    Ordered list of commands executed as one unit.

    Usage:
        batch = CommandBatch()
        batch.add(cmd1).add(cmd2)
        batch.execute_all()
        if not batch.all_succeeded:
            failures = batch.rollback()
    """

    def __init__(self, stop_on_error: bool = True):
        self.stop_on_error = stop_on_error
        self._commands: list[Command] = []
        self.results: list[CommandResult] = []
        self.logger = logging.getLogger("CommandBatch")

    def add(self, command: Command) -> "CommandBatch":
        self._commands.append(command)
        return self

    def __len__(self) -> int:
        return len(self._commands)

    def execute_all(self) -> list[CommandResult]:
        self.results = []

        for command in self._commands:
            result = command.execute()
            self.results.append(result)

            if not result.success and self.stop_on_error:
                self.logger.debug(f"Stopping batch after failed command: {command.name}")
                break

        return self.results

    def rollback(self) -> list[CommandResult]:
        """
        Undo executed commands in reverse order.

        Returns:
            The undo results that failed (empty when rollback was clean)
        """
        failures = []
        for command in reversed(self._commands):
            if not command.executed:
                continue
            result = command.undo()
            if not result.success:
                failures.append(result)
        return failures

    @property
    def all_succeeded(self) -> bool:
        return all(r.success for r in self.results) and len(self.results) == len(self._commands)

    @property
    def executed_count(self) -> int:
        return sum(1 for r in self.results if r.success and not r.skipped)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def first_failure(self) -> Optional[CommandResult]:
        for result in self.results:
            if not result.success:
                return result
        return None
