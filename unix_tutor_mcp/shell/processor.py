"""Splits a raw command line and dispatches it to the matching handler."""

import logging
from typing import Callable

from unix_tutor_mcp.models.session import ShellSession
from unix_tutor_mcp.shell import creation, file_ops, navigation, text
from unix_tutor_mcp.shell.base import CommandResult, ErrorKind, QuotaExceededError, ShellError
from unix_tutor_mcp.tools.utils.constants import (
    PACKAGE_MANAGER_COMMANDS,
    PACKAGE_MANAGER_MESSAGE,
    UNSUPPORTED_COMMANDS,
    UNSUPPORTED_MESSAGE,
)

logger = logging.getLogger(__name__)

CommandHandler = Callable[[ShellSession, str], CommandResult]

COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "cat": text.cat,
    "cd": navigation.cd,
    "chmod": file_ops.chmod,
    "clear": navigation.clear,
    "cp": file_ops.cp,
    "grep": text.grep,
    "ls": navigation.ls,
    "mkdir": creation.mkdir,
    "mv": file_ops.mv,
    "pwd": navigation.pwd,
    "rm": file_ops.rm,
    "touch": creation.touch,
}

# Commands whose whole run is refused once the quota is spent.
QUOTA_CHECKED_COMMANDS = frozenset({"touch"})


def split_command(line: str) -> tuple[str, str]:
    """Split an input line into the command name and the raw argument text."""
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


class CommandProcessor:
    """
    Runs one command line at a time against a session.

    Never raises for user input: every failure comes back as a
    CommandResult with a failure or quota_exceeded status.
    """

    def __init__(self, handlers: dict[str, CommandHandler] | None = None) -> None:
        self._handlers = dict(handlers or COMMAND_HANDLERS)

    @property
    def commands(self) -> list[str]:
        return sorted(self._handlers)

    def run(self, session: ShellSession, line: str) -> CommandResult:
        command, args = split_command(line)
        logger.debug(f"Running {command!r} with args {args!r} in {session.cwd_path}")

        result = self._dispatch(session, command, args)
        session.sync_cwd_path()

        if not result.ok:
            logger.debug(f"{command!r} finished with {result.status}: {result.errors}")
        return result

    def _dispatch(self, session: ShellSession, command: str, args: str) -> CommandResult:
        if not command:
            return CommandResult()
        if command in UNSUPPORTED_COMMANDS:
            return CommandResult().fail(ShellError(UNSUPPORTED_MESSAGE, ErrorKind.UNSUPPORTED))
        if command in PACKAGE_MANAGER_COMMANDS:
            return CommandResult().fail(ShellError(PACKAGE_MANAGER_MESSAGE, ErrorKind.UNSUPPORTED))

        handler = self._handlers.get(command)
        if handler is None:
            return CommandResult().fail(
                ShellError(f"'{command}' command not found", ErrorKind.COMMAND_NOT_FOUND)
            )

        if command in QUOTA_CHECKED_COMMANDS and not session.has_quota():
            return CommandResult().fail(QuotaExceededError(command))

        try:
            return handler(session, args)
        except ShellError as e:
            return CommandResult().fail(e)
