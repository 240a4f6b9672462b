"""Handlers for commands that read the tree or move around in it."""

import logging

from unix_tutor_mcp.models.node import DirectoryNode
from unix_tutor_mcp.models.session import ShellSession
from unix_tutor_mcp.shell.base import CommandResult, ErrorKind, ShellError
from unix_tutor_mcp.tools.utils.formatting_utils import format_listing, format_long_listing
from unix_tutor_mcp.utils.path_utils import resolve_path

logger = logging.getLogger(__name__)


def pwd(session: ShellSession, args: str) -> CommandResult:
    return CommandResult(lines=[session.cwd_path])


def cd(session: ShellSession, args: str) -> CommandResult:
    path = args.strip()
    target = resolve_path(session, path)
    if target is None:
        raise ShellError("The system cannot find the file specified.", ErrorKind.NOT_FOUND)
    if not isinstance(target, DirectoryNode):
        raise ShellError(f"cd: {path}: Not a directory", ErrorKind.NOT_A_DIRECTORY)

    session.change_directory(target)
    logger.debug(f"CWD is now {session.cwd_path}")
    return CommandResult()


def parse_ls_flags(options: str) -> set[str]:
    """Collect the flag letters of every dash token. Unknown letters are kept but unused."""
    flags: set[str] = set()
    for token in options.split():
        if token.startswith("-"):
            flags.update(token.lstrip("-"))
    return flags


def ls(session: ShellSession, args: str) -> CommandResult:
    """
    List the current directory.

    Without options dot-names are hidden. `-a` shows them, `-l` switches to
    the long listing format and `-F` marks directories with a trailing slash.
    Options that contain no dash at all are treated as a path this terminal
    cannot list.
    """
    options = args.strip()
    if options and "-" not in options:
        raise ShellError(
            f"ls: cannot access {options}: No such file or directory", ErrorKind.NOT_FOUND
        )

    flags = parse_ls_flags(options)
    entries = session.store.children_of(session.cwd)
    if "a" not in flags:
        entries = [entry for entry in entries if not entry.name.startswith(".")]

    classify = "F" in flags
    if "l" in flags:
        return CommandResult(lines=format_long_listing(entries, classify))
    return CommandResult(lines=format_listing(entries, classify))


def clear(session: ShellSession, args: str) -> CommandResult:
    # The presentation layer owns the screen; the core only signals the request.
    return CommandResult(clear_screen=True)
