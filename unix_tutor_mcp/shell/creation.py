"""Handlers that create nodes, and the quota-charged helpers other handlers reuse."""

import logging

from unix_tutor_mcp.models.node import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    DirectoryNode,
    FileNode,
    is_valid_name,
)
from unix_tutor_mcp.models.session import ShellSession
from unix_tutor_mcp.shell.base import CommandResult, ErrorKind, QuotaExceededError, ShellError
from unix_tutor_mcp.tools.utils.constants import MKDIR_UNSUPPORTED_OPTIONS
from unix_tutor_mcp.utils.path_utils import resolve_parent, resolve_path

logger = logging.getLogger(__name__)


def _check_new_name(command: str, name: str, path: str) -> None:
    if not is_valid_name(name):
        raise ShellError(
            f"{command}: cannot create '{path}': Invalid argument", ErrorKind.INVALID_ARGUMENT
        )


def new_file(
    session: ShellSession,
    parent: DirectoryNode,
    name: str,
    command: str,
    *,
    content: str = "",
    mode: str = DEFAULT_FILE_MODE,
    owner: str | None = None,
    group: str | None = None,
) -> FileNode:
    """
    Create a file under `parent`, charged against the session quota.

    The quota is checked before anything is built and only counted once the
    node is attached.

    Raises:
        QuotaExceededError: If the session has no creations left.
        ShellError: If the name is invalid or already taken.
    """
    _check_new_name(command, name, name)
    if not session.has_quota():
        raise QuotaExceededError(command)

    store = session.store
    node = store.create_file(
        name,
        mode=mode,
        owner=owner or session.owner,
        group=group or session.group,
        content=content,
    )
    if not store.add_child(parent, node):
        store.remove(node)
        raise ShellError(f"{command}: cannot create '{name}': File exists", ErrorKind.ALREADY_EXISTS)

    session.record_creation()
    logger.debug(f"Created file {node.path} ({session.files_created}/{session.max_files})")
    return node


def new_directory(
    session: ShellSession, parent: DirectoryNode, name: str, command: str
) -> DirectoryNode:
    """Create a directory under `parent`, charged against the session quota."""
    _check_new_name(command, name, name)
    if not session.has_quota():
        raise QuotaExceededError(command)

    store = session.store
    node = store.create_directory(
        name, mode=DEFAULT_DIR_MODE, owner=session.owner, group=session.group
    )
    if not store.add_child(parent, node):
        store.remove(node)
        raise ShellError(f"{command}: cannot create '{name}': File exists", ErrorKind.ALREADY_EXISTS)

    session.record_creation()
    logger.debug(f"Created directory {node.path} ({session.files_created}/{session.max_files})")
    return node


def _strip_trailing_slash(path: str) -> str:
    return path[:-1] if len(path) > 1 and path.endswith("/") else path


def _make_directory(session: ShellSession, path: str) -> None:
    shown = _strip_trailing_slash(path)
    if resolve_path(session, path) is not None:
        raise ShellError(
            f"mkdir: cannot create directory '{shown}': File exists", ErrorKind.ALREADY_EXISTS
        )

    parent, name = resolve_parent(session, path)
    if parent is None:
        raise ShellError(
            f"mkdir: cannot create directory '{shown}': No such file or directory",
            ErrorKind.NOT_FOUND,
        )
    if not isinstance(parent, DirectoryNode):
        raise ShellError(
            f"mkdir: cannot create directory '{shown}': Not a directory",
            ErrorKind.NOT_A_DIRECTORY,
        )
    new_directory(session, parent, name, "mkdir")


def _make_parents(session: ShellSession, path: str) -> int:
    """
    Materialise every missing directory along `path`.

    Each prefix of the path is resolved in turn and every prefix that does
    not resolve is created under the node reached so far.

    Returns:
        The number of directories created.
    """
    shown = _strip_trailing_slash(path)
    existing = resolve_path(session, path)
    if existing is not None:
        if isinstance(existing, DirectoryNode):
            return 0
        raise ShellError(
            f"mkdir: cannot create directory '{shown}': File exists", ErrorKind.ALREADY_EXISTS
        )

    stripped = path.strip()
    prefix = "/" if stripped.startswith("/") else ""
    current = session.root if prefix else session.cwd
    segments = [segment for segment in stripped.split("/") if segment]

    created = 0
    for index, segment in enumerate(segments):
        partial = prefix + "/".join(segments[: index + 1])
        node = resolve_path(session, partial)
        if node is None:
            _check_new_name("mkdir", segment, shown)
            node = new_directory(session, current, segment, "mkdir")
            created += 1
        elif not isinstance(node, DirectoryNode):
            raise ShellError(
                f"mkdir: cannot create directory '{shown}': Not a directory",
                ErrorKind.NOT_A_DIRECTORY,
            )
        current = node
    return created


def mkdir(session: ShellSession, args: str) -> CommandResult:
    """
    Create directories.

    Operands are handled one by one; a failing operand is reported and the
    rest still run. Only running out of quota stops the command early.
    """
    operands = args.split()
    if not operands:
        raise ShellError("mkdir: missing operand", ErrorKind.MISSING_OPERAND)

    parents = False
    if operands[0].startswith("-"):
        flag = operands[0]
        if flag == "-p":
            parents = True
            operands = operands[1:]
        elif flag in MKDIR_UNSUPPORTED_OPTIONS:
            raise ShellError(f"mkdir: option '{flag[1:]}' is not supported.", ErrorKind.UNSUPPORTED)
        else:
            raise ShellError(f"mkdir: invalid option -- '{flag[1:]}'", ErrorKind.INVALID_OPTION)

        if not operands:
            raise ShellError("mkdir: missing operand", ErrorKind.MISSING_OPERAND)

    result = CommandResult()
    for path in operands:
        try:
            if parents:
                _make_parents(session, path)
            else:
                _make_directory(session, path)
        except QuotaExceededError as e:
            return result.fail(e)
        except ShellError as e:
            result.fail(e)
    return result


def _touch_one(session: ShellSession, path: str) -> None:
    if resolve_path(session, path) is not None:
        return

    parent, name = resolve_parent(session, path)
    if parent is None:
        raise ShellError(
            f"touch: cannot touch '{path}': No such file or directory", ErrorKind.NOT_FOUND
        )
    if not isinstance(parent, DirectoryNode):
        raise ShellError(
            f"touch: cannot touch '{path}': Not a directory", ErrorKind.NOT_A_DIRECTORY
        )
    new_file(session, parent, name, "touch")


def touch(session: ShellSession, args: str) -> CommandResult:
    """Create empty files. Existing paths are left untouched."""
    operands = args.split()
    if not operands:
        raise ShellError("touch: missing file operand", ErrorKind.MISSING_OPERAND)

    result = CommandResult()
    for path in operands:
        try:
            _touch_one(session, path)
        except QuotaExceededError as e:
            return result.fail(e)
        except ShellError as e:
            result.fail(e)
    return result
