"""Handlers that copy, move, remove or re-permission existing nodes."""

import logging

from unix_tutor_mcp.models.node import DirectoryNode, FileNode, NodeBase, is_valid_name, mode_to_mask
from unix_tutor_mcp.models.session import ShellSession
from unix_tutor_mcp.shell.base import CommandResult, ErrorKind, ShellError
from unix_tutor_mcp.shell.creation import new_file
from unix_tutor_mcp.tools.utils.constants import RM_UNSUPPORTED_OPTIONS
from unix_tutor_mcp.tools.utils.path_utils import display_name, is_protected_node
from unix_tutor_mcp.utils.path_utils import resolve_parent, resolve_path

logger = logging.getLogger(__name__)


def _two_operands(command: str, args: str) -> tuple[str, str]:
    operands = args.split()
    if not operands:
        raise ShellError(f"{command}: missing file operand", ErrorKind.MISSING_OPERAND)
    if len(operands) == 1:
        raise ShellError(
            f"{command}: missing destination file operand after '{operands[0]}'",
            ErrorKind.MISSING_OPERAND,
        )
    return operands[0], operands[1]


def _duplicate(session: ShellSession, src: FileNode, parent: DirectoryNode, name: str) -> FileNode:
    return new_file(
        session,
        parent,
        name,
        "cp",
        content=src.content,
        mode=src.mode,
        owner=src.owner,
        group=src.group,
    )


def _copy_into_directory(
    session: ShellSession, src: FileNode, directory: DirectoryNode, src_path: str, dest_path: str
) -> None:
    existing = session.store.find_child(directory, src.name)
    if existing is None:
        _duplicate(session, src, directory, src.name)
        return

    if existing.id == src.id:
        raise ShellError(
            f"cp: '{src_path}' and '{existing.path}' are the same file", ErrorKind.SAME_FILE
        )
    if isinstance(existing, DirectoryNode):
        raise ShellError(
            f"cp: cannot overwrite directory '{existing.path}' with non-directory",
            ErrorKind.IS_A_DIRECTORY,
        )
    existing.set_content(src.content).set_permissions(src.mode).set_ownership(src.owner, src.group)


def _transplant(session: ShellSession, src: FileNode, dest: FileNode) -> None:
    """
    Put the source node itself where the destination file was.

    The destination is destroyed and the source takes over its name and
    parent; no new node is created.
    """
    store = session.store
    parent = store.parent_of(dest)
    name = dest.name

    store.remove(dest)
    store.detach(src)
    src.name = name
    store.add_child(parent, src)
    logger.debug(f"Transplanted node {src.id} to {src.path}")


def _copy_to_new_path(session: ShellSession, src: FileNode, dest_path: str) -> None:
    if dest_path.endswith("/"):
        # A slash-terminated target that does not exist was meant as a directory.
        reason = "No such file or directory" if dest_path.count("/") > 1 else "Not a directory"
        raise ShellError(
            f"cp: cannot create regular file '{dest_path}': {reason}",
            ErrorKind.NOT_FOUND if dest_path.count("/") > 1 else ErrorKind.NOT_A_DIRECTORY,
        )

    parent, name = resolve_parent(session, dest_path)
    if parent is None:
        raise ShellError(
            f"cp: cannot create regular file '{dest_path}': No such file or directory",
            ErrorKind.NOT_FOUND,
        )
    if not isinstance(parent, DirectoryNode):
        raise ShellError(
            f"cp: cannot create regular file '{dest_path}': Not a directory",
            ErrorKind.NOT_A_DIRECTORY,
        )
    _duplicate(session, src, parent, name)


def cp(session: ShellSession, args: str) -> CommandResult:
    """
    Copy a file.

    - Into an existing directory: a duplicate with the same name is added.
    - Onto an existing file: the source node is transplanted into its place.
    - To a new path: a duplicate with the new name is created.
    Directories are never copied.
    """
    src_path, dest_path = _two_operands("cp", args)

    src = resolve_path(session, src_path)
    if src is None:
        raise ShellError(f"cp: cannot stat '{src_path}': No such file or directory", ErrorKind.NOT_FOUND)
    if isinstance(src, DirectoryNode):
        raise ShellError(f"cp: omitting directory '{src_path}'", ErrorKind.IS_A_DIRECTORY)

    dest = resolve_path(session, dest_path)
    if dest is None:
        _copy_to_new_path(session, src, dest_path)
    elif dest.id == src.id:
        raise ShellError(f"cp: '{src_path}' and '{dest_path}' are the same file", ErrorKind.SAME_FILE)
    elif isinstance(dest, DirectoryNode):
        _copy_into_directory(session, src, dest, src_path, dest_path)
    else:
        _transplant(session, src, dest)
    return CommandResult()


def _move(
    session: ShellSession,
    src: NodeBase,
    parent: DirectoryNode,
    name: str,
    src_path: str,
    dest_path: str,
) -> None:
    store = session.store
    if isinstance(src, DirectoryNode) and store.is_ancestor(src, parent):
        raise ShellError(
            f"mv: cannot move '{src_path}' to a subdirectory of itself, '{dest_path}'",
            ErrorKind.INVALID_ARGUMENT,
        )
    if not is_valid_name(name):
        raise ShellError(
            f"mv: cannot move '{src_path}' to '{dest_path}': Invalid argument",
            ErrorKind.INVALID_ARGUMENT,
        )

    existing = store.find_child(parent, name)
    if existing is not None:
        if existing.id == src.id:
            raise ShellError(f"mv: '{src_path}' and '{dest_path}' are the same file", ErrorKind.SAME_FILE)
        if isinstance(existing, DirectoryNode):
            raise ShellError(
                f"mv: cannot move '{src_path}' to '{existing.path}': File exists",
                ErrorKind.ALREADY_EXISTS,
            )
        if isinstance(src, DirectoryNode):
            raise ShellError(
                f"mv: cannot overwrite non-directory '{existing.path}' with directory '{src_path}'",
                ErrorKind.NOT_A_DIRECTORY,
            )
        store.remove(existing)

    old_parent = store.parent_of(src)
    if old_parent is not None and old_parent.id == parent.id:
        store.rename(src, name)
        logger.debug(f"Renamed node {src.id} to {src.path}")
        return

    store.detach(src)
    src.name = name
    store.add_child(parent, src)
    logger.debug(f"Moved node {src.id} to {src.path}")


def mv(session: ShellSession, args: str) -> CommandResult:
    """
    Move or rename a node.

    A destination that does not exist names the new location: its parent
    part must resolve to a directory and its last part becomes the new name
    (a trailing copy of the source's own name simply keeps that name).
    Within the same directory this is a pure rename.
    """
    src_path, dest_path = _two_operands("mv", args)

    src = resolve_path(session, src_path)
    if src is None:
        raise ShellError(f"mv: cannot stat '{src_path}': No such file or directory", ErrorKind.NOT_FOUND)
    if src.parent is None:
        raise ShellError(f"mv: cannot move '{src_path}': Device or resource busy", ErrorKind.BUSY)

    dest = resolve_path(session, dest_path)
    if dest is None:
        parent, name = resolve_parent(session, dest_path)
        if parent is None:
            raise ShellError(f"mv: cannot stat '{dest_path}': No such file or directory", ErrorKind.NOT_FOUND)
        if not isinstance(parent, DirectoryNode):
            raise ShellError(f"mv: accessing '{dest_path}': Not a directory", ErrorKind.NOT_A_DIRECTORY)
    elif dest.id == src.id:
        raise ShellError(f"mv: '{src_path}' and '{dest_path}' are the same file", ErrorKind.SAME_FILE)
    elif isinstance(dest, DirectoryNode):
        parent, name = dest, src.name
    else:
        parent, name = session.store.parent_of(dest), dest.name

    _move(session, src, parent, name, src_path, dest_path)
    return CommandResult()


def _remove_one(session: ShellSession, path: str, recursive: bool) -> None:
    store = session.store
    node = resolve_path(session, path)
    if node is None:
        raise ShellError(
            f"rm: cannot remove '{display_name(path)}': No such file or directory", ErrorKind.NOT_FOUND
        )
    if isinstance(node, DirectoryNode) and not recursive:
        raise ShellError(f"rm: cannot remove '{node.name}': Is a directory", ErrorKind.IS_A_DIRECTORY)
    # Renamed system directories lose their protected name but still hold home.
    if is_protected_node(node) or store.is_ancestor(node, session.home):
        raise ShellError(f"rm: cannot remove '{node.name}': Operation not permitted", ErrorKind.PROTECTED)
    if store.is_ancestor(node, session.cwd):
        raise ShellError(f"rm: cannot remove '{node.name}': Device or resource busy", ErrorKind.BUSY)

    purged = store.remove(node)
    logger.debug(f"Removed {path!r} ({purged} node(s))")


def rm(session: ShellSession, args: str) -> CommandResult:
    """
    Remove files, and directories with `-r`.

    Removing a directory purges its whole subtree. Protected system
    directories are never removed. Each operand is handled on its own, so one
    failure does not stop the others.
    """
    operands = args.split()
    if not operands:
        raise ShellError("rm: missing operand", ErrorKind.MISSING_OPERAND)

    recursive = False
    if operands[0].startswith("-"):
        flag = operands[0]
        if flag == "-r":
            recursive = True
        elif flag in RM_UNSUPPORTED_OPTIONS:
            raise ShellError(f"rm: option {flag[1:]} is not supported in this terminal", ErrorKind.UNSUPPORTED)
        else:
            raise ShellError(f"rm: invalid option -- {flag[1:]}", ErrorKind.INVALID_OPTION)

        operands = operands[1:]
        if not operands:
            raise ShellError("rm: missing operand", ErrorKind.MISSING_OPERAND)

    result = CommandResult()
    for path in operands:
        try:
            _remove_one(session, path, recursive)
        except ShellError as e:
            result.fail(e)
    return result


def chmod(session: ShellSession, args: str) -> CommandResult:
    """Apply a 3-digit octal mode to each path."""
    operands = args.split()
    if not operands:
        raise ShellError("chmod: missing operand", ErrorKind.MISSING_OPERAND)
    if len(operands) == 1:
        raise ShellError(f"chmod: missing operand after '{operands[0]}'", ErrorKind.MISSING_OPERAND)

    mode, paths = operands[0], operands[1:]
    if mode_to_mask(mode) is None:
        raise ShellError(f"chmod: invalid mode '{mode}'", ErrorKind.INVALID_OPTION)

    result = CommandResult()
    for path in paths:
        node = resolve_path(session, path)
        if node is None:
            result.fail(
                ShellError(f"chmod: cannot access '{path}': No such file or directory", ErrorKind.NOT_FOUND)
            )
            continue
        node.set_permissions(mode)
    return result
