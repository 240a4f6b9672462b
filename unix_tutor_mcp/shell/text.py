"""Handlers that read or write file content: cat and grep."""

import logging

from unix_tutor_mcp.models.node import DirectoryNode, FileNode, timestamp
from unix_tutor_mcp.models.session import ShellSession
from unix_tutor_mcp.shell.base import CommandResult, ErrorKind, QuotaExceededError, ShellError
from unix_tutor_mcp.shell.creation import new_file
from unix_tutor_mcp.tools.utils.constants import APPEND_TOKEN, OVERWRITE_TOKEN, PIPE_TOKEN
from unix_tutor_mcp.tools.utils.search_utils import search_lines, split_content
from unix_tutor_mcp.utils.path_utils import resolve_parent, resolve_path

logger = logging.getLogger(__name__)


def _readable_file(session: ShellSession, path: str, command: str) -> FileNode:
    node = resolve_path(session, path)
    if node is None:
        raise ShellError(f"{command}: {path}: No such file or directory", ErrorKind.NOT_FOUND)
    if isinstance(node, DirectoryNode):
        raise ShellError(f"{command}: {path}: Is a directory", ErrorKind.IS_A_DIRECTORY)
    return node


def _write_target(session: ShellSession, target: str, content: str, token: str, has_input: bool) -> None:
    """Create the redirection target, or append to / overwrite an existing file."""
    node = resolve_path(session, target)
    if node is None:
        parent, name = resolve_parent(session, target)
        if parent is None:
            raise ShellError(f"cat: {target}: No such file or directory", ErrorKind.NOT_FOUND)
        if not isinstance(parent, DirectoryNode):
            raise ShellError(f"cat: {target}: Not a directory", ErrorKind.NOT_A_DIRECTORY)
        new_file(session, parent, name, "cat", content=content)
        return

    if isinstance(node, DirectoryNode):
        raise ShellError(f"cat: {target}: Is a directory", ErrorKind.IS_A_DIRECTORY)
    if not has_input:
        return

    if token == APPEND_TOKEN and node.content:
        node.set_content(f"{node.content}\n{content}")
    else:
        node.set_content(content)
    node.set_last_modified(timestamp())
    logger.debug(f"Redirected {len(content)} characters into {node.path} ({token})")


def _redirect(session: ShellSession, operands: list[str], token: str) -> CommandResult:
    """
    Concatenate every operand left of `token` into the first operand right of it.

    Missing sources are reported and skipped. Only the first target is
    written; any further targets are merely checked for existence.
    """
    token_idx = operands.index(token)
    sources = operands[:token_idx]
    targets = operands[token_idx + 1 :]
    if not targets:
        raise ShellError(f"cat: missing destination file operand after '{token}'", ErrorKind.MISSING_OPERAND)

    result = CommandResult()
    pieces: list[str] = []
    for source in sources:
        try:
            pieces.append(_readable_file(session, source, "cat").content)
        except ShellError as e:
            result.fail(e)

    try:
        _write_target(session, targets[0], "\n".join(pieces), token, has_input=bool(pieces))
    except QuotaExceededError as e:
        return result.fail(e)
    except ShellError as e:
        result.fail(e)

    for extra in targets[1:]:
        if resolve_path(session, extra) is None:
            result.fail(ShellError(f"cat: {extra}: No such file or directory", ErrorKind.NOT_FOUND))
    return result


def cat(session: ShellSession, args: str) -> CommandResult:
    """
    Print files, or concatenate them into another file with `>` / `>>`.

    Redirection is only looked for when at least three operands are given.
    """
    operands = args.split()
    if not operands:
        raise ShellError("cat: missing operand", ErrorKind.MISSING_OPERAND)

    if len(operands) >= 3:
        # ">>" is checked first so "a >> b" is never read as an overwrite.
        for token in (APPEND_TOKEN, OVERWRITE_TOKEN):
            if token in operands:
                return _redirect(session, operands, token)
        if PIPE_TOKEN in operands:
            raise ShellError(
                "cat: Special character not supported in this terminal...yet", ErrorKind.UNSUPPORTED
            )

    result = CommandResult()
    for path in operands:
        try:
            node = _readable_file(session, path, "cat")
        except ShellError as e:
            result.fail(e)
            continue
        result.lines.extend(split_content(node.content))
    return result


def grep(session: ShellSession, args: str) -> CommandResult:
    """Print the lines of each file that contain the pattern as a literal substring."""
    operands = args.split()
    if not operands:
        raise ShellError("Usage: grep [OPTION]... PATTERN [FILE]...", ErrorKind.MISSING_OPERAND)
    if len(operands) == 1:
        raise ShellError("grep: Current terminal does not support 1 argument grep", ErrorKind.UNSUPPORTED)

    pattern, paths = operands[0], operands[1:]
    if pattern.startswith("-"):
        raise ShellError("grep: options are not supported in this terminal", ErrorKind.UNSUPPORTED)

    result = CommandResult()
    for path in paths:
        try:
            node = _readable_file(session, path, "grep")
        except ShellError as e:
            result.fail(e)
            continue
        result.lines.extend(search_lines(node.content, pattern))
    return result
