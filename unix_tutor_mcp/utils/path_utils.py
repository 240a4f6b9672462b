from unix_tutor_mcp.models.node import DirectoryNode, FileNode
from unix_tutor_mcp.models.session import ShellSession


def resolve_path(session: ShellSession, path_str: str) -> FileNode | DirectoryNode | None:
    """
    Resolves a user-provided path against the session's virtual tree.

    Short literals ("..", "/", "", "~", "~/", ".", "./") are matched as a
    whole before any parsing. Everything else is split on "/" and walked
    segment by segment from the root (absolute paths) or the current
    directory. The session is never modified.

    Args:
        session: The current ShellSession.
        path_str: The path string provided by the user.

    Returns:
        The node the path points to, or None if it does not resolve.
    """
    store = session.store
    cwd = session.cwd
    path = path_str.strip()

    if len(path) <= 2:
        match path:
            case "..":
                return store.parent_of(cwd) or cwd
            case "/":
                return session.root
            case "" | "~" | "~/":
                return session.home
            case "." | "./":
                return cwd

    absolute = path.startswith("/")
    current: FileNode | DirectoryNode = session.root if absolute else cwd
    segments = [segment for segment in path.split("/") if segment]

    for index, segment in enumerate(segments):
        first = index == 0
        match segment:
            case "home" if first and absolute:
                home = store.find_child(session.root, "home")
                if home is None:
                    return None
                current = home
            case "..":
                current = store.parent_of(current) or current
            case ".":
                if not first:
                    return None
            case "~":
                if not first:
                    return None
                current = session.home
            case _:
                child = store.find_child(current, segment)
                if child is None:
                    return None
                current = child

        # Cannot descend through a file.
        if index < len(segments) - 1 and not isinstance(current, DirectoryNode):
            return None

    return current


def split_parent(path_str: str) -> tuple[str | None, str]:
    """
    Splits a path into its parent part and final name.

    One trailing slash is ignored. A parent of None means the name lives in
    the current directory.
    """
    path = path_str.strip()
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]

    slash_idx = path.rfind("/")
    if slash_idx == -1:
        return None, path
    if slash_idx == 0:
        return "/", path[1:]
    return path[:slash_idx], path[slash_idx + 1 :]


def resolve_parent(
    session: ShellSession, path_str: str
) -> tuple[FileNode | DirectoryNode | None, str]:
    """
    Resolves the directory a new node at `path_str` would be created in.

    Returns:
        A (parent, name) pair. The parent is None when it does not resolve and
        may be a file, which callers report as "Not a directory".
    """
    parent_path, name = split_parent(path_str)
    if parent_path is None:
        return session.cwd, name
    return resolve_path(session, parent_path), name
