from unix_tutor_mcp.models.node import NodeBase

from .constants import PROTECTED_NAMES


def is_protected_node(node: NodeBase) -> bool:
    """Check if the node is the tree root or carries one of the protected system names."""
    return node.parent is None or node.name in PROTECTED_NAMES


def display_name(path_str: str) -> str:
    """Last component of a user-supplied path, ignoring one trailing slash."""
    path = path_str[:-1] if len(path_str) > 1 and path_str.endswith("/") else path_str
    slash_idx = path.rfind("/")
    if slash_idx == -1 or path == "/":
        return path
    return path[slash_idx + 1 :]
