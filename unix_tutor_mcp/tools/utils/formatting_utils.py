from typing import Iterable

from unix_tutor_mcp.models.node import NodeBase


def format_entry_name(node: NodeBase, classify: bool) -> str:
    """Directory names get a trailing slash when `-F` is in effect."""
    if classify and node.is_directory:
        return f"{node.name}/"
    return node.name


def format_listing(nodes: Iterable[NodeBase], classify: bool = False) -> list[str]:
    """
    Format entries in regular `ls` style: one line, names separated by a space.

    Returns an empty list for an empty directory so nothing is printed.
    """
    names = [format_entry_name(node, classify) for node in nodes]
    if not names:
        return []
    return [" ".join(names)]


def format_long_listing(nodes: Iterable[NodeBase], classify: bool = False) -> list[str]:
    """Format entries in `ls -l` style: one line per entry, name last."""
    return [
        f"{node.long_listing()} {format_entry_name(node, classify)}"
        for node in nodes
    ]
