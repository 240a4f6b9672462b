"""Node model and arena store for the in-memory filesystem."""

import logging
from datetime import datetime
from typing import Annotated, ClassVar, Iterator, Literal, Self

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

NodeId = int

DEFAULT_FILE_MODE = "644"
DEFAULT_DIR_MODE = "755"
DEFAULT_OWNER = "user"
DEFAULT_GROUP = "group"

# Names that the path resolver gives a special meaning to.
RESERVED_NAMES = frozenset({"", ".", "..", "~"})
OCTAL_DIGITS = "01234567"


def mode_to_mask(mode: str) -> str | None:
    """
    Expand a 3-digit octal mode into a 9-character rwx mask.

    Each digit is decomposed into its three binary bits (read, write, execute).
    A set bit keeps its letter and a cleared bit becomes a dash, so "750"
    gives "rwxr-x---".

    Returns:
        The mask, or None if the mode is not exactly three digits in 0-7.
    """
    if not isinstance(mode, str) or len(mode) != 3 or any(c not in OCTAL_DIGITS for c in mode):
        return None

    mask = ""
    for digit in mode:
        bits = format(int(digit), "03b")
        mask += "".join(flag if bit == "1" else "-" for flag, bit in zip("rwx", bits))
    return mask


def is_valid_name(name: str) -> bool:
    """A node name may not be empty, contain a slash or shadow a resolver token."""
    return name not in RESERVED_NAMES and "/" not in name


def join_path(parent_path: str, name: str) -> str:
    if parent_path == "/":
        return f"/{name}"
    return f"{parent_path}/{name}"


def timestamp(now: datetime | None = None) -> str:
    """Format a modification time the way `ls -l` shows it, e.g. "Mar 7 14:20"."""
    now = now or datetime.now()
    return f"{now:%b} {now.day} {now:%H:%M}"


class NodeBase(BaseModel):
    """Metadata shared by files and directories."""

    id: NodeId
    name: str
    mode: str = DEFAULT_FILE_MODE
    owner: str = DEFAULT_OWNER
    group: str = DEFAULT_GROUP
    path: str = ""
    parent: NodeId | None = None
    last_modified: str = ""
    hard_links: int = 1

    type_marker: ClassVar[str] = "-"

    @property
    def permissions(self) -> str:
        """Type marker followed by the rwx mask, e.g. "drwxr-xr-x"."""
        return self.type_marker + (mode_to_mask(self.mode) or "---------")

    @property
    def is_directory(self) -> bool:
        return False

    def set_permissions(self, mode: str) -> Self:
        # Invalid modes leave the previous permissions in place.
        if mode_to_mask(mode) is None:
            logger.debug(f"Ignoring invalid mode {mode!r} for {self.path or self.name}")
            return self
        self.mode = mode
        return self

    def set_ownership(self, owner: str, group: str) -> Self:
        self.owner = owner
        self.group = group
        return self

    def set_path(self, path: str) -> Self:
        self.path = path
        return self

    def set_parent(self, parent: NodeId | None) -> Self:
        self.parent = parent
        return self

    def set_last_modified(self, last_modified: str) -> Self:
        self.last_modified = last_modified
        return self

    def long_listing(self) -> str:
        """
        Long listing columns without the name.

        The name is appended by the caller because directories and files
        format it differently.
        """
        return "\t".join(
            [
                self.permissions,
                str(self.hard_links),
                self.owner,
                self.group,
                str(self.size),
                self.last_modified,
            ]
        )

    @property
    def size(self) -> int:
        return 0


class FileNode(NodeBase):
    """A regular file. Holds content, never children."""

    kind: Literal["file"] = "file"
    content: str = ""
    byte_size: int = Field(default=0, ge=0)

    @property
    def size(self) -> int:
        return self.byte_size

    def set_content(self, content: str) -> Self:
        self.content = content
        self.byte_size = len(content.encode("utf-8"))
        return self


class DirectoryNode(NodeBase):
    """A directory. Owns the ids of its children, kept sorted by name."""

    kind: Literal["directory"] = "directory"
    mode: str = DEFAULT_DIR_MODE
    children: list[NodeId] = Field(default_factory=list)

    type_marker: ClassVar[str] = "d"

    @property
    def is_directory(self) -> bool:
        return True


Node = Annotated[FileNode | DirectoryNode, Field(discriminator="kind")]


class NodeStore(BaseModel):
    """
    Arena that owns every node of one filesystem tree.

    Nodes refer to each other only by id: a directory lists the ids of its
    children and a node keeps the id of its parent. Removing a node from the
    store removes its whole subtree.
    """

    nodes: dict[NodeId, Node] = Field(default_factory=dict)
    next_id: NodeId = 1

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, node_id: NodeId) -> FileNode | DirectoryNode:
        return self.nodes[node_id]

    def _allocate_id(self) -> NodeId:
        node_id = self.next_id
        self.next_id += 1
        return node_id

    def create_file(
        self,
        name: str,
        *,
        mode: str = DEFAULT_FILE_MODE,
        owner: str = DEFAULT_OWNER,
        group: str = DEFAULT_GROUP,
        content: str = "",
        last_modified: str | None = None,
    ) -> FileNode:
        """Create a detached file node with every field set."""
        node = FileNode(
            id=self._allocate_id(),
            name=name,
            owner=owner,
            group=group,
            path=join_path("/", name),
            last_modified=last_modified if last_modified is not None else timestamp(),
        )
        node.set_permissions(mode).set_content(content)
        self.nodes[node.id] = node
        return node

    def create_directory(
        self,
        name: str,
        *,
        mode: str = DEFAULT_DIR_MODE,
        owner: str = DEFAULT_OWNER,
        group: str = DEFAULT_GROUP,
        last_modified: str | None = None,
    ) -> DirectoryNode:
        """Create a detached directory node with every field set."""
        node = DirectoryNode(
            id=self._allocate_id(),
            name=name,
            owner=owner,
            group=group,
            path="/" if name == "/" else join_path("/", name),
            last_modified=last_modified if last_modified is not None else timestamp(),
        )
        node.set_permissions(mode)
        self.nodes[node.id] = node
        return node

    def parent_of(self, node: NodeBase) -> DirectoryNode | None:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def children_of(self, node: NodeBase) -> list[FileNode | DirectoryNode]:
        if not isinstance(node, DirectoryNode):
            return []
        return [self.nodes[child_id] for child_id in node.children]

    def find_child(self, directory: NodeBase, name: str) -> FileNode | DirectoryNode | None:
        """Exact, case-sensitive lookup of a direct child."""
        for child in self.children_of(directory):
            if child.name == name:
                return child
        return None

    def add_child(self, directory: NodeBase, node: NodeBase) -> bool:
        """
        Attach a detached node under a directory.

        Returns:
            False if the target is not a directory or a sibling already has
            the same name, True otherwise.
        """
        if not isinstance(directory, DirectoryNode):
            return False
        if self.find_child(directory, node.name) is not None:
            return False

        node.set_parent(directory.id)
        directory.children.append(node.id)
        self._sort_children(directory)
        self._refresh_paths(node)
        return True

    def detach(self, node: NodeBase) -> None:
        """Unlink a node from its parent. The node and its subtree stay in the store."""
        parent = self.parent_of(node)
        if parent is not None:
            parent.children.remove(node.id)
        node.set_parent(None)

    def rename(self, node: NodeBase, new_name: str) -> None:
        node.name = new_name
        parent = self.parent_of(node)
        if parent is not None:
            self._sort_children(parent)
            self._refresh_paths(node)
        else:
            node.set_path(join_path("/", new_name))

    def remove(self, node: NodeBase) -> int:
        """
        Detach a node and purge it and all of its descendants from the store.

        Returns:
            The number of nodes purged.
        """
        self.detach(node)
        purged = 0
        for descendant in list(self.walk(node)):
            del self.nodes[descendant.id]
            purged += 1
        logger.debug(f"Purged {purged} node(s) rooted at {node.path}")
        return purged

    def walk(self, node: NodeBase) -> Iterator[FileNode | DirectoryNode]:
        """Yield a node and every descendant, depth first."""
        yield node
        for child in self.children_of(node):
            yield from self.walk(child)

    def is_ancestor(self, ancestor: NodeBase, node: NodeBase) -> bool:
        """True if `ancestor` is `node` or one of its parents."""
        current: NodeBase | None = node
        while current is not None:
            if current.id == ancestor.id:
                return True
            current = self.parent_of(current)
        return False

    def _sort_children(self, directory: DirectoryNode) -> None:
        directory.children.sort(key=lambda child_id: self.nodes[child_id].name)

    def _refresh_paths(self, node: NodeBase) -> None:
        parent = self.parent_of(node)
        if parent is not None:
            node.set_path(join_path(parent.path, node.name))
        for child in self.children_of(node):
            self._refresh_paths(child)
