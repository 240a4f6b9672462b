from pydantic import BaseModel, Field

from unix_tutor_mcp.models.node import DEFAULT_GROUP, DEFAULT_OWNER, DirectoryNode, NodeId, NodeStore


class ShellSession(BaseModel):
    """Stores the shell state for a single session."""

    store: NodeStore
    root_id: NodeId
    home_id: NodeId
    cwd_id: NodeId
    cwd_path: str = "/"
    files_created: int = 0
    max_files: int = Field(default=20, ge=0)
    owner: str = DEFAULT_OWNER
    group: str = DEFAULT_GROUP

    def model_post_init(self, __context) -> None:
        self.cwd_path = self.cwd.path

    @property
    def root(self) -> DirectoryNode:
        return self.store.get(self.root_id)

    @property
    def home(self) -> DirectoryNode:
        return self.store.get(self.home_id)

    @property
    def cwd(self) -> DirectoryNode:
        return self.store.get(self.cwd_id)

    def change_directory(self, node: DirectoryNode) -> None:
        self.cwd_id = node.id
        self.cwd_path = node.path

    def sync_cwd_path(self) -> None:
        """Re-read the cached path after a rename or move of an ancestor."""
        self.cwd_path = self.cwd.path

    def has_quota(self) -> bool:
        return self.files_created < self.max_files

    def record_creation(self) -> None:
        self.files_created += 1
