import logging

from unix_tutor_mcp.models.session import ShellSession
from unix_tutor_mcp.shell.bootstrap import build_session
from unix_tutor_mcp.utils.config import ServiceConfig

logger = logging.getLogger(__name__)


class SessionManager:
    """Manages shell sessions for all connected clients."""

    def __init__(self, config: ServiceConfig | None = None) -> None:
        self._config = config or ServiceConfig()
        # Simple dict as an in-process session storage.
        # Sessions are never persisted; a restart gives every client a fresh tree.
        self._storage: dict[str, ShellSession] = {}

    def _new_session(self) -> ShellSession:
        return build_session(
            max_files=self._config.SHELL_MAX_FILES,
            owner=self._config.SHELL_OWNER,
            group=self._config.SHELL_GROUP,
        )

    def get_session(self, session_id: str = "default") -> ShellSession:
        """Returns or creates the session for a given client."""
        if session_id not in self._storage:
            logger.info(f"Creating shell session '{session_id}'")
            self._storage[session_id] = self._new_session()
        return self._storage[session_id]

    def reset_session(self, session_id: str = "default") -> ShellSession:
        """Throws away the client's tree and starts over on the lesson tree."""
        logger.info(f"Resetting shell session '{session_id}'")
        self._storage[session_id] = self._new_session()
        return self._storage[session_id]
