"""Settings for the tutor server, read from the process environment."""

from pydantic import Field
from pydantic_settings import BaseSettings


class ServiceConfig(BaseSettings):
    """
    Server and practice-shell settings.

    Values come from environment variables; `main.py` loads any `.env` file
    into the environment before the first instance is built.
    """

    # "stdio", "sse" or "streamable-http"
    MCP_TRANSPORT: str = "stdio"
    # Bind address and port, only used by the HTTP transports.
    MCP_HOST: str = "0.0.0.0"
    MCP_PORT: int = 8660

    LOG_LEVEL: str = "INFO"

    # How many files and directories one session may create before it is cut off.
    SHELL_MAX_FILES: int = Field(default=20, ge=0)
    # Owner and group shown by `ls -l` for every node of a new session.
    SHELL_OWNER: str = "user"
    SHELL_GROUP: str = "group"

    class Config:
        """Pydantic configuration settings."""

        # Unrelated variables in the environment are not an error.
        extra = "ignore"
