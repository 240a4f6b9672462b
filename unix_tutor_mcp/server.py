"""
FastMCP application: the `shell` and `reset_shell` tools and the tutor prompt.
"""

import logging
from typing import Any

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from unix_tutor_mcp.models.session import ShellSession
from unix_tutor_mcp.prompts import get_all_prompts
from unix_tutor_mcp.tools.base import ToolExecResult
from unix_tutor_mcp.utils.config import ServiceConfig
from unix_tutor_mcp.utils.dependencies import (
    get_base_config,
    get_session_manager,
    get_shell_tool_provider,
)

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"


def cors_middleware() -> Middleware:
    # Browser-based MCP clients connect from arbitrary origins.
    return Middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class TutorFastMCP(FastMCP):
    """FastMCP whose HTTP transports accept cross-origin requests."""

    @staticmethod
    def _with_cors(app: Starlette) -> Starlette:
        app.user_middleware.insert(0, cors_middleware())
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        return self._with_cors(super().sse_app(mount_path))

    def streamable_http_app(self) -> Starlette:
        return self._with_cors(super().streamable_http_app())


def build_server(config: ServiceConfig) -> TutorFastMCP:
    """Create the server bound to the configured host and port."""
    logger.info(
        "Creating unix-tutor-mcp server",
        extra={"host": config.MCP_HOST, "port": config.MCP_PORT},
    )
    return TutorFastMCP("unix-tutor-mcp", host=config.MCP_HOST, port=config.MCP_PORT)


def session_id_for(context: Context) -> str:
    """Each MCP client gets its own tree; clients without an id share the default one."""
    try:
        return context.client_id or DEFAULT_SESSION_ID
    except ValueError:
        # No active request, e.g. when the tool function is called directly.
        return DEFAULT_SESSION_ID


def shell_response(result: ToolExecResult, session: ShellSession) -> dict[str, Any]:
    """Shape a tool result for the MCP client. Negative codes are internal errors."""
    if result.error_code < 0:
        return {"status": "error", "error": result.error, "exit_code": result.error_code}
    return {
        "status": "success" if result.error_code == 0 else "failure",
        "result": result.output,
        "cwd": session.cwd_path,
        "exit_code": result.error_code,
        "clear_screen": result.clear_screen,
    }


# Imported by main.py, which runs the app with this configuration.
server_config = get_base_config()
mcp_app = build_server(server_config)


@mcp_app.prompt(title="Unix tutor system prompt")
def get_system_prompt() -> str:
    """System prompt for an agent teaching with the practice shell."""
    return get_all_prompts()["tutor-system-prompt"]


@mcp_app.tool()
async def shell(context: Context, command: str) -> dict[str, Any]:
    """
    Runs one command line in the caller's practice Unix shell.

    Args:
        command: The command line to run, e.g. 'ls -la' or 'cat notes.txt'.

    Returns:
        The output, the working directory afterwards, an exit code
        (0 success, 1 failure, 2 file quota exceeded) and whether the
        terminal should be cleared.
    """
    session_id = session_id_for(context)
    logger.info(f"[{session_id}] $ {command}")
    try:
        session = get_session_manager().get_session(session_id)
        result = await get_shell_tool_provider().execute({"command": command, "_session": session})
        return shell_response(result, session)
    except Exception as e:
        logger.error(f"Error running {command!r}: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


@mcp_app.tool(name="reset_shell")
async def reset_shell(context: Context) -> dict[str, Any]:
    """
    Throws away the caller's changes and restores the starting lesson files.

    Returns:
        The working directory of the fresh shell.
    """
    session_id = session_id_for(context)
    try:
        session = get_session_manager().reset_session(session_id)
    except Exception as e:
        logger.error(f"Error resetting shell {session_id!r}: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}
    return {"status": "success", "result": f"Shell reset. CWD is {session.cwd_path}", "exit_code": 0}
