"""
Process-wide singletons shared by the MCP tool functions.
"""

import logging
from functools import lru_cache

from unix_tutor_mcp.shell.processor import CommandProcessor
from unix_tutor_mcp.tools.shell_tool import ShellTool
from unix_tutor_mcp.utils.config import ServiceConfig
from unix_tutor_mcp.utils.session_manager import SessionManager

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """Settings read once from the environment and reused afterwards."""
    return ServiceConfig()


@lru_cache
def get_session_manager() -> SessionManager:
    """Returns the singleton SessionManager holding every client's shell."""
    logger.info("Initializing SessionManager singleton.")
    return SessionManager(get_base_config())


@lru_cache
def get_command_processor() -> CommandProcessor:
    logger.info("Initializing CommandProcessor singleton.")
    return CommandProcessor()


@lru_cache
def get_shell_tool_provider() -> ShellTool:
    """Returns a cached instance of the ShellTool."""
    logger.info("Initializing ShellTool singleton.")
    return ShellTool(processor=get_command_processor())
