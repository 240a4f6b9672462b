"""
Command-line entry point: `unix-tutor-mcp`.

Loads `.env`, sets up logging and hands control to the MCP server.
"""

import logging
import sys

from dotenv import load_dotenv

from unix_tutor_mcp.utils.config import ServiceConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    # stdout carries the MCP protocol when running over stdio.
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def setup_environment() -> bool:
    """
    Populate the environment from `.env` and configure logging.

    Returns:
        False if the settings in the environment do not validate.
    """
    load_dotenv()
    try:
        config = ServiceConfig()
    except ValueError as e:
        configure_logging("INFO")
        logging.critical(f"Invalid configuration: {e}")
        return False

    configure_logging(config.LOG_LEVEL)
    logging.debug("Logging configured at %s", config.LOG_LEVEL)
    return True


def run_server() -> None:
    if not setup_environment():
        sys.exit(1)

    # The server module reads its settings at import time, so it is imported
    # only once the environment is in place.
    from .server import mcp_app, server_config

    logger = logging.getLogger(__name__)
    logger.info(
        "Unix tutor shell: transport=%s, quota=%s, owner=%s:%s",
        server_config.MCP_TRANSPORT,
        server_config.SHELL_MAX_FILES,
        server_config.SHELL_OWNER,
        server_config.SHELL_GROUP,
    )
    if server_config.MCP_TRANSPORT != "stdio":
        logger.info("Listening on %s:%s", server_config.MCP_HOST, server_config.MCP_PORT)

    mcp_app.run(transport=server_config.MCP_TRANSPORT)


if __name__ == "__main__":
    run_server()
