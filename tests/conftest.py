"""
Shared fixtures: a fresh lesson-tree session and a helper to run command lines on it.
"""

import pytest

from unix_tutor_mcp.shell.bootstrap import build_session
from unix_tutor_mcp.shell.processor import CommandProcessor


@pytest.fixture
def session():
    """Fresh session on the lesson tree, starting in ~/Documents"""
    return build_session()


@pytest.fixture
def processor():
    return CommandProcessor()


@pytest.fixture
def run(session, processor):
    """Runs one command line against the `session` fixture"""

    def _run(line: str):
        return processor.run(session, line)

    return _run


@pytest.fixture
def in_tests(session, run):
    """Session moved into ~/Documents/Tests"""
    run("cd Tests")
    return session
