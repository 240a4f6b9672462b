#!/usr/bin/env python3
"""
Unit tests for the MCP tool functions in server.py
"""

from unittest.mock import MagicMock

import pytest

from unix_tutor_mcp.server import get_system_prompt, reset_shell, session_id_for, shell


@pytest.fixture
def context(request):
    """Context of a client whose id is unique to the test"""
    ctx = MagicMock()
    ctx.client_id = f"client-{request.node.name}"
    return ctx


class TestShellTool:
    """Tests for the `shell` and `reset_shell` MCP tools"""

    @pytest.mark.asyncio
    async def test_success(self, context):
        result = await shell(context, "pwd")
        assert result == {
            "status": "success",
            "result": "/home/users/user/Documents",
            "cwd": "/home/users/user/Documents",
            "exit_code": 0,
            "clear_screen": False,
        }

    @pytest.mark.asyncio
    async def test_failure(self, context):
        result = await shell(context, "cd nowhere")
        assert result["status"] == "failure"
        assert result["exit_code"] == 1
        assert result["result"] == "The system cannot find the file specified."

    @pytest.mark.asyncio
    async def test_cwd_follows_cd(self, context):
        result = await shell(context, "cd Tests")
        assert result["cwd"].endswith("/Documents/Tests")

    @pytest.mark.asyncio
    async def test_clear_reaches_client(self, context):
        """`clear` tells the client to wipe its terminal"""
        result = await shell(context, "clear")
        assert result["status"] == "success"
        assert result["clear_screen"] is True
        assert result["result"] == ""

    @pytest.mark.asyncio
    async def test_reset(self, context):
        await shell(context, "rm -r Tests")
        result = await reset_shell(context)
        assert result["exit_code"] == 0
        listing = await shell(context, "ls")
        assert listing["result"] == "Tests"


def test_session_id_falls_back_to_default():
    ctx = MagicMock()
    ctx.client_id = None
    assert session_id_for(ctx) == "default"


def test_system_prompt():
    prompt = get_system_prompt()
    assert "Unix tutor" in prompt
    assert "shell" in prompt
