#!/usr/bin/env python3
"""
Unit tests for shell/processor.py
"""

import pytest

from unix_tutor_mcp.shell.base import CommandResult, CommandStatus, ErrorKind, ShellError
from unix_tutor_mcp.shell.bootstrap import build_session
from unix_tutor_mcp.shell.processor import COMMAND_HANDLERS, CommandProcessor, split_command
from unix_tutor_mcp.tools.utils.constants import PACKAGE_MANAGER_MESSAGE, UNSUPPORTED_MESSAGE


@pytest.mark.parametrize(
    "line, expected",
    [
        ("", ("", "")),
        ("   ", ("", "")),
        ("pwd", ("pwd", "")),
        ("  ls   -la  ", ("ls", "-la")),
        ("cat a > b", ("cat", "a > b")),
    ],
)
def test_split_command(line, expected):
    assert split_command(line) == expected


class TestDispatch:
    """Tests for routing a line to its handler"""

    def test_empty_line(self, run):
        result = run("   ")
        assert result.ok
        assert result.lines == []

    def test_every_command_is_registered(self, processor):
        assert processor.commands == sorted(
            ["cat", "cd", "chmod", "clear", "cp", "grep", "ls", "mkdir", "mv", "pwd", "rm", "touch"]
        )

    @pytest.mark.parametrize("command", ["vim notes.txt", "man ls", "ping localhost", "tar -xf a.tar"])
    def test_unsupported(self, run, command):
        result = run(command)
        assert result.status == CommandStatus.FAILURE
        assert result.lines == [UNSUPPORTED_MESSAGE]
        assert result.errors == [ErrorKind.UNSUPPORTED]

    @pytest.mark.parametrize("command", ["apt install git", "yum update", "dpkg -i x.deb"])
    def test_package_managers(self, run, command):
        assert run(command).lines == [PACKAGE_MANAGER_MESSAGE]

    def test_unknown(self, run):
        result = run("frobnicate now")
        assert result.lines == ["'frobnicate' command not found"]
        assert result.errors == [ErrorKind.COMMAND_NOT_FOUND]

    def test_commands_are_case_sensitive(self, run):
        assert run("LS").lines == ["'LS' command not found"]

    def test_touch_refused_when_quota_spent(self):
        """touch is refused up front, even for paths that already exist"""
        session = build_session(max_files=0)
        result = CommandProcessor().run(session, "touch Tests/test1.txt")
        assert result.status == CommandStatus.QUOTA_EXCEEDED
        assert result.errors == [ErrorKind.QUOTA_EXCEEDED]

    def test_custom_handlers(self, session):
        def hello(session, args):
            return CommandResult(lines=[f"hello {args}"])

        processor = CommandProcessor({**COMMAND_HANDLERS, "hello": hello})
        assert processor.run(session, "hello world").lines == ["hello world"]

    def test_handler_errors_become_results(self, session):
        def broken(session, args):
            raise ShellError("broken: nope", ErrorKind.INVALID_ARGUMENT)

        result = CommandProcessor({"broken": broken}).run(session, "broken")
        assert result.status == CommandStatus.FAILURE
        assert result.lines == ["broken: nope"]


class TestLessonScenario:
    """A whole beginner exercise run against one session"""

    def test_walkthrough(self, session, run):
        assert run("cd Tests").ok
        assert run("ls").output == "test1.txt test2.txt test3.txt"
        assert run("mkdir backup").ok
        assert run("cp test1.txt backup").ok
        assert run("mv test2.txt backup/second.txt").ok
        assert run("cd backup").ok
        assert run("ls").output == "second.txt test1.txt"
        assert run("grep test second.txt").output == "test2: test 3, 2, 1"
        assert run("cd ..").ok
        assert run("rm -r backup").ok
        assert run("ls").output == "test1.txt test3.txt"
        assert session.files_created == 2
        assert session.cwd_path == "/home/users/user/Documents/Tests"
