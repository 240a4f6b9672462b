#!/usr/bin/env python3
"""
Unit tests for shell/navigation.py: pwd, cd, ls and clear
"""

from unix_tutor_mcp.shell.base import CommandStatus, ErrorKind

HOME = "/home/users/user"
DOCUMENTS = f"{HOME}/Documents"
TESTS = f"{DOCUMENTS}/Tests"


class TestPwdAndCd:
    """Tests for moving around the tree"""

    def test_pwd_starts_in_documents(self, run):
        assert run("pwd").lines == [DOCUMENTS]

    def test_cd_into_child(self, session, run):
        result = run("cd Tests")
        assert result.ok
        assert result.lines == []
        assert session.cwd_path == TESTS
        assert run("pwd").lines == [TESTS]

    def test_cd_without_argument_goes_home(self, session, run):
        run("cd /bin")
        run("cd")
        assert session.cwd_path == HOME

    def test_cd_up_and_root(self, session, run):
        run("cd ..")
        assert session.cwd_path == HOME
        run("cd /")
        assert session.cwd_path == "/"
        run("cd ..")
        assert session.cwd_path == "/"

    def test_cd_missing(self, session, run):
        """A failed cd leaves the working directory alone"""
        result = run("cd nowhere")
        assert result.status == CommandStatus.FAILURE
        assert result.lines == ["The system cannot find the file specified."]
        assert result.errors == [ErrorKind.NOT_FOUND]
        assert session.cwd_path == DOCUMENTS

    def test_cd_into_file(self, session, run):
        result = run("cd Tests/test1.txt")
        assert result.lines == ["cd: Tests/test1.txt: Not a directory"]
        assert result.errors == [ErrorKind.NOT_A_DIRECTORY]
        assert session.cwd_path == DOCUMENTS


class TestLs:
    """Tests for directory listings"""

    def test_plain(self, run):
        assert run("ls").lines == ["Tests"]

    def test_classify(self, run):
        assert run("ls -F").lines == ["Tests/"]

    def test_hides_dot_files(self, in_tests, run):
        assert run("ls").lines == ["test1.txt test2.txt test3.txt"]

    def test_all(self, in_tests, run):
        assert run("ls -a").lines == [".test4.txt test1.txt test2.txt test3.txt"]

    def test_long(self, in_tests, run):
        lines = run("ls -l").lines
        test1 = in_tests.store.find_child(in_tests.cwd, "test1.txt")
        assert len(lines) == 3
        assert lines[0] == f"{test1.long_listing()} test1.txt"
        assert lines[0].startswith("-rw-r--r--\t1\tuser\tgroup\t")

    def test_long_all_separate_flags(self, in_tests, run):
        assert len(run("ls -l -a").lines) == 4
        assert run("ls -la").lines == run("ls -l -a").lines

    def test_long_classify_directory(self, run):
        (line,) = run("ls -lF").lines
        assert line.startswith("drwxr-xr-x")
        assert line.endswith(" Tests/")

    def test_empty_directory_prints_nothing(self, run):
        run("mkdir empty")
        run("cd empty")
        result = run("ls -la")
        assert result.ok
        assert result.lines == []

    def test_operand_without_dash(self, run):
        result = run("ls Tests")
        assert result.status == CommandStatus.FAILURE
        assert result.lines == ["ls: cannot access Tests: No such file or directory"]


def test_clear_requests_screen_clear(run):
    result = run("clear")
    assert result.ok
    assert result.clear_screen
    assert result.lines == []
