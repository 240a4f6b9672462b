"""Result and error types shared by every shell command handler."""

from enum import StrEnum

from pydantic import BaseModel, Field

from unix_tutor_mcp.tools.base import ToolError


class CommandStatus(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"
    QUOTA_EXCEEDED = "quota_exceeded"


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    NOT_A_DIRECTORY = "not_a_directory"
    IS_A_DIRECTORY = "is_a_directory"
    INVALID_OPTION = "invalid_option"
    MISSING_OPERAND = "missing_operand"
    SAME_FILE = "same_file"
    QUOTA_EXCEEDED = "quota_exceeded"
    ALREADY_EXISTS = "already_exists"
    INVALID_ARGUMENT = "invalid_argument"
    PROTECTED = "protected"
    BUSY = "busy"
    UNSUPPORTED = "unsupported"
    COMMAND_NOT_FOUND = "command_not_found"


class ShellError(ToolError):
    """A recoverable command failure, reported to the user as one line."""

    def __init__(self, message: str, kind: ErrorKind):
        super().__init__(message)
        self.kind = kind


class QuotaExceededError(ShellError):
    """Raised before a creation that would go over the session quota."""

    def __init__(self, command: str):
        super().__init__(
            f"{command}: You have exceeded the maximum amount of files "
            "that you can create with this terminal.",
            ErrorKind.QUOTA_EXCEEDED,
        )


class CommandResult(BaseModel):
    """Lines produced by one command and the status it finished with."""

    lines: list[str] = Field(default_factory=list)
    status: CommandStatus = CommandStatus.SUCCESS
    errors: list[ErrorKind] = Field(default_factory=list)
    clear_screen: bool = False

    @property
    def ok(self) -> bool:
        return self.status == CommandStatus.SUCCESS

    @property
    def output(self) -> str:
        return "\n".join(self.lines)

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def fail(self, error: ShellError) -> "CommandResult":
        """Record a failure and keep going. Quota exhaustion wins over plain failure."""
        self.lines.append(error.message)
        self.errors.append(error.kind)
        if error.kind == ErrorKind.QUOTA_EXCEEDED:
            self.status = CommandStatus.QUOTA_EXCEEDED
        elif self.status == CommandStatus.SUCCESS:
            self.status = CommandStatus.FAILURE
        return self
