# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

import logging
from typing_extensions import override

from unix_tutor_mcp.models.session import ShellSession
from unix_tutor_mcp.shell.base import CommandStatus
from unix_tutor_mcp.shell.processor import CommandProcessor

from .base import Tool, ToolCallArguments, ToolError, ToolExecResult, ToolParameter

logger = logging.getLogger(__name__)

# error_code reported for each command status
STATUS_CODES = {
    CommandStatus.SUCCESS: 0,
    CommandStatus.FAILURE: 1,
    CommandStatus.QUOTA_EXCEEDED: 2,
}


class ShellTool(Tool):
    """
    Tool for running one command line in the session's virtual Unix shell.
    Nothing touches the real filesystem: every command works on the
    in-memory lesson tree that belongs to the session.
    """

    def __init__(self, processor: CommandProcessor | None = None, model_provider: str | None = None) -> None:
        super().__init__(model_provider)
        self._processor = processor or CommandProcessor()

    @override
    def get_model_provider(self) -> str | None:
        return self._model_provider

    @override
    def get_name(self) -> str:
        return "shell"

    @override
    def get_description(self) -> str:
        return f"""Run a command in a practice Unix shell backed by an in-memory filesystem.
Supported commands: {', '.join(self._processor.commands)}.
* One command per call; `cat a b > c` and `cat a >> c` are the only redirections.
* `grep` matches literal text, not regular expressions.
* The number of files and directories you can create in one session is limited.
"""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="command",
                type="string",
                description="The full command line to run, e.g. 'ls -la' or 'mkdir -p notes/today'.",
                required=True,
            ),
        ]

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        session = arguments.get("_session")
        if not isinstance(session, ShellSession):
            return ToolExecResult(
                error="ShellSession not found in arguments. This is an internal server error.",
                error_code=-1,
            )

        command = arguments.get("command")
        if not isinstance(command, str):
            return ToolExecResult(error="Command must be a string.", error_code=-1)

        try:
            return self._run_handler(session, command)
        except ToolError as e:
            logger.error(f"Tool error in {self.get_name()}: {e}")
            return ToolExecResult(error=str(e), error_code=-1)
        except Exception as e:
            logger.error(f"Unexpected error in {self.get_name()}: {e}", exc_info=True)
            return ToolExecResult(error=f"Unexpected error: {str(e)}", error_code=-1)

    def _run_handler(self, session: ShellSession, command: str) -> ToolExecResult:
        result = self._processor.run(session, command)
        error = None if result.ok else result.output
        return ToolExecResult(
            output=result.output,
            error=error,
            error_code=STATUS_CODES[result.status],
            clear_screen=result.clear_screen,
        )
