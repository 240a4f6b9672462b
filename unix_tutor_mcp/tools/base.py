# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Base classes shared by every tool exposed through the MCP server."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

ToolCallArguments = dict[str, Any]


class ToolError(Exception):
    """Base class for tool errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message


@dataclass
class ToolExecResult:
    """Intermediate result of a tool execution."""

    output: str | None = None
    error: str | None = None
    error_code: int = 0
    # Set when the command asks the client to wipe its terminal.
    clear_screen: bool = False


@dataclass
class ToolParameter:
    """Tool parameter definition."""

    name: str
    type: str | list[str]
    description: str
    enum: list[str] | None = None
    items: dict[str, Any] | None = None
    required: bool = True


class Tool(ABC):
    """Base class for all tools."""

    def __init__(self, model_provider: str | None = None):
        self._model_provider = model_provider

    @abstractmethod
    def get_model_provider(self) -> str | None:
        pass

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    @abstractmethod
    def get_parameters(self) -> list[ToolParameter]:
        pass

    @abstractmethod
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        pass

    @property
    def name(self) -> str:
        return self.get_name()

    def get_input_schema(self) -> dict[str, Any]:
        """Get the input schema of the tool."""
        schema: dict[str, Any] = {"type": "object"}
        properties: dict[str, Any] = {}
        required: list[str] = []

        for param in self.get_parameters():
            param_schema: dict[str, Any] = {
                "type": param.type,
                "description": param.description,
            }
            if param.enum:
                param_schema["enum"] = param.enum
            if param.items:
                param_schema["items"] = param.items
            properties[param.name] = param_schema
            if param.required:
                required.append(param.name)

        schema["properties"] = properties
        if required:
            schema["required"] = required
        return schema
