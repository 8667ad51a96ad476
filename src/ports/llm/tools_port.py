"""
Port for exposing the surgical edit operations as LLM function-calling tools.

An LLM host lists the ``surgical.*`` tools, hands their JSON Schemas to the
model, and routes each tool call back through ``dispatch``.
"""

from abc import ABC, abstractmethod
from typing import TypedDict


class ToolSpec(TypedDict):
    """One ``surgical.*`` tool as advertised to the model."""

    name: str  # e.g. "surgical.edit"
    description: str
    parameters: dict[str, object]  # JSON Schema of the call arguments


class ToolsHandlerPort(ABC):
    """
    Port interface for the edit tool handler.

    Every tool maps to one edit use case; its reply is the JSON encoding of
    the resulting EditResult, so failed edits come back as data rather than
    exceptions.
    """

    @abstractmethod
    def available_tools(self) -> list[ToolSpec]:
        """
        List the edit tools, in the order they should be offered.

        Returns:
            Tool name, description and argument schema for each edit operation
        """
        pass

    @abstractmethod
    def dispatch(self, name: str, arguments: dict[str, object]) -> str:
        """
        Run one edit tool call.

        Args:
            name: Tool name, e.g. ``surgical.edit_lines``
            arguments: Decoded call arguments

        Returns:
            JSON text of the EditResult

        Raises:
            ValueError: If the tool name is unknown
            ToolError: If the arguments are invalid or the use case crashed
        """
        pass

    def tool_names(self) -> list[str]:
        """Names of every tool this handler can dispatch."""
        return [spec["name"] for spec in self.available_tools()]
