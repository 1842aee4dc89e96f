"""Tool data types.

Defines the catalog entry for a tool, the invocation handed to the
dispatcher, and the uniform result envelope every invocation produces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Schema definition for a tool, as advertised to protocol clients."""

    name: str
    description: str
    parameters_schema: dict[str, Any]

    @property
    def required(self) -> tuple[str, ...]:
        """Names of the required arguments, in declaration order."""
        return tuple(self.parameters_schema.get("required", ()))

    def defaults(self) -> dict[str, Any]:
        """Declared default values, keyed by argument name."""
        properties = self.parameters_schema.get("properties", {})
        return {
            key: prop["default"]
            for key, prop in properties.items()
            if "default" in prop
        }


@dataclass(frozen=True, slots=True)
class Invocation:
    """A request to run one named tool with an argument bag."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TextContent:
    """One text block of a result."""

    text: str
    type: str = "text"


@dataclass(frozen=True, slots=True)
class ResultEnvelope:
    """Result of one invocation.

    ``is_error`` is only set for failures the dispatcher could not
    handle itself; expected failures (bad arguments, backend errors,
    malformed decoder input) come back as ordinary text.
    """

    content: tuple[TextContent, ...]
    is_error: bool | None = None

    @classmethod
    def of_text(cls, text: str) -> ResultEnvelope:
        return cls(content=(TextContent(text=text),))

    @classmethod
    def error(cls, text: str) -> ResultEnvelope:
        return cls(content=(TextContent(text=text),), is_error=True)

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "content": [{"type": block.type, "text": block.text} for block in self.content],
        }
        if self.is_error is not None:
            data["isError"] = self.is_error
        return data
