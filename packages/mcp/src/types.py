"""Data types for the Harmonic MCP tool layer.

Tool descriptors are static and immutable. Each one renders to the JSON
Schema advertised to the host and to a pydantic model used to validate
incoming arguments, so the two never drift apart.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, create_model


class ParameterType(str, Enum):
    """JSON types a tool parameter may take."""

    STRING = "string"
    INTEGER = "integer"


_PYTHON_TYPES: dict[ParameterType, type] = {
    ParameterType.STRING: str,
    ParameterType.INTEGER: int,
}


class ToolParameter(BaseModel):
    """A single named tool argument."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ParameterType
    description: str
    required: bool = False
    default: Any = None

    # Numeric bounds (integers only)
    minimum: int | None = None
    maximum: int | None = None

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": self.type.value,
            "description": self.description,
        }
        if self.default is not None:
            schema["default"] = self.default
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        return schema

    def field_definition(self) -> tuple[Any, Any]:
        """(annotation, FieldInfo) pair for ``pydantic.create_model``."""
        python_type = _PYTHON_TYPES[self.type]
        constraints: dict[str, Any] = {"description": self.description}
        if self.minimum is not None:
            constraints["ge"] = self.minimum
        if self.maximum is not None:
            constraints["le"] = self.maximum

        if self.required:
            if self.type == ParameterType.STRING:
                constraints["min_length"] = 1
            return python_type, Field(..., **constraints)
        return python_type | None, Field(default=self.default, **constraints)


class ToolDescriptor(BaseModel):
    """A named, schema-described operation exposed to the host."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: tuple[ToolParameter, ...] = ()
    requires_credential: bool = True

    _input_model: type[BaseModel] | None = PrivateAttr(default=None)

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's arguments."""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }

    def input_model(self) -> type[BaseModel]:
        """Pydantic model that validates an argument bag for this tool."""
        if self._input_model is None:
            fields = {p.name: p.field_definition() for p in self.parameters}
            model_name = "".join(part.title() for part in self.name.split("_")) + "Input"
            self._input_model = create_model(
                model_name,
                __config__=ConfigDict(extra="ignore"),
                **fields,
            )
        return self._input_model

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


class ToolInvocation(BaseModel):
    """A tool call as delivered by the host."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    """A single text block in a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Content envelope returned to the host: exactly one text block."""

    content: list[TextContent]

    @classmethod
    def from_text(cls, text: str) -> ToolResult:
        return cls(content=[TextContent(text=text)])

    @classmethod
    def from_json(cls, data: Any) -> ToolResult:
        """Pretty-print an upstream response."""
        return cls.from_text(json.dumps(data, indent=2, ensure_ascii=False))

    @property
    def text(self) -> str:
        return self.content[0].text


class ProbeOutcome(BaseModel):
    """Result of requesting one candidate path during a connection test."""

    path: str
    outcome: Literal["success", "failed"]
    detail: Any = None


class DispatchEvent(BaseModel):
    """One observed dispatch: which tool, how it ended, how long it took."""

    tool_name: str
    outcome: str = Field(..., description="'success' or the error code")
    latency_ms: float
