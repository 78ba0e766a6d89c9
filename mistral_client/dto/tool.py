"""
Pydantic DTOs for function calling.

Purpose
-------
- ``Tool`` and friends describe functions offered to the model in a chat
  request. ``Tool.new`` builds the JSON-schema ``parameters`` object from a
  flat list of ``ToolFunctionParameter`` (every parameter is required).
- ``ToolCall`` is what the model sends back when it wants a function run;
  ``arguments`` is the raw JSON string handed to the registered handler.

Pure data containers: no I/O, validation errors surface as
``pydantic.ValidationError``.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ToolType(str, Enum):
    FUNCTION = "function"


class ToolChoice(str, Enum):
    """Specifies if and how the model may call functions."""

    ANY = "any"
    AUTO = "auto"
    NONE = "none"


class ToolFunctionParametersType(str, Enum):
    OBJECT = "object"


class ToolFunctionParameterType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"


class ToolCallFunction(BaseModel):
    """Function name and JSON-encoded arguments requested by the model."""

    name: str
    arguments: str = "{}"

    @field_validator("arguments", mode="before")
    @classmethod
    def _encode_arguments(cls, value: Any) -> Any:
        # Some deployments send the arguments object already decoded.
        if isinstance(value, (dict, list)):
            return json.dumps(value)
        return value


class ToolCall(BaseModel):
    id: Optional[str] = None
    function: ToolCallFunction


class ToolFunctionParameter(BaseModel):
    """One named parameter of a tool function, as accepted by ``Tool.new``."""

    name: str
    description: str
    type: ToolFunctionParameterType = ToolFunctionParameterType.STRING


class ToolFunctionParameterProperty(BaseModel):
    type: ToolFunctionParameterType
    description: str


class ToolFunctionParameters(BaseModel):
    type: ToolFunctionParametersType = ToolFunctionParametersType.OBJECT
    properties: Dict[str, ToolFunctionParameterProperty] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)


class ToolFunction(BaseModel):
    name: str
    description: str
    parameters: ToolFunctionParameters


class Tool(BaseModel):
    """A function offered to the model."""

    type: ToolType = ToolType.FUNCTION
    function: ToolFunction

    @classmethod
    def new(
        cls,
        function_name: str,
        function_description: str,
        function_parameters: List[ToolFunctionParameter],
    ) -> "Tool":
        """Build a tool whose parameters are all required properties.

        Parameters
        ----------
        function_name:
            Name the model will use in its ``ToolCall``.
        function_description:
            Natural-language description shown to the model.
        function_parameters:
            Flat parameter list; order is preserved in ``required``.
        """
        properties = {
            p.name: ToolFunctionParameterProperty(type=p.type, description=p.description)
            for p in function_parameters
        }
        parameters = ToolFunctionParameters(properties=properties, required=list(properties))
        return cls(
            function=ToolFunction(
                name=function_name,
                description=function_description,
                parameters=parameters,
            )
        )


__all__ = [
    "ToolType",
    "ToolChoice",
    "ToolFunctionParametersType",
    "ToolFunctionParameterType",
    "ToolCallFunction",
    "ToolCall",
    "ToolFunctionParameter",
    "ToolFunctionParameterProperty",
    "ToolFunctionParameters",
    "ToolFunction",
    "Tool",
]
