"""JSON schema generation and pydantic argument models for MCP tool parameters."""

from typing import Any, Dict, List, Literal, Optional, Tuple, Type

from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, ValidationError, create_model
)

from mcp_tool.mcp_tool_definition import MCPToolDefinition
from mcp_tool.mcp_tool_exceptions import MCPToolValidationError
from mcp_tool.mcp_tool_parameter import MCPToolParameter


_SCALAR_TYPES: Dict[str, Any] = {
    "string": StrictStr,
    "integer": StrictInt,
    "number": StrictFloat,
    "boolean": StrictBool
}


def _format_parameter(param: MCPToolParameter) -> Dict[str, Any]:
    """
    Convert a parameter definition to a JSON schema fragment.

    Args:
        param: Parameter definition

    Returns:
        JSON schema for the parameter
    """
    schema: Dict[str, Any] = {
        "type": param.type,
        "description": param.description
    }
    if param.enum:
        schema["enum"] = param.enum

    if param.minimum is not None:
        schema["minimum"] = param.minimum

    if param.type == "array" and param.items is not None:
        schema["items"] = _format_parameter(param.items)

    if param.type == "object" and param.properties is not None:
        schema.update(_format_object(list(param.properties.values())))

    return schema


def _format_object(parameters: List[MCPToolParameter]) -> Dict[str, Any]:
    properties: Dict[str, Any] = {}
    required = []

    for param in parameters:
        properties[param.name] = _format_parameter(param)
        if param.required:
            required.append(param.name)

    return {
        "properties": properties,
        "required": required,
        "additionalProperties": False
    }


def build_input_schema(definition: MCPToolDefinition) -> Dict[str, Any]:
    """
    Build the JSON schema describing a tool's arguments object.

    Args:
        definition: Tool definition

    Returns:
        JSON schema of type "object"
    """
    schema: Dict[str, Any] = {"type": "object"}
    schema.update(_format_object(definition.parameters))
    return schema


def _annotation(param: MCPToolParameter, model_name: str) -> Any:
    if param.enum:
        return Literal[tuple(param.enum)]

    if param.type in _SCALAR_TYPES:
        return _SCALAR_TYPES[param.type]

    if param.type == "array":
        if param.items is None:
            return List[Any]

        return List[_annotation(param.items, f"{model_name}_{param.name}")]  # type: ignore[misc]

    if param.type == "object":
        if param.properties is None:
            return Dict[str, Any]

        return _build_model(f"{model_name}_{param.name}", list(param.properties.values()))

    raise ValueError(f"Unsupported parameter type '{param.type}' for '{param.name}'")


def _build_model(model_name: str, parameters: List[MCPToolParameter]) -> Type[BaseModel]:
    fields: Dict[str, Tuple[Any, Any]] = {}
    for param in parameters:
        annotation = _annotation(param, model_name)
        constraints: Dict[str, Any] = {"description": param.description}
        if param.minimum is not None:
            constraints["ge"] = param.minimum

        if param.required:
            fields[param.name] = (annotation, Field(**constraints))

        else:
            fields[param.name] = (Optional[annotation], Field(default=None, **constraints))

    return create_model(model_name, __config__=ConfigDict(extra="forbid"), **fields)  # type: ignore[call-overload]


def build_arguments_model(definition: MCPToolDefinition) -> Type[BaseModel]:
    """
    Build the pydantic model that validates a tool's arguments object.

    Args:
        definition: Tool definition

    Returns:
        Model class rejecting unknown fields, wrongly typed values, values outside
        their enum, and numbers below their minimum
    """
    return _build_model(f"{definition.name}_arguments", definition.parameters)


def _format_location(loc: Tuple[int | str, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"

        else:
            path = f"{path}.{part}" if path else str(part)

    return path


def _strip_none(arguments: Dict[str, Any]) -> Dict[str, Any]:
    # An explicit null means "not provided" for optional fields, at any depth
    return {
        key: _strip_none(value) if isinstance(value, dict) else value
        for key, value in arguments.items()
        if value is not None
    }


def validate_arguments(model: Type[BaseModel], arguments: Any) -> Dict[str, Any]:
    """
    Validate raw call arguments against a tool's arguments model.

    Args:
        model: Model built by build_arguments_model
        arguments: Raw arguments from the client; None is treated as an empty object

    Returns:
        The validated arguments, holding only the fields the client supplied

    Raises:
        MCPToolValidationError: If the arguments do not match the model
    """
    if arguments is None:
        arguments = {}

    if not isinstance(arguments, dict):
        raise MCPToolValidationError(f"arguments must be an object, got {type(arguments).__name__}")

    try:
        validated = model.model_validate(_strip_none(arguments))

    except ValidationError as e:
        error = e.errors()[0]
        raise MCPToolValidationError(error["msg"], _format_location(error["loc"])) from e

    return validated.model_dump(exclude_unset=True)
