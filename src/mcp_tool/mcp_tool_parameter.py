"""MCP tool parameter definition."""

from dataclasses import dataclass
from typing import Dict, List


@dataclass
class MCPToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: str  # "string", "number", "integer", "boolean", "array", "object"
    description: str
    required: bool = True
    enum: List[str] | None = None
    minimum: int | float | None = None
    items: 'MCPToolParameter | None' = None  # For array types
    properties: Dict[str, 'MCPToolParameter'] | None = None  # For object types
