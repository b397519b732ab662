"""Internal representation of registered MCP tool."""

from dataclasses import dataclass
from typing import Type

from pydantic import BaseModel

from mcp_tool.mcp_tool import MCPTool


@dataclass
class MCPToolRegistered:
    """Internal representation of a registered tool."""
    tool: MCPTool
    enabled_by_default: bool
    arguments_model: Type[BaseModel]
