"""MCP tool definition."""

from dataclasses import dataclass
from typing import List

from mcp_tool.mcp_tool_parameter import MCPToolParameter


@dataclass
class MCPToolDefinition:
    """Definition of an available tool."""
    name: str
    description: str
    parameters: List[MCPToolParameter]
