"""MCP tool calling framework."""

from mcp_tool.mcp_tool import MCPTool
from mcp_tool.mcp_tool_call import MCPToolCall
from mcp_tool.mcp_tool_definition import MCPToolDefinition
from mcp_tool.mcp_tool_manager import MCPToolManager
from mcp_tool.mcp_tool_operation_definition import MCPToolOperationDefinition
from mcp_tool.mcp_tool_parameter import MCPToolParameter
from mcp_tool.mcp_tool_registered import MCPToolRegistered
from mcp_tool.mcp_tool_result import MCPToolResult
from mcp_tool.mcp_tool_exceptions import MCPToolExecutionError, MCPToolUnknownError, MCPToolValidationError


__all__ = [
    "MCPTool",
    "MCPToolCall",
    "MCPToolDefinition",
    "MCPToolExecutionError",
    "MCPToolManager",
    "MCPToolOperationDefinition",
    "MCPToolParameter",
    "MCPToolRegistered",
    "MCPToolResult",
    "MCPToolUnknownError",
    "MCPToolValidationError",
]
