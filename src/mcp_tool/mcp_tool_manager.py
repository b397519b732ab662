"""Registry and dispatcher for MCP tools."""

import logging
from typing import Any, Dict, List

from mcp_tool.mcp_tool import MCPTool
from mcp_tool.mcp_tool_call import MCPToolCall
from mcp_tool.mcp_tool_definition import MCPToolDefinition
from mcp_tool.mcp_tool_exceptions import MCPToolUnknownError, MCPToolValidationError
from mcp_tool.mcp_tool_registered import MCPToolRegistered
from mcp_tool.mcp_tool_result import MCPToolResult
from mcp_tool.mcp_tool_schema import build_arguments_model, build_input_schema, validate_arguments


class MCPToolManager:
    """
    Registry of tools exposed to MCP clients.

    One manager is created at start-up and handed to the transport layer. It
    answers list requests from the registered definitions and turns every call,
    successful or not, into a result envelope.
    """

    def __init__(self) -> None:
        self._registered_tools: Dict[str, MCPToolRegistered] = {}
        self._enabled_tools: Dict[str, bool] = {}
        self._logger = logging.getLogger("MCPToolManager")

    def register_tool(self, tool: MCPTool, enabled_by_default: bool = True) -> None:
        """
        Register a tool for use by MCP clients.

        Args:
            tool: The tool to register
            enabled_by_default: Whether the tool should be enabled by default

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        definition = tool.get_definition()

        if definition.name in self._registered_tools:
            raise ValueError(f"Tool '{definition.name}' is already registered")

        self._registered_tools[definition.name] = MCPToolRegistered(
            tool=tool,
            enabled_by_default=enabled_by_default,
            arguments_model=build_arguments_model(definition)
        )

        if definition.name not in self._enabled_tools:
            self._enabled_tools[definition.name] = enabled_by_default

        self._logger.info("Registered tool: %s", definition.name)

    def unregister_tool(self, name: str) -> None:
        """
        Unregister a tool.

        Args:
            name: Name of the tool to unregister
        """
        if name in self._registered_tools:
            del self._registered_tools[name]
            if name in self._enabled_tools:
                del self._enabled_tools[name]

            self._logger.info("Unregistered tool: %s", name)

    def set_tool_enabled(self, tool_name: str, enabled: bool) -> None:
        """
        Enable or disable a tool.

        Args:
            tool_name: Name of the tool to enable/disable
            enabled: Whether the tool should be enabled
        """
        self._enabled_tools[tool_name] = enabled
        self._logger.debug("Tool '%s' %s", tool_name, "enabled" if enabled else "disabled")

    def set_enabled_tools(self, tool_names: List[str]) -> None:
        """
        Enable exactly the named tools and disable every other registered tool.

        Args:
            tool_names: Names of the tools to leave enabled
        """
        for name in tool_names:
            if name not in self._registered_tools:
                self._logger.warning("Cannot enable unknown tool: %s", name)

        for name in self._registered_tools:
            self.set_tool_enabled(name, name in tool_names)

    def is_tool_enabled(self, tool_name: str) -> bool:
        """
        Check if a tool is enabled.

        Args:
            tool_name: Name of the tool to check

        Returns:
            True if the tool is enabled, False otherwise
        """
        return self._enabled_tools.get(tool_name, True)

    def get_tool_definitions(self) -> List[MCPToolDefinition]:
        """
        Get definitions for all registered and enabled tools.

        Returns:
            List of tool definitions for enabled tools only
        """
        return [
            registered_tool.tool.get_definition()
            for tool_name, registered_tool in self._registered_tools.items()
            if self.is_tool_enabled(tool_name)
        ]

    def get_tool(self, name: str) -> MCPTool | None:
        """
        Get a registered and enabled tool by its name.

        Args:
            name: Name of the tool to retrieve

        Returns:
            The tool instance, or None if it is unknown or disabled
        """
        registered_tool = self._registered_tools.get(name)
        if registered_tool is None or not self.is_tool_enabled(name):
            return None

        return registered_tool.tool

    def get_enabled_tool_names(self) -> List[str]:
        """Get names of all enabled tools."""
        return [
            tool_name for tool_name in self._registered_tools
            if self.is_tool_enabled(tool_name)
        ]

    def list_tools(self) -> List[Dict[str, Any]]:
        """
        Describe every enabled tool.

        Returns:
            List of {name, description, inputSchema} dictionaries
        """
        return [
            {
                "name": definition.name,
                "description": definition.description,
                "inputSchema": build_input_schema(definition)
            }
            for definition in self.get_tool_definitions()
        ]

    async def call_tool(self, name: str, arguments: Any) -> MCPToolResult:
        """
        Validate arguments and run the named tool.

        Never raises: unknown tools, validation failures, and any exception from
        the tool itself are converted to error results.

        Args:
            name: Name of the tool to call
            arguments: Raw arguments object supplied by the client

        Returns:
            Result envelope for the call
        """
        try:
            tool = self.get_tool(name)
            if tool is None:
                raise MCPToolUnknownError(name)

            try:
                validated = validate_arguments(self._registered_tools[name].arguments_model, arguments)

            except MCPToolValidationError as e:
                raise MCPToolValidationError(f"Invalid arguments for {name}: {str(e)}") from e

            self._logger.debug("Calling tool '%s' with arguments: %s", name, validated)
            result = await tool.execute(MCPToolCall(name=name, arguments=validated))
            self._logger.debug("Tool '%s' succeeded: %s", name, result.content)
            return result

        except (MCPToolUnknownError, MCPToolValidationError) as e:
            self._logger.warning("Rejected call to tool '%s': %s", name, str(e))
            return MCPToolResult.from_error(name, str(e))

        except Exception as e:
            self._logger.error("Tool '%s' failed: %s", name, str(e), exc_info=True)
            return MCPToolResult.from_error(name, str(e))
