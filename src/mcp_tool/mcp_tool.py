"""Abstract base class for MCP tools."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from mcp_tool.mcp_tool_call import MCPToolCall
from mcp_tool.mcp_tool_definition import MCPToolDefinition
from mcp_tool.mcp_tool_exceptions import MCPToolExecutionError
from mcp_tool.mcp_tool_operation_definition import MCPToolOperationDefinition
from mcp_tool.mcp_tool_parameter import MCPToolParameter
from mcp_tool.mcp_tool_result import MCPToolResult


class MCPTool(ABC):
    """Abstract base class for MCP tools."""

    @abstractmethod
    def get_definition(self) -> MCPToolDefinition:
        """
        Get the tool definition for registration.

        Returns:
            MCPToolDefinition describing this tool's interface
        """

    def get_operation_definitions(self) -> Dict[str, MCPToolOperationDefinition]:
        """
        Get operation definitions for this tool.

        Returns:
            Dictionary mapping operation names to their definitions.
        """
        return {}

    async def execute(self, tool_call: MCPToolCall) -> MCPToolResult:
        """
        Execute the tool with given arguments.

        Default implementation handles operation-based routing if operations are defined.
        Tools without operations must override this method.

        Arguments have already been validated against the tool definition by the
        tool manager, so only operation-specific rules are checked here.

        Args:
            tool_call: Tool call containing arguments

        Returns:
            MCPToolResult containing the execution result

        Raises:
            MCPToolExecutionError: If tool execution fails
        """
        operation_definitions = self.get_operation_definitions()

        # If no operations defined, subclass must override execute()
        if not operation_definitions:
            raise NotImplementedError(
                f"{self.__class__.__name__} must either define operations or override execute()"
            )

        arguments = tool_call.arguments
        operation = arguments.get("operation")

        if not operation:
            raise MCPToolExecutionError("No 'operation' argument provided")

        if operation not in operation_definitions:
            available_operations = ", ".join(sorted(operation_definitions.keys()))
            raise MCPToolExecutionError(
                f"Unsupported operation: {operation}. Available operations: {available_operations}"
            )

        operation_def = operation_definitions[operation]

        provided_params = set(arguments.keys())
        provided_params.discard("operation")

        invalid_params = provided_params - operation_def.allowed_parameters
        if invalid_params:
            invalid_list = ", ".join(sorted(invalid_params))
            raise MCPToolExecutionError(
                f"Parameter(s) {invalid_list} not valid for operation '{operation}'"
            )

        missing_params = operation_def.required_parameters - provided_params
        if missing_params:
            missing_list = ", ".join(sorted(missing_params))
            raise MCPToolExecutionError(
                f"Required parameter(s) {missing_list} missing for operation '{operation}'"
            )

        logger = self.get_logger()
        logger.debug("%s operation requested: %s", self.get_tool_name(), operation)

        try:
            content = await operation_def.handler(arguments)
            return MCPToolResult(name=tool_call.name, content=content)

        except MCPToolExecutionError:
            raise

        except Exception as e:
            logger.error(
                "Unexpected error in %s operation '%s': %s",
                self.get_tool_name(), operation, str(e), exc_info=True
            )
            raise MCPToolExecutionError(f"{self.get_tool_name()} operation failed: {str(e)}") from e

    def get_logger(self) -> logging.Logger:
        """
        Get logger for this tool.

        Subclasses can override to provide custom logger.

        Returns:
            Logger instance for this tool
        """
        return logging.getLogger(self.__class__.__name__)

    def get_tool_name(self) -> str:
        """
        Get tool name for logging and error messages.

        Returns:
            Tool name string
        """
        # Default: remove "MCPTool" suffix and convert to lowercase
        class_name = self.__class__.__name__
        if class_name.endswith("MCPTool"):
            return class_name[:-7].lower()

        return class_name.lower()

    def _build_definition_from_operations(
        self,
        name: str,
        description_prefix: str,
        additional_parameters: List[MCPToolParameter] | None = None
    ) -> MCPToolDefinition:
        """
        Build tool definition from operation definitions.

        Args:
            name: Tool name
            description_prefix: Description text before operation list
            additional_parameters: Optional additional parameters beyond standard 'operation' parameter

        Returns:
            Complete tool definition
        """
        operations = self.get_operation_definitions()
        operation_names = list(operations.keys())

        operation_list = []
        for op_name, op_def in operations.items():
            operation_list.append(f"- {op_name}: {op_def.description}")

        description = f"{description_prefix}\n\nAvailable operations:\n\n" + "\n".join(operation_list)

        parameters = [
            MCPToolParameter(
                name="operation",
                type="string",
                description=f"{name.capitalize()} operation to perform",
                required=True,
                enum=operation_names
            )
        ]

        if additional_parameters:
            parameters.extend(additional_parameters)

        return MCPToolDefinition(
            name=name,
            description=description,
            parameters=parameters
        )

    def _get_str_value_from_key(self, key: str, arguments: Dict[str, Any]) -> str:
        """
        Extract string value from arguments dictionary.

        Args:
            key: Key to extract from arguments
            arguments: Dictionary containing operation parameters

        Returns:
            String value for the given key

        Raises:
            MCPToolExecutionError: If key is missing or value is not a string
        """
        if key not in arguments:
            raise MCPToolExecutionError(f"No '{key}' argument provided")

        value = arguments[key]
        if not isinstance(value, str):
            raise MCPToolExecutionError(f"'{key}' must be a string")

        return value
