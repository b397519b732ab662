"""Exception classes for MCP tool framework."""


class MCPToolExecutionError(Exception):
    """Exception raised when tool execution fails."""

    def __init__(self, message: str):
        """
        Initialize tool execution error.

        Args:
            message: Error message
        """
        super().__init__(message)


class MCPToolValidationError(Exception):
    """Exception raised when tool arguments do not match the tool's parameters."""

    def __init__(self, message: str, path: str = ""):
        """
        Initialize tool validation error.

        Args:
            message: Description of the validation failure
            path: Dotted path of the offending argument, empty for the argument object itself
        """
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class MCPToolUnknownError(Exception):
    """Exception raised when a call names a tool that is not registered or not enabled."""

    def __init__(self, name: str):
        """
        Initialize unknown tool error.

        Args:
            name: The requested tool name
        """
        super().__init__(f"Unknown tool: {name}")
        self.name = name
