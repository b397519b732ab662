"""MCP tool result representation."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class MCPToolResult:
    """Result of a tool execution."""
    name: str
    content: str
    is_error: bool = False

    @classmethod
    def from_error(cls, name: str, message: str) -> "MCPToolResult":
        """
        Build an error result from a failure message.

        Args:
            name: Name of the tool that was called
            message: Failure description

        Returns:
            Error result whose text is prefixed with "Error: "
        """
        return cls(name=name, content=f"Error: {message}", is_error=True)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the tool result to a response envelope.

        Returns:
            Dictionary with a single text content item, and an isError flag for failures
        """
        envelope: Dict[str, Any] = {
            'content': [
                {
                    'type': 'text',
                    'text': self.content
                }
            ]
        }
        if self.is_error:
            envelope['isError'] = True

        return envelope
