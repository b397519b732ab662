"""MCP tool call representation."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class MCPToolCall:
    """Represents a tool call request from the client."""
    name: str
    arguments: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the tool call to a dictionary.

        Returns:
            Dictionary representation of the tool call
        """
        return {
            'name': self.name,
            'arguments': self.arguments
        }
