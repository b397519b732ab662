from typing import Any, Dict

from mcp_tool import MCPTool, MCPToolDefinition, MCPToolOperationDefinition, MCPToolParameter
from delivery import PolybarDelivery
from delivery.polybar_delivery import DEFAULT_BACKGROUND, DEFAULT_COLOR, DEFAULT_DURATION_SECONDS


class PolybarMCPTool(MCPTool):
    """Shows and clears messages in Polybar."""

    def __init__(self, polybar: PolybarDelivery) -> None:
        self._polybar = polybar

    def get_definition(self) -> MCPToolDefinition:
        """Get the tool definition."""
        return self._build_definition_from_operations(
            name="polybar",
            description_prefix=(
                "Show a message in Polybar via polybar-msg, falling back to communication files "
                "and then to the X root window name."
            ),
            additional_parameters=[
                MCPToolParameter(
                    name="message",
                    type="string",
                    description="Message to display (for display operation)",
                    required=False
                ),
                MCPToolParameter(
                    name="durationSeconds",
                    type="integer",
                    description=f"Seconds before auto-clear (default: {DEFAULT_DURATION_SECONDS})",
                    required=False,
                    minimum=0
                ),
                MCPToolParameter(
                    name="color",
                    type="string",
                    description=f"Foreground color (default: {DEFAULT_COLOR})",
                    required=False
                ),
                MCPToolParameter(
                    name="background",
                    type="string",
                    description=f"Background color (default: {DEFAULT_BACKGROUND})",
                    required=False
                )
            ]
        )

    def get_operation_definitions(self) -> Dict[str, MCPToolOperationDefinition]:
        """Get operation definitions for this tool."""
        return {
            "display": MCPToolOperationDefinition(
                name="display",
                handler=self._display,
                allowed_parameters={"message", "durationSeconds", "color", "background"},
                required_parameters={"message"},
                description="show a message until its duration elapses"
            ),
            "clear": MCPToolOperationDefinition(
                name="clear",
                handler=self._clear,
                allowed_parameters=set(),
                required_parameters=set(),
                description="clear the current message now"
            )
        }

    async def _display(self, arguments: Dict[str, Any]) -> str:
        return await self._polybar.display_message(
            self._get_str_value_from_key("message", arguments),
            duration_seconds=arguments.get("durationSeconds", DEFAULT_DURATION_SECONDS),
            color=arguments.get("color", DEFAULT_COLOR),
            background=arguments.get("background", DEFAULT_BACKGROUND)
        )

    async def _clear(self, _arguments: Dict[str, Any]) -> str:
        return await self._polybar.clear_message()
