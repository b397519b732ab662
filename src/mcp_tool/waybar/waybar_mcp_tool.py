import logging
from typing import Any, Dict

from mcp_tool import MCPTool, MCPToolDefinition, MCPToolOperationDefinition, MCPToolParameter
from delivery import WaybarDelivery
from delivery.waybar_delivery import DEFAULT_DURATION_SECONDS
from delivery.waybar_state import BAR_MODES, SEVERITIES


class WaybarMCPTool(MCPTool):
    """Shows, clears and switches modes of the Waybar notification module."""

    def __init__(self, waybar: WaybarDelivery) -> None:
        self._waybar = waybar
        self._logger = logging.getLogger("WaybarMCPTool")

    def get_definition(self) -> MCPToolDefinition:
        """Get the tool definition."""
        return self._build_definition_from_operations(
            name="waybar",
            description_prefix=(
                "Show a short message in the Waybar notification module. Messages revert to the "
                "ready state after their duration; a newer message replaces an older one."
            ),
            additional_parameters=[
                MCPToolParameter(
                    name="message",
                    type="string",
                    description="Message to display (for display operation)",
                    required=False
                ),
                MCPToolParameter(
                    name="severity",
                    type="string",
                    description="Accent/severity (default: info)",
                    required=False,
                    enum=SEVERITIES
                ),
                MCPToolParameter(
                    name="pulse",
                    type="boolean",
                    description="Enable pulse animation",
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
                    name="text",
                    type="string",
                    description="Bar text override (default: bell + message)",
                    required=False
                ),
                MCPToolParameter(
                    name="tooltip",
                    type="string",
                    description="Tooltip override (default: message)",
                    required=False
                ),
                MCPToolParameter(
                    name="mode",
                    type="string",
                    description="Bar mode (for set_mode operation)",
                    required=False,
                    enum=BAR_MODES
                )
            ]
        )

    def get_operation_definitions(self) -> Dict[str, MCPToolOperationDefinition]:
        """Get operation definitions for this tool."""
        return {
            "display": MCPToolOperationDefinition(
                name="display",
                handler=self._display,
                allowed_parameters={"message", "severity", "pulse", "durationSeconds", "text", "tooltip"},
                required_parameters={"message"},
                description="show a message until its duration elapses"
            ),
            "clear": MCPToolOperationDefinition(
                name="clear",
                handler=self._clear,
                allowed_parameters=set(),
                required_parameters=set(),
                description="restore the ready state now"
            ),
            "set_mode": MCPToolOperationDefinition(
                name="set_mode",
                handler=self._set_mode,
                allowed_parameters={"mode"},
                required_parameters={"mode"},
                description="switch the bar between its default and notification layouts"
            )
        }

    async def _display(self, arguments: Dict[str, Any]) -> str:
        message = self._get_str_value_from_key("message", arguments)
        return await self._waybar.display_message(
            message,
            severity=arguments.get("severity", "info"),
            pulse=arguments.get("pulse", False),
            duration_seconds=arguments.get("durationSeconds", DEFAULT_DURATION_SECONDS),
            text=arguments.get("text"),
            tooltip=arguments.get("tooltip")
        )

    async def _clear(self, _arguments: Dict[str, Any]) -> str:
        return await self._waybar.clear_message()

    async def _set_mode(self, arguments: Dict[str, Any]) -> str:
        mode = self._get_str_value_from_key("mode", arguments)
        self._logger.debug("Switching waybar mode to %s", mode)
        return await self._waybar.set_mode(mode)
