import logging
from typing import Any, Dict, List

from mcp_tool import MCPTool, MCPToolCall, MCPToolDefinition, MCPToolParameter, MCPToolResult
from delivery import PolybarDelivery, PopupDelivery, WaybarDelivery
from delivery.polybar_delivery import DEFAULT_BACKGROUND, DEFAULT_COLOR
from delivery.popup_delivery import DEFAULT_TIMEOUT_MS, URGENCIES
from delivery.waybar_delivery import DEFAULT_DURATION_SECONDS
from delivery.waybar_state import SEVERITIES


CHANNELS = ["waybar", "popup", "polybar"]
DEFAULT_CHANNELS = ["waybar", "popup"]

# Channels are always delivered in this order, whatever order the caller lists them in
_DELIVERY_ORDER = ["waybar", "polybar", "popup"]


class NotifyUserMCPTool(MCPTool):
    """Notifies the user on several channels with a single call."""

    def __init__(
        self,
        popup: PopupDelivery,
        waybar: WaybarDelivery,
        polybar: PolybarDelivery,
        default_channels: List[str] | None = None
    ) -> None:
        self._popup = popup
        self._waybar = waybar
        self._polybar = polybar
        self._default_channels = default_channels or DEFAULT_CHANNELS
        self._logger = logging.getLogger("NotifyUserMCPTool")

    def get_definition(self) -> MCPToolDefinition:
        """Get the tool definition."""
        return MCPToolDefinition(
            name="notify_user",
            description=(
                "Notify the user via Waybar, Polybar and/or a popup notification (notify-send/dunst) "
                "with a single call."
            ),
            parameters=[
                MCPToolParameter(
                    name="message",
                    type="string",
                    description="Message body to display"
                ),
                MCPToolParameter(
                    name="title",
                    type="string",
                    description="Popup notification title (defaults to message)",
                    required=False
                ),
                MCPToolParameter(
                    name="channels",
                    type="array",
                    description=f"Destinations to notify; defaults to {self._default_channels}",
                    required=False,
                    items=MCPToolParameter(
                        name="channel",
                        type="string",
                        description="Notification channel",
                        enum=CHANNELS
                    )
                ),
                MCPToolParameter(
                    name="urgency",
                    type="string",
                    description="Popup urgency (default: normal)",
                    required=False,
                    enum=URGENCIES
                ),
                MCPToolParameter(
                    name="timeoutMs",
                    type="integer",
                    description=f"Popup timeout in milliseconds (default: {DEFAULT_TIMEOUT_MS})",
                    required=False,
                    minimum=0
                ),
                MCPToolParameter(
                    name="icon",
                    type="string",
                    description="Popup icon name or path",
                    required=False
                ),
                MCPToolParameter(
                    name="waybar",
                    type="object",
                    description="Waybar-specific options",
                    required=False,
                    properties={
                        "severity": MCPToolParameter(
                            name="severity",
                            type="string",
                            description="Waybar accent/severity (default: info)",
                            required=False,
                            enum=SEVERITIES
                        ),
                        "pulse": MCPToolParameter(
                            name="pulse",
                            type="boolean",
                            description="Enable pulse animation",
                            required=False
                        ),
                        "durationSeconds": MCPToolParameter(
                            name="durationSeconds",
                            type="integer",
                            description=f"Seconds before auto-clear (default: {DEFAULT_DURATION_SECONDS})",
                            required=False,
                            minimum=0
                        ),
                        "text": MCPToolParameter(
                            name="text",
                            type="string",
                            description="Waybar text override (default: bell + message)",
                            required=False
                        ),
                        "tooltip": MCPToolParameter(
                            name="tooltip",
                            type="string",
                            description="Waybar tooltip override (default: message)",
                            required=False
                        )
                    }
                ),
                MCPToolParameter(
                    name="polybar",
                    type="object",
                    description="Polybar-specific options",
                    required=False,
                    properties={
                        "durationSeconds": MCPToolParameter(
                            name="durationSeconds",
                            type="integer",
                            description=f"Seconds before auto-clear (default: {DEFAULT_DURATION_SECONDS})",
                            required=False,
                            minimum=0
                        ),
                        "color": MCPToolParameter(
                            name="color",
                            type="string",
                            description=f"Foreground color (default: {DEFAULT_COLOR})",
                            required=False
                        ),
                        "background": MCPToolParameter(
                            name="background",
                            type="string",
                            description=f"Background color (default: {DEFAULT_BACKGROUND})",
                            required=False
                        )
                    }
                )
            ]
        )

    def _select_channels(self, requested: List[str] | None) -> List[str]:
        targets = requested if requested else self._default_channels
        return [channel for channel in _DELIVERY_ORDER if channel in targets]

    async def execute(self, tool_call: MCPToolCall) -> MCPToolResult:
        """Deliver the notification to each selected channel."""
        arguments: Dict[str, Any] = tool_call.arguments
        message = self._get_str_value_from_key("message", arguments)
        channels = self._select_channels(arguments.get("channels"))
        self._logger.debug("Notifying on channels: %s", ", ".join(channels))

        results = []
        if "waybar" in channels:
            options = arguments.get("waybar") or {}
            waybar_result = await self._waybar.display_message(
                message,
                severity=options.get("severity") or "info",
                pulse=bool(options.get("pulse", False)),
                duration_seconds=options.get("durationSeconds", DEFAULT_DURATION_SECONDS),
                text=options.get("text"),
                tooltip=options.get("tooltip")
            )
            results.append(f"Waybar: {waybar_result}")

        if "polybar" in channels:
            options = arguments.get("polybar") or {}
            polybar_result = await self._polybar.display_message(
                message,
                duration_seconds=options.get("durationSeconds", DEFAULT_DURATION_SECONDS),
                color=options.get("color") or DEFAULT_COLOR,
                background=options.get("background") or DEFAULT_BACKGROUND
            )
            results.append(f"Polybar: {polybar_result}")

        if "popup" in channels:
            popup_result = await self._popup.show_popup(
                arguments.get("title") or message,
                message,
                urgency=arguments.get("urgency", "normal"),
                timeout_ms=arguments.get("timeoutMs", DEFAULT_TIMEOUT_MS),
                icon=arguments.get("icon")
            )
            results.append(f"Popup: {popup_result}")

        return MCPToolResult(name=tool_call.name, content=" | ".join(results))
