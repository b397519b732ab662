from typing import Any, Dict

from mcp_tool import (
    MCPTool, MCPToolDefinition, MCPToolExecutionError, MCPToolOperationDefinition, MCPToolParameter
)
from delivery import OverlayRequest, QuickshellDelivery
from delivery.waybar_state import SEVERITIES


class QuickshellMCPTool(MCPTool):
    """Shows popup overlays through a Quickshell shell's IPC target."""

    def __init__(self, quickshell: QuickshellDelivery) -> None:
        self._quickshell = quickshell

    def get_definition(self) -> MCPToolDefinition:
        """Get the tool definition."""
        return self._build_definition_from_operations(
            name="quickshell",
            description_prefix="Show a popup overlay in the Quickshell notification shell.",
            additional_parameters=[
                MCPToolParameter(
                    name="title",
                    type="string",
                    description="Popup title (for notify operation)",
                    required=False
                ),
                MCPToolParameter(
                    name="body",
                    type="string",
                    description="Popup body (for notify operation)",
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
                    name="timeoutSeconds",
                    type="integer",
                    description="Seconds the popup stays visible (default: shell's own)",
                    required=False,
                    minimum=0
                ),
                MCPToolParameter(
                    name="pattern",
                    type="string",
                    description="Background pattern name",
                    required=False
                ),
                MCPToolParameter(
                    name="image",
                    type="string",
                    description="Image path or identifier (default: configured default image)",
                    required=False
                ),
                MCPToolParameter(
                    name="workspace",
                    type="string",
                    description="Workspace the notification relates to",
                    required=False
                ),
                MCPToolParameter(
                    name="app",
                    type="string",
                    description="Application the notification relates to",
                    required=False
                ),
                MCPToolParameter(
                    name="color",
                    type="string",
                    description="Accent color override",
                    required=False
                ),
                MCPToolParameter(
                    name="transition",
                    type="string",
                    description="Popup transition name",
                    required=False
                )
            ]
        )

    def get_operation_definitions(self) -> Dict[str, MCPToolOperationDefinition]:
        """Get operation definitions for this tool."""
        return {
            "notify": MCPToolOperationDefinition(
                name="notify",
                handler=self._notify,
                allowed_parameters={
                    "title", "body", "severity", "timeoutSeconds", "pattern",
                    "image", "workspace", "app", "color", "transition"
                },
                required_parameters={"title", "body"},
                description="show a popup overlay"
            ),
            "status": MCPToolOperationDefinition(
                name="status",
                handler=self._status,
                allowed_parameters=set(),
                required_parameters=set(),
                description="check whether the shell is listening for notifications"
            )
        }

    async def _notify(self, arguments: Dict[str, Any]) -> str:
        request = OverlayRequest(
            title=self._get_str_value_from_key("title", arguments),
            body=self._get_str_value_from_key("body", arguments),
            severity=arguments.get("severity", "info"),
            timeout_seconds=arguments.get("timeoutSeconds"),
            pattern=arguments.get("pattern"),
            image=arguments.get("image"),
            workspace=arguments.get("workspace"),
            app=arguments.get("app"),
            color=arguments.get("color"),
            transition=arguments.get("transition")
        )
        result = await self._quickshell.send_overlay(request)
        if not result.succeeded:
            raise MCPToolExecutionError(result.message)

        return result.message

    async def _status(self, _arguments: Dict[str, Any]) -> str:
        if await self._quickshell.is_ready():
            return "Quickshell notification shell is ready"

        return "Quickshell notification shell is not ready"
