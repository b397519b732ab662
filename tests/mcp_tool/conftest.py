"""
Shared fixtures for MCP tool tests.
"""
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest

from delivery import DeliveryResult, PolybarDelivery, PopupDelivery, QuickshellDelivery, WaybarDelivery
from mcp_tool import (
    MCPTool, MCPToolCall, MCPToolDefinition, MCPToolExecutionError, MCPToolOperationDefinition,
    MCPToolParameter, MCPToolResult
)


class EchoMCPTool(MCPTool):
    """Tool that echoes its message, or fails on request."""

    def get_definition(self) -> MCPToolDefinition:
        return MCPToolDefinition(
            name="echo",
            description="Echo a message",
            parameters=[
                MCPToolParameter(name="message", type="string", description="Message to echo"),
                MCPToolParameter(
                    name="fail", type="string", description="Failure to raise", required=False,
                    enum=["execution", "unexpected"]
                )
            ]
        )

    async def execute(self, tool_call: MCPToolCall) -> MCPToolResult:
        fail = tool_call.arguments.get("fail")
        if fail == "execution":
            raise MCPToolExecutionError("echo refused")

        if fail == "unexpected":
            raise RuntimeError("echo exploded")

        return MCPToolResult(name=tool_call.name, content=tool_call.arguments["message"])


class CounterMCPTool(MCPTool):
    """Operation-based tool used to exercise operation routing."""

    def __init__(self):
        self.value = 0

    def get_definition(self) -> MCPToolDefinition:
        return self._build_definition_from_operations(
            name="counter",
            description_prefix="Count things.",
            additional_parameters=[
                MCPToolParameter(name="amount", type="integer", description="Amount to add", required=False)
            ]
        )

    def get_operation_definitions(self) -> Dict[str, MCPToolOperationDefinition]:
        return {
            "add": MCPToolOperationDefinition(
                name="add",
                handler=self._add,
                allowed_parameters={"amount"},
                required_parameters={"amount"},
                description="add to the counter"
            ),
            "explode": MCPToolOperationDefinition(
                name="explode",
                handler=self._explode,
                allowed_parameters=set(),
                required_parameters=set(),
                description="fail unexpectedly"
            )
        }

    async def _add(self, arguments: Dict[str, Any]) -> str:
        self.value += arguments["amount"]
        return f"value={self.value}"

    async def _explode(self, _arguments: Dict[str, Any]) -> str:
        raise KeyError("missing")


@pytest.fixture
def echo_tool():
    """Fixture providing the echo tool."""
    return EchoMCPTool()


@pytest.fixture
def counter_tool():
    """Fixture providing the counter tool."""
    return CounterMCPTool()


@pytest.fixture
def make_tool_call():
    """Factory for creating MCPToolCall objects for testing."""
    def _make_call(tool_name: str, arguments: Dict[str, Any]) -> MCPToolCall:
        return MCPToolCall(name=tool_name, arguments=arguments)

    return _make_call


@pytest.fixture
def mock_waybar():
    """Fixture providing a mocked Waybar delivery."""
    waybar = MagicMock(spec=WaybarDelivery)
    waybar.display_message = AsyncMock(return_value="Waybar message queued")
    waybar.clear_message = AsyncMock(return_value="Waybar message cleared")
    waybar.set_mode = AsyncMock(return_value="Waybar mode set to mcp")
    return waybar


@pytest.fixture
def mock_polybar():
    """Fixture providing a mocked Polybar delivery."""
    polybar = MagicMock(spec=PolybarDelivery)
    polybar.display_message = AsyncMock(return_value="Message sent to polybar via polybar-msg (duration: 8s)")
    polybar.clear_message = AsyncMock(return_value="Polybar message cleared")
    return polybar


@pytest.fixture
def mock_popup():
    """Fixture providing a mocked popup delivery."""
    popup = MagicMock(spec=PopupDelivery)
    popup.show_popup = AsyncMock(return_value="Notification sent via notify-send")
    return popup


@pytest.fixture
def mock_quickshell():
    """Fixture providing a mocked Quickshell delivery."""
    quickshell = MagicMock(spec=QuickshellDelivery)
    quickshell.send_overlay = AsyncMock(
        return_value=DeliveryResult.success("Overlay sent via quickshell (severity: info)")
    )
    quickshell.is_ready = AsyncMock(return_value=True)
    return quickshell
