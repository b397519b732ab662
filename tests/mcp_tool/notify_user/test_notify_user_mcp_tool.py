"""
Tests for the notify_user tool
"""
import asyncio

import pytest

from delivery import DeliveryFailure
from mcp_tool.notify_user.notify_user_mcp_tool import NotifyUserMCPTool


@pytest.fixture
def notify_tool(mock_popup, mock_waybar, mock_polybar):
    """Fixture providing the notify_user tool with mocked deliveries."""
    return NotifyUserMCPTool(popup=mock_popup, waybar=mock_waybar, polybar=mock_polybar)


class TestNotifyUserDefinition:
    """Test the notify_user tool definition."""

    def test_definition(self, notify_tool):
        """Test the name and the required parameters."""
        definition = notify_tool.get_definition()

        assert definition.name == "notify_user"
        required = [param.name for param in definition.parameters if param.required]
        assert required == ["message"]

    def test_channel_enum(self, notify_tool):
        """Test channels are limited to the known destinations."""
        definition = notify_tool.get_definition()
        channels = next(param for param in definition.parameters if param.name == "channels")

        assert channels.items.enum == ["waybar", "popup", "polybar"]


class TestNotifyUserExecution:
    """Test delivering to the selected channels."""

    def test_default_channels(self, notify_tool, mock_popup, mock_waybar, mock_polybar, make_tool_call):
        """Test waybar and popup are used when no channels are given."""
        result = asyncio.run(notify_tool.execute(make_tool_call("notify_user", {"message": "Build done"})))

        assert result.content == "Waybar: Waybar message queued | Popup: Notification sent via notify-send"
        mock_waybar.display_message.assert_awaited_once_with(
            "Build done", severity="info", pulse=False, duration_seconds=8, text=None, tooltip=None
        )
        mock_popup.show_popup.assert_awaited_once_with(
            "Build done", "Build done", urgency="normal", timeout_ms=5000, icon=None
        )
        mock_polybar.display_message.assert_not_awaited()

    def test_configured_default_channels(self, mock_popup, mock_waybar, mock_polybar, make_tool_call):
        """Test configured defaults replace the built-in ones."""
        tool = NotifyUserMCPTool(
            popup=mock_popup, waybar=mock_waybar, polybar=mock_polybar, default_channels=["polybar"]
        )

        result = asyncio.run(tool.execute(make_tool_call("notify_user", {"message": "hi"})))

        assert result.content.startswith("Polybar: ")
        mock_waybar.display_message.assert_not_awaited()
        mock_popup.show_popup.assert_not_awaited()

    def test_delivery_order_and_deduplication(
        self, notify_tool, mock_popup, mock_waybar, mock_polybar, make_tool_call
    ):
        """Test channels are delivered once each in a fixed order."""
        arguments = {"message": "hi", "channels": ["popup", "polybar", "popup", "waybar"]}

        result = asyncio.run(notify_tool.execute(make_tool_call("notify_user", arguments)))

        parts = result.content.split(" | ")
        assert [part.split(":")[0] for part in parts] == ["Waybar", "Polybar", "Popup"]
        assert mock_popup.show_popup.await_count == 1

    def test_popup_only_with_options(self, notify_tool, mock_popup, mock_waybar, make_tool_call):
        """Test popup options are passed through."""
        arguments = {
            "message": "Tests failed",
            "title": "CI",
            "channels": ["popup"],
            "urgency": "critical",
            "timeoutMs": 0,
            "icon": "dialog-error"
        }

        result = asyncio.run(notify_tool.execute(make_tool_call("notify_user", arguments)))

        assert result.content == "Popup: Notification sent via notify-send"
        mock_popup.show_popup.assert_awaited_once_with(
            "CI", "Tests failed", urgency="critical", timeout_ms=0, icon="dialog-error"
        )
        mock_waybar.display_message.assert_not_awaited()

    def test_waybar_options(self, notify_tool, mock_waybar, make_tool_call):
        """Test waybar options are passed through."""
        arguments = {
            "message": "Deploy failed",
            "channels": ["waybar"],
            "waybar": {"severity": "crit", "pulse": True, "durationSeconds": 3, "text": "!", "tooltip": "tip"}
        }

        asyncio.run(notify_tool.execute(make_tool_call("notify_user", arguments)))

        mock_waybar.display_message.assert_awaited_once_with(
            "Deploy failed", severity="crit", pulse=True, duration_seconds=3, text="!", tooltip="tip"
        )

    def test_polybar_options(self, notify_tool, mock_polybar, make_tool_call):
        """Test polybar options are passed through."""
        arguments = {
            "message": "hi",
            "channels": ["polybar"],
            "polybar": {"durationSeconds": 2, "color": "#ff0000"}
        }

        asyncio.run(notify_tool.execute(make_tool_call("notify_user", arguments)))

        mock_polybar.display_message.assert_awaited_once_with(
            "hi", duration_seconds=2, color="#ff0000", background="#333333"
        )

    def test_channel_failure_fails_call(self, notify_tool, mock_popup, make_tool_call):
        """Test a failing channel propagates out of the tool."""
        mock_popup.show_popup.side_effect = DeliveryFailure("Both notify-send and dunstify failed")

        with pytest.raises(DeliveryFailure):
            asyncio.run(notify_tool.execute(make_tool_call("notify_user", {"message": "hi", "channels": ["popup"]})))
