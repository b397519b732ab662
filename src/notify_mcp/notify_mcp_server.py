"""MCP stdio server exposing desktop notification tools."""

import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from delivery import (
    CommandRunner, DeliveryRevertTimer, PolybarDelivery, PopupDelivery, QuickshellDelivery, WaybarDelivery,
    run_command
)
from mcp_tool import MCPToolManager, MCPToolResult
from mcp_tool.notify_user.notify_user_mcp_tool import NotifyUserMCPTool
from mcp_tool.polybar.polybar_mcp_tool import PolybarMCPTool
from mcp_tool.quickshell.quickshell_mcp_tool import QuickshellMCPTool
from mcp_tool.waybar.waybar_mcp_tool import WaybarMCPTool
from notify_mcp.notify_mcp_settings import NotifyMCPSettings


SERVER_NAME = "desktop-notify-mcp"


class NotifyMCPServer:
    """
    Owns the delivery channels and tool registry for the lifetime of the process.

    Channel state (tracked bar mode, pending revert timers) lives on the channel
    instances created here, so every tool sharing a channel sees the same state.
    """

    def __init__(self, settings: NotifyMCPSettings, run: CommandRunner = run_command) -> None:
        """
        Initialize the server.

        Args:
            settings: Server settings
            run: Command runner shared by all channels
        """
        self._settings = settings
        self._logger = logging.getLogger("NotifyMCPServer")

        self._popup = PopupDelivery(app_name=settings.app_name, run=run)
        self._waybar = WaybarDelivery(
            state_path=settings.waybar_state_path,
            mode_path=settings.waybar_mode_path,
            stamp_path=settings.waybar_stamp_path,
            signal_number=settings.waybar_signal,
            process_name=settings.waybar_process,
            mode_toggle=settings.waybar_mode_toggle,
            run=run,
            revert_timer=DeliveryRevertTimer("waybar")
        )
        self._polybar = PolybarDelivery(
            module=settings.polybar_module,
            message_path=settings.polybar_message_path,
            pipe_path=settings.polybar_pipe_path,
            run=run,
            revert_timer=DeliveryRevertTimer("polybar")
        )
        self._quickshell = QuickshellDelivery(
            binary_path=settings.quickshell_binary,
            shell_path=settings.quickshell_shell_path,
            target=settings.quickshell_target,
            default_image=settings.default_image,
            run=run
        )

        self._tool_manager = MCPToolManager()
        self._tool_manager.register_tool(NotifyUserMCPTool(
            popup=self._popup,
            waybar=self._waybar,
            polybar=self._polybar,
            default_channels=settings.default_channels
        ))
        self._tool_manager.register_tool(WaybarMCPTool(self._waybar))
        self._tool_manager.register_tool(PolybarMCPTool(self._polybar))
        self._tool_manager.register_tool(QuickshellMCPTool(self._quickshell))
        self._tool_manager.set_enabled_tools(settings.enabled_tools)

    @property
    def tool_manager(self) -> MCPToolManager:
        """Registry answering list and call requests."""
        return self._tool_manager

    def list_tools(self) -> List[Tool]:
        """
        Describe the enabled tools in MCP form.

        Returns:
            MCP tool descriptors
        """
        return [
            Tool(
                name=descriptor["name"],
                description=descriptor["description"],
                inputSchema=descriptor["inputSchema"]
            )
            for descriptor in self._tool_manager.list_tools()
        ]

    async def call_tool(self, name: str, arguments: Dict[str, Any] | None) -> CallToolResult:
        """
        Run a tool call and wrap the result for the transport.

        Args:
            name: Tool name
            arguments: Raw tool arguments

        Returns:
            MCP call result; failures are flagged with isError rather than raised
        """
        result: MCPToolResult = await self._tool_manager.call_tool(name, arguments)
        return CallToolResult(
            content=[TextContent(type="text", text=result.content)],
            isError=result.is_error
        )

    def create_server(self) -> Server:
        """
        Create the MCP server with list and call handlers attached.

        Returns:
            Configured low-level MCP server
        """
        server: Server = Server(SERVER_NAME)

        @server.list_tools()
        async def list_tools() -> List[Tool]:
            return self.list_tools()

        # The tool manager validates arguments itself so failures come back as result envelopes
        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
            return await self.call_tool(name, arguments)

        return server

    async def shutdown(self) -> None:
        """Restore bar displays whose revert is still pending."""
        for timer in (self._waybar.revert_timer, self._polybar.revert_timer):
            if await timer.flush():
                self._logger.info("Flushed pending revert on shutdown")

    async def run(self) -> None:
        """Serve MCP requests over stdio until the client disconnects."""
        server = self.create_server()
        try:
            async with stdio_server() as (read_stream, write_stream):
                self._logger.info("Serving %d tool(s) on stdio", len(self._tool_manager.get_enabled_tool_names()))
                await server.run(read_stream, write_stream, server.create_initialization_options())

        finally:
            await self.shutdown()
