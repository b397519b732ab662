"""Server settings read from the process environment."""

from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
from typing import List, Mapping


CHANNELS = ["waybar", "popup", "polybar"]
DEFAULT_CHANNELS = ["waybar", "popup"]
TOOL_NAMES = ["notify_user", "waybar", "polybar", "quickshell"]

_TRUE_VALUES = {"1", "true", "yes", "on"}

_logger = logging.getLogger("NotifyMCPSettings")


def _runtime_dir(environ: Mapping[str, str]) -> Path:
    runtime_dir = environ.get("XDG_RUNTIME_DIR")
    return Path(runtime_dir) / "waybar-mcp" if runtime_dir else Path("/tmp/waybar-mcp")


def _parse_list(raw: str | None, allowed: List[str]) -> List[str]:
    if not raw:
        return []

    items = [item.strip() for item in raw.split(",")]
    return [item for item in items if item in allowed]


def _parse_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default

    try:
        return int(raw)

    except ValueError:
        _logger.warning("Ignoring invalid %s=%r, using %d", name, raw, default)
        return default


def _path(environ: Mapping[str, str], name: str, default: Path) -> Path:
    raw = environ.get(name)
    return Path(raw).expanduser() if raw else default


@dataclass
class NotifyMCPSettings:
    """
    Settings for the notification server.

    All values come from environment variables so the server can be configured
    from an MCP client's server entry without command-line flags.
    """
    default_channels: List[str] = field(default_factory=lambda: list(DEFAULT_CHANNELS))
    enabled_tools: List[str] = field(default_factory=lambda: list(TOOL_NAMES))
    app_name: str = "MCP Notify"
    waybar_state_path: Path = Path("/tmp/waybar-mcp/state.json")
    waybar_mode_path: Path = Path("/tmp/waybar-mcp/mode.json")
    waybar_stamp_path: Path = Path("/tmp/waybar-mcp/stamp")
    waybar_signal: int = 8
    waybar_process: str = "waybar"
    waybar_mode_toggle: bool = False
    polybar_module: str = "polybar-notification-mcp"
    polybar_message_path: Path = Path("/tmp/polybar-mcp-message")
    polybar_pipe_path: Path = Path("/tmp/polybar-mcp-pipe")
    quickshell_binary: str | None = None
    quickshell_shell_path: Path = Path("~/.config/quickshell/mcp-notify/shell.qml").expanduser()
    quickshell_target: str = "mcpNotify"
    default_image: str = ""
    log_dir: Path = Path("~/.notify-mcp/logs").expanduser()
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> "NotifyMCPSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Environment to read; defaults to os.environ

        Returns:
            Settings with defaults for anything unset or invalid
        """
        if environ is None:
            environ = os.environ

        defaults = cls()
        runtime_dir = _runtime_dir(environ)

        default_channels = _parse_list(environ.get("MCP_NOTIFY_DEFAULT_CHANNELS"), CHANNELS)
        enabled_tools = TOOL_NAMES
        if environ.get("MCP_NOTIFY_ENABLED_TOOLS"):
            enabled_tools = _parse_list(environ.get("MCP_NOTIFY_ENABLED_TOOLS"), TOOL_NAMES)

        return cls(
            default_channels=default_channels or list(DEFAULT_CHANNELS),
            enabled_tools=list(enabled_tools),
            app_name=environ.get("MCP_NOTIFY_APP_NAME") or defaults.app_name,
            waybar_state_path=_path(environ, "MCP_NOTIFY_WAYBAR_STATE_FILE", runtime_dir / "state.json"),
            waybar_mode_path=_path(environ, "MCP_NOTIFY_WAYBAR_MODE_FILE", runtime_dir / "mode.json"),
            waybar_stamp_path=_path(environ, "MCP_NOTIFY_WAYBAR_STAMP_FILE", runtime_dir / "stamp"),
            waybar_signal=_parse_int(environ, "MCP_NOTIFY_WAYBAR_SIGNAL", defaults.waybar_signal),
            waybar_process=environ.get("MCP_NOTIFY_WAYBAR_PROCESS") or defaults.waybar_process,
            waybar_mode_toggle=environ.get("MCP_NOTIFY_WAYBAR_MODE_TOGGLE", "").strip().lower() in _TRUE_VALUES,
            polybar_module=environ.get("MCP_NOTIFY_POLYBAR_MODULE") or defaults.polybar_module,
            polybar_message_path=_path(environ, "MCP_NOTIFY_POLYBAR_MESSAGE_FILE", defaults.polybar_message_path),
            polybar_pipe_path=_path(environ, "MCP_NOTIFY_POLYBAR_PIPE", defaults.polybar_pipe_path),
            quickshell_binary=environ.get("MCP_NOTIFY_QS_BIN") or None,
            quickshell_shell_path=_path(environ, "MCP_NOTIFY_QS_CONFIG", defaults.quickshell_shell_path),
            quickshell_target=environ.get("MCP_NOTIFY_QS_TARGET") or defaults.quickshell_target,
            default_image=environ.get("MCP_NOTIFY_DEFAULT_IMAGE", defaults.default_image),
            log_dir=_path(environ, "MCP_NOTIFY_LOG_DIR", defaults.log_dir),
            log_level=(environ.get("MCP_NOTIFY_LOG_LEVEL") or defaults.log_level).upper()
        )
