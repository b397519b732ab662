"""Waybar module state and mode files."""

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any, Dict


SEVERITIES = ["info", "warn", "crit"]
BAR_MODES = ["default", "mcp"]
BELL = "\U0001F514"


@dataclass
class BarDisplayState:
    """Payload read by the Waybar custom module (return-type json)."""
    text: str
    tooltip: str
    css_class: str

    @classmethod
    def ready(cls) -> "BarDisplayState":
        """Get the idle payload shown when no message is active."""
        return cls(text="ready", tooltip="Waiting for notifications", css_class="")

    @classmethod
    def for_message(
        cls,
        message: str,
        severity: str = "info",
        pulse: bool = False,
        text: str | None = None,
        tooltip: str | None = None
    ) -> "BarDisplayState":
        """
        Compose the payload for an active message.

        Args:
            message: Message to display
            severity: One of "info", "warn" or "crit"
            pulse: Whether the module should animate
            text: Bar text override; defaults to a bell followed by the message
            tooltip: Tooltip override; defaults to the message

        Returns:
            Display state with class "active <severity>" and "pulse" when requested
        """
        if severity not in SEVERITIES:
            raise ValueError(f"Invalid severity: {severity}")

        classes = ["active", severity]
        if pulse:
            classes.append("pulse")

        return cls(
            text=text if text is not None else f"{BELL} {message}",
            tooltip=tooltip if tooltip is not None else message,
            css_class=" ".join(classes)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape Waybar expects."""
        return {
            "text": self.text,
            "tooltip": self.tooltip,
            "class": self.css_class
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BarDisplayState":
        """Build a display state from its JSON shape."""
        return cls(
            text=data.get("text", ""),
            tooltip=data.get("tooltip", ""),
            css_class=data.get("class", "")
        )


def _write_json(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    # One write call so a reader never sees a mix of old and new fields
    with open(path, 'w', encoding='utf-8') as f:
        f.write(json.dumps(data))


def write_state(path: Path, state: BarDisplayState) -> None:
    """
    Replace the Waybar state file.

    Args:
        path: State file path; parent directories are created as needed
        state: Payload to write
    """
    _write_json(path, state.to_dict())


def read_state(path: Path) -> BarDisplayState:
    """
    Read the Waybar state file.

    Args:
        path: State file path

    Returns:
        The stored payload

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file does not contain valid JSON
    """
    with open(path, 'r', encoding='utf-8') as f:
        return BarDisplayState.from_dict(json.load(f))


def write_mode(path: Path, mode: str) -> None:
    """
    Replace the Waybar mode file.

    Args:
        path: Mode file path; parent directories are created as needed
        mode: One of "default" or "mcp"
    """
    if mode not in BAR_MODES:
        raise ValueError(f"Invalid bar mode: {mode}")

    _write_json(path, {"mode": mode})


def read_stamp_mtime(path: Path | None) -> int | None:
    """
    Get the modification time of the module's stamp file.

    Args:
        path: Stamp file path, or None when stamp tracking is disabled

    Returns:
        Modification time in nanoseconds, or None if the file does not exist
    """
    if path is None:
        return None

    try:
        return os.stat(path).st_mtime_ns

    except FileNotFoundError:
        return None
