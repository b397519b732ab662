"""Popup notifications through a desktop notification daemon."""

import logging
from typing import Callable, List, Tuple

from delivery.delivery_command import CommandRunner, run_command
from delivery.delivery_exceptions import DeliveryFailure


URGENCIES = ["low", "normal", "critical"]
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_APP_NAME = "MCP Notify"


class PopupDelivery:
    """
    Shows popup notifications, trying notify-send first and dunstify second.

    The two commands accept the same options with different grammars: notify-send
    takes combined --flag=value long options, dunstify takes short flags followed
    by separate value tokens.
    """

    def __init__(self, app_name: str = DEFAULT_APP_NAME, run: CommandRunner = run_command) -> None:
        """
        Initialize popup delivery.

        Args:
            app_name: Application name attached to notify-send popups
            run: Command runner used to invoke the notification commands
        """
        self._app_name = app_name
        self._run = run
        self._logger = logging.getLogger("PopupDelivery")

    def _notify_send_args(self, title: str, message: str, urgency: str, timeout_ms: int, icon: str | None) -> List[str]:
        args = [
            "notify-send",
            f"--urgency={urgency}",
            f"--expire-time={timeout_ms}"
        ]
        if icon:
            args.append(f"--icon={icon}")

        args.append(f"--app-name={self._app_name}")
        args.extend([title, message])
        return args

    def _dunstify_args(self, title: str, message: str, urgency: str, timeout_ms: int, icon: str | None) -> List[str]:
        args = ["dunstify", "-u", urgency, "-t", str(timeout_ms)]
        if icon:
            args.extend(["-I", icon])

        args.extend([title, message])
        return args

    def _strategies(self) -> List[Tuple[str, Callable[..., List[str]]]]:
        return [
            ("notify-send", self._notify_send_args),
            ("dunstify", self._dunstify_args)
        ]

    async def show_popup(
        self,
        title: str,
        message: str,
        urgency: str = "normal",
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        icon: str | None = None
    ) -> str:
        """
        Show a popup notification.

        Args:
            title: Popup title
            message: Popup body
            urgency: One of "low", "normal" or "critical"
            timeout_ms: How long the popup stays visible; 0 asks the daemon not to expire it
            icon: Optional icon name or path

        Returns:
            Status naming the command that delivered the popup

        Raises:
            DeliveryFailure: If every notification command failed
        """
        if urgency not in URGENCIES:
            raise ValueError(f"Invalid urgency: {urgency}")

        if timeout_ms < 0:
            raise ValueError(f"Timeout cannot be negative: {timeout_ms}")

        failures: List[Tuple[str, str]] = []
        for command_name, build_args in self._strategies():
            result = await self._run(build_args(title, message, urgency, timeout_ms, icon))
            if result.succeeded:
                if failures:
                    self._logger.info("Popup delivered via %s after %d failure(s)", command_name, len(failures))

                return f"Notification sent via {command_name} with urgency: {urgency}, timeout: {timeout_ms}ms"

            self._logger.warning("%s failed: %s", command_name, result.describe_failure())
            failures.append((command_name, result.describe_failure()))

        names = " and ".join(name for name, _ in failures)
        details = ", ".join(f"{name} error: {error}" for name, error in failures)
        prefix = "Both" if len(failures) == 2 else "All of"
        raise DeliveryFailure(f"{prefix} {names} failed. {details}", [error for _, error in failures])
