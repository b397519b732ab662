"""Status messages shown in a Polybar hook module."""

from datetime import datetime
import json
import logging
import os
from pathlib import Path
import stat
import time
from typing import Any, Awaitable, Callable, Dict, List, Tuple

from delivery.delivery_command import CommandRunner, run_command
from delivery.delivery_exceptions import DeliveryFailure
from delivery.delivery_result import DeliveryResult
from delivery.delivery_revert_timer import DeliveryRevertTimer


DEFAULT_MODULE = "polybar-notification-mcp"
DEFAULT_MESSAGE_PATH = Path("/tmp/polybar-mcp-message")
DEFAULT_PIPE_PATH = Path("/tmp/polybar-mcp-pipe")
DEFAULT_DURATION_SECONDS = 8
DEFAULT_COLOR = "#ffffff"
DEFAULT_BACKGROUND = "#333333"


class PolybarDelivery:
    """
    Shows messages in Polybar, trying three mechanisms in order.

    1. polybar-msg hook: switch the module to its message hook.
    2. Communication files: write the message to a named pipe and a message file.
    3. xsetroot: set the root window name, which many bars display.

    The revert that runs after the duration undoes whichever mechanism succeeded.
    When a newer message lands through a different mechanism, the older
    mechanism is reverted first so the bar does not keep showing both.
    """

    def __init__(
        self,
        module: str = DEFAULT_MODULE,
        message_path: Path = DEFAULT_MESSAGE_PATH,
        pipe_path: Path = DEFAULT_PIPE_PATH,
        run: CommandRunner = run_command,
        revert_timer: DeliveryRevertTimer | None = None
    ) -> None:
        """
        Initialize Polybar delivery.

        Args:
            module: Name of the Polybar hook module
            message_path: JSON file read by the module
            pipe_path: Named pipe the module may be listening on
            run: Command runner used for polybar-msg and xsetroot
            revert_timer: Timer used for the deferred revert; one is created if not given
        """
        self._module = module
        self._message_path = message_path
        self._pipe_path = pipe_path
        self._run = run
        self._revert_timer = revert_timer or DeliveryRevertTimer("polybar")
        self._active_revert: Tuple[str, Callable[[], Awaitable[None]]] | None = None
        self._logger = logging.getLogger("PolybarDelivery")

    @property
    def revert_timer(self) -> DeliveryRevertTimer:
        """Timer holding the pending revert, if any."""
        return self._revert_timer

    def _write_message_file(self, data: Dict[str, Any]) -> None:
        self._message_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._message_path, 'w', encoding='utf-8') as f:
            f.write(json.dumps(data))

    def _write_pipe(self, data: Dict[str, Any]) -> None:
        # Best effort: a missing pipe or one without a reader is not an error
        try:
            if not stat.S_ISFIFO(os.stat(self._pipe_path).st_mode):
                return

            fd = os.open(self._pipe_path, os.O_WRONLY | os.O_NONBLOCK)

        except OSError as e:
            self._logger.debug("Skipping polybar pipe %s: %s", self._pipe_path, str(e))
            return

        try:
            os.write(fd, (json.dumps(data) + "\n").encode("utf-8"))

        except OSError as e:
            self._logger.debug("Failed to write polybar pipe %s: %s", self._pipe_path, str(e))

        finally:
            os.close(fd)

    def _file_payload(self, message: str, color: str, background: str, duration: int) -> Dict[str, Any]:
        return {
            "message": message,
            "color": color,
            "background": background,
            "duration": duration,
            "timestamp": int(time.time() * 1000)
        }

    async def _deliver_hook(self, message: str, duration_seconds: int, _color: str, _background: str) -> DeliveryResult:
        try:
            self._write_message_file({"message": message})

        except OSError as e:
            return DeliveryResult.failure(f"cannot write {self._message_path}: {str(e)}")

        result = await self._run(["polybar-msg", "hook", self._module, "1"])
        if not result.succeeded:
            return DeliveryResult.failure(result.describe_failure())

        return DeliveryResult.success(f"Message sent to polybar via polybar-msg (duration: {duration_seconds}s)")

    async def _revert_hook(self, _color: str, _background: str) -> None:
        self._write_message_file({"message": ""})
        result = await self._run(["polybar-msg", "hook", self._module, "2"])
        if not result.succeeded:
            self._logger.warning("Failed to restore polybar hook: %s", result.describe_failure())

    async def _deliver_files(self, message: str, duration_seconds: int, color: str, background: str) -> DeliveryResult:
        data = self._file_payload(message, color, background, duration_seconds)
        self._write_pipe(data)

        try:
            self._write_message_file(data)

        except OSError as e:
            return DeliveryResult.failure(f"cannot write {self._message_path}: {str(e)}")

        return DeliveryResult.success(
            f"Message written to polybar communication files (duration: {duration_seconds}s)"
        )

    async def _revert_files(self, color: str, background: str) -> None:
        data = self._file_payload("", color, background, 0)
        self._write_pipe(data)
        self._write_message_file(data)

    async def _deliver_xsetroot(self, message: str, duration_seconds: int, _color: str, _background: str) -> DeliveryResult:
        display_message = f"{message} [{datetime.now().strftime('%H:%M:%S')}]"
        result = await self._run(["xsetroot", "-name", display_message])
        if not result.succeeded:
            return DeliveryResult.failure(result.describe_failure())

        return DeliveryResult.success(f"Message set via xsetroot (duration: {duration_seconds}s)")

    async def _revert_xsetroot(self, _color: str, _background: str) -> None:
        result = await self._run(["xsetroot", "-name", ""])
        if not result.succeeded:
            self._logger.warning("Failed to reset xsetroot: %s", result.describe_failure())

    async def _revert_superseded(self, name: str, revert: Callable[[], Awaitable[None]]) -> None:
        self._logger.info("Reverting superseded polybar %s display", name)
        try:
            await revert()

        except OSError as e:
            self._logger.warning("Failed to revert superseded polybar %s display: %s", name, str(e))

    def _strategies(self) -> List[Tuple[str, Callable[..., Awaitable[DeliveryResult]], Callable[..., Awaitable[None]]]]:
        return [
            ("polybar-msg", self._deliver_hook, self._revert_hook),
            ("files", self._deliver_files, self._revert_files),
            ("xsetroot", self._deliver_xsetroot, self._revert_xsetroot)
        ]

    async def display_message(
        self,
        message: str,
        duration_seconds: int = DEFAULT_DURATION_SECONDS,
        color: str = DEFAULT_COLOR,
        background: str = DEFAULT_BACKGROUND
    ) -> str:
        """
        Show a message in Polybar until the duration elapses.

        Args:
            message: Message to display
            duration_seconds: Seconds before the message is cleared; 0 clears immediately
            color: Foreground color passed to the module
            background: Background color passed to the module

        Returns:
            Status naming the mechanism that delivered the message

        Raises:
            DeliveryFailure: If every mechanism failed
        """
        if duration_seconds < 0:
            raise ValueError(f"Duration cannot be negative: {duration_seconds}")

        # The older revert is replayed only if a different mechanism takes over below
        superseded = self._active_revert if self._revert_timer.cancel() else None
        self._active_revert = None

        failures: List[Tuple[str, str]] = []
        for name, deliver, revert in self._strategies():
            if superseded is not None and superseded[0] != name:
                await self._revert_superseded(*superseded)
                superseded = None

            result = await deliver(message, duration_seconds, color, background)
            if result.succeeded:
                async def revert_display(revert: Callable[..., Awaitable[None]] = revert) -> None:
                    await revert(color, background)

                self._active_revert = (name, revert_display)
                self._revert_timer.schedule(duration_seconds, revert_display)
                return result.message

            self._logger.warning("Polybar %s failed: %s", name, result.message)
            failures.append((name, result.message))

        details = ", ".join(f"{name} error: {error}" for name, error in failures)
        raise DeliveryFailure(
            f"Failed to display polybar message: all polybar methods failed. {details}",
            [error for _, error in failures]
        )

    async def clear_message(self) -> str:
        """
        Clear the current message now instead of waiting for its duration.

        Returns:
            Status describing whether there was a message to clear
        """
        self._active_revert = None
        if await self._revert_timer.flush():
            return "Polybar message cleared"

        return "No polybar message to clear"
