"""Status messages shown in a Waybar custom module."""

import asyncio
import logging
from pathlib import Path
from typing import List

from delivery.delivery_command import CommandResult, CommandRunner, run_command
from delivery.delivery_revert_timer import DeliveryRevertTimer
from delivery.waybar_state import (
    BAR_MODES, BarDisplayState, read_stamp_mtime, read_state, write_mode, write_state
)


DEFAULT_DURATION_SECONDS = 8
DEFAULT_SIGNAL_NUMBER = 8
DEFAULT_PROCESS_NAME = "waybar"
RELOAD_SIGNAL = "SIGUSR2"


class WaybarDelivery:
    """
    Drives a Waybar custom module through its state file and signals.

    The module's exec script prints the state file and touches a stamp file each
    time it runs. After sending the refresh signal the stamp's modification time
    tells us whether the module actually re-ran, which a successful pkill alone
    does not.
    """

    def __init__(
        self,
        state_path: Path,
        mode_path: Path,
        stamp_path: Path | None = None,
        signal_number: int = DEFAULT_SIGNAL_NUMBER,
        process_name: str = DEFAULT_PROCESS_NAME,
        mode_toggle: bool = False,
        stamp_settle_seconds: float = 0.3,
        run: CommandRunner = run_command,
        revert_timer: DeliveryRevertTimer | None = None
    ) -> None:
        """
        Initialize Waybar delivery.

        Args:
            state_path: JSON state file read by the module
            mode_path: JSON mode file read by the bar configuration
            stamp_path: File the module touches when it runs; None disables refresh detection
            signal_number: Module refresh signal, sent as RTMIN+n
            process_name: Exact name of the bar process to signal
            mode_toggle: Whether to switch the bar into "mcp" mode while a message is shown
            stamp_settle_seconds: Time allowed for the module to run after the refresh signal
            run: Command runner used to send signals
            revert_timer: Timer used for the deferred revert; one is created if not given
        """
        self._state_path = state_path
        self._mode_path = mode_path
        self._stamp_path = stamp_path
        self._signal_number = signal_number
        self._process_name = process_name
        self._mode_toggle = mode_toggle
        self._stamp_settle_seconds = stamp_settle_seconds
        self._run = run
        self._revert_timer = revert_timer or DeliveryRevertTimer("waybar")
        self._mode: str | None = "default"
        self._logger = logging.getLogger("WaybarDelivery")

    @property
    def tracked_mode(self) -> str | None:
        """Bar mode as last confirmed by a successful reload signal; None while a switch is unconfirmed."""
        return self._mode

    @property
    def revert_timer(self) -> DeliveryRevertTimer:
        """Timer holding the pending revert, if any."""
        return self._revert_timer

    def read_state(self) -> BarDisplayState:
        """Read the payload currently stored in the state file."""
        return read_state(self._state_path)

    async def _send_refresh(self) -> CommandResult:
        return await self._run(["pkill", f"-RTMIN+{self._signal_number}", "-x", self._process_name])

    async def _send_reload(self) -> CommandResult:
        return await self._run(["pkill", f"-{RELOAD_SIGNAL}", "-x", self._process_name])

    async def _switch_mode(self, mode: str) -> bool:
        # A switch cancelled mid-reload leaves the mode unknown, so the next caller redoes it
        previous = self._mode
        write_mode(self._mode_path, mode)
        self._mode = None
        result = await self._send_reload()
        if not result.succeeded:
            self._logger.warning("Failed to reload bar for mode '%s': %s", mode, result.describe_failure())
            self._mode = previous
            return False

        self._mode = mode
        return True

    def _stamp_advanced(self, before: int | None, after: int | None) -> bool:
        if self._stamp_path is None:
            return True

        if after is None:
            return False

        return before is None or after > before

    async def display_message(
        self,
        message: str,
        severity: str = "info",
        pulse: bool = False,
        duration_seconds: int = DEFAULT_DURATION_SECONDS,
        text: str | None = None,
        tooltip: str | None = None
    ) -> str:
        """
        Show a message in the bar module until the duration elapses.

        Degraded delivery (bar not running, module not reacting, mode toggle
        failing) is reported as warnings in the returned status, not raised.

        Args:
            message: Message to display
            severity: One of "info", "warn" or "crit"
            pulse: Whether the module should animate
            duration_seconds: Seconds before the ready payload is restored; 0 reverts immediately
            text: Bar text override
            tooltip: Tooltip override

        Returns:
            Status describing the queued message and any warnings

        Raises:
            ValueError: If severity or duration is invalid
            OSError: If the state or mode file cannot be written
        """
        if duration_seconds < 0:
            raise ValueError(f"Duration cannot be negative: {duration_seconds}")

        state = BarDisplayState.for_message(message, severity, pulse, text, tooltip)

        # An older revert falling due during the awaits below must not clear this message
        self._revert_timer.cancel()
        write_state(self._state_path, state)

        stamp_before = read_stamp_mtime(self._stamp_path)
        refresh = await self._send_refresh()
        if refresh.succeeded and self._stamp_path is not None:
            await asyncio.sleep(self._stamp_settle_seconds)

        stamp_after = read_stamp_mtime(self._stamp_path)
        refreshed = self._stamp_advanced(stamp_before, stamp_after)

        mode_ok = True
        if self._mode_toggle and self._mode != "mcp":
            mode_ok = await self._switch_mode("mcp")

        reloaded = False
        if refresh.succeeded and not refreshed:
            self._logger.warning(
                "Signal RTMIN+%d delivered but module did not refresh, sending %s",
                self._signal_number, RELOAD_SIGNAL
            )
            reload = await self._send_reload()
            if reload.succeeded:
                reloaded = True
                mode_ok = True
                if self._mode_toggle:
                    self._mode = "mcp"

        self._revert_timer.schedule(duration_seconds, self._revert)

        warnings: List[str] = []
        if not refresh.succeeded:
            warnings.append(f"warning: refresh signal not delivered ({refresh.describe_failure()})")

        elif not refreshed and reloaded:
            warnings.append(
                f"warning: module did not refresh after RTMIN+{self._signal_number}; sent full reload"
            )

        elif not refreshed:
            warnings.append(
                f"warning: signal delivered but module did not refresh "
                f"(check the module's signal is {self._signal_number})"
            )

        if not mode_ok:
            warnings.append("warning: mode toggle failed")

        status = (
            f"Waybar message queued (severity: {severity}, duration: {duration_seconds}s, "
            f"pulse: {'on' if pulse else 'off'})"
        )
        self._logger.info("%s", status if not warnings else f"{status} with {len(warnings)} warning(s)")
        return "; ".join([status] + warnings)

    async def _restore_ready(self) -> List[str]:
        write_state(self._state_path, BarDisplayState.ready())

        warnings = []
        refresh = await self._send_refresh()
        if not refresh.succeeded:
            warnings.append(f"refresh signal not delivered ({refresh.describe_failure()})")

        if self._mode_toggle and self._mode != "default":
            if not await self._switch_mode("default"):
                warnings.append("mode revert failed")

        return warnings

    async def _revert(self) -> None:
        warnings = await self._restore_ready()
        for warning in warnings:
            self._logger.warning("Waybar revert: %s", warning)

        self._logger.debug("Waybar display reverted to ready")

    async def clear_message(self) -> str:
        """
        Restore the ready payload now, cancelling any pending revert.

        Returns:
            Status describing the clear and any warnings
        """
        self._revert_timer.cancel()
        warnings = await self._restore_ready()
        return "; ".join(["Waybar message cleared"] + [f"warning: {warning}" for warning in warnings])

    async def set_mode(self, mode: str) -> str:
        """
        Switch the bar's mode file and ask the bar to reload.

        Args:
            mode: One of "default" or "mcp"

        Returns:
            Status describing the switch
        """
        if mode not in BAR_MODES:
            raise ValueError(f"Invalid bar mode: {mode}")

        if await self._switch_mode(mode):
            return f"Waybar mode set to {mode}"

        return f"Waybar mode file set to {mode}; warning: reload signal not delivered"
