"""Cancellable deferred revert of a channel's display state."""

import asyncio
import logging
from typing import Awaitable, Callable


RevertCallback = Callable[[], Awaitable[None]]
SleepFunction = Callable[[float], Awaitable[None]]


class DeliveryRevertTimer:
    """
    Holds at most one pending revert for a channel.

    Scheduling a new revert cancels the pending one first, so an earlier message
    with a longer duration can never clear a newer message. Cancelling and
    re-arming happen without an intervening await.
    """

    def __init__(self, name: str, sleep: SleepFunction = asyncio.sleep) -> None:
        """
        Initialize the timer.

        Args:
            name: Channel name, used in log messages
            sleep: Coroutine function used to wait out the delay
        """
        self._name = name
        self._sleep = sleep
        self._task: asyncio.Task | None = None
        self._callback: RevertCallback | None = None
        self._logger = logging.getLogger("DeliveryRevertTimer")

    def is_pending(self) -> bool:
        """Check whether a revert is scheduled or still running."""
        return self._task is not None and not self._task.done()

    def schedule(self, delay: float, callback: RevertCallback) -> None:
        """
        Arm the timer, replacing any pending revert.

        Must be called from within a running event loop.

        Args:
            delay: Seconds to wait before reverting; negative values are treated as 0
            callback: Coroutine function performing the revert
        """
        self.cancel()
        self._callback = callback
        self._task = asyncio.get_running_loop().create_task(self._run(max(delay, 0.0), callback))
        self._logger.debug("Scheduled %s revert in %ss", self._name, delay)

    def cancel(self) -> bool:
        """
        Cancel the pending revert without running it.

        Returns:
            True if a pending or running revert was cancelled
        """
        task = self._task
        self._task = None
        self._callback = None
        if task is None or task.done():
            return False

        task.cancel()
        self._logger.debug("Cancelled pending %s revert", self._name)
        return True

    async def flush(self) -> bool:
        """
        Run the pending revert now instead of waiting for its delay.

        Returns:
            True if a pending revert was run
        """
        callback = self._callback
        if not self.is_pending() or callback is None:
            return False

        self.cancel()
        await self._invoke(callback)
        return True

    async def _run(self, delay: float, callback: RevertCallback) -> None:
        # The slot stays filled while the callback runs so a newer message can still cancel it
        try:
            await self._sleep(delay)
            await self._invoke(callback)

        finally:
            if self._task is asyncio.current_task():
                self._task = None
                self._callback = None

    async def _invoke(self, callback: RevertCallback) -> None:
        # Nobody awaits a revert, so failures stop here
        try:
            await callback()

        except Exception as e:
            self._logger.error("Failed to revert %s display: %s", self._name, str(e), exc_info=True)
