"""
Shared fixtures for delivery tests.
"""
import asyncio
from typing import Callable, List, Tuple

import pytest

from delivery import CommandResult


class FakeCommandRunner:
    """Command runner that records argv and answers from registered handlers."""

    def __init__(self):
        self.calls: List[List[str]] = []
        self._handlers: List[Tuple[List[str], Callable[[List[str]], CommandResult]]] = []
        self._holds: List[Tuple[List[str], asyncio.Event]] = []

    def on(self, prefix, returncode=0, stdout="", stderr="", error=None, action=None):
        """
        Register a canned response for commands starting with prefix.

        Args:
            prefix: Program name, or list of leading argv items
            returncode: Exit status to report, or a list of statuses used in turn (the last one repeats)
            stdout: Captured stdout to report
            stderr: Captured stderr to report
            error: Start-up error; when set the command is reported as not started
            action: Optional callable run with argv before responding
        """
        if isinstance(prefix, str):
            prefix = [prefix]

        returncodes = list(returncode) if isinstance(returncode, list) else [returncode]

        def handler(argv):
            if action is not None:
                action(argv)

            if error is not None:
                return CommandResult(argv=argv, returncode=None, error=error)

            code = returncodes.pop(0) if len(returncodes) > 1 else returncodes[0]
            return CommandResult(argv=argv, returncode=code, stdout=stdout, stderr=stderr)

        self._handlers.append((list(prefix), handler))

    def hold(self, *prefix) -> asyncio.Event:
        """Make the next command starting with prefix wait until the returned event is set."""
        event = asyncio.Event()
        self._holds.append((list(prefix), event))
        return event

    def calls_to(self, *prefix) -> List[List[str]]:
        """Get recorded calls whose argv starts with the given items."""
        return [call for call in self.calls if call[:len(prefix)] == list(prefix)]

    async def __call__(self, argv):
        self.calls.append(list(argv))

        for index, (prefix, event) in enumerate(self._holds):
            if argv[:len(prefix)] == prefix:
                del self._holds[index]
                await event.wait()
                break

        # Longest matching prefix wins
        best = None
        for prefix, handler in self._handlers:
            if argv[:len(prefix)] == prefix and (best is None or len(prefix) > len(best[0])):
                best = (prefix, handler)

        if best is None:
            return CommandResult(
                argv=list(argv),
                returncode=None,
                error=f"[Errno 2] No such file or directory: '{argv[0]}'"
            )

        return best[1](list(argv))


class ManualClock:
    """Sleep replacement whose time only moves when a test advances it."""

    def __init__(self):
        self.now = 0.0
        self.requested: List[float] = []
        self._waiters: List[Tuple[float, asyncio.Future]] = []

    async def sleep(self, delay):
        self.requested.append(delay)
        future = asyncio.get_running_loop().create_future()
        self._waiters.append((self.now + delay, future))
        await future

    async def advance(self, seconds):
        """Move time forward and let every expired sleeper run to completion."""
        # Let newly created tasks reach their sleep before time moves
        await self._yield()
        self.now += seconds
        for deadline, future in list(self._waiters):
            if deadline <= self.now:
                self._waiters.remove((deadline, future))
                if not future.done():
                    future.set_result(None)

        await self._yield()

    async def _yield(self):
        for _ in range(20):
            await asyncio.sleep(0)


@pytest.fixture
def fake_runner():
    """Fixture providing a fake command runner with no commands available."""
    return FakeCommandRunner()


@pytest.fixture
def manual_clock():
    """Fixture providing a manually advanced clock."""
    return ManualClock()
