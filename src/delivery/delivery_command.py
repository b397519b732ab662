"""Execution of external notification commands."""

import asyncio
from dataclasses import dataclass
import logging
import shlex
from typing import Awaitable, Callable, List


@dataclass
class CommandResult:
    """Outcome of running an external command."""
    argv: List[str]
    returncode: int | None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None  # Set when the process could not be started

    @property
    def succeeded(self) -> bool:
        """True if the process started and exited with status 0."""
        return self.error is None and self.returncode == 0

    def command_line(self) -> str:
        """Get the command as a shell-quoted string, for messages."""
        return shlex.join(self.argv)

    def describe_failure(self) -> str:
        """
        Describe why the command failed.

        Returns:
            Human-readable failure reason including the spawn error or the exit
            code with stderr and stdout
        """
        if self.error is not None:
            return f"failed to start `{self.command_line()}`: {self.error}"

        description = f"`{self.command_line()}` exited with code {self.returncode}"
        stderr = self.stderr.strip()
        stdout = self.stdout.strip()
        if stderr:
            description += f"; stderr: {stderr}"

        if stdout:
            description += f"; stdout: {stdout}"

        return description


CommandRunner = Callable[[List[str]], Awaitable[CommandResult]]


_logger = logging.getLogger("DeliveryCommand")


async def run_command(argv: List[str]) -> CommandResult:
    """
    Run a command without a shell and wait for it to exit.

    Args:
        argv: Program and arguments

    Returns:
        CommandResult describing the outcome; start-up failures are reported in
        the result rather than raised
    """
    _logger.debug("Running: %s", shlex.join(argv))

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )

    except OSError as e:
        _logger.debug("Failed to start %s: %s", argv[0], str(e))
        return CommandResult(argv=argv, returncode=None, error=str(e))

    stdout, stderr = await process.communicate()
    result = CommandResult(
        argv=argv,
        returncode=process.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace")
    )

    if not result.succeeded:
        _logger.debug("Command failed: %s", result.describe_failure())

    return result
