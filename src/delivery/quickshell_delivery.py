"""Popup overlays in a Quickshell shell over its IPC interface."""

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import List

from delivery.delivery_command import CommandRunner, run_command
from delivery.delivery_result import DeliveryResult


DEFAULT_BINARY = "qs"
DEFAULT_TARGET = "mcpNotify"
DEFAULT_FUNCTION = "notify"
DEFAULT_SHELL_PATH = Path("~/.config/quickshell/mcp-notify/shell.qml").expanduser()
FALLBACK_BINARY_PATHS = [
    Path("/run/current-system/sw/bin/qs"),
    Path("/usr/local/bin/qs"),
    Path("/usr/bin/qs"),
    Path("~/.nix-profile/bin/qs").expanduser()
]


@dataclass
class OverlayRequest:
    """Fields passed positionally to the shell's notify function."""
    title: str
    body: str
    severity: str = "info"
    timeout_seconds: int | None = None
    pattern: str | None = None
    image: str | None = None
    workspace: str | None = None
    app: str | None = None
    color: str | None = None
    transition: str | None = None

    def to_ipc_args(self, default_image: str = "") -> List[str]:
        """
        Encode the request as the function's positional arguments.

        The IPC function has a fixed arity, so fields left unset are passed as
        empty strings, which the shell treats as "use the default".

        Args:
            default_image: Image used when the request does not name one

        Returns:
            Nine arguments, or ten when a transition is given
        """
        args = [
            self.title,
            self.body,
            self.severity,
            "" if self.timeout_seconds is None else str(self.timeout_seconds),
            self.pattern or "",
            self.image or default_image,
            self.workspace or "",
            self.app or "",
            self.color or ""
        ]
        if self.transition:
            args.append(self.transition)

        return args


class QuickshellDelivery:
    """Sends overlay popups through `qs ipc call` and checks the shell is listening."""

    def __init__(
        self,
        binary_path: str | None = None,
        shell_path: Path = DEFAULT_SHELL_PATH,
        target: str = DEFAULT_TARGET,
        default_image: str = "",
        fallback_paths: List[Path] | None = None,
        run: CommandRunner = run_command
    ) -> None:
        """
        Initialize Quickshell delivery.

        Args:
            binary_path: Explicitly configured path to the qs binary
            shell_path: Shell definition passed with -p
            target: IPC target name registered by the shell
            default_image: Image used when a request does not name one
            fallback_paths: Install locations checked when no configured binary exists
            run: Command runner used to invoke qs
        """
        self._binary_path = binary_path
        self._shell_path = shell_path
        self._target = target
        self._default_image = default_image
        self._fallback_paths = FALLBACK_BINARY_PATHS if fallback_paths is None else fallback_paths
        self._run = run
        self._logger = logging.getLogger("QuickshellDelivery")

    def resolve_binary(self) -> str:
        """
        Find the qs binary.

        Checks the configured path, then the fallback install locations. When
        none exist plain "qs" is returned to be looked up on PATH, and any
        failure is reported by the invocation itself.

        Returns:
            Path or name of the binary to run
        """
        if self._binary_path and os.access(self._binary_path, os.X_OK):
            return self._binary_path

        for candidate in self._fallback_paths:
            if os.access(candidate, os.X_OK):
                return str(candidate)

        if self._binary_path:
            self._logger.warning("Configured qs binary %s is not executable", self._binary_path)

        return DEFAULT_BINARY

    def _base_args(self) -> List[str]:
        return [self.resolve_binary(), "-p", str(self._shell_path), "ipc"]

    async def send_overlay(self, request: OverlayRequest) -> DeliveryResult:
        """
        Show an overlay popup.

        Args:
            request: Overlay fields

        Returns:
            Successful result, or a failure carrying the exit code, stderr and
            stdout (or the start-up error and the attempted command)
        """
        argv = self._base_args() + ["call", self._target, DEFAULT_FUNCTION] + request.to_ipc_args(self._default_image)
        result = await self._run(argv)
        if not result.succeeded:
            self._logger.warning("Quickshell overlay failed: %s", result.describe_failure())
            return DeliveryResult.failure(f"Quickshell notify failed: {result.describe_failure()}")

        return DeliveryResult.success(f"Overlay sent via quickshell (severity: {request.severity})")

    async def is_ready(self) -> bool:
        """
        Check whether the shell has registered its IPC target.

        Returns:
            True if the target name appears in the IPC listing; any failure counts as not ready
        """
        result = await self._run(self._base_args() + ["show"])
        if not result.succeeded:
            self._logger.debug("Quickshell status check failed: %s", result.describe_failure())
            return False

        return self._target in result.stdout
