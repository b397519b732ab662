"""Main entry point for the desktop notification MCP server."""

import asyncio
from datetime import datetime, timezone
import glob
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from types import TracebackType

from notify_mcp.notify_mcp_server import NotifyMCPServer
from notify_mcp.notify_mcp_settings import NotifyMCPSettings


def setup_logging(log_dir: str, level: str) -> None:
    """Configure logging with timestamped files and rotation."""
    os.makedirs(log_dir, exist_ok=True)

    # Generate timestamp for log filename
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
    log_file = os.path.join(log_dir, f"{timestamp}.log")

    # Keep up to 50 log files, max 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,  # 1MB
        backupCount=49,  # Keep 50 files total (current + 49 backups)
        encoding='utf-8'
    )

    # stdout carries the protocol, so only warnings go to stderr
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING)

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler, console]
    )

    cleanup_old_logs(log_dir, max_logs=50)


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Remove oldest log files if we exceed maximum count."""
    log_files = glob.glob(os.path.join(log_dir, "*.log*"))
    log_files.sort(key=os.path.getctime)  # Sort by creation time

    while len(log_files) > max_logs:
        try:
            os.remove(log_files.pop(0))

        except OSError:
            pass  # Ignore errors removing old logs


def install_global_exception_handler() -> None:
    """Install a global exception handler for uncaught exceptions."""
    logger = logging.getLogger('GlobalExceptionHandler')

    def handle_exception(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: TracebackType | None) -> None:
        """Handle uncaught exceptions and log them."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback),
            stack_info=True
        )

    sys.excepthook = handle_exception


def main() -> int:
    """Main function to run the server."""
    settings = NotifyMCPSettings.from_environment()
    setup_logging(str(settings.log_dir), settings.log_level)
    install_global_exception_handler()

    logger = logging.getLogger("main")
    server = NotifyMCPServer(settings)
    logger.info("Desktop notification MCP server running on stdio")

    try:
        asyncio.run(server.run())

    except KeyboardInterrupt:
        return 0

    except Exception as e:
        logger.critical("Fatal error in main(): %s", str(e), exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
