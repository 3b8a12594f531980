"""
Centralized logging configuration for recruit-console.

Provides tagged logging with page and resource context for easy debugging.
"""

import logging
import sys
from typing import Optional


class ConsoleLogger:
    """
    Tagged logger for page and resource operations.

    Adds contextual information like page and resource name to all log messages.
    """

    def __init__(
        self,
        name: str,
        page: Optional[str] = None,
        resource: Optional[str] = None,
    ):
        """
        Initialize console logger.

        Args:
            name: Logger name (usually __name__)
            page: Optional page name (e.g., "skills", "offer_letters")
            resource: Optional resource name (e.g., "skills", "qualification")
        """
        self.logger = logging.getLogger(name)
        self.page = page
        self.resource = resource

    def _format_message(self, message: str) -> str:
        """Add contextual prefix to message."""
        prefix_parts = []
        if self.page:
            prefix_parts.append(f"[page:{self.page}]")
        if self.resource:
            prefix_parts.append(f"[resource:{self.resource}]")

        if prefix_parts:
            return f"{' '.join(prefix_parts)} {message}"
        return message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_message(message), **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_message(message), **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_message(message), **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_message(message), **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message), **kwargs)


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ("simple" or "json")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    if format == "json":
        formatter = logging.Formatter(
            '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(
    name: str,
    page: Optional[str] = None,
    resource: Optional[str] = None,
) -> ConsoleLogger:
    """
    Get a tagged logger instance.

    Args:
        name: Logger name (usually __name__)
        page: Optional page name
        resource: Optional resource name

    Returns:
        ConsoleLogger instance
    """
    return ConsoleLogger(name, page, resource)
