"""
Centralized error bookkeeping for recruit-console controllers.

Every failure is contained to the controller that triggered it. The
controllers record failures here so callers (the CLI, tests) can inspect
what went wrong without parsing log output.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional


@dataclass
class OperationFailure:
    """
    Structured information about a failed page operation.
    """

    page: str  # e.g., "skills", "offer_letters"
    operation: str  # e.g., "load", "create", "delete"
    message: str  # what the user was shown
    status_code: Optional[int] = None
    error_type: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "page": self.page,
            "operation": self.operation,
            "message": self.message,
            "status_code": self.status_code,
            "error_type": self.error_type,
            "timestamp": self.timestamp,
        }


class ErrorCollector:
    """
    Collects failures during a page session.

    Provides aggregation and summary capabilities for diagnostics.
    """

    def __init__(self):
        self.failures: List[OperationFailure] = []

    def add(self, failure: OperationFailure) -> None:
        """Add a failure to the collection."""
        self.failures.append(failure)

    def add_failure(
        self,
        page: str,
        operation: str,
        message: str,
        exception: Optional[Exception] = None,
    ) -> OperationFailure:
        """Convenience method to add a failure from an exception."""
        failure = OperationFailure(
            page=page,
            operation=operation,
            message=message,
            status_code=getattr(exception, "status_code", None),
            error_type=type(exception).__name__ if exception else None,
        )
        self.failures.append(failure)
        return failure

    @property
    def last(self) -> Optional[OperationFailure]:
        return self.failures[-1] if self.failures else None

    def has_failures(self) -> bool:
        return bool(self.failures)

    def get_messages(self) -> List[str]:
        return [f.message for f in self.failures]

    def summary(self) -> Dict[str, object]:
        """Get failure summary statistics."""
        by_operation: Dict[str, int] = {}
        for failure in self.failures:
            by_operation[failure.operation] = by_operation.get(failure.operation, 0) + 1
        return {
            "total": len(self.failures),
            "by_operation": by_operation,
        }

    def clear(self) -> None:
        self.failures.clear()


def log_on_exception(
    logger: logging.Logger,
    operation: str,
    level: int = logging.WARNING,
    include_traceback: bool = False,
):
    """
    Context manager for logging exceptions without swallowing them.

    Usage:
        with log_on_exception(logger, "save token file", level=logging.ERROR):
            path.write_text(token)

    Args:
        logger: Logger instance to use
        operation: Operation description for the log message
        level: Log level (default: WARNING)
        include_traceback: Whether to include stack trace in log
    """

    class ExceptionLogger:
        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is not None:
                logger.log(level, f"[{operation}] Failed: {exc_val}", exc_info=include_traceback)
            # Return False to not suppress the exception
            return False

    return ExceptionLogger()
