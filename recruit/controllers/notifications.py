"""
Notification layer: transient success/error toasts.

Toasts expire after a time to live. Error toasts are built from the raw
failure with this precedence:

    field-level validation map -> server detail/message -> fallback

Conflict markers ("already exists", "in use") map to page-specific
messages, and a 401 produces no toast at all: the global logout redirect
has already taken over.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..api.errors import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NetworkError,
    TransientError,
)

logger = logging.getLogger(__name__)

GENERIC_FALLBACK = "Something went wrong. Please try again."
CONNECTION_MESSAGE = "Unable to connect to the server. Please check your internet connection."
FORBIDDEN_MESSAGE = "You don't have permission to perform this action."


class ToastKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Toast:
    kind: ToastKind
    message: str
    created_at: float
    ttl: float
    field_errors: Dict[str, str] = field(default_factory=dict)

    def expired(self, now: float) -> bool:
        return now - self.created_at >= self.ttl


def extract_error_message(
    error: Optional[BaseException],
    fallback: str = GENERIC_FALLBACK,
    conflict_messages: Optional[Dict[str, str]] = None,
) -> str:
    """
    Pick the most specific human message for a failure.

    Args:
        error: The raised exception (ApiError or anything else)
        fallback: Shown when nothing more specific is available
        conflict_messages: Marker -> message (e.g. {"already exists":
            "This qualification already exists"})

    Returns:
        Message to show
    """
    if not isinstance(error, ApiError):
        return fallback

    if isinstance(error, NetworkError):
        return CONNECTION_MESSAGE

    if isinstance(error, ConflictError) and conflict_messages and error.marker in conflict_messages:
        return conflict_messages[error.marker]

    if error.validation_errors:
        return ". ".join(error.validation_errors.values())

    if error.error_list:
        return ", ".join(error.error_list)

    # Server 5xx text is an exception dump, not a user message
    if isinstance(error, TransientError):
        return fallback

    if error.server_message:
        return error.server_message

    if isinstance(error, ForbiddenError):
        return FORBIDDEN_MESSAGE

    return fallback


class Notifier:
    """
    Collects transient toasts.

    A UI shell subscribes to render toasts as they arrive; the CLI reads
    active() after each command.
    """

    def __init__(
        self,
        ttl_seconds: float = 4.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._toasts: List[Toast] = []
        self._lock = threading.Lock()
        self._listeners: List[Callable[[Toast], None]] = []

    def subscribe(self, listener: Callable[[Toast], None]) -> None:
        self._listeners.append(listener)

    def _push(self, toast: Toast) -> Toast:
        with self._lock:
            self._toasts.append(toast)
        for listener in self._listeners:
            listener(toast)
        return toast

    def success(self, message: str) -> Toast:
        logger.info(message)
        return self._push(Toast(ToastKind.SUCCESS, message, self.clock(), self.ttl_seconds))

    def error(
        self,
        message: str,
        error: Optional[BaseException] = None,
        conflict_messages: Optional[Dict[str, str]] = None,
    ) -> Optional[Toast]:
        """
        Show an error toast.

        Args:
            message: Fallback text ("Failed to load skills")
            error: Raw failure to extract a more specific message from
            conflict_messages: Marker -> page-specific message

        Returns:
            The toast, or None for a 401 (logout redirect takes over)
        """
        if isinstance(error, AuthError):
            logger.info(f"Suppressing toast after 401: {message}")
            return None

        text = extract_error_message(error, fallback=message, conflict_messages=conflict_messages)
        if error is not None:
            logger.warning(f"{message}: {error!r}")
        else:
            logger.warning(text)

        field_errors = dict(error.validation_errors) if isinstance(error, ApiError) else {}
        return self._push(Toast(ToastKind.ERROR, text, self.clock(), self.ttl_seconds, field_errors))

    def active(self) -> List[Toast]:
        """Non-expired toasts, oldest first. Expired ones are dropped."""
        now = self.clock()
        with self._lock:
            self._toasts = [t for t in self._toasts if not t.expired(now)]
            return list(self._toasts)

    def dismiss(self, toast: Toast) -> None:
        with self._lock:
            if toast in self._toasts:
                self._toasts.remove(toast)

    def clear(self) -> None:
        with self._lock:
            self._toasts.clear()


REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"


@dataclass(frozen=True)
class EntityMessages:
    """
    Toast texts for one kind of record.

    ``EntityMessages("job type")`` yields "Job type created successfully",
    "Failed to save job type", "Failed to load job types" and so on.
    """

    entity: str
    plural: Optional[str] = None
    required: Dict[str, str] = field(default_factory=dict)
    conflicts: Dict[str, str] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return self.entity[:1].upper() + self.entity[1:]

    @property
    def created(self) -> str:
        return f"{self.title} created successfully"

    @property
    def updated(self) -> str:
        return f"{self.title} updated successfully"

    @property
    def deleted(self) -> str:
        return f"{self.title} deleted successfully"

    @property
    def save_failed(self) -> str:
        return f"Failed to save {self.entity}"

    @property
    def delete_failed(self) -> str:
        return f"Failed to delete {self.entity}"

    @property
    def load_failed(self) -> str:
        return f"Failed to load {self.plural or self.entity + 's'}"

    @property
    def detail_failed(self) -> str:
        return f"Failed to load {self.entity} details"

    def required_message(self, field_name: str) -> str:
        return self.required.get(field_name, REQUIRED_FIELDS_MESSAGE)

    def action_done(self, action: str) -> str:
        """``action_done("closed")`` -> "Position closed successfully"."""
        return f"{self.title} {action} successfully"

    def action_failed(self, action: str) -> str:
        """``action_failed("close")`` -> "Failed to close position"."""
        return f"Failed to {action} {self.entity}"
