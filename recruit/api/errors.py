"""
Normalized API errors.

Every failed backend call surfaces as an ApiError subclass carrying the
HTTP status, the most useful server message and any field-level
validation errors. Callers branch on the class, never on raw responses.
"""

from typing import Any, Dict, List, Optional

import requests


# Markers the backend puts in 400/409 bodies for uniqueness and
# referential-integrity failures.
CONFLICT_MARKERS = ("already exists", "in use")


class ApiError(Exception):
    """Base class for every failed backend call."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        validation_errors: Optional[Dict[str, str]] = None,
        error_list: Optional[List[str]] = None,
        body: Any = None,
        server_message: Optional[str] = None,
    ):
        self.message = message
        self.server_message = server_message
        self.status_code = status_code
        self.validation_errors = validation_errors or {}
        self.error_list = error_list or []
        self.body = body
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code!r}, message={self.message!r})"


class ValidationError(ApiError):
    """400 with a field-message map (or a plain bad-request body)."""


class AuthError(ApiError):
    """401 - the session is no longer valid."""


class ForbiddenError(ApiError):
    """403 - authenticated but not allowed."""


class NotFoundError(ApiError):
    """404 - the record does not exist (or was hard-deleted)."""


class ConflictError(ApiError):
    """400/409 whose body carries an "already exists" or "in use" marker."""

    def __init__(self, message: str, marker: Optional[str] = None, **kwargs):
        self.marker = marker
        super().__init__(message, **kwargs)


class TransientError(ApiError):
    """5xx or no response at all. Safe for the user to retry."""


class NetworkError(TransientError):
    """The request never got a response (DNS, refused, timeout)."""


def _parse_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _extract_validation_errors(body: Any) -> Dict[str, str]:
    """
    Flatten field errors to field -> message.

    Handles the ModelState shape ``{"errors": {"Field": ["msg"]}}`` and the
    FluentValidation shape ``[{"propertyName": ..., "errorMessage": ...}]``.
    """
    if isinstance(body, list):
        flattened: Dict[str, str] = {}
        for failure in body:
            if isinstance(failure, dict) and failure.get("propertyName"):
                name = failure["propertyName"]
                message = str(failure.get("errorMessage", ""))
                flattened[name] = f"{flattened[name]}, {message}" if name in flattened else message
        return flattened
    if not isinstance(body, dict):
        return {}
    errors = body.get("errors")
    if not isinstance(errors, dict):
        return {}
    flattened = {}
    for field_name, messages in errors.items():
        if isinstance(messages, list):
            flattened[field_name] = ", ".join(str(m) for m in messages)
        else:
            flattened[field_name] = str(messages)
    return flattened


def _extract_message(body: Any) -> Optional[str]:
    if isinstance(body, str):
        return body.strip() or None
    if isinstance(body, dict):
        for key in ("detail", "message", "title", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def find_conflict_marker(text: Optional[str]) -> Optional[str]:
    """Return the conflict marker contained in ``text``, if any."""
    if not text:
        return None
    lowered = text.lower()
    for marker in CONFLICT_MARKERS:
        if marker in lowered:
            return marker
    return None


def error_from_response(response: requests.Response) -> ApiError:
    """
    Build the ApiError subclass matching a non-2xx response.

    Args:
        response: The failed response

    Returns:
        An ApiError instance (not raised)
    """
    status = response.status_code
    body = _parse_body(response)
    server_message = _extract_message(body)
    message = server_message or f"HTTP {status}"
    validation_errors = _extract_validation_errors(body)
    error_list = []
    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        error_list = [str(e) for e in body["errors"]]

    kwargs = dict(
        status_code=status,
        validation_errors=validation_errors,
        error_list=error_list,
        body=body,
        server_message=server_message,
    )

    if status == 401:
        return AuthError(message, **kwargs)
    if status == 403:
        return ForbiddenError(message, **kwargs)
    if status == 404:
        return NotFoundError(message, **kwargs)
    if status in (400, 409):
        marker = find_conflict_marker(message)
        if marker or status == 409:
            return ConflictError(message, marker=marker, **kwargs)
        return ValidationError(message, **kwargs)
    if status >= 500:
        return TransientError(message, **kwargs)
    return ApiError(message, **kwargs)


def error_from_exception(exc: requests.exceptions.RequestException) -> NetworkError:
    """Wrap a transport-level requests failure."""
    if isinstance(exc, requests.exceptions.Timeout):
        return NetworkError("Request timed out")
    return NetworkError(f"Cannot connect to server: {exc}")
