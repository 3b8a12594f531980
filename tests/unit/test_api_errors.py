"""
Unit tests for recruit/api/errors.py

Tests status-code classification, message extraction, validation map
flattening and conflict-marker detection.
"""

import pytest
import requests

from recruit.api.errors import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    TransientError,
    ValidationError,
    error_from_exception,
    error_from_response,
    find_conflict_marker,
)


# ===== Status classification =====

class TestErrorFromResponse:
    """Tests for mapping non-2xx responses to ApiError subclasses."""

    @pytest.mark.parametrize("status,expected", [
        (401, AuthError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (409, ConflictError),
        (500, TransientError),
        (503, TransientError),
        (418, ApiError),
    ])
    def test_status_maps_to_class(self, make_response, status, expected):
        """Each status family should produce its own error class."""
        error = error_from_response(make_response(status, {"message": "nope"}))

        assert type(error) is expected
        assert error.status_code == status

    def test_plain_400_is_validation_error(self, make_response):
        """A 400 without a conflict marker is a ValidationError."""
        error = error_from_response(make_response(400, "Page must be >= 1"))

        assert isinstance(error, ValidationError)
        assert error.message == "Page must be >= 1"

    def test_400_with_already_exists_is_conflict(self, make_response):
        """Uniqueness failures arrive as 400 with an 'already exists' text body."""
        error = error_from_response(make_response(400, "Qualification 'MBA' already exists"))

        assert isinstance(error, ConflictError)
        assert error.marker == "already exists"
        assert error.server_message == "Qualification 'MBA' already exists"

    def test_400_with_in_use_is_conflict(self, make_response):
        """Referential-integrity failures carry the 'in use' marker."""
        error = error_from_response(
            make_response(400, "Cannot delete job type as it is currently in use by jobs")
        )

        assert isinstance(error, ConflictError)
        assert error.marker == "in use"

    def test_409_without_marker_is_still_conflict(self, make_response):
        """409 is always a conflict, marker or not."""
        error = error_from_response(make_response(409, {"title": "Conflict"}))

        assert isinstance(error, ConflictError)
        assert error.marker is None

    def test_network_error_is_transient(self):
        """NetworkError should be catchable as TransientError."""
        assert issubclass(NetworkError, TransientError)


# ===== Message extraction =====

class TestMessageExtraction:
    """Tests for picking the server message out of various body shapes."""

    @pytest.mark.parametrize("body,expected", [
        ({"detail": "Detail text", "message": "Message text"}, "Detail text"),
        ({"message": "Message text"}, "Message text"),
        ({"title": "One or more validation errors occurred."}, "One or more validation errors occurred."),
        ({"error": "Boom"}, "Boom"),
        ("  Plain text  ", "Plain text"),
    ])
    def test_server_message(self, make_response, body, expected):
        error = error_from_response(make_response(400, body))

        assert error.server_message == expected
        assert error.message == expected

    def test_empty_body_falls_back_to_status(self, make_response):
        """No body should still produce a readable message."""
        error = error_from_response(make_response(404))

        assert error.server_message is None
        assert error.message == "HTTP 404"


# ===== Validation maps =====

class TestValidationErrors:
    """Tests for flattening field-level validation errors."""

    def test_model_state_errors_flattened(self, make_response):
        """ModelState shape: {"errors": {"Field": ["msg", ...]}}."""
        body = {
            "title": "One or more validation errors occurred.",
            "errors": {
                "QualificationName": ["The QualificationName field is required."],
                "Salary": ["Must be positive", "Must be a number"],
            },
        }

        error = error_from_response(make_response(400, body))

        assert isinstance(error, ValidationError)
        assert error.validation_errors == {
            "QualificationName": "The QualificationName field is required.",
            "Salary": "Must be positive, Must be a number",
        }

    def test_fluent_validation_list_flattened(self, make_response):
        """FluentValidation shape: [{"propertyName", "errorMessage"}]."""
        body = [
            {"propertyName": "Email", "errorMessage": "Email is required"},
            {"propertyName": "Email", "errorMessage": "Email is invalid"},
            {"propertyName": "Password", "errorMessage": "Too short"},
        ]

        error = error_from_response(make_response(400, body))

        assert error.validation_errors == {
            "Email": "Email is required, Email is invalid",
            "Password": "Too short",
        }

    def test_error_list_kept_separately(self, make_response):
        """{"errors": [...]} is a plain list of messages, not a field map."""
        error = error_from_response(make_response(400, {"errors": ["First", "Second"]}))

        assert error.validation_errors == {}
        assert error.error_list == ["First", "Second"]


# ===== Conflict markers =====

class TestFindConflictMarker:

    @pytest.mark.parametrize("text,expected", [
        ("Skill with this name already exists", "already exists"),
        ("Cannot delete qualification as it is currently IN USE", "in use"),
        ("Something else", None),
        ("", None),
        (None, None),
    ])
    def test_markers(self, text, expected):
        assert find_conflict_marker(text) == expected


# ===== Transport failures =====

class TestErrorFromException:
    """Tests for wrapping requests exceptions."""

    def test_timeout(self):
        error = error_from_exception(requests.exceptions.Timeout("read timed out"))

        assert isinstance(error, NetworkError)
        assert error.message == "Request timed out"
        assert error.status_code is None

    def test_connection_error(self):
        error = error_from_exception(requests.exceptions.ConnectionError("refused"))

        assert isinstance(error, NetworkError)
        assert "Cannot connect to server" in error.message
        assert "refused" in error.message
