"""Error Hierarchy - verifies boundary status mapping and response envelope.

Tests cover:
    - every error maps to the documented HTTP status
    - to_response() envelope shape
    - FieldValidationError carries field-scoped details
"""

import pytest

from app.core.errors import (
    AlreadyLikedError, CommentNotFoundError, ConcurrencyError, DatabaseError,
    DevConnectorError, ErrorCategory, FieldValidationError, NotLikedError,
    ResourceNotFoundError, StateConflictError, UnauthenticatedError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    "error, status",
    [
        (FieldValidationError("Text is required", "text"), 400),
        (ResourceNotFoundError("Post", "abc"), 404),
        (UnauthorizedError(), 401),
        (UnauthenticatedError(), 401),
        (AlreadyLikedError(), 400),
        (NotLikedError(), 400),
        (CommentNotFoundError("c1"), 400),
        (ConcurrencyError("stale"), 409),
        (DatabaseError("boom", "commit"), 503),
    ],
)
def test_http_status_mapping(error, status):
    assert isinstance(error, DevConnectorError)
    assert error.http_status == status


def test_like_errors_share_state_conflict_base():
    assert issubclass(AlreadyLikedError, StateConflictError)
    assert issubclass(NotLikedError, StateConflictError)


def test_not_found_response_envelope():
    body = ResourceNotFoundError("Post", "abc").to_response()
    error = body["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["message"] == "Post 'abc' not found"
    assert error["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert error["context"] == {"resource_type": "Post", "resource_id": "abc"}
    assert "timestamp" in error


def test_field_validation_response_has_details():
    body = FieldValidationError("Status is required", "status").to_response()
    assert body["error"]["details"] == [
        {"field": "status", "message": "Status is required", "type": "value_error"},
    ]


def test_database_error_message_is_opaque():
    err = DatabaseError("Connection or operational error", "execute")
    assert err.message == "Database execute failed: Connection or operational error"
    assert err.category == ErrorCategory.DATABASE
