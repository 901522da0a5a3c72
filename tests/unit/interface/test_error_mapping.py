"""Unit tests for domain error to HTTP mapping."""

import pytest

from discuss.domain.error import (
    AuthError,
    ConflictError,
    DomainError,
    InvalidParentError,
    NotFoundError,
    ValidationError,
)
from discuss.interface.error import RETRY_AFTER_SECONDS, to_http_exception


class TestToHttpException:
    """Tests for to_http_exception."""

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (ValidationError("bad content"), 400),
            (NotFoundError("Comment", "123"), 404),
            (InvalidParentError("123", "456"), 404),
            (AuthError("like comments"), 401),
            (ConflictError("like", "123"), 503),
            (DomainError("unexpected"), 500),
        ],
    )
    def test_status_codes(self, error, status_code):
        """Each error kind maps to its status code."""
        # Act
        exc = to_http_exception(error)

        # Assert
        assert exc.status_code == status_code
        assert exc.detail == str(error)

    def test_auth_error_challenges_bearer(self):
        """401 responses advertise the bearer scheme."""
        # Act
        exc = to_http_exception(AuthError("create comments"))

        # Assert
        assert exc.headers == {"WWW-Authenticate": "Bearer"}

    def test_conflict_sets_retry_after(self):
        """Transient conflicts tell the client when to retry."""
        # Act
        exc = to_http_exception(ConflictError("like", "123"))

        # Assert
        assert exc.headers == {"Retry-After": str(RETRY_AFTER_SECONDS)}
