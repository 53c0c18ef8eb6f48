"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    GameHubError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    ConflictError,
    DuplicateRecordError,
)


class TestGameHubError:
    def test_gamehub_error_message(self):
        """GameHubError should store message."""
        error = GameHubError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_gamehub_error_default_code(self):
        """GameHubError should default code to class name."""
        error = GameHubError("Test error")
        assert error.code == "GameHubError"

    def test_gamehub_error_custom_code(self):
        """GameHubError should accept custom code."""
        error = GameHubError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_gamehub_error_default_details(self):
        """GameHubError should default details to empty dict."""
        error = GameHubError("Test error")
        assert error.details == {}

    def test_gamehub_error_custom_details(self):
        """GameHubError should accept custom details."""
        error = GameHubError("Test error", details={"key": "value"})
        assert error.details == {"key": "value"}

    def test_gamehub_error_to_dict(self):
        """GameHubError should convert to dict."""
        error = GameHubError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"

    def test_gamehub_error_to_dict_minimal(self):
        """GameHubError.to_dict should work with minimal args."""
        error = GameHubError("Test error")
        result = error.to_dict()

        assert result["error"] == "GameHubError"
        assert result["message"] == "Test error"
        assert result["details"] == {}


class TestNotFoundError:
    def test_not_found_error_inherits_gamehub_error(self):
        """NotFoundError should inherit from GameHubError."""
        error = NotFoundError("Resource not found")
        assert isinstance(error, GameHubError)

    def test_not_found_error_default_code(self):
        """NotFoundError should default code to class name."""
        error = NotFoundError("Resource not found")
        assert error.code == "NotFoundError"


class TestValidationError:
    def test_validation_error_inherits_gamehub_error(self):
        """ValidationError should inherit from GameHubError."""
        error = ValidationError("Invalid input")
        assert isinstance(error, GameHubError)

    def test_validation_error_with_details(self):
        """ValidationError should support field-level details."""
        error = ValidationError(
            "Validation failed",
            details={"fields": {"email": "Invalid format"}}
        )
        assert error.details["fields"]["email"] == "Invalid format"


class TestAuthenticationError:
    def test_authentication_error_inherits_gamehub_error(self):
        """AuthenticationError should inherit from GameHubError."""
        error = AuthenticationError("Invalid token")
        assert isinstance(error, GameHubError)


class TestAuthorizationError:
    def test_authorization_error_inherits_gamehub_error(self):
        """AuthorizationError should inherit from GameHubError."""
        error = AuthorizationError("Insufficient permissions")
        assert isinstance(error, GameHubError)


class TestExternalServiceError:
    def test_external_service_error_inherits_gamehub_error(self):
        """ExternalServiceError should inherit from GameHubError."""
        error = ExternalServiceError("Connection failed", service="catalog")
        assert isinstance(error, GameHubError)

    def test_external_service_error_stores_service(self):
        """ExternalServiceError should store service name."""
        error = ExternalServiceError("Connection failed", service="catalog")
        assert error.service == "catalog"

    def test_external_service_error_includes_service_in_details(self):
        """ExternalServiceError should include service in details."""
        error = ExternalServiceError("Connection failed", service="catalog")
        result = error.to_dict()

        assert result["details"]["service"] == "catalog"

    def test_external_service_error_preserves_other_details(self):
        """ExternalServiceError should preserve other details."""
        error = ExternalServiceError(
            "Connection failed",
            service="catalog",
            details={"status_code": 500}
        )
        result = error.to_dict()

        assert result["details"]["service"] == "catalog"
        assert result["details"]["status_code"] == 500


class TestConflictErrors:
    def test_conflict_error_inherits_gamehub_error(self):
        error = ConflictError("Already exists")
        assert isinstance(error, GameHubError)

    def test_duplicate_record_error(self):
        """DuplicateRecordError should carry the table and constraint."""
        error = DuplicateRecordError("reviews", "reviews_user_id_game_id_key")
        assert isinstance(error, ConflictError)
        assert error.code == "DUPLICATE_RECORD"
        assert error.table == "reviews"
        assert error.details == {
            "table": "reviews",
            "constraint": "reviews_user_id_game_id_key",
        }
