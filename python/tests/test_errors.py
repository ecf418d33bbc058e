"""Tests for error handling and response envelopes.

Verifies:
- Error envelope shape is correct
- Every error code maps to correct HTTP status
- Unknown exceptions return E_INTERNAL with 500
- Malformed JSON and schema violations return E_INVALID_REQUEST
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from lexinote.errors import (
    ERROR_CODE_TO_STATUS,
    ApiError,
    ApiErrorCode,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    UnauthenticatedError,
    UpstreamError,
)
from lexinote.logging import clear_request_context, set_request_context
from lexinote.responses import error_response, success_response, unhandled_exception_handler
from lexinote.services.translation import TranslationErrorClass


class TestErrorResponse:
    """Tests for error response envelope format."""

    def test_error_response_has_correct_shape(self):
        response = error_response(ApiErrorCode.E_NOTE_NOT_FOUND, "Note not found")

        assert response == {"error": {"code": "E_NOTE_NOT_FOUND", "message": "Note not found"}}

    def test_error_response_includes_request_id_from_context(self):
        set_request_context("req-123")
        try:
            response = error_response(ApiErrorCode.E_INTERNAL, "boom")
        finally:
            clear_request_context()

        assert response["error"]["request_id"] == "req-123"


class TestSuccessResponse:
    def test_success_response_has_data_key(self):
        assert success_response({"id": "123"}) == {"data": {"id": "123"}}

    def test_success_response_with_list(self):
        assert success_response([1, 2]) == {"data": [1, 2]}


class TestErrorCodeToStatus:
    """Tests for error code to HTTP status mapping."""

    def test_all_error_codes_have_status_mapping(self):
        for code in ApiErrorCode:
            assert code in ERROR_CODE_TO_STATUS, f"Missing status mapping for {code}"

    @pytest.mark.parametrize(
        "code,expected_status",
        [
            (ApiErrorCode.E_UNAUTHENTICATED, 401),
            (ApiErrorCode.E_INVALID_CREDENTIALS, 401),
            (ApiErrorCode.E_FORBIDDEN, 403),
            (ApiErrorCode.E_NOTE_NOT_FOUND, 404),
            (ApiErrorCode.E_EMAIL_TAKEN, 409),
            (ApiErrorCode.E_INVALID_REQUEST, 400),
            (ApiErrorCode.E_UNKNOWN_PROVIDER, 400),
            (ApiErrorCode.E_TRANSLATION_FAILED, 502),
            (ApiErrorCode.E_TRANSLATION_TIMEOUT, 504),
            (ApiErrorCode.E_OAUTH_NOT_CONFIGURED, 503),
            (ApiErrorCode.E_PROVIDER_NOT_CONFIGURED, 503),
            (ApiErrorCode.E_INTERNAL, 500),
        ],
    )
    def test_error_code_maps_to_correct_status(self, code: ApiErrorCode, expected_status: int):
        assert ERROR_CODE_TO_STATUS[code] == expected_status

    def test_every_translation_error_class_is_an_api_code(self):
        """Translation failures map to API codes by value."""
        for error_class in TranslationErrorClass:
            assert ApiErrorCode(error_class.value) in ERROR_CODE_TO_STATUS


class TestApiErrorClasses:
    def test_api_error_derives_status_code(self):
        error = ApiError(ApiErrorCode.E_FORBIDDEN, "Access denied")
        assert error.status_code == 403
        assert error.message == "Access denied"

    @pytest.mark.parametrize(
        "error,code,status",
        [
            (NotFoundError(), ApiErrorCode.E_NOT_FOUND, 404),
            (ConflictError(), ApiErrorCode.E_EMAIL_TAKEN, 409),
            (UnauthenticatedError(), ApiErrorCode.E_UNAUTHENTICATED, 401),
            (UpstreamError(), ApiErrorCode.E_UPSTREAM, 502),
            (ConfigurationError(), ApiErrorCode.E_OAUTH_NOT_CONFIGURED, 503),
        ],
    )
    def test_subclass_defaults(self, error: ApiError, code: ApiErrorCode, status: int):
        assert error.code == code
        assert error.status_code == status

    def test_error_classes_match_raised_kinds(self):
        assert {cls.__name__ for cls in ApiError.__subclasses__()} == {
            "NotFoundError",
            "ConflictError",
            "UnauthenticatedError",
            "UpstreamError",
            "ConfigurationError",
        }


class TestExceptionHandlers:
    """Handlers registered by create_app."""

    def test_unknown_route_returns_not_found_envelope(self, public_client: TestClient):
        response = public_client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "E_NOT_FOUND"

    def test_wrong_method_returns_invalid_request_envelope(self, public_client: TestClient):
        response = public_client.post("/health")

        assert response.status_code == 405
        assert response.json()["error"]["code"] == "E_INVALID_REQUEST"

    def test_malformed_json_returns_invalid_request(self, public_client: TestClient):
        response = public_client.post(
            "/auth/register",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "E_INVALID_REQUEST"
        assert response.json()["error"]["message"] == "Malformed JSON body"

    def test_schema_violation_returns_invalid_request(self, public_client: TestClient):
        response = public_client.post("/auth/register", json={"email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "E_INVALID_REQUEST"

    def test_unhandled_exception_returns_internal_without_details(self):
        app = FastAPI()
        app.add_exception_handler(Exception, unhandled_exception_handler)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret database password in message")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["error"]["code"] == "E_INTERNAL"
        assert "secret" not in body["error"]["message"]
