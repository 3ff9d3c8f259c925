"""Tests for error normalization of non-2xx responses."""

import pytest

from easyrag_sdk import (
    APIStatusError,
    AuthenticationError,
    BadRequestError,
    EasyRAGError,
    InsufficientCreditsError,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from easyrag_sdk.exceptions import error_from_response


class TestErrorFromResponse:
    def test_service_error_code_and_details_are_preserved(self):
        error = error_from_response(
            402,
            {"error": "INSUFFICIENT_CREDITS", "details": {"required": 1, "available": 0}},
        )

        assert isinstance(error, InsufficientCreditsError)
        assert isinstance(error, EasyRAGError)
        assert error.status == 402
        assert error.code == "INSUFFICIENT_CREDITS"
        assert error.details == {"required": 1, "available": 0}
        assert str(error) == "INSUFFICIENT_CREDITS"

    def test_message_field_is_used_when_error_is_absent(self):
        error = error_from_response(400, {"message": "datasetId is required"})
        assert error.message == "datasetId is required"
        assert error.code is None

    def test_error_field_wins_over_message(self):
        error = error_from_response(400, {"error": "BAD_REQUEST", "message": "ignored"})
        assert error.message == "BAD_REQUEST"

    @pytest.mark.parametrize("body", [None, {}, "not a dict", ["x"]])
    def test_falls_back_to_http_status(self, body):
        error = error_from_response(418, body)
        assert type(error) is APIStatusError
        assert error.message == "HTTP 418"
        assert error.status == 418
        assert error.code is None
        assert error.details is None

    @pytest.mark.parametrize(
        "status, error_cls",
        [
            (400, BadRequestError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (422, BadRequestError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_status_selects_subclass(self, status, error_cls):
        assert isinstance(error_from_response(status, {}), error_cls)
