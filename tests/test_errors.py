from http import HTTPStatus

import pytest

from eros_engine.errors import (
    AppError,
    AuthError,
    BadRequest,
    ConfigError,
    DecodeError,
    Forbidden,
    HttpError,
    Internal,
    LlmError,
    NotFound,
    ProviderError,
    StatusError,
    Unauthorized,
)


def test_status_error_keeps_status_and_body():
    err = StatusError(502, "bad gateway")
    assert err.status == 502
    assert err.body == "bad gateway"
    assert str(err).startswith("non-success status 502")
    assert str(err).endswith("bad gateway")


def test_llm_errors_share_base_and_prefix_messages():
    cases = [
        (ConfigError("voyage: api key not set"), "config error: "),
        (ProviderError("voyage: empty data array"), "provider error: "),
        (HttpError("boom"), "http transport error: "),
        (DecodeError("boom"), "response decode error: "),
    ]
    for err, prefix in cases:
        assert str(err).startswith(prefix)
        with pytest.raises(LlmError):
            raise err


def test_config_error_detail():
    err = ConfigError("voyage: empty input text")
    assert err.detail == "voyage: empty input text"
    assert str(err) == "config error: voyage: empty input text"


@pytest.mark.parametrize(
    ("cls", "status", "code"),
    [
        (NotFound, HTTPStatus.NOT_FOUND, "not_found"),
        (Unauthorized, HTTPStatus.UNAUTHORIZED, "unauthorized"),
        (BadRequest, HTTPStatus.BAD_REQUEST, "bad_request"),
        (Forbidden, HTTPStatus.FORBIDDEN, "forbidden"),
        (Internal, HTTPStatus.INTERNAL_SERVER_ERROR, "internal"),
    ],
)
def test_app_error_response_mapping(cls, status, code):
    err = cls("session")
    got_status, body = err.to_response()
    assert got_status == status
    assert body["error"] == code
    assert body["message"] == str(err)
    assert body["message"].endswith("session")


def test_not_found_message():
    assert str(NotFound("session not found")) == "not found: session not found"


def test_bare_app_error_maps_to_internal():
    status, body = AppError("db down").to_response()
    assert status == HTTPStatus.INTERNAL_SERVER_ERROR
    assert body == {"error": "internal", "message": "db down"}


def test_auth_error_messages():
    assert str(AuthError(AuthError.Kind.EXPIRED)) == "expired token"
    assert str(AuthError(AuthError.Kind.MISSING_TOKEN)) == "missing bearer token"
    err = AuthError(AuthError.Kind.BAD_SIGNATURE)
    assert err.kind is AuthError.Kind.BAD_SIGNATURE
    assert str(err) == "signature mismatch"