"""Exceptions for the model clients, the HTTP layer and token validation."""

from __future__ import annotations

import enum
from http import HTTPStatus
from typing import Any


class LlmError(Exception):
    """Base class for failures of the chat and embedding clients."""


class HttpError(LlmError):
    """The HTTP transport failed."""

    def __init__(self, cause: object) -> None:
        super().__init__(f"http transport error: {cause}")
        self.cause = cause


class StatusError(LlmError):
    """The provider answered with a non-success status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"non-success status {status}: {body}")
        self.status = status
        self.body = body


class DecodeError(LlmError):
    """A response or document could not be decoded."""

    def __init__(self, cause: object) -> None:
        super().__init__(f"response decode error: {cause}")
        self.cause = cause


class ConfigError(LlmError):
    """The client or its configuration is unusable."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"config error: {detail}")
        self.detail = detail


class ProviderError(LlmError):
    """The provider returned a well-formed but unusable answer."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"provider error: {detail}")
        self.detail = detail


class AppError(Exception):
    """Request-level failure; unspecialised instances map to 500 internal."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    code: str = "internal"
    prefix: str = ""

    def __init__(self, detail: object = "") -> None:
        super().__init__(f"{self.prefix}{detail}")
        self.detail = detail

    def to_response(self) -> tuple[int, dict[str, Any]]:
        """The HTTP status and JSON body for this error."""
        return int(self.status), {"error": self.code, "message": str(self)}


class NotFound(AppError):
    status = HTTPStatus.NOT_FOUND
    code = "not_found"
    prefix = "not found: "


class Unauthorized(AppError):
    status = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"
    prefix = "unauthorized: "


class BadRequest(AppError):
    status = HTTPStatus.BAD_REQUEST
    code = "bad_request"
    prefix = "bad request: "


class Forbidden(AppError):
    status = HTTPStatus.FORBIDDEN
    code = "forbidden"
    prefix = "forbidden: "


class Internal(AppError):
    prefix = "internal: "


class AuthError(Exception):
    """Bearer-token validation failed for the reason given by ``kind``."""

    class Kind(enum.Enum):
        MISSING_TOKEN = "missing bearer token"
        MALFORMED = "malformed token"
        EXPIRED = "expired token"
        BAD_SIGNATURE = "signature mismatch"
        MISSING_SUB = "missing sub claim"

    def __init__(self, kind: AuthError.Kind) -> None:
        super().__init__(kind.value)
        self.kind = kind