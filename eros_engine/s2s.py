"""HMAC-SHA256 signing and verification for server-to-server requests.

The signature covers a five-line canonical string: the upper-cased method,
the path, the canonical query, the timestamp and the hex SHA-256 of the
body. Binding method, path and query means a signature cannot be replayed
against another endpoint.
"""

from __future__ import annotations

import hashlib
import hmac
import string
from collections.abc import Iterable
from datetime import datetime, timezone
from http import HTTPStatus

MAX_BODY_BYTES = 1024 * 1024
TIMESTAMP_SKEW_SECS = 5 * 60

TIMESTAMP_HEADER = "x-s2s-timestamp"
SIGNATURE_HEADER = "x-s2s-signature"

_HEX_DIGITS = frozenset(string.hexdigits)


class S2SRejected(Exception):
    """An inbound request failed verification; ``status`` is the HTTP answer."""

    def __init__(self, status: HTTPStatus, reason: str) -> None:
        super().__init__(f"{int(status)} {status.phrase}: {reason}")
        self.status = status
        self.reason = reason


def _as_bytes(secret: str | bytes) -> bytes:
    return secret.encode("utf-8") if isinstance(secret, str) else secret


def canonical_signing_string(
    method: str,
    path: str,
    canonical_query: str,
    timestamp: str,
    body_sha256_hex: str,
) -> str:
    """Join the request parts into the string that gets signed."""
    upper_method = "".join(c.upper() if c.isascii() else c for c in method)
    return "\n".join((upper_method, path, canonical_query, timestamp, body_sha256_hex))


def canonicalize_query(q: str) -> str:
    """Sort the ``&``-separated pairs of a query string; empty stays empty."""
    if not q:
        return ""
    return "&".join(sorted(q.split("&")))


def sign(secret: str | bytes, canonical: str) -> str:
    """HMAC-SHA256 of ``canonical`` under ``secret``, as lower-case hex."""
    return hmac.new(_as_bytes(secret), canonical.encode("utf-8"), hashlib.sha256).hexdigest()


def _format_timestamp(now: datetime) -> str:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_outbound_signature(
    method: str,
    path: str,
    canonical_query: str,
    body: bytes,
    secret: str | bytes,
    now: datetime,
) -> tuple[str, str]:
    """The (timestamp, signature) header values for an outbound request.

    ``canonical_query`` must already be canonical; see :func:`canonicalize_query`.
    """
    timestamp = _format_timestamp(now)
    body_hex = hashlib.sha256(body).hexdigest()
    canonical = canonical_signing_string(method, path, canonical_query, timestamp, body_hex)
    return timestamp, sign(secret, canonical)


def verify_against(secret: str | bytes, canonical: str, provided_hex: str) -> bool:
    """Whether ``provided_hex`` is the signature of ``canonical`` under ``secret``."""
    if len(provided_hex) % 2 or not _HEX_DIGITS.issuperset(provided_hex):
        return False
    provided = bytes.fromhex(provided_hex)
    expected = hmac.new(
        _as_bytes(secret), canonical.encode("utf-8"), hashlib.sha256
    ).digest()
    return hmac.compare_digest(expected, provided)


def _parse_timestamp(timestamp: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(timestamp)
    except ValueError as exc:
        raise S2SRejected(HTTPStatus.UNAUTHORIZED, "malformed timestamp") from exc
    if parsed.tzinfo is None:
        raise S2SRejected(HTTPStatus.UNAUTHORIZED, "timestamp has no offset")
    return parsed


def verify_request(
    method: str,
    path: str,
    query: str,
    timestamp: str | None,
    signature: str | None,
    body: bytes,
    secrets: Iterable[str | bytes | None],
    now: datetime | None = None,
) -> None:
    """Check an inbound request's signature, raising S2SRejected if it fails.

    ``query`` is the raw query string; ``secrets`` lists the active secret
    and then any previous ones still accepted, with ``None`` for unset.
    """
    if timestamp is None or signature is None:
        raise S2SRejected(HTTPStatus.UNAUTHORIZED, "missing signature headers")

    signed_at = _parse_timestamp(timestamp)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    skew = abs(int((now - signed_at).total_seconds()))
    if skew > TIMESTAMP_SKEW_SECS:
        raise S2SRejected(HTTPStatus.UNAUTHORIZED, "timestamp outside allowed skew")

    if len(body) > MAX_BODY_BYTES:
        raise S2SRejected(HTTPStatus.REQUEST_ENTITY_TOO_LARGE, "body too large")

    canonical = canonical_signing_string(
        method,
        path,
        canonicalize_query(query),
        timestamp,
        hashlib.sha256(body).hexdigest(),
    )

    configured = [s for s in secrets if s is not None]
    if not configured:
        raise S2SRejected(HTTPStatus.UNAUTHORIZED, "no secret configured")
    if not any(verify_against(s, canonical, signature) for s in configured):
        raise S2SRejected(HTTPStatus.UNAUTHORIZED, "signature mismatch")