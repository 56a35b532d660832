"""Self-signed admin token creation and validation.

Token format: ``base64url(json payload) + "." + base64url(HMAC-SHA256(secret, body))``,
both segments unpadded.
"""

import json
import time

from jose.utils import base64url_decode, base64url_encode
from pydantic import ValidationError

from auth.crypto import constant_time_equals, hmac_sha256
from auth.errors import MissingSecretError, TokenFailure
from auth.schemas import AdminTokenPayload


def _now_ms() -> int:
    return int(time.time() * 1000)


def _signature(body: str, secret: str) -> str:
    return base64url_encode(hmac_sha256(secret.encode("utf-8"), body)).decode("ascii")


def sign_admin_token(payload: AdminTokenPayload, secret: str) -> str:
    """
    Sign an admin token payload.

    Args:
        payload: Token claims; ``exp`` must lie in the future
        secret: Admin session signing secret

    Returns:
        Encoded token string

    Raises:
        MissingSecretError: If the secret is empty
        ValueError: If the payload is already expired
    """
    if not secret:
        raise MissingSecretError("ADMIN_SESSION_SECRET")
    if payload.exp <= _now_ms():
        raise ValueError("Admin token expiry must be in the future")

    raw = json.dumps(payload.model_dump(), separators=(",", ":")).encode("utf-8")
    body = base64url_encode(raw).decode("ascii")
    return f"{body}.{_signature(body, secret)}"


def issue_admin_token(
    telegram_user_id: str,
    username: str | None,
    secret: str,
    ttl_seconds: int,
) -> tuple[str, AdminTokenPayload]:
    """Create and sign a token valid for ``ttl_seconds`` from now."""
    payload = AdminTokenPayload(
        sub=telegram_user_id,
        username=username,
        exp=_now_ms() + ttl_seconds * 1000,
    )
    return sign_admin_token(payload, secret), payload


def decode_admin_token(
    token: str,
    secret: str,
    now_ms: int | None = None,
) -> AdminTokenPayload | TokenFailure:
    """
    Verify a token and classify the failure if it is rejected.

    The signature is checked over the raw body segment before anything in
    the body is decoded.

    Raises:
        MissingSecretError: If the secret is empty
    """
    if not secret:
        raise MissingSecretError("ADMIN_SESSION_SECRET")

    parts = token.split(".") if token else []
    if len(parts) != 2:
        return TokenFailure.TOKEN_MALFORMED
    body, signature = parts

    if not constant_time_equals(_signature(body, secret), signature):
        return TokenFailure.TOKEN_SIGNATURE_INVALID

    try:
        payload = AdminTokenPayload.model_validate_json(base64url_decode(body.encode("ascii")))
    except (ValueError, ValidationError):
        return TokenFailure.TOKEN_MALFORMED

    current = _now_ms() if now_ms is None else now_ms
    if current >= payload.exp:
        return TokenFailure.TOKEN_EXPIRED

    return payload


def verify_admin_token(
    token: str,
    secret: str,
    now_ms: int | None = None,
) -> AdminTokenPayload | None:
    """Return the payload of a valid, unexpired token, otherwise None."""
    result = decode_admin_token(token, secret, now_ms=now_ms)
    if isinstance(result, TokenFailure):
        return None
    return result
