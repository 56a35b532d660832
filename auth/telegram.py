"""Telegram Mini App init data verification.

The client attaches ``initData`` (a URL-encoded bundle) to requests. It is
signed by Telegram with a key derived from the bot token:

    secret_key = HMAC_SHA256(key="WebAppData", msg=bot_token)
    hash       = hex(HMAC_SHA256(key=secret_key, msg=data_check_string))

where ``data_check_string`` is every field except ``hash``, sorted by key
and joined as ``key=value`` lines.
"""

import json
import logging
import time
from urllib.parse import parse_qsl

from pydantic import ValidationError

from auth.crypto import constant_time_equals, hmac_sha256
from auth.errors import InitDataFailure, MissingSecretError
from auth.schemas import PlatformIdentity, VerifiedInitData

logger = logging.getLogger(__name__)

WEB_APP_DATA_KEY = b"WebAppData"


def build_data_check_string(pairs: list[tuple[str, str]]) -> str:
    """Sort fields by key and join them as ``key=value`` lines."""
    return "\n".join(f"{key}={value}" for key, value in sorted(pairs, key=lambda pair: pair[0]))


def compute_init_data_hash(data_check_string: str, bot_token: str) -> str:
    """Compute the hex signature Telegram would attach to ``data_check_string``."""
    secret_key = hmac_sha256(WEB_APP_DATA_KEY, bot_token)
    return hmac_sha256(secret_key, data_check_string).hex()


def _parse_user(user_json: str | None) -> PlatformIdentity | None:
    if not user_json:
        return None
    try:
        data = json.loads(user_json)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    try:
        return PlatformIdentity.model_validate(data)
    except ValidationError:
        return None


def verify_init_data(
    raw: str,
    bot_token: str,
    max_age_seconds: int,
    now: float | None = None,
) -> VerifiedInitData | InitDataFailure:
    """
    Verify a Telegram init data string.

    Args:
        raw: URL-encoded init data as sent by the client
        bot_token: Shared bot secret
        max_age_seconds: Maximum accepted age of ``auth_date``
        now: Current unix time; read from the clock when omitted

    Returns:
        VerifiedInitData on success, otherwise the InitDataFailure kind

    Raises:
        MissingSecretError: If no bot token is configured
    """
    if not bot_token:
        raise MissingSecretError("TELEGRAM_BOT_TOKEN")

    received_hash = None
    fields: list[tuple[str, str]] = []
    for key, value in parse_qsl(raw or "", keep_blank_values=True):
        if key == "hash":
            received_hash = value
        else:
            fields.append((key, value))

    if not received_hash:
        return InitDataFailure.MISSING_SIGNATURE

    calculated_hash = compute_init_data_hash(build_data_check_string(fields), bot_token)
    if not constant_time_equals(calculated_hash, received_hash):
        return InitDataFailure.HASH_MISMATCH

    values = dict(fields)

    # A missing or unreadable auth_date counts as infinitely old
    try:
        auth_date = int(values.get("auth_date", ""))
    except ValueError:
        return InitDataFailure.PAYLOAD_EXPIRED
    current = time.time() if now is None else now
    if current - auth_date > max_age_seconds:
        return InitDataFailure.PAYLOAD_EXPIRED

    user = _parse_user(values.get("user"))
    if user is None:
        return InitDataFailure.MALFORMED_USER

    return VerifiedInitData(
        user=user,
        auth_date=auth_date,
        query_id=values.get("query_id") or None,
        start_param=values.get("start_param") or None,
    )


def verify_platform_identity(
    raw: str,
    bot_token: str,
    max_age_seconds: int,
    now: float | None = None,
) -> PlatformIdentity | InitDataFailure:
    """Verify init data and return only the asserted identity."""
    result = verify_init_data(raw, bot_token, max_age_seconds, now=now)
    if isinstance(result, InitDataFailure):
        logger.warning("Init data rejected: %s", result.value)
        return result
    return result.user
