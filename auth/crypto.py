"""HMAC helpers shared by init data verification and admin tokens."""

import hashlib
import hmac


def hmac_sha256(key: bytes, message: str) -> bytes:
    """Return the raw HMAC-SHA256 digest of a UTF-8 message."""
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def constant_time_equals(expected: str, supplied: str) -> bool:
    """
    Compare a locally computed signature with a caller-supplied one.

    The comparison always runs over the full length of ``expected``. A
    supplied value of any other length is rejected after an equal-cost
    comparison, so neither content nor length is revealed through timing.

    Args:
        expected: Signature computed by this process (fixed length)
        supplied: Signature taken from the request

    Returns:
        True if both signatures are identical
    """
    expected_bytes = expected.encode("utf-8")
    supplied_bytes = supplied.encode("utf-8", errors="replace")
    if len(supplied_bytes) != len(expected_bytes):
        hmac.compare_digest(expected_bytes, expected_bytes)
        return False
    return hmac.compare_digest(expected_bytes, supplied_bytes)
