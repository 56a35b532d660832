"""Classified authentication failures."""

from enum import Enum

from fastapi import HTTPException, status


class InitDataFailure(str, Enum):
    """Why a signed init data payload was rejected."""

    MISSING_SIGNATURE = "missing_signature"
    HASH_MISMATCH = "hash_mismatch"
    PAYLOAD_EXPIRED = "payload_expired"
    MALFORMED_USER = "malformed_user"


class TokenFailure(str, Enum):
    """Why an admin token was rejected."""

    TOKEN_MALFORMED = "token_malformed"
    TOKEN_SIGNATURE_INVALID = "token_signature_invalid"
    TOKEN_EXPIRED = "token_expired"


class MissingSecretError(RuntimeError):
    """A signing/verification secret is not configured.

    This is a deployment defect rather than bad user input, so it is raised
    instead of being returned as a failure value.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is not configured")


class UnauthorizedError(HTTPException):
    """No identity could be resolved for the request."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class ForbiddenError(HTTPException):
    """An identity was resolved but lacks the admin role."""

    def __init__(self, detail: str = "Admin access required"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
