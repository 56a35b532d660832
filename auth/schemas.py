"""Identity and token payload schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class PlatformIdentity(BaseModel):
    """Telegram user asserted by verified init data."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    numeric_id: StrictInt = Field(alias="id")
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
    is_premium: bool | None = None
    photo_url: str | None = None


class VerifiedInitData(BaseModel):
    """Result of a successful init data verification."""

    model_config = ConfigDict(frozen=True)

    user: PlatformIdentity
    auth_date: int  # unix seconds
    query_id: str | None = None
    start_param: str | None = None


class AdminTokenPayload(BaseModel):
    """Admin cookie token payload structure."""

    model_config = ConfigDict(frozen=True)

    sub: str  # telegram user id
    username: str | None = None
    exp: int  # expiration, epoch milliseconds


class IdentitySource(str, Enum):
    """Where a request identity came from."""

    SIGNED_COOKIE = "signed_cookie"
    SESSION_RECORD = "session_record"
    TRUSTED_HEADER = "trusted_header"


class AuthenticatedIdentity(BaseModel):
    """Identity resolved for a single request."""

    model_config = ConfigDict(frozen=True)

    telegram_user_id: str
    username: str | None = None
    source: IdentitySource
    is_admin: bool = False
