"""Service layer for Telegram Mini App sign-in."""

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth import roles
from auth.backends import SessionBackend
from auth.errors import InitDataFailure
from auth.schemas import PlatformIdentity, VerifiedInitData
from auth.telegram import verify_init_data
from repos import telegram_contacts_repo

logger = logging.getLogger(__name__)

VERIFICATION_FAILED_DETAIL = "Could not verify your session"


@dataclass
class TelegramSignIn:
    """Outcome of a verified sign-in."""

    init_data: VerifiedInitData
    is_admin: bool
    session_cookie: str | None  # set only for admins

    @property
    def user(self) -> PlatformIdentity:
        return self.init_data.user


async def sign_in_with_init_data(
    session: AsyncSession,
    *,
    init_data: str,
    bot_token: str,
    max_age_seconds: int,
    allow_list: frozenset[str],
    backend: SessionBackend,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> TelegramSignIn:
    """
    Verify init data, record the visit and open an admin session if allowed.

    Args:
        session: Database session
        init_data: Raw init data from the client
        bot_token: Shared bot secret
        max_age_seconds: Replay window for ``auth_date``
        allow_list: Static admin ids
        backend: Active admin session backend
        ip_address: Client address recorded on store-backed sessions
        user_agent: Client user agent recorded on store-backed sessions

    Returns:
        TelegramSignIn with the cookie value to set for admins

    Raises:
        HTTPException: 401 with a generic message if verification fails
        MissingSecretError: If the bot token is not configured
    """
    result = verify_init_data(init_data, bot_token, max_age_seconds)
    if isinstance(result, InitDataFailure):
        # The specific check that failed is logged, never returned
        logger.warning("Init data rejected: %s", result.value)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=VERIFICATION_FAILED_DETAIL,
        )

    user = result.user
    await telegram_contacts_repo.upsert_from_identity(session, user)
    await session.commit()

    is_admin = await roles.is_admin(session, str(user.numeric_id), allow_list)

    session_cookie = None
    if is_admin:
        session_cookie = await backend.issue(
            session,
            user,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        logger.info("Admin session issued for telegram user %s", user.numeric_id)

    return TelegramSignIn(init_data=result, is_admin=is_admin, session_cookie=session_cookie)
