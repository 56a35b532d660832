"""Admin session backends.

Exactly one backend is active per process and it alone decides what the
``tg_admin`` cookie carries:

- ``StatelessSessionBackend``: a self-signed admin token. Cannot be
  revoked before it expires; logout only clears the cookie.
- ``StoreBackedSessionBackend``: an opaque token referencing an
  ``admin_sessions`` row. Logout deletes the row.
"""

import logging
from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import TokenFailure
from auth.schemas import AuthenticatedIdentity, IdentitySource, PlatformIdentity
from auth.tokens import decode_admin_token, issue_admin_token
from repos import admin_sessions_repo

logger = logging.getLogger(__name__)


class SessionBackend(ABC):
    """Issues, resolves and revokes the value carried by the admin cookie."""

    def __init__(self, ttl_seconds: int):
        self.ttl_seconds = ttl_seconds

    @abstractmethod
    async def issue(
        self,
        db: AsyncSession,
        identity: PlatformIdentity,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> str:
        """Create a session for a verified identity and return the cookie value."""

    @abstractmethod
    async def resolve(self, db: AsyncSession, cookie_value: str) -> AuthenticatedIdentity | None:
        """Return the identity behind a cookie value, or None if it is not valid now."""

    @abstractmethod
    async def revoke(self, db: AsyncSession, cookie_value: str) -> None:
        """End the session behind a cookie value where the backend can."""


class StatelessSessionBackend(SessionBackend):
    """Cookie carries a signed admin token."""

    def __init__(self, secret: str, ttl_seconds: int):
        super().__init__(ttl_seconds)
        self.secret = secret

    async def issue(self, db, identity, *, ip_address=None, user_agent=None):
        token, _ = issue_admin_token(
            str(identity.numeric_id),
            identity.username,
            self.secret,
            self.ttl_seconds,
        )
        return token

    async def resolve(self, db, cookie_value):
        result = decode_admin_token(cookie_value, self.secret)
        if isinstance(result, TokenFailure):
            logger.info("Admin cookie rejected: %s", result.value)
            return None
        return AuthenticatedIdentity(
            telegram_user_id=result.sub,
            username=result.username,
            source=IdentitySource.SIGNED_COOKIE,
        )

    async def revoke(self, db, cookie_value):
        # Nothing server-side to invalidate
        return None


class StoreBackedSessionBackend(SessionBackend):
    """Cookie carries an opaque admin_sessions token."""

    async def issue(self, db, identity, *, ip_address=None, user_agent=None):
        admin_session = await admin_sessions_repo.create(
            db,
            telegram_user_id=identity.numeric_id,
            ttl_seconds=self.ttl_seconds,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        await db.commit()
        return admin_session.token

    async def resolve(self, db, cookie_value):
        admin_session = await admin_sessions_repo.find_by_token(db, cookie_value)
        if admin_session is None:
            logger.info("Admin cookie rejected: no live session")
            return None
        return AuthenticatedIdentity(
            telegram_user_id=str(admin_session.telegram_user_id),
            source=IdentitySource.SESSION_RECORD,
        )

    async def revoke(self, db, cookie_value):
        await admin_sessions_repo.delete(db, cookie_value)
        await db.commit()


def build_session_backend(settings) -> SessionBackend:
    """Build the backend selected by ``settings.SESSION_BACKEND``."""
    if settings.SESSION_BACKEND == "store":
        return StoreBackedSessionBackend(settings.ADMIN_SESSION_TTL_SECONDS)
    return StatelessSessionBackend(
        settings.ADMIN_SESSION_SECRET,
        settings.ADMIN_SESSION_TTL_SECONDS,
    )
