"""Per-request identity resolution and access guards."""

import logging
from collections.abc import Collection

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth import roles
from auth.backends import SessionBackend
from auth.errors import ForbiddenError, UnauthorizedError
from auth.schemas import AuthenticatedIdentity, IdentitySource

logger = logging.getLogger(__name__)

ADMIN_COOKIE_NAME = "tg_admin"
TELEGRAM_USER_ID_HEADER = "x-telegram-user-id"


class RequestAuthenticator:
    """
    Resolve who is calling and whether they may act as admin.

    Resolution order:
    1. ``tg_admin`` cookie, validated by the active session backend
    2. ``x-telegram-user-id`` header, only when the deployment trusts it
    3. unauthenticated

    Nothing is cached between requests; every call re-reads the cookie,
    re-checks expiry and re-resolves the role.
    """

    def __init__(
        self,
        *,
        backend: SessionBackend,
        allow_list: Collection[str],
        trust_user_id_header: bool = False,
    ):
        self.backend = backend
        self.allow_list = frozenset(allow_list)
        self.trust_user_id_header = trust_user_id_header

    async def identify(self, request: Request, db: AsyncSession) -> AuthenticatedIdentity | None:
        """
        Resolve the request identity without any role check.

        Returns:
            The identity, or None if the request is unauthenticated
        """
        cookie_value = request.cookies.get(ADMIN_COOKIE_NAME)
        if cookie_value:
            identity = await self.backend.resolve(db, cookie_value)
            if identity is not None:
                return identity

        if self.trust_user_id_header:
            header_value = request.headers.get(TELEGRAM_USER_ID_HEADER, "").strip()
            if roles.parse_telegram_user_id(header_value) is not None:
                return AuthenticatedIdentity(
                    telegram_user_id=header_value,
                    source=IdentitySource.TRUSTED_HEADER,
                )

        return None

    async def is_admin(self, db: AsyncSession, identity: AuthenticatedIdentity) -> bool:
        """Run an identity through the role resolver, whatever its source."""
        return await roles.is_admin(db, identity.telegram_user_id, self.allow_list)

    async def require_authenticated(self, request: Request, db: AsyncSession) -> AuthenticatedIdentity:
        """
        Raises:
            UnauthorizedError: If no identity can be resolved
        """
        identity = await self.identify(request, db)
        if identity is None:
            raise UnauthorizedError()
        return identity

    async def require_admin(self, request: Request, db: AsyncSession) -> AuthenticatedIdentity:
        """
        Raises:
            UnauthorizedError: If no identity can be resolved
            ForbiddenError: If the identity is not an admin
        """
        identity = await self.require_authenticated(request, db)
        if not await self.is_admin(db, identity):
            logger.warning(
                "Admin access denied for telegram user %s (%s)",
                identity.telegram_user_id,
                identity.source.value,
            )
            raise ForbiddenError()
        return identity.model_copy(update={"is_admin": True})
