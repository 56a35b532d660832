"""FastAPI dependencies for authentication and database."""

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

import config
from auth.authenticator import RequestAuthenticator
from auth.backends import SessionBackend, build_session_backend
from auth.schemas import AuthenticatedIdentity
from db import get_db as get_db_session


async def get_db() -> AsyncSession:
    """
    Dependency to get database session.
    Reuses the get_db function from db.py.
    """
    async for session in get_db_session():
        yield session


@lru_cache
def get_session_backend() -> SessionBackend:
    """Session backend selected by configuration (built once)."""
    return build_session_backend(config.settings)


@lru_cache
def get_authenticator() -> RequestAuthenticator:
    """Request authenticator built once from configuration."""
    return RequestAuthenticator(
        backend=get_session_backend(),
        allow_list=config.settings.admin_allow_list,
        trust_user_id_header=config.settings.TRUST_TELEGRAM_USER_HEADER,
    )


async def get_current_identity(
    request: Request,
    db: AsyncSession = Depends(get_db),
    authenticator: RequestAuthenticator = Depends(get_authenticator),
) -> AuthenticatedIdentity | None:
    """Identity of the caller, or None. Never raises for anonymous callers."""
    return await authenticator.identify(request, db)


async def require_authenticated(
    request: Request,
    db: AsyncSession = Depends(get_db),
    authenticator: RequestAuthenticator = Depends(get_authenticator),
) -> AuthenticatedIdentity:
    """
    Dependency requiring any resolvable identity.

    Raises:
        UnauthorizedError: 401 if no identity can be resolved
    """
    return await authenticator.require_authenticated(request, db)


async def require_admin(
    request: Request,
    db: AsyncSession = Depends(get_db),
    authenticator: RequestAuthenticator = Depends(get_authenticator),
) -> AuthenticatedIdentity:
    """
    Dependency requiring an admin identity.

    Raises:
        UnauthorizedError: 401 if no identity can be resolved
        ForbiddenError: 403 if the identity is not an admin
    """
    return await authenticator.require_admin(request, db)
