"""Repository for AdminSession database operations."""

import secrets
from datetime import datetime, timedelta, UTC

from sqlalchemy import delete as sa_delete
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.admin_session import AdminSession


def generate_session_token() -> str:
    """Generate an opaque random session token."""
    return secrets.token_urlsafe(32)


async def create(
    session: AsyncSession,
    *,
    telegram_user_id: int,
    ttl_seconds: int,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> AdminSession:
    """
    Create a new admin session row.

    Args:
        session: Database session
        telegram_user_id: Subject of the session
        ttl_seconds: Lifetime from now
        ip_address: Client address, if known
        user_agent: Client user agent, if known

    Returns:
        Created session (flushed, not committed)
    """
    now = datetime.now(UTC)
    admin_session = AdminSession(
        telegram_user_id=telegram_user_id,
        token=generate_session_token(),
        created_at=now,
        expires_at=now + timedelta(seconds=ttl_seconds),
        ip_address=ip_address,
        user_agent=user_agent,
    )
    session.add(admin_session)
    await session.flush()
    return admin_session


async def find_by_token(
    session: AsyncSession,
    token: str,
    *,
    now: datetime | None = None,
) -> AdminSession | None:
    """
    Get an unexpired session by token.

    Expiry is filtered in the query itself, so a row the sweep has not
    reached yet is still treated as absent.
    """
    current = now or datetime.now(UTC)
    result = await session.execute(
        select(AdminSession).where(
            AdminSession.token == token,
            AdminSession.expires_at > current,
        )
    )
    return result.scalar_one_or_none()


async def delete(session: AsyncSession, token: str) -> None:
    """Delete a session by token (logout). Missing tokens are ignored."""
    await session.execute(
        sa_delete(AdminSession)
        .where(AdminSession.token == token)
        .execution_options(synchronize_session=False)
    )


async def sweep_expired(session: AsyncSession, *, now: datetime | None = None) -> int:
    """
    Delete every expired session.

    Returns:
        Number of rows deleted
    """
    current = now or datetime.now(UTC)
    result = await session.execute(
        sa_delete(AdminSession)
        .where(AdminSession.expires_at <= current)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0
