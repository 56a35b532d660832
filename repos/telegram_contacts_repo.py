"""Repository for TelegramContact database operations."""

from datetime import datetime, UTC

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from auth.schemas import PlatformIdentity
from models.telegram_contact import TelegramContact


async def get_by_telegram_user_id(
    session: AsyncSession,
    telegram_user_id: int,
) -> TelegramContact | None:
    """Get a contact by telegram user id."""
    result = await session.execute(
        select(TelegramContact).where(TelegramContact.telegram_user_id == telegram_user_id)
    )
    return result.scalar_one_or_none()


async def get_admin_flag(session: AsyncSession, telegram_user_id: int) -> bool | None:
    """
    Read the persisted admin flag.

    Returns:
        The flag, or None if the contact has no row
    """
    result = await session.execute(
        select(TelegramContact.is_admin).where(TelegramContact.telegram_user_id == telegram_user_id)
    )
    return result.scalar_one_or_none()


async def upsert_from_identity(
    session: AsyncSession,
    identity: PlatformIdentity,
) -> TelegramContact:
    """
    Record a visit from a verified identity.

    Creates the contact on first visit (admin flag off); afterwards refreshes
    the profile fields and bumps the visit counter. The admin flag is never
    touched here.
    """
    now = datetime.now(UTC)
    contact = await get_by_telegram_user_id(session, identity.numeric_id)

    if contact is None:
        contact = TelegramContact(
            telegram_user_id=identity.numeric_id,
            username=identity.username,
            first_name=identity.first_name,
            last_name=identity.last_name,
            language_code=identity.language_code,
            is_premium=bool(identity.is_premium),
            is_admin=False,
            first_seen_at=now,
            last_seen_at=now,
            visits_count=1,
        )
        session.add(contact)
    else:
        contact.username = identity.username
        contact.first_name = identity.first_name
        contact.last_name = identity.last_name
        contact.language_code = identity.language_code
        contact.is_premium = bool(identity.is_premium)
        contact.last_seen_at = now
        contact.visits_count = contact.visits_count + 1

    await session.flush()
    return contact


async def list(
    session: AsyncSession,
    *,
    limit: int = 100,
    offset: int = 0,
) -> list[TelegramContact]:
    """List contacts, most recently seen first."""
    result = await session.execute(
        select(TelegramContact)
        .order_by(TelegramContact.last_seen_at.desc())
        .limit(limit)
        .offset(offset)
    )
    return [contact for contact in result.scalars().all()]


async def count(session: AsyncSession) -> int:
    """Count all contacts."""
    result = await session.execute(select(func.count()).select_from(TelegramContact))
    return result.scalar_one()


async def set_admin_flag(
    session: AsyncSession,
    telegram_user_id: int,
    is_admin: bool,
) -> TelegramContact | None:
    """
    Set the persisted admin flag.

    Returns:
        Updated contact, or None if no such contact exists
    """
    contact = await get_by_telegram_user_id(session, telegram_user_id)
    if contact is None:
        return None
    contact.is_admin = is_admin
    await session.flush()
    return contact
