"""Service layer for contact management (admin back office)."""

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from models.telegram_contact import ContactListResponse, ContactResponse, TelegramContact
from repos import telegram_contacts_repo


async def list_contacts(
    session: AsyncSession,
    *,
    limit: int,
    offset: int,
) -> ContactListResponse:
    """List contacts with the total count for pagination."""
    contacts = await telegram_contacts_repo.list(session, limit=limit, offset=offset)
    total = await telegram_contacts_repo.count(session)
    return ContactListResponse(
        contacts=[ContactResponse.model_validate(contact) for contact in contacts],
        total=total,
        limit=limit,
        offset=offset,
    )


async def set_contact_admin(
    session: AsyncSession,
    *,
    telegram_user_id: int,
    is_admin: bool,
) -> TelegramContact:
    """
    Promote or demote a contact via the persisted admin flag.

    Ids on the static allow-list stay admins whatever this flag says.

    Raises:
        HTTPException: 404 if the contact does not exist
    """
    contact = await telegram_contacts_repo.set_admin_flag(session, telegram_user_id, is_admin)
    if contact is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contact not found",
        )
    await session.commit()
    await session.refresh(contact)
    return contact
