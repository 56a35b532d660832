"""Admin endpoints for managing Telegram contacts."""

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db, require_admin
from auth.roles import MAX_TELEGRAM_USER_ID
from auth.schemas import AuthenticatedIdentity
from models.telegram_contact import ContactAdminUpdate, ContactListResponse, ContactResponse
from services import contacts_service

router = APIRouter()


@router.get("/admin/contacts", response_model=ContactListResponse)
async def list_contacts(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    _admin: AuthenticatedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    List contacts, most recently seen first (admin only).

    Args:
        limit: Maximum number of results (1-1000, default 100)
        offset: Number of results to skip (default 0)
    """
    return await contacts_service.list_contacts(db, limit=limit, offset=offset)


@router.put("/admin/contacts/{telegram_user_id}/admin", response_model=ContactResponse)
async def update_contact_admin(
    payload: ContactAdminUpdate,
    telegram_user_id: int = Path(..., ge=1, le=MAX_TELEGRAM_USER_ID),
    _admin: AuthenticatedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Promote or demote a contact (admin only)."""
    return await contacts_service.set_contact_admin(
        db,
        telegram_user_id=telegram_user_id,
        is_admin=payload.is_admin,
    )
