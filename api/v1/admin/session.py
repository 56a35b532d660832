"""Admin session endpoints."""

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.cookies import clear_admin_cookie
from api.deps import get_authenticator, get_db, require_admin
from auth.authenticator import ADMIN_COOKIE_NAME, RequestAuthenticator
from auth.schemas import AuthenticatedIdentity, IdentitySource
from models.admin_session import SweepResponse
from repos import admin_sessions_repo

router = APIRouter()


class AdminSessionResponse(BaseModel):
    """Response schema for the session probe."""

    authenticated: bool
    telegram_user_id: str | None = None
    username: str | None = None
    is_admin: bool = False
    source: IdentitySource | None = None


@router.get("/admin/session", response_model=AdminSessionResponse)
async def get_admin_session(
    request: Request,
    db: AsyncSession = Depends(get_db),
    authenticator: RequestAuthenticator = Depends(get_authenticator),
):
    """
    Report who the caller is and whether they are an admin.

    Anonymous callers get ``authenticated: false`` rather than a 401.
    """
    identity = await authenticator.identify(request, db)
    if identity is None:
        return AdminSessionResponse(authenticated=False)

    return AdminSessionResponse(
        authenticated=True,
        telegram_user_id=identity.telegram_user_id,
        username=identity.username,
        is_admin=await authenticator.is_admin(db, identity),
        source=identity.source,
    )


@router.post("/admin/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    request: Request,
    db: AsyncSession = Depends(get_db),
    authenticator: RequestAuthenticator = Depends(get_authenticator),
):
    """
    End the admin session and clear the cookie.

    Store-backed sessions are deleted; stateless tokens simply stop being sent.
    """
    cookie_value = request.cookies.get(ADMIN_COOKIE_NAME)
    if cookie_value:
        await authenticator.backend.revoke(db, cookie_value)

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_admin_cookie(response)
    return response


@router.post("/admin/sessions/sweep", response_model=SweepResponse)
async def sweep_sessions(
    _admin: AuthenticatedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete expired store-backed sessions (admin only)."""
    deleted = await admin_sessions_repo.sweep_expired(db)
    await db.commit()
    return SweepResponse(deleted=deleted)
