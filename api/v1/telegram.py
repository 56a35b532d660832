"""Telegram Mini App verification endpoint."""

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

import config
from api.cookies import set_admin_cookie
from api.deps import get_authenticator, get_db
from auth.authenticator import RequestAuthenticator
from services.telegram_auth_service import sign_in_with_init_data

router = APIRouter()


class TelegramVerifyRequest(BaseModel):
    """Request schema for init data verification."""

    init_data: str = Field(..., min_length=1, description="Raw Telegram WebApp initData")


class TelegramUserResponse(BaseModel):
    """Verified Telegram user."""

    id: int
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    language_code: str | None = None
    is_premium: bool | None = None
    is_admin: bool


class TelegramVerifyResponse(BaseModel):
    """Response schema for init data verification."""

    success: bool = True
    user: TelegramUserResponse
    query_id: str | None = None
    auth_date: int


@router.post("/telegram/verify", response_model=TelegramVerifyResponse)
async def verify_telegram(
    payload: TelegramVerifyRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    authenticator: RequestAuthenticator = Depends(get_authenticator),
):
    """
    Verify Telegram init data and record the visit.

    Admins additionally receive the ``tg_admin`` session cookie.

    Returns:
        TelegramVerifyResponse: Verified user and admin status
    """
    sign_in = await sign_in_with_init_data(
        db,
        init_data=payload.init_data,
        bot_token=config.settings.TELEGRAM_BOT_TOKEN,
        max_age_seconds=config.settings.INIT_DATA_MAX_AGE_SECONDS,
        allow_list=authenticator.allow_list,
        backend=authenticator.backend,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )

    if sign_in.session_cookie:
        set_admin_cookie(response, sign_in.session_cookie)

    user = sign_in.user
    return TelegramVerifyResponse(
        user=TelegramUserResponse(
            id=user.numeric_id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            language_code=user.language_code,
            is_premium=user.is_premium,
            is_admin=sign_in.is_admin,
        ),
        query_id=sign_in.init_data.query_id,
        auth_date=sign_in.init_data.auth_date,
    )
