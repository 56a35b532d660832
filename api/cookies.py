"""Admin cookie helpers."""

from fastapi import Response

import config
from auth.authenticator import ADMIN_COOKIE_NAME


def set_admin_cookie(response: Response, value: str) -> None:
    """Set ``tg_admin`` for the configured session lifetime."""
    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value=value,
        max_age=config.settings.ADMIN_SESSION_TTL_SECONDS,
        path="/",
        secure=config.settings.ADMIN_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


def clear_admin_cookie(response: Response) -> None:
    """Expire ``tg_admin`` immediately (Max-Age=0)."""
    response.delete_cookie(
        key=ADMIN_COOKIE_NAME,
        path="/",
        secure=config.settings.ADMIN_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )
