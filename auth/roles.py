"""Admin role resolution."""

import re
from collections.abc import Collection

from sqlalchemy.ext.asyncio import AsyncSession

from repos import telegram_contacts_repo

# telegram_contacts.telegram_user_id is a signed BIGINT
MAX_TELEGRAM_USER_ID = 2**63 - 1

_TELEGRAM_USER_ID_RE = re.compile(r"[0-9]{1,19}")


def parse_telegram_user_id(value: str) -> int | None:
    """
    Parse an ASCII decimal telegram user id.

    Returns:
        The id as an int, or None if it is not a storable user id
    """
    if not _TELEGRAM_USER_ID_RE.fullmatch(value):
        return None
    numeric_id = int(value)
    if numeric_id > MAX_TELEGRAM_USER_ID:
        return None
    return numeric_id


async def is_admin(
    db: AsyncSession,
    telegram_user_id: str,
    allow_list: Collection[str],
) -> bool:
    """
    Decide whether a telegram user holds the admin role.

    The static allow-list is checked first and wins outright, without
    touching the database: it must keep working when the database is
    unreachable or the user has no contact row yet. Only then is the
    persisted ``telegram_contacts.is_admin`` flag consulted.

    Args:
        db: Database session
        telegram_user_id: Telegram user id as a decimal string
        allow_list: Static admin ids from configuration

    Returns:
        True if the user is an admin
    """
    if telegram_user_id in allow_list:
        return True

    numeric_id = parse_telegram_user_id(telegram_user_id)
    if numeric_id is None:
        return False

    flag = await telegram_contacts_repo.get_admin_flag(db, numeric_id)
    return bool(flag)
