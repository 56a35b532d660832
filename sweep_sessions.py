"""Delete expired admin sessions. Meant to run periodically (cron, scheduler)."""

import asyncio
import logging
import sys

import config
import logging_config
from db import AsyncSessionLocal, close_db
from repos import admin_sessions_repo

logger = logging.getLogger("sweep_sessions")


async def sweep() -> int:
    async with AsyncSessionLocal() as db:
        deleted = await admin_sessions_repo.sweep_expired(db)
        await db.commit()
    await close_db()
    return deleted


if __name__ == "__main__":
    logging_config.setup_logging(config.settings.LOG_LEVEL)

    # On Windows, use SelectorEventLoop for psycopg compatibility
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    count = asyncio.run(sweep())
    logger.info("Deleted %d expired admin sessions", count)
