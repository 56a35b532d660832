"""Database models."""

from db import Base

# Import all models so Alembic can detect them
from models.telegram_contact import TelegramContact
from models.admin_session import AdminSession

__all__ = [
    "Base",
    "TelegramContact",
    "AdminSession",
]
