"""Telegram contact model and schema."""

from datetime import datetime, UTC
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class TelegramContact(Base):
    """Telegram user who opened the Mini App; carries the persisted admin flag."""

    __tablename__ = "telegram_contacts"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    telegram_user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    language_code: Mapped[str | None] = mapped_column(String(16), nullable=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    first_seen_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    last_seen_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        index=True,
    )
    visits_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


# Pydantic schemas
class ContactResponse(BaseModel):
    """Schema for contact response."""

    model_config = ConfigDict(from_attributes=True)

    telegram_user_id: int
    username: str | None
    first_name: str | None
    last_name: str | None
    language_code: str | None
    is_premium: bool
    is_admin: bool
    first_seen_at: datetime
    last_seen_at: datetime
    visits_count: int


class ContactListResponse(BaseModel):
    """Paginated contact list."""

    contacts: list[ContactResponse]
    total: int
    limit: int
    offset: int


class ContactAdminUpdate(BaseModel):
    """Promote or demote a contact."""

    is_admin: bool = Field(..., description="New value of the persisted admin flag")
