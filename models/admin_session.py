"""Admin session model and schema."""

from datetime import datetime, UTC
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict
from sqlalchemy import BigInteger, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class AdminSession(Base):
    """Store-backed admin session - one row per login, revocable before expiry."""

    __tablename__ = "admin_sessions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    telegram_user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    # Opaque random value; never a signed admin token
    token: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)


class SessionRecord(BaseModel):
    """Schema for session response (token omitted)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    telegram_user_id: int
    created_at: datetime
    expires_at: datetime
    ip_address: str | None
    user_agent: str | None


class SweepResponse(BaseModel):
    """Result of an expired-session sweep."""

    deleted: int
