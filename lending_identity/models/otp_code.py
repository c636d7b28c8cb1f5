"""OtpCode model — hashed one-time passcode, at most one live row per user."""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Column


class OtpCode(SQLModel, table=True):
    __tablename__ = "otp_code"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    code_hash: str  # bcrypt hash, the plaintext is never stored
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
