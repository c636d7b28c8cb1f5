"""VerificationToken model — emailed links for address verification and email changes."""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Column

PURPOSE_EMAIL_VERIFICATION = "email_verification"
PURPOSE_EMAIL_CHANGE = "email_change"


class VerificationToken(SQLModel, table=True):
    __tablename__ = "verification_token"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    purpose: str  # "email_verification" or "email_change"
    token_hash: str = Field(unique=True, index=True)  # sha256 of the emailed token
    new_email: str | None = None  # only for email_change
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
