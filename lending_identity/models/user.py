"""User model: password and wallet identities share one row."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    __tablename__ = "user"

    id: int | None = Field(default=None, primary_key=True)
    name: str = ""
    email: str | None = Field(default=None, unique=True, index=True)
    hashed_password: str | None = None
    wallet_address: str | None = Field(default=None, unique=True, index=True)
    nonce: str = ""  # current wallet challenge, rotated on every 2FA initiation
    is_email_verified: bool = Field(default=False)
    monthly_income: Decimal | None = Field(default=None, max_digits=14, decimal_places=2)
    last_login: datetime | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
