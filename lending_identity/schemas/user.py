"""Pydantic schemas for profile endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, field_validator


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    email: EmailStr | None = None
    monthly_income: Decimal | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def _trim_optional_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text


class UserRead(BaseModel):
    id: int
    name: str
    email: str | None
    wallet_address: str | None
    is_email_verified: bool
    monthly_income: Decimal | None
    last_login: datetime | None
    created_at: datetime
    # password hash and nonce are NEVER exposed

    model_config = {"from_attributes": True}


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserRead
