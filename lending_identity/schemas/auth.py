"""Pydantic schemas for the auth API."""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

_OTP_RE = re.compile(r"^[0-9]{6}$")


def _required(value: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError("must not be empty")
    return text


class WalletInitRequest(BaseModel):
    wallet_address: str
    signed_message: str

    @field_validator("wallet_address", "signed_message")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        return _required(value)


class WalletVerifyRequest(BaseModel):
    wallet_address: str
    otp_code: str

    @field_validator("wallet_address")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        return _required(value)

    @field_validator("otp_code")
    @classmethod
    def _six_digits(cls, value: str) -> str:
        if not _OTP_RE.fullmatch(value):
            raise ValueError("must be exactly 6 digits")
        return value


class MessageResponse(BaseModel):
    message: str


class ChallengeResponse(BaseModel):
    nonce: str
    message: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    name: str = Field(default="", max_length=120)
    wallet_address: str | None = None

    @field_validator("wallet_address")
    @classmethod
    def _trim_wallet(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class RegisterResponse(BaseModel):
    message: str
    user_id: int = Field(alias="userId")

    model_config = {"populate_by_name": True}


class EmailRequest(BaseModel):
    email: EmailStr


class TokenRequest(BaseModel):
    token: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)
