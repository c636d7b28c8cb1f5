"""Pydantic schemas for audit, loan, payment and credit score records."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class AuditLogCreate(BaseModel):
    action: str = Field(min_length=1, max_length=200)
    details: str | None = None


class AuditLogUpdate(BaseModel):
    action: str | None = Field(default=None, min_length=1, max_length=200)
    details: str | None = None

    @field_validator("action")
    @classmethod
    def _action_not_null(cls, value: str | None) -> str:
        # omitted keeps the current action; explicit null is not allowed
        if value is None:
            raise ValueError("action cannot be null")
        return value


class AuditLogRead(BaseModel):
    id: int
    user_id: int | None
    action: str
    details: str | None
    timestamp: datetime

    model_config = {"from_attributes": True}


class LoanCreate(BaseModel):
    amount: Decimal = Field(gt=0)


class LoanStatusUpdate(BaseModel):
    status: Literal["active", "completed", "defaulted"]


class PaymentRead(BaseModel):
    id: int
    loan_id: int
    amount: Decimal
    status: str
    due_date: datetime
    payment_date: datetime | None

    model_config = {"from_attributes": True}


class LoanRead(BaseModel):
    id: int
    user_id: int
    amount: Decimal
    status: str
    start_date: datetime
    end_date: datetime | None
    payments: list[PaymentRead] = []

    model_config = {"from_attributes": True}


class CreditScoreUpdate(BaseModel):
    score: int = Field(ge=300, le=850)


class CreditScoreRead(BaseModel):
    user_id: int
    score: int
    category: str
    updated_at: datetime

    model_config = {"from_attributes": True}
