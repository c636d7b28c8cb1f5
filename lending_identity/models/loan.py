"""Loan and Payment models."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field

LOAN_STATUSES = ("active", "completed", "defaulted")
PAYMENT_STATUSES = ("on_time", "late", "pending")


class Loan(SQLModel, table=True):
    __tablename__ = "loan"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    amount: Decimal = Field(max_digits=14, decimal_places=2)
    status: str = "active"  # "active", "completed", "defaulted"
    start_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    end_date: datetime | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Payment(SQLModel, table=True):
    __tablename__ = "payment"

    id: int | None = Field(default=None, primary_key=True)
    loan_id: int = Field(foreign_key="loan.id", index=True)
    amount: Decimal = Field(max_digits=14, decimal_places=2)
    status: str = "pending"  # "on_time", "late", "pending"
    due_date: datetime
    payment_date: datetime | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
