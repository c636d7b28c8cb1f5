"""CreditScore model — one score per user."""

from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class CreditScore(SQLModel, table=True):
    __tablename__ = "credit_score"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)
    score: int
    category: str  # "Poor", "Fair", "Good", "Very Good", "Excellent"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
