"""Credit score bucketing and upsert."""

from datetime import datetime, timezone

from sqlmodel import Session, select

from lending_identity.models.credit_score import CreditScore

# (exclusive upper bound, category)
CATEGORY_BANDS = [
    (580, "Poor"),
    (670, "Fair"),
    (740, "Good"),
    (800, "Very Good"),
]


def determine_category(score: int) -> str:
    for upper, category in CATEGORY_BANDS:
        if score < upper:
            return category
    return "Excellent"


def get_credit_score(session: Session, user_id: int) -> CreditScore | None:
    return session.exec(select(CreditScore).where(CreditScore.user_id == user_id)).first()


def upsert_credit_score(session: Session, user_id: int, score: int) -> CreditScore:
    record = get_credit_score(session, user_id)
    if record is None:
        record = CreditScore(user_id=user_id, score=score, category=determine_category(score))
    else:
        record.score = score
        record.category = determine_category(score)
        record.updated_at = datetime.now(timezone.utc)
    session.add(record)
    session.commit()
    session.refresh(record)
    return record
