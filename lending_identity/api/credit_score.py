"""Credit score API."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from lending_identity.api.deps import get_current_user
from lending_identity.database import get_session
from lending_identity.models.user import User
from lending_identity.schemas.records import CreditScoreRead, CreditScoreUpdate
from lending_identity.services.credit_score import get_credit_score, upsert_credit_score

router = APIRouter(prefix="/credit-score", tags=["credit-score"])


@router.get("", response_model=CreditScoreRead)
def read_credit_score(user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    record = get_credit_score(session, user.id)
    if not record:
        raise HTTPException(status_code=404, detail="Credit score not found")
    return record


@router.put("", response_model=CreditScoreRead)
def put_credit_score(
    data: CreditScoreUpdate,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return upsert_credit_score(session, user.id, data.score)
