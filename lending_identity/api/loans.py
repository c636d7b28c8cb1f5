"""Loan and payment history API."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from lending_identity.api.deps import get_current_user
from lending_identity.database import get_session
from lending_identity.models.loan import Loan, Payment
from lending_identity.models.user import User
from lending_identity.schemas.records import LoanCreate, LoanRead, LoanStatusUpdate, PaymentRead

router = APIRouter(tags=["loans"])


def _loan_read(loan: Loan, session: Session) -> LoanRead:
    payments = session.exec(
        select(Payment).where(Payment.loan_id == loan.id).order_by(Payment.due_date)
    ).all()
    return LoanRead(
        id=loan.id,
        user_id=loan.user_id,
        amount=loan.amount,
        status=loan.status,
        start_date=loan.start_date,
        end_date=loan.end_date,
        payments=[PaymentRead.model_validate(p) for p in payments],
    )


def _get_own_loan(loan_id: int, user: User, session: Session) -> Loan:
    loan = session.get(Loan, loan_id)
    if not loan or loan.user_id != user.id:
        raise HTTPException(status_code=404, detail="Loan not found")
    return loan


@router.get("/loans", response_model=list[LoanRead])
def list_loans(user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    loans = session.exec(
        select(Loan).where(Loan.user_id == user.id).order_by(Loan.created_at.desc(), Loan.id.desc())
    ).all()
    return [_loan_read(loan, session) for loan in loans]


@router.post("/loans", response_model=LoanRead, status_code=201)
def create_loan(
    data: LoanCreate,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    loan = Loan(user_id=user.id, amount=data.amount, status="active")
    session.add(loan)
    session.commit()
    session.refresh(loan)
    return _loan_read(loan, session)


@router.get("/loans/{loan_id}", response_model=LoanRead)
def get_loan(loan_id: int, user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    return _loan_read(_get_own_loan(loan_id, user, session), session)


@router.put("/loans/{loan_id}/status", response_model=LoanRead)
def update_loan_status(
    loan_id: int,
    data: LoanStatusUpdate,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    loan = _get_own_loan(loan_id, user, session)
    now = datetime.now(timezone.utc)
    loan.status = data.status
    loan.updated_at = now
    if data.status in ("completed", "defaulted"):
        loan.end_date = now
    session.add(loan)
    session.commit()
    session.refresh(loan)
    return _loan_read(loan, session)


@router.get("/payments", response_model=list[PaymentRead])
def list_payments(user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    stmt = (
        select(Payment)
        .join(Loan, Loan.id == Payment.loan_id)
        .where(Loan.user_id == user.id)
        .order_by(Payment.payment_date.desc().nulls_last())
    )
    return session.exec(stmt).all()
