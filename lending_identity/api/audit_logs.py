"""Audit log API — the current user's activity entries."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from lending_identity.api.deps import get_current_user
from lending_identity.database import get_session
from lending_identity.models.audit_log import AuditLog
from lending_identity.models.user import User
from lending_identity.schemas.records import AuditLogCreate, AuditLogRead, AuditLogUpdate

router = APIRouter(prefix="/audit-logs", tags=["audit-logs"])


def _get_own_log(log_id: int, user: User, session: Session) -> AuditLog:
    log = session.get(AuditLog, log_id)
    if not log or log.user_id != user.id:
        raise HTTPException(status_code=404, detail="Audit log not found")
    return log


@router.get("", response_model=list[AuditLogRead])
def list_audit_logs(
    page: int = 1,
    limit: int = 10,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    page = max(1, page)
    limit = max(1, limit)
    stmt = (
        select(AuditLog)
        .where(AuditLog.user_id == user.id)
        .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return session.exec(stmt).all()


@router.post("", response_model=AuditLogRead, status_code=201)
def create_audit_log(
    data: AuditLogCreate,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    log = AuditLog(user_id=user.id, action=data.action, details=data.details)
    session.add(log)
    session.commit()
    session.refresh(log)
    return log


@router.get("/{log_id}", response_model=AuditLogRead)
def get_audit_log(
    log_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return _get_own_log(log_id, user, session)


@router.put("/{log_id}", response_model=AuditLogRead)
def update_audit_log(
    log_id: int,
    data: AuditLogUpdate,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    log = _get_own_log(log_id, user, session)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(log, key, value)
    log.updated_at = datetime.now(timezone.utc)
    session.add(log)
    session.commit()
    session.refresh(log)
    return log


@router.delete("/{log_id}", status_code=204)
def delete_audit_log(
    log_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    log = _get_own_log(log_id, user, session)
    session.delete(log)
    session.commit()
