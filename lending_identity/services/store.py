"""Credential store: user and OTP persistence behind one session."""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlmodel import Session, select

from lending_identity.models.otp_code import OtpCode
from lending_identity.models.user import User
from lending_identity.services.wallet import normalize_address

logger = logging.getLogger(__name__)


class CredentialStore:
    """Storage operations consumed by the OTP manager and wallet 2FA flow."""

    def __init__(self, session: Session):
        self.session = session

    def find_user_by_wallet(self, wallet_address: str) -> User | None:
        return self.session.exec(
            select(User).where(User.wallet_address == normalize_address(wallet_address))
        ).first()

    def find_user_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def find_user_by_email(self, email: str) -> User | None:
        return self.session.exec(select(User).where(User.email == email)).first()

    def create_user(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def update_user(self, user: User, **fields) -> User:
        for key, value in fields.items():
            setattr(user, key, value)
        user.updated_at = datetime.now(timezone.utc)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def replace_otp(self, user_id: int, code_hash: str, expires_at: datetime) -> OtpCode:
        """Delete every OTP row of the user and store the new one in one commit."""
        result = self.session.exec(delete(OtpCode).where(OtpCode.user_id == user_id))
        if result.rowcount:
            logger.debug(f"Purged {result.rowcount} stale OTP(s) for user {user_id}")
        otp = OtpCode(user_id=user_id, code_hash=code_hash, expires_at=expires_at)
        self.session.add(otp)
        self.session.commit()
        self.session.refresh(otp)
        return otp

    def find_active_otp(self, user_id: int, now: datetime) -> OtpCode | None:
        """Latest OTP of the user that has not expired at ``now``."""
        return self.session.exec(
            select(OtpCode)
            .where(OtpCode.user_id == user_id, OtpCode.expires_at > now)
            .order_by(OtpCode.created_at.desc(), OtpCode.id.desc())
        ).first()

    def delete_otp(self, otp_id: int) -> bool:
        """Delete one OTP row. False when it was already gone."""
        result = self.session.exec(delete(OtpCode).where(OtpCode.id == otp_id))
        self.session.commit()
        return result.rowcount == 1
