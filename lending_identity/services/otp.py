"""Email one-time passcodes: issue, store hashed, deliver, verify once."""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable

from lending_identity.config import settings
from lending_identity.models.user import User
from lending_identity.services.auth import hash_otp, verify_otp_hash
from lending_identity.services.errors import AuthError, AuthErrorKind
from lending_identity.services.notifier import NotificationType
from lending_identity.services.store import CredentialStore

logger = logging.getLogger(__name__)

OTP_MIN = 100000
OTP_MAX = 999999


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_otp() -> str:
    """Uniform 6-digit code in [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


class OtpManager:
    """Keeps at most one live passcode per user.

    Codes are bcrypt-hashed before storage. Sending a new code deletes
    every older one for that user; a successful verification deletes the
    matched code. A wrong code leaves the record in place so the user can
    retry until it expires or is superseded.
    """

    def __init__(
        self,
        store: CredentialStore,
        notifier,
        expiry_minutes: int | None = None,
        hash_rounds: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.notifier = notifier
        self.expiry_minutes = expiry_minutes or settings.otp_expiry_minutes
        self.hash_rounds = hash_rounds or settings.otp_hash_rounds
        self.clock = clock

    def create_and_send_otp(self, user: User) -> datetime:
        """Issue a fresh code for ``user`` and email it. Returns the expiry."""
        if not user.email:
            raise AuthError(AuthErrorKind.MISSING_CONTACT_INFO, user_id=user.id)

        plain = generate_otp()
        code_hash = hash_otp(plain, rounds=self.hash_rounds)
        expires_at = self.clock() + timedelta(minutes=self.expiry_minutes)

        self.store.replace_otp(user.id, code_hash, expires_at)

        try:
            self.notifier.send(user.email, user.name, NotificationType.OTP_VERIFICATION, plain)
        except Exception as e:
            # The stored code stays valid; the caller decides whether to resend.
            logger.error(f"Failed to send OTP email for user {user.id}: {e}")
            raise AuthError(AuthErrorKind.DELIVERY_FAILED, user_id=user.id) from e

        logger.info(f"OTP issued for user {user.id}, expires {expires_at.isoformat()}")
        return expires_at

    def verify_otp(self, user_id: int, plain_code: str) -> bool:
        record = self.store.find_active_otp(user_id, self.clock())
        if record is None:
            raise AuthError(AuthErrorKind.OTP_NOT_FOUND_OR_EXPIRED, user_id=user_id)

        if not verify_otp_hash(plain_code, record.code_hash):
            logger.warning(f"OTP mismatch for user {user_id}")
            raise AuthError(AuthErrorKind.INVALID_OTP_CODE, user_id=user_id)

        # Conditional delete: a concurrent verify that already consumed it wins.
        if not self.store.delete_otp(record.id):
            raise AuthError(AuthErrorKind.OTP_NOT_FOUND_OR_EXPIRED, user_id=user_id)
        return True
