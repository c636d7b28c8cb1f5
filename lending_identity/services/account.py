"""Password accounts: registration, email verification, login, profile changes."""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import delete
from sqlmodel import select

from lending_identity.config import settings
from lending_identity.models.user import User
from lending_identity.models.verification_token import (
    PURPOSE_EMAIL_CHANGE,
    PURPOSE_EMAIL_VERIFICATION,
    VerificationToken,
)
from lending_identity.services.auth import TokenIssuer, TokenPair, hash_password, verify_password
from lending_identity.services.errors import AuthError, AuthErrorKind
from lending_identity.services.notifier import NotificationType
from lending_identity.services.store import CredentialStore
from lending_identity.services.wallet import normalize_address

logger = logging.getLogger(__name__)


def _hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands datetimes back naive; they are stored as UTC.
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class AccountService:
    def __init__(self, store: CredentialStore, notifier, token_issuer: TokenIssuer, nonce_generator=None):
        self.store = store
        self.session = store.session
        self.notifier = notifier
        self.token_issuer = token_issuer
        self.nonce_generator = nonce_generator

    # -- tokens ------------------------------------------------------------

    def _issue_token(
        self,
        user_id: int,
        purpose: str,
        minutes: int,
        new_email: str | None = None,
    ) -> str:
        """Replace the user's pending token for ``purpose`` and return the plain value."""
        self.session.exec(
            delete(VerificationToken).where(
                VerificationToken.user_id == user_id,
                VerificationToken.purpose == purpose,
            )
        )
        token = secrets.token_urlsafe(32)
        self.session.add(VerificationToken(
            user_id=user_id,
            purpose=purpose,
            token_hash=_hash_token(token),
            new_email=new_email,
            expires_at=datetime.now(timezone.utc) + timedelta(minutes=minutes),
        ))
        self.session.commit()
        return token

    def _consume_token(self, token: str, purpose: str) -> VerificationToken:
        record = self.session.exec(
            select(VerificationToken).where(
                VerificationToken.token_hash == _hash_token(token),
                VerificationToken.purpose == purpose,
            )
        ).first()
        if record is None or _as_utc(record.expires_at) <= datetime.now(timezone.utc):
            raise AuthError(AuthErrorKind.INVALID_OR_EXPIRED_TOKEN)
        self.session.delete(record)
        return record

    # -- registration ------------------------------------------------------

    def register(
        self,
        email: str,
        password: str,
        name: str = "",
        wallet_address: str | None = None,
    ) -> User:
        if self.store.find_user_by_email(email):
            raise AuthError(AuthErrorKind.USER_ALREADY_EXISTS)
        if wallet_address and self.store.find_user_by_wallet(wallet_address):
            raise AuthError(
                AuthErrorKind.USER_ALREADY_EXISTS,
                "Wallet address is already registered.",
            )

        user = self.store.create_user(User(
            email=email,
            name=name,
            hashed_password=hash_password(password),
            wallet_address=normalize_address(wallet_address) if wallet_address else None,
            nonce=self.nonce_generator.generate() if self.nonce_generator else "",
        ))
        logger.info(f"Registered user {user.id}")
        self.send_verification_email(email)
        return user

    def send_verification_email(self, email: str) -> None:
        user = self.store.find_user_by_email(email)
        if user is None:
            raise AuthError(AuthErrorKind.USER_NOT_FOUND, "User not found.")
        if user.is_email_verified:
            raise AuthError(AuthErrorKind.EMAIL_ALREADY_VERIFIED, user_id=user.id)

        token = self._issue_token(
            user.id, PURPOSE_EMAIL_VERIFICATION, settings.email_verification_expire_minutes
        )
        link = f"{settings.app_url}/auth/verify-email?token={token}"
        self.notifier.send(user.email, user.name, NotificationType.EMAIL_VERIFICATION, link)

    def verify_email(self, token: str) -> User:
        record = self._consume_token(token, PURPOSE_EMAIL_VERIFICATION)
        user = self.store.find_user_by_id(record.user_id)
        if user is None:
            raise AuthError(AuthErrorKind.USER_NOT_FOUND, "User not found.")
        # update_user commits the token deletion too
        return self.store.update_user(user, is_email_verified=True)

    # -- login -------------------------------------------------------------

    def login(self, email: str, password: str) -> TokenPair:
        user = self.store.find_user_by_email(email)
        if user is None or not user.hashed_password:
            raise AuthError(AuthErrorKind.INVALID_CREDENTIALS)
        if not verify_password(password, user.hashed_password):
            raise AuthError(AuthErrorKind.INVALID_CREDENTIALS, user_id=user.id)
        if not user.is_email_verified:
            raise AuthError(AuthErrorKind.EMAIL_NOT_VERIFIED, "Email address is not verified.")

        tokens = self.token_issuer.issue(user.id)
        self.store.update_user(user, last_login=datetime.now(timezone.utc))
        return tokens

    def refresh(self, user_id: int) -> TokenPair:
        if self.store.find_user_by_id(user_id) is None:
            raise AuthError(AuthErrorKind.INVALID_OR_EXPIRED_TOKEN)
        return self.token_issuer.issue(user_id)

    # -- profile -----------------------------------------------------------

    def update_profile(
        self,
        user_id: int,
        name: str | None = None,
        email: str | None = None,
        monthly_income: Decimal | None = None,
    ) -> User:
        """Apply name/income now; a new email only takes effect once confirmed."""
        user = self.store.find_user_by_id(user_id)
        if user is None:
            raise AuthError(AuthErrorKind.USER_NOT_FOUND, "User not found.")

        changes = {}
        if name is not None:
            changes["name"] = name
        if monthly_income is not None:
            changes["monthly_income"] = monthly_income

        if email and email != user.email:
            if self.store.find_user_by_email(email):
                raise AuthError(AuthErrorKind.USER_ALREADY_EXISTS, "Email address is already in use.")
            token = self._issue_token(
                user.id, PURPOSE_EMAIL_CHANGE, settings.email_change_expire_minutes, new_email=email
            )
            link = f"{settings.app_url}/users/verify-change-email?token={token}"
            self.notifier.send(
                email,
                changes.get("name", user.name),
                NotificationType.SYSTEM_ALERT,
                f"Please verify your new email address by clicking on this link:\n{link}",
            )

        return self.store.update_user(user, **changes)

    def verify_email_change(self, token: str) -> User:
        record = self._consume_token(token, PURPOSE_EMAIL_CHANGE)
        user = self.store.find_user_by_id(record.user_id)
        if user is None:
            raise AuthError(AuthErrorKind.USER_NOT_FOUND, "User not found.")
        if self.store.find_user_by_email(record.new_email):
            self.session.commit()
            raise AuthError(AuthErrorKind.USER_ALREADY_EXISTS, "Email address is already in use.")
        logger.info(f"Email changed for user {user.id}")
        return self.store.update_user(user, email=record.new_email, is_email_verified=True)
