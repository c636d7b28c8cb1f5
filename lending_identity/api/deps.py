"""Shared API dependencies."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from lending_identity.database import get_session
from lending_identity.models.user import User
from lending_identity.services.account import AccountService
from lending_identity.services.auth import TokenIssuer, decode_token
from lending_identity.services.notifier import EmailNotifier
from lending_identity.services.otp import OtpManager
from lending_identity.services.store import CredentialStore
from lending_identity.services.wallet import NonceGenerator, SignatureVerifier
from lending_identity.services.wallet_2fa import Wallet2FAOrchestrator

bearer_scheme = HTTPBearer()


def get_store(session: Session = Depends(get_session)) -> CredentialStore:
    return CredentialStore(session)


def get_notifier() -> EmailNotifier:
    return EmailNotifier()


def get_signature_verifier() -> SignatureVerifier:
    return SignatureVerifier()


def get_nonce_generator() -> NonceGenerator:
    return NonceGenerator()


def get_token_issuer() -> TokenIssuer:
    return TokenIssuer()


def get_otp_manager(
    store: CredentialStore = Depends(get_store),
    notifier=Depends(get_notifier),
) -> OtpManager:
    return OtpManager(store, notifier)


def get_wallet_2fa(
    store: CredentialStore = Depends(get_store),
    otp_manager: OtpManager = Depends(get_otp_manager),
    verifier=Depends(get_signature_verifier),
    nonce_generator=Depends(get_nonce_generator),
    token_issuer=Depends(get_token_issuer),
) -> Wallet2FAOrchestrator:
    return Wallet2FAOrchestrator(store, otp_manager, verifier, nonce_generator, token_issuer)


def get_account_service(
    store: CredentialStore = Depends(get_store),
    notifier=Depends(get_notifier),
    token_issuer=Depends(get_token_issuer),
    nonce_generator=Depends(get_nonce_generator),
) -> AccountService:
    return AccountService(store, notifier, token_issuer, nonce_generator)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    """Validate the access JWT and return the current user."""
    subject = decode_token(credentials.credentials)
    if subject is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    user = session.get(User, int(subject))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user
