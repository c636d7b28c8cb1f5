"""Wallet two-factor login: signed nonce first, emailed OTP second.

    initiate(wallet, signature)  Idle -> Challenged
        signature over the stored nonce is checked, the nonce is rotated,
        and an OTP is emailed.
    verify(wallet, otp)          Challenged -> Authenticated
        the OTP is consumed and a session token pair is issued.
    challenge(wallet)            read-only
        returns the stored nonce the next initiate must be signed over.

Any failure is terminal for the attempt; the client restarts with a new
signature over the rotated nonce.
"""

import logging
from datetime import datetime, timezone

from lending_identity.services.auth import TokenIssuer, TokenPair
from lending_identity.services.errors import AuthError, AuthErrorKind
from lending_identity.services.otp import OtpManager
from lending_identity.services.store import CredentialStore
from lending_identity.services.wallet import NonceGenerator, SignatureVerifier, challenge_message

logger = logging.getLogger(__name__)


class Wallet2FAOrchestrator:
    def __init__(
        self,
        store: CredentialStore,
        otp_manager: OtpManager,
        signature_verifier: SignatureVerifier,
        nonce_generator: NonceGenerator,
        token_issuer: TokenIssuer,
    ):
        self.store = store
        self.otp_manager = otp_manager
        self.signature_verifier = signature_verifier
        self.nonce_generator = nonce_generator
        self.token_issuer = token_issuer

    def challenge(self, wallet_address: str) -> tuple[str, str]:
        """Current nonce of the wallet and the text to sign over it."""
        user = self.store.find_user_by_wallet(wallet_address)
        if user is None:
            raise AuthError(AuthErrorKind.USER_NOT_FOUND, wallet_address=wallet_address)
        return user.nonce, challenge_message(user.nonce)

    def initiate(self, wallet_address: str, signed_message: str) -> str:
        user = self.store.find_user_by_wallet(wallet_address)
        if user is None:
            raise AuthError(AuthErrorKind.USER_NOT_FOUND, wallet_address=wallet_address)

        if not user.email or not user.is_email_verified:
            raise AuthError(AuthErrorKind.EMAIL_NOT_VERIFIED, user_id=user.id)

        try:
            valid = self.signature_verifier.verify(wallet_address, signed_message, user.nonce)
        except Exception as e:
            logger.warning(f"Signature check raised for user {user.id}: {e}")
            valid = False
        if not valid:
            raise AuthError(AuthErrorKind.INVALID_SIGNATURE, user_id=user.id)

        # Rotated before the OTP goes out: a delivery failure below still
        # invalidates this signature and the client must sign the new nonce.
        self.store.update_user(user, nonce=self.nonce_generator.generate())
        logger.info(f"Nonce rotated for user {user.id}")

        self.otp_manager.create_and_send_otp(user)

        return (
            f"OTP sent successfully to {user.email}. "
            f"It will expire in {self.otp_manager.expiry_minutes} minutes."
        )

    def verify(self, wallet_address: str, otp_code: str) -> TokenPair:
        user = self.store.find_user_by_wallet(wallet_address)
        if user is None:
            raise AuthError(AuthErrorKind.USER_NOT_FOUND, wallet_address=wallet_address)

        self.otp_manager.verify_otp(user.id, otp_code)

        tokens = self.token_issuer.issue(user.id)
        self.store.update_user(user, last_login=datetime.now(timezone.utc))
        logger.info(f"Wallet 2FA completed for user {user.id}")
        return tokens
