"""Typed failures raised by the authentication and account services.

Every failure carries an ``AuthErrorKind``; callers branch on the kind and
the API layer maps it to an HTTP status. Message text is for humans only.
"""

from enum import Enum


class AuthErrorKind(str, Enum):
    USER_NOT_FOUND = "user_not_found"
    EMAIL_NOT_VERIFIED = "email_not_verified"
    INVALID_SIGNATURE = "invalid_signature"
    DELIVERY_FAILED = "delivery_failed"
    MISSING_CONTACT_INFO = "missing_contact_info"
    OTP_NOT_FOUND_OR_EXPIRED = "otp_not_found_or_expired"
    INVALID_OTP_CODE = "invalid_otp_code"
    USER_ALREADY_EXISTS = "user_already_exists"
    EMAIL_ALREADY_VERIFIED = "email_already_verified"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
    INVALID_CREDENTIALS = "invalid_credentials"


DEFAULT_MESSAGES: dict[AuthErrorKind, str] = {
    AuthErrorKind.USER_NOT_FOUND: "User with this wallet address not found.",
    AuthErrorKind.EMAIL_NOT_VERIFIED: "A verified email address is required for 2FA.",
    AuthErrorKind.INVALID_SIGNATURE: "Invalid wallet signature or nonce mismatch.",
    AuthErrorKind.DELIVERY_FAILED: "Failed to send OTP email.",
    AuthErrorKind.MISSING_CONTACT_INFO: "User email address is missing for OTP.",
    AuthErrorKind.OTP_NOT_FOUND_OR_EXPIRED: "OTP expired or not found.",
    AuthErrorKind.INVALID_OTP_CODE: "Invalid OTP code.",
    AuthErrorKind.USER_ALREADY_EXISTS: "User already exists.",
    AuthErrorKind.EMAIL_ALREADY_VERIFIED: "Email is already verified.",
    AuthErrorKind.INVALID_OR_EXPIRED_TOKEN: "Invalid or expired token.",
    AuthErrorKind.INVALID_CREDENTIALS: "Invalid credentials.",
}

HTTP_STATUS: dict[AuthErrorKind, int] = {
    AuthErrorKind.USER_NOT_FOUND: 404,
    AuthErrorKind.EMAIL_NOT_VERIFIED: 403,
    AuthErrorKind.INVALID_SIGNATURE: 401,
    AuthErrorKind.DELIVERY_FAILED: 400,
    AuthErrorKind.MISSING_CONTACT_INFO: 400,
    AuthErrorKind.OTP_NOT_FOUND_OR_EXPIRED: 400,
    AuthErrorKind.INVALID_OTP_CODE: 401,
    AuthErrorKind.USER_ALREADY_EXISTS: 409,
    AuthErrorKind.EMAIL_ALREADY_VERIFIED: 400,
    AuthErrorKind.INVALID_OR_EXPIRED_TOKEN: 400,
    AuthErrorKind.INVALID_CREDENTIALS: 401,
}


class AuthError(Exception):
    """A protocol or account failure of a known kind.

    Extra keyword arguments are kept in ``context`` for logging; they are
    never sent back to the client.
    """

    def __init__(self, kind: AuthErrorKind, message: str | None = None, **context):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.context = context
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]

    def __repr__(self) -> str:
        return f"AuthError({self.kind.value!r}, {self.message!r})"
