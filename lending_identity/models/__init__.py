"""Database models."""

from lending_identity.models.user import User
from lending_identity.models.otp_code import OtpCode
from lending_identity.models.verification_token import VerificationToken
from lending_identity.models.audit_log import AuditLog
from lending_identity.models.loan import Loan, Payment
from lending_identity.models.credit_score import CreditScore

__all__ = [
    "User",
    "OtpCode",
    "VerificationToken",
    "AuditLog",
    "Loan",
    "Payment",
    "CreditScore",
]
