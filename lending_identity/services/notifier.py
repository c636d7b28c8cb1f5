"""Email notifications over SMTP."""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from enum import Enum

from lending_identity.config import settings

logger = logging.getLogger(__name__)


class NotificationType(str, Enum):
    OTP_VERIFICATION = "OTP_VERIFICATION"
    EMAIL_VERIFICATION = "EMAIL_VERIFICATION"
    SYSTEM_ALERT = "SYSTEM_ALERT"


SUBJECTS = {
    NotificationType.OTP_VERIFICATION: "Your login code",
    NotificationType.EMAIL_VERIFICATION: "Verify your email address",
    NotificationType.SYSTEM_ALERT: "Account notice",
}


def _mask(email: str) -> str:
    user, _, domain = email.partition("@")
    return f"{user[:1]}***@{domain}" if domain else "***"


def compose_body(name: str | None, purpose: NotificationType, payload: str) -> str:
    greeting = f"Hi {name}," if name else "Hi,"
    if purpose == NotificationType.OTP_VERIFICATION:
        text = (
            f"Your one-time code is {payload}.\n"
            f"It expires in {settings.otp_expiry_minutes} minutes."
        )
    elif purpose == NotificationType.EMAIL_VERIFICATION:
        text = f"Verify your email address with this link:\n{payload}"
    else:
        text = payload
    return f"{greeting}\n\n{text}\n"


class EmailNotifier:
    """Sends plain-text email through the configured SMTP relay (STARTTLS)."""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        user: str | None = None,
        password: str | None = None,
        timeout: float = 10,
    ):
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port
        self.user = user if user is not None else settings.smtp_user
        self.password = password if password is not None else settings.smtp_password
        self.timeout = timeout

    def send(self, email: str, name: str | None, purpose: NotificationType, payload: str) -> None:
        msg = EmailMessage()
        msg["Subject"] = SUBJECTS[purpose]
        msg["From"] = f"{settings.mail_from_name} <{settings.mail_from}>"
        msg["To"] = email
        msg.set_content(compose_body(name, purpose, payload))

        ctx = ssl.create_default_context()
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.starttls(context=ctx)
            if self.user and self.password:
                smtp.login(self.user, self.password)
            smtp.send_message(msg)
        logger.info(f"Sent {purpose.value} email to {_mask(email)}")
