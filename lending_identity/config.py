"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = "sqlite:///./lending_identity.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_minutes: int = 10080  # 7 days

    # One-time passcodes
    otp_expiry_minutes: int = 5
    otp_hash_rounds: int = 12

    # Email verification links
    email_verification_expire_minutes: int = 1440  # 24 hours
    email_change_expire_minutes: int = 10
    app_url: str = "http://localhost:3000"

    # Wallet challenge, formatted with the user's current nonce
    wallet_sign_message: str = "Sign this nonce to authenticate: {nonce}"

    # SMTP
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    mail_from: str = "no-reply@example.com"
    mail_from_name: str = "Lending Identity"

    model_config = {"env_prefix": "LI_", "env_file": ".env"}


settings = Settings()
