"""Authentication API — registration, email verification, password login, refresh."""

from fastapi import APIRouter, Depends, HTTPException, status

from lending_identity.api.deps import get_account_service
from lending_identity.schemas.auth import (
    EmailRequest,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenRequest,
)
from lending_identity.services.account import AccountService
from lending_identity.services.auth import REFRESH, TokenPair, decode_token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(body: RegisterRequest, accounts: AccountService = Depends(get_account_service)):
    user = accounts.register(
        email=body.email,
        password=body.password,
        name=body.name,
        wallet_address=body.wallet_address,
    )
    return RegisterResponse(
        message="User registered successfully. Please check your email to verify your account.",
        user_id=user.id,
    )


@router.post("/send-verification-email", response_model=MessageResponse)
def send_verification_email(body: EmailRequest, accounts: AccountService = Depends(get_account_service)):
    accounts.send_verification_email(body.email)
    return MessageResponse(message="Verification email sent successfully")


@router.post("/verify-email", response_model=MessageResponse)
def verify_email(body: TokenRequest, accounts: AccountService = Depends(get_account_service)):
    accounts.verify_email(body.token)
    return MessageResponse(message="Email verified successfully")


@router.post("/login", response_model=TokenPair)
def login(body: LoginRequest, accounts: AccountService = Depends(get_account_service)):
    return accounts.login(body.email, body.password)


@router.post("/refresh", response_model=TokenPair)
def refresh(body: RefreshRequest, accounts: AccountService = Depends(get_account_service)):
    subject = decode_token(body.refresh_token, expected_type=REFRESH)
    if subject is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )
    return accounts.refresh(int(subject))
