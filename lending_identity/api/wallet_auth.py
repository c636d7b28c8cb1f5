"""Wallet 2FA API — signed-nonce challenge followed by emailed OTP."""

from fastapi import APIRouter, Depends, Query

from lending_identity.api.deps import get_wallet_2fa
from lending_identity.schemas.auth import (
    ChallengeResponse,
    MessageResponse,
    WalletInitRequest,
    WalletVerifyRequest,
)
from lending_identity.services.auth import TokenPair
from lending_identity.services.wallet_2fa import Wallet2FAOrchestrator

router = APIRouter(prefix="/auth/wallet", tags=["wallet-auth"])


@router.get("/nonce", response_model=ChallengeResponse)
def get_wallet_challenge(
    wallet_address: str = Query(min_length=1),
    flow: Wallet2FAOrchestrator = Depends(get_wallet_2fa),
):
    nonce, message = flow.challenge(wallet_address)
    return ChallengeResponse(nonce=nonce, message=message)


@router.post("/init", response_model=MessageResponse)
def initiate_wallet_2fa(
    body: WalletInitRequest,
    flow: Wallet2FAOrchestrator = Depends(get_wallet_2fa),
):
    message = flow.initiate(body.wallet_address, body.signed_message)
    return MessageResponse(message=message)


@router.post("/verify", response_model=TokenPair)
def verify_wallet_otp(
    body: WalletVerifyRequest,
    flow: Wallet2FAOrchestrator = Depends(get_wallet_2fa),
):
    return flow.verify(body.wallet_address, body.otp_code)
