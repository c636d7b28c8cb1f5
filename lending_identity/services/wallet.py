"""Wallet challenge primitives: nonce generation and signature recovery."""

import logging
import secrets

from eth_account import Account
from eth_account.messages import encode_defunct

from lending_identity.config import settings

logger = logging.getLogger(__name__)


def normalize_address(wallet_address: str) -> str:
    """Canonical stored form of a wallet address (trimmed, lowercase)."""
    return wallet_address.strip().lower()


def challenge_message(nonce: str) -> str:
    """Text the wallet signs for the given nonce."""
    return settings.wallet_sign_message.format(nonce=nonce)


class SignatureVerifier:
    """Checks an EIP-191 personal_sign signature against the expected nonce."""

    def verify(self, wallet_address: str, signature: str, nonce: str) -> bool:
        encoded = encode_defunct(text=challenge_message(nonce))
        recovered = Account.recover_message(encoded, signature=signature)
        return normalize_address(recovered) == normalize_address(wallet_address)


class NonceGenerator:
    def generate(self) -> str:
        return secrets.token_hex(16)
