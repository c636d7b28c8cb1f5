"""Tests for wallet signature recovery and nonce generation."""

from eth_account import Account
from eth_account.messages import encode_defunct

from lending_identity.services.wallet import NonceGenerator, SignatureVerifier, challenge_message

PRIVATE_KEY = "0x" + "11" * 32
ACCOUNT = Account.from_key(PRIVATE_KEY)


def sign_nonce(nonce: str, key: str = PRIVATE_KEY) -> str:
    signed = Account.sign_message(encode_defunct(text=challenge_message(nonce)), private_key=key)
    return "0x" + bytes(signed.signature).hex()


def test_challenge_message_embeds_nonce():
    assert challenge_message("abc123") == "Sign this nonce to authenticate: abc123"


def test_valid_signature_for_current_nonce():
    assert SignatureVerifier().verify(ACCOUNT.address, sign_nonce("n0"), "n0") is True


def test_address_comparison_is_case_insensitive():
    assert SignatureVerifier().verify(ACCOUNT.address.lower(), sign_nonce("n0"), "n0") is True


def test_signature_over_other_nonce_is_rejected():
    assert SignatureVerifier().verify(ACCOUNT.address, sign_nonce("n0"), "n1") is False


def test_signature_from_other_key_is_rejected():
    other = sign_nonce("n0", key="0x" + "22" * 32)
    assert SignatureVerifier().verify(ACCOUNT.address, other, "n0") is False


def test_nonce_generator_produces_fresh_hex():
    gen = NonceGenerator()
    values = {gen.generate() for _ in range(50)}
    assert len(values) == 50
    assert all(len(v) == 32 and int(v, 16) >= 0 for v in values)
