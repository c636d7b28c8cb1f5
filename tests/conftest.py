"""Shared fixtures: in-memory database, fake collaborators, API client."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import lending_identity.models  # noqa: F401
from lending_identity.api import deps
from lending_identity.database import get_session
from lending_identity.main import app
from lending_identity.models.user import User
from lending_identity.services.auth import TokenIssuer
from lending_identity.services.otp import OtpManager
from lending_identity.services.store import CredentialStore
from lending_identity.services.wallet_2fa import Wallet2FAOrchestrator

TEST_HASH_ROUNDS = 4


class FakeNotifier:
    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, email, name, purpose, payload):
        if self.fail:
            raise ConnectionError("smtp unreachable")
        self.sent.append((email, name, purpose, payload))

    @property
    def last_payload(self) -> str:
        return self.sent[-1][3]


class FakeVerifier:
    """Accepts exactly the signature ``signed:<nonce>``."""

    def __init__(self):
        self.calls = []
        self.raise_error = False

    def verify(self, wallet_address, signature, nonce):
        self.calls.append((wallet_address, signature, nonce))
        if self.raise_error:
            raise ValueError("malformed signature")
        return signature == f"signed:{nonce}"


class SequenceNonceGenerator:
    def __init__(self):
        self.count = 0

    def generate(self):
        self.count += 1
        return f"n{self.count}"


class Clock:
    def __init__(self):
        self.now = datetime.now(timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, minutes: float):
        self.now += timedelta(minutes=minutes)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session):
    return CredentialStore(session)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def nonces():
    return SequenceNonceGenerator()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def otp_manager(store, notifier, clock):
    return OtpManager(store, notifier, hash_rounds=TEST_HASH_ROUNDS, clock=clock)


@pytest.fixture
def orchestrator(store, otp_manager, verifier, nonces):
    return Wallet2FAOrchestrator(store, otp_manager, verifier, nonces, TokenIssuer())


@pytest.fixture
def wallet_user(store):
    return store.create_user(User(
        name="Wallet Test",
        email="walletuser@example.com",
        wallet_address="0xabc",
        nonce="n0",
        is_email_verified=True,
    ))


@pytest.fixture
def client(session, notifier, verifier, nonces):
    def _otp_manager(store: CredentialStore = Depends(deps.get_store)):
        return OtpManager(store, notifier, hash_rounds=TEST_HASH_ROUNDS)

    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[deps.get_notifier] = lambda: notifier
    app.dependency_overrides[deps.get_signature_verifier] = lambda: verifier
    app.dependency_overrides[deps.get_nonce_generator] = lambda: nonces
    app.dependency_overrides[deps.get_otp_manager] = _otp_manager
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(wallet_user):
    tokens = TokenIssuer().issue(wallet_user.id)
    return {"Authorization": f"Bearer {tokens.access_token}"}
