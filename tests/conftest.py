"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory repositories and a controllable clock
- A recording email sender that captures delivered messages
- A fully wired AuthService (fast bcrypt cost for speed)
"""

import re
from datetime import datetime, timedelta, timezone

import pytest

from src.adapters.repository.memory import (
    InMemoryProductRepository,
    InMemorySellerRepository,
    InMemoryTokenRepository,
    InMemoryUserRepository,
)
from src.adapters.session.jwt_issuer import JwtSessionIssuer
from src.domain.account_state import AccountStateMachine
from src.domain.auth import AuthService
from src.domain.credentials import CredentialStore
from src.domain.models import Recipient
from src.domain.notifications import NotificationDispatcher
from src.domain.tokens import TokenLedger

TEST_TOKEN_SECRET = "test-token-secret"
TEST_JWT_SECRET = "test-jwt-secret"
FAST_BCRYPT_COST = 4


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingEmailSender:
    """EmailSender that keeps every message instead of delivering it."""

    def __init__(self) -> None:
        self.sent: list[dict] = []

    def send(self, recipient: Recipient, subject: str, text_body: str, html_body: str) -> None:
        self.sent.append(
            {
                "recipient": recipient,
                "subject": subject,
                "text": text_body,
                "html": html_body,
            }
        )

    def last_otp(self) -> str:
        match = re.search(r"\b(\d{6})\b", self.sent[-1]["text"])
        assert match, f"No OTP in message: {self.sent[-1]['text']!r}"
        return match.group(1)

    def last_reset_token(self) -> str:
        match = re.search(r"token=([0-9a-f]{64})", self.sent[-1]["text"])
        assert match, f"No reset token in message: {self.sent[-1]['text']!r}"
        return match.group(1)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def token_repository() -> InMemoryTokenRepository:
    return InMemoryTokenRepository()


@pytest.fixture
def seller_repository() -> InMemorySellerRepository:
    return InMemorySellerRepository()


@pytest.fixture
def product_repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def credentials(user_repository: InMemoryUserRepository) -> CredentialStore:
    return CredentialStore(repository=user_repository, bcrypt_cost=FAST_BCRYPT_COST)


@pytest.fixture
def ledger(token_repository: InMemoryTokenRepository, clock: FakeClock) -> TokenLedger:
    return TokenLedger(
        token_repository,
        secret=TEST_TOKEN_SECRET,
        otp_ttl_seconds=900,
        reset_ttl_seconds=3600,
        clock=clock,
    )


@pytest.fixture
def session_issuer() -> JwtSessionIssuer:
    return JwtSessionIssuer(secret=TEST_JWT_SECRET)


@pytest.fixture
def service(
    credentials: CredentialStore,
    ledger: TokenLedger,
    email_sender: RecordingEmailSender,
    session_issuer: JwtSessionIssuer,
    seller_repository: InMemorySellerRepository,
    product_repository: InMemoryProductRepository,
) -> AuthService:
    return AuthService(
        credentials=credentials,
        tokens=ledger,
        accounts=AccountStateMachine(credentials),
        notifications=NotificationDispatcher(email_sender=email_sender),
        session_issuer=session_issuer,
        sellers=seller_repository,
        products=product_repository,
    )
