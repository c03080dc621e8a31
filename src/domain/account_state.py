"""
Account state machine - verification and seller status.

States per user are the product of two independent axes::

    {UNVERIFIED, VERIFIED} x {BUYER, SELLER}

Valid transitions (forward-only):
    UNVERIFIED -> VERIFIED   (successful OTP consumption)
    BUYER      -> SELLER     (successful seller onboarding)

There is no demotion path. Attempting a transition that has already
happened raises AlreadyVerified / AlreadySeller and changes nothing.
"""

from dataclasses import dataclass
from enum import Enum

from .credentials import CredentialStore
from .exceptions import AlreadySeller, AlreadyVerified
from .models import User


class VerificationState(str, Enum):
    UNVERIFIED = "UNVERIFIED"
    VERIFIED = "VERIFIED"


class AccountRole(str, Enum):
    BUYER = "BUYER"
    SELLER = "SELLER"


@dataclass(frozen=True)
class AccountState:
    verification: VerificationState
    role: AccountRole


@dataclass
class AccountStateMachine:
    """Applies status transitions through the credential store."""

    credentials: CredentialStore

    @staticmethod
    def state_of(user: User) -> AccountState:
        return AccountState(
            verification=VerificationState.VERIFIED if user.verified else VerificationState.UNVERIFIED,
            role=AccountRole.SELLER if user.is_seller else AccountRole.BUYER,
        )

    @staticmethod
    def ensure_can_verify(user: User) -> None:
        if user.verified:
            raise AlreadyVerified()

    @staticmethod
    def ensure_can_become_seller(user: User) -> None:
        if user.is_seller:
            raise AlreadySeller()

    def mark_verified(self, user: User) -> AccountState:
        """UNVERIFIED -> VERIFIED. Caller must have consumed a verify token."""
        self.ensure_can_verify(user)
        self.credentials.set_verified(user)
        return self.state_of(user)

    def promote_to_seller(self, user: User) -> AccountState:
        """BUYER -> SELLER. Caller must have persisted the seller account."""
        self.ensure_can_become_seller(user)
        self.credentials.set_seller(user)
        return self.state_of(user)
