"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account lifecycle core: credential store,
token ledger, account state machine, notification dispatcher and the
AuthService that orchestrates them. It defines its own port interfaces
for infrastructure abstraction, ensuring true hexagonal architecture
decoupling.
"""

from .account_state import AccountRole, AccountState, AccountStateMachine, VerificationState
from .auth import AuthService
from .credentials import CredentialStore
from .exceptions import (
    AccountError,
    AlreadySeller,
    AlreadyVerified,
    DuplicateEmail,
    InvalidCredentials,
    InvalidId,
    InvalidToken,
    NotFound,
    NotVerified,
    SamePassword,
    StorageFailure,
    UploadRejected,
    ValidationError,
    WeakPassword,
)
from .models import TokenPurpose
from .notifications import NotificationDispatcher
from .tokens import TokenLedger

__all__ = [
    "AccountError",
    "AccountRole",
    "AccountState",
    "AccountStateMachine",
    "AlreadySeller",
    "AlreadyVerified",
    "AuthService",
    "CredentialStore",
    "DuplicateEmail",
    "InvalidCredentials",
    "InvalidId",
    "InvalidToken",
    "NotFound",
    "NotVerified",
    "NotificationDispatcher",
    "SamePassword",
    "StorageFailure",
    "TokenLedger",
    "TokenPurpose",
    "UploadRejected",
    "ValidationError",
    "VerificationState",
    "WeakPassword",
]
