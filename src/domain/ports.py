"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols structurally,
without inheriting from them.
"""

from datetime import datetime
from typing import Protocol

from .models import Product, Recipient, SellerAccount, TokenPurpose, TokenRecord, User


class UserRepository(Protocol):
    """Port interface for user persistence."""

    def create(self, user: User) -> bool:
        """
        Insert a new user.

        Email uniqueness is enforced atomically by the store (unique
        constraint), so concurrent inserts of the same email produce
        exactly one row.

        Returns:
            True if inserted, False if the email is already on file
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by normalized email."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Look up a user by id. ``user_id`` is already well formed."""
        ...

    def set_verified(self, user_id: str) -> None: ...

    def set_password_hash(self, user_id: str, password_hash: str) -> None: ...

    def set_seller(self, user_id: str) -> None: ...


class TokenRepository(Protocol):
    """
    Port interface for the token ledger's storage.

    One slot per (owner_id, purpose).
    """

    def save(self, record: TokenRecord) -> None:
        """Insert or overwrite the slot for (record.owner_id, record.purpose)."""
        ...

    def find(self, owner_id: str, purpose: TokenPurpose) -> TokenRecord | None: ...

    def delete_matching(
        self, owner_id: str, purpose: TokenPurpose, token_hash: str, issued_after: datetime
    ) -> bool:
        """
        Atomically delete the slot if its hash matches and it is still live.

        This is the single conditional operation that enforces single use:
        of N concurrent callers with the right hash, exactly one gets True.

        Returns:
            True if a row was deleted, False otherwise
        """
        ...

    def delete(self, owner_id: str, purpose: TokenPurpose) -> None:
        """Delete the slot if present. No-op otherwise."""
        ...


class SellerRepository(Protocol):
    """Port interface for seller account persistence."""

    def create(self, account: SellerAccount) -> bool:
        """
        Insert a seller account.

        Returns:
            True if inserted, False if the owner already has one
        """
        ...

    def get_by_owner(self, owner_id: str) -> SellerAccount | None: ...


class ProductRepository(Protocol):
    """Port interface for product persistence."""

    def create(self, product: Product) -> None: ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, recipient: Recipient, subject: str, text_body: str, html_body: str) -> None:
        """
        Deliver one message.

        Args:
            recipient: Address and display name
            subject: Subject line
            text_body: Plain-text part
            html_body: HTML part
        """
        ...


class SessionTokenIssuer(Protocol):
    """Port interface for minting login session tokens."""

    def sign(self, user: User) -> str: ...


class BlobStore(Protocol):
    """Port interface for the storage provider behind uploads."""

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """
        Store bytes under ``key``.

        Returns:
            Retrievable URL of the stored object
        """
        ...
