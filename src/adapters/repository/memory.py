"""
In-memory repository adapters - Implement the domain persistence ports.

Thread-safe dict-backed stores for development and tests. Each store
guards its state with a lock so conditional operations (unique email,
one seller account per user, match-and-delete of tokens) are atomic,
matching the guarantees of the PostgreSQL adapters.
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone

from src.domain.models import Product, SellerAccount, TokenPurpose, TokenRecord, User


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryUserRepository:
    """Implements UserRepository protocol with a dict keyed by id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        self._ids_by_email: dict[str, str] = {}

    def create(self, user: User) -> bool:
        with self._lock:
            if user.email in self._ids_by_email:
                return False
            stored = replace(user, created_at=user.created_at or _now())
            self._users[user.id] = stored
            self._ids_by_email[user.email] = user.id
            return True

    def get_by_email(self, email: str) -> User | None:
        with self._lock:
            user_id = self._ids_by_email.get(email)
            return replace(self._users[user_id]) if user_id is not None else None

    def get_by_id(self, user_id: str) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user is not None else None

    def set_verified(self, user_id: str) -> None:
        self._update(user_id, verified=True)

    def set_password_hash(self, user_id: str, password_hash: str) -> None:
        self._update(user_id, password_hash=password_hash)

    def set_seller(self, user_id: str) -> None:
        self._update(user_id, is_seller=True)

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def _update(self, user_id: str, **changes: object) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                self._users[user_id] = replace(user, **changes)


class InMemoryTokenRepository:
    """Implements TokenRepository protocol with one slot per (owner, purpose)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: dict[tuple[str, TokenPurpose], TokenRecord] = {}

    def save(self, record: TokenRecord) -> None:
        with self._lock:
            self._tokens[(record.owner_id, record.purpose)] = record

    def find(self, owner_id: str, purpose: TokenPurpose) -> TokenRecord | None:
        with self._lock:
            return self._tokens.get((owner_id, purpose))

    def delete_matching(
        self, owner_id: str, purpose: TokenPurpose, token_hash: str, issued_after: datetime
    ) -> bool:
        with self._lock:
            record = self._tokens.get((owner_id, purpose))
            if record is None or record.token_hash != token_hash:
                return False
            if record.issued_at <= issued_after:
                return False
            del self._tokens[(owner_id, purpose)]
            return True

    def delete(self, owner_id: str, purpose: TokenPurpose) -> None:
        with self._lock:
            self._tokens.pop((owner_id, purpose), None)


class InMemorySellerRepository:
    """Implements SellerRepository protocol; one account per owner."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._accounts: dict[str, SellerAccount] = {}

    def create(self, account: SellerAccount) -> bool:
        with self._lock:
            if account.owner_id in self._accounts:
                return False
            self._accounts[account.owner_id] = replace(
                account, created_at=account.created_at or _now()
            )
            return True

    def get_by_owner(self, owner_id: str) -> SellerAccount | None:
        with self._lock:
            return self._accounts.get(owner_id)

    def count(self) -> int:
        with self._lock:
            return len(self._accounts)


class InMemoryProductRepository:
    """Implements ProductRepository protocol."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._products: list[Product] = []

    def create(self, product: Product) -> None:
        with self._lock:
            self._products.append(replace(product, created_at=product.created_at or _now()))

    def count(self) -> int:
        with self._lock:
            return len(self._products)
