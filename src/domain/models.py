"""
Domain entities - plain dataclasses owned by the persistence ports.

Adapters construct these from rows; the domain never sees driver types.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class TokenPurpose(str, Enum):
    """Reason a token was issued; scopes every ledger lookup."""

    VERIFY = "verify"
    RESET = "reset"


@dataclass(frozen=True)
class Recipient:
    email: str
    name: str


@dataclass
class User:
    """Identity record. ``password_hash`` never leaves the domain."""

    id: str
    full_name: str
    email: str
    phone: str
    password_hash: str
    verified: bool = False
    is_seller: bool = False
    created_at: datetime | None = None

    def profile(self) -> "UserProfile":
        """Projection without credential fields."""
        return UserProfile(
            id=self.id,
            full_name=self.full_name,
            email=self.email,
            phone=self.phone,
            verified=self.verified,
            is_seller=self.is_seller,
        )


@dataclass(frozen=True)
class UserProfile:
    id: str
    full_name: str
    email: str
    phone: str
    verified: bool
    is_seller: bool


@dataclass(frozen=True)
class TokenRecord:
    """A live challenge. Only the hash of the secret is stored."""

    owner_id: str
    purpose: TokenPurpose
    token_hash: str
    issued_at: datetime


@dataclass(frozen=True)
class Asset:
    """Reference to an uploaded file, by slot name."""

    field: str
    url: str


@dataclass(frozen=True)
class SellerDetails:
    seller_name: str
    store_name: str
    store_address: str
    store_phone: str
    country: str
    city: str
    dob: str | None = None


@dataclass
class SellerAccount:
    id: str
    owner_id: str
    details: SellerDetails
    assets: list[Asset] = field(default_factory=list)
    created_at: datetime | None = None


@dataclass(frozen=True)
class ProductDetails:
    name: str | None = None
    price: str | None = None
    quality: str | None = None
    detail: str | None = None
    origin: str | None = None
    category: str | None = None
    delivery_time: str | None = None
    specification: str | None = None


@dataclass
class Product:
    id: str
    owner_id: str
    details: ProductDetails
    assets: list[Asset] = field(default_factory=list)
    created_at: datetime | None = None


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: UserProfile
