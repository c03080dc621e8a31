"""Repository adapters - Database and in-memory implementations."""

from .memory import (
    InMemoryProductRepository,
    InMemorySellerRepository,
    InMemoryTokenRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresProductRepository,
    PostgresSellerRepository,
    PostgresTokenRepository,
    PostgresUserRepository,
    run_migrations,
)

__all__ = [
    "InMemoryProductRepository",
    "InMemorySellerRepository",
    "InMemoryTokenRepository",
    "InMemoryUserRepository",
    "PostgresProductRepository",
    "PostgresSellerRepository",
    "PostgresTokenRepository",
    "PostgresUserRepository",
    "run_migrations",
]
