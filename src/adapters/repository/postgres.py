"""
PostgreSQL repository adapters - Implement the domain persistence ports.

This module provides the PostgreSQL implementations of the domain's
repository ports using psycopg3 with raw SQL.

Concurrency Design:
------------------
Every check-then-act the domain relies on is a single statement, so the
database serializes competing requests:

1. **Unique email**: ``INSERT ... ON CONFLICT (email) DO NOTHING``. Of N
   concurrent registrations for one email, exactly one inserts a row.

2. **Single-use tokens**: ``DELETE ... WHERE hash = %s AND issued_at > %s
   RETURNING``. Validation and consumption happen in one statement; a
   second consumer finds no row.

3. **One seller account per user**: ``UNIQUE (owner_id)`` with
   ``ON CONFLICT DO NOTHING``.

Driver errors are wrapped in StorageFailure with the original error
chained, so callers never see psycopg types.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

import psycopg
from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool

from src.domain.exceptions import StorageFailure
from src.domain.models import (
    Asset,
    Product,
    SellerAccount,
    SellerDetails,
    TokenPurpose,
    TokenRecord,
    User,
)

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except psycopg.Error as e:
        logger.error("Storage operation failed: %s - %s", operation, e)
        raise StorageFailure() from e


def _assets_to_json(assets: list[Asset]) -> Jsonb:
    return Jsonb([{"field": asset.field, "url": asset.url} for asset in assets])


def _assets_from_json(value: list[dict] | None) -> list[Asset]:
    return [Asset(field=item["field"], url=item["url"]) for item in value or []]


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    _columns = "id, full_name, email, phone, password_hash, verified, is_seller, created_at"

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def create(self, user: User) -> bool:
        """
        Insert a user; the UNIQUE constraint on email decides duplicates.

        Returns:
            True if inserted, False if the email already exists
        """
        sql = """
            INSERT INTO users (id, full_name, email, phone, password_hash, verified, is_seller)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (email) DO NOTHING
        """
        with _storage_errors("create user"), self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    user.id,
                    user.full_name,
                    user.email,
                    user.phone,
                    user.password_hash,
                    user.verified,
                    user.is_seller,
                ),
            )
            conn.commit()
            return cursor.rowcount == 1

    def get_by_email(self, email: str) -> User | None:
        return self._fetch_one(f"SELECT {self._columns} FROM users WHERE email = %s", email)

    def get_by_id(self, user_id: str) -> User | None:
        return self._fetch_one(f"SELECT {self._columns} FROM users WHERE id = %s", user_id)

    def set_verified(self, user_id: str) -> None:
        self._execute("UPDATE users SET verified = TRUE WHERE id = %s", (user_id,))

    def set_password_hash(self, user_id: str, password_hash: str) -> None:
        self._execute(
            "UPDATE users SET password_hash = %s WHERE id = %s", (password_hash, user_id)
        )

    def set_seller(self, user_id: str) -> None:
        self._execute("UPDATE users SET is_seller = TRUE WHERE id = %s", (user_id,))

    def _fetch_one(self, sql: str, value: str) -> User | None:
        with _storage_errors("read user"), self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (value,))
            row = cursor.fetchone()
        if row is None:
            return None
        return User(
            id=str(row[0]),
            full_name=row[1],
            email=row[2],
            phone=row[3],
            password_hash=row[4],
            verified=row[5],
            is_seller=row[6],
            created_at=row[7],
        )

    def _execute(self, sql: str, params: tuple) -> None:
        with _storage_errors("update user"), self._pool.connection() as conn:
            conn.execute(sql, params)
            conn.commit()


class PostgresTokenRepository:
    """
    Implements TokenRepository protocol via psycopg3.

    The (owner_id, purpose) primary key holds at most one live token.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def save(self, record: TokenRecord) -> None:
        """Insert or supersede the token for the slot."""
        sql = """
            INSERT INTO account_tokens (owner_id, purpose, token_hash, issued_at)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (owner_id, purpose) DO UPDATE
            SET token_hash = EXCLUDED.token_hash,
                issued_at = EXCLUDED.issued_at
        """
        with _storage_errors("save token"), self._pool.connection() as conn:
            conn.execute(
                sql,
                (record.owner_id, record.purpose.value, record.token_hash, record.issued_at),
            )
            conn.commit()

    def find(self, owner_id: str, purpose: TokenPurpose) -> TokenRecord | None:
        sql = """
            SELECT token_hash, issued_at
            FROM account_tokens
            WHERE owner_id = %s AND purpose = %s
        """
        with _storage_errors("find token"), self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (owner_id, purpose.value))
            row = cursor.fetchone()
        if row is None:
            return None
        return TokenRecord(owner_id=owner_id, purpose=purpose, token_hash=row[0], issued_at=row[1])

    def delete_matching(
        self, owner_id: str, purpose: TokenPurpose, token_hash: str, issued_after: datetime
    ) -> bool:
        """
        Consume the token in a single conditional DELETE.

        Row-level locking inside DELETE guarantees that concurrent callers
        with the same hash see exactly one RETURNING row between them.
        """
        sql = """
            DELETE FROM account_tokens
            WHERE owner_id = %s
              AND purpose = %s
              AND token_hash = %s
              AND issued_at > %s
            RETURNING owner_id
        """
        with _storage_errors("consume token"), self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (owner_id, purpose.value, token_hash, issued_after))
            deleted = cursor.fetchone() is not None
            conn.commit()
            return deleted

    def delete(self, owner_id: str, purpose: TokenPurpose) -> None:
        sql = "DELETE FROM account_tokens WHERE owner_id = %s AND purpose = %s"
        with _storage_errors("revoke token"), self._pool.connection() as conn:
            conn.execute(sql, (owner_id, purpose.value))
            conn.commit()


class PostgresSellerRepository:
    """Implements SellerRepository protocol via psycopg3."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def create(self, account: SellerAccount) -> bool:
        """
        Insert a seller account; UNIQUE (owner_id) rejects a second one.

        Returns:
            True if inserted, False if the owner already has an account
        """
        sql = """
            INSERT INTO seller_accounts (
                id, owner_id, seller_name, store_name, store_address,
                store_phone, country, city, dob, assets
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (owner_id) DO NOTHING
        """
        details = account.details
        with _storage_errors("create seller"), self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    account.id,
                    account.owner_id,
                    details.seller_name,
                    details.store_name,
                    details.store_address,
                    details.store_phone,
                    details.country,
                    details.city,
                    details.dob,
                    _assets_to_json(account.assets),
                ),
            )
            conn.commit()
            return cursor.rowcount == 1

    def get_by_owner(self, owner_id: str) -> SellerAccount | None:
        sql = """
            SELECT id, seller_name, store_name, store_address, store_phone,
                   country, city, dob, assets, created_at
            FROM seller_accounts
            WHERE owner_id = %s
        """
        with _storage_errors("read seller"), self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (owner_id,))
            row = cursor.fetchone()
        if row is None:
            return None
        return SellerAccount(
            id=str(row[0]),
            owner_id=owner_id,
            details=SellerDetails(
                seller_name=row[1],
                store_name=row[2],
                store_address=row[3],
                store_phone=row[4],
                country=row[5],
                city=row[6],
                dob=row[7],
            ),
            assets=_assets_from_json(row[8]),
            created_at=row[9],
        )


class PostgresProductRepository:
    """Implements ProductRepository protocol via psycopg3."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def create(self, product: Product) -> None:
        sql = """
            INSERT INTO products (
                id, owner_id, name, price, quality, detail, origin,
                category, delivery_time, specification, assets
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        """
        details = product.details
        with _storage_errors("create product"), self._pool.connection() as conn:
            conn.execute(
                sql,
                (
                    product.id,
                    product.owner_id,
                    details.name,
                    details.price,
                    details.quality,
                    details.detail,
                    details.origin,
                    details.category,
                    details.delivery_time,
                    details.specification,
                    _assets_to_json(product.assets),
                ),
            )
            conn.commit()


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
