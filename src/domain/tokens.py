"""
Token ledger - single-use, hashed, expiring challenges.

Two purposes share one mechanism:

- ``verify``: a 6-digit OTP emailed after registration
- ``reset``: a high-entropy hex secret embedded in a password-reset link

Lifecycle per (owner, purpose) slot::

    issue()   -> slot holds HMAC(secret), previous token superseded
    consume() -> slot deleted iff hash matches and token is live (atomic)
    revoke()  -> slot deleted unconditionally
    TTL       -> stale slot treated as absent by validate()/consume()

The raw secret is returned to the caller for delivery and never stored.
Hashes are HMAC-SHA256 keyed with a server secret and bound to owner and
purpose, so a leaked table row cannot be replayed against another slot and
6-digit OTPs cannot be brute-forced offline without the key.
"""

import hashlib
import hmac
import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from .models import TokenPurpose, TokenRecord
from .ports import TokenRepository

logger = logging.getLogger(__name__)

OTP_LENGTH = 6
RESET_TOKEN_BYTES = 32


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenLedger:
    """Issues, validates and consumes tokens for a TokenRepository."""

    def __init__(
        self,
        repository: TokenRepository,
        secret: str,
        otp_ttl_seconds: int = 15 * 60,
        reset_ttl_seconds: int = 60 * 60,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token ledger requires a non-empty secret")
        self._repository = repository
        self._key = secret.encode()
        self._ttl = {
            TokenPurpose.VERIFY: timedelta(seconds=otp_ttl_seconds),
            TokenPurpose.RESET: timedelta(seconds=reset_ttl_seconds),
        }
        self._clock = clock

    def issue(self, owner_id: str, purpose: TokenPurpose) -> str:
        """
        Create a fresh token for the slot, superseding any previous one.

        Returns:
            The raw secret, for delivery to the owner
        """
        purpose = TokenPurpose(purpose)
        raw = self._generate_secret(purpose)
        self._repository.save(
            TokenRecord(
                owner_id=owner_id,
                purpose=purpose,
                token_hash=self._hash(owner_id, purpose, raw),
                issued_at=self._clock(),
            )
        )
        logger.info("Issued %s token for %s", purpose.value, owner_id)
        return raw

    def validate(self, owner_id: str, purpose: TokenPurpose, presented: str) -> bool:
        """
        Check a presented secret without consuming it.

        Fails closed: missing slot, stale token, empty or non-string input
        and hash mismatch all return False.
        """
        if not self._well_formed(presented):
            return False
        purpose = TokenPurpose(purpose)
        record = self._repository.find(owner_id, purpose)
        if record is None:
            return False
        if record.issued_at <= self._cutoff(purpose):
            return False
        expected = self._hash(owner_id, purpose, presented.strip())
        return hmac.compare_digest(record.token_hash, expected)

    def consume(self, owner_id: str, purpose: TokenPurpose, presented: str) -> bool:
        """
        Validate and delete in one atomic step.

        Returns:
            True for exactly one caller per live token, False otherwise
        """
        if not self._well_formed(presented):
            return False
        purpose = TokenPurpose(purpose)
        consumed = self._repository.delete_matching(
            owner_id,
            purpose,
            self._hash(owner_id, purpose, presented.strip()),
            self._cutoff(purpose),
        )
        if consumed:
            logger.info("Consumed %s token for %s", purpose.value, owner_id)
        return consumed

    def revoke(self, owner_id: str, purpose: TokenPurpose) -> None:
        self._repository.delete(owner_id, TokenPurpose(purpose))

    def _cutoff(self, purpose: TokenPurpose) -> datetime:
        return self._clock() - self._ttl[purpose]

    def _hash(self, owner_id: str, purpose: TokenPurpose, raw: str) -> str:
        message = f"{purpose.value}:{owner_id}:{raw}".encode()
        return hmac.new(self._key, message, hashlib.sha256).hexdigest()

    @staticmethod
    def _well_formed(presented: object) -> bool:
        return isinstance(presented, str) and bool(presented.strip())

    @staticmethod
    def _generate_secret(purpose: TokenPurpose) -> str:
        if purpose is TokenPurpose.VERIFY:
            # String preserves leading zeros
            return "".join(secrets.choice("0123456789") for _ in range(OTP_LENGTH))
        return secrets.token_hex(RESET_TOKEN_BYTES)
