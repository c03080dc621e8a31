"""
Credential store - user identity records and password verification.

Owns the User record. Passwords are hashed with bcrypt before they reach
the repository and compared in constant time.
"""

import logging
from dataclasses import dataclass

import bcrypt

from .exceptions import DuplicateEmail, InvalidId, NotFound, WeakPassword
from .identifiers import is_valid_identifier, new_identifier
from .models import User
from .ports import UserRepository

logger = logging.getLogger(__name__)

# Compared against when no user exists so a miss costs the same as a hit.
_DUMMY_BCRYPT_HASH = bcrypt.hashpw(b"dummy_password_for_timing_safety", bcrypt.gensalt(10))

# bcrypt refuses longer secrets.
MAX_PASSWORD_BYTES = 72


def password_too_long(raw_password: str) -> bool:
    return len(raw_password.encode()) > MAX_PASSWORD_BYTES


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


@dataclass
class CredentialStore:
    """Creates, looks up and mutates users."""

    repository: UserRepository
    bcrypt_cost: int = 10

    def create_user(self, full_name: str, email: str, phone: str, raw_password: str) -> User:
        """
        Create a new unverified buyer.

        Raises:
            WeakPassword: If the password is longer than bcrypt accepts
            DuplicateEmail: If an account with the (normalized) email exists
        """
        user = User(
            id=new_identifier(),
            full_name=full_name.strip(),
            email=normalize_email(email),
            phone=phone.strip(),
            password_hash=self._hash_password(raw_password),
        )
        if not self.repository.create(user):
            raise DuplicateEmail()
        logger.info("User created: %s", user.id)
        return user

    def find_by_email(self, email: str) -> User | None:
        return self.repository.get_by_email(normalize_email(email))

    def find_by_id(self, user_id: str) -> User:
        """
        Resolve a user by id.

        Raises:
            InvalidId: If ``user_id`` is not a well-formed identifier
            NotFound: If no such user exists
        """
        if not is_valid_identifier(user_id):
            raise InvalidId()
        user = self.repository.get_by_id(user_id.lower())
        if user is None:
            raise NotFound()
        return user

    def verify_password(self, user: User | None, raw_password: str) -> bool:
        """
        Constant-time password check.

        bcrypt always runs, against a dummy hash when ``user`` is None or
        the password is too long to have been stored.
        """
        if password_too_long(raw_password):
            bcrypt.checkpw(b"", _DUMMY_BCRYPT_HASH)
            return False
        stored = user.password_hash.encode() if user is not None else _DUMMY_BCRYPT_HASH
        matched = bcrypt.checkpw(raw_password.encode(), stored)
        return matched and user is not None

    def set_verified(self, user: User) -> None:
        self.repository.set_verified(user.id)
        user.verified = True

    def set_password(self, user: User, raw_password: str) -> None:
        password_hash = self._hash_password(raw_password)
        self.repository.set_password_hash(user.id, password_hash)
        user.password_hash = password_hash

    def set_seller(self, user: User) -> None:
        self.repository.set_seller(user.id)
        user.is_seller = True

    def _hash_password(self, password: str) -> str:
        if password_too_long(password):
            raise WeakPassword(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.bcrypt_cost)).decode()
