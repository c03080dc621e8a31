"""
Domain exceptions - Semantic error types for the account lifecycle.

Every business-rule violation is an AccountError carrying a stable
``kind`` (used by the HTTP layer to pick a status code) and a
human-readable message that is safe to show to the caller.
"""


class AccountError(Exception):
    """Base class for account domain errors."""

    kind = "account_error"
    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    """Missing or malformed input."""

    kind = "validation_error"
    default_message = "Missing parameters"


class DuplicateEmail(AccountError):
    """An account with this email already exists."""

    kind = "duplicate_email"
    default_message = "Email already exists"


class NotFound(AccountError):
    """User or entity absent."""

    kind = "not_found"
    default_message = "User not found"


class InvalidId(AccountError):
    """Identifier is not well formed."""

    kind = "invalid_id"
    default_message = "Invalid user ID"


class InvalidToken(AccountError):
    """No live token, or the presented secret does not match."""

    kind = "invalid_token"
    default_message = "Invalid token"


class AlreadyVerified(AccountError):
    kind = "already_verified"
    default_message = "Account already verified"


class AlreadySeller(AccountError):
    kind = "already_seller"
    default_message = "Already a seller"


class InvalidCredentials(AccountError):
    kind = "invalid_credentials"
    default_message = "Invalid email/password"


class NotVerified(AccountError):
    kind = "not_verified"
    default_message = "Account not verified"


class SamePassword(AccountError):
    kind = "same_password"
    default_message = "New password must be different"


class WeakPassword(AccountError):
    kind = "weak_password"
    default_message = "Password is too short"


class UploadRejected(AccountError):
    """Uploaded file has the wrong type, is too large, or exceeds the field count."""

    kind = "upload_rejected"
    default_message = "Upload rejected"


class StorageFailure(AccountError):
    """
    Persistence-layer failure.

    Fatal for the operation. The underlying driver error is chained as
    ``__cause__`` for logging; the message shown to callers stays generic.
    """

    kind = "storage_failure"
    default_message = "Internal server error"
