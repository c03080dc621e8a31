"""
Auth service - account lifecycle orchestration.

Implements register, verify, login, forgot-password, reset-password and
the seller/product flows on top of the credential store, token ledger,
account state machine and notification dispatcher.

Flow summary
============

register         -> user (UNVERIFIED, BUYER) + verify token + welcome email
verify           -> consume verify token atomically -> VERIFIED + email
login            -> VERIFIED users with matching password get a session token
forgot_password  -> reset token + reset link email (uniform response)
reset_password   -> requires the raw reset token; consumed atomically
become_seller    -> seller account (one per user) -> SELLER
add_product      -> product owned by the user

Every business-rule violation raises an AccountError subclass. Email
delivery never fails an operation (see NotificationDispatcher).
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .account_state import AccountStateMachine
from .credentials import MAX_PASSWORD_BYTES, CredentialStore, password_too_long
from .exceptions import AlreadySeller, InvalidCredentials, InvalidToken, NotFound, NotVerified
from .exceptions import SamePassword, ValidationError, WeakPassword
from .identifiers import new_identifier
from .models import Asset, LoginResult, Product, ProductDetails, SellerAccount, SellerDetails
from .models import TokenPurpose, UserProfile
from .notifications import NotificationDispatcher
from .ports import ProductRepository, SellerRepository, SessionTokenIssuer
from .tokens import TokenLedger

logger = logging.getLogger(__name__)

MAX_SELLER_ASSETS = 5
MAX_PRODUCT_ASSETS = 4

SELLER_REQUIRED_FIELDS = (
    "seller_name",
    "store_name",
    "store_address",
    "store_phone",
    "country",
    "city",
)


def _require(**values: object) -> None:
    """Raise ValidationError naming every missing or blank value."""
    missing = [
        name
        for name, value in values.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(f"Missing parameters: {', '.join(missing)}")


def _require_seller_fields(details: SellerDetails) -> None:
    _require(**{name: getattr(details, name) for name in SELLER_REQUIRED_FIELDS})


@dataclass
class AuthService:
    """Domain service for the account lifecycle."""

    credentials: CredentialStore
    tokens: TokenLedger
    accounts: AccountStateMachine
    notifications: NotificationDispatcher
    session_issuer: SessionTokenIssuer
    sellers: SellerRepository
    products: ProductRepository
    password_min_length: int = 6

    def register(self, full_name: str, email: str, phone: str, password: str) -> UserProfile:
        """
        Register a new user and email them a verification code.

        Raises:
            ValidationError: If a field is missing
            WeakPassword: If the password is longer than bcrypt accepts
            DuplicateEmail: If the email is already registered
        """
        _require(full_name=full_name, email=email, phone=phone, password=password)
        user = self.credentials.create_user(full_name, email, phone, password)
        otp = self.tokens.issue(user.id, TokenPurpose.VERIFY)
        self.notifications.send_verification_code(user, otp)
        logger.info("Registered user %s", user.id)
        return user.profile()

    def resend_verification(self, email: str) -> None:
        """
        Issue a new verification code, superseding the previous one.

        Raises:
            ValidationError: If email is missing
            NotFound: If no account has this email
            AlreadyVerified: If the account is already verified
        """
        _require(email=email)
        user = self.credentials.find_by_email(email)
        if user is None:
            raise NotFound()
        self.accounts.ensure_can_verify(user)
        otp = self.tokens.issue(user.id, TokenPurpose.VERIFY)
        self.notifications.send_verification_code(user, otp)

    def verify(self, user_id: str, otp: str) -> UserProfile:
        """
        Verify an account with the emailed OTP.

        The token is consumed atomically, so of concurrent attempts with
        the same code exactly one succeeds.

        Raises:
            ValidationError: If user_id or otp is missing
            InvalidId / NotFound: If the user cannot be resolved
            AlreadyVerified: If the account is already verified
            InvalidToken: If there is no live token or the code does not match
        """
        _require(user_id=user_id, otp=otp)
        user = self.credentials.find_by_id(user_id)
        self.accounts.ensure_can_verify(user)
        if not self.tokens.consume(user.id, TokenPurpose.VERIFY, otp):
            logger.warning("Rejected verification code for %s", user.id)
            raise InvalidToken()
        self.accounts.mark_verified(user)
        self.notifications.send_account_verified(user)
        logger.info("Account verified: %s", user.id)
        return user.profile()

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate a verified user.

        Raises:
            ValidationError: If email or password is missing
            NotFound: If no account has this email
            NotVerified: If the account is not verified (checked before the password)
            InvalidCredentials: If the password does not match
        """
        _require(email=email, password=password)
        user = self.credentials.find_by_email(email)
        if user is None:
            raise NotFound()
        if not user.verified:
            raise NotVerified()
        if not self.credentials.verify_password(user, password):
            logger.warning("Failed login for %s", user.id)
            raise InvalidCredentials()
        return LoginResult(token=self.session_issuer.sign(user), user=user.profile())

    def forgot_password(self, email: str) -> None:
        """
        Email a password-reset link.

        The result is the same whether or not the account exists; the link
        is only sent when it does.

        Raises:
            ValidationError: If email is missing
        """
        _require(email=email)
        user = self.credentials.find_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return
        token = self.tokens.issue(user.id, TokenPurpose.RESET)
        self.notifications.send_password_reset_link(user, token)
        logger.info("Password reset requested for %s", user.id)

    def check_reset_token(self, user_id: str, token: str) -> bool:
        """
        Confirm a reset link is still usable, without consuming it.

        Raises:
            ValidationError: If user_id or token is missing
            InvalidId / NotFound: If the user cannot be resolved
            InvalidToken: If the token is absent, stale or mismatched
        """
        _require(user_id=user_id, token=token)
        user = self.credentials.find_by_id(user_id)
        if not self.tokens.validate(user.id, TokenPurpose.RESET, token):
            raise InvalidToken()
        return True

    def reset_password(self, user_id: str, token: str, new_password: str) -> None:
        """
        Replace the password of the reset token's owner.

        Raises:
            ValidationError: If a field is missing
            InvalidId / NotFound: If the user cannot be resolved
            InvalidToken: If the reset token is not valid (or was just used)
            SamePassword: If the new password equals the current one
            WeakPassword: If the new password is too short or too long
        """
        _require(user_id=user_id, token=token, new_password=new_password)
        user = self.credentials.find_by_id(user_id)
        if not self.tokens.validate(user.id, TokenPurpose.RESET, token):
            raise InvalidToken()
        password = new_password.strip()
        if self.credentials.verify_password(user, password):
            raise SamePassword()
        if len(password) < self.password_min_length:
            raise WeakPassword(
                f"Password must be a minimum of {self.password_min_length} characters"
            )
        if password_too_long(password):
            raise WeakPassword(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        if not self.tokens.consume(user.id, TokenPurpose.RESET, token):
            raise InvalidToken()
        self.credentials.set_password(user, password)
        self.notifications.send_password_reset_success(user)
        logger.info("Password reset for %s", user.id)

    def get_user(self, user_id: str) -> UserProfile:
        return self.credentials.find_by_id(user_id).profile()

    def ensure_can_become_seller(self, user_id: str, details: SellerDetails) -> None:
        """
        Preflight for seller onboarding, run before assets are uploaded.

        Raises:
            InvalidId / NotFound: If the user cannot be resolved
            AlreadySeller: If the user is already a seller
            ValidationError: If business fields are missing
        """
        self.accounts.ensure_can_become_seller(self.credentials.find_by_id(user_id))
        _require_seller_fields(details)

    def become_seller(
        self, user_id: str, details: SellerDetails, assets: Sequence[Asset]
    ) -> SellerAccount:
        """
        Upgrade a user to seller.

        Raises:
            InvalidId / NotFound: If the user cannot be resolved
            AlreadySeller: If the user is already a seller
            ValidationError: If business fields are missing or too many assets
        """
        user = self.credentials.find_by_id(user_id)
        self.accounts.ensure_can_become_seller(user)
        _require_seller_fields(details)
        if len(assets) > MAX_SELLER_ASSETS:
            raise ValidationError(f"At most {MAX_SELLER_ASSETS} seller assets are allowed")

        account = SellerAccount(
            id=new_identifier(), owner_id=user.id, details=details, assets=list(assets)
        )
        if not self.sellers.create(account):
            raise AlreadySeller()
        self.accounts.promote_to_seller(user)
        logger.info("Seller account created for %s", user.id)
        return account

    def get_seller(self, user_id: str) -> SellerAccount:
        """
        Raises:
            InvalidId / NotFound: If the user or their seller account is absent
        """
        user = self.credentials.find_by_id(user_id)
        account = self.sellers.get_by_owner(user.id)
        if account is None:
            raise NotFound("Seller account not found")
        return account

    def add_product(
        self, user_id: str, details: ProductDetails, assets: Sequence[Asset]
    ) -> Product:
        """
        Create a product owned by the user. Seller status is not required.

        Raises:
            InvalidId / NotFound: If the user cannot be resolved
            ValidationError: If too many assets are attached
        """
        user = self.credentials.find_by_id(user_id)
        if len(assets) > MAX_PRODUCT_ASSETS:
            raise ValidationError(f"At most {MAX_PRODUCT_ASSETS} product assets are allowed")
        product = Product(
            id=new_identifier(), owner_id=user.id, details=details, assets=list(assets)
        )
        self.products.create(product)
        logger.info("Product %s created for %s", product.id, user.id)
        return product
