"""
FastAPI dependencies - Dependency injection factories.

This module wires adapters into domain services. Collaborators are built
once per application (``build_collaborators``) and stored on
``app.state``; the Depends() factories below read them from there, so
nothing infrastructure-bound lives at module level.
"""

from dataclasses import dataclass

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import (
    InMemoryProductRepository,
    InMemorySellerRepository,
    InMemoryTokenRepository,
    InMemoryUserRepository,
)
from src.adapters.repository.postgres import (
    PostgresProductRepository,
    PostgresSellerRepository,
    PostgresTokenRepository,
    PostgresUserRepository,
)
from src.adapters.session.jwt_issuer import JwtSessionIssuer
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.adapters.storage.local import LocalBlobStore
from src.config.settings import Settings
from src.domain.account_state import AccountStateMachine
from src.domain.auth import AuthService
from src.domain.credentials import CredentialStore
from src.domain.notifications import NotificationDispatcher
from src.domain.ports import (
    BlobStore,
    EmailSender,
    ProductRepository,
    SellerRepository,
    TokenRepository,
    UserRepository,
)
from src.domain.tokens import TokenLedger
from src.domain.uploads import UploadService


@dataclass
class Collaborators:
    """Everything the request handlers need, built once at startup."""

    settings: Settings
    users: UserRepository
    tokens: TokenRepository
    sellers: SellerRepository
    products: ProductRepository
    email_sender: EmailSender
    blob_store: BlobStore
    session_issuer: JwtSessionIssuer


def build_email_sender(settings: Settings) -> EmailSender:
    if settings.email_backend == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.smtp_sender,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
        )
    return ConsoleEmailSender()


def build_collaborators(settings: Settings, pool: ConnectionPool | None = None) -> Collaborators:
    """
    Construct repositories and adapters for the configured backends.

    A pool is required for the postgres backend; the memory backend
    ignores it.
    """
    if settings.storage_backend == "memory":
        users, tokens = InMemoryUserRepository(), InMemoryTokenRepository()
        sellers, products = InMemorySellerRepository(), InMemoryProductRepository()
    else:
        if pool is None:
            raise ValueError("postgres storage backend requires a connection pool")
        users, tokens = PostgresUserRepository(pool), PostgresTokenRepository(pool)
        sellers, products = PostgresSellerRepository(pool), PostgresProductRepository(pool)

    return Collaborators(
        settings=settings,
        users=users,
        tokens=tokens,
        sellers=sellers,
        products=products,
        email_sender=build_email_sender(settings),
        blob_store=LocalBlobStore(settings.upload_dir, settings.upload_base_url),
        session_issuer=JwtSessionIssuer(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.jwt_expires_minutes,
        ),
    )


def build_auth_service(collaborators: Collaborators) -> AuthService:
    """Wire the domain components together."""
    settings = collaborators.settings
    credentials = CredentialStore(repository=collaborators.users, bcrypt_cost=settings.bcrypt_cost)
    return AuthService(
        credentials=credentials,
        tokens=TokenLedger(
            collaborators.tokens,
            secret=settings.token_secret,
            otp_ttl_seconds=settings.otp_ttl_seconds,
            reset_ttl_seconds=settings.reset_ttl_seconds,
        ),
        accounts=AccountStateMachine(credentials),
        notifications=NotificationDispatcher(
            email_sender=collaborators.email_sender,
            app_name=settings.app_name,
            reset_url_base=settings.reset_url_base,
        ),
        session_issuer=collaborators.session_issuer,
        sellers=collaborators.sellers,
        products=collaborators.products,
        password_min_length=settings.password_min_length,
    )


def get_collaborators(request: Request) -> Collaborators:
    """
    Get collaborators from app state.

    They are created during app lifespan startup and stored in app.state.
    """
    return request.app.state.collaborators


def get_auth_service(request: Request) -> AuthService:
    """Create auth service with injected dependencies."""
    return build_auth_service(get_collaborators(request))


def get_upload_service(request: Request) -> UploadService:
    collaborators = get_collaborators(request)
    return UploadService(
        blob_store=collaborators.blob_store,
        max_bytes=collaborators.settings.max_upload_bytes,
    )


def get_otp_ttl_seconds(request: Request) -> int:
    return get_collaborators(request).settings.otp_ttl_seconds
