"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field

from src.domain.models import Asset, Product, SellerAccount, UserProfile


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=40)
    password: str = Field(
        ..., min_length=6, max_length=72, description="User password (6 to 72 characters)"
    )


class ResendVerificationRequest(BaseModel):
    email: EmailStr


class VerifyRequest(BaseModel):
    """Request model for account verification."""

    otp: str = Field(
        ...,
        min_length=6,
        max_length=6,
        pattern=r"^\d{6}$",
        description="6-digit verification code",
    )


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Request model for password reset. The token comes from the reset link."""

    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, max_length=72)


class UserResponse(BaseModel):
    """Public user projection - never includes credential fields."""

    id: str
    full_name: str
    email: str
    phone: str
    verified: bool
    is_seller: bool

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserResponse":
        return cls(
            id=profile.id,
            full_name=profile.full_name,
            email=profile.email,
            phone=profile.phone,
            verified=profile.verified,
            is_seller=profile.is_seller,
        )


class AssetResponse(BaseModel):
    field: str
    url: str

    @classmethod
    def from_asset(cls, asset: Asset) -> "AssetResponse":
        return cls(field=asset.field, url=asset.url)


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    user: UserResponse
    expires_in_seconds: int


class VerifyResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class SellerAccountResponse(BaseModel):
    id: str
    owner_id: str
    seller_name: str
    store_name: str
    store_address: str
    store_phone: str
    country: str
    city: str
    dob: str | None
    assets: list[AssetResponse]

    @classmethod
    def from_account(cls, account: SellerAccount) -> "SellerAccountResponse":
        details = account.details
        return cls(
            id=account.id,
            owner_id=account.owner_id,
            seller_name=details.seller_name,
            store_name=details.store_name,
            store_address=details.store_address,
            store_phone=details.store_phone,
            country=details.country,
            city=details.city,
            dob=details.dob,
            assets=[AssetResponse.from_asset(asset) for asset in account.assets],
        )


class BecomeSellerResponse(BaseModel):
    success: bool = True
    message: str
    is_seller: bool
    seller: SellerAccountResponse


class ProductResponse(BaseModel):
    id: str
    owner_id: str
    name: str | None
    price: str | None
    quality: str | None
    detail: str | None
    origin: str | None
    category: str | None
    delivery_time: str | None
    specification: str | None
    assets: list[AssetResponse]

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        details = product.details
        return cls(
            id=product.id,
            owner_id=product.owner_id,
            name=details.name,
            price=details.price,
            quality=details.quality,
            detail=details.detail,
            origin=details.origin,
            category=details.category,
            delivery_time=details.delivery_time,
            specification=details.specification,
            assets=[AssetResponse.from_asset(asset) for asset in product.assets],
        )


class AddProductResponse(BaseModel):
    success: bool = True
    message: str
    product: ProductResponse


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
    kind: str | None = None
