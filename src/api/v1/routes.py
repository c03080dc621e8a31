"""
API v1 routes.

Defines REST endpoints for the account lifecycle API. Handlers are thin:
they translate HTTP input into AuthService calls; domain errors are
turned into responses by the handlers in src.api.errors.
"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from src.api.dependencies import get_auth_service, get_otp_ttl_seconds, get_upload_service
from src.api.models import (
    AddProductResponse,
    BecomeSellerResponse,
    ErrorResponse,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProductResponse,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    ResetPasswordRequest,
    SellerAccountResponse,
    UserResponse,
    VerifyRequest,
    VerifyResponse,
)
from src.domain.auth import AuthService
from src.domain.models import ProductDetails, SellerDetails
from src.domain.uploads import (
    PRODUCT_ASSET_FIELDS,
    SELLER_ASSET_FIELDS,
    IncomingFile,
    UploadService,
    assets_from,
)

router = APIRouter(tags=["v1"])


async def _incoming(field: str, uploads: list[UploadFile] | None) -> list[IncomingFile]:
    files = []
    for upload in uploads or []:
        files.append(
            IncomingFile(
                field=field,
                filename=upload.filename or field,
                content_type=upload.content_type or "application/octet-stream",
                data=await upload.read(),
            )
        )
    return files


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Email already exists"},
        422: {"description": "Validation error"},
    },
    summary="Register a new user",
    description="Create an unverified account. A 6-digit verification code "
    "is sent to the provided email.",
)
async def register(
    request_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
    ttl_seconds: int = Depends(get_otp_ttl_seconds),
) -> RegisterResponse:
    profile = service.register(
        request_data.full_name, request_data.email, request_data.phone, request_data.password
    )
    return RegisterResponse(
        message="Verification code sent",
        user=UserResponse.from_profile(profile),
        expires_in_seconds=ttl_seconds,
    )


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Account already verified"},
    },
    summary="Send a new verification code",
)
async def resend_verification(
    request_data: ResendVerificationRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.resend_verification(request_data.email)
    return MessageResponse(message="Verification code sent")


@router.post(
    "/verify",
    response_model=VerifyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid token or user ID"},
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Account already verified"},
    },
    summary="Verify account with the emailed code",
)
async def verify(
    request_data: VerifyRequest,
    user_id: str = Query(..., alias="userId"),
    service: AuthService = Depends(get_auth_service),
) -> VerifyResponse:
    profile = service.verify(user_id, request_data.otp)
    return VerifyResponse(
        message="Account verified successfully", user=UserResponse.from_profile(profile)
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid email/password"},
        403: {"model": ErrorResponse, "description": "Account not verified"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Log in and receive a session token",
)
async def login(
    request_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    result = service.login(request_data.email, request_data.password)
    return LoginResponse(token=result.token, user=UserResponse.from_profile(result.user))


@router.post(
    "/forgot",
    response_model=MessageResponse,
    summary="Request a password reset link",
    description="Always returns the same response; the link is only emailed "
    "when an account with this address exists.",
)
async def forgot_password(
    request_data: ForgotPasswordRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.forgot_password(request_data.email)
    return MessageResponse(message="If the account exists, a reset link has been sent")


@router.get(
    "/verify-token",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid token"}},
    summary="Check that a password reset link is still valid",
)
async def verify_reset_token(
    token: str = Query(..., min_length=1),
    user_id: str = Query(..., alias="id"),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.check_reset_token(user_id, token)
    return MessageResponse(message="Reset token is valid")


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid token or unacceptable password"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Set a new password using the emailed reset token",
)
async def reset_password(
    request_data: ResetPasswordRequest,
    user_id: str = Query(..., alias="userId"),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.reset_password(user_id, request_data.token, request_data.password)
    return MessageResponse(message="Password reset successfully")


@router.post(
    "/seller",
    response_model=BecomeSellerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or upload rejected"},
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Already a seller"},
    },
    summary="Upgrade an account to seller",
)
async def become_seller(
    user_id: str = Query(..., alias="userId"),
    seller_name: str = Form(..., alias="sellerName"),
    store_name: str = Form(..., alias="storeName"),
    store_address: str = Form(..., alias="storeAddress"),
    store_phone: str = Form(..., alias="storePhone"),
    country: str = Form(...),
    city: str = Form(...),
    dob: str | None = Form(None),
    product_image: list[UploadFile] | None = File(None, alias="productIMAGE"),
    product_video: list[UploadFile] | None = File(None, alias="productVIDEO"),
    business_image: list[UploadFile] | None = File(None, alias="businessIMAGE"),
    business_video: list[UploadFile] | None = File(None, alias="businessVIDEO"),
    certificate_image: list[UploadFile] | None = File(None, alias="certificateIMAGE"),
    service: AuthService = Depends(get_auth_service),
    uploads: UploadService = Depends(get_upload_service),
) -> BecomeSellerResponse:
    details = SellerDetails(
        seller_name=seller_name,
        store_name=store_name,
        store_address=store_address,
        store_phone=store_phone,
        country=country,
        city=city,
        dob=dob,
    )
    service.ensure_can_become_seller(user_id, details)
    files = []
    files += await _incoming("productIMAGE", product_image)
    files += await _incoming("productVIDEO", product_video)
    files += await _incoming("businessIMAGE", business_image)
    files += await _incoming("businessVIDEO", business_video)
    files += await _incoming("certificateIMAGE", certificate_image)
    stored = uploads.store(files, SELLER_ASSET_FIELDS)
    account = service.become_seller(user_id, details, assets_from(stored))
    return BecomeSellerResponse(
        message="Seller account created successfully",
        is_seller=True,
        seller=SellerAccountResponse.from_account(account),
    )


@router.get(
    "/get-seller",
    response_model=SellerAccountResponse,
    responses={404: {"model": ErrorResponse, "description": "Seller not found"}},
    summary="Get a user's seller account",
)
async def get_seller(
    user_id: str = Query(..., alias="userId"),
    service: AuthService = Depends(get_auth_service),
) -> SellerAccountResponse:
    return SellerAccountResponse.from_account(service.get_seller(user_id))


@router.post(
    "/add-product",
    response_model=AddProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or upload rejected"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Add a product with up to four images",
)
async def add_product(
    user_id: str = Query(..., alias="userId"),
    name: str | None = Form(None, alias="productName"),
    price: str | None = Form(None, alias="productPrice"),
    quality: str | None = Form(None, alias="productQuality"),
    detail: str | None = Form(None, alias="productDetail"),
    origin: str | None = Form(None, alias="productOrigin"),
    category: str | None = Form(None, alias="productCategory"),
    delivery_time: str | None = Form(None, alias="productDeliveryTime"),
    specification: str | None = Form(None, alias="productSpecification"),
    front_image: list[UploadFile] | None = File(None, alias="proFrontIMAGE"),
    back_image: list[UploadFile] | None = File(None, alias="proBackIMAGE"),
    upward_image: list[UploadFile] | None = File(None, alias="proUpwardIMAGE"),
    downward_image: list[UploadFile] | None = File(None, alias="proDownWardIMAGE"),
    service: AuthService = Depends(get_auth_service),
    uploads: UploadService = Depends(get_upload_service),
) -> AddProductResponse:
    service.get_user(user_id)
    files = []
    files += await _incoming("proFrontIMAGE", front_image)
    files += await _incoming("proBackIMAGE", back_image)
    files += await _incoming("proUpwardIMAGE", upward_image)
    files += await _incoming("proDownWardIMAGE", downward_image)

    details = ProductDetails(
        name=name,
        price=price,
        quality=quality,
        detail=detail,
        origin=origin,
        category=category,
        delivery_time=delivery_time,
        specification=specification,
    )
    stored = uploads.store(files, PRODUCT_ASSET_FIELDS)
    product = service.add_product(user_id, details, assets_from(stored))
    return AddProductResponse(
        message="Product created successfully", product=ProductResponse.from_product(product)
    )
