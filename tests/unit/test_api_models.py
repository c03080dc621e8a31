"""
Unit tests for API request/response models.

Tests Pydantic model validation for the account endpoints.
"""

import pytest
from pydantic import ValidationError

from src.api.models import (
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
    VerifyRequest,
)
from src.domain.models import UserProfile


def register_payload(**overrides) -> dict:
    payload = {
        "full_name": "Jane",
        "email": "jane@x.com",
        "phone": "555-0100",
        "password": "Secret1",
    }
    payload.update(overrides)
    return payload


class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_valid_register_request(self) -> None:
        request = RegisterRequest(**register_payload())
        assert request.email == "jane@x.com"
        assert request.full_name == "Jane"

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(**register_payload(email="not-an-email"))
        assert "email" in str(exc_info.value)

    def test_password_minimum_length(self) -> None:
        """Password shorter than 6 characters raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(**register_payload(password="short"))
        assert "password" in str(exc_info.value)

    def test_password_exactly_6_chars(self) -> None:
        assert RegisterRequest(**register_payload(password="exact6")).password == "exact6"

    def test_password_maximum_length(self) -> None:
        assert RegisterRequest(**register_payload(password="p" * 72)).password == "p" * 72
        with pytest.raises(ValidationError):
            RegisterRequest(**register_payload(password="p" * 73))

    @pytest.mark.parametrize("field", ["full_name", "email", "phone", "password"])
    def test_missing_field_rejected(self, field: str) -> None:
        payload = register_payload()
        del payload[field]
        with pytest.raises(ValidationError):
            RegisterRequest(**payload)


class TestVerifyRequest:
    """Tests for VerifyRequest model."""

    def test_valid_otp(self) -> None:
        assert VerifyRequest(otp="042917").otp == "042917"

    @pytest.mark.parametrize("otp", ["12345", "1234567", "12a456", "", "      "])
    def test_invalid_otp_rejected(self, otp: str) -> None:
        with pytest.raises(ValidationError):
            VerifyRequest(otp=otp)


class TestOtherRequests:
    def test_login_requires_password(self) -> None:
        with pytest.raises(ValidationError):
            LoginRequest(email="jane@x.com", password="")

    def test_reset_requires_token(self) -> None:
        with pytest.raises(ValidationError):
            ResetPasswordRequest(token="", password="Secret2")

    def test_login_password_maximum_length(self) -> None:
        with pytest.raises(ValidationError):
            LoginRequest(email="jane@x.com", password="p" * 73)

    def test_reset_password_maximum_length(self) -> None:
        with pytest.raises(ValidationError):
            ResetPasswordRequest(token="t", password="p" * 73)


class TestResponses:
    def test_user_response_has_no_credentials(self) -> None:
        profile = UserProfile(
            id="6f1c2b8e-2d0a-4c3b-9a55-0f3e8b7d1a01",
            full_name="Jane",
            email="jane@x.com",
            phone="555-0100",
            verified=True,
            is_seller=False,
        )

        data = UserResponse.from_profile(profile).model_dump()

        assert "password_hash" not in data
        assert "password" not in data
        assert data["verified"] is True

    def test_error_response(self) -> None:
        assert ErrorResponse(detail="Invalid token", kind="invalid_token").kind == "invalid_token"
        assert ErrorResponse(detail="x").kind is None
