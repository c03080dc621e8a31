"""
Integration tests for OpenAPI documentation.

Verifies OpenAPI schema is correctly generated for all endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app

V1_ENDPOINTS = [
    ("/v1/register", "post"),
    ("/v1/resend-verification", "post"),
    ("/v1/verify", "post"),
    ("/v1/login", "post"),
    ("/v1/forgot", "post"),
    ("/v1/verify-token", "get"),
    ("/v1/reset-password", "post"),
    ("/v1/seller", "post"),
    ("/v1/get-seller", "get"),
    ("/v1/add-product", "post"),
]


@pytest.fixture
def client() -> TestClient:
    """Create test client for the application."""
    return TestClient(app)


@pytest.fixture
def schema(client: TestClient) -> dict:
    response = client.get("/openapi.json")
    assert response.status_code == 200
    return response.json()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_openapi_title_and_version(self, schema: dict) -> None:
        assert schema["info"]["title"] == "bestwishes-accounts"
        assert "seller onboarding" in schema["info"]["description"]
        assert schema["info"]["version"] == "0.1.0"

    @pytest.mark.parametrize(("path", "method"), V1_ENDPOINTS)
    def test_endpoint_documented_and_tagged(self, schema: dict, path: str, method: str) -> None:
        assert path in schema["paths"]
        operation = schema["paths"][path][method]
        assert operation["summary"]
        assert "v1" in operation.get("tags", [])

    def test_register_summary(self, schema: dict) -> None:
        assert schema["paths"]["/v1/register"]["post"]["summary"] == "Register a new user"

    def test_register_request_schema(self, schema: dict) -> None:
        props = schema["components"]["schemas"]["RegisterRequest"]["properties"]
        assert {"full_name", "email", "phone", "password"} <= set(props)

    def test_user_response_has_no_password_fields(self, schema: dict) -> None:
        props = schema["components"]["schemas"]["UserResponse"]["properties"]
        assert "password" not in props
        assert "password_hash" not in props

    def test_verify_takes_user_id_query(self, schema: dict) -> None:
        params = schema["paths"]["/v1/verify"]["post"]["parameters"]
        assert {"name": "userId", "in": "query"}.items() <= params[0].items()

    def test_error_response_documented(self, schema: dict) -> None:
        props = schema["components"]["schemas"]["ErrorResponse"]["properties"]
        assert {"detail", "kind"} <= set(props)

    def test_v1_tag_in_schema(self, schema: dict) -> None:
        tag_names = [t["name"] for t in schema.get("tags", [])]
        assert "v1" in tag_names


class TestSwaggerUI:
    """Tests for Swagger UI availability."""

    def test_docs_endpoint_accessible(self, client: TestClient) -> None:
        """Swagger UI is accessible at /docs."""
        response = client.get("/docs")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "swagger" in response.text.lower()

    def test_redoc_endpoint_accessible(self, client: TestClient) -> None:
        """ReDoc is accessible at /redoc."""
        response = client.get("/redoc")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "redoc" in response.text.lower()
