"""Session token adapters."""

from .jwt_issuer import JwtSessionIssuer

__all__ = ["JwtSessionIssuer"]
