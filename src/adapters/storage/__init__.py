"""Blob storage adapters."""

from .local import LocalBlobStore

__all__ = ["LocalBlobStore"]
