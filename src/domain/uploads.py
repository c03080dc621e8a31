"""
Upload policy - accepts image files and hands them to a BlobStore.

The storage provider itself sits behind the BlobStore port; this module
only enforces what the account core needs from uploads: allowed MIME
types, a per-file size cap and a per-field file count.
"""

import logging
import re
import secrets
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .exceptions import UploadRejected
from .models import Asset
from .ports import BlobStore

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/jpg"})
MAX_UPLOAD_BYTES_DEFAULT = 20 * 1024 * 1024

SELLER_ASSET_FIELDS = {
    "productIMAGE": 1,
    "productVIDEO": 1,
    "businessIMAGE": 1,
    "businessVIDEO": 1,
    "certificateIMAGE": 1,
}

PRODUCT_ASSET_FIELDS = {
    "proFrontIMAGE": 1,
    "proBackIMAGE": 1,
    "proUpwardIMAGE": 1,
    "proDownWardIMAGE": 1,
}

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class IncomingFile:
    field: str
    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class StoredAsset:
    field: str
    url: str


def assets_from(stored: Mapping[str, StoredAsset | None]) -> list[Asset]:
    """Flatten an upload result into asset references, in field order."""
    return [Asset(field=item.field, url=item.url) for item in stored.values() if item is not None]


@dataclass
class UploadService:
    """Validates incoming files and stores the accepted ones."""

    blob_store: BlobStore
    max_bytes: int = MAX_UPLOAD_BYTES_DEFAULT
    allowed_content_types: frozenset[str] = ALLOWED_CONTENT_TYPES

    def store(
        self, files: Iterable[IncomingFile], limits: Mapping[str, int]
    ) -> dict[str, StoredAsset | None]:
        """
        Store files for the fields named in ``limits``.

        Every file is checked before anything is written, so a rejected
        batch leaves no partial uploads behind.

        Returns:
            One entry per field in ``limits``; None where nothing was sent

        Raises:
            UploadRejected: Unknown field, too many files, wrong type or too large
        """
        files = list(files)
        counts: dict[str, int] = {}
        for incoming in files:
            if incoming.field not in limits:
                raise UploadRejected(f"Unexpected field: {incoming.field}")
            counts[incoming.field] = counts.get(incoming.field, 0) + 1
            if counts[incoming.field] > limits[incoming.field]:
                raise UploadRejected(f"Too many files for field: {incoming.field}")
            if incoming.content_type.lower() not in self.allowed_content_types:
                raise UploadRejected("Wrong format")
            if len(incoming.data) > self.max_bytes:
                raise UploadRejected("File too large")

        result: dict[str, StoredAsset | None] = {field: None for field in limits}
        for incoming in files:
            key = self._object_key(incoming)
            url = self.blob_store.put(key, incoming.data, incoming.content_type.lower())
            result[incoming.field] = StoredAsset(field=incoming.field, url=url)
            logger.info("Stored upload %s for field %s", key, incoming.field)
        return result

    @staticmethod
    def _object_key(incoming: IncomingFile) -> str:
        name = _UNSAFE_CHARS.sub("_", incoming.filename).strip("._") or incoming.field
        return f"{name}-{int(time.time() * 1000)}-{secrets.token_hex(4)}"
