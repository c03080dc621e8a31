"""Local filesystem blob store - Implements BlobStore protocol."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """Persist uploads under a directory and serve them from a base URL."""

    def __init__(self, upload_dir: str, base_url: str) -> None:
        self.base_directory = Path(upload_dir)
        self.base_url = base_url.rstrip("/")
        os.makedirs(self.base_directory, exist_ok=True)

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Write ``data`` to ``key`` and return its public URL."""
        name = Path(key).name
        if not name:
            raise ValueError("Object key must contain a file name")
        destination = self.base_directory / name
        destination.write_bytes(data)
        logger.debug("Wrote %d bytes (%s) to %s", len(data), content_type, destination)
        return f"{self.base_url}/{destination.name}"
