"""
In-memory object URLs.

Uploaded bytes are registered under a `blob:` locator that can be analyzed
once; the pipeline releases (revokes) it as soon as the fetch resolves.
"""
from __future__ import annotations

import threading
from uuid import uuid4

from ...features.analysis import FetchedResource, FetchFailed
from ...shared import get_logger

logger = get_logger(__name__)

BLOB_PREFIX = "blob:imginfo/"


class BlobStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._blobs: dict[str, FetchedResource] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._blobs)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._blobs

    def create_object_url(self, data: bytes, content_type: str) -> str:
        url = f"{BLOB_PREFIX}{uuid4().hex}"
        with self._lock:
            self._blobs[url] = FetchedResource(data=bytes(data), content_type=content_type or "")
        logger.debug("Created %s (%s bytes)", url, len(data))
        return url

    def revoke_object_url(self, url: str) -> bool:
        with self._lock:
            removed = self._blobs.pop(url, None) is not None
        if removed:
            logger.debug("Revoked %s", url)
        return removed

    async def fetch(self, locator: str) -> FetchedResource:
        with self._lock:
            resource = self._blobs.get(locator)
        if resource is None:
            raise FetchFailed(f"Unknown or revoked blob URL: {locator}")
        return resource

    def release(self, locator: str) -> None:
        self.revoke_object_url(locator)
