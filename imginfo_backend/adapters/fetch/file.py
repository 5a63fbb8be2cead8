"""
`file:` URL fetcher. Disabled unless IMGINFO_ALLOW_FILE_LOCATORS is set.
"""
from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from ...features.analysis import FetchedResource, FetchFailed
from ...shared import sanitize_error_message


def _path_from_url(locator: str) -> Path:
    parsed = urlparse(locator)
    if parsed.netloc not in ("", "localhost"):
        raise FetchFailed(f"Remote file host not supported: {parsed.netloc}")
    return Path(url2pathname(parsed.path))


class FileFetcher:
    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes

    async def fetch(self, locator: str) -> FetchedResource:
        path = _path_from_url(locator)
        try:
            size = path.stat().st_size
            if size > self.max_bytes:
                raise FetchFailed(f"Resource exceeds {self.max_bytes} bytes")
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise FetchFailed(sanitize_error_message(exc, "File not readable")) from exc
        content_type, _ = mimetypes.guess_type(path.name)
        return FetchedResource(data=data, content_type=content_type or "")

    def release(self, locator: str) -> None:
        return None
