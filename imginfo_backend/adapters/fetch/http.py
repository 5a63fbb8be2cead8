"""
HTTP(S) fetcher backed by aiohttp.

A session is opened per fetch; the fetcher keeps no connection state, so
`release` has nothing to do.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

from ...config import DEFAULT_FETCH_TIMEOUT_S, DEFAULT_MAX_FETCH_BYTES
from ...features.analysis import FetchedResource, FetchFailed
from ...shared import get_logger, sanitize_error_message

logger = get_logger(__name__)

FETCH_STREAM_CHUNK_BYTES = 64 * 1024


async def _read_body_limited(resp: ClientResponse, limit: int) -> bytes:
    buf = bytearray()
    async for chunk in resp.content.iter_chunked(FETCH_STREAM_CHUNK_BYTES):
        if not chunk:
            continue
        buf.extend(chunk)
        if len(buf) > limit:
            raise FetchFailed(f"Resource exceeds {limit} bytes")
    return bytes(buf)


class HttpFetcher:
    def __init__(
        self,
        timeout_s: float = DEFAULT_FETCH_TIMEOUT_S,
        max_bytes: int = DEFAULT_MAX_FETCH_BYTES,
    ) -> None:
        self.timeout_s = timeout_s
        self.max_bytes = max_bytes

    async def fetch(self, locator: str) -> FetchedResource:
        try:
            async with ClientSession() as session:
                async with session.get(locator, timeout=ClientTimeout(total=self.timeout_s)) as resp:
                    if resp.status != 200:
                        raise FetchFailed(f"{resp.status} {resp.reason or ''}".strip())
                    if resp.content_length is not None and resp.content_length > self.max_bytes:
                        raise FetchFailed(f"Resource exceeds {self.max_bytes} bytes")
                    # Content-Length may be absent or wrong; the stream is capped either way
                    data = await _read_body_limited(resp, self.max_bytes)
                    content_type = resp.headers.get("Content-Type", "")
        except FetchFailed:
            raise
        except asyncio.TimeoutError as exc:
            logger.debug("Timeout fetching %s", locator)
            raise FetchFailed("Timeout while fetching resource") from exc
        except ClientError as exc:
            logger.debug("Failed to fetch %s: %s", locator, exc)
            raise FetchFailed(sanitize_error_message(exc, "Request failed")) from exc

        return FetchedResource(data=data, content_type=content_type)

    def release(self, locator: str) -> None:
        return None
