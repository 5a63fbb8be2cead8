"""Scheme-based routing between the concrete fetchers."""
from __future__ import annotations

from ...config import Settings
from ...features.analysis import FetchedResource, Fetcher, FetchFailed
from .blob_store import BlobStore
from .data_uri import DataUriFetcher
from .file import FileFetcher
from .http import HttpFetcher


def _scheme(locator: str) -> str:
    head, sep, _ = str(locator or "").partition(":")
    return head.strip().lower() if sep else ""


class CompositeFetcher:
    def __init__(self, routes: dict[str, Fetcher]) -> None:
        self.routes = routes

    def _route(self, locator: str) -> Fetcher:
        scheme = _scheme(locator)
        fetcher = self.routes.get(scheme)
        if fetcher is None:
            raise FetchFailed(f"Unsupported locator scheme: {scheme or '<none>'}")
        return fetcher

    async def fetch(self, locator: str) -> FetchedResource:
        return await self._route(locator).fetch(locator)

    def release(self, locator: str) -> None:
        fetcher = self.routes.get(_scheme(locator))
        if fetcher is not None:
            fetcher.release(locator)


def build_fetcher(settings: Settings, blobs: BlobStore) -> CompositeFetcher:
    http = HttpFetcher(timeout_s=settings.fetch_timeout_s, max_bytes=settings.max_fetch_bytes)
    routes: dict[str, Fetcher] = {
        "blob": blobs,
        "data": DataUriFetcher(),
        "http": http,
        "https": http,
    }
    if settings.allow_file_locators:
        routes["file"] = FileFetcher(max_bytes=settings.max_fetch_bytes)
    return CompositeFetcher(routes)
