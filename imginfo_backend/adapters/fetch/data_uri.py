"""
`data:` URI fetcher (RFC 2397).
"""
from __future__ import annotations

import base64
import binascii
from urllib.parse import unquote_to_bytes

from ...features.analysis import FetchedResource, FetchFailed


def parse_data_uri(locator: str) -> FetchedResource:
    if not locator.startswith("data:"):
        raise FetchFailed("Not a data URI")
    header, sep, payload = locator[len("data:"):].partition(",")
    if not sep:
        raise FetchFailed("Malformed data URI: missing ','")
    params = header.split(";")
    is_base64 = bool(params) and params[-1].strip().lower() == "base64"
    if is_base64:
        params = params[:-1]
    content_type = ";".join(p for p in params if p) or "text/plain;charset=US-ASCII"
    if is_base64:
        try:
            data = base64.b64decode(unquote_to_bytes(payload), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise FetchFailed(f"Malformed base64 payload: {exc}") from exc
    else:
        data = unquote_to_bytes(payload)
    return FetchedResource(data=data, content_type=content_type)


class DataUriFetcher:
    async def fetch(self, locator: str) -> FetchedResource:
        return parse_data_uri(locator)

    def release(self, locator: str) -> None:
        return None
