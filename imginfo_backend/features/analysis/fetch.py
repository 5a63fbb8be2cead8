"""Boundary contract for the resource retrieval collaborator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class FetchedResource:
    data: bytes
    content_type: str


class Fetcher(Protocol):
    async def fetch(self, locator: str) -> FetchedResource:
        """Retrieve the bytes behind `locator`; raise `FetchFailed` on error."""
        ...

    def release(self, locator: str) -> None:
        """Drop any locator-scoped resource. Called once fetch has resolved."""
        ...
