"""Resource fetchers, one per locator scheme."""
from .blob_store import BlobStore
from .composite import CompositeFetcher, build_fetcher
from .data_uri import DataUriFetcher
from .file import FileFetcher
from .http import HttpFetcher

__all__ = [
    "BlobStore",
    "CompositeFetcher",
    "DataUriFetcher",
    "FileFetcher",
    "HttpFetcher",
    "build_fetcher",
]
