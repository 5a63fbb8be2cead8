"""Per-application service container."""
from __future__ import annotations

from dataclasses import dataclass

from aiohttp import web
from imginfo_backend.adapters.fetch import BlobStore, build_fetcher
from imginfo_backend.config import Settings
from imginfo_backend.features.analysis import AnalysisPipeline


@dataclass
class Services:
    settings: Settings
    blobs: BlobStore
    pipeline: AnalysisPipeline


APP_KEY_SERVICES: web.AppKey[Services] = web.AppKey("imginfo_services", Services)


def build_services(settings: Settings) -> Services:
    blobs = BlobStore()
    pipeline = AnalysisPipeline(build_fetcher(settings, blobs))
    return Services(settings=settings, blobs=blobs, pipeline=pipeline)
