"""
Route registration.
"""
from __future__ import annotations

from aiohttp import web
from imginfo_backend.config import Settings, load_settings
from imginfo_backend.shared import get_logger

from .handlers import register_analyze_routes, register_blob_routes
from .services import APP_KEY_SERVICES, Services, build_services

logger = get_logger(__name__)


def register_routes(routes: web.RouteTableDef) -> None:
    register_analyze_routes(routes)
    register_blob_routes(routes)


def create_app(settings: Settings | None = None, services: Services | None = None) -> web.Application:
    settings = settings or load_settings()
    app = web.Application(client_max_size=settings.max_fetch_bytes + 1024)
    app[APP_KEY_SERVICES] = services or build_services(settings)
    routes = web.RouteTableDef()
    register_routes(routes)
    app.add_routes(routes)
    logger.debug("Registered %s route(s)", len(routes))
    return app
