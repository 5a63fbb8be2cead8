"""
HTTP surface for the analyzer.
Importing this package is side-effect free; route registration is explicit.
"""
from .registry import create_app, register_routes
from .services import APP_KEY_SERVICES, Services, build_services

__all__ = ["APP_KEY_SERVICES", "Services", "build_services", "create_app", "register_routes"]
