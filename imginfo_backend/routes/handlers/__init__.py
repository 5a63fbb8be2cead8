from .analyze import register_analyze_routes
from .blobs import register_blob_routes

__all__ = ["register_analyze_routes", "register_blob_routes"]
