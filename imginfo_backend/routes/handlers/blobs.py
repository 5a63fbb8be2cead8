"""
Object URL endpoints.

POST   /imageinfo/blobs        raw body + Content-Type -> {"url": "blob:..."}
DELETE /imageinfo/blobs/{id}   revoke a blob that was never analyzed
"""
from __future__ import annotations

from aiohttp import web
from imginfo_backend.adapters.fetch.blob_store import BLOB_PREFIX
from imginfo_backend.shared import ErrorCode, Result

from ..core import _json_response
from ..services import APP_KEY_SERVICES


def register_blob_routes(routes: web.RouteTableDef) -> None:
    @routes.post("/imageinfo/blobs")
    async def create_blob(request: web.Request) -> web.Response:
        services = request.app[APP_KEY_SERVICES]
        data = await request.read()
        if not data:
            return _json_response(Result.Err(ErrorCode.INVALID_INPUT, "Empty upload"))
        if len(data) > services.settings.max_fetch_bytes:
            return _json_response(
                Result.Err(ErrorCode.INVALID_INPUT, f"Upload exceeds {services.settings.max_fetch_bytes} bytes")
            )
        url = services.blobs.create_object_url(data, request.headers.get("Content-Type", ""))
        return _json_response(Result.Ok({"url": url, "size": len(data)}))

    @routes.delete("/imageinfo/blobs/{blob_id}")
    async def revoke_blob(request: web.Request) -> web.Response:
        services = request.app[APP_KEY_SERVICES]
        url = f"{BLOB_PREFIX}{request.match_info['blob_id']}"
        if not services.blobs.revoke_object_url(url):
            return _json_response(Result.Err(ErrorCode.NOT_FOUND, "Unknown blob"))
        return _json_response(Result.Ok({"url": url, "revoked": True}))
