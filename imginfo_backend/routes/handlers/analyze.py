"""
Analysis endpoint.

Endpoint: POST /imageinfo/analyze
Body: {"locator": "<url>"}

Streams one NDJSON line per event: `{"kind": "info", "data": {...}}` lines,
then `{"kind": "done"}` or `{"kind": "error", "error": "...", "code": "..."}`.
Request validation errors return a regular `Result` JSON body instead.
"""
from __future__ import annotations

import json
from uuid import uuid4

from aiohttp import web
from imginfo_backend.features.analysis.worker import locator_from_message
from imginfo_backend.shared import ErrorCode, Result, get_logger, request_id_var

from ..core import _json_response, _sanitize_json_payload
from ..services import APP_KEY_SERVICES

logger = get_logger(__name__)

NDJSON_CONTENT_TYPE = "application/x-ndjson"


def _encode_line(message: dict) -> bytes:
    return (json.dumps(_sanitize_json_payload(message), ensure_ascii=False) + "\n").encode("utf-8")


def register_analyze_routes(routes: web.RouteTableDef) -> None:
    @routes.post("/imageinfo/analyze")
    async def analyze(request: web.Request) -> web.StreamResponse:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _json_response(Result.Err(ErrorCode.INVALID_JSON, "Request body must be JSON"))
        locator = locator_from_message(body)
        if locator is None:
            return _json_response(Result.Err(ErrorCode.INVALID_INPUT, "Missing 'locator'"))

        pipeline = request.app[APP_KEY_SERVICES].pipeline
        token = request_id_var.set(uuid4().hex[:8])
        try:
            resp = web.StreamResponse(headers={"Content-Type": NDJSON_CONTENT_TYPE})
            await resp.prepare(request)
            async with pipeline.analyze(locator) as run:
                async for event in run:
                    await resp.write(_encode_line(event.to_message()))
            await resp.write_eof()
            return resp
        finally:
            request_id_var.reset(token)
