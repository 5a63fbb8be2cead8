"""
Message-protocol entry point.

Takes a request message (`{"locator": ...}`) and posts every resulting
message dict to `post_message`, mirroring a worker that talks to its owner
over a message channel.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any
from uuid import uuid4

from ...shared import ErrorCode, request_id_var
from .events import AnalysisFailure
from .messages import format_error
from .pipeline import AnalysisPipeline


def locator_from_message(message: Any) -> str | None:
    if not isinstance(message, Mapping):
        return None
    locator = message.get("locator") or message.get("url")
    if not isinstance(locator, str) or not locator.strip():
        return None
    return locator.strip()


async def run_analysis(
    message: Any,
    post_message: Callable[[dict[str, Any]], Any],
    pipeline: AnalysisPipeline,
) -> None:
    locator = locator_from_message(message)
    if locator is None:
        failure = AnalysisFailure(
            error=format_error("error_invalid_request", ["missing 'locator'"]),
            code=ErrorCode.INVALID_INPUT,
        )
        post_message(failure.to_message())
        return

    token = request_id_var.set(uuid4().hex[:8])
    try:
        async with pipeline.analyze(locator) as run:
            async for event in run:
                post_message(event.to_message())
    finally:
        request_id_var.reset(token)
