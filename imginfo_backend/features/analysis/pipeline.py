"""
Analysis pipeline: fetch -> generic info -> format dispatch -> container
parser -> completion.

Each request is an `AnalysisRun`: an async iterator of events that always
ends with exactly one `AnalysisDone` or one `AnalysisFailure`. The fetched
buffer is dropped and the locator released before the terminal event is
yielded, and again (idempotently) if the consumer abandons the iteration.
"""
from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, AsyncIterator, Mapping
from enum import Enum

from ...shared import ErrorCode, get_logger, log_structured, log_success, sanitize_error_message, timer
from .errors import FetchFailed
from .events import AnalysisDone, AnalysisEvent, AnalysisFailure, InfoFragment
from .fetch import Fetcher
from .formats import FormatId
from .info import ImageInfo, generic_image_info, snapshot
from .messages import format_error
from .parsers import ContainerParser, default_parsers

logger = get_logger(__name__)


class AnalysisState(str, Enum):
    FETCHING = "fetching"
    GENERIC_INFO_EMITTED = "generic_info_emitted"
    DISPATCHING = "dispatching"
    PARSER_ACTIVE = "parser_active"
    COMPLETED = "completed"
    FAILED = "failed"


class AnalysisRun:
    """One analysis request. Iterate it once."""

    def __init__(
        self,
        locator: str,
        fetcher: Fetcher,
        parsers: Mapping[FormatId, ContainerParser],
    ) -> None:
        self.locator = locator
        self.state = AnalysisState.FETCHING
        self.info: ImageInfo | None = None
        self._fetcher = fetcher
        self._parsers = parsers
        self._data: bytes | None = None
        self._released = False
        self._events_gen: AsyncGenerator[AnalysisEvent, None] | None = None

    def __aiter__(self) -> AsyncIterator[AnalysisEvent]:
        if self._events_gen is not None:
            raise RuntimeError("AnalysisRun can only be iterated once")
        self._events_gen = self._events()
        return self._events_gen

    async def __aenter__(self) -> AnalysisRun:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Abandon the request; no further events are delivered."""
        if self._events_gen is not None:
            await self._events_gen.aclose()
        self._release()

    def _release(self) -> None:
        self._data = None
        if self._released:
            return
        self._released = True
        try:
            self._fetcher.release(self.locator)
        except Exception as exc:
            logger.warning("Failed to release %s: %s", self.locator, exc)

    def _fail(self, key: str, code: ErrorCode, exc: BaseException) -> AnalysisFailure:
        self.state = AnalysisState.FAILED
        self._release()
        detail = sanitize_error_message(exc, type(exc).__name__)
        log_structured(logger, logging.WARNING, "analysis failed", code=code.value, locator=self.locator[:120], detail=detail)
        return AnalysisFailure(error=format_error(key, [detail]), code=code)

    def _complete(self) -> AnalysisDone:
        self.state = AnalysisState.COMPLETED
        self._release()
        return AnalysisDone()

    async def _events(self) -> AsyncIterator[AnalysisEvent]:
        try:
            try:
                resource = await self._fetcher.fetch(self.locator)
            except Exception as exc:
                if not isinstance(exc, FetchFailed):
                    logger.debug("Unexpected fetch error for %s", self.locator, exc_info=True)
                yield self._fail("error_fetch_failed", ErrorCode.FETCH_FAILED, exc)
                return

            self._data = resource.data
            info = generic_image_info(resource.content_type, resource.data)
            self.info = info
            self.state = AnalysisState.GENERIC_INFO_EMITTED
            yield InfoFragment(snapshot(info))

            self.state = AnalysisState.DISPATCHING
            format_id = info["type"]
            parser = self._parsers.get(format_id) if format_id is not None else None
            if parser is None:
                logger.debug("No container parser for %r (%s)", info["mimeType"], format_id)
                yield self._complete()
                return

            self.state = AnalysisState.PARSER_ACTIVE
            try:
                with timer(f"{format_id.value} parse", logger):
                    for refined in parser.parse(self._data, info):
                        yield InfoFragment(snapshot(refined))
            except Exception as exc:
                # Fragments already yielded stand; the failure is terminal.
                yield self._fail("error_analyze_failed", ErrorCode.ANALYSIS_FAILED, exc)
                return

            log_success(logger, f"Analyzed {format_id.value} ({info['fileSize']} bytes)")
            yield self._complete()
        finally:
            self._release()


class AnalysisPipeline:
    """
    Runs analysis requests against a fetcher and a static parser table.

    Usage:
        pipeline = AnalysisPipeline(fetcher)
        async for event in pipeline.analyze("https://example.com/a.gif"):
            ...
    """

    def __init__(
        self,
        fetcher: Fetcher,
        parsers: Mapping[FormatId, ContainerParser] | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.parsers: Mapping[FormatId, ContainerParser] = dict(
            parsers if parsers is not None else default_parsers()
        )

    def analyze(self, locator: str) -> AnalysisRun:
        return AnalysisRun(locator, self.fetcher, self.parsers)
