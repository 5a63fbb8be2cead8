"""
Events emitted by the analysis pipeline and their wire messages.

A request yields zero or more `InfoFragment` events followed by exactly one
terminal event: `AnalysisDone` on success, `AnalysisFailure` otherwise.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from ...shared import ErrorCode
from .info import ImageInfo

KIND_INFO = "info"
KIND_DONE = "done"
KIND_ERROR = "error"


@dataclass(frozen=True)
class InfoFragment:
    data: ImageInfo

    def to_message(self) -> dict[str, Any]:
        return {"kind": KIND_INFO, "data": _jsonable_info(self.data)}


@dataclass(frozen=True)
class AnalysisDone:
    def to_message(self) -> dict[str, Any]:
        return {"kind": KIND_DONE}


@dataclass(frozen=True)
class AnalysisFailure:
    error: str
    code: ErrorCode = ErrorCode.ANALYSIS_FAILED

    def to_message(self) -> dict[str, Any]:
        return {"kind": KIND_ERROR, "error": self.error, "code": self.code.value}


AnalysisEvent = Union[InfoFragment, AnalysisDone, AnalysisFailure]


def is_terminal(event: AnalysisEvent) -> bool:
    return isinstance(event, (AnalysisDone, AnalysisFailure))


def _jsonable_info(info: ImageInfo) -> dict[str, Any]:
    out: dict[str, Any] = dict(info)
    fmt = out.get("type")
    out["type"] = fmt.value if fmt is not None else None
    return out
