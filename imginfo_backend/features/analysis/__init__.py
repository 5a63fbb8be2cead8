"""Incremental, format-dispatching image metadata analysis."""

from .byte_stream import ByteStreamReader
from .errors import AnalysisFailed, EndOfStream, FetchFailed, GifFormatError, NoExifData
from .events import AnalysisDone, AnalysisEvent, AnalysisFailure, InfoFragment, is_terminal
from .fetch import FetchedResource, Fetcher
from .formats import MIME_TYPES, FormatId, resolve_format
from .info import ImageInfo, generic_image_info
from .messages import format_error
from .parsers import ContainerParser, default_parsers
from .pipeline import AnalysisPipeline, AnalysisRun, AnalysisState

__all__ = [
    "AnalysisDone",
    "AnalysisEvent",
    "AnalysisFailed",
    "AnalysisFailure",
    "AnalysisPipeline",
    "AnalysisRun",
    "AnalysisState",
    "ByteStreamReader",
    "ContainerParser",
    "EndOfStream",
    "FetchFailed",
    "FetchedResource",
    "Fetcher",
    "FormatId",
    "GifFormatError",
    "ImageInfo",
    "InfoFragment",
    "MIME_TYPES",
    "NoExifData",
    "default_parsers",
    "format_error",
    "generic_image_info",
    "is_terminal",
    "resolve_format",
]
