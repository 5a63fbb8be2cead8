"""
Exception taxonomy for the analysis pipeline.

Nothing here crosses the external interface: the pipeline translates every
exception into a single failure event.
"""


class FetchFailed(Exception):
    """Retrieving the raw bytes for a locator failed."""


class AnalysisFailed(Exception):
    """A container parser could not decode the resource."""


class EndOfStream(AnalysisFailed):
    """A read went past the end of the buffer."""

    def __init__(self, message: str = "Attempted to read past end of stream.") -> None:
        super().__init__(message)


class GifFormatError(AnalysisFailed):
    """The GIF block stream is structurally invalid."""


class NoExifData(Exception):
    """The resource carries no EXIF tag directory. Not an error."""

    def __init__(self, message: str = "No Exif data") -> None:
        super().__init__(message)
