import pytest
from imginfo_backend.features.analysis import (
    ByteStreamReader,
    EndOfStream,
    GifFormatError,
    generic_image_info,
)
from imginfo_backend.features.analysis.gif_blocks import GifBlockHandler, parse_gif
from imginfo_backend.features.analysis.gif_parser import GifParser


def _parse(data: bytes):
    info = generic_image_info("image/gif", data)
    return info, list(GifParser().parse(data, info))


def test_animated_gif_timing(gif_bytes):
    info, fragments = _parse(gif_bytes([10, 20, 30]))
    assert len(fragments) == 1
    final = fragments[0]
    assert final["frames"] == 3
    assert final["duration"] == pytest.approx(0.6)
    assert final["framerate"] == pytest.approx(3 / 0.6)
    assert final["width"] == 4 and final["height"] == 4
    assert final["mimeType"] == "image/gif"


def test_zero_delay_frames_drop_timing(gif_bytes):
    _, fragments = _parse(gif_bytes([0, 0]))
    final = fragments[0]
    assert final["frames"] == 2
    assert "duration" not in final
    assert "framerate" not in final


def test_static_gif_has_no_timing(gif_bytes):
    _, fragments = _parse(gif_bytes([]))
    final = fragments[0]
    assert final["frames"] == 0
    assert "duration" not in final
    assert "framerate" not in final


def test_loop_count_from_netscape_extension(gif_bytes):
    _, fragments = _parse(gif_bytes([5], loop=0))
    assert fragments[0]["loopCount"] == 0
    _, fragments = _parse(gif_bytes([5]))
    assert "loopCount" not in fragments[0]


def test_comment_block_is_reported(gif_bytes):
    class _Comments(GifBlockHandler):
        def __init__(self):
            self.comments = []
            self.eofs = 0

        def comment(self, text):
            self.comments.append(text)

        def eof(self):
            self.eofs += 1

    handler = _Comments()
    parse_gif(ByteStreamReader(gif_bytes([1], comment=b"hello")), handler)
    assert handler.comments == ["hello"]
    assert handler.eofs == 1


def test_truncated_data_sub_block_fails(gif_bytes):
    data = gif_bytes([10, 10])[:-3]
    with pytest.raises(EndOfStream):
        _parse(data)


def test_unknown_block_fails(gif_bytes):
    data = gif_bytes([10])[:-1] + b"\x99"
    with pytest.raises(GifFormatError, match="0x99"):
        _parse(data)


def test_bad_signature_fails():
    with pytest.raises(GifFormatError):
        _parse(b"PNG89a" + b"\x00" * 16)
