import pytest
from PIL import UnidentifiedImageError
from PIL.TiffImagePlugin import IFDRational

from imginfo_backend.features.analysis import AnalysisFailed, NoExifData, generic_image_info
from imginfo_backend.features.analysis.jpeg_parser import JpegExifParser, _json_value, load_exif

MAKE = 0x010F
MODEL = 0x0110
EXIF_IFD = 0x8769
GPS_IFD = 0x8825
DATE_TIME_ORIGINAL = 0x9003
GPS_LATITUDE_REF = 0x0001


def _corrupt_tiff_header(data: bytes) -> bytes:
    buf = bytearray(data)
    start = buf.index(b"Exif\x00\x00") + 6
    buf[start:start + 4] = b"XXXX"
    return bytes(buf)


def test_exif_tags_become_metadata(jpeg_bytes):
    data = jpeg_bytes({MAKE: "Canon", MODEL: "EOS 5D"})
    info = generic_image_info("image/jpeg", data)
    fragments = list(JpegExifParser().parse(data, info))
    assert len(fragments) == 1
    assert fragments[0]["metadata"] == {"Make": "Canon", "Model": "EOS 5D"}


def test_exif_and_gps_directories_are_flattened(jpeg_bytes):
    data = jpeg_bytes(
        {MAKE: "Canon"},
        ifds={
            EXIF_IFD: {DATE_TIME_ORIGINAL: "2024:01:01 00:00:00"},
            GPS_IFD: {GPS_LATITUDE_REF: "N"},
        },
    )
    info = generic_image_info("image/jpeg", data)
    metadata = list(JpegExifParser().parse(data, info))[0]["metadata"]

    assert metadata["Make"] == "Canon"
    assert metadata["DateTimeOriginal"] == "2024:01:01 00:00:00"
    assert metadata["GPSLatitudeRef"] == "N"
    # pointer tags are not values
    assert "ExifOffset" not in metadata
    assert "GPSInfo" not in metadata


def test_missing_exif_yields_nothing(jpeg_bytes):
    data = jpeg_bytes()
    info = generic_image_info("image/jpeg", data)
    assert list(JpegExifParser().parse(data, info)) == []
    assert "metadata" not in info


def test_load_exif_signals_missing_directory(jpeg_bytes):
    with pytest.raises(NoExifData):
        load_exif(jpeg_bytes())


def test_corrupt_tiff_header_is_an_error(jpeg_bytes):
    data = _corrupt_tiff_header(jpeg_bytes({MAKE: "Canon"}))
    with pytest.raises(AnalysisFailed, match="TIFF header"):
        load_exif(data)

    info = generic_image_info("image/jpeg", data)
    with pytest.raises(AnalysisFailed):
        list(JpegExifParser().parse(data, info))
    assert "metadata" not in info


def test_non_jpeg_bytes_fail():
    with pytest.raises(UnidentifiedImageError):
        list(JpegExifParser().parse(b"\xff\xd8garbage", generic_image_info("image/jpeg", b"")))


@pytest.mark.parametrize(
    "raw, expected",
    [
        (IFDRational(1, 2), 0.5),
        (IFDRational(1, 0), None),
        (b"abc\x00", "abc"),
        (b"\xffok", "\ufffdok"),
        ("Canon\x00\x00", "Canon"),
        ((1, IFDRational(3, 4)), [1, 0.75]),
        (float("inf"), None),
        (42, 42),
    ],
)
def test_json_value_conversion(raw, expected):
    assert _json_value(raw) == expected
