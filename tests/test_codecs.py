import io

import pytest
from PIL import Image

from batch_resizer.codec import get_codec
from batch_resizer.codec.opencv_codec import OpenCVCodec
from batch_resizer.codec.pillow_codec import PillowCodec
from batch_resizer.utils.errors import DecodeError


def _encoded(size=(40, 30), fmt="PNG", mode="RGB"):
    buf = io.BytesIO()
    color = (10, 120, 200, 90) if mode == "RGBA" else (10, 120, 200)
    if mode == "L":
        color = 120
    if mode == "P":
        Image.new("RGB", size, color).convert("P").save(buf, format=fmt)
    else:
        Image.new(mode, size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture(params=["pillow", "opencv"])
def codec(request):
    return get_codec({"codec": {"backend": request.param, "quality": 100}})


def test_factory_selects_backend():
    assert isinstance(get_codec({}), PillowCodec)
    assert isinstance(get_codec({"codec": {"backend": "opencv"}}), OpenCVCodec)


def test_factory_rejects_unknown_backend():
    with pytest.raises(ValueError):
        get_codec({"codec": {"backend": "gif-magic"}})


def test_decode_reports_dimensions(codec):
    raster = codec.decode(_encoded((41, 17)))
    assert (raster.width, raster.height) == (41, 17)


def test_resize_then_encode_produces_jpeg(codec):
    raster = codec.resize(codec.decode(_encoded((100, 50))), 33, 16)
    assert (raster.width, raster.height) == (33, 16)

    data = codec.encode(raster)
    with Image.open(io.BytesIO(data)) as img:
        assert img.format == "JPEG"
        assert img.size == (33, 16)


@pytest.mark.parametrize("mode", ["RGBA", "P", "L"])
def test_encodes_non_rgb_sources(codec, mode):
    data = codec.encode(codec.decode(_encoded(mode=mode)))
    with Image.open(io.BytesIO(data)) as img:
        assert img.format == "JPEG"


@pytest.mark.parametrize("payload", [b"not an image", b"", b"\x89PNG\r\n\x1a\n truncated"])
def test_invalid_bytes_raise_decode_error(codec, payload):
    with pytest.raises(DecodeError):
        codec.decode(payload)


def test_pillow_encoding_is_deterministic():
    codec = PillowCodec({})
    raster = codec.decode(_encoded())
    assert codec.encode(raster) == codec.encode(raster)
