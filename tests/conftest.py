"""
Shared fixtures: small JPEG samples built with Pillow.
"""

import io

import pytest
from PIL import Image

from jpeg_fuzz.properties import ConfigSnapshot
from jpeg_fuzz.worker import Worker


def make_jpeg(size: tuple = (16, 16)) -> bytes:
    """Encode a gradient image so the scan carries real entropy-coded data."""
    image = Image.new("RGB", size)
    width, height = size
    image.putdata(
        [
            ((x * 7) % 256, (y * 13) % 256, (x * y) % 256)
            for y in range(height)
            for x in range(width)
        ]
    )
    buf = io.BytesIO()
    image.save(buf, format="JPEG", quality=95)
    return buf.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_jpeg()


@pytest.fixture
def truncated_jpeg() -> bytes:
    """Headers intact, scan data cut in half."""
    data = make_jpeg((64, 64))
    sos = data.index(b"\xff\xda")
    return data[: sos + (len(data) - sos) // 2]


@pytest.fixture
def bomb_jpeg() -> bytes:
    """Valid JPEG whose frame header declares 65535 x 65535 pixels."""
    data = bytearray(make_jpeg())
    sof = data.index(b"\xff\xc0")
    data[sof + 5 : sof + 9] = b"\xff\xff\xff\xff"
    return bytes(data)


@pytest.fixture
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), "red").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def ready_worker() -> Worker:
    worker = Worker(ConfigSnapshot({"foo": "1", "bar": "2"}))
    worker.initialize()
    return worker
