"""Shared fixtures: small PNG files built byte by byte and with Pillow."""

import io
import logging
import struct
import zlib

import pytest
from PIL import Image, PngImagePlugin

SIGNATURE = b"\x89PNG\r\n\x1a\n"
IEND_BYTES = b"\x00\x00\x00\x00IEND\xaeB`\x82"


@pytest.fixture(autouse=True)
def reset_pngmeta_logger():
    """Detach handlers that CLI runs attach to the pngmeta logger."""
    yield
    logger = logging.getLogger("pngmeta")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.NOTSET)


def raw_chunk(chunk_type: bytes, payload: bytes) -> bytes:
    """Frame a chunk using zlib directly, independent of pngmeta's encoder."""
    crc = zlib.crc32(chunk_type + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + chunk_type + payload + struct.pack(">I", crc)


def build_png(*before_idat: bytes, after_idat=()) -> bytes:
    """Build a 1x1 grayscale PNG with extra raw chunks around IDAT."""
    ihdr = raw_chunk(b"IHDR", struct.pack(">IIBBBBB", 1, 1, 8, 0, 0, 0, 0))
    idat = raw_chunk(b"IDAT", zlib.compress(b"\x00\x7f"))
    return SIGNATURE + ihdr + b"".join(before_idat) + idat + b"".join(after_idat) + IEND_BYTES


@pytest.fixture
def minimal_png() -> bytes:
    return build_png()


@pytest.fixture
def text_png() -> bytes:
    """PNG with two tEXt chunks, a gAMA chunk and a pHYs chunk."""
    return build_png(
        raw_chunk(b"gAMA", struct.pack(">I", 45455)),
        raw_chunk(b"pHYs", struct.pack(">IIB", 3780, 3780, 1)),
        raw_chunk(b"tEXt", b"Title\x00Sunset"),
        after_idat=[raw_chunk(b"tEXt", b"Author\x00Jane")],
    )


@pytest.fixture
def pillow_png() -> bytes:
    """RGB PNG written by Pillow with a text entry and 72 dpi."""
    info = PngImagePlugin.PngInfo()
    info.add_text("Software", "Pillow")
    buf = io.BytesIO()
    Image.new("RGB", (4, 3), (200, 10, 10)).save(buf, "PNG", pnginfo=info, dpi=(72, 72))
    return buf.getvalue()
