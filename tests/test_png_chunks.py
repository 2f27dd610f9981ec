#!/usr/bin/env python3
"""Tests for PNG chunk extraction and encoding."""

import struct
import sys
from pathlib import Path

import pytest

# Add the parent directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import SIGNATURE, IEND_BYTES, build_png, raw_chunk
from pngmeta.errors import (
    ChecksumMismatchError,
    InvalidChunkTypeError,
    InvalidHeaderError,
    LineEndingCorruptionError,
    MissingIHDRError,
    TruncatedFileError,
)
from pngmeta.models import Chunk
from pngmeta.utils.png_chunks import PNG_SIGNATURE, encode_chunk, encode_chunks, extract_chunks


def test_extract_minimal_png(minimal_png):
    """Test that a minimal PNG yields IHDR, IDAT and an empty IEND."""
    chunks = extract_chunks(minimal_png)
    assert [c.type for c in chunks] == ["IHDR", "IDAT", "IEND"]
    assert chunks[0].payload == struct.pack(">IIBBBBB", 1, 1, 8, 0, 0, 0, 0)
    assert chunks[-1].payload == b""


def test_round_trip_identity(minimal_png, text_png, pillow_png):
    """Test that encoding extracted chunks reproduces the original bytes."""
    for data in (minimal_png, text_png, pillow_png):
        assert encode_chunks(extract_chunks(data)) == data


def test_extract_accepts_bytearray_and_memoryview(text_png):
    """Test that any bytes-like buffer can be extracted."""
    expected = extract_chunks(text_png)
    assert extract_chunks(bytearray(text_png)) == expected
    assert extract_chunks(memoryview(text_png)) == expected


def test_extract_copies_payloads(text_png):
    """Test that payloads do not alias the source buffer."""
    source = bytearray(text_png)
    original = bytes(source)
    chunks = extract_chunks(source)

    assert bytes(source) == original
    assert all(isinstance(c.payload, bytes) for c in chunks)

    # Overwrite the source; extracted payloads must not change
    for i in range(len(PNG_SIGNATURE), len(source)):
        source[i] = 0
    assert encode_chunks(chunks) == original


def test_invalid_header():
    """Test that a non-PNG signature is rejected."""
    with pytest.raises(InvalidHeaderError) as exc_info:
        extract_chunks(b"GIF89a\x01\x00\x01\x00" + b"\x00" * 20)
    assert not isinstance(exc_info.value, LineEndingCorruptionError)


def test_short_buffer_is_invalid_header():
    """Test that a buffer shorter than the signature is rejected."""
    with pytest.raises(InvalidHeaderError):
        extract_chunks(b"\x89PN")
    with pytest.raises(InvalidHeaderError):
        extract_chunks(b"")


@pytest.mark.parametrize("index", [4, 5, 7])
def test_line_ending_corruption(minimal_png, index):
    """Test that damaged CR/LF signature bytes get a specific diagnosis."""
    data = bytearray(minimal_png)
    data[index] ^= 0xFF
    with pytest.raises(LineEndingCorruptionError, match="line ending"):
        extract_chunks(bytes(data))


def test_dos_to_unix_conversion_detected(minimal_png):
    """Test that a CRLF -> LF converted signature is diagnosed as line-ending damage."""
    data = minimal_png.replace(b"\r\n", b"\n", 1)
    with pytest.raises(LineEndingCorruptionError):
        extract_chunks(data)


def test_first_mismatch_decides_error(minimal_png):
    """Test that a mismatch at byte 1 is a plain header error even if byte 4 is also wrong."""
    data = bytearray(minimal_png)
    data[1] = 0
    data[4] = 0
    with pytest.raises(InvalidHeaderError) as exc_info:
        extract_chunks(bytes(data))
    assert not isinstance(exc_info.value, LineEndingCorruptionError)


def test_missing_ihdr():
    """Test that a file whose first chunk is not IHDR is rejected."""
    data = SIGNATURE + raw_chunk(b"tEXt", b"a\x00b") + IEND_BYTES
    with pytest.raises(MissingIHDRError, match="IHDR"):
        extract_chunks(data)


def test_iend_first_is_missing_ihdr():
    """Test that IEND as the first chunk is still a missing IHDR."""
    with pytest.raises(MissingIHDRError):
        extract_chunks(SIGNATURE + IEND_BYTES)


def test_missing_iend_is_truncated(minimal_png):
    """Test that a file without IEND is reported as truncated."""
    with pytest.raises(TruncatedFileError, match="prematurely"):
        extract_chunks(minimal_png[:-len(IEND_BYTES)])


def test_signature_only_is_truncated():
    """Test that a bare signature is truncated."""
    with pytest.raises(TruncatedFileError):
        extract_chunks(SIGNATURE)


def test_truncated_inside_chunk(minimal_png):
    """Test that data cut inside a chunk header or payload is truncated."""
    ihdr_end = len(SIGNATURE) + 8 + 13 + 4
    with pytest.raises(TruncatedFileError):
        extract_chunks(minimal_png[:ihdr_end + 3])
    with pytest.raises(TruncatedFileError):
        extract_chunks(minimal_png[:ihdr_end + 10])


def test_checksum_mismatch_names_chunk(minimal_png):
    """Test that a corrupted IHDR payload fails with the chunk type in the error."""
    data = bytearray(minimal_png)
    data[len(SIGNATURE) + 8 + 2] ^= 0x01
    with pytest.raises(ChecksumMismatchError) as exc_info:
        extract_chunks(bytes(data))
    assert exc_info.value.chunk_type == "IHDR"
    assert "IHDR" in str(exc_info.value)


def test_checksum_sensitive_to_every_byte():
    """Test that flipping a bit anywhere in a chunk's type or payload is detected."""
    text = raw_chunk(b"tEXt", b"Comment\x00hello")
    data = build_png(text)
    start = data.index(text)
    # Type and payload, skipping the length field and the stored CRC
    for offset in range(start + 4, start + len(text) - 4):
        corrupted = bytearray(data)
        corrupted[offset] ^= 0x01
        with pytest.raises(ChecksumMismatchError):
            extract_chunks(bytes(corrupted))


def test_iend_declared_length_is_ignored():
    """Test that IEND is returned empty and its declared body is not read."""
    data = build_png()[:-len(IEND_BYTES)] + struct.pack(">I", 5) + b"IEND" + b"junk"
    chunks = extract_chunks(data)
    assert chunks[-1] == Chunk("IEND", b"")


def test_trailing_bytes_after_iend_ignored(minimal_png):
    """Test that bytes after IEND are not part of the result."""
    chunks = extract_chunks(minimal_png + b"trailing garbage")
    assert encode_chunks(chunks) == minimal_png


def test_encode_chunk_framing():
    """Test the length, type, payload and CRC layout of an encoded chunk."""
    encoded = encode_chunk(Chunk("tEXt", b"a\x00b"))
    assert encoded == raw_chunk(b"tEXt", b"a\x00b")
    assert encode_chunk(Chunk("IEND")) == IEND_BYTES


def test_encode_does_not_validate_order():
    """Test that encoding trusts its input."""
    data = encode_chunks([Chunk("tEXt", b"k\x00v")])
    assert data == PNG_SIGNATURE + raw_chunk(b"tEXt", b"k\x00v")
    assert encode_chunks([]) == PNG_SIGNATURE


def test_chunk_type_must_be_four_characters():
    """Test chunk type validation and bytes conversion."""
    with pytest.raises(InvalidChunkTypeError):
        Chunk("abc")
    with pytest.raises(InvalidChunkTypeError):
        Chunk("tEXtX")
    with pytest.raises(InvalidChunkTypeError):
        Chunk("t€Xt")

    chunk = Chunk(b"IHDR", bytearray(b"\x01\x02"))
    assert chunk.type == "IHDR"
    assert chunk.type_bytes == b"IHDR"
    assert chunk.payload == b"\x01\x02"
    assert isinstance(chunk.payload, bytes)
    assert chunk.length == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
