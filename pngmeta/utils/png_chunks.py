"""Reading and writing the chunk structure of PNG files.

A PNG file is the 8-byte signature followed by chunks framed as::

    length (u32, big-endian) | type (4 bytes) | payload | CRC32(type + payload)

References:
    https://www.w3.org/TR/PNG-Chunks.html
"""

import logging
import struct
from typing import List, Iterable, Union

from ..errors import (
    ChecksumMismatchError,
    InvalidHeaderError,
    LineEndingCorruptionError,
    MissingIHDRError,
    TruncatedFileError,
)
from ..models.chunk import Chunk
from .checksum import chunk_checksum

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Signature bytes that a CR/LF conversion would damage
_LINE_ENDING_BYTES = (4, 5, 7)

_U32 = struct.Struct(">I")

BytesLike = Union[bytes, bytearray, memoryview]


def _check_signature(data: memoryview) -> None:
    """Validate the signature byte by byte; the first mismatch decides the error."""
    if len(data) < len(PNG_SIGNATURE):
        raise InvalidHeaderError()
    for idx, expected in enumerate(PNG_SIGNATURE):
        if data[idx] != expected:
            if idx in _LINE_ENDING_BYTES:
                raise LineEndingCorruptionError()
            raise InvalidHeaderError()


def extract_chunks(data: BytesLike) -> List[Chunk]:
    """
    Extract the chunks of a PNG file.

    The source buffer is never modified and every payload is copied. IEND
    ends the scan and is always returned with an empty payload; anything
    after its type field is ignored.

    Raises InvalidHeaderError, MissingIHDRError, ChecksumMismatchError or
    TruncatedFileError.
    """
    view = memoryview(data).cast("B")
    _check_signature(view)

    chunks: List[Chunk] = []
    idx = len(PNG_SIGNATURE)
    end = len(view)

    while idx < end:
        if idx + 8 > end:
            raise TruncatedFileError()
        (length,) = _U32.unpack_from(view, idx)
        type_bytes = view[idx + 4:idx + 8].tobytes()
        name = type_bytes.decode("latin-1")
        idx += 8

        # The IHDR header MUST come first.
        if not chunks and name != "IHDR":
            raise MissingIHDRError(name)

        if name == "IEND":
            chunks.append(Chunk("IEND", b""))
            logger.debug(f"Extracted {len(chunks)} chunks from {end} bytes")
            return chunks

        data_end = idx + length
        if data_end + 4 > end:
            raise TruncatedFileError(
                f".png file ended prematurely: {name} chunk declares {length} bytes"
            )
        payload = view[idx:data_end].tobytes()
        (crc_stored,) = _U32.unpack_from(view, data_end)
        idx = data_end + 4

        if chunk_checksum(type_bytes, payload) != crc_stored:
            raise ChecksumMismatchError(name)

        chunks.append(Chunk(name, payload))

    raise TruncatedFileError()


def encode_chunk(chunk: Chunk) -> bytes:
    """Serialize a single chunk with its length prefix and CRC."""
    type_bytes = chunk.type_bytes
    return b"".join((
        _U32.pack(len(chunk.payload)),
        type_bytes,
        chunk.payload,
        _U32.pack(chunk_checksum(type_bytes, chunk.payload)),
    ))


def encode_chunks(chunks: Iterable[Chunk]) -> bytes:
    """
    Build a PNG byte stream from chunks.

    No ordering checks are made here; callers hand over a sequence that
    starts with IHDR and ends with IEND.
    """
    output = bytearray(PNG_SIGNATURE)
    count = 0
    for chunk in chunks:
        output += encode_chunk(chunk)
        count += 1
    logger.debug(f"Encoded {count} chunks into {len(output)} bytes")
    return bytes(output)
