"""CRC32 helpers for PNG chunks."""

import zlib


def crc32(data: bytes, value: int = 0) -> int:
    """Return the unsigned CRC32 of ``data``, continuing from ``value``."""
    return zlib.crc32(data, value) & 0xFFFFFFFF


def chunk_checksum(type_bytes: bytes, payload: bytes) -> int:
    """CRC32 over the chunk type followed by the chunk payload."""
    return crc32(payload, crc32(type_bytes))
