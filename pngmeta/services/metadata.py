"""Mapping between PNG chunk lists and metadata records.

Only tEXt and pHYs chunks are interpreted; every other chunk type is
reported by name.

References:
    https://www.w3.org/TR/PNG-Chunks.html
    https://dev.exiv2.org/projects/exiv2/wiki/The_Metadata_in_PNG_files
"""

import logging
from typing import List

from ..models import Chunk, MetadataUpdate, PhysicalResolution, PngMetadata
from ..utils.png_chunks import BytesLike, encode_chunks, extract_chunks
from ..utils.text_chunks import text_decode_chunk, text_encode

logger = logging.getLogger(__name__)

# Chunks that survive a clear
CRITICAL_CHUNKS = frozenset({"IHDR", "IDAT", "IEND"})


def read_metadata(data: BytesLike) -> PngMetadata:
    """Extract the metadata record of a PNG file."""
    result = PngMetadata()

    for chunk in extract_chunks(data):
        if chunk.type == "tEXt":
            if result.text is None:
                result.text = {}
            keyword, text = text_decode_chunk(chunk)
            result.text[keyword] = text
        elif chunk.type == "pHYs":
            result.physical = PhysicalResolution.from_payload(chunk.payload)
        else:
            result.chunks[chunk.type] = True

    logger.debug(
        f"Read metadata: {len(result.text or {})} text entries, "
        f"pHYs={'yes' if result.physical else 'no'}, chunk types={sorted(result.chunks)}"
    )
    return result


def insert_metadata(chunks: List[Chunk], update: MetadataUpdate) -> None:
    """
    Apply ``update`` to ``chunks`` in place.

    New chunks are built first, so a failing keyword leaves ``chunks``
    untouched. Text chunks go right before the final IEND. A pHYs record
    replaces the payload of the first existing pHYs chunk, or is inserted
    right after IHDR.
    """
    text_chunks = [text_encode(keyword, text) for keyword, text in (update.text or {}).items()]
    phys_payload = update.physical.to_payload() if update.physical is not None else None

    if update.clear:
        # Index 0 is IHDR on any extracted list
        for idx in range(len(chunks) - 1, 0, -1):
            if chunks[idx].type not in CRITICAL_CHUNKS:
                del chunks[idx]
        logger.debug(f"Cleared ancillary chunks, {len(chunks)} remain")

    for chunk in text_chunks:
        chunks.insert(len(chunks) - 1, chunk)

    if phys_payload is not None:
        existing = next((chunk for chunk in chunks if chunk.type == "pHYs"), None)
        if existing is not None:
            existing.payload = phys_payload
        else:
            chunks.insert(1, Chunk("pHYs", phys_payload))

    if text_chunks or phys_payload is not None:
        logger.debug(
            f"Inserted {len(text_chunks)} text chunks"
            + (", set pHYs" if phys_payload is not None else "")
        )


def write_metadata(data: BytesLike, update: MetadataUpdate) -> bytes:
    """Return a copy of a PNG file with ``update`` applied."""
    chunks = extract_chunks(data)
    insert_metadata(chunks, update)
    return encode_chunks(chunks)
