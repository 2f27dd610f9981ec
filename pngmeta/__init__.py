"""pngmeta

Read and write PNG tEXt/pHYs metadata without touching pixel data.
"""

from .errors import (
    PngMetadataError,
    InvalidHeaderError,
    LineEndingCorruptionError,
    MissingIHDRError,
    TruncatedFileError,
    ChecksumMismatchError,
    InvalidCharacterError,
    InvalidKeywordError,
    KeywordTooLongError,
    InvalidChunkTypeError,
    MalformedChunkError,
    InvalidResolutionError,
)
from .models import Chunk, ResolutionUnit, PhysicalResolution, PngMetadata, MetadataUpdate
from .utils import extract_chunks, encode_chunks, text_encode, text_decode, text_decode_chunk
from .services import (
    read_metadata,
    insert_metadata,
    write_metadata,
    read_metadata_file,
    list_chunks_file,
    write_metadata_file,
)

__all__ = [
    "PngMetadataError",
    "InvalidHeaderError",
    "LineEndingCorruptionError",
    "MissingIHDRError",
    "TruncatedFileError",
    "ChecksumMismatchError",
    "InvalidCharacterError",
    "InvalidKeywordError",
    "KeywordTooLongError",
    "InvalidChunkTypeError",
    "MalformedChunkError",
    "InvalidResolutionError",
    "Chunk",
    "ResolutionUnit",
    "PhysicalResolution",
    "PngMetadata",
    "MetadataUpdate",
    "extract_chunks",
    "encode_chunks",
    "text_encode",
    "text_decode",
    "text_decode_chunk",
    "read_metadata",
    "insert_metadata",
    "write_metadata",
    "read_metadata_file",
    "list_chunks_file",
    "write_metadata_file",
]
