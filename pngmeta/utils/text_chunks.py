"""Encoding and decoding of tEXt chunk payloads.

A tEXt payload is ``keyword 0x00 text``, both Latin-1, with a keyword of
1-79 characters and no NUL byte anywhere else.
"""

import logging
from typing import Tuple

from ..errors import InvalidCharacterError, InvalidKeywordError, KeywordTooLongError
from ..models.chunk import Chunk

logger = logging.getLogger(__name__)

MAX_KEYWORD_LENGTH = 79


def _is_latin1(value: str) -> bool:
    return all(ord(ch) <= 0xFF for ch in value)


def text_encode(keyword: str, text: str, chunk_type: str = "tEXt") -> Chunk:
    """
    Build a text chunk for a keyword/text pair.

    Raises InvalidCharacterError for characters outside Latin-1 or an embedded
    NUL, InvalidKeywordError for an empty keyword and KeywordTooLongError for
    keywords of 80 characters or more.
    """
    keyword = str(keyword)
    text = str(text)

    if not _is_latin1(keyword) or not _is_latin1(text):
        raise InvalidCharacterError(
            "Only Latin-1 characters are permitted in PNG tEXt chunks. "
            "You might want to consider base64 encoding and/or zTXt compression"
        )

    if not keyword:
        raise InvalidKeywordError("tEXt keyword must be 1-79 characters, got an empty keyword")
    if len(keyword) > MAX_KEYWORD_LENGTH:
        raise KeywordTooLongError(keyword)

    if "\x00" in keyword:
        raise InvalidCharacterError("0x00 character is not permitted in tEXt keywords")
    if "\x00" in text:
        raise InvalidCharacterError("0x00 character is not permitted in tEXt content")

    payload = keyword.encode("latin-1") + b"\x00" + text.encode("latin-1")
    logger.debug(f"Encoded {chunk_type} chunk {keyword!r} ({len(payload)} bytes)")
    return Chunk(chunk_type, payload)


def text_decode(payload: bytes) -> Tuple[str, str]:
    """
    Split a tEXt payload into ``(keyword, text)``.

    The first NUL separates keyword from text; a payload without one decodes
    to the whole payload as keyword and an empty text.
    """
    keyword, sep, text = bytes(payload).partition(b"\x00")
    if sep and b"\x00" in text:
        raise InvalidCharacterError(
            "Invalid NULL character found. 0x00 character is not permitted in tEXt content"
        )
    # Latin-1 maps every byte to the code point of the same value
    return keyword.decode("latin-1"), text.decode("latin-1")


def text_decode_chunk(chunk: Chunk) -> Tuple[str, str]:
    """Decode the payload of a text chunk."""
    return text_decode(chunk.payload)
