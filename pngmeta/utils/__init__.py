"""Binary codecs for PNG chunks."""

from .png_chunks import PNG_SIGNATURE, extract_chunks, encode_chunk, encode_chunks
from .text_chunks import text_encode, text_decode, text_decode_chunk

__all__ = [
    'PNG_SIGNATURE',
    'extract_chunks',
    'encode_chunk',
    'encode_chunks',
    'text_encode',
    'text_decode',
    'text_decode_chunk',
]
