"""Exceptions raised while reading or writing PNG metadata."""

from typing import Optional


class PngMetadataError(ValueError):
    """Base class for every PNG metadata failure."""


class InvalidHeaderError(PngMetadataError):
    """The first 8 bytes are not the PNG signature."""

    def __init__(self, message: str = "Invalid .png file header"):
        super().__init__(message)


class LineEndingCorruptionError(InvalidHeaderError):
    """Signature bytes 4, 5 or 7 are wrong, usually from a text-mode transfer."""

    def __init__(self, message: str = (
        "Invalid .png file header: possibly caused by DOS-Unix line ending conversion?"
    )):
        super().__init__(message)


class MissingIHDRError(PngMetadataError):
    """The first chunk is not IHDR."""

    def __init__(self, found: Optional[str] = None):
        message = "IHDR header missing"
        if found is not None:
            message += f" (first chunk is {found!r})"
        super().__init__(message)
        self.found = found


class TruncatedFileError(PngMetadataError):
    """The data ended before an IEND chunk was seen."""

    def __init__(self, message: str = ".png file ended prematurely: no IEND header was found"):
        super().__init__(message)


class ChecksumMismatchError(PngMetadataError):
    """The stored CRC of a chunk does not match its contents."""

    def __init__(self, chunk_type: str):
        super().__init__(
            f"CRC values for {chunk_type} header do not match, PNG file is likely corrupted"
        )
        self.chunk_type = chunk_type


class InvalidCharacterError(PngMetadataError):
    """Text contains a NUL byte or a character outside Latin-1."""


class InvalidKeywordError(PngMetadataError):
    """A tEXt keyword is empty or too long."""


class KeywordTooLongError(InvalidKeywordError):
    """A tEXt keyword is 80 characters or longer."""

    def __init__(self, keyword: str):
        super().__init__(
            f'Keyword "{keyword}" is longer than the 79-character limit imposed by the PNG specification'
        )
        self.keyword = keyword


class InvalidChunkTypeError(PngMetadataError):
    """A chunk type is not exactly four Latin-1 characters."""


class MalformedChunkError(PngMetadataError):
    """An interpreted chunk has a payload of the wrong shape."""


class InvalidResolutionError(PngMetadataError):
    """A physical resolution value does not fit the pHYs field sizes."""
