"""PNG chunk record."""

from dataclasses import dataclass

from ..errors import InvalidChunkTypeError


@dataclass
class Chunk:
    """A named binary record inside a PNG file.

    ``type`` is kept as a 4-character string (e.g. ``"IHDR"``); ``payload``
    is always an independent ``bytes`` object.
    """

    type: str
    payload: bytes = b""

    def __post_init__(self):
        if isinstance(self.type, (bytes, bytearray)):
            self.type = bytes(self.type).decode("latin-1")
        if not isinstance(self.type, str) or len(self.type) != 4:
            raise InvalidChunkTypeError(f"Chunk type must be exactly 4 characters, got {self.type!r}")
        try:
            self.type.encode("latin-1")
        except UnicodeEncodeError:
            raise InvalidChunkTypeError(f"Chunk type {self.type!r} is not Latin-1") from None
        self.payload = bytes(self.payload)

    @property
    def type_bytes(self) -> bytes:
        """The four raw type bytes as stored in the file."""
        return self.type.encode("latin-1")

    @property
    def length(self) -> int:
        return len(self.payload)
