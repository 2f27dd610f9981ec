"""Metadata records read from and written to PNG files."""

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Dict, Any, Union

from ..errors import InvalidResolutionError, MalformedChunkError

U32_MAX = 0xFFFFFFFF

# Pixels per unit X, pixels per unit Y, unit specifier
_PHYS_FORMAT = ">IIB"
PHYS_PAYLOAD_SIZE = struct.calcsize(_PHYS_FORMAT)


class ResolutionUnit(IntEnum):
    """Unit specifier stored in a pHYs chunk."""
    UNDEFINED = 0
    METERS = 1
    INCHES = 2


@dataclass
class PhysicalResolution:
    """Pixels per unit along each axis, as stored in a pHYs chunk."""

    x: int
    y: int
    unit: Union[ResolutionUnit, int] = ResolutionUnit.UNDEFINED

    def __post_init__(self):
        for axis in ("x", "y"):
            value = getattr(self, axis)
            if not isinstance(value, int) or not 0 <= value <= U32_MAX:
                raise InvalidResolutionError(
                    f"pHYs {axis} must be an unsigned 32-bit integer, got {value!r}"
                )
        if not isinstance(self.unit, int) or not 0 <= self.unit <= 0xFF:
            raise InvalidResolutionError(f"pHYs unit must fit in one byte, got {self.unit!r}")
        try:
            self.unit = ResolutionUnit(self.unit)
        except ValueError:
            # Unknown unit bytes are kept as plain ints
            self.unit = int(self.unit)

    def to_payload(self) -> bytes:
        """Build the 9-byte pHYs payload."""
        return struct.pack(_PHYS_FORMAT, self.x, self.y, int(self.unit))

    @classmethod
    def from_payload(cls, payload: bytes) -> 'PhysicalResolution':
        """Parse a pHYs payload. Bytes past the ninth are ignored."""
        if len(payload) < PHYS_PAYLOAD_SIZE:
            raise MalformedChunkError(
                f"pHYs chunk payload is {len(payload)} bytes, expected {PHYS_PAYLOAD_SIZE}"
            )
        x, y, unit = struct.unpack_from(_PHYS_FORMAT, payload, 0)
        return cls(x=x, y=y, unit=unit)

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "unit": int(self.unit)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PhysicalResolution':
        if not isinstance(data, dict):
            raise InvalidResolutionError(f"pHYs must be a mapping with x, y and unit, got {data!r}")
        missing = [key for key in ("x", "y") if key not in data]
        if missing:
            raise InvalidResolutionError(f"pHYs is missing {', '.join(missing)}")
        return cls(x=data["x"], y=data["y"], unit=data.get("unit", ResolutionUnit.UNDEFINED))


@dataclass
class PngMetadata:
    """Metadata found in a PNG file.

    ``text`` holds every tEXt entry (the last chunk wins for a repeated
    keyword), ``physical`` the last pHYs chunk, and ``chunks`` a presence
    flag for every other chunk type.
    """

    text: Optional[Dict[str, str]] = None
    physical: Optional[PhysicalResolution] = None
    chunks: Dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "tEXt": dict(self.text) if self.text is not None else None,
            "pHYs": self.physical.to_dict() if self.physical else None,
            "chunks": dict(self.chunks),
        }


@dataclass
class MetadataUpdate:
    """Changes to apply to a PNG file.

    When ``clear`` is set every chunk except IHDR, IDAT and IEND is removed
    before the new entries are inserted.
    """

    text: Optional[Dict[str, str]] = None
    physical: Optional[PhysicalResolution] = None
    clear: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MetadataUpdate':
        """Create from a mapping shaped like ``PngMetadata.to_dict()`` plus ``clear``."""
        text = data.get("tEXt")
        physical = data.get("pHYs")
        clear = data.get("clear", False)
        if text is not None and not isinstance(text, dict):
            raise ValueError("tEXt must be a mapping of keyword to text")
        if text is not None and any(k is None or v is None for k, v in text.items()):
            raise ValueError("tEXt keywords and values must not be null")
        if not isinstance(clear, bool):
            raise ValueError(f"clear must be true or false, got {clear!r}")
        return cls(
            text={str(k): str(v) for k, v in text.items()} if text is not None else None,
            physical=PhysicalResolution.from_dict(physical) if physical is not None else None,
            clear=clear,
        )

    @classmethod
    def from_metadata(cls, metadata: PngMetadata, clear: bool = False) -> 'MetadataUpdate':
        """Build an update that writes back what was read from another file."""
        return cls(
            text=dict(metadata.text) if metadata.text is not None else None,
            physical=metadata.physical,
            clear=clear,
        )
