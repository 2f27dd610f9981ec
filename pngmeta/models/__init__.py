"""Data models package."""

from .chunk import Chunk
from .metadata import ResolutionUnit, PhysicalResolution, PngMetadata, MetadataUpdate

__all__ = ['Chunk', 'ResolutionUnit', 'PhysicalResolution', 'PngMetadata', 'MetadataUpdate']
