"""Metadata services."""

from .metadata import read_metadata, insert_metadata, write_metadata
from .files import read_metadata_file, list_chunks_file, write_metadata_file

__all__ = [
    'read_metadata',
    'insert_metadata',
    'write_metadata',
    'read_metadata_file',
    'list_chunks_file',
    'write_metadata_file',
]
