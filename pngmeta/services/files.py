"""PNG metadata operations on files."""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from ..models import Chunk, MetadataUpdate, PngMetadata
from ..utils.png_chunks import extract_chunks
from .metadata import read_metadata, write_metadata

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_metadata_file(path: PathLike) -> PngMetadata:
    """Read the metadata record of a PNG file on disk."""
    path = Path(path)
    metadata = read_metadata(path.read_bytes())
    logger.info(f"Read metadata from {path}")
    return metadata


def list_chunks_file(path: PathLike) -> List[Chunk]:
    """Return the validated chunk list of a PNG file on disk."""
    return extract_chunks(Path(path).read_bytes())


def write_metadata_file(path: PathLike, update: MetadataUpdate,
                        output: Optional[PathLike] = None) -> Path:
    """
    Apply ``update`` to the PNG at ``path`` and write the result.

    The result goes to ``output`` when given, otherwise it replaces ``path``.
    The target is written through a temporary file in the same directory and
    swapped in with a single rename, so it is never left half-written.
    """
    path = Path(path)
    target = Path(output) if output is not None else path

    new_data = write_metadata(path.read_bytes(), update)

    fd, temp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(new_data)
        if target.exists():
            os.chmod(temp_name, target.stat().st_mode & 0o7777)
        Path(temp_name).replace(target)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise

    logger.info(f"Wrote metadata to {target} ({len(new_data)} bytes)")
    return target
