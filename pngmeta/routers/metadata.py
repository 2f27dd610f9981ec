"""Metadata router for reading and rewriting PNG metadata."""

import base64
import binascii
import logging
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from ..errors import PngMetadataError
from ..models import MetadataUpdate, PhysicalResolution, ResolutionUnit
from ..models.metadata import U32_MAX
from ..services.metadata import read_metadata, write_metadata
from ..utils.png_chunks import extract_chunks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/metadata")


class PhysicalResolutionBody(BaseModel):
    x: int = Field(ge=0, le=U32_MAX, description="Pixels per unit, X axis")
    y: int = Field(ge=0, le=U32_MAX, description="Pixels per unit, Y axis")
    unit: int = Field(default=ResolutionUnit.UNDEFINED, ge=0, le=0xFF,
                      description="0 = undefined, 1 = meters, 2 = inches")


class WriteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image: str = Field(description="Base64-encoded PNG file")
    text: Optional[Dict[str, str]] = Field(default=None, alias="tEXt")
    physical: Optional[PhysicalResolutionBody] = Field(default=None, alias="pHYs")
    clear: bool = Field(default=False, description="Remove ancillary chunks before writing")


def _check_size(req: Request, size: int) -> None:
    limit = req.app.state.settings.max_upload_bytes
    if size > limit:
        raise HTTPException(413, f"PNG is {size} bytes, limit is {limit}")


@router.post("/read")
async def read_png_metadata(req: Request):
    """
    Read tEXt/pHYs metadata from a PNG.
    Body: raw PNG bytes.
    """
    data = await req.body()
    _check_size(req, len(data))

    try:
        metadata = read_metadata(data)
    except PngMetadataError as e:
        logger.info(f"Rejected PNG on read: {e}")
        raise HTTPException(400, str(e))

    return metadata.to_dict()


@router.post("/chunks")
async def list_png_chunks(req: Request):
    """
    List the chunks of a PNG in file order.
    Body: raw PNG bytes.
    """
    data = await req.body()
    _check_size(req, len(data))

    try:
        chunks = extract_chunks(data)
    except PngMetadataError as e:
        logger.info(f"Rejected PNG on chunk listing: {e}")
        raise HTTPException(400, str(e))

    return {"chunks": [{"type": c.type, "length": c.length} for c in chunks]}


@router.post("/write")
async def write_png_metadata(body: WriteRequest, req: Request):
    """
    Rewrite a PNG with new metadata and return the new file.
    JSON body: { "image": "<base64>", "tEXt": {...}, "pHYs": {"x", "y", "unit"}, "clear": false }
    """
    try:
        data = base64.b64decode(body.image, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(400, "image must be base64-encoded")
    _check_size(req, len(data))

    update = MetadataUpdate(
        text=body.text,
        physical=PhysicalResolution(**body.physical.model_dump()) if body.physical else None,
        clear=body.clear,
    )

    try:
        output = write_metadata(data, update)
    except PngMetadataError as e:
        logger.info(f"Rejected metadata write: {e}")
        raise HTTPException(400, str(e))

    return Response(content=output, media_type="image/png")
