"""
Gallery and photo routes.
Listings are public; creating galleries and adding photos requires authentication.
"""
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, List
import logging

from photogallery.database import get_db
from photogallery.exceptions import NotFoundError, ValidationError
from photogallery.schemas import (
    MAX_INT_COLUMN,
    GalleryResponse,
    GallerySummaryResponse,
    PhotoBatchResponse,
    PhotoResponse,
)
from photogallery.services.gallery_registry import GalleryRegistry
from photogallery.services.photo_ingester import BatchResult, PhotoIngester
from photogallery.utils.jwt_auth import require_authenticated

logger = logging.getLogger(__name__)

router = APIRouter(tags=["galleries"])


def parse_gallery_id(raw_id: str) -> int:
    """
    Parse a gallery ID path segment.

    Raises:
        ValidationError: if the segment is not a decimal integer
        NotFoundError: if the integer is outside the range an ID can take
    """
    digits = raw_id[1:] if raw_id.startswith("-") else raw_id
    if not (digits.isascii() and digits.isdigit()):
        raise ValidationError("Gallery ID must be numeric", detail=f"Invalid gallery ID: {raw_id}")
    gallery_id = int(raw_id)
    if abs(gallery_id) > MAX_INT_COLUMN:
        raise NotFoundError("Gallery not found", detail=f"Gallery ID {raw_id} does not exist")
    return gallery_id


@router.get("/galleries", response_model=List[GallerySummaryResponse])
async def list_galleries(db: AsyncSession = Depends(get_db)):
    """
    Get all galleries, newest first.
    Each gallery carries its photo count and the first photo by order.
    """
    summaries = await GalleryRegistry(db).list_all()
    return [
        GallerySummaryResponse(
            **GalleryResponse.model_validate(summary.gallery).model_dump(),
            photo_count=summary.photo_count,
            first_photo=(
                PhotoResponse.model_validate(summary.first_photo)
                if summary.first_photo is not None else None
            ),
        )
        for summary in summaries
    ]


@router.post("/galleries", response_model=GalleryResponse, status_code=status.HTTP_201_CREATED)
async def create_gallery(
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
    authenticated: bool = Depends(require_authenticated)
):
    """
    Create a gallery.

    Args:
        payload: {title, slug, description?, isPublished?}

    Raises:
        ValidationError: 400 on invalid fields
        ConflictError: 409 if the slug is taken
    """
    gallery = await GalleryRegistry(db).create(payload)
    return GalleryResponse.model_validate(gallery)


@router.get("/galleries/{gallery_id}/photos", response_model=List[PhotoResponse])
async def list_gallery_photos(gallery_id: str, db: AsyncSession = Depends(get_db)):
    """Get a gallery's photos ordered by ascending order."""
    photos = await GalleryRegistry(db).list_photos(parse_gallery_id(gallery_id))
    return [PhotoResponse.model_validate(photo) for photo in photos]


@router.post("/galleries/{gallery_id}/photos", status_code=status.HTTP_201_CREATED)
async def add_gallery_photos(
    gallery_id: str,
    body: Any = Body(None),
    db: AsyncSession = Depends(get_db),
    authenticated: bool = Depends(require_authenticated)
):
    """
    Add one photo or an array of photos to a gallery.

    A single object returns the created photo. An array returns
    {created, errors}: the stored photos in submitted order plus the
    rejected items by index. An array with no valid item is rejected as a whole.
    """
    result = await PhotoIngester(db).ingest(parse_gallery_id(gallery_id), body)

    if isinstance(result, BatchResult):
        content = PhotoBatchResponse(
            created=[PhotoResponse.model_validate(photo) for photo in result.created],
            errors=result.errors,
        )
    else:
        content = PhotoResponse.model_validate(result)

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=content.model_dump(mode="json", by_alias=True),
    )
