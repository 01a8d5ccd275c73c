"""
Gallery registry: creation with slug uniqueness, lookup and listings.
"""
from dataclasses import dataclass
from typing import Any, List, Optional
import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photogallery.exceptions import ConflictError, InternalError, NotFoundError, ValidationError
from photogallery.models import Gallery, Photo
from photogallery.schemas import GalleryCreate
from photogallery.services.batch_validator import format_errors

logger = logging.getLogger(__name__)


@dataclass
class GallerySummary:
    """Listing projection of a gallery."""
    gallery: Gallery
    photo_count: int
    first_photo: Optional[Photo]


class GalleryRegistry:
    """Owns gallery identity."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payload: Any) -> Gallery:
        """
        Create a new gallery.

        Args:
            payload: raw {title, slug, description?, isPublished?} mapping

        Returns:
            Gallery: persisted gallery with id and created_at

        Raises:
            ValidationError: if any field is invalid (every violated field is listed)
            ConflictError: if the slug is already taken
            InternalError: on storage failure
        """
        try:
            data = GalleryCreate.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(
                "Validation error",
                detail=[err.model_dump() for err in format_errors(e)],
            )

        try:
            existing = await self.session.execute(
                select(Gallery.id).where(Gallery.slug == data.slug)
            )
            if existing.scalar_one_or_none() is not None:
                raise ConflictError(f"Gallery with slug '{data.slug}' already exists")

            gallery = Gallery(
                title=data.title,
                slug=data.slug,
                description=data.description,
                is_published=True if data.is_published is None else data.is_published,
            )
            self.session.add(gallery)
            await self.session.commit()
            await self.session.refresh(gallery)
        except IntegrityError as e:
            # Unique index caught a concurrent creation with the same slug
            await self.session.rollback()
            logger.warning(f"Slug conflict on insert for '{data.slug}': {str(e)}")
            raise ConflictError(f"Gallery with slug '{data.slug}' already exists")
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating gallery '{data.slug}': {str(e)}", exc_info=True)
            raise InternalError("Failed to create gallery")

        logger.info(f"Created gallery: ID {gallery.id}, slug={gallery.slug}")
        return gallery

    async def get_by_id(self, gallery_id: int) -> Gallery:
        """Get gallery by ID, raising NotFoundError if absent."""
        try:
            result = await self.session.execute(
                select(Gallery).where(Gallery.id == gallery_id)
            )
            gallery = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching gallery {gallery_id}: {str(e)}", exc_info=True)
            raise InternalError("Failed to retrieve gallery")

        if gallery is None:
            raise NotFoundError("Gallery not found", detail=f"Gallery ID {gallery_id} does not exist")
        return gallery

    async def list_all(self) -> List[GallerySummary]:
        """
        List galleries, newest first.
        Each entry carries its photo count and the photo with the lowest order.
        """
        photo_counts = (
            select(Photo.gallery_id, func.count(Photo.id).label("photo_count"))
            .group_by(Photo.gallery_id)
            .subquery()
        )
        ranked = (
            select(
                Photo.id,
                func.row_number().over(
                    partition_by=Photo.gallery_id,
                    order_by=(Photo.order.asc(), Photo.id.asc()),
                ).label("position"),
            )
            .subquery()
        )

        try:
            rows = (await self.session.execute(
                select(Gallery, func.coalesce(photo_counts.c.photo_count, 0))
                .outerjoin(photo_counts, photo_counts.c.gallery_id == Gallery.id)
                .order_by(Gallery.created_at.desc(), Gallery.id.desc())
            )).all()

            first_photos_result = await self.session.execute(
                select(Photo)
                .join(ranked, ranked.c.id == Photo.id)
                .where(ranked.c.position == 1)
            )
            first_photos = {photo.gallery_id: photo for photo in first_photos_result.scalars().all()}
        except SQLAlchemyError as e:
            logger.error(f"Error listing galleries: {str(e)}", exc_info=True)
            raise InternalError("Failed to retrieve galleries")

        logger.info(f"Retrieved {len(rows)} galleries")
        return [
            GallerySummary(gallery=gallery, photo_count=count, first_photo=first_photos.get(gallery.id))
            for gallery, count in rows
        ]

    async def list_photos(self, gallery_id: int) -> List[Photo]:
        """List a gallery's photos by ascending order."""
        await self.get_by_id(gallery_id)

        try:
            result = await self.session.execute(
                select(Photo)
                .where(Photo.gallery_id == gallery_id)
                .order_by(Photo.order.asc(), Photo.id.asc())
            )
            photos = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing photos of gallery {gallery_id}: {str(e)}", exc_info=True)
            raise InternalError("Failed to retrieve photos")

        logger.info(f"Retrieved {len(photos)} photos for gallery {gallery_id}")
        return photos
