"""
Photo ingestion: single photos and batches.

A batch is validated item by item. Invalid items are reported by their
submitted index and never block valid ones; all valid items are then
committed in one transaction, so either every one of them is stored or
none is.
"""
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Union
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photogallery.exceptions import InternalError, ValidationError
from photogallery.models import Photo
from photogallery.schemas import PhotoItemError
from photogallery.services.batch_validator import BatchValidator
from photogallery.services.gallery_registry import GalleryRegistry
from photogallery.services.order_assigner import OrderAssigner

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Created photos in submitted order alongside per-index validation errors."""
    created: List[Photo] = field(default_factory=list)
    errors: List[PhotoItemError] = field(default_factory=list)


class PhotoIngester:
    """Turns one add-photo request into persisted photos."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.registry = GalleryRegistry(session)
        self.order_assigner = OrderAssigner(session)
        self.validator = BatchValidator()

    async def ingest(self, gallery_id: int, body: Any) -> Union[Photo, BatchResult]:
        """Dispatch a request body: arrays are batches, anything else a single photo."""
        if isinstance(body, list):
            return await self.add_many(gallery_id, body)
        return await self.add_one(gallery_id, body)

    async def add_one(self, gallery_id: int, raw_item: Any) -> Photo:
        """
        Add a single photo.

        Without an explicit order the photo goes after the gallery's
        current last photo.

        Raises:
            NotFoundError: if the gallery does not exist
            ValidationError: if the item is malformed (nothing is written)
            InternalError: on storage failure
        """
        await self.registry.get_by_id(gallery_id)
        data = self.validator.validate_one(raw_item)

        try:
            order = data.order
            if order is None:
                await self.order_assigner.lock_gallery(gallery_id)
                order = await self.order_assigner.next_order(gallery_id)

            photo = Photo(
                gallery_id=gallery_id,
                url=data.url,
                title=data.title,
                description=data.description,
                order=order,
            )
            self.session.add(photo)
            await self.session.commit()
            await self.session.refresh(photo)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error adding photo to gallery {gallery_id}: {str(e)}", exc_info=True)
            raise InternalError("Failed to add photo")

        logger.info(f"Added photo to gallery {gallery_id}: ID {photo.id}, order={photo.order}")
        return photo

    async def add_many(self, gallery_id: int, raw_items: Sequence[Any]) -> BatchResult:
        """
        Add a batch of photos.

        Raises:
            NotFoundError: if the gallery does not exist
            ValidationError: if no item is valid (detail carries every item's errors)
            InternalError: on storage failure, after rolling back the whole batch
        """
        await self.registry.get_by_id(gallery_id)

        validation = self.validator.validate(raw_items)
        if not validation.valid:
            raise ValidationError(
                "All photos have invalid data",
                detail=[item_error.model_dump() for item_error in validation.invalid],
            )

        orders = self.order_assigner.assign_batch_orders(validation.valid)
        photos = [
            Photo(
                gallery_id=gallery_id,
                url=data.url,
                title=data.title,
                description=data.description,
                order=order,
            )
            for (_, data), order in zip(validation.valid, orders)
        ]

        try:
            self.session.add_all(photos)
            await self.session.flush()
            for photo in photos:
                await self.session.refresh(photo)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                f"Error committing {len(photos)} photos to gallery {gallery_id}, batch rolled back: {str(e)}",
                exc_info=True
            )
            raise InternalError("Failed to add photos")

        if validation.invalid:
            logger.warning(
                f"Partial batch for gallery {gallery_id}: "
                f"{len(photos)} created, {len(validation.invalid)} rejected"
            )
        logger.info(f"Added {len(photos)} photo(s) to gallery {gallery_id}")

        return BatchResult(created=photos, errors=validation.invalid)
