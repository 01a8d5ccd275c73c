"""
Order assignment for photos within a gallery.
Single inserts continue after the gallery's highest order; batch inserts number from their own positions.
"""
from typing import List, Sequence, Tuple
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from photogallery.models import Gallery, Photo
from photogallery.schemas import PhotoCreate

logger = logging.getLogger(__name__)


class OrderAssigner:
    """Computes order positions for new photos."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def lock_gallery(self, gallery_id: int) -> None:
        """
        Take a row lock on the gallery until the current transaction ends.

        Serializes next_order and the following insert per gallery so two
        concurrent single inserts cannot read the same maximum. SQLite has no
        row locks but already serializes writers.
        """
        await self.session.execute(
            select(Gallery.id).where(Gallery.id == gallery_id).with_for_update()
        )

    async def next_order(self, gallery_id: int) -> int:
        """Return max(order) + 1 over the gallery's photos, or 0 for an empty gallery."""
        result = await self.session.execute(
            select(func.max(Photo.order)).where(Photo.gallery_id == gallery_id)
        )
        max_order = result.scalar()
        next_value = 0 if max_order is None else max_order + 1
        logger.debug(f"Next order for gallery {gallery_id}: {next_value}")
        return next_value

    @staticmethod
    def assign_batch_orders(items: Sequence[Tuple[int, PhotoCreate]]) -> List[int]:
        """
        Resolve the order of each validated batch item.

        Args:
            items: (submitted index, photo) pairs

        Returns:
            List[int]: the supplied order, or the submitted index when none was given
        """
        return [
            photo.order if photo.order is not None else index
            for index, photo in items
        ]
