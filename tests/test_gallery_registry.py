import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from photogallery.exceptions import ConflictError, NotFoundError, ValidationError
from photogallery.models import Gallery
from photogallery.services.gallery_registry import GalleryRegistry


async def _gallery_count(db):
    return (await db.execute(select(func.count(Gallery.id)))).scalar()


class TestCreate:
    async def test_creates_gallery(self, db):
        gallery = await GalleryRegistry(db).create({"title": "Summer", "slug": "summer-2024"})

        assert gallery.id is not None
        assert gallery.created_at is not None
        assert gallery.is_published is True
        assert gallery.description is None

    async def test_accepts_camel_case_flag(self, db):
        gallery = await GalleryRegistry(db).create(
            {"title": "Drafts", "slug": "drafts", "isPublished": False, "description": "WIP"}
        )

        assert gallery.is_published is False
        assert gallery.description == "WIP"

    async def test_duplicate_slug_conflicts(self, db):
        registry = GalleryRegistry(db)
        await registry.create({"title": "Summer", "slug": "summer"})

        with pytest.raises(ConflictError):
            await registry.create({"title": "Another summer", "slug": "summer"})

        assert await _gallery_count(db) == 1

    async def test_unique_index_violation_is_conflict(self, db, monkeypatch):
        registry = GalleryRegistry(db)
        await registry.create({"title": "Summer", "slug": "summer"})

        class _NoMatch:
            def scalar_one_or_none(self):
                return None

        async def blind_lookup(self, *args, **kwargs):
            return _NoMatch()

        # Lookup misses the existing row, as in a concurrent creation
        monkeypatch.setattr(AsyncSession, "execute", blind_lookup)
        with pytest.raises(ConflictError):
            await registry.create({"title": "Summer again", "slug": "summer"})
        monkeypatch.undo()

        assert await _gallery_count(db) == 1

    async def test_lists_every_invalid_field(self, db):
        with pytest.raises(ValidationError) as exc_info:
            await GalleryRegistry(db).create({"title": "ab", "slug": "A_"})

        fields = {error["field"] for error in exc_info.value.detail}
        assert fields == {"title", "slug"}
        assert await _gallery_count(db) == 0

    @pytest.mark.parametrize("slug", ["ab", "Abc", "ab_c", "ab c", ""])
    async def test_rejects_slug(self, db, slug):
        with pytest.raises(ValidationError):
            await GalleryRegistry(db).create({"title": "Valid title", "slug": slug})

    @pytest.mark.parametrize("slug", ["a-1", "abc", "2024-summer-trip"])
    async def test_accepts_slug(self, db, slug):
        gallery = await GalleryRegistry(db).create({"title": "Valid title", "slug": slug})
        assert gallery.slug == slug

    async def test_rejects_non_object_payload(self, db):
        with pytest.raises(ValidationError):
            await GalleryRegistry(db).create(["title", "slug"])


class TestLookup:
    async def test_get_by_id(self, db, make_gallery):
        gallery = await make_gallery()
        found = await GalleryRegistry(db).get_by_id(gallery.id)
        assert found.slug == gallery.slug

    async def test_get_by_id_missing(self, db):
        with pytest.raises(NotFoundError):
            await GalleryRegistry(db).get_by_id(404)


class TestListings:
    async def test_list_all_newest_first_with_preview(self, db, make_gallery, make_photo):
        older = await make_gallery(slug="older")
        newer = await make_gallery(slug="newer")
        for order in (3, 1, 2):
            await make_photo(older.id, order, url=f"https://example.com/{order}.jpg")

        summaries = await GalleryRegistry(db).list_all()

        assert [s.gallery.id for s in summaries] == [newer.id, older.id]
        assert summaries[0].photo_count == 0
        assert summaries[0].first_photo is None
        assert summaries[1].photo_count == 3
        assert summaries[1].first_photo.order == 1

    async def test_list_all_is_idempotent(self, db, make_gallery, make_photo):
        gallery = await make_gallery()
        await make_photo(gallery.id, 0)
        registry = GalleryRegistry(db)

        def snapshot(summaries):
            return [(s.gallery.id, s.photo_count, s.first_photo.id) for s in summaries]

        assert snapshot(await registry.list_all()) == snapshot(await registry.list_all())

    async def test_list_photos_ascending(self, db, make_gallery, make_photo):
        gallery = await make_gallery()
        for order in (5, 0, 2):
            await make_photo(gallery.id, order)

        photos = await GalleryRegistry(db).list_photos(gallery.id)
        assert [p.order for p in photos] == [0, 2, 5]

    async def test_list_photos_unknown_gallery(self, db):
        with pytest.raises(NotFoundError):
            await GalleryRegistry(db).list_photos(12)
