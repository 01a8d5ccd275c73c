"""
SQLAlchemy models for the application.
All database models inherit from Base (declarative base).
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.sql import func
from photogallery.database import Base


class Gallery(Base):
    """
    Gallery model.
    A uniquely slugged container for an ordered set of photos.
    """
    __tablename__ = "galleries"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Gallery(id={self.id}, slug={self.slug})>"


class Photo(Base):
    """
    Gallery photo model.
    Stores the image URL, optional metadata and its position within the gallery.
    """
    __tablename__ = "gallery_photos"
    __table_args__ = (
        Index("ix_gallery_photos_gallery_id_order", "gallery_id", "order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    gallery_id = Column(
        Integer,
        ForeignKey("galleries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url = Column(String(2048), nullable=False)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, gallery_id={self.gallery_id}, order={self.order})>"
