"""
Pydantic schemas for request and response data validation.
Wire format uses camelCase field names; input accepts camelCase or snake_case.
"""
from pydantic import AfterValidator, AnyUrl, BaseModel, ConfigDict, Field, StringConstraints, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Annotated, List, Optional

SLUG_PATTERN = r"^[a-z0-9-]+$"
# Largest value an INTEGER column holds on every supported backend
MAX_INT_COLUMN = 2**31 - 1

_any_url = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    """Accept only well-formed absolute URLs, keeping the caller's spelling."""
    try:
        _any_url.validate_python(value)
    except PydanticValidationError:
        raise ValueError("Must be a valid URL")
    return value


UrlString = Annotated[str, StringConstraints(strict=True), AfterValidator(_check_url)]
OptionalText = Optional[Annotated[str, StringConstraints(strict=True)]]


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class GalleryCreate(CamelModel):
    """
    Request schema for creating a gallery.
    Used by POST /api/galleries.
    """
    title: Annotated[str, StringConstraints(strict=True, min_length=3)]
    slug: Annotated[str, StringConstraints(strict=True, min_length=3, pattern=SLUG_PATTERN)]
    description: OptionalText = None
    is_published: Optional[Annotated[bool, Field(strict=True)]] = None


class PhotoCreate(CamelModel):
    """
    Request schema for a single photo candidate.
    Used by POST /api/galleries/{id}/photos, alone or as an array element.
    """
    url: UrlString
    title: OptionalText = None
    description: OptionalText = None
    order: Optional[Annotated[int, Field(strict=True, ge=0, le=MAX_INT_COLUMN)]] = None


class GalleryResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    description: Optional[str] = None
    is_published: bool
    created_at: datetime


class PhotoResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    gallery_id: int
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    order: int
    created_at: datetime


class GallerySummaryResponse(GalleryResponse):
    """
    Gallery listing entry.
    Adds the number of photos and a preview of the first photo by order.
    """
    photo_count: int = 0
    first_photo: Optional[PhotoResponse] = None


class FieldError(BaseModel):
    field: str
    message: str
    type: str


class PhotoItemError(BaseModel):
    """Validation errors of one array element, keyed by its submitted index."""
    index: int
    errors: List[FieldError]


class PhotoBatchResponse(BaseModel):
    """
    Response for array photo submissions.
    Created photos in submitted order plus the rejected items by index.
    """
    created: List[PhotoResponse]
    errors: List[PhotoItemError] = []


class LoginRequest(BaseModel):
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
