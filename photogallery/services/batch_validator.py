"""
Per-item validation of photo candidates.
Splits raw input into valid photos and per-index errors; items never affect each other.
"""
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from photogallery.exceptions import ValidationError
from photogallery.schemas import FieldError, PhotoCreate, PhotoItemError


@dataclass
class BatchValidation:
    """Partition of a batch. Both sides keep the submitted index."""
    valid: List[Tuple[int, PhotoCreate]] = field(default_factory=list)
    invalid: List[PhotoItemError] = field(default_factory=list)


def format_errors(exc: PydanticValidationError) -> List[FieldError]:
    """Flatten pydantic errors into field/message pairs."""
    errors = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        errors.append(FieldError(field=loc, message=error["msg"], type=error["type"]))
    return errors


class BatchValidator:
    """Validates photo candidates against PhotoCreate."""

    def validate(self, raw_items: Sequence[Any]) -> BatchValidation:
        result = BatchValidation()
        for index, raw_item in enumerate(raw_items):
            try:
                photo = PhotoCreate.model_validate(raw_item)
            except PydanticValidationError as e:
                result.invalid.append(PhotoItemError(index=index, errors=format_errors(e)))
            else:
                result.valid.append((index, photo))
        return result

    def validate_one(self, raw_item: Any) -> PhotoCreate:
        """
        Validate a single photo candidate.

        Raises:
            ValidationError: with the field-level errors of the item
        """
        try:
            return PhotoCreate.model_validate(raw_item)
        except PydanticValidationError as e:
            raise ValidationError(
                "Validation error",
                detail=[err.model_dump() for err in format_errors(e)],
            )
