"""Cracker DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``).  Field aliases are the camelCase names used
on the wire (``englishName``, ``originalRate``, ``status`` ...), so a
request body validates directly; snake_case names are accepted too.

- ``CreateCrackerDTO``: input for catalog entry creation.
- ``UpdateCrackerDTO``: input for partial updates.
- ``ImageUploadDTO``: an uploaded image, validated before any remote call.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.crackers.constants import ALLOWED_IMAGE_CONTENT_TYPES, MAX_IMAGE_BYTES


def _require_text(v: str) -> str:
    if not v:
        raise ValueError("Field must not be empty.")
    return v


def _require_non_negative(v: Decimal) -> Decimal:
    if v < 0:
        raise ValueError("Rate cannot be negative.")
    return v


def _check_content_type(v: str) -> str:
    normalised = (v or "").lower()
    if normalised not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise ValueError("Only image files are allowed (jpeg, png, webp, gif)")
    return normalised


def _check_size(v: int) -> int:
    if v > MAX_IMAGE_BYTES:
        raise ValueError("File size should not exceed 5 MB")
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateCrackerDTO(BaseModel):
    """Immutable DTO for catalog entry creation.

    Validates:
    - names and category are non-empty strings.
    - both rates coerce to a non-negative ``Decimal``.
    - ``is_active`` defaults to ``True`` when omitted.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, str_strip_whitespace=True
    )

    english_name: str = Field(alias="englishName", max_length=255)
    tamil_name: str = Field(alias="tamilName", max_length=255)
    original_rate: Decimal = Field(
        alias="originalRate", max_digits=10, decimal_places=2
    )
    discount_rate: Decimal = Field(
        alias="discountRate", max_digits=10, decimal_places=2
    )
    category: str = Field(max_length=100)
    is_active: bool = Field(default=True, alias="status")

    @field_validator("english_name", "tamil_name", "category")
    @classmethod
    def text_must_not_be_empty(cls, v: str) -> str:
        return _require_text(v)

    @field_validator("original_rate", "discount_rate")
    @classmethod
    def rate_must_be_non_negative(cls, v: Decimal) -> Decimal:
        return _require_non_negative(v)


class UpdateCrackerDTO(BaseModel):
    """Immutable DTO for partial updates.

    All fields are optional — only supplied fields will be updated.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, str_strip_whitespace=True
    )

    english_name: Optional[str] = Field(
        default=None, alias="englishName", max_length=255
    )
    tamil_name: Optional[str] = Field(default=None, alias="tamilName", max_length=255)
    original_rate: Optional[Decimal] = Field(
        default=None, alias="originalRate", max_digits=10, decimal_places=2
    )
    discount_rate: Optional[Decimal] = Field(
        default=None, alias="discountRate", max_digits=10, decimal_places=2
    )
    category: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = Field(default=None, alias="status")

    @field_validator("english_name", "tamil_name", "category")
    @classmethod
    def text_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _require_text(v)

    @field_validator("original_rate", "discount_rate")
    @classmethod
    def rate_must_be_non_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return v if v is None else _require_non_negative(v)

    def changes(self) -> dict[str, Any]:
        """Model field -> value for every supplied field."""
        return self.model_dump(exclude_none=True)


class ImageUploadDTO(BaseModel):
    """An uploaded image (multipart ``image`` field)."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content_type: str
    size: int
    content: bytes

    @field_validator("content_type")
    @classmethod
    def content_type_must_be_allowed(cls, v: str) -> str:
        return _check_content_type(v)

    @field_validator("size")
    @classmethod
    def size_must_not_exceed_limit(cls, v: int) -> int:
        return _check_size(v)

    @classmethod
    def from_upload(cls, upload: Any) -> ImageUploadDTO:
        """Build from a Django ``UploadedFile``.

        Raises ``ValueError`` for a disallowed type or an oversized file
        before the body is read.
        """
        _check_content_type(upload.content_type)
        _check_size(upload.size)
        return cls(
            filename=upload.name or "image",
            content_type=upload.content_type,
            size=upload.size,
            content=upload.read(),
        )
