"""Cracker model: a catalog entry with an optional remote image.

Rules implemented:
- English and Tamil display names, category and both rates are required.
- Rates cannot be negative.
- ``image_url`` and ``image_public_id`` are set together or both null
  (database check constraint + ``clean()``).
- ``is_active`` defaults to ``True``; inactive entries are hidden from the
  storefront listing (``?onlyActive=true``).
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Cracker(BaseModel):
    """Catalog entry.

    The remote image asset is owned by the entry: it is uploaded with the
    entry, replaced on update and destroyed when the entry is deleted
    (see ``CrackerService``).
    """

    english_name = models.CharField(max_length=255)
    tamil_name = models.CharField(max_length=255)
    original_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    discount_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    category = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True)
    image_url = models.URLField(  # noqa: DJ01
        max_length=500, null=True, blank=True, default=None
    )
    image_public_id = models.CharField(  # noqa: DJ01
        max_length=255, null=True, blank=True, default=None
    )

    class Meta:
        db_table = "crackers"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["is_active"], name="crackers_active_idx"),
            models.Index(fields=["category"], name="crackers_category_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(image_url__isnull=True, image_public_id__isnull=True)
                    | models.Q(image_url__isnull=False, image_public_id__isnull=False)
                ),
                name="crackers_image_reference_paired",
            ),
        ]

    @property
    def has_image(self) -> bool:
        return self.image_public_id is not None

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if (self.image_url is None) != (self.image_public_id is None):
            raise ValidationError(
                "image_url and image_public_id must be set together."
            )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "cracker_created",
                cracker_id=str(self.id),
                english_name=self.english_name,
                category=self.category,
            )

    def __str__(self) -> str:
        return f"{self.english_name} ({self.category})"
