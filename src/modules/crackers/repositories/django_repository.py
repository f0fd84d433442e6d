"""Django ORM implementation of the Cracker repository.

Satisfies ``ICrackerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None`` /
``False`` instead of raising for missing rows — the Service Layer decides
how to translate a missing entity.  Store failures (``DatabaseError``)
propagate unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.crackers.models import Cracker
from modules.crackers.repositories.interfaces import ICrackerRepository

logger = structlog.get_logger(__name__)


class CrackerDjangoRepository(ICrackerRepository):
    """Concrete Cracker repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Cracker]:
        """Retrieve an entry by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Cracker.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Cracker]":
        """List entries with optional Django ORM look-ups.

        Examples of valid filters::

            {"is_active": True}
            {"category__iexact": "sparklers"}
        """
        queryset = Cracker.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Cracker) -> Cracker:
        """Persist (create or update) an entry."""
        entity.save()
        logger.info(
            "cracker.saved",
            cracker_id=str(entity.id),
            has_image=entity.has_image,
        )
        return entity

    @transaction.atomic
    def update(self, id: str, data: Dict[str, Any]) -> Optional[Cracker]:
        """Partial update using ``select_for_update`` for a single-row write."""
        try:
            cracker = Cracker.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        if not cracker:
            return None

        for field, value in data.items():
            setattr(cracker, field, value)
        cracker.save(update_fields=list(data))

        logger.info("cracker.fields_updated", cracker_id=str(id), fields=sorted(data))
        return cracker

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete an entry by ID.

        Returns ``True`` if a row was deleted, ``False`` otherwise.
        """
        try:
            deleted, _ = Cracker.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            return False
        if deleted:
            logger.info("cracker.deleted", cracker_id=str(id))
        return deleted > 0
