"""Cracker repository interface.

Extends ``IRepository[Cracker]``; the catalog service depends exclusively on
this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.crackers.models import Cracker


class ICrackerRepository(IRepository["Cracker"]):
    """Repository contract for catalog entries."""

    @abstractmethod
    def save(self, entity: Cracker) -> Cracker:
        """Insert or fully overwrite an entry."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Cracker]":
        """Lazy queryset of catalog entries, newest first."""

    @abstractmethod
    def update(self, id: str, data: Dict[str, Any]) -> Optional[Cracker]:
        """Overwrite the given fields under a row lock.

        Returns the updated entry, or ``None`` if no entry has this id.
        """
