"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that the crackers and
orders repository interfaces extend.  Service-layer code depends on this
abstraction, never on Django ORM directly.

Missing entities are reported as ``None`` / ``False`` (Null Object style);
translating them into ``NotFound`` errors is the service layer's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, Protocol, TypeVar

from django.db import models

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Queryable(Protocol[T_co]):
    def filter(self, **kwargs: Any) -> models.QuerySet: ...

    def count(self) -> int: ...


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the entity managed by the repository
    (``Cracker`` or ``Order``).
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Queryable[T]:
        """List entities with optional filters (lazy, paginated by the caller)."""

    @abstractmethod
    def update(self, id: str, data: Dict[str, Any]) -> Optional[T]:
        """Apply a partial update atomically; ``None`` if the entity is gone."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Hard-delete an entity by ID; ``False`` if nothing was deleted."""
