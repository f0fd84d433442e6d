"""Cracker repositories package."""

from modules.crackers.repositories.django_repository import CrackerDjangoRepository
from modules.crackers.repositories.interfaces import ICrackerRepository

__all__ = ["CrackerDjangoRepository", "ICrackerRepository"]
