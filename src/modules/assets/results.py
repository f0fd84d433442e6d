"""Value objects returned by the asset store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class UploadedAsset:
    """Handle of a successfully uploaded asset.

    ``url`` is the public (https) delivery URL, ``asset_id`` the opaque
    identifier needed to delete the asset later.
    """

    url: str
    asset_id: str


class DeletionOutcome(str, Enum):
    DELETED = "deleted"
    NOOP = "no-op"
    ERROR = "error"


@dataclass(frozen=True)
class AssetDeletionResult:
    """Outcome of a best-effort asset deletion.

    Deletion never raises: callers inspect ``outcome`` and log failures.
    """

    outcome: DeletionOutcome
    asset_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def deleted(cls, asset_id: str) -> AssetDeletionResult:
        return cls(DeletionOutcome.DELETED, asset_id)

    @classmethod
    def noop(cls, asset_id: Optional[str] = None) -> AssetDeletionResult:
        return cls(DeletionOutcome.NOOP, asset_id)

    @classmethod
    def failed(cls, asset_id: Optional[str], error: str) -> AssetDeletionResult:
        return cls(DeletionOutcome.ERROR, asset_id, error)

    @property
    def ok(self) -> bool:
        return self.outcome is not DeletionOutcome.ERROR
