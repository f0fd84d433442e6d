"""Asset store interface.

The catalog service depends on this contract only; the Cloudinary adapter
and the in-memory test double both implement it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from modules.assets.results import AssetDeletionResult, UploadedAsset


class IAssetStore(ABC):
    """Contract for the remote binary-asset store."""

    @abstractmethod
    def upload(
        self,
        content: bytes,
        *,
        folder: str,
        timeout: Optional[float] = None,
    ) -> UploadedAsset:
        """Upload ``content`` under the ``folder`` namespace.

        Raises:
            AssetUploadError: the store failed or rejected the upload.
            AssetUploadTimeout: the upload exceeded ``timeout`` seconds.
        """

    @abstractmethod
    def destroy(self, asset_id: Optional[str]) -> AssetDeletionResult:
        """Delete an asset.  Never raises.

        Returns a ``NOOP`` result when ``asset_id`` is empty or the asset is
        already gone, ``ERROR`` when the store call failed.
        """
