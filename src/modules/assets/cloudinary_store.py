"""Cloudinary implementation of the asset store.

Credentials are passed on every call instead of through
``cloudinary.config()``, so several stores (or tests) never share global
SDK state.  Empty credentials fall back to the SDK's own configuration
(``CLOUDINARY_URL`` environment variable).
"""

from __future__ import annotations

import io
from typing import Any, Dict, Optional

import cloudinary.uploader
import structlog
from cloudinary.exceptions import Error as CloudinaryError
from urllib3.exceptions import MaxRetryError
from urllib3.exceptions import TimeoutError as Urllib3TimeoutError

from modules.assets.exceptions import AssetUploadError, AssetUploadTimeout
from modules.assets.interfaces import IAssetStore
from modules.assets.results import AssetDeletionResult, UploadedAsset

logger = structlog.get_logger(__name__)


def _caused_by_timeout(exc: BaseException) -> bool:
    """Whether a urllib3 timeout sits in the exception chain.

    The SDK re-raises transport errors as its generic ``Error`` inside the
    ``except`` block, so the original is the implicit ``__context__``.
    ``MaxRetryError`` carries the connect timeout in ``reason``.
    """
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, (Urllib3TimeoutError, TimeoutError)):
            return True
        if isinstance(current, MaxRetryError) and isinstance(
            current.reason, Urllib3TimeoutError
        ):
            return True
        current = current.__cause__ or current.__context__
    return False


class CloudinaryAssetStore(IAssetStore):
    """Product images hosted on Cloudinary (``resource_type="image"``)."""

    def __init__(
        self,
        cloud_name: str = "",
        api_key: str = "",
        api_secret: str = "",
        secure: bool = True,
    ) -> None:
        self._credentials: Dict[str, Any] = {
            key: value
            for key, value in (
                ("cloud_name", cloud_name),
                ("api_key", api_key),
                ("api_secret", api_secret),
            )
            if value
        }
        self._secure = secure

    def upload(
        self,
        content: bytes,
        *,
        folder: str,
        timeout: Optional[float] = None,
    ) -> UploadedAsset:
        options: Dict[str, Any] = {
            **self._credentials,
            "folder": folder,
            "resource_type": "image",
            "overwrite": False,
            "secure": self._secure,
        }
        if timeout is not None:
            options["timeout"] = timeout

        log = logger.bind(folder=folder, size=len(content))
        try:
            result = cloudinary.uploader.upload(io.BytesIO(content), **options)
        except (CloudinaryError, ValueError) as exc:
            # ValueError: missing credentials, rejected before any request.
            if _caused_by_timeout(exc):
                log.warning("asset.upload_timeout", timeout=timeout)
                raise AssetUploadTimeout(
                    f"Asset upload timed out after {timeout}s"
                ) from exc
            log.error("asset.upload_failed", error=str(exc))
            raise AssetUploadError(str(exc)) from exc

        url = result["secure_url"] if self._secure else result["url"]
        asset = UploadedAsset(url=url, asset_id=result["public_id"])
        log.info("asset.uploaded", asset_id=asset.asset_id)
        return asset

    def destroy(self, asset_id: Optional[str]) -> AssetDeletionResult:
        if not asset_id:
            return AssetDeletionResult.noop()

        log = logger.bind(asset_id=asset_id)
        try:
            response = cloudinary.uploader.destroy(
                asset_id,
                resource_type="image",
                invalidate=True,
                **self._credentials,
            )
        except Exception as exc:  # noqa: BLE001 - deletion reports, never raises
            log.warning("asset.destroy_failed", error=str(exc))
            return AssetDeletionResult.failed(asset_id, str(exc))

        result = (response or {}).get("result")
        if result == "ok":
            log.info("asset.destroyed")
            return AssetDeletionResult.deleted(asset_id)
        if result == "not found":
            log.info("asset.destroy_noop", result=result)
            return AssetDeletionResult.noop(asset_id)

        log.warning("asset.destroy_failed", result=result)
        return AssetDeletionResult.failed(asset_id, f"Unexpected result: {result}")
