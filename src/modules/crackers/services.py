"""Cracker service layer: catalog writes coordinated with the asset store.

A catalog entry and its remote image live in two stores that cannot share a
transaction.  Consistency is kept by ordering the calls and compensating
on partial failure:

- Create: upload first, then insert.  If the insert fails, the fresh asset
  is deleted before the error is reported.  A failed or timed-out upload
  writes nothing; an upload the store completes after our timeout has no
  handle here and stays orphaned.
- Update: upload the new image, then update the record.  If the update
  fails, the new asset is deleted and the previous record and asset stay
  untouched.  Only after the update succeeds is the previous asset deleted.
- Delete: delete the record, then its asset.

Asset deletions are best effort: the store returns an
``AssetDeletionResult`` that is logged and never turns the primary outcome
into a failure.  Nothing is retried.

Concurrent image updates on the same entry are not serialised; two racing
updates may each delete the asset the other just uploaded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import DatabaseError

from modules.assets.exceptions import AssetUploadError, AssetUploadTimeout
from modules.assets.results import DeletionOutcome
from modules.crackers.constants import (
    DEFAULT_IMAGE_FOLDER,
    DEFAULT_UPLOAD_TIMEOUT_SECONDS,
)
from modules.crackers.exceptions import (
    CrackerNotFound,
    CrackerPersistenceFailed,
    ImageUploadFailed,
)
from modules.crackers.models import Cracker

if TYPE_CHECKING:
    from modules.assets.interfaces import IAssetStore
    from modules.assets.results import AssetDeletionResult, UploadedAsset
    from modules.crackers.dtos import CreateCrackerDTO, ImageUploadDTO, UpdateCrackerDTO
    from modules.crackers.repositories.interfaces import ICrackerRepository

logger = structlog.get_logger(__name__)

_STORE_ERRORS = (DatabaseError, ValidationError)


class CrackerService:
    """Application service for catalog entries.

    Receives an ``ICrackerRepository`` and an ``IAssetStore`` via
    constructor injection (DIP).
    """

    def __init__(
        self,
        repository: ICrackerRepository,
        asset_store: IAssetStore,
        *,
        image_folder: str = DEFAULT_IMAGE_FOLDER,
        upload_timeout: Optional[float] = DEFAULT_UPLOAD_TIMEOUT_SECONDS,
    ) -> None:
        self._repo = repository
        self._assets = asset_store
        self._image_folder = image_folder
        self._upload_timeout = upload_timeout

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_cracker(
        self, dto: CreateCrackerDTO, image: Optional[ImageUploadDTO] = None
    ) -> Cracker:
        """Create a catalog entry, uploading its image first when given.

        Raises:
            ImageUploadFailed: the upload failed or timed out (nothing written).
            CrackerPersistenceFailed: the insert failed (uploaded image deleted).
        """
        log = logger.bind(english_name=dto.english_name, has_image=image is not None)

        uploaded = self._upload(image, log) if image else None

        cracker = Cracker(
            english_name=dto.english_name,
            tamil_name=dto.tamil_name,
            original_rate=dto.original_rate,
            discount_rate=dto.discount_rate,
            category=dto.category,
            is_active=dto.is_active,
            image_url=uploaded.url if uploaded else None,
            image_public_id=uploaded.asset_id if uploaded else None,
        )

        try:
            cracker = self._repo.save(cracker)
        except _STORE_ERRORS as exc:
            log.error("cracker.create_failed", error=str(exc))
            if uploaded:
                self._discard_asset(uploaded.asset_id, reason="compensation", log=log)
            raise CrackerPersistenceFailed(str(exc)) from exc

        log.info("cracker.created", cracker_id=str(cracker.id))
        return cracker

    def update_cracker(
        self,
        id: str,
        dto: UpdateCrackerDTO,
        image: Optional[ImageUploadDTO] = None,
    ) -> Cracker:
        """Apply a partial update, replacing the image when one is given.

        Raises:
            CrackerNotFound: no entry has this id.
            ImageUploadFailed: the new image could not be uploaded.
            CrackerPersistenceFailed: the update failed (new image deleted).
        """
        cracker = self._repo.get_by_id(id)
        if not cracker:
            raise CrackerNotFound(f"Cracker {id} not found.")

        log = logger.bind(cracker_id=str(id), has_image=image is not None)
        previous_asset_id = cracker.image_public_id

        changes: Dict[str, Any] = dto.changes()
        uploaded: Optional[UploadedAsset] = None
        if image:
            uploaded = self._upload(image, log)
            changes["image_url"] = uploaded.url
            changes["image_public_id"] = uploaded.asset_id

        try:
            updated = self._repo.update(id, changes)
        except _STORE_ERRORS as exc:
            log.error("cracker.update_failed", error=str(exc))
            if uploaded:
                self._discard_asset(uploaded.asset_id, reason="compensation", log=log)
            raise CrackerPersistenceFailed(str(exc)) from exc

        if updated is None:
            # Deleted between the lookup and the update.
            if uploaded:
                self._discard_asset(uploaded.asset_id, reason="compensation", log=log)
            raise CrackerNotFound(f"Cracker {id} not found.")

        if uploaded and previous_asset_id and previous_asset_id != uploaded.asset_id:
            self._discard_asset(previous_asset_id, reason="replaced", log=log)

        log.info("cracker.updated", fields=sorted(changes))
        return updated

    def set_status(self, id: str, is_active: bool) -> Cracker:
        """Show or hide an entry.  Overwrites the flag unconditionally.

        Raises:
            CrackerNotFound: no entry has this id.
        """
        cracker = self._repo.update(id, {"is_active": is_active})
        if not cracker:
            raise CrackerNotFound(f"Cracker {id} not found.")
        logger.info("cracker.status_set", cracker_id=str(id), is_active=is_active)
        return cracker

    def delete_cracker(self, id: str) -> None:
        """Delete the entry, then its image (best effort).

        Raises:
            CrackerNotFound: no entry has this id.
        """
        cracker = self._repo.get_by_id(id)
        if not cracker:
            raise CrackerNotFound(f"Cracker {id} not found.")

        log = logger.bind(cracker_id=str(id))
        try:
            deleted = self._repo.delete(id)
        except DatabaseError as exc:
            log.error("cracker.delete_failed", error=str(exc))
            raise CrackerPersistenceFailed(str(exc)) from exc
        if not deleted:
            raise CrackerNotFound(f"Cracker {id} not found.")

        self._discard_asset(cracker.image_public_id, reason="deleted", log=log)
        log.info("cracker.deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_crackers(self, filters: Optional[Dict[str, Any]] = None):
        """Return a lazy queryset of entries, optionally filtered."""
        return self._repo.list(filters)

    def get_cracker(self, id: str) -> Cracker:
        """Retrieve a single entry by ID.

        Raises:
            CrackerNotFound: if the entry does not exist.
        """
        cracker = self._repo.get_by_id(id)
        if not cracker:
            raise CrackerNotFound(f"Cracker {id} not found.")
        return cracker

    # ------------------------------------------------------------------
    # Asset store helpers
    # ------------------------------------------------------------------

    def _upload(self, image: ImageUploadDTO, log) -> UploadedAsset:
        try:
            uploaded = self._assets.upload(
                image.content,
                folder=self._image_folder,
                timeout=self._upload_timeout,
            )
        except AssetUploadError as exc:
            log.error(
                "cracker.image_upload_failed",
                error=str(exc),
                timed_out=isinstance(exc, AssetUploadTimeout),
            )
            raise ImageUploadFailed(str(exc)) from exc

        log.info("cracker.image_uploaded", asset_id=uploaded.asset_id)
        return uploaded

    def _discard_asset(
        self, asset_id: Optional[str], *, reason: str, log
    ) -> AssetDeletionResult:
        result = self._assets.destroy(asset_id)
        if result.outcome is DeletionOutcome.ERROR:
            log.error(
                "cracker.asset_delete_failed",
                asset_id=asset_id,
                reason=reason,
                error=result.error,
            )
        else:
            log.info(
                "cracker.asset_deleted",
                asset_id=asset_id,
                reason=reason,
                outcome=result.outcome.value,
            )
        return result
