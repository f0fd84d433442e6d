"""Unit tests for CrackerService.

Covers:
- create_cracker: defaults without image, upload + persist, upload failure
  and timeout (nothing written, nothing deleted), compensation when the
  record write fails.
- update_cracker: field-only update, image replacement (old asset deleted
  exactly once, after the record update), compensation on store failure and
  on a row that vanished, not found.
- set_status: overwrite, idempotence, not found.
- delete_cracker: record then asset, asset failure does not change the
  outcome, not found.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from django.db import DatabaseError

from modules.assets.results import AssetDeletionResult, DeletionOutcome
from modules.crackers.dtos import CreateCrackerDTO, ImageUploadDTO, UpdateCrackerDTO
from modules.crackers.exceptions import (
    CrackerNotFound,
    CrackerPersistenceFailed,
    ImageUploadFailed,
)
from modules.crackers.models import Cracker
from modules.crackers.services import CrackerService
from tests.fakes import FakeAssetStore

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.save.side_effect = lambda c: c
    return repo


@pytest.fixture()
def store():
    return FakeAssetStore()


@pytest.fixture()
def service(mock_repo, store):
    return CrackerService(
        repository=mock_repo,
        asset_store=store,
        image_folder="crackers-test",
        upload_timeout=7,
    )


def _create_dto(**overrides) -> CreateCrackerDTO:
    data = {
        "englishName": "Flower Pots Big",
        "tamilName": "பூச்சட்டி பெரியது",
        "originalRate": "320",
        "discountRate": "96.50",
        "category": "Flower Pots",
    }
    data.update(overrides)
    return CreateCrackerDTO.model_validate(data)


def _image(content: bytes = b"image-bytes") -> ImageUploadDTO:
    return ImageUploadDTO(
        filename="pot.png",
        content_type="image/png",
        size=len(content),
        content=content,
    )


def _existing(**overrides) -> Cracker:
    defaults = {
        "english_name": "Bullet Bomb",
        "tamil_name": "புல்லட் பாம்",
        "original_rate": Decimal("200.00"),
        "discount_rate": Decimal("60.00"),
        "category": "Sound Crackers",
    }
    defaults.update(overrides)
    return Cracker(**defaults)


# ===========================================================================
# create_cracker
# ===========================================================================


class TestCreateCracker:
    def test_without_image_defaults(self, service, mock_repo, store):
        cracker = service.create_cracker(_create_dto())

        assert cracker.is_active is True
        assert cracker.image_url is None
        assert cracker.image_public_id is None
        assert cracker.original_rate == Decimal("320")
        assert cracker.discount_rate == Decimal("96.50")
        mock_repo.save.assert_called_once()
        assert store.upload_calls == []
        assert store.destroyed == []

    def test_with_image_uploads_under_folder_with_timeout(self, service, store):
        cracker = service.create_cracker(_create_dto(), _image())

        assert store.upload_calls == [{"folder": "crackers-test", "timeout": 7}]
        uploaded = store.uploads[0]
        assert cracker.image_url == uploaded.url
        assert cracker.image_public_id == uploaded.asset_id
        assert store.destroyed == []

    def test_status_false_creates_hidden_entry(self, service):
        cracker = service.create_cracker(_create_dto(status="false"))
        assert cracker.is_active is False

    def test_upload_failure_writes_nothing(self, service, mock_repo, store):
        store.fail_upload = True

        with pytest.raises(ImageUploadFailed):
            service.create_cracker(_create_dto(), _image())

        mock_repo.save.assert_not_called()
        assert store.destroyed == []

    def test_upload_timeout_writes_nothing_and_deletes_nothing(
        self, service, mock_repo, store
    ):
        store.timeout_upload = True

        with pytest.raises(ImageUploadFailed, match="timed out"):
            service.create_cracker(_create_dto(), _image())

        mock_repo.save.assert_not_called()
        assert store.destroyed == []

    def test_record_failure_deletes_uploaded_asset(self, service, mock_repo, store):
        mock_repo.save.side_effect = DatabaseError("disk full")

        with pytest.raises(CrackerPersistenceFailed) as exc_info:
            service.create_cracker(_create_dto(), _image())

        uploaded = store.uploads[0]
        assert store.destroyed == [uploaded.asset_id]
        assert store.live_asset_ids == set()
        assert isinstance(exc_info.value.__cause__, DatabaseError)

    def test_record_failure_without_image_deletes_nothing(
        self, service, mock_repo, store
    ):
        mock_repo.save.side_effect = DatabaseError("disk full")

        with pytest.raises(CrackerPersistenceFailed):
            service.create_cracker(_create_dto())

        assert store.destroyed == []

    def test_compensation_failure_still_reports_record_error(
        self, service, mock_repo, store
    ):
        mock_repo.save.side_effect = DatabaseError("disk full")
        store.fail_destroy = True

        with pytest.raises(CrackerPersistenceFailed, match="disk full"):
            service.create_cracker(_create_dto(), _image())

        assert len(store.destroyed) == 1


# ===========================================================================
# update_cracker
# ===========================================================================


class TestUpdateCracker:
    def test_fields_only_no_asset_interaction(self, service, mock_repo, store):
        existing = _existing(image_url="https://x/old.png", image_public_id="old")
        mock_repo.get_by_id.return_value = existing
        mock_repo.update.return_value = existing

        dto = UpdateCrackerDTO.model_validate({"discountRate": "55"})
        service.update_cracker("some-id", dto)

        mock_repo.update.assert_called_once_with(
            "some-id", {"discount_rate": Decimal("55")}
        )
        assert store.upload_calls == []
        assert store.destroyed == []

    def test_image_replacement_deletes_old_asset_once(
        self, service, mock_repo, store
    ):
        existing = _existing(image_url="https://x/old.png", image_public_id="old")
        store.assets["old"] = b"old"
        mock_repo.get_by_id.return_value = existing
        mock_repo.update.return_value = existing

        service.update_cracker("some-id", UpdateCrackerDTO(), _image())

        new_asset = store.uploads[0]
        _, changes = mock_repo.update.call_args.args
        assert changes["image_url"] == new_asset.url
        assert changes["image_public_id"] == new_asset.asset_id
        assert store.destroyed == ["old"]
        assert store.live_asset_ids == {new_asset.asset_id}

    def test_image_added_to_entry_without_previous_image(
        self, service, mock_repo, store
    ):
        existing = _existing()
        mock_repo.get_by_id.return_value = existing
        mock_repo.update.return_value = existing

        service.update_cracker("some-id", UpdateCrackerDTO(), _image())

        assert len(store.uploads) == 1
        assert store.destroyed == []

    def test_record_failure_deletes_new_asset_and_keeps_old(
        self, service, mock_repo, store
    ):
        existing = _existing(image_url="https://x/old.png", image_public_id="old")
        store.assets["old"] = b"old"
        mock_repo.get_by_id.return_value = existing
        mock_repo.update.side_effect = DatabaseError("locked")

        with pytest.raises(CrackerPersistenceFailed):
            service.update_cracker("some-id", UpdateCrackerDTO(), _image())

        new_asset = store.uploads[0]
        assert store.destroyed == [new_asset.asset_id]
        assert store.live_asset_ids == {"old"}

    def test_row_vanished_deletes_new_asset(self, service, mock_repo, store):
        mock_repo.get_by_id.return_value = _existing(
            image_url="https://x/old.png", image_public_id="old"
        )
        mock_repo.update.return_value = None

        with pytest.raises(CrackerNotFound):
            service.update_cracker("some-id", UpdateCrackerDTO(), _image())

        assert store.destroyed == [store.uploads[0].asset_id]

    def test_upload_failure_leaves_record_untouched(
        self, service, mock_repo, store
    ):
        mock_repo.get_by_id.return_value = _existing()
        store.fail_upload = True

        with pytest.raises(ImageUploadFailed):
            service.update_cracker("some-id", UpdateCrackerDTO(), _image())

        mock_repo.update.assert_not_called()
        assert store.destroyed == []

    def test_update_uses_upload_timeout(self, service, mock_repo, store):
        existing = _existing()
        mock_repo.get_by_id.return_value = existing
        mock_repo.update.return_value = existing

        service.update_cracker("some-id", UpdateCrackerDTO(), _image())

        assert store.upload_calls[0]["timeout"] == 7

    def test_not_found(self, service, mock_repo, store):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CrackerNotFound):
            service.update_cracker("missing", UpdateCrackerDTO(), _image())

        assert store.upload_calls == []


# ===========================================================================
# set_status
# ===========================================================================


class TestSetStatus:
    def test_overwrites_flag(self, service, mock_repo):
        existing = _existing(is_active=True)
        mock_repo.update.side_effect = lambda _id, data: (
            setattr(existing, "is_active", data["is_active"]) or existing
        )

        result = service.set_status("some-id", False)

        assert result.is_active is False
        mock_repo.update.assert_called_once_with("some-id", {"is_active": False})

    def test_idempotent(self, service, mock_repo):
        existing = _existing(is_active=False)
        mock_repo.update.side_effect = lambda _id, data: (
            setattr(existing, "is_active", data["is_active"]) or existing
        )

        first = service.set_status("some-id", False)
        second = service.set_status("some-id", False)

        assert first.is_active is second.is_active is False

    def test_no_asset_interaction(self, service, mock_repo, store):
        mock_repo.update.return_value = _existing(image_public_id="a", image_url="u")
        service.set_status("some-id", True)
        assert store.upload_calls == []
        assert store.destroyed == []

    def test_not_found(self, service, mock_repo):
        mock_repo.update.return_value = None
        with pytest.raises(CrackerNotFound):
            service.set_status("missing", True)


# ===========================================================================
# delete_cracker
# ===========================================================================


class TestDeleteCracker:
    def test_deletes_record_then_asset(self, service, mock_repo, store):
        mock_repo.get_by_id.return_value = _existing(
            image_url="https://x/a.png", image_public_id="a"
        )
        mock_repo.delete.return_value = True
        store.assets["a"] = b"a"

        service.delete_cracker("some-id")

        mock_repo.delete.assert_called_once_with("some-id")
        assert store.destroyed == ["a"]

    def test_asset_failure_does_not_fail_delete(self, service, mock_repo, store):
        mock_repo.get_by_id.return_value = _existing(
            image_url="https://x/a.png", image_public_id="a"
        )
        mock_repo.delete.return_value = True
        store.fail_destroy = True

        service.delete_cracker("some-id")

        assert store.destroyed == ["a"]

    def test_without_image_is_noop_for_store(self, service, mock_repo, store):
        mock_repo.get_by_id.return_value = _existing()
        mock_repo.delete.return_value = True

        service.delete_cracker("some-id")

        assert store.destroyed == [None]

    def test_record_failure_skips_asset(self, service, mock_repo, store):
        mock_repo.get_by_id.return_value = _existing(
            image_url="https://x/a.png", image_public_id="a"
        )
        mock_repo.delete.side_effect = DatabaseError("locked")

        with pytest.raises(CrackerPersistenceFailed):
            service.delete_cracker("some-id")

        assert store.destroyed == []

    def test_not_found(self, service, mock_repo, store):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CrackerNotFound):
            service.delete_cracker("missing")

        mock_repo.delete.assert_not_called()
        assert store.destroyed == []


class TestDiscardAssetResult:
    def test_error_result_is_returned_not_raised(self, mock_repo):
        store = MagicMock()
        store.destroy.return_value = AssetDeletionResult.failed("a", "boom")
        service = CrackerService(repository=mock_repo, asset_store=store)
        mock_repo.get_by_id.return_value = _existing(
            image_url="https://x/a.png", image_public_id="a"
        )
        mock_repo.delete.return_value = True

        service.delete_cracker("some-id")

        store.destroy.assert_called_once_with("a")
        assert store.destroy.return_value.outcome is DeletionOutcome.ERROR
