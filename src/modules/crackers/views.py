"""Cracker API views.

Exposes the ``CrackerService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into status codes and
``{"error", "details"}`` bodies — the view never swallows generic
exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional

from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.mixins import ListModelMixin
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.assets.factory import build_asset_store
from modules.core.decorators import validate_id
from modules.core.errors import first_error_message, validation_error_response
from modules.core.pagination import PageLimitPagination
from modules.crackers.dtos import CreateCrackerDTO, ImageUploadDTO, UpdateCrackerDTO
from modules.crackers.exceptions import (
    CrackerNotFound,
    CrackerPersistenceFailed,
    ImageUploadFailed,
    InvalidCrackerImage,
)
from modules.crackers.filters import CrackerFilter
from modules.crackers.models import Cracker
from modules.crackers.repositories.django_repository import CrackerDjangoRepository
from modules.crackers.serializers import CrackerSerializer, CrackerStatusSerializer
from modules.crackers.services import CrackerService

NOT_FOUND = {"error": "Not found"}


class CrackerPagination(PageLimitPagination):
    default_limit = settings.CATALOG_PAGE_SIZE
    max_limit = settings.CATALOG_MAX_PAGE_SIZE


def _form_payload(request: Request) -> Dict[str, Any]:
    """Flatten multipart/form bodies (QueryDict) into a plain dict."""
    data = request.data
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be an object.")
    payload = data.dict() if hasattr(data, "dict") else dict(data)
    payload.pop("image", None)
    return payload


def _read_image(request: Request) -> Optional[ImageUploadDTO]:
    upload = request.FILES.get("image")
    if upload is None:
        return None
    try:
        return ImageUploadDTO.from_upload(upload)
    except PydanticValidationError as exc:
        raise InvalidCrackerImage(first_error_message(exc)) from exc
    except ValueError as exc:
        raise InvalidCrackerImage(str(exc)) from exc


class CrackerViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for the catalog.

    Uses ``CrackerService`` with ``CrackerDjangoRepository`` and the
    configured asset store (DIP).  Does **not** extend ``ModelViewSet`` —
    all writes go through the service.
    """

    filterset_class = CrackerFilter
    filter_backends = [DjangoFilterBackend]
    pagination_class = CrackerPagination
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    queryset = Cracker.objects.all()
    serializer_class = CrackerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CrackerService(
            repository=CrackerDjangoRepository(),
            asset_store=build_asset_store(),
            image_folder=settings.CATALOG_IMAGE_FOLDER,
            upload_timeout=settings.CATALOG_UPLOAD_TIMEOUT,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_crackers()

    @validate_id
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/crackers/{pk}"""
        try:
            cracker = self._service.get_cracker(pk)
        except CrackerNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(CrackerSerializer(cracker).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/crackers (multipart, optional ``image`` file)"""
        try:
            dto = CreateCrackerDTO.model_validate(_form_payload(request))
            image = _read_image(request)
        except PydanticValidationError as exc:
            return validation_error_response(exc)
        except InvalidCrackerImage as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            cracker = self._service.create_cracker(dto, image)
        except (ImageUploadFailed, CrackerPersistenceFailed) as exc:
            return Response(
                {"error": "Failed to create cracker", "details": str(exc)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        out = CrackerSerializer(cracker)
        return Response(out.data, status=status.HTTP_201_CREATED)

    @validate_id
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/crackers/{pk} (multipart, optional ``image`` file)"""
        try:
            dto = UpdateCrackerDTO.model_validate(_form_payload(request))
            image = _read_image(request)
        except PydanticValidationError as exc:
            return validation_error_response(exc)
        except InvalidCrackerImage as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            cracker = self._service.update_cracker(pk, dto, image)
        except CrackerNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except (ImageUploadFailed, CrackerPersistenceFailed) as exc:
            return Response(
                {"error": "Failed to update cracker", "details": str(exc)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(CrackerSerializer(cracker).data)

    @action(detail=True, methods=["patch"], url_path="status")
    @validate_id
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/crackers/{pk}/status

        Accepts ``{"status": true|false}`` to show or hide an entry.
        """
        body = CrackerStatusSerializer(data=request.data)
        body.is_valid(raise_exception=True)

        try:
            cracker = self._service.set_status(pk, body.validated_data["status"])
        except CrackerNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)

        return Response(CrackerSerializer(cracker).data)

    @validate_id
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/crackers/{pk}"""
        try:
            self._service.delete_cracker(pk)
        except CrackerNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except CrackerPersistenceFailed as exc:
            return Response(
                {"error": "Failed to delete cracker", "details": str(exc)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response({"message": "Deleted successfully"})
