"""Cracker DRF serializers for API output.

The serializer operates at the Interface layer (API Views) and exposes the
camelCase field names storefront clients already use.  Input is validated by
the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.crackers.models import Cracker


class CrackerSerializer(serializers.ModelSerializer):
    """Read serializer for the Cracker resource."""

    englishName = serializers.CharField(source="english_name", read_only=True)
    tamilName = serializers.CharField(source="tamil_name", read_only=True)
    originalRate = serializers.DecimalField(
        source="original_rate", max_digits=10, decimal_places=2, read_only=True
    )
    discountRate = serializers.DecimalField(
        source="discount_rate", max_digits=10, decimal_places=2, read_only=True
    )
    status = serializers.BooleanField(source="is_active", read_only=True)
    imageUrl = serializers.URLField(source="image_url", read_only=True)
    imagePublicId = serializers.CharField(source="image_public_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Cracker
        fields = [
            "id",
            "englishName",
            "tamilName",
            "originalRate",
            "discountRate",
            "category",
            "status",
            "imageUrl",
            "imagePublicId",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class CrackerStatusSerializer(serializers.Serializer):
    """Validates ``PATCH /crackers/<id>/status`` bodies: ``{"status": bool}``."""

    status = serializers.BooleanField()
