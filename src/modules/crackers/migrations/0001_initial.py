import decimal

import django.core.validators
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Cracker",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("english_name", models.CharField(max_length=255)),
                ("tamil_name", models.CharField(max_length=255)),
                (
                    "original_rate",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[
                            django.core.validators.MinValueValidator(decimal.Decimal("0"))
                        ],
                    ),
                ),
                (
                    "discount_rate",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[
                            django.core.validators.MinValueValidator(decimal.Decimal("0"))
                        ],
                    ),
                ),
                ("category", models.CharField(max_length=100)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "image_url",
                    models.URLField(
                        blank=True, default=None, max_length=500, null=True
                    ),
                ),
                (
                    "image_public_id",
                    models.CharField(
                        blank=True, default=None, max_length=255, null=True
                    ),
                ),
            ],
            options={
                "db_table": "crackers",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["is_active"], name="crackers_active_idx"),
                    models.Index(fields=["category"], name="crackers_category_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("image_public_id__isnull", True),
                                ("image_url__isnull", True),
                            ),
                            models.Q(
                                ("image_public_id__isnull", False),
                                ("image_url__isnull", False),
                            ),
                            _connector="OR",
                        ),
                        name="crackers_image_reference_paired",
                    ),
                ],
            },
        ),
    ]
