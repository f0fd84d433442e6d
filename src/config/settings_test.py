"""Deterministic settings for the test suite.

Tests never reach Cloudinary: ``ASSET_STORE`` points at the in-memory fake
from ``tests/fakes.py``.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-only-secret-key")

from config.settings import *  # noqa: E402,F401,F403
from config.settings import ASSET_STORE, REST_FRAMEWORK  # noqa: E402

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

ASSET_STORE = {**ASSET_STORE, "BACKEND": "tests.fakes.FakeAssetStore", "OPTIONS": {}}

CATALOG_UPLOAD_TIMEOUT = 5.0

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
}
