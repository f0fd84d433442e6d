"""Builds the configured asset store.

``settings.ASSET_STORE`` names the backend class and its constructor
options, e.g.::

    ASSET_STORE = {
        "BACKEND": "modules.assets.cloudinary_store.CloudinaryAssetStore",
        "OPTIONS": {"cloud_name": "...", "api_key": "...", "api_secret": "..."},
    }
"""

from __future__ import annotations

from django.conf import settings
from django.utils.module_loading import import_string

from modules.assets.interfaces import IAssetStore


def build_asset_store() -> IAssetStore:
    backend = settings.ASSET_STORE
    store_class = import_string(backend["BACKEND"])
    return store_class(**backend.get("OPTIONS", {}))
