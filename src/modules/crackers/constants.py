"""Catalog constants.

Image rules applied before any call to the asset store.
"""

ALLOWED_IMAGE_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/webp",
        "image/gif",
    }
)

MAX_IMAGE_BYTES = 5 * 1024 * 1024

DEFAULT_IMAGE_FOLDER = "crackers-admin"

DEFAULT_UPLOAD_TIMEOUT_SECONDS = 60
