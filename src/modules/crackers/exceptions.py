"""Cracker (catalog entry) exceptions.

Raised by the Service Layer; the API layer (Views) translates them into
HTTP responses.
"""

from __future__ import annotations


class CrackerNotFound(Exception):
    """The requested catalog entry does not exist."""


class InvalidCrackerImage(Exception):
    """The uploaded image has a disallowed content type or is too large."""


class ImageUploadFailed(Exception):
    """The asset store failed (or timed out) while uploading an image."""


class CrackerPersistenceFailed(Exception):
    """The record store rejected a create/update/delete of a catalog entry."""
