"""Asset store exceptions.

Only the upload path raises; deletion reports its outcome as an
``AssetDeletionResult`` value instead.
"""

from __future__ import annotations


class AssetUploadError(Exception):
    """The asset store rejected or failed the upload."""


class AssetUploadTimeout(AssetUploadError):
    """The upload did not complete within the configured timeout.

    The remote store may still finish the upload after the client gave up;
    such an asset has no handle on our side and stays orphaned.
    """
