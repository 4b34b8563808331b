# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Attachment records and the sources their bytes are loaded from.

- AttachmentStore: per-message records with stable ids and content-IDs
- FilesystemFetcher: local files, optionally confined to a base directory
- Base64Fetcher: inline base64 content from message files
- guess_mime: MIME type from a filename extension
"""

from __future__ import annotations

import mimetypes

from .base64_fetcher import Base64Fetcher
from .filesystem_fetcher import FilesystemFetcher
from .store import Attachment, AttachmentStore

DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime(filename: str) -> str:
    """Determine the MIME type for a filename based on its extension."""
    mt, _ = mimetypes.guess_type(filename)
    return mt or DEFAULT_MIME_TYPE


__all__ = [
    "Attachment",
    "AttachmentStore",
    "Base64Fetcher",
    "DEFAULT_MIME_TYPE",
    "FilesystemFetcher",
    "guess_mime",
]
