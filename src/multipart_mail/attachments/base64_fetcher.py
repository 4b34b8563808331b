# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Decoder for base64-encoded inline attachment content.

Message files carry small attachments inline as base64 text. This fetcher
turns that text back into bytes, tolerating surrounding whitespace and
missing padding.
"""

from __future__ import annotations

import base64
import binascii


class Base64Fetcher:
    """Decoder for base64-encoded inline attachment content."""

    def fetch(self, base64_content: str) -> bytes | None:
        """Decode base64 content to bytes.

        Args:
            base64_content: Base64-encoded string.

        Returns:
            Decoded bytes, or None if the content is empty.

        Raises:
            ValueError: If the content is not valid base64.
        """
        if not base64_content:
            return None

        content = "".join(base64_content.split())
        padding_needed = 4 - (len(content) % 4)
        if padding_needed != 4:
            content += "=" * padding_needed

        try:
            return base64.b64decode(content, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 content: {e}") from e
