# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Rewrite HTML references to attached images into ``cid:`` URLs.

Two reference forms are recognised, case-insensitively and everywhere in the
document:

- ``src="logo.png"`` (double, single or no quotes), which keeps its quotes
- ``url('logo.png')`` in inline CSS, which becomes ``url(cid:...)``

Only attachments that carry a content-ID and an ``image/*`` MIME type are
considered. Filenames are matched literally and in full: a reference to
``logo.png.bak`` is left alone by a ``logo.png`` attachment.

Attachments sharing a filename are processed in store order; a later one
only sees references the earlier one left untouched.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .attachments import Attachment


class CidRewriter:
    """Replace filename references in HTML with attachment content-IDs."""

    def rewrite(self, html: str, attachments: Iterable[Attachment]) -> tuple[str, bool]:
        """Return the rewritten HTML and whether anything was replaced."""
        replaced = 0
        for att in attachments:
            if not att.cid or not att.is_image:
                continue
            name = re.escape(att.filename)
            cid = att.cid
            html, src_count = re.subn(
                rf"src=(['\"]?){name}(?=['\"\s/>]|$)(['\"]?)",
                lambda m: f"src={m.group(1)}cid:{cid}{m.group(2)}",
                html,
                flags=re.IGNORECASE,
            )
            html, url_count = re.subn(
                rf"url\((['\"]?){name}(['\"]?)\)",
                lambda m: f"url(cid:{cid})",
                html,
                flags=re.IGNORECASE,
            )
            replaced += src_count + url_count
        return html, replaced > 0
