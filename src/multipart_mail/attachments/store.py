# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""In-memory attachment records for a single message.

Each message owns an AttachmentStore. Identifiers are positive integers that
increase monotonically and are never reused after a removal. A rejected add
leaves both the records and the identifier counter untouched.

Inline attachments receive a ``cid-`` prefixed content-ID drawn from a
process-wide TokenSource, so images embedded in different messages never
share an identifier.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ..errors import AttachmentNotFound, InvalidAttachment
from ..tokens import TokenSource, default_tokens


@dataclass
class Attachment:
    """A file attached to a message.

    Attributes:
        id: Identifier unique within the owning message.
        data: Raw payload.
        mime_type: MIME type, e.g. ``image/png``.
        filename: Display filename, also used to match HTML references.
        cid: Content-ID for inline embedding, or None.
    """

    id: int
    data: bytes
    mime_type: str
    filename: str
    cid: str | None = None

    @property
    def is_image(self) -> bool:
        return self.mime_type.lower().startswith("image")

    @property
    def size(self) -> int:
        return len(self.data)


class AttachmentStore:
    """Ordered collection of attachments with stable identifiers."""

    def __init__(self, tokens: TokenSource | None = None):
        self._tokens = tokens or default_tokens
        self._records: dict[int, Attachment] = {}
        self._counter = 0

    def add(
        self,
        data: bytes | str | None,
        mime_type: str | None,
        filename: str | None,
        add_cid: bool = False,
    ) -> int:
        """Store an attachment and return its identifier.

        Args:
            data: Payload; text is stored as its UTF-8 bytes.
            mime_type: MIME type of the payload.
            filename: Display filename.
            add_cid: Assign a content-ID so HTML can reference the file inline.

        Raises:
            InvalidAttachment: If data, MIME type or filename is empty.
        """
        if not data or not mime_type or not filename:
            raise InvalidAttachment()
        if isinstance(data, str):
            data = data.encode("utf-8")

        self._counter += 1
        cid = self._tokens.next_token("cid-") if add_cid else None
        self._records[self._counter] = Attachment(
            id=self._counter,
            data=bytes(data),
            mime_type=mime_type,
            filename=filename,
            cid=cid,
        )
        return self._counter

    def remove(self, attachment_id: int) -> bool:
        if attachment_id not in self._records:
            raise AttachmentNotFound(attachment_id)
        del self._records[attachment_id]
        return True

    def get(self, attachment_id: int) -> Attachment:
        if attachment_id not in self._records:
            raise AttachmentNotFound(attachment_id)
        return self._records[attachment_id]

    def list(self) -> list[Attachment]:
        return list(self._records.values())

    def __contains__(self, attachment_id: object) -> bool:
        return attachment_id in self._records

    def __iter__(self) -> Iterator[Attachment]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)
