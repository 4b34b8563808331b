# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pydantic models for JSON message files.

A message file describes everything MultipartEmail needs, so messages can be
composed and sent from the command line.

Example:
    A message file::

        {
            "from": "Reports <reports@example.com>",
            "to": ["jane@example.com", "Ops <ops@example.com>"],
            "subject": "Weekly report",
            "text": "Report attached.",
            "html": "<img src=\\"logo.png\\"><p>Report attached.</p>",
            "headers": ["X-Priority: 1"],
            "attachments": [
                {"filename": "logo.png", "path": "logo.png", "inline": true},
                {"filename": "notes.txt", "content": "aGVsbG8=", "mime_type": "text/plain"}
            ]
        }

Models:
    - AttachmentSpec: one attachment, loaded from a path or inline base64
    - MessageSpec: the complete message
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .attachments import Base64Fetcher, FilesystemFetcher, guess_mime
from .errors import InvalidAttachment, InvalidHeaderSyntax
from .headers import header_name
from .message import MultipartEmail


class AttachmentSpec(BaseModel):
    """Attachment entry of a message file.

    Attributes:
        filename: Name shown to the recipient and matched in the HTML.
        mime_type: MIME type; guessed from the filename when omitted.
        path: File to load (absolute, or relative to the attachments base_dir).
        content: Inline base64 payload.
        inline: Assign a content-ID so the HTML can embed the file.
    """

    model_config = ConfigDict(extra="forbid")

    filename: Annotated[str, Field(min_length=1, description="Attachment filename")]
    mime_type: Annotated[
        str | None,
        Field(default=None, description="MIME type (guessed from filename if omitted)")
    ]
    path: Annotated[str | None, Field(default=None, description="Filesystem path of the payload")]
    content: Annotated[str | None, Field(default=None, description="Base64-encoded payload")]
    inline: Annotated[bool, Field(default=False, description="Embed in HTML via Content-ID")]

    @model_validator(mode="after")
    def exactly_one_source(self) -> AttachmentSpec:
        """Validate that the payload comes from exactly one of path and content."""
        if bool(self.path) == bool(self.content):
            raise ValueError("exactly one of 'path' or 'content' is required")
        return self

    @property
    def resolved_mime_type(self) -> str:
        return self.mime_type or guess_mime(self.filename)


class MessageSpec(BaseModel):
    """Message file contents."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    from_addr: Annotated[str | None, Field(default=None, alias="from", description="Sender address")]
    to: Annotated[str, Field(min_length=1, description="Recipients, comma or semicolon separated")]
    reply_to: Annotated[str | None, Field(default=None, description="Reply-To address")]
    subject: Annotated[str | None, Field(default=None, description="Subject line")]
    text: Annotated[str | None, Field(default=None, description="Plain-text body")]
    html: Annotated[str | None, Field(default=None, description="HTML body")]
    charset: Annotated[str | None, Field(default=None, description="Declared charset (composer default if omitted)")]
    headers: Annotated[list[str], Field(default_factory=list, description="Custom 'Name: value' headers")]
    attachments: Annotated[list[AttachmentSpec], Field(default_factory=list)]

    @field_validator("to", mode="before")
    @classmethod
    def join_recipients(cls, v: Any) -> Any:
        """Accept a list of recipients as well as a delimited string."""
        if isinstance(v, (list, tuple)):
            return ", ".join(str(item).strip() for item in v if item and str(item).strip())
        return v

    @field_validator("headers")
    @classmethod
    def headers_have_names(cls, v: list[str]) -> list[str]:
        for line in v:
            try:
                header_name(line)
            except InvalidHeaderSyntax as e:
                raise ValueError(str(e)) from e
        return v

    def build(self, fetcher: FilesystemFetcher | None = None, **kwargs: Any) -> MultipartEmail:
        """Create a MultipartEmail from this message file.

        Args:
            fetcher: Filesystem fetcher used for ``path`` attachments.
            **kwargs: Extra keyword arguments for MultipartEmail.

        Raises:
            InvalidAttachment: If an attachment cannot be loaded.
        """
        mail = MultipartEmail(self.charset, fetcher=fetcher, **kwargs)
        mail.from_addr = self.from_addr
        mail.to = self.to
        mail.reply_to = self.reply_to
        mail.subject = self.subject
        mail.text = self.text
        mail.html = self.html
        for line in self.headers:
            mail.add_header(line)

        decoder = Base64Fetcher()
        for att in self.attachments:
            if att.content:
                try:
                    payload = decoder.fetch(att.content)
                except ValueError as e:
                    raise InvalidAttachment(f"Attachment {att.filename}: {e}") from e
                att_id = mail.add_attachment(payload, att.resolved_mime_type, att.filename, is_data=True, add_cid=att.inline)
            else:
                att_id = mail.add_attachment(att.path, att.resolved_mime_type, att.filename, add_cid=att.inline)
            if att_id is None:
                raise InvalidAttachment(f"Attachment {att.filename} could not be added")
        return mail
