# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Serialize a message into its header block and MIME body.

MessageComposer is the orchestrator of the package. For one message it:

1. rewrites inline image references in a working copy of the HTML
2. plans the MIME structure (plain, mixed or related)
3. draws fresh boundaries for the envelope and the alternative sub-part
4. builds the header map, letting custom headers redefine built-in ones
5. writes every part as base64 in fixed-width lines joined with ``\\n``

Composition holds no state between calls; the same composer can serve any
number of messages from any number of threads.

Example:
    Composing without sending::

        composed = MessageComposer().compose(mail)
        print(composed.header_block)
        sys.stdout.buffer.write(composed.body)
"""

from __future__ import annotations

import base64
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .attachments import Attachment
from .cid import CidRewriter
from .config_loader import ComposerConfig
from .encoding import AddressEncoder, HeaderEncoder, Recoder
from .errors import EmptyRecipient
from .structure import BodyPart, Structure, StructurePlanner
from .tokens import TokenSource, default_tokens

if TYPE_CHECKING:
    from .message import MultipartEmail

NEWLINE = "\n"


@dataclass
class ComposedMessage:
    """Fully materialized message ready for a transport.

    Attributes:
        to: Encoded recipient list.
        subject: Encoded subject.
        headers: Lower-cased header name -> full header line, in output order.
        body: MIME body bytes with ``\\n`` line endings.
        structure: The planned MIME structure.
        boundary: Envelope boundary, or None for single-part messages.
    """

    to: str
    subject: str
    headers: dict[str, str]
    body: bytes
    structure: Structure
    boundary: str | None = None

    @property
    def content_type(self) -> str:
        return self.structure.shape.value

    @property
    def header_block(self) -> str:
        return NEWLINE.join(self.headers.values())

    def as_bytes(self) -> bytes:
        """Render a complete message including To and Subject lines."""
        head = f"To: {self.to}{NEWLINE}Subject: {self.subject}{NEWLINE}{self.header_block}{NEWLINE}{NEWLINE}"
        return head.encode("utf-8") + self.body


def wrap_base64(data: bytes, line_length: int = 76) -> str:
    """Base64-encode ``data`` in lines of ``line_length`` characters, each ending in a newline."""
    encoded = base64.b64encode(data).decode("ascii")
    return "".join(
        encoded[start:start + line_length] + NEWLINE
        for start in range(0, len(encoded), line_length)
    )


class MessageComposer:
    """Build header blocks and MIME bodies for MultipartEmail messages.

    Attributes:
        config: Composition settings (X-Mailer, line length).
        tokens: Source of boundary tokens.
        recoder: Charset converter handed to header encoders.
    """

    def __init__(
        self,
        config: ComposerConfig | None = None,
        tokens: TokenSource | None = None,
        recoder: Recoder | None = None,
        planner: StructurePlanner | None = None,
        rewriter: CidRewriter | None = None,
    ):
        self.config = config or ComposerConfig()
        self.tokens = tokens or default_tokens
        self.recoder = recoder or Recoder()
        self.planner = planner or StructurePlanner()
        self.rewriter = rewriter or CidRewriter()

    def compose(self, message: MultipartEmail) -> ComposedMessage:
        """Compose ``message``.

        Raises:
            EmptyRecipient: If the message has no TO address.
        """
        header_encoder = HeaderEncoder(message.charset, self.recoder)
        addresses = AddressEncoder(header_encoder)
        to = addresses.encode_list(message.to)
        if not to:
            raise EmptyRecipient()

        attachments = message.attachments.list()
        html = message.html
        if isinstance(html, bytes):
            html = html.decode(message.charset)
        related = False
        if html and attachments:
            html, related = self.rewriter.rewrite(html, attachments)

        structure = self.planner.plan(message.text, html, len(attachments), related)
        boundary = self.tokens.next_token("mpm-part-")
        boundary_alt = self.tokens.next_token("mpm-alt-")

        headers = self._build_headers(message, structure, boundary, addresses)
        body = self._build_body(message, html, structure, attachments, boundary, boundary_alt, header_encoder)

        return ComposedMessage(
            to=to,
            subject=header_encoder.encode(message.subject),
            headers=headers,
            body=body.encode("utf-8"),
            structure=structure,
            boundary=boundary if structure.multipart else None,
        )

    def _build_headers(
        self,
        message: MultipartEmail,
        structure: Structure,
        boundary: str,
        addresses: AddressEncoder,
    ) -> dict[str, str]:
        from_addr = addresses.encode(message.from_addr) or ""
        reply_to = addresses.encode(message.reply_to) if message.reply_to else from_addr

        headers = {
            "from": f"From: {from_addr}",
            "reply-to": f"Reply-To: {reply_to}",
            "mime-version": "MIME-Version: 1.0",
            "x-mailer": f"X-Mailer: {self.config.x_mailer}",
        }
        if structure.multipart:
            headers["content-type"] = f'Content-Type: {structure.shape.value}; boundary="{boundary}"'
        else:
            headers["content-type"] = f"Content-Type: text/plain; charset={message.charset}"
            headers["content-transfer-encoding"] = "Content-Transfer-Encoding: base64"

        headers.update(message.headers.items())
        return headers

    def _build_body(
        self,
        message: MultipartEmail,
        html: str | None,
        structure: Structure,
        attachments: Iterable[Attachment],
        boundary: str,
        boundary_alt: str,
        header_encoder: HeaderEncoder,
    ) -> str:
        charset = message.charset
        text_bytes = self._body_bytes(message.text, charset)
        html_bytes = self._body_bytes(html, charset)

        if not structure.multipart:
            return self._wrap(text_bytes) + NEWLINE

        chunks: list[str] = []
        if structure.body is BodyPart.ALTERNATIVE:
            chunks.append(f"--{boundary}{NEWLINE}")
            chunks.append(f'Content-Type: multipart/alternative; boundary="{boundary_alt}"{NEWLINE}{NEWLINE}')
            chunks.append(f"--{boundary_alt}{NEWLINE}")
            chunks.append(self._text_part("text/plain", charset, text_bytes))
            chunks.append(f"--{boundary_alt}{NEWLINE}")
            chunks.append(self._text_part("text/html", charset, html_bytes))
            chunks.append(f"--{boundary_alt}--{NEWLINE}{NEWLINE}")
        elif structure.body is BodyPart.TEXT:
            chunks.append(f"--{boundary}{NEWLINE}")
            chunks.append(self._text_part("text/plain", charset, text_bytes))
        elif structure.body is BodyPart.HTML:
            chunks.append(f"--{boundary}{NEWLINE}")
            chunks.append(self._text_part("text/html", charset, html_bytes))

        for att in attachments:
            name = header_encoder.encode(att.filename)
            chunks.append(f"--{boundary}{NEWLINE}")
            if att.cid:
                chunks.append(f"Content-ID: <{att.cid}>{NEWLINE}")
            chunks.append(f'Content-Type: {att.mime_type}; name="{name}"{NEWLINE}')
            chunks.append(f'Content-Disposition: attachment; filename="{name}"{NEWLINE}')
            chunks.append(f"Content-Transfer-Encoding: base64{NEWLINE}{NEWLINE}")
            chunks.append(self._wrap(att.data) + NEWLINE)

        chunks.append(f"--{boundary}--{NEWLINE}{NEWLINE}")
        return "".join(chunks)

    def _text_part(self, content_type: str, charset: str, data: bytes) -> str:
        return (
            f"Content-Type: {content_type}; charset={charset}{NEWLINE}"
            f"Content-Transfer-Encoding: base64{NEWLINE}{NEWLINE}"
            f"{self._wrap(data)}{NEWLINE}"
        )

    def _wrap(self, data: bytes) -> str:
        return wrap_base64(data, self.config.line_length)

    @staticmethod
    def _body_bytes(value: str | bytes | None, charset: str) -> bytes:
        if not value:
            return b""
        if isinstance(value, bytes):
            return value
        return value.encode(charset)
