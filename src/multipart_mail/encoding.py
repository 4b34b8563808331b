# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""RFC 2047 encoding of header values and mailbox display names.

Header text (subject, attachment filenames) is always emitted as a base64
encoded-word, even when it is plain ASCII. Addresses keep their mailbox
verbatim and only the display name is encoded.

Example:
    Encoding a recipient list::

        encoder = AddressEncoder(HeaderEncoder())
        encoder.encode_list("Jane <jane@example.com>; ops@example.com")
        # '=?UTF-8?B?SmFuZQ==?= <jane@example.com>, ops@example.com'
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass

ADDRESS_PATTERN = re.compile(r"^(.+?)\s*<(.+@.+)>$", re.IGNORECASE)
ADDRESS_SEPARATOR = re.compile(r"[,;]")
UTF8_ALIASES = {"UTF-8", "UTF8"}


def is_utf8(charset: str) -> bool:
    """Check whether a charset name designates UTF-8."""
    return charset.strip().upper().replace("_", "-") in UTF8_ALIASES


class Recoder:
    """Convert bytes from a source charset to UTF-8 using Python codecs."""

    def recode(self, data: bytes, source_charset: str) -> bytes:
        return data.decode(source_charset).encode("utf-8")


@dataclass(frozen=True)
class Address:
    """Parsed view of an address string.

    Attributes:
        mailbox: The ``local@domain`` part.
        name: Display name, or None for a bare mailbox.
    """

    mailbox: str
    name: str | None = None


class HeaderEncoder:
    """Encode header text as an RFC 2047 ``=?UTF-8?B?...?=`` word.

    Attributes:
        charset: Declared charset of the message the values belong to.
        recoder: Charset converter used when ``charset`` is not UTF-8.
    """

    def __init__(self, charset: str = "UTF-8", recoder: Recoder | None = None):
        self.charset = charset
        self.recoder = recoder or Recoder()

    def to_utf8(self, value: str | bytes) -> bytes:
        """Return the UTF-8 bytes of ``value``.

        Bytes are taken to be in the declared charset and pass through
        untouched when that charset is UTF-8. Text is already Unicode.
        """
        if isinstance(value, str):
            return value.encode("utf-8")
        if is_utf8(self.charset):
            return bytes(value)
        return self.recoder.recode(value, self.charset)

    def encode(self, value: str | bytes | None) -> str:
        encoded = base64.b64encode(self.to_utf8(value or "")).decode("ascii")
        return f"=?UTF-8?B?{encoded}?="


class AddressEncoder:
    """Encode display names in ``"Name <mailbox>"`` strings."""

    def __init__(self, header_encoder: HeaderEncoder | None = None):
        self.header_encoder = header_encoder or HeaderEncoder()

    @staticmethod
    def parse(raw: str) -> Address:
        """Split an address string into display name and mailbox.

        Strings without an angle-bracketed mailbox are returned as a bare
        mailbox with no name.
        """
        value = (raw or "").strip()
        match = ADDRESS_PATTERN.match(value)
        if not match:
            return Address(mailbox=value)
        return Address(mailbox=match.group(2), name=match.group(1))

    def encode(self, raw: str | None) -> str | None:
        """Encode the display name of a single address.

        Input that does not look like ``Name <mailbox>`` is returned
        unchanged; address syntax is the caller's responsibility.
        """
        match = ADDRESS_PATTERN.match((raw or "").strip())
        if not match:
            return raw
        name, mailbox = match.groups()
        return f"{self.header_encoder.encode(name)} <{mailbox}>"

    def encode_list(self, raw: str) -> str:
        """Encode a comma or semicolon separated address list.

        Each segment is encoded independently and the result is joined with
        ``", "``. Blank segments are dropped.
        """
        segments = [segment.strip() for segment in ADDRESS_SEPARATOR.split(raw or "")]
        return ", ".join(self.encode(segment) for segment in segments if segment)

    def split(self, raw: str) -> list[Address]:
        """Parse every address of a comma or semicolon separated list."""
        return [self.parse(segment) for segment in ADDRESS_SEPARATOR.split(raw or "") if segment.strip()]
