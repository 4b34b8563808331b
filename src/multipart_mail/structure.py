# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Choose the MIME tree shape of a message.

A message is multipart as soon as it has an HTML body or at least one
attachment. Multipart messages are ``multipart/related`` when an inline image
reference was rewritten to ``cid:``, otherwise ``multipart/mixed``. Inside the
envelope, text and HTML together form a nested ``multipart/alternative``
part; a lone text or HTML body is a direct child of the envelope. Attachments
always follow as siblings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Shape(str, Enum):
    """Top-level content type of a composed message."""

    PLAIN = "text/plain"
    MIXED = "multipart/mixed"
    RELATED = "multipart/related"


class BodyPart(str, Enum):
    """Which text part(s) lead a multipart body."""

    NONE = "none"
    TEXT = "text"
    HTML = "html"
    ALTERNATIVE = "alternative"


@dataclass(frozen=True)
class Structure:
    """Result of planning.

    Attributes:
        shape: Top-level content type.
        body: Leading text part(s) of a multipart body; NONE for single-part.
        attachment_count: Number of attachment parts that follow.
    """

    shape: Shape
    body: BodyPart = BodyPart.NONE
    attachment_count: int = 0

    @property
    def multipart(self) -> bool:
        return self.shape is not Shape.PLAIN

    @property
    def alternative(self) -> bool:
        return self.body is BodyPart.ALTERNATIVE


class StructurePlanner:
    """Decide the structure from the presence of text, HTML and attachments."""

    def plan(
        self,
        text: str | bytes | None,
        html: str | bytes | None,
        attachment_count: int,
        related: bool = False,
    ) -> Structure:
        if not html and not attachment_count:
            return Structure(Shape.PLAIN)

        shape = Shape.RELATED if related else Shape.MIXED
        if text and html:
            body = BodyPart.ALTERNATIVE
        elif text:
            body = BodyPart.TEXT
        elif html:
            body = BodyPart.HTML
        else:
            body = BodyPart.NONE
        return Structure(shape, body, attachment_count)
