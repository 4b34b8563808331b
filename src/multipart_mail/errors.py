# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception types raised while building and composing messages.

Every exception carries a ``code`` attribute with a stable machine readable
identifier, so callers and log processors can branch on it without parsing
messages.

Only ``EmptyRecipient`` is ever fatal for a send. The other errors are raised
by the low-level stores and turned into logged warnings plus a failure return
value by :class:`multipart_mail.message.MultipartEmail`.
"""

from __future__ import annotations


class MultipartMailError(RuntimeError):
    """Base class for all composition errors."""

    code = "multipart_mail_error"

    def __init__(self, message: str):
        super().__init__(message)


class EmptyRecipient(MultipartMailError):
    """Raised when a message is composed or sent without a TO address."""

    code = "empty_recipient"

    def __init__(self, message: str = "Send failed, TO is empty!"):
        super().__init__(message)


class InvalidAttachment(MultipartMailError):
    """Raised when an attachment lacks data, MIME type or filename."""

    code = "invalid_attachment"

    def __init__(self, message: str = "Failed to add an attachment!"):
        super().__init__(message)


class InvalidHeaderSyntax(MultipartMailError):
    """Raised when a custom header line is not of the ``Name: value`` form."""

    code = "invalid_header_syntax"

    def __init__(self, header: str):
        super().__init__(f'Invalid header "{header}"')
        self.header = header


class HeaderNotFound(MultipartMailError):
    """Raised when looking up or removing an unknown custom header."""

    code = "header_not_found"

    def __init__(self, name: str):
        super().__init__(f'Header "{name}" not found')
        self.name = name


class AttachmentNotFound(MultipartMailError):
    """Raised when removing an attachment id that is not stored."""

    code = "attachment_not_found"

    def __init__(self, attachment_id: int):
        super().__init__(f"Attachment {attachment_id} not found")
        self.attachment_id = attachment_id
