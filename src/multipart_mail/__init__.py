# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Multipart email composition with inline images and RFC 2047 headers.

This package builds complete MIME messages from a handful of logical parts
and hands the result to a transport. Features include:

- Plain text, HTML and text+HTML (multipart/alternative) bodies
- File attachments and inline images referenced from HTML via ``cid:``
- RFC 2047 encoding of display names, subjects and attachment filenames
- Case-insensitive custom headers that may redefine any built-in header
- SMTP delivery through aiosmtplib, or a dry-run transport for previews

Example:
    Composing and sending a message::

        from multipart_mail import MultipartEmail, SmtpSender, SmtpConfig

        mail = MultipartEmail(sender=SmtpSender(SmtpConfig(host="localhost")))
        mail.from_addr = "Reports <reports@example.com>"
        mail.to = "Jane Doe <jane@example.com>, ops@example.com"
        mail.subject = "Monthly report"
        mail.text = "See attached."
        mail.html = '<p>See attached.</p><img src="logo.png">'
        mail.add_attachment("/srv/assets/logo.png", "image/png", "logo.png", add_cid=True)
        mail.send()
"""

__version__ = "1.1.0"

from .attachments import Attachment, AttachmentStore, Base64Fetcher, FilesystemFetcher, guess_mime
from .cid import CidRewriter
from .composer import ComposedMessage, MessageComposer
from .config_loader import AttachmentConfig, ComposerConfig, Settings, SmtpConfig, load_config
from .encoding import Address, AddressEncoder, HeaderEncoder, Recoder
from .errors import (
    AttachmentNotFound,
    EmptyRecipient,
    HeaderNotFound,
    InvalidAttachment,
    InvalidHeaderSyntax,
    MultipartMailError,
)
from .headers import HeaderMap
from .message import MultipartEmail
from .structure import Shape, Structure, StructurePlanner
from .tokens import TokenSource
from .transport import DryRunSender, Sender, SmtpSender

__all__ = [
    "__version__",
    "Address",
    "AddressEncoder",
    "Attachment",
    "AttachmentConfig",
    "AttachmentNotFound",
    "AttachmentStore",
    "Base64Fetcher",
    "CidRewriter",
    "ComposedMessage",
    "ComposerConfig",
    "DryRunSender",
    "EmptyRecipient",
    "FilesystemFetcher",
    "HeaderEncoder",
    "HeaderMap",
    "HeaderNotFound",
    "InvalidAttachment",
    "InvalidHeaderSyntax",
    "MessageComposer",
    "MultipartEmail",
    "MultipartMailError",
    "Recoder",
    "Sender",
    "Settings",
    "Shape",
    "SmtpConfig",
    "SmtpSender",
    "Structure",
    "StructurePlanner",
    "TokenSource",
    "guess_mime",
    "load_config",
]
