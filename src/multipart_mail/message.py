# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Message builder with attachments, custom headers and delivery.

MultipartEmail is the public entry point. Callers set the body and address
fields as attributes, add attachments and headers, then call :meth:`send`
(or :meth:`compose` to get the bytes without delivering them).

Problems that do not prevent sending (an attachment without data, a malformed
header line, removing something that is not there) are logged as warnings and
reported through the return value. A missing TO address aborts the send; it
is raised or logged depending on ``raise_on_empty_recipient``.

Example:
    Sending an HTML message with an inline logo::

        mail = MultipartEmail(sender=sender)
        mail.from_addr = "Shop <shop@example.com>"
        mail.to = "customer@example.com"
        mail.subject = "Your order"
        mail.html = '<img src="logo.png"><p>Thanks!</p>'
        mail.add_attachment(logo_bytes, "image/png", "logo.png", is_data=True, add_cid=True)
        mail.add_header("X-Priority: 1")
        mail.send()
"""

from __future__ import annotations

from .attachments import AttachmentStore, FilesystemFetcher
from .composer import ComposedMessage, MessageComposer
from .errors import EmptyRecipient, InvalidAttachment, MultipartMailError
from .headers import HeaderMap
from .logger import get_logger
from .tokens import TokenSource
from .transport import Sender

logger = get_logger("MultipartEmail")


class MultipartEmail:
    """A message under construction.

    Attributes:
        charset: Declared charset of text, HTML and header values; defaults
            to the composer configuration (UTF-8).
        text: Plain-text body.
        html: HTML body; bytes are taken to be in ``charset``.
        from_addr: Sender, ``addr`` or ``"Name <addr>"``.
        to: Recipients separated by ``,`` or ``;``.
        reply_to: Reply address; defaults to the sender when unset.
        subject: Subject line.
        attachments: Attachment records in insertion order.
        headers: Custom header lines keyed by lower-cased name.
    """

    def __init__(
        self,
        charset: str | None = None,
        *,
        sender: Sender | None = None,
        composer: MessageComposer | None = None,
        fetcher: FilesystemFetcher | None = None,
        tokens: TokenSource | None = None,
        raise_on_empty_recipient: bool | None = None,
    ):
        self.text: str | bytes | None = None
        self.html: str | bytes | None = None
        self.from_addr: str | None = None
        self.to: str | None = None
        self.reply_to: str | None = None
        self.subject: str | None = None

        self.attachments = AttachmentStore(tokens)
        self.headers = HeaderMap()

        self.sender = sender
        self.composer = composer or MessageComposer(tokens=tokens)
        self.charset = charset or self.composer.config.charset
        self.fetcher = fetcher or FilesystemFetcher()
        if raise_on_empty_recipient is None:
            raise_on_empty_recipient = self.composer.config.raise_on_empty_recipient
        self.raise_on_empty_recipient = raise_on_empty_recipient

    def add_attachment(
        self,
        file: str | bytes,
        mime_type: str,
        name: str,
        is_data: bool = False,
        add_cid: bool = False,
    ) -> int | None:
        """Attach a file.

        Args:
            file: Path of the file to load, or the payload itself.
            mime_type: MIME type of the payload.
            name: Filename shown to the recipient and matched in the HTML.
            is_data: Treat ``file`` as the payload instead of a path.
            add_cid: Assign a content-ID so the HTML can embed the file.

        Returns:
            The attachment id, or None if the attachment was rejected.
        """
        if is_data:
            data = file
        else:
            try:
                data = self.fetcher.fetch(file)
            except (OSError, ValueError) as e:
                logger.warning("Failed to read attachment %s: %s", file, e)
                return None
        try:
            return self.attachments.add(data, mime_type, name, add_cid=add_cid)
        except InvalidAttachment as e:
            logger.warning("%s (code=%s, name=%r)", e, e.code, name)
            return None

    def remove_attachment(self, attachment_id: int) -> bool:
        return self._report(self.attachments.remove, attachment_id, default=False)

    def add_header(self, header: str) -> str | None:
        """Add a ``"Name: value"`` header line.

        Any header, built-in ones included, can be redefined this way.

        Returns:
            The lower-cased header name, or None if the line is malformed.
        """
        return self._report(self.headers.add, header, default=None)

    def get_header(self, name: str) -> str | None:
        return self._report(self.headers.get, name, default=None)

    def remove_header(self, name: str) -> bool:
        return self._report(self.headers.remove, name, default=False)

    def compose(self) -> ComposedMessage:
        """Compose the message without sending it.

        Raises:
            EmptyRecipient: If no TO address is set.
        """
        return self.composer.compose(self)

    def send(self, raise_on_empty: bool | None = None, sender: Sender | None = None) -> bool:
        """Compose the message and hand it to the sender.

        Args:
            raise_on_empty: Raise EmptyRecipient instead of returning False
                when TO is empty. Defaults to ``raise_on_empty_recipient``.
            sender: Transport to use instead of the one given at construction.

        Returns:
            The transport's result.

        Raises:
            EmptyRecipient: If TO is empty and raising was requested.
            ValueError: If no sender is configured.
        """
        transport = sender or self.sender
        if transport is None:
            raise ValueError("No sender configured")
        if raise_on_empty is None:
            raise_on_empty = self.raise_on_empty_recipient

        try:
            composed = self.compose()
        except EmptyRecipient as e:
            if raise_on_empty:
                raise
            logger.warning("%s (code=%s)", e, e.code)
            return False

        return bool(transport.send(composed.to, composed.subject, composed.body, composed.header_block))

    @staticmethod
    def _report(operation, argument, default):
        try:
            return operation(argument)
        except MultipartMailError as e:
            logger.warning("%s (code=%s)", e, e.code)
            return default
