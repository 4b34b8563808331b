# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Transports that deliver composed messages.

A transport receives exactly what the composer produced: the encoded
recipient list, the encoded subject, the body bytes and the header block.
It reports success as a boolean; composition never retries.

- SmtpSender: delivery through aiosmtplib
- DryRunSender: writes the raw message to a stream instead of sending it

Example:
    Sending through an SMTP relay::

        sender = SmtpSender(SmtpConfig(host="smtp.example.com", port=587, use_tls=True))
        mail = MultipartEmail(sender=sender)
"""

from __future__ import annotations

import asyncio
import sys
from typing import Protocol, TextIO

import aiosmtplib

from .config_loader import SmtpConfig
from .encoding import AddressEncoder
from .logger import get_logger

ENVELOPE_HEADERS = ("cc", "bcc")


class Sender(Protocol):
    """Interface of a message transport."""

    def send(self, to: str, subject: str, body: bytes, headers: str) -> bool:
        ...


def build_raw_message(to: str, subject: str, body: bytes, headers: str) -> bytes:
    """Assemble the full message with To and Subject ahead of the header block.

    Bcc lines are dropped from the transmitted data.
    """
    lines = [f"To: {to}", f"Subject: {subject}"]
    lines.extend(line for line in headers.split("\n") if line and not line.lower().startswith("bcc:"))
    return ("\n".join(lines) + "\n\n").encode("utf-8") + body


def header_value(headers: str, name: str) -> str | None:
    """Return the value of the first ``name:`` line in a header block."""
    prefix = f"{name.lower()}:"
    for line in headers.split("\n"):
        if line.lower().startswith(prefix):
            return line.split(":", 1)[1].strip()
    return None


class SmtpSender:
    """Deliver composed messages to an SMTP server with aiosmtplib.

    TLS behavior follows the port:
    - Port 465 with use_tls=True: Direct TLS (implicit TLS)
    - Other ports with use_tls=True: STARTTLS
    - use_tls=False: Plain SMTP

    Attributes:
        config: SMTP server settings.
    """

    def __init__(self, config: SmtpConfig):
        self.config = config
        self.logger = get_logger("SmtpSender")

    def envelope(self, to: str, headers: str) -> tuple[str, list[str]]:
        """Derive the envelope sender and recipients.

        The sender is the From mailbox; recipients come from the To list and
        any Cc or Bcc header.
        """
        mail_from = AddressEncoder.parse(header_value(headers, "from") or "").mailbox
        recipients = [address.mailbox for address in AddressEncoder().split(to)]
        for name in ENVELOPE_HEADERS:
            value = header_value(headers, name)
            if value:
                recipients.extend(address.mailbox for address in AddressEncoder().split(value))
        return mail_from, recipients

    def _client(self) -> aiosmtplib.SMTP:
        cfg = self.config
        if cfg.use_tls and cfg.port == 465:
            return aiosmtplib.SMTP(hostname=cfg.host, port=cfg.port, use_tls=True, start_tls=False, timeout=cfg.timeout)
        if cfg.use_tls:
            return aiosmtplib.SMTP(hostname=cfg.host, port=cfg.port, use_tls=False, start_tls=True, timeout=cfg.timeout)
        return aiosmtplib.SMTP(hostname=cfg.host, port=cfg.port, use_tls=False, start_tls=False, timeout=cfg.timeout)

    async def send_async(self, to: str, subject: str, body: bytes, headers: str) -> bool:
        if not self.config.enabled:
            self.logger.error("SMTP host is not configured, message to %s not sent", to)
            return False

        mail_from, recipients = self.envelope(to, headers)
        message = build_raw_message(to, subject, body, headers)
        smtp = self._client()
        try:
            await smtp.connect()
            try:
                if self.config.user and self.config.password:
                    await smtp.login(self.config.user, self.config.password)
                await smtp.sendmail(mail_from, recipients, message)
            finally:
                await smtp.quit()
        except (aiosmtplib.SMTPException, asyncio.TimeoutError, OSError) as e:
            self.logger.error("SMTP delivery to %s failed: %s", ", ".join(recipients), e)
            return False

        self.logger.info("Message delivered to %s", ", ".join(recipients))
        return True

    def send(self, to: str, subject: str, body: bytes, headers: str) -> bool:
        """Blocking wrapper around :meth:`send_async`."""
        return asyncio.run(self.send_async(to, subject, body, headers))


class DryRunSender:
    """Write messages to a text stream instead of delivering them.

    Attributes:
        messages: Raw bytes of every message handed to this sender.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream
        self.messages: list[bytes] = []

    def send(self, to: str, subject: str, body: bytes, headers: str) -> bool:
        message = build_raw_message(to, subject, body, headers)
        self.messages.append(message)
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(message.decode("utf-8"))
        stream.flush()
        return True
