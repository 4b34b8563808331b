# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration loader for composition, SMTP delivery and attachments.

Settings are read from an INI-style configuration file and can be overridden
by environment variables prefixed with ``MPM_``. Every value has a default,
so a missing section simply means "use the defaults".

Example:
    Configuration file format (config.ini)::

        [composer]
        charset = UTF-8
        x_mailer = multipart-mail/1.1.0
        line_length = 76
        raise_on_empty_recipient = false

        [smtp]
        host = smtp.example.com
        port = 587
        user = mailer@example.com
        password = secret
        use_tls = true
        timeout = 10

        [attachments]
        # Base directory for relative attachment paths
        base_dir = /srv/mail/assets

    Loading it::

        settings = apply_env_overrides(load_config("/etc/multipart-mail/config.ini"))

Environment variables:
    MPM_CHARSET, MPM_SMTP_HOST, MPM_SMTP_PORT, MPM_SMTP_USER,
    MPM_SMTP_PASSWORD, MPM_SMTP_USE_TLS, MPM_ATTACHMENTS_BASE_DIR
"""

from __future__ import annotations

import configparser
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from multipart_mail import __version__
from multipart_mail.logger import get_logger

DEFAULT_X_MAILER = f"multipart-mail/{__version__}"
DEFAULT_LINE_LENGTH = 76

logger = get_logger("ConfigLoader")


@dataclass
class ComposerConfig:
    """Settings used when composing messages.

    Attributes:
        charset: Default declared charset for new messages.
        x_mailer: Value of the X-Mailer header.
        line_length: Width of base64 body lines.
        raise_on_empty_recipient: Raise EmptyRecipient on send instead of
            logging a warning and returning False.
    """

    charset: str = "UTF-8"
    x_mailer: str = DEFAULT_X_MAILER
    line_length: int = DEFAULT_LINE_LENGTH
    raise_on_empty_recipient: bool = False

    def __post_init__(self):
        if self.line_length < 1:
            raise ValueError(f"line_length must be at least 1, got {self.line_length}")


@dataclass
class SmtpConfig:
    """SMTP server settings for SmtpSender.

    Attributes:
        host: SMTP server hostname; None disables SMTP delivery.
        port: SMTP server port.
        user: Username for authentication, or None.
        password: Password for authentication, or None.
        use_tls: Implicit TLS on port 465, STARTTLS on other ports.
        timeout: Connection timeout in seconds.
    """

    host: str | None = None
    port: int = 25
    user: str | None = None
    password: str | None = None
    use_tls: bool = False
    timeout: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.host)


@dataclass
class AttachmentConfig:
    """Settings for loading attachment files.

    Attributes:
        base_dir: Base directory for relative filesystem paths.
    """

    base_dir: str | None = None


@dataclass
class Settings:
    """All configuration sections together."""

    composer: ComposerConfig = field(default_factory=ComposerConfig)
    smtp: SmtpConfig = field(default_factory=SmtpConfig)
    attachments: AttachmentConfig = field(default_factory=AttachmentConfig)


def load_config(config_path: str) -> Settings:
    """Load settings from an INI configuration file.

    Args:
        config_path: Path to config.ini file.

    Returns:
        Settings with parsed values, using defaults for any missing values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
    """
    if not Path(config_path).exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    config = configparser.ConfigParser()
    config.read(config_path)

    def get_str(section: str, key: str, default: str | None = None) -> str | None:
        value = config.get(section, key, fallback=default)
        return value.strip() if value else default

    def get_int(section: str, key: str, default: int) -> int:
        try:
            return config.getint(section, key, fallback=default)
        except ValueError:
            logger.warning(f"Invalid int for {section}.{key}, using default {default}")
            return default

    def get_float(section: str, key: str, default: float) -> float:
        try:
            return config.getfloat(section, key, fallback=default)
        except ValueError:
            logger.warning(f"Invalid float for {section}.{key}, using default {default}")
            return default

    def get_bool(section: str, key: str, default: bool) -> bool:
        try:
            return config.getboolean(section, key, fallback=default)
        except ValueError:
            logger.warning(f"Invalid boolean for {section}.{key}, using default {default}")
            return default

    for section in ("composer", "smtp", "attachments"):
        if not config.has_section(section):
            logger.info(f"No [{section}] section in config, using defaults")

    line_length = get_int("composer", "line_length", DEFAULT_LINE_LENGTH)
    if line_length < 1:
        logger.warning(f"Invalid composer.line_length {line_length}, using default {DEFAULT_LINE_LENGTH}")
        line_length = DEFAULT_LINE_LENGTH

    return Settings(
        composer=ComposerConfig(
            charset=get_str("composer", "charset", "UTF-8") or "UTF-8",
            x_mailer=get_str("composer", "x_mailer", DEFAULT_X_MAILER) or DEFAULT_X_MAILER,
            line_length=line_length,
            raise_on_empty_recipient=get_bool("composer", "raise_on_empty_recipient", False),
        ),
        smtp=SmtpConfig(
            host=get_str("smtp", "host"),
            port=get_int("smtp", "port", 25),
            user=get_str("smtp", "user"),
            password=get_str("smtp", "password"),
            use_tls=get_bool("smtp", "use_tls", False),
            timeout=get_float("smtp", "timeout", 10.0),
        ),
        attachments=AttachmentConfig(
            base_dir=get_str("attachments", "base_dir"),
        ),
    )


def apply_env_overrides(settings: Settings, environ: Mapping[str, str] | None = None) -> Settings:
    """Return a copy of ``settings`` with ``MPM_*`` environment overrides applied."""
    env = os.environ if environ is None else environ

    composer = settings.composer
    if env.get("MPM_CHARSET"):
        composer = replace(composer, charset=env["MPM_CHARSET"])

    smtp = settings.smtp
    if env.get("MPM_SMTP_HOST"):
        smtp = replace(smtp, host=env["MPM_SMTP_HOST"])
    if env.get("MPM_SMTP_PORT"):
        try:
            smtp = replace(smtp, port=int(env["MPM_SMTP_PORT"]))
        except ValueError:
            logger.warning(f"Invalid MPM_SMTP_PORT {env['MPM_SMTP_PORT']!r}, keeping {smtp.port}")
    if env.get("MPM_SMTP_USER"):
        smtp = replace(smtp, user=env["MPM_SMTP_USER"])
    if env.get("MPM_SMTP_PASSWORD"):
        smtp = replace(smtp, password=env["MPM_SMTP_PASSWORD"])
    if env.get("MPM_SMTP_USE_TLS"):
        smtp = replace(smtp, use_tls=env["MPM_SMTP_USE_TLS"].strip().lower() in ("1", "true", "yes", "on"))

    attachments = settings.attachments
    if env.get("MPM_ATTACHMENTS_BASE_DIR"):
        attachments = replace(attachments, base_dir=env["MPM_ATTACHMENTS_BASE_DIR"])

    return Settings(composer=composer, smtp=smtp, attachments=attachments)
