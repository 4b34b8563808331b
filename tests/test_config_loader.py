# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for configuration loading from config.ini and MPM_* variables."""

import pytest

from multipart_mail.config_loader import (
    DEFAULT_X_MAILER,
    ComposerConfig,
    Settings,
    apply_env_overrides,
    load_config,
)


def test_load_full_config(tmp_path):
    """All sections are parsed into their dataclasses."""
    config_file = tmp_path / "config.ini"
    config_file.write_text("""
[composer]
charset = KOI8-R
x_mailer = Acme Mailer
line_length = 64
raise_on_empty_recipient = yes

[smtp]
host = smtp.example.com
port = 587
user = mailer@example.com
password = secret
use_tls = true
timeout = 5.5

[attachments]
base_dir = /srv/mail/assets
""")

    settings = load_config(str(config_file))

    assert settings.composer.charset == "KOI8-R"
    assert settings.composer.x_mailer == "Acme Mailer"
    assert settings.composer.line_length == 64
    assert settings.composer.raise_on_empty_recipient is True
    assert settings.smtp.host == "smtp.example.com"
    assert settings.smtp.port == 587
    assert settings.smtp.user == "mailer@example.com"
    assert settings.smtp.password == "secret"
    assert settings.smtp.use_tls is True
    assert settings.smtp.timeout == 5.5
    assert settings.smtp.enabled
    assert settings.attachments.base_dir == "/srv/mail/assets"


def test_missing_sections_use_defaults(tmp_path):
    config_file = tmp_path / "empty.ini"
    config_file.write_text("[other]\nkey = value\n")

    settings = load_config(str(config_file))

    assert settings == Settings()
    assert settings.composer.x_mailer == DEFAULT_X_MAILER
    assert settings.composer.line_length == 76
    assert not settings.smtp.enabled


def test_invalid_numbers_fall_back(tmp_path, caplog):
    config_file = tmp_path / "bad.ini"
    config_file.write_text("""
[composer]
line_length = wide
raise_on_empty_recipient = maybe

[smtp]
port = twenty-five
timeout = soon
""")

    settings = load_config(str(config_file))

    assert settings.composer.line_length == 76
    assert settings.composer.raise_on_empty_recipient is False
    assert settings.smtp.port == 25
    assert settings.smtp.timeout == 10.0
    assert "Invalid int for smtp.port" in caplog.text


@pytest.mark.parametrize("value", ["0", "-4"])
def test_non_positive_line_length_falls_back(tmp_path, caplog, value):
    config_file = tmp_path / "config.ini"
    config_file.write_text(f"[composer]\nline_length = {value}\n")

    settings = load_config(str(config_file))

    assert settings.composer.line_length == 76
    assert "Invalid composer.line_length" in caplog.text


def test_composer_config_rejects_non_positive_line_length():
    with pytest.raises(ValueError, match="line_length must be at least 1"):
        ComposerConfig(line_length=0)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config(str(tmp_path / "missing.ini"))


def test_env_overrides():
    settings = apply_env_overrides(Settings(), {
        "MPM_CHARSET": "ISO-8859-1",
        "MPM_SMTP_HOST": "relay.local",
        "MPM_SMTP_PORT": "2525",
        "MPM_SMTP_USER": "bot",
        "MPM_SMTP_PASSWORD": "pw",
        "MPM_SMTP_USE_TLS": "true",
        "MPM_ATTACHMENTS_BASE_DIR": "/tmp/files",
    })

    assert settings.composer.charset == "ISO-8859-1"
    assert settings.smtp.host == "relay.local"
    assert settings.smtp.port == 2525
    assert settings.smtp.user == "bot"
    assert settings.smtp.password == "pw"
    assert settings.smtp.use_tls is True
    assert settings.attachments.base_dir == "/tmp/files"


def test_env_overrides_do_not_mutate_input():
    original = Settings()
    apply_env_overrides(original, {"MPM_SMTP_HOST": "relay.local"})
    assert original.smtp.host is None


def test_env_invalid_port_kept(caplog):
    settings = apply_env_overrides(Settings(), {"MPM_SMTP_PORT": "abc"})
    assert settings.smtp.port == 25
    assert "Invalid MPM_SMTP_PORT" in caplog.text
