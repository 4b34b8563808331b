# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command-line interface for multipart-mail.

Messages are described in JSON files (see :mod:`multipart_mail.models`).

Usage:
    multipart-mail compose message.json [--output message.eml]
    multipart-mail send message.json --config config.ini
    multipart-mail send message.json --dry-run
    multipart-mail inspect message.json

Example:
    $ MPM_SMTP_HOST=localhost MPM_SMTP_PORT=1025 multipart-mail send welcome.json
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from multipart_mail import __version__
from multipart_mail.attachments import FilesystemFetcher
from multipart_mail.composer import MessageComposer
from multipart_mail.config_loader import Settings, apply_env_overrides, load_config
from multipart_mail.errors import MultipartMailError
from multipart_mail.message import MultipartEmail
from multipart_mail.models import MessageSpec
from multipart_mail.transport import DryRunSender, SmtpSender

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def load_settings(config_path: str | None) -> Settings:
    """Load settings from the config file (if any) and MPM_* variables."""
    settings = load_config(config_path) if config_path else Settings()
    return apply_env_overrides(settings)


def load_message(message_file: str, settings: Settings) -> MultipartEmail:
    """Parse a JSON message file into a ready-to-compose MultipartEmail.

    Raises:
        click.ClickException: If the file is not valid JSON or fails validation.
    """
    try:
        data: Any = json.loads(Path(message_file).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {message_file}: {e}") from e

    try:
        spec = MessageSpec.model_validate(data)
    except ValidationError as e:
        raise click.ClickException(f"Invalid message file {message_file}:\n{e}") from e

    base_dir = settings.attachments.base_dir or str(Path(message_file).resolve().parent)
    composer = MessageComposer(config=settings.composer)
    try:
        return spec.build(fetcher=FilesystemFetcher(base_dir=base_dir), composer=composer)
    except MultipartMailError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Logging level (default: MPM_LOG_LEVEL or WARNING).")
def main(log_level: str | None) -> None:
    """multipart-mail: compose and send MIME email messages."""
    level = (log_level or os.getenv("MPM_LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


@main.command("compose")
@click.argument("message_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to config.ini.")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), help="Write the message here instead of stdout.")
def compose_cmd(message_file: str, config_path: str | None, output: str | None) -> None:
    """Compose MESSAGE_FILE and print the raw message."""
    mail = load_message(message_file, load_settings(config_path))
    try:
        raw = mail.compose().as_bytes()
    except MultipartMailError as e:
        print_error(str(e))
        sys.exit(1)

    if output:
        Path(output).write_bytes(raw)
        print_success(f"Message written to {output} ({len(raw)} bytes)")
    else:
        click.echo(raw.decode("utf-8"), nl=False)


@main.command("send")
@click.argument("message_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to config.ini.")
@click.option("--dry-run", is_flag=True, help="Print the message instead of sending it.")
def send_cmd(message_file: str, config_path: str | None, dry_run: bool) -> None:
    """Compose MESSAGE_FILE and deliver it over SMTP."""
    settings = load_settings(config_path)
    mail = load_message(message_file, settings)

    if dry_run:
        sender = DryRunSender(click.get_text_stream("stdout"))
    elif not settings.smtp.enabled:
        print_error("SMTP host is not configured (set smtp.host or MPM_SMTP_HOST)")
        sys.exit(1)
    else:
        sender = SmtpSender(settings.smtp)

    try:
        sent = mail.send(raise_on_empty=True, sender=sender)
    except MultipartMailError as e:
        print_error(str(e))
        sys.exit(1)

    if not sent:
        print_error(f"Delivery to {mail.to} failed")
        sys.exit(1)
    if not dry_run:
        print_success(f"Message sent to {mail.to}")


@main.command("inspect")
@click.argument("message_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to config.ini.")
def inspect_cmd(message_file: str, config_path: str | None) -> None:
    """Show the MIME structure MESSAGE_FILE would be composed into."""
    mail = load_message(message_file, load_settings(config_path))
    try:
        composed = mail.compose()
    except MultipartMailError as e:
        print_error(str(e))
        sys.exit(1)

    structure = composed.structure
    console.print(f"[bold]Content-Type:[/bold] {composed.content_type}")
    console.print(f"[bold]Body:[/bold] {structure.body.value}")
    console.print(f"[bold]Size:[/bold] {len(composed.body)} bytes")

    if not len(mail.attachments):
        console.print("[dim]No attachments[/dim]")
        return

    table = Table(title="Attachments")
    table.add_column("ID", style="cyan")
    table.add_column("Filename")
    table.add_column("MIME type")
    table.add_column("Size", justify="right")
    table.add_column("Content-ID", style="dim")
    for att in mail.attachments:
        table.add_row(str(att.id), att.filename, att.mime_type, str(att.size), att.cid or "-")
    console.print(table)


if __name__ == "__main__":
    main()
