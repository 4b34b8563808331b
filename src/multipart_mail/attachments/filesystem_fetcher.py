# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Load attachment payloads from the local filesystem.

MultipartEmail.add_attachment calls this loader unless the payload is passed
directly. Absolute paths are read as given. Relative paths are resolved
against the base directory (``[attachments] base_dir`` or the message file's
directory in the CLI) and must not leave it; without a base directory they
are read relative to the working directory.

Example:
    Loading an inline logo next to a message file::

        fetcher = FilesystemFetcher(base_dir="/srv/mail/assets")
        logo = fetcher.fetch("logos/header.png")
"""

from __future__ import annotations

from pathlib import Path


class FilesystemFetcher:
    """Read attachment files, confined to ``base_dir`` when one is set.

    Attributes:
        base_dir: Resolved base directory, or None.
    """

    def __init__(self, base_dir: str | None = None):
        self.base_dir: Path | None = Path(base_dir).resolve() if base_dir else None

    def fetch(self, path: str) -> bytes:
        """Return the bytes of the attachment file at ``path``.

        Raises:
            ValueError: Empty path, path outside the base directory, or not
                a regular file.
            FileNotFoundError: If the file does not exist.
        """
        if not path:
            raise ValueError("Empty path provided")

        target = self.locate(str(path))
        if not target.exists():
            raise FileNotFoundError(f"File not found: {target}")
        if not target.is_file():
            raise ValueError(f"Not a regular file: {target}")
        return target.read_bytes()

    def locate(self, path: str) -> Path:
        """Resolve ``path`` against the base directory and check confinement."""
        candidate = Path(path)
        if not candidate.is_absolute() and self.base_dir is not None:
            candidate = self.base_dir / candidate
        target = candidate.resolve()

        if self.base_dir is not None and not target.is_relative_to(self.base_dir):
            raise ValueError(f"Path traversal detected: attachment '{path}' is outside {self.base_dir}")
        return target
