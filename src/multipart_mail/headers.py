# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Case-insensitive store for caller supplied header lines.

Headers are kept as the raw ``"Name: value"`` line the caller supplied and
keyed by the lower-cased name, so adding ``X-Priority`` after ``x-priority``
replaces the earlier line in place. Any header, built-in ones included, can be
redefined this way when the message is composed.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from .errors import HeaderNotFound, InvalidHeaderSyntax

HEADER_PATTERN = re.compile(r"^([^:]+):.+")


def header_name(line: str) -> str:
    """Return the lower-cased name of a header line.

    Raises:
        InvalidHeaderSyntax: If the line is not of the ``Name: value`` form.
    """
    match = HEADER_PATTERN.match(line or "")
    if not match or not match.group(1).strip():
        raise InvalidHeaderSyntax(line)
    return match.group(1).strip().lower()


class HeaderMap:
    """Ordered mapping of lower-cased header name to full header line."""

    def __init__(self) -> None:
        self._lines: dict[str, str] = {}

    def add(self, line: str) -> str:
        """Store a header line, replacing any header with the same name.

        Returns:
            The lower-cased header name used as key.
        """
        key = header_name(line)
        self._lines[key] = line
        return key

    def get(self, name: str) -> str:
        key = name.lower()
        if key not in self._lines:
            raise HeaderNotFound(key)
        return self._lines[key]

    def remove(self, name: str) -> bool:
        key = name.lower()
        if key not in self._lines:
            raise HeaderNotFound(key)
        del self._lines[key]
        return True

    def items(self) -> list[tuple[str, str]]:
        return list(self._lines.items())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._lines

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)
