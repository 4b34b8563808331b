# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Unique token generation for MIME boundaries and content-IDs.

Tokens combine a random prefix drawn once per source, a lock-guarded
monotonic counter and fresh random bits. Two sources in the same process
therefore never rely on the counter alone, and a single source shared between
threads never hands out the same token twice.
"""

from __future__ import annotations

import itertools
import secrets
import threading


class TokenSource:
    """Thread-safe generator of collision-resistant tokens.

    Attributes:
        prefix: Random hex string fixed for the lifetime of the source.
    """

    def __init__(self, prefix: str | None = None, random_bytes: int = 6):
        self.prefix = prefix if prefix is not None else secrets.token_hex(4)
        self._random_bytes = random_bytes
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def next_token(self, label: str = "") -> str:
        """Return a new token, optionally prefixed with ``label``."""
        with self._lock:
            sequence = next(self._counter)
        return f"{label}{self.prefix}{sequence:08x}{secrets.token_hex(self._random_bytes)}"


default_tokens = TokenSource()
