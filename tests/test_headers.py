# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the custom header store."""

import pytest

from multipart_mail.errors import HeaderNotFound, InvalidHeaderSyntax
from multipart_mail.headers import HeaderMap, header_name


class TestHeaderName:
    """Tests for header_name parsing."""

    def test_lower_cases_name(self):
        assert header_name("X-Priority: 1") == "x-priority"

    def test_value_may_contain_colons(self):
        assert header_name("X-Link: https://example.com") == "x-link"

    @pytest.mark.parametrize("line", ["", "no colon here", "X-Empty:", ": value", "   : value"])
    def test_invalid(self, line):
        with pytest.raises(InvalidHeaderSyntax) as exc_info:
            header_name(line)
        assert exc_info.value.code == "invalid_header_syntax"


class TestHeaderMap:
    """Tests for HeaderMap."""

    def test_add_returns_key(self):
        headers = HeaderMap()
        assert headers.add("X-Priority: 1") == "x-priority"
        assert headers.get("X-PRIORITY") == "X-Priority: 1"

    def test_same_name_replaces_in_place(self):
        headers = HeaderMap()
        headers.add("X-First: 1")
        headers.add("X-Second: 2")
        headers.add("x-first: 3")

        assert len(headers) == 2
        assert headers.items() == [("x-first", "x-first: 3"), ("x-second", "X-Second: 2")]

    def test_get_missing(self):
        with pytest.raises(HeaderNotFound) as exc_info:
            HeaderMap().get("X-Missing")
        assert exc_info.value.name == "x-missing"

    def test_remove(self):
        headers = HeaderMap()
        headers.add("X-Tag: a")
        assert headers.remove("x-TAG") is True
        assert "X-Tag" not in headers
        assert len(headers) == 0

    def test_remove_missing_leaves_state(self):
        headers = HeaderMap()
        headers.add("X-Tag: a")
        with pytest.raises(HeaderNotFound):
            headers.remove("X-Other")
        assert list(headers) == ["x-tag"]

    def test_invalid_line_not_stored(self):
        headers = HeaderMap()
        with pytest.raises(InvalidHeaderSyntax):
            headers.add("garbage")
        assert len(headers) == 0
