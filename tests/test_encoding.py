# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for RFC 2047 header and address encoding."""

import base64

import pytest

from multipart_mail.encoding import Address, AddressEncoder, HeaderEncoder, Recoder, is_utf8


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class TestHeaderEncoder:
    """Tests for HeaderEncoder."""

    def test_ascii_is_always_encoded(self):
        """Plain ASCII subjects are still emitted as encoded-words."""
        assert HeaderEncoder().encode("Hello") == f"=?UTF-8?B?{b64('Hello')}?="

    def test_non_ascii(self):
        assert HeaderEncoder().encode("Привет, мир") == f"=?UTF-8?B?{b64('Привет, мир')}?="

    def test_none_encodes_empty(self):
        assert HeaderEncoder().encode(None) == "=?UTF-8?B??="

    def test_encode_is_deterministic(self):
        encoder = HeaderEncoder()
        assert encoder.encode("Report é") == encoder.encode("Report é")

    def test_utf8_bytes_pass_through(self):
        """Bytes in a UTF-8 message are not recoded."""

        class FailingRecoder(Recoder):
            def recode(self, data, source_charset):
                raise AssertionError("recode must not be called for UTF-8")

        encoder = HeaderEncoder("utf-8", FailingRecoder())
        assert encoder.to_utf8("é".encode("utf-8")) == "é".encode("utf-8")

    def test_non_utf8_charset_is_recoded(self):
        """Values in a legacy charset are converted before encoding."""
        calls = []

        class TrackingRecoder(Recoder):
            def recode(self, data, source_charset):
                calls.append((data, source_charset))
                return super().recode(data, source_charset)

        encoder = HeaderEncoder("windows-1251", TrackingRecoder())
        raw = "Тест".encode("windows-1251")

        assert encoder.encode(raw) == f"=?UTF-8?B?{b64('Тест')}?="
        assert calls == [(raw, "windows-1251")]

    def test_text_in_non_utf8_charset(self):
        encoder = HeaderEncoder("ISO-8859-1")
        assert encoder.encode("café") == f"=?UTF-8?B?{b64('café')}?="

    @pytest.mark.parametrize("charset", ["UTF-8", "utf-8", "utf8", "UTF_8"])
    def test_is_utf8_aliases(self, charset):
        assert is_utf8(charset)

    def test_is_utf8_rejects_other(self):
        assert not is_utf8("KOI8-R")


class TestAddressEncoder:
    """Tests for AddressEncoder."""

    def test_named_address(self):
        assert AddressEncoder().encode("Jane Doe <jane@example.com>") == f"=?UTF-8?B?{b64('Jane Doe')}?= <jane@example.com>"

    def test_named_address_without_space(self):
        assert AddressEncoder().encode("Jane<jane@example.com>") == f"=?UTF-8?B?{b64('Jane')}?= <jane@example.com>"

    def test_surrounding_whitespace_is_trimmed(self):
        assert AddressEncoder().encode("  Jane <jane@example.com>  ") == f"=?UTF-8?B?{b64('Jane')}?= <jane@example.com>"

    def test_bare_address_unchanged(self):
        assert AddressEncoder().encode("jane@example.com") == "jane@example.com"

    def test_malformed_input_passes_through(self):
        assert AddressEncoder().encode("not an address <nope>") == "not an address <nope>"

    def test_none(self):
        assert AddressEncoder().encode(None) is None

    def test_encode_list_mixed_separators(self):
        """Commas and semicolons both split the list; output uses ', '."""
        result = AddressEncoder().encode_list("A <a@x>, b@y; C <c@z>")
        assert result == f"=?UTF-8?B?{b64('A')}?= <a@x>, b@y, =?UTF-8?B?{b64('C')}?= <c@z>"

    def test_encode_list_single(self):
        assert AddressEncoder().encode_list("b@y") == "b@y"

    def test_encode_list_skips_blank_segments(self):
        assert AddressEncoder().encode_list("a@x,, b@y;") == "a@x, b@y"

    def test_parse_named(self):
        assert AddressEncoder.parse("Jane <jane@example.com>") == Address("jane@example.com", "Jane")

    def test_parse_bare(self):
        assert AddressEncoder.parse(" jane@example.com ") == Address("jane@example.com")

    def test_split_encoded_list(self):
        encoded = AddressEncoder().encode_list("Jane <jane@example.com>; ops@example.com")
        assert [a.mailbox for a in AddressEncoder().split(encoded)] == ["jane@example.com", "ops@example.com"]
