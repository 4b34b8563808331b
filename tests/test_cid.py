# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for inline image content-ID rewriting."""

from multipart_mail.attachments import Attachment
from multipart_mail.cid import CidRewriter


def image(filename="logo.png", cid="cid-abc", mime_type="image/png", att_id=1):
    return Attachment(id=att_id, data=b"png", mime_type=mime_type, filename=filename, cid=cid)


class TestCidRewriter:
    """Tests for CidRewriter.rewrite."""

    def test_double_quoted_src(self):
        html, rewritten = CidRewriter().rewrite('<img src="logo.png">', [image()])
        assert html == '<img src="cid:cid-abc">'
        assert rewritten is True

    def test_single_quoted_and_unquoted_src(self):
        html, _ = CidRewriter().rewrite("<img src='logo.png'><img src=logo.png>", [image()])
        assert html == "<img src='cid:cid-abc'><img src=cid:cid-abc>"

    def test_case_insensitive(self):
        html, rewritten = CidRewriter().rewrite('<IMG SRC="LOGO.PNG">', [image()])
        assert html == '<IMG src="cid:cid-abc">'
        assert rewritten

    def test_css_url(self):
        html, rewritten = CidRewriter().rewrite(
            "<div style=\"background: url('logo.png')\"></div><p style='x: url(logo.png)'>",
            [image()],
        )
        assert html == "<div style=\"background: url(cid:cid-abc)\"></div><p style='x: url(cid:cid-abc)'>"
        assert rewritten

    def test_all_occurrences(self):
        html, _ = CidRewriter().rewrite('<img src="logo.png"><img src="logo.png">', [image()])
        assert html.count("cid:cid-abc") == 2
        assert "logo.png" not in html

    def test_filename_is_literal(self):
        """Regex metacharacters in filenames are not interpreted."""
        source = '<img src="logoXpng"><img src="a+b(1).png">'
        html, _ = CidRewriter().rewrite(source, [image("logo.png"), image("a+b(1).png", cid="cid-xyz", att_id=2)])
        assert '<img src="logoXpng">' in html
        assert '<img src="cid:cid-xyz">' in html

    def test_longer_filename_untouched(self):
        source = '<img src="logo.png.bak"><img src=logo.png><img src="logo.png"/>'
        html, rewritten = CidRewriter().rewrite(source, [image()])
        assert html == '<img src="logo.png.bak"><img src=cid:cid-abc><img src="cid:cid-abc"/>'
        assert rewritten

    def test_longer_filename_only_is_not_related(self):
        html, rewritten = CidRewriter().rewrite('<img src="logo.png.bak">', [image()])
        assert html == '<img src="logo.png.bak">'
        assert rewritten is False

    def test_attachment_without_cid_ignored(self):
        html, rewritten = CidRewriter().rewrite('<img src="logo.png">', [image(cid=None)])
        assert html == '<img src="logo.png">'
        assert rewritten is False

    def test_non_image_ignored(self):
        html, rewritten = CidRewriter().rewrite('<a src="doc.pdf">', [image("doc.pdf", mime_type="application/pdf")])
        assert html == '<a src="doc.pdf">'
        assert rewritten is False

    def test_no_reference_not_flagged(self):
        html, rewritten = CidRewriter().rewrite("<p>No images</p>", [image()])
        assert html == "<p>No images</p>"
        assert rewritten is False

    def test_input_string_not_mutated(self):
        source = '<img src="logo.png">'
        CidRewriter().rewrite(source, [image()])
        assert source == '<img src="logo.png">'
