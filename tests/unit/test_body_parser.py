"""
Unit tests for the top-level body parser (body_parser.py).

Tests cover:
- Classification (HTML wins, text, raw fallback)
- Residual quoted-printable rescue pass
- HTML sniffing reclassification and its idempotence
- parse_body end-to-end over the sample messages
- Fallback to the raw message on unexpected failures
"""

import pytest

from mailbody.models.parsed_body import AccumulatedResult, BodyKind, ParsedBody
from mailbody.parsing import body_parser
from mailbody.parsing.body_parser import (
    classify,
    decode_body,
    has_residual_encoding,
    looks_like_html,
    parse_body,
    reclassify,
    rescue_residual_encoding,
)
from tests.fixtures.emails import (
    HTML_QUOTED_PRINTABLE_SANITIZED,
    NESTED_HTML,
    SAMPLE_MESSAGES,
)


class TestClassify:
    """Tests for classify() function."""

    @pytest.mark.unit
    def test_html_wins_over_text(self):
        """Test html buffer is chosen when both buffers are filled."""
        parsed = classify(AccumulatedResult(html="<p>h</p>", text="t"), "raw")
        assert parsed == ParsedBody(kind=BodyKind.HTML, content="<p>h</p>")

    @pytest.mark.unit
    def test_text_when_no_html(self):
        """Test text buffer is chosen when there is no HTML."""
        parsed = classify(AccumulatedResult(text="t"), "raw")
        assert parsed == ParsedBody(kind=BodyKind.TEXT, content="t")

    @pytest.mark.unit
    def test_raw_fallback(self):
        """Test the raw message is used when the walk produced nothing."""
        parsed = classify(AccumulatedResult(), "raw")
        assert parsed == ParsedBody(kind=BodyKind.TEXT, content="raw")


class TestRescueResidualEncoding:
    """Tests for has_residual_encoding() and rescue_residual_encoding()."""

    @pytest.mark.unit
    @pytest.mark.parametrize("content", ['href=3D"x"', "a=3db"])
    def test_detects_both_cases(self, content):
        """Test upper and lower case markers are detected."""
        assert has_residual_encoding(content)

    @pytest.mark.unit
    def test_no_marker(self):
        """Test content without markers is left alone."""
        parsed = ParsedBody(kind=BodyKind.TEXT, content="a=b =3 =3E")
        assert not has_residual_encoding(parsed.content)
        assert rescue_residual_encoding(parsed) is parsed

    @pytest.mark.unit
    def test_decodes_whole_content(self):
        """Test every escape in the content is decoded, not only =3D."""
        parsed = ParsedBody(kind=BodyKind.HTML, content='<a href=3D"x">Caf=C3=A9</a>')
        rescued = rescue_residual_encoding(parsed)

        assert rescued.content == '<a href="x">Café</a>'
        assert rescued.kind is BodyKind.HTML

    @pytest.mark.unit
    def test_applied_once(self):
        """Test the rescue does not re-check its own output."""
        parsed = ParsedBody(kind=BodyKind.TEXT, content="a=3D3Db")
        assert rescue_residual_encoding(parsed).content == "a=3Db"

    @pytest.mark.unit
    def test_undecodable_content_unchanged(self):
        """Test invalid UTF-8 after decoding keeps the original content."""
        parsed = ParsedBody(kind=BodyKind.TEXT, content="=3D=FF")
        assert rescue_residual_encoding(parsed).content == "=3D=FF"


class TestReclassify:
    """Tests for looks_like_html() and reclassify()."""

    @pytest.mark.unit
    @pytest.mark.parametrize("content", ["<HTML><p>x", "<body>", "a</div>", "<Body class='x'>"])
    def test_html_markers_found(self, content):
        """Test the check recognises html, body and closing div tags."""
        assert looks_like_html(content)

    @pytest.mark.unit
    @pytest.mark.parametrize("content", ["<p>x</p>", "<div>unclosed", "html body div", ""])
    def test_html_markers_absent(self, content):
        """Test other markup and bare words are not matched."""
        assert not looks_like_html(content)

    @pytest.mark.unit
    def test_text_promoted_to_html(self):
        """Test text that looks like HTML becomes html."""
        parsed = ParsedBody(kind=BodyKind.TEXT, content="<div>x</div>")
        assert reclassify(parsed).kind is BodyKind.HTML

    @pytest.mark.unit
    def test_plain_text_unchanged(self):
        """Test ordinary text stays text."""
        parsed = ParsedBody(kind=BodyKind.TEXT, content="hello <there>")
        assert reclassify(parsed) is parsed

    @pytest.mark.unit
    def test_idempotent_on_html(self):
        """Test re-applying to an html body changes nothing."""
        parsed = ParsedBody(kind=BodyKind.HTML, content="<p>no marker match</p>")

        once = reclassify(parsed)
        twice = reclassify(once)

        assert once == parsed
        assert twice == once

    @pytest.mark.unit
    def test_idempotent_after_promotion(self):
        """Test a promoted body is stable under further reclassification."""
        once = reclassify(ParsedBody(kind=BodyKind.TEXT, content="<body>x</body>"))
        assert reclassify(once) == once


class TestDecodeBody:
    """Tests for decode_body() function (no sanitization)."""

    @pytest.mark.unit
    def test_no_delimiter_verbatim(self):
        """Test a message without a blank line comes back verbatim as text."""
        raw = "Subject: x\r\nsee https://example.com now"
        assert decode_body(raw) == ParsedBody(kind=BodyKind.TEXT, content=raw)

    @pytest.mark.unit
    def test_nested_html_unsanitized(self, nested_message):
        """Test the nested message decodes to the HTML leaf."""
        assert decode_body(nested_message) == ParsedBody(kind=BodyKind.HTML, content=NESTED_HTML)

    @pytest.mark.unit
    def test_empty_message(self):
        """Test an empty message yields an empty text body."""
        assert decode_body("") == ParsedBody(kind=BodyKind.TEXT, content="")


class TestParseBody:
    """Tests for parse_body() over complete raw messages."""

    @pytest.mark.unit
    def test_nested_mixed_alternative(self, nested_message):
        """Test HTML leaf wins and the text leaf is discarded."""
        parsed = parse_body(nested_message)

        assert parsed.kind is BodyKind.HTML
        assert parsed.content == NESTED_HTML
        assert "multi-part message" not in parsed.content

    @pytest.mark.unit
    def test_html_quoted_printable_sanitized(self, html_qp_message):
        """Test QP HTML is decoded, scripts removed and anchors rebuilt."""
        parsed = parse_body(html_qp_message)

        assert parsed.kind is BodyKind.HTML
        assert parsed.content == HTML_QUOTED_PRINTABLE_SANITIZED

    @pytest.mark.unit
    def test_multipart_alternative(self, multipart_message):
        """Test the HTML alternative is chosen and its link hardened."""
        parsed = parse_body(multipart_message)

        assert parsed.kind is BodyKind.HTML
        assert "<h1>This is the HTML version</h1>" in parsed.content
        assert 'target="_self"' not in parsed.content
        assert 'rel="noopener noreferrer"' in parsed.content
        assert "plain text version" not in parsed.content

    @pytest.mark.unit
    def test_plain_text_linkified(self, simple_message):
        """Test plain text bodies get their URLs wrapped."""
        parsed = parse_body(simple_message)

        assert parsed.kind is BodyKind.TEXT
        assert parsed.content.startswith("Hello, this is a simple test email.")
        assert '<a href="https://example.com/confirm?id=42"' in parsed.content

    @pytest.mark.unit
    def test_special_boundary(self):
        """Test metacharacter boundaries split into separate parts."""
        parsed = parse_body(SAMPLE_MESSAGES["special_boundary"])

        assert parsed == ParsedBody(kind=BodyKind.TEXT, content="first partsecond part")

    @pytest.mark.unit
    def test_no_delimiter(self):
        """Test a message with no blank line is returned verbatim."""
        raw = SAMPLE_MESSAGES["no_delimiter"]
        assert parse_body(raw) == ParsedBody(kind=BodyKind.TEXT, content=raw)

    @pytest.mark.unit
    def test_invalid_base64_does_not_raise(self):
        """Test a broken base64 leaf still yields a usable body."""
        parsed = parse_body(SAMPLE_MESSAGES["invalid_base64"])

        assert parsed.kind is BodyKind.TEXT
        assert parsed.content == "%%%not-base64%%%"

    @pytest.mark.unit
    def test_multipart_without_boundary_falls_back_to_raw(self):
        """Test nothing usable means the raw message is shown."""
        raw = SAMPLE_MESSAGES["multipart_no_boundary"]
        assert parse_body(raw) == ParsedBody(kind=BodyKind.TEXT, content=raw)

    @pytest.mark.unit
    def test_misdeclared_quoted_printable_rescued(self):
        """Test HTML with undecoded =3D is rescued before sanitizing."""
        parsed = parse_body(SAMPLE_MESSAGES["misdeclared_quoted_printable"])

        assert parsed.kind is BodyKind.HTML
        assert "=3D" not in parsed.content
        assert '<a href="https://example.com/reset" target="_blank"' in parsed.content

    @pytest.mark.unit
    def test_text_that_looks_like_html(self):
        """Test mislabelled HTML is promoted and then sanitized."""
        parsed = parse_body(SAMPLE_MESSAGES["text_looks_like_html"])

        assert parsed == ParsedBody(kind=BodyKind.HTML, content="<div>Order shipped</div>")

    @pytest.mark.unit
    def test_unexpected_failure_falls_back_to_raw(self, monkeypatch):
        """Test an exception in the walk degrades to the raw message as text."""

        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(body_parser, "walk_mime", explode)
        raw = "Content-Type: text/html\n\n<p>x</p>"

        assert parse_body(raw) == ParsedBody(kind=BodyKind.TEXT, content=raw)

    @pytest.mark.unit
    def test_result_is_immutable(self, simple_message):
        """Test ParsedBody cannot be modified after parsing."""
        parsed = parse_body(simple_message)

        with pytest.raises(Exception):
            parsed.content = "changed"

    @pytest.mark.unit
    def test_concurrent_calls_independent(self, nested_message, simple_message):
        """Test parses running in parallel do not share buffers."""
        from concurrent.futures import ThreadPoolExecutor

        messages = [nested_message, simple_message] * 20
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(parse_body, messages))

        assert results == [parse_body(m) for m in messages]
