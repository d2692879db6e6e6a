"""Tests for emlkit_export.parts."""

from __future__ import annotations

import base64

from emlkit_export.models import Attachment
from emlkit_export.parts import (
    build_alternative_lines,
    build_attachment_part,
    build_text_part,
    encode_body,
)


class TestBuildTextPart:
    def test_headers_and_payload(self):
        lines = build_text_part("Hi", "text/plain")
        assert lines[0] == 'Content-Type: text/plain; charset="utf-8"'
        assert lines[1] == "Content-Transfer-Encoding: base64"
        assert lines[2] == ""
        assert base64.b64decode(lines[3]) == b"Hi"

    def test_line_endings_normalized_before_encoding(self):
        lines = build_text_part("a\nb\rc", "text/html")
        assert base64.b64decode(lines[3]) == b"a\r\nb\r\nc"

    def test_utf8(self):
        lines = build_text_part("naïve", "text/plain")
        assert base64.b64decode(lines[3]).decode("utf-8") == "naïve"

    def test_empty_content(self):
        assert build_text_part("", "text/plain")[3] == ""

    def test_encode_body_wraps(self):
        encoded = encode_body("x" * 500)
        assert all(len(line) <= 76 for line in encoded.split("\r\n"))


class TestBuildAlternativeLines:
    def test_without_header(self):
        lines = build_alternative_lines("alt-1", "plain", "<p>html</p>", False)
        assert lines[0] == "--alt-1"
        assert lines.count("--alt-1") == 2
        assert lines[-1] == "--alt-1--"
        assert 'Content-Type: text/plain; charset="utf-8"' in lines
        assert 'Content-Type: text/html; charset="utf-8"' in lines
        plain_index = lines.index('Content-Type: text/plain; charset="utf-8"')
        html_index = lines.index('Content-Type: text/html; charset="utf-8"')
        assert plain_index < html_index

    def test_with_header(self):
        lines = build_alternative_lines("alt-1", "plain", "<p>html</p>", True)
        assert lines[0] == 'Content-Type: multipart/alternative; boundary="alt-1"'
        assert lines[1] == ""
        assert lines[2] == "--alt-1"


class TestBuildAttachmentPart:
    def test_regular_attachment(self):
        att = Attachment(
            file_name="report.pdf",
            mime_type="application/pdf",
            base64_payload="data:application/pdf;base64,QUJD",
        )
        lines = build_attachment_part(att)
        assert lines == [
            'Content-Type: application/pdf; name="report.pdf"',
            "Content-Transfer-Encoding: base64",
            'Content-Disposition: attachment; filename="report.pdf"',
            "",
            "QUJD",
        ]

    def test_inline_attachment(self):
        att = Attachment(
            file_name="logo.png",
            mime_type="image/png",
            base64_payload="QUJD",
            content_id="<logo@example>",
        )
        lines = build_attachment_part(att)
        assert "Content-ID: <logo@example>" in lines
        assert 'Content-Disposition: inline; filename="logo.png"' in lines

    def test_content_id_sanitized(self):
        att = Attachment(base64_payload="QUJD", content_id="<<a\r\nb>>")
        lines = build_attachment_part(att)
        assert "Content-ID: <a b>" in lines

    def test_content_id_empty_after_sanitizing(self):
        att = Attachment(base64_payload="QUJD", content_id="<>")
        lines = build_attachment_part(att)
        assert not any(line.startswith("Content-ID") for line in lines)
        assert any(line.startswith("Content-Disposition: inline") for line in lines)

    def test_defaults(self):
        lines = build_attachment_part(Attachment(base64_payload="QUJD"))
        assert lines[0] == 'Content-Type: application/octet-stream; name="attachment"'

    def test_file_name_sanitized(self):
        att = Attachment(file_name='../"evil".exe', base64_payload="QUJD")
        lines = build_attachment_part(att)
        assert lines[0] == 'Content-Type: application/octet-stream; name="_evil_.exe"'

    def test_long_payload_wrapped(self):
        payload = base64.b64encode(b"\x01" * 1000).decode("ascii")
        lines = build_attachment_part(Attachment(base64_payload=payload))
        wrapped = lines[-1].split("\r\n")
        assert all(len(line) <= 76 for line in wrapped)
        assert base64.b64decode("".join(wrapped)) == b"\x01" * 1000

    def test_prewrapped_payload_rewrapped(self):
        payload = base64.b64encode(b"\x02" * 300).decode("ascii")
        prewrapped = "\n".join(payload[i : i + 60] for i in range(0, len(payload), 60))
        lines = build_attachment_part(Attachment(base64_payload=prewrapped))
        assert lines[-1].split("\r\n")[0] == payload[:76]

    def test_empty_payload_skipped(self):
        assert build_attachment_part(Attachment(file_name="a.txt")) is None
        assert build_attachment_part(Attachment(base64_payload="data:text/plain;base64,")) is None

    def test_invalid_base64_skipped(self):
        assert build_attachment_part(Attachment(base64_payload="not*base64!")) is None

    def test_unpadded_payload_kept(self):
        lines = build_attachment_part(Attachment(file_name="a.txt", base64_payload="SGk"))
        assert lines is not None
        assert lines[-1] == "SGk="
        assert base64.b64decode(lines[-1]) == b"Hi"
