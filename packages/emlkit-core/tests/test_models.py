"""Tests for emlkit_core.models -- MessageKey."""

from __future__ import annotations

import hashlib
import re

from emlkit_core.models import MessageKey


class TestMessageKey:
    def test_key_is_64_char_hex(self):
        mk = MessageKey(sender_email="a@x.com", subject="Hi")
        assert re.fullmatch(r"[0-9a-f]{64}", mk.key)

    def test_same_fields_same_key(self):
        kwargs = dict(sender_email="a", delivery_time="t", subject="s", file_name="f")
        assert MessageKey(**kwargs).key == MessageKey(**kwargs).key

    def test_different_subject_different_key(self):
        assert MessageKey(subject="a").key != MessageKey(subject="b").key

    def test_different_file_name_different_key(self):
        assert MessageKey(file_name="a.msg").key != MessageKey(file_name="b.msg").key

    def test_known_value(self):
        """Verify against hand-computed SHA-256."""
        mk = MessageKey(
            sender_email="a@x.com",
            delivery_time="2026-02-17T12:00:00+00:00",
            subject="Hello",
            file_name="hello.msg",
        )
        expected = hashlib.sha256(
            b"a@x.com\x002026-02-17T12:00:00+00:00\x00Hello\x00hello.msg"
        ).hexdigest()
        assert mk.key == expected

    def test_all_defaults_empty(self):
        mk = MessageKey()
        assert mk.sender_email == ""
        assert mk.key == hashlib.sha256(b"\x00\x00\x00").hexdigest()

    def test_hyphen_in_field_does_not_shift_boundary(self):
        joined = MessageKey(subject="a-b")
        split = MessageKey(subject="a", file_name="b")
        assert joined.key != split.key
