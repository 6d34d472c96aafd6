"""Clipboard adapter tests."""

from __future__ import annotations

import logging

from siloplanner.clipboard import SESSION_KEY, SessionClipboard, copied_key, copy_to_clipboard


def test_copy_reports_success_and_key():
    written = []

    result = copy_to_clipboard("hello", written.append, key="all-p1")

    assert result.success is True
    assert result.key == "all-p1"
    assert written == ["hello"]


def test_copy_failure_is_logged_not_raised(caplog):
    def refuse(text):
        raise PermissionError("clipboard blocked")

    with caplog.at_level(logging.ERROR, logger="siloplanner.clipboard"):
        result = copy_to_clipboard("hello", refuse, key="url-p1")

    assert result.success is False
    assert result.key is None
    assert "Failed to copy text for url-p1" in caplog.text


def test_session_clipboard_indicator_expires():
    session = {}
    writer = SessionClipboard(session, "all-p1", reset_after=2, clock=lambda: 100.0)

    result = copy_to_clipboard("From: https://example.com\n\n", writer, key="all-p1")

    assert result.success
    assert session[SESSION_KEY]["text"] == "From: https://example.com\n\n"
    assert copied_key(session, now=101.0) == "all-p1"
    assert copied_key(session, now=102.0) is None


def test_copied_key_without_a_copy():
    assert copied_key({}) is None
