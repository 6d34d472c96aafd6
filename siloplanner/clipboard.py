"""Clipboard adapter used by the copy buttons.

The planner core never copies anything itself. Callers hand a writer to
:func:`copy_to_clipboard` and get back a :class:`CopyResult`; a writer that
raises is treated as a refused copy and only logged.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, MutableMapping, Optional

logger = logging.getLogger(__name__)

SESSION_KEY = 'siloplanner.copied'

ClipboardWriter = Callable[[str], None]


@dataclass(frozen=True)
class CopyResult:
    success: bool
    key: Optional[str] = None


def copy_to_clipboard(text: str, writer: ClipboardWriter, key: str | None = None) -> CopyResult:
    """Write ``text`` with ``writer`` and report whether it worked."""

    try:
        writer(text)
    except Exception:
        logger.exception('Failed to copy text for %s', key or 'clipboard')
        return CopyResult(success=False)
    return CopyResult(success=True, key=key)


class SessionClipboard:
    """Clipboard writer that remembers the last copy in the user's session.

    The browser performs the actual system clipboard write; the session
    entry drives the transient "copied" indicator until it expires.
    """

    def __init__(
        self,
        session: MutableMapping[str, Any],
        key: str,
        *,
        reset_after: float = 2,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.session = session
        self.key = key
        self.reset_after = reset_after
        self.clock = clock

    def __call__(self, text: str) -> None:
        self.session[SESSION_KEY] = {
            'key': self.key,
            'text': text,
            'expires_at': self.clock() + self.reset_after,
        }


def copied_key(session: MutableMapping[str, Any], now: float | None = None) -> Optional[str]:
    """Return the indicator key of the last copy while it is still active."""

    record = session.get(SESSION_KEY)
    if not record:
        return None
    now = time.time() if now is None else now
    if now >= record.get('expires_at', 0):
        return None
    return record.get('key')
