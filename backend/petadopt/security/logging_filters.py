"""Log record scrubbing for credentials."""

from __future__ import annotations

import logging
import re

REDACTED = "**REDACTED**"

# Bearer headers plus JSON or form style "key": "value" pairs.
_SECRET_VALUE = re.compile(
    r"(?P<bearer>Bearer\s+)[\w\.\-]+"
    r"|(?P<key>\"?(?:access_?token|refresh_?token|reset_?token|"
    r"(?:current_?|new_?)?password)\"?\s*[:=]\s*)\"?[^\",\s}&]+\"?",
    re.IGNORECASE,
)


def redact(text: str) -> str:
    """Return ``text`` with bearer tokens and password-like values masked."""

    def _mask(match: re.Match[str]) -> str:
        prefix = match.group("bearer") or match.group("key") or ""
        return f"{prefix}{REDACTED}"

    return _SECRET_VALUE.sub(_mask, text)


class SensitiveFilter(logging.Filter):
    """Mask secrets in the message and in any string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


__all__ = ["REDACTED", "SensitiveFilter", "redact"]
