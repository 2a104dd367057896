"""Session identifier helpers."""

import re

# The router answers with this SID whenever no session is active.
INVALID_SID = "0000000000000000"

_SID_RE = re.compile(r"[0-9a-fA-F]{16}")


def is_valid_sid(value: str | None) -> bool:
    """Return True for a 16-hex-char SID that is not the invalid sentinel."""
    if not value or not _SID_RE.fullmatch(value):
        return False
    return value != INVALID_SID
