"""
Login challenge parsing.

The router sends one of two challenge shapes in ``<Challenge>``:

  * ``2$<iter1>$<salt1>$<iter2>$<salt2>`` – PBKDF2 (FRITZ!OS 7.24 and later,
    when ``version=2`` is requested)
  * eight hex characters – legacy MD5 challenge used by older firmware
"""

import re
from dataclasses import dataclass

from ..exceptions import MalformedChallenge

_LEGACY_RE = re.compile(r"[0-9a-fA-F]{8}")
_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})+")
_DIGITS_RE = re.compile(r"[0-9]+")

# hashlib.pbkdf2_hmac refuses counts above INT_MAX.
_MAX_ITERATIONS = 0x7FFFFFFF


@dataclass(frozen=True)
class LegacyChallenge:
    """MD5 challenge: the salt is the whole challenge string."""

    salt: str


@dataclass(frozen=True)
class SaltedChallenge:
    """PBKDF2 challenge with a static and a per-login salt."""

    iterations1: int
    salt1: bytes
    iterations2: int
    salt2: bytes

    @property
    def salt2_hex(self) -> str:
        return self.salt2.hex()


Challenge = LegacyChallenge | SaltedChallenge


def _parse_iterations(field: str, raw: str) -> int:
    if not _DIGITS_RE.fullmatch(field):
        raise MalformedChallenge(f"iteration count {field!r} is not a number in {raw!r}")
    value = int(field)
    if value <= 0:
        raise MalformedChallenge(f"iteration count must be positive in {raw!r}")
    if value > _MAX_ITERATIONS:
        raise MalformedChallenge(f"iteration count {value} is out of range in {raw!r}")
    return value


def _parse_salt(field: str, raw: str) -> bytes:
    if not _HEX_RE.fullmatch(field):
        raise MalformedChallenge(f"salt {field!r} is not even-length hex in {raw!r}")
    return bytes.fromhex(field)


def parse_challenge(raw: str) -> Challenge:
    """
    Classify *raw* and split it into its parameters.

    Raises MalformedChallenge when *raw* is neither a ``2$...`` PBKDF2
    challenge with exactly four fields after the version tag nor an
    8-character hex MD5 challenge.
    """
    raw = (raw or "").strip()
    if raw.startswith("2$"):
        fields = raw.split("$")
        if len(fields) != 5:
            raise MalformedChallenge(
                f"expected 5 '$'-separated fields, got {len(fields)} in {raw!r}"
            )
        _, iter1, salt1, iter2, salt2 = fields
        return SaltedChallenge(
            iterations1=_parse_iterations(iter1, raw),
            salt1=_parse_salt(salt1, raw),
            iterations2=_parse_iterations(iter2, raw),
            salt2=_parse_salt(salt2, raw),
        )
    if _LEGACY_RE.fullmatch(raw):
        return LegacyChallenge(salt=raw)
    raise MalformedChallenge(f"unrecognised challenge {raw!r}")
