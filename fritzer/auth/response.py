"""Challenge-response computation for both login protocol variants."""

import hashlib
from functools import singledispatch

from .challenge import LegacyChallenge, SaltedChallenge
from .secret import Secret

# The router's MD5 login replaces password characters above U+00FF with a dot.
_LEGACY_MAX_CODEPOINT = 255
_LEGACY_PLACEHOLDER = "."
_LEGACY_SEPARATOR = "-"


def _legacy_safe(password: str) -> str:
    return "".join(
        ch if ord(ch) <= _LEGACY_MAX_CODEPOINT else _LEGACY_PLACEHOLDER
        for ch in password
    )


def md5_response(challenge: str, secret: Secret | str) -> str:
    """
    Replicate the router's MD5 login:

      1. replace secret characters above U+00FF by '.'
      2. MD5 over the UTF-16LE bytes of ``<challenge>-<secret>``
      3. answer ``<challenge>-<md5 hex>``
    """
    if isinstance(secret, str):
        with Secret(secret) as scoped:
            return md5_response(challenge, scoped)
    material = bytearray(
        f"{challenge}{_LEGACY_SEPARATOR}{_legacy_safe(secret.reveal())}".encode("utf-16-le")
    )
    try:
        digest = hashlib.md5(material).hexdigest()
    finally:
        for i in range(len(material)):
            material[i] = 0
    return f"{challenge}{_LEGACY_SEPARATOR}{digest}"


def pbkdf2_response(challenge: SaltedChallenge, secret: Secret | str) -> str:
    """
    Replicate the router's PBKDF2 login:

      1. hash1 = PBKDF2-HMAC-SHA256(secret, salt1, iter1)
      2. hash2 = PBKDF2-HMAC-SHA256(hash1, salt2, iter2)
      3. answer ``<salt2 hex>$<hash2 hex>``

    hash1 enters the second round as raw bytes, which is what the router
    checks against.
    """
    if isinstance(secret, str):
        with Secret(secret) as scoped:
            return pbkdf2_response(challenge, scoped)
    hash1 = hashlib.pbkdf2_hmac(
        "sha256", secret.as_buffer(), challenge.salt1, challenge.iterations1
    )
    hash2 = hashlib.pbkdf2_hmac(
        "sha256", hash1, challenge.salt2, challenge.iterations2
    )
    return f"{challenge.salt2_hex}${hash2.hex()}"


@singledispatch
def compute_response(challenge, secret: Secret | str) -> str:
    """Return the login response token for *challenge* using *secret*."""
    raise TypeError(f"unsupported challenge type: {type(challenge).__name__}")


@compute_response.register
def _(challenge: LegacyChallenge, secret: Secret | str) -> str:
    return md5_response(challenge.salt, secret)


@compute_response.register
def _(challenge: SaltedChallenge, secret: Secret | str) -> str:
    return pbkdf2_response(challenge, secret)
