"""Authentication submodule – challenge parsing, responses, SID cache, login flow."""

from fritzer.auth.challenge import (
    LegacyChallenge,
    SaltedChallenge,
    parse_challenge,
)
from fritzer.auth.login import LoginClient
from fritzer.auth.orchestrator import AuthState, Authenticator
from fritzer.auth.response import compute_response, md5_response, pbkdf2_response
from fritzer.auth.secret import Secret
from fritzer.auth.session_info import SessionInfo, User, parse_session_info
from fritzer.auth.sid import INVALID_SID, is_valid_sid
from fritzer.auth.store import SessionStore
from fritzer.auth.validator import SessionValidator

__all__ = [
    "LegacyChallenge",
    "SaltedChallenge",
    "parse_challenge",
    "LoginClient",
    "AuthState",
    "Authenticator",
    "compute_response",
    "md5_response",
    "pbkdf2_response",
    "Secret",
    "SessionInfo",
    "User",
    "parse_session_info",
    "INVALID_SID",
    "is_valid_sid",
    "SessionStore",
    "SessionValidator",
]
