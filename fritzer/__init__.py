"""
fritzer
=======
Command-line login helper for the AVM FRITZ!Box home automation (AHA)
HTTP interface.  Answers the router's login challenge and keeps the
resulting session id in a cache file so later runs can reuse it.

Package structure
-----------------
fritzer/
├── __init__.py       – package init and public API
├── config.py         – configuration constants
├── exceptions.py     – error hierarchy
├── logging_setup.py  – colored logging
├── cli.py            – argparse CLI (``python -m fritzer``)
├── network/          – requests.Session factory, URL helpers
└── auth/             – sub-package: the login flow
    ├── challenge.py    – challenge parsing (MD5 / PBKDF2)
    ├── response.py     – challenge-response computation
    ├── secret.py       – wipeable password holder
    ├── sid.py          – SID helpers
    ├── session_info.py – <SessionInfo> XML decoding
    ├── store.py        – SID cache file
    ├── login.py        – login_sid.lua HTTP calls
    ├── validator.py    – live SID check
    └── orchestrator.py – login state machine

Quick start
-----------
    import getpass
    from fritzer import Authenticator, LoginClient, SessionStore

    auth = Authenticator(
        LoginClient("http://fritz.box"),
        SessionStore(),
        password_prompt=getpass.getpass,
    )
    sid = auth.authenticate()
"""

from .auth import (
    AuthState,
    Authenticator,
    LoginClient,
    SessionStore,
    SessionValidator,
    compute_response,
    parse_challenge,
)
from .exceptions import (
    CacheIOError,
    FritzerError,
    InvalidCredentials,
    LoginBlocked,
    MalformedChallenge,
    TransportFailure,
)

__version__ = "0.1.0"

__all__ = [
    "AuthState",
    "Authenticator",
    "LoginClient",
    "SessionStore",
    "SessionValidator",
    "compute_response",
    "parse_challenge",
    "CacheIOError",
    "FritzerError",
    "InvalidCredentials",
    "LoginBlocked",
    "MalformedChallenge",
    "TransportFailure",
]
