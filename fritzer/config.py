"""Configuration constants for the fritzer FRITZ!Box client."""

import os
from pathlib import Path

# Connection defaults can also be supplied via FRITZER_URL / FRITZER_USER env vars
DEFAULT_URL = os.environ.get("FRITZER_URL", "http://fritz.box")
DEFAULT_USER = os.environ.get("FRITZER_USER") or None
DEFAULT_SID_FILE = Path(
    os.environ.get("FRITZER_SID_FILE", Path.home() / ".fritzer.sid")
).expanduser()
PASSWORD_ENV_VAR = "FRITZER_PASSWORD"

LOGIN_SID_ROUTE   = "/login_sid.lua"
LOGIN_SID_VERSION = "2"     # asks for the PBKDF2 challenge; old firmware ignores it

REQUEST_TIMEOUT = 10    # seconds per HTTP request
MAX_BLOCK_WAIT  = 60    # longest BlockTime (seconds) we are willing to sit out

RETRY_TOTAL        = 3
RETRY_BACKOFF      = 0.5
RETRY_STATUS_CODES = (500, 502, 503, 504)
