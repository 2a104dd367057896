"""Live check of a cached session id."""

from ..exceptions import TransportFailure
from ..logging_setup import log, short_sid
from .login import LoginClient
from .sid import is_valid_sid


class SessionValidator:
    """Asks the router whether a SID is still usable."""

    def __init__(self, client: LoginClient):
        self.client = client

    def validate(self, sid: str) -> bool:
        """
        Return True when the router confirms *sid*.

        The router echoes the SID for a live session and answers with the
        all-zero SID otherwise.  Transport problems count as "not valid" so
        the caller falls back to a fresh login.
        """
        if not is_valid_sid(sid):
            return False
        try:
            info = self.client.check_sid(sid)
        except TransportFailure as exc:
            log.debug("Could not validate SID %s: %s", short_sid(sid), exc)
            return False
        return is_valid_sid(info.sid)
