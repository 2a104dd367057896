"""HTTP calls against the router's ``login_sid.lua`` endpoint."""

import requests

from ..config import LOGIN_SID_ROUTE, LOGIN_SID_VERSION, REQUEST_TIMEOUT
from ..exceptions import TransportFailure
from ..logging_setup import log, short_sid
from ..network.client import base_url, build_session
from .session_info import SessionInfo, parse_session_info


class LoginClient:
    """
    Thin wrapper around the router's login endpoint.

    Every call returns the decoded ``SessionInfo`` reply; network errors,
    HTTP error statuses and unreadable replies are raised as
    TransportFailure.
    """

    def __init__(self, url: str, session: requests.Session | None = None,
                 timeout: float = REQUEST_TIMEOUT):
        self.base = base_url(url)
        self.session = session if session is not None else build_session()
        self.timeout = timeout

    @property
    def login_url(self) -> str:
        return self.base + LOGIN_SID_ROUTE

    def _call(self, data: dict | None = None) -> SessionInfo:
        params = {"version": LOGIN_SID_VERSION}
        try:
            if data is None:
                resp = self.session.get(self.login_url, params=params, timeout=self.timeout)
            else:
                resp = self.session.post(
                    self.login_url, params=params, data=data, timeout=self.timeout
                )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise TransportFailure(f"{self.login_url}: {exc}") from exc
        return parse_session_info(resp.content)

    def fetch_session_info(self) -> SessionInfo:
        """GET a fresh challenge (and the router's user list)."""
        info = self._call()
        log.debug("Challenge received, BlockTime=%ds, users=%s",
                  info.block_time, [u.name for u in info.users])
        return info

    def check_sid(self, sid: str) -> SessionInfo:
        """Ask the router whether *sid* still belongs to a live session."""
        log.debug("Checking SID %s", short_sid(sid))
        return self._call({"sid": sid})

    def submit_response(self, username: str | None, response: str) -> SessionInfo:
        """Send the computed challenge response; the reply carries the new SID."""
        data = {"response": response}
        if username:
            data["username"] = username
        return self._call(data)

    def logout(self, sid: str) -> SessionInfo:
        """End the session *sid* on the router."""
        log.debug("Logging out SID %s", short_sid(sid))
        return self._call({"sid": sid, "logout": "1"})
