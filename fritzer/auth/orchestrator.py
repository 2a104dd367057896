"""
Login state machine: reuse the cached SID when the router still accepts it,
otherwise answer a fresh challenge and cache the new SID.

    UNAUTHENTICATED ──read cache──▶ CACHE_CHECKED
    CACHE_CHECKED ──cached SID valid──▶ AUTHENTICATED
    CACHE_CHECKED ──no / stale SID──▶ CHALLENGE_RECEIVED
    CHALLENGE_RECEIVED ──parse + compute──▶ RESPONSE_COMPUTED
    RESPONSE_COMPUTED ──router accepts──▶ AUTHENTICATED   (SID cached)
    any step ──error──▶ FAILED
"""

import time
from enum import Enum
from typing import Callable

from ..config import MAX_BLOCK_WAIT
from ..exceptions import CacheIOError, FritzerError, InvalidCredentials, LoginBlocked
from ..logging_setup import log, short_sid
from .challenge import parse_challenge
from .login import LoginClient
from .response import compute_response
from .secret import Secret
from .sid import is_valid_sid
from .store import SessionStore
from .validator import SessionValidator


class AuthState(Enum):
    UNAUTHENTICATED = "unauthenticated"
    CACHE_CHECKED = "cache-checked"
    CHALLENGE_RECEIVED = "challenge-received"
    RESPONSE_COMPUTED = "response-computed"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class Authenticator:
    """
    Drive one login attempt against the router.

    Args:
        client: LoginClient bound to the router
        store: SessionStore holding the cached SID
        password_prompt: called without arguments, only when a fresh login
            is needed; returns the password
        username: login name; defaults to the router's last logged-in user
        max_block_wait: longest router BlockTime (seconds) to wait out
        sleep: used to wait out the BlockTime
    """

    def __init__(self, client: LoginClient, store: SessionStore,
                 password_prompt: Callable[[], str], username: str | None = None,
                 max_block_wait: int = MAX_BLOCK_WAIT,
                 sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.store = store
        self.validator = SessionValidator(client)
        self.password_prompt = password_prompt
        self.username = username
        self.max_block_wait = max_block_wait
        self.sleep = sleep

        self.state = AuthState.UNAUTHENTICATED
        self.history: list[AuthState] = [self.state]
        self.failure: FritzerError | None = None
        self.sid: str | None = None

    def _enter(self, state: AuthState) -> None:
        log.debug("Auth state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _reset(self) -> None:
        self.state = AuthState.UNAUTHENTICATED
        self.history = [self.state]
        self.failure = None
        self.sid = None

    def authenticate(self) -> str:
        """
        Return a SID the router accepts.

        Tries the login cycle once.  Any exit other than success leaves the
        state at FAILED; fritzer errors are also kept in ``failure``.  Errors
        are re-raised; call again (e.g. after asking for another password)
        to retry.
        """
        self._reset()
        try:
            cached = self.store.read()
            self._enter(AuthState.CACHE_CHECKED)

            if cached is not None:
                if self.validator.validate(cached):
                    log.info("Cached SID %s still valid. Re-using it.", short_sid(cached))
                    self.sid = cached
                    self._enter(AuthState.AUTHENTICATED)
                    return cached
                log.info("Cached SID invalid. Requesting a new one...")
            else:
                log.info("No cached SID available. Requesting a new one...")

            return self._login()
        except FritzerError as exc:
            self.failure = exc
            self._enter(AuthState.FAILED)
            raise
        except BaseException:
            self._enter(AuthState.FAILED)
            raise

    def _login(self) -> str:
        info = self.client.fetch_session_info()
        self._enter(AuthState.CHALLENGE_RECEIVED)

        challenge = parse_challenge(info.challenge)
        if info.block_time > self.max_block_wait:
            raise LoginBlocked(info.block_time)

        username = self.username or info.last_user
        with Secret(self.password_prompt()) as secret:
            response = compute_response(challenge, secret)
        self._enter(AuthState.RESPONSE_COMPUTED)

        if info.block_time > 0:
            log.warning("Router blocks logins for %ds, waiting...", info.block_time)
            self.sleep(info.block_time)

        reply = self.client.submit_response(username, response)
        if not is_valid_sid(reply.sid):
            raise InvalidCredentials(
                f"router rejected the login for user {username or '<default>'!r}"
            )

        log.info("Logged in as %s, new SID %s", username or "<default user>",
                 short_sid(reply.sid))
        try:
            self.store.write(reply.sid)
        except CacheIOError as exc:
            log.warning("Unable to cache SID: %s", exc)

        self.sid = reply.sid
        self._enter(AuthState.AUTHENTICATED)
        return reply.sid
