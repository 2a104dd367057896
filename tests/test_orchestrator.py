"""
Tests for the login state machine – cached SID reuse, fresh logins, and
the failure paths.
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from fritzer.auth import orchestrator
from fritzer.auth.login import LoginClient
from fritzer.auth.orchestrator import AuthState, Authenticator
from fritzer.auth.session_info import SessionInfo, User
from fritzer.auth.sid import INVALID_SID, is_valid_sid
from fritzer.auth.store import SessionStore
from fritzer.exceptions import (
    CacheIOError,
    InvalidCredentials,
    LoginBlocked,
    MalformedChallenge,
    TransportFailure,
)

OLD_SID = "1111111111111111"
NEW_SID = "3f1c2a9b8d7e6f50"
CHALLENGE = "2$1000$abcd$2000$ef01"


def _challenge_info(challenge=CHALLENGE, block_time=0, users=None):
    return SessionInfo(
        sid=INVALID_SID,
        challenge=challenge,
        block_time=block_time,
        users=users if users is not None else [],
    )


class _AuthenticatorTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.store = SessionStore(Path(self._tmp.name) / ".fritzer.sid")
        self.client = MagicMock(spec=LoginClient)
        self.client.fetch_session_info.return_value = _challenge_info()
        self.client.submit_response.return_value = SessionInfo(sid=NEW_SID)
        self.client.check_sid.return_value = SessionInfo(sid=INVALID_SID)
        self.prompt = MagicMock(return_value="hunter2")
        self.sleep = MagicMock()

    def _authenticator(self, **kwargs):
        kwargs.setdefault("sleep", self.sleep)
        return Authenticator(self.client, self.store, self.prompt, **kwargs)


class TestCachedSession(_AuthenticatorTestCase):
    def test_valid_cached_sid_is_reused(self):
        self.store.write(OLD_SID)
        self.client.check_sid.return_value = SessionInfo(sid=OLD_SID)
        auth = self._authenticator()

        self.assertEqual(auth.authenticate(), OLD_SID)

        self.assertEqual(auth.state, AuthState.AUTHENTICATED)
        self.assertEqual(
            auth.history,
            [AuthState.UNAUTHENTICATED, AuthState.CACHE_CHECKED, AuthState.AUTHENTICATED],
        )
        self.client.fetch_session_info.assert_not_called()
        self.client.submit_response.assert_not_called()
        self.prompt.assert_not_called()

    def test_stale_cached_sid_triggers_fresh_login(self):
        self.store.write(OLD_SID)
        auth = self._authenticator()

        sid = auth.authenticate()

        self.assertEqual(sid, NEW_SID)
        self.client.check_sid.assert_called_once_with(OLD_SID)
        self.assertEqual(
            auth.history,
            [
                AuthState.UNAUTHENTICATED,
                AuthState.CACHE_CHECKED,
                AuthState.CHALLENGE_RECEIVED,
                AuthState.RESPONSE_COMPUTED,
                AuthState.AUTHENTICATED,
            ],
        )
        cached = self.store.read()
        self.assertEqual(cached, NEW_SID)
        self.assertTrue(is_valid_sid(cached))

    def test_submitted_response_matches_challenge(self):
        self.store.write(OLD_SID)
        self._authenticator().authenticate()

        username, response = self.client.submit_response.call_args.args
        self.assertIsNone(username)
        salt, digest = response.split("$")
        self.assertEqual(salt, "ef01")
        self.assertEqual(len(digest), 64)

    def test_validation_transport_failure_falls_back_to_login(self):
        self.store.write(OLD_SID)
        self.client.check_sid.side_effect = TransportFailure("timed out")

        self.assertEqual(self._authenticator().authenticate(), NEW_SID)
        self.client.submit_response.assert_called_once()


class TestFirstRun(_AuthenticatorTestCase):
    def test_empty_cache_skips_validation(self):
        auth = self._authenticator()

        self.assertEqual(auth.authenticate(), NEW_SID)

        self.client.check_sid.assert_not_called()
        self.client.fetch_session_info.assert_called_once()
        self.assertEqual(self.store.read(), NEW_SID)

    def test_sentinel_in_cache_skips_validation(self):
        self.store.path.write_text(INVALID_SID)

        self._authenticator().authenticate()

        self.client.check_sid.assert_not_called()

    def test_explicit_username(self):
        self.client.fetch_session_info.return_value = _challenge_info(
            users=[User("fritz1234", last=True)]
        )
        self._authenticator(username="admin").authenticate()
        self.assertEqual(self.client.submit_response.call_args.args[0], "admin")

    def test_defaults_to_last_logged_in_user(self):
        self.client.fetch_session_info.return_value = _challenge_info(
            users=[User("admin"), User("fritz1234", last=True)]
        )
        self._authenticator().authenticate()
        self.assertEqual(self.client.submit_response.call_args.args[0], "fritz1234")

    def test_legacy_challenge(self):
        self.client.fetch_session_info.return_value = _challenge_info(challenge="0badc0de")
        self._authenticator().authenticate()
        response = self.client.submit_response.call_args.args[1]
        self.assertTrue(response.startswith("0badc0de-"))


class TestFailures(_AuthenticatorTestCase):
    def test_rejected_response(self):
        self.client.submit_response.return_value = SessionInfo(sid=INVALID_SID)
        auth = self._authenticator()

        with self.assertRaises(InvalidCredentials):
            auth.authenticate()

        self.assertEqual(auth.state, AuthState.FAILED)
        self.assertIsInstance(auth.failure, InvalidCredentials)
        self.assertIsNone(auth.sid)
        self.assertFalse(self.store.path.exists())
        self.client.submit_response.assert_called_once()

    def test_rejected_response_keeps_old_cache(self):
        self.store.write(OLD_SID)
        self.client.submit_response.return_value = SessionInfo(sid=INVALID_SID)

        with self.assertRaises(InvalidCredentials):
            self._authenticator().authenticate()

        self.assertEqual(self.store.read(), OLD_SID)

    def test_malformed_challenge(self):
        self.client.fetch_session_info.return_value = _challenge_info(challenge="2$x$y")
        auth = self._authenticator()

        with self.assertRaises(MalformedChallenge):
            auth.authenticate()

        self.assertEqual(auth.state, AuthState.FAILED)
        self.assertIn(AuthState.CHALLENGE_RECEIVED, auth.history)
        self.assertNotIn(AuthState.RESPONSE_COMPUTED, auth.history)
        self.prompt.assert_not_called()
        self.client.submit_response.assert_not_called()

    def test_iteration_count_out_of_range(self):
        self.client.fetch_session_info.return_value = _challenge_info(
            challenge="2$3000000000$abcd$2000$ef01"
        )
        auth = self._authenticator()

        with self.assertRaises(MalformedChallenge):
            auth.authenticate()

        self.assertEqual(auth.state, AuthState.FAILED)
        self.assertIsInstance(auth.failure, MalformedChallenge)
        self.prompt.assert_not_called()

    def test_prompt_error_ends_in_failed(self):
        self.prompt.side_effect = KeyboardInterrupt
        auth = self._authenticator()

        with self.assertRaises(KeyboardInterrupt):
            auth.authenticate()

        self.assertEqual(auth.state, AuthState.FAILED)
        self.assertIsNone(auth.failure)
        self.client.submit_response.assert_not_called()

    def test_challenge_fetch_failure_is_fatal(self):
        self.client.fetch_session_info.side_effect = TransportFailure("no route to host")
        auth = self._authenticator()

        with self.assertRaises(TransportFailure):
            auth.authenticate()
        self.assertEqual(auth.state, AuthState.FAILED)

    def test_submit_failure_is_fatal(self):
        self.client.submit_response.side_effect = TransportFailure("connection reset")
        auth = self._authenticator()

        with self.assertRaises(TransportFailure):
            auth.authenticate()
        self.assertIsInstance(auth.failure, TransportFailure)
        self.assertFalse(self.store.path.exists())

    def test_cache_write_failure_is_not_fatal(self):
        auth = self._authenticator()
        with patch.object(self.store, "write", side_effect=CacheIOError("read-only")):
            self.assertEqual(auth.authenticate(), NEW_SID)
        self.assertEqual(auth.state, AuthState.AUTHENTICATED)

    def test_reinvoke_after_failure(self):
        self.client.submit_response.side_effect = [
            SessionInfo(sid=INVALID_SID),
            SessionInfo(sid=NEW_SID),
        ]
        auth = self._authenticator()
        with self.assertRaises(InvalidCredentials):
            auth.authenticate()

        self.assertEqual(auth.authenticate(), NEW_SID)
        self.assertIsNone(auth.failure)
        self.assertEqual(self.prompt.call_count, 2)


class TestBlockTime(_AuthenticatorTestCase):
    def test_short_block_is_waited_out(self):
        self.client.fetch_session_info.return_value = _challenge_info(block_time=8)
        self.assertEqual(self._authenticator().authenticate(), NEW_SID)
        self.sleep.assert_called_once_with(8)

    def test_no_wait_without_block(self):
        self._authenticator().authenticate()
        self.sleep.assert_not_called()

    def test_long_block_fails(self):
        self.client.fetch_session_info.return_value = _challenge_info(block_time=600)
        auth = self._authenticator(max_block_wait=60)

        with self.assertRaises(LoginBlocked) as ctx:
            auth.authenticate()

        self.assertEqual(ctx.exception.block_time, 600)
        self.assertEqual(auth.state, AuthState.FAILED)
        self.prompt.assert_not_called()
        self.client.submit_response.assert_not_called()


class TestSecretHandling(_AuthenticatorTestCase):
    def _record_secrets(self):
        seen = []
        real = orchestrator.compute_response

        def _compute(challenge, secret):
            seen.append(secret)
            return real(challenge, secret)

        return seen, patch.object(orchestrator, "compute_response", side_effect=_compute)

    def test_secret_wiped_after_success(self):
        seen, patcher = self._record_secrets()
        with patcher:
            self._authenticator().authenticate()
        self.assertEqual(len(seen), 1)
        self.assertTrue(seen[0].wiped)

    def test_secret_wiped_when_submit_fails(self):
        self.client.submit_response.side_effect = TransportFailure("connection reset")
        seen, patcher = self._record_secrets()
        with patcher:
            with self.assertRaises(TransportFailure):
                self._authenticator().authenticate()
        self.assertTrue(seen[0].wiped)

    def test_secret_wiped_when_computation_raises(self):
        seen = []

        def _explode(challenge, secret):
            seen.append(secret)
            raise RuntimeError("boom")

        with patch.object(orchestrator, "compute_response", side_effect=_explode):
            with self.assertRaises(RuntimeError):
                self._authenticator().authenticate()
        self.assertTrue(seen[0].wiped)

    def test_empty_password_allowed(self):
        self.prompt.return_value = ""
        self.assertEqual(self._authenticator().authenticate(), NEW_SID)


if __name__ == "__main__":
    unittest.main()
