"""Exception hierarchy for the authentication flow."""


class FritzerError(Exception):
    """Base class for every error raised by fritzer."""


class MalformedChallenge(FritzerError):
    """The router's challenge string matches neither known shape."""


class TransportFailure(FritzerError):
    """The router could not be reached or sent an unreadable reply."""


class InvalidCredentials(FritzerError):
    """The router answered a login response with the invalid SID."""


class LoginBlocked(FritzerError):
    """The router refuses logins for longer than we are willing to wait."""

    def __init__(self, block_time: int):
        super().__init__(f"router blocks logins for another {block_time}s")
        self.block_time = block_time


class CacheIOError(FritzerError):
    """The session cache file could not be written."""
