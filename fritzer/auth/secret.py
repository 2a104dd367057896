"""Scoped holder for the user's password."""


class Secret:
    """
    Keep a password in a mutable buffer that is zeroed when the holder is
    closed.

    Use it as a context manager so the buffer is wiped on every exit path:

        with Secret(getpass.getpass()) as secret:
            token = compute_response(challenge, secret)

    Only the UTF-8 buffer is under our control; the ``str`` handed in by the
    caller lives until the interpreter collects it.
    """

    __slots__ = ("_buf",)

    def __init__(self, password: str = ""):
        self._buf = bytearray(password.encode("utf-8"))

    @property
    def wiped(self) -> bool:
        return not any(self._buf)

    def as_buffer(self) -> bytearray:
        """The raw UTF-8 bytes; valid only until wipe()."""
        return self._buf

    def reveal(self) -> str:
        return self._buf.decode("utf-8")

    def wipe(self) -> None:
        for i in range(len(self._buf)):
            self._buf[i] = 0

    def __enter__(self) -> "Secret":
        return self

    def __exit__(self, *exc_info) -> None:
        self.wipe()

    def __len__(self) -> int:
        return len(self._buf)

    def __repr__(self) -> str:
        return "Secret(***)"
