"""On-disk cache for the most recent session id."""

import os
import tempfile
from pathlib import Path

from ..config import DEFAULT_SID_FILE
from ..exceptions import CacheIOError
from ..logging_setup import log, short_sid
from .sid import is_valid_sid


class SessionStore:
    """
    A single cached SID in a plain-text file.

    ``read`` never raises: a missing, unreadable or malformed file means
    "no session".  ``write`` replaces the file atomically (temporary file in
    the same directory, then ``os.replace``) so concurrent runs see either the
    old or the new SID, never a partial one.
    """

    def __init__(self, path: Path | str = DEFAULT_SID_FILE):
        self.path = Path(path).expanduser()

    def read(self) -> str | None:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            log.debug("No cached SID at %s", self.path)
            return None
        except OSError as exc:
            log.warning("Cannot read SID cache %s: %s", self.path, exc)
            return None

        try:
            sid = raw.decode("ascii").strip()
        except UnicodeDecodeError:
            log.warning("Ignoring SID cache %s: not a text file", self.path)
            return None

        if not is_valid_sid(sid):
            log.debug("Ignoring SID cache %s: no usable SID in it", self.path)
            return None
        log.debug("Read cached SID %s from %s", short_sid(sid), self.path)
        return sid

    def write(self, sid: str) -> None:
        """Persist *sid*, replacing whatever was cached before."""
        if not is_valid_sid(sid):
            raise ValueError(f"refusing to cache unusable SID {sid!r}")

        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
        except OSError as exc:
            raise CacheIOError(f"cannot create SID cache in {directory}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="ascii") as fh:
                fh.write(sid)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise CacheIOError(f"cannot write SID cache {self.path}: {exc}") from exc
        log.debug("Cached SID %s in %s", short_sid(sid), self.path)
