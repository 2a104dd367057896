"""
Command-line interface for fritzer.

Logs in to the FRITZ!Box (reusing the cached SID when the router still
accepts it) and prints the SID on stdout for use in further AHA calls.
"""

import argparse
import getpass
import os
import sys
from pathlib import Path
from typing import Callable

from fritzer.auth import Authenticator, LoginClient, SessionStore
from fritzer.config import DEFAULT_SID_FILE, DEFAULT_URL, DEFAULT_USER, PASSWORD_ENV_VAR
from fritzer.exceptions import FritzerError, TransportFailure
from fritzer.logging_setup import _setup_logging, log
from fritzer.network import build_session


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="fritzer",
        description="Log in to the FRITZ!Box AHA HTTP interface and print "
                    "a session id, reusing the cached one while it is valid.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog=(
            f"The password is read from --password-file, else from the "
            f"{PASSWORD_ENV_VAR} env var.\n"
            "Otherwise you will be prompted for it, but only when a fresh "
            "login is needed."
        ),
    )
    parser.add_argument(
        "--url", default=DEFAULT_URL,
        help=f"URL of the FRITZ!Box (default: {DEFAULT_URL})",
    )
    parser.add_argument(
        "--username", default=DEFAULT_USER,
        help="FRITZ!Box user (default: last logged-in user)",
    )
    parser.add_argument(
        "--sid-file", type=Path, default=DEFAULT_SID_FILE,
        help=f"Session cache file (default: {DEFAULT_SID_FILE})",
    )
    parser.add_argument(
        "--password-file", type=Path, default=None,
        help="File whose first line is the password",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification (use for self-signed certs)",
    )
    parser.add_argument(
        "--logout", action="store_true",
        help="End the session on the router instead of printing its SID",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    return parser.parse_args(argv)


def password_source(password_file: Path | None) -> Callable[[], str]:
    """Return a callable producing the password from the configured source."""
    def _read() -> str:
        if password_file is not None:
            try:
                lines = password_file.read_text(encoding="utf-8").splitlines()
            except OSError as exc:
                raise FritzerError(f"cannot read password file: {exc}") from exc
            return lines[0] if lines else ""
        env_password = os.environ.get(PASSWORD_ENV_VAR)
        if env_password is not None:
            return env_password
        return getpass.getpass("FRITZ!Box password: ")
    return _read


def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the fritzer CLI.
    """
    args = parse_args(argv)

    _setup_logging(debug=args.debug)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    try:
        client = LoginClient(args.url, session=build_session(args.verify_ssl))
    except ValueError as exc:
        log.error("%s", exc)
        sys.exit(2)

    authenticator = Authenticator(
        client,
        SessionStore(args.sid_file),
        password_prompt=password_source(args.password_file),
        username=args.username,
    )

    try:
        sid = authenticator.authenticate()
        if args.logout:
            client.logout(sid)
            log.info("Logged out.")
            return
    except TransportFailure as exc:
        log.error("Unable to talk to the FRITZ!Box at %s: %s", client.base, exc)
        sys.exit(1)
    except FritzerError as exc:
        log.error("Login failed: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)

    print(sid)


if __name__ == "__main__":
    main()
