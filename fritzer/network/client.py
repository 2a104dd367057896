"""
HTTP client configuration for router communication.

Provides session setup with retry logic and URL normalisation.
"""

import urllib.parse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import RETRY_BACKOFF, RETRY_STATUS_CODES, RETRY_TOTAL


def build_session(verify_ssl: bool = True) -> requests.Session:
    """
    Return a requests.Session with retry logic pre-configured.

    Args:
        verify_ssl: Whether to verify TLS certificates (FRITZ!Boxes reached
            via MyFRITZ! often present self-signed ones)

    Returns:
        Configured requests.Session instance
    """
    session = requests.Session()
    retry = Retry(
        total=RETRY_TOTAL,
        backoff_factor=RETRY_BACKOFF,
        status_forcelist=list(RETRY_STATUS_CODES),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
    })
    return session


def base_url(url: str) -> str:
    """
    Reduce a host name or URL to ``scheme://host[:port]``.

    Args:
        url: Router address, e.g. ``fritz.box`` or ``https://192.168.178.1:443/``

    Returns:
        Base URL string without path or trailing slash
    """
    if "://" not in url:
        url = "http://" + url
    parts = urllib.parse.urlsplit(url)
    if not parts.netloc:
        raise ValueError(f"not a usable router address: {url!r}")
    return f"{parts.scheme}://{parts.netloc}"
