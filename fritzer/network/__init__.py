"""
HTTP client setup for talking to the router.
"""

from fritzer.network.client import build_session, base_url

__all__ = ["build_session", "base_url"]
