"""Logging configuration for fritzer."""

import logging

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("fritzer")

# HTTP traffic is logged by urllib3; shown only with --debug.
_HTTP_LOGGER = "urllib3"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"


def _build_handler() -> logging.Handler:
    """Return a stderr handler, colored when colorlog is installed."""
    if _COLORLOG_AVAILABLE:
        handler = colorlog.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(name)s: %(message)s",
            datefmt=_DATEFMT,
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "bold_red",
            },
        ))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    return handler


def _setup_logging(debug: bool = False) -> logging.Handler:
    """
    Route fritzer's log records (and, with *debug*, urllib3's request log)
    to one stderr handler.

    Safe to call repeatedly; handlers from earlier calls are replaced.
    Returns the installed handler.
    """
    handler = _build_handler()
    http_log = logging.getLogger(_HTTP_LOGGER)
    for logger in (log, http_log):
        for old in [h for h in logger.handlers if getattr(h, "_fritzer", False)]:
            logger.removeHandler(old)
    handler._fritzer = True

    log.setLevel(logging.DEBUG if debug else logging.INFO)
    log.addHandler(handler)

    if debug:
        http_log.setLevel(logging.DEBUG)
        http_log.addHandler(handler)
    else:
        http_log.setLevel(logging.NOTSET)
    return handler


def short_sid(sid: str) -> str:
    """Abbreviate a session id for log output."""
    return sid[:4] + "…" if sid else "<none>"
