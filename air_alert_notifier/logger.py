"""Logging setup for the alert notifier.

The level comes from ``LOG_LEVEL`` (default INFO); ``--verbose`` on the
command line forces DEBUG, which also shows ignored feed statuses and the
HTTP connection log from urllib3.
"""
import logging
import os

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, None)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(verbose: bool = False) -> None:
    level = resolve_level(verbose)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    root.setLevel(level)

    # one connection line per poll cycle is noise unless debugging
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)


__all__ = ["resolve_level", "setup_logging"]
