"""Entrypoint for running the alert notifier.

This module loads the configuration, wires the fetcher, notifier and poller
together and runs the poll loop until SIGINT/SIGTERM.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys

from .config import ConfigError, CONFIG_ENV, load_settings, resolve_config_path
from .fetcher import StatusFetcher
from .logger import setup_logging
from .models.settings import Settings
from .notifier import Notifier
from .poller import Poller

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="air-alert-notifier",
        description="Poll an air alert feed and notify on raise/clear.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        help=f"path to the JSON config file (default: ${CONFIG_ENV})",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="run a single poll cycle, wait for any notification it starts to finish, then exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log at DEBUG level (overrides LOG_LEVEL)",
    )
    return parser


def build_poller(settings: Settings) -> tuple[Poller, Notifier]:
    fetcher = StatusFetcher(settings.data_url, settings.region, settings.request_timeout)
    notifier = Notifier(settings)
    return Poller(settings, fetcher, notifier), notifier


def _install_signal_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handler for %s not supported here", sig)


async def serve(settings: Settings, once: bool = False) -> None:
    poller, notifier = build_poller(settings)
    try:
        if once:
            event = await poller.poll_once()
            logger.info("Single poll finished: state=%s event=%s", poller.state.value, event)
        else:
            stop = asyncio.Event()
            _install_signal_handlers(stop)
            await poller.run(stop)
    finally:
        # --once has nothing else to do, so let the dialog stay up until closed
        await notifier.aclose(timeout=None if once else 2.0)


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    path = resolve_config_path(args.config)
    if path is None:
        logger.error("Usage: air-alert-notifier <config_file_path> (or set %s)", CONFIG_ENV)
        return 1

    try:
        settings = load_settings(path)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    logger.info("Starting air_alert_notifier for region %s", settings.region)
    try:
        asyncio.run(serve(settings, once=args.once))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
