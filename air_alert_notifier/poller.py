"""Poll loop: fetch, decide, notify, sleep."""
from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from .alerting import decide, describe_event, is_known_status
from .models.alerts import AlertEvent, AlertState, FetchResult
from .models.settings import Settings

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self) -> FetchResult: ...


class EventSink(Protocol):
    def notify(self, event: AlertEvent) -> None: ...


class Poller:
    """Owns the alert state and drives one poll cycle per interval.

    The state is only read and written from the coroutine running `run`
    (or `poll_once`), so it needs no locking.
    """

    def __init__(self, settings: Settings, fetcher: Fetcher, notifier: EventSink) -> None:
        self._settings = settings
        self._fetcher = fetcher
        self._notifier = notifier
        self._state = AlertState.INACTIVE

    @property
    def state(self) -> AlertState:
        return self._state

    async def poll_once(self) -> AlertEvent | None:
        # fetch blocks; keep the loop free for notification tasks
        result = await asyncio.to_thread(self._fetcher.fetch)
        if not result.ok:
            return None

        status = result.status or ""
        if not is_known_status(status):
            logger.debug("Ignoring unknown status %r for region %s", status, self._settings.region)

        next_state, event = decide(self._state, status, self._settings.region)
        self._state = next_state
        if event is not None:
            logger.info("%s (status=%s)", describe_event(event), status)
            self._notifier.notify(event)
        return event

    async def run(self, stop: asyncio.Event | None = None) -> None:
        """Poll until ``stop`` is set. Sleeps the same interval after every cycle."""
        if stop is None:
            stop = asyncio.Event()
        interval = self._settings.update_interval

        logger.info(
            "Starting alert poller (region=%s, interval=%ss)",
            self._settings.region,
            interval,
        )
        while not stop.is_set():
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Alert poll cycle error")
            await self._sleep(stop, interval)
        logger.info("Alert poller stopped (state=%s)", self._state.value)

    @staticmethod
    async def _sleep(stop: asyncio.Event, interval: float) -> None:
        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass
