"""Sound and dialog notifications for alert events.

Each event starts two detached tasks, one for the sound and one for the
dialog. `Notifier.notify` returns as soon as both are scheduled; failures are
logged from the task's done callback and never reach the poll loop.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Coroutine

from . import cli
from .models.alerts import AlertEvent, Severity
from .models.settings import Settings

logger = logging.getLogger(__name__)

SoundPlayer = Callable[[str], Awaitable[None]]
DialogPresenter = Callable[[str, str, Severity], Awaitable[None]]

# zenity exits 1 when the dialog is closed from the window manager
_DIALOG_OK_CODES = {0, 1}


class NotificationError(RuntimeError):
    """Raised inside a notification task when delivery fails."""


async def play_sound(sound: str) -> None:
    if not sound:
        raise NotificationError("no sound file configured")
    if not Path(sound).is_file():
        raise NotificationError(f"sound file not found: {sound}")
    player = cli.find_binary("mpg123")
    if player is None:
        raise NotificationError("mpg123 is not installed")
    rc, _, err = await cli.run_cmd([player, "-q", sound], timeout=None)
    if rc != 0:
        raise NotificationError(f"mpg123 exited with {rc}: {err or 'no output'}")


async def show_dialog(title: str, body: str, severity: Severity) -> None:
    zenity = cli.find_binary("zenity")
    if zenity is None:
        raise NotificationError("zenity is not installed")
    kind = "--warning" if severity is Severity.WARNING else "--info"
    rc, _, err = await cli.run_cmd(
        [zenity, kind, "--no-markup", "--title", title, "--text", body],
        timeout=None,
    )
    if rc not in _DIALOG_OK_CODES:
        raise NotificationError(f"zenity exited with {rc}: {err or 'no output'}")


class TaskSpawner:
    """Start fire-and-forget tasks and log how they end.

    Holds a reference to every running task so the event loop does not drop
    it before it finishes.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("Notification task %s cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Notification task %s failed: %s",
                task.get_name(),
                exc,
                exc_info=exc,
            )

    async def aclose(self, timeout: float | None) -> None:
        """Wait up to ``timeout`` seconds for running tasks, cancel the rest.

        ``None`` waits for every task to finish.
        """
        if not self._tasks:
            return
        _, still_running = await asyncio.wait(set(self._tasks), timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            logger.info("Cancelled %d unfinished notification(s)", len(still_running))
            await asyncio.gather(*still_running, return_exceptions=True)


async def _invoke(action: Callable[..., Any], *args: Any) -> None:
    result = action(*args)
    if inspect.isawaitable(result):
        await result


class Notifier:
    def __init__(
        self,
        settings: Settings,
        player: SoundPlayer = play_sound,
        presenter: DialogPresenter = show_dialog,
        spawner: TaskSpawner | None = None,
    ) -> None:
        self._settings = settings
        self._player = player
        self._presenter = presenter
        self._spawner = spawner or TaskSpawner()

    @property
    def pending(self) -> int:
        return self._spawner.pending

    def notify(self, event: AlertEvent) -> None:
        """Schedule the sound and dialog for ``event`` and return immediately.

        Must be called from a running event loop.
        """
        profile = self._settings.profile_for(event.kind)
        body = profile.render_body(event.region)
        tag = f"{event.kind.value}:{event.region}"
        logger.info("Dispatching %s notification for region %s", event.kind.value, event.region)
        self._spawner.spawn(_invoke(self._player, profile.sound), name=f"sound-{tag}")
        self._spawner.spawn(
            _invoke(self._presenter, profile.title, body, profile.severity),
            name=f"dialog-{tag}",
        )

    async def aclose(self, timeout: float | None = 2.0) -> None:
        await self._spawner.aclose(timeout)


__all__ = [
    "Notifier",
    "NotificationError",
    "TaskSpawner",
    "play_sound",
    "show_dialog",
]
