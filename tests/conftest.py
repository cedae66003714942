"""Shared test fixtures and dummy classes."""

from __future__ import annotations

from air_alert_notifier.models.alerts import AlertEvent, FetchResult, Severity
from air_alert_notifier.models.settings import NotificationProfile, Settings


def make_settings(
    region: str = "kyiv",
    update_interval: float = 60,
    request_timeout: float = 5.0,
    data_url: str = "https://example.com/alerts.json",
) -> Settings:
    """Build Settings directly; tests may pass sub-second intervals."""
    return Settings(
        region=region,
        alert_on="/sounds/on.mp3",
        alert_off="/sounds/off.mp3",
        data_url=data_url,
        update_interval=update_interval,
        request_timeout=request_timeout,
        raise_profile=NotificationProfile(
            sound="/sounds/on.mp3",
            title="Take cover",
            body="Air alert in {region}!",
            severity=Severity.WARNING,
        ),
        clear_profile=NotificationProfile(
            sound="/sounds/off.mp3",
            title="All clear",
            body="Alert over in {region}.",
            severity=Severity.INFO,
        ),
    )


class DummyResponse:
    """Dummy HTTP response for testing."""

    def __init__(self, data: object, status: int = 200, text: str = "") -> None:
        self._data = data
        self.status_code = status
        self.text = text or str(data)
        self.ok = 200 <= status < 300

    def json(self) -> object:
        if isinstance(self._data, Exception):
            raise self._data
        return self._data


class ScriptedFetcher:
    """Fetcher returning a fixed sequence of results, then repeating the last."""

    def __init__(self, results: list[FetchResult]) -> None:
        self._results = list(results)
        self.calls = 0

    def fetch(self) -> FetchResult:
        index = min(self.calls, len(self._results) - 1)
        self.calls += 1
        return self._results[index]


def statuses(*values: str | None) -> list[FetchResult]:
    """None entries become failed fetches."""
    return [
        FetchResult.failed("boom") if v is None else FetchResult.success(v)
        for v in values
    ]


class RecordingNotifier:
    """Notifier stand-in that records events."""

    def __init__(self) -> None:
        self.events: list[AlertEvent] = []

    def notify(self, event: AlertEvent) -> None:
        self.events.append(event)
