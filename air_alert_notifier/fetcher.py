"""Status feed fetcher.

The feed is a JSON object keyed by region identifier, for example
``{"kyiv": "full", "lviv": "null"}``. Every failure is folded into a
``FetchResult.failed`` value; nothing is raised to the caller.
"""

from __future__ import annotations

import logging

import requests

from .models.alerts import FetchResult

__all__ = ["StatusFetcher", "fetch_status"]

logger = logging.getLogger(__name__)

_USER_AGENT = "air-alert-notifier/1.0"


def _failed(url: str, reason: str) -> FetchResult:
    logger.warning("Failed to fetch data from %s: %s", url, reason)
    return FetchResult.failed(reason)


def fetch_status(url: str, region: str, timeout: float) -> FetchResult:
    """Fetch the feed once and extract the status for ``region``.

    Args:
        url: Feed URL.
        region: Top-level key to read from the JSON document.
        timeout: Request timeout in seconds.

    Returns:
        ``FetchResult.success(status)`` when the key maps to a string,
        ``FetchResult.failed(reason)`` otherwise.
    """
    headers = {"User-Agent": _USER_AGENT, "Accept": "application/json"}
    try:
        resp = requests.get(url, headers=headers, timeout=timeout)
    except requests.exceptions.Timeout:
        return _failed(url, f"timed out after {timeout}s")
    except requests.exceptions.RequestException as e:
        return _failed(url, f"request error: {e}")
    except ValueError as e:
        # urllib3 rejects some timeouts and URLs with a bare ValueError
        return _failed(url, f"invalid request: {e}")

    if not resp.ok:
        return _failed(url, f"HTTP {resp.status_code}")

    try:
        data = resp.json()
    except ValueError as e:
        return _failed(url, f"malformed JSON: {e}")

    if not isinstance(data, dict):
        return _failed(url, f"expected JSON object, got {type(data).__name__}")
    if region not in data:
        return _failed(url, f"region {region!r} missing from feed")

    status = data[region]
    if not isinstance(status, str):
        return _failed(
            url, f"status for {region!r} is {type(status).__name__}, not a string"
        )
    return FetchResult.success(status)


class StatusFetcher:
    """Fetch capability bound to one feed URL and region."""

    def __init__(self, url: str, region: str, timeout: float) -> None:
        self.url = url
        self.region = region
        self.timeout = timeout

    def fetch(self) -> FetchResult:
        return fetch_status(self.url, self.region, self.timeout)

    def __repr__(self) -> str:
        return f"StatusFetcher(url={self.url!r}, region={self.region!r})"
