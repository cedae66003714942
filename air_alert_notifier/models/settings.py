"""Configuration dataclasses."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .alerts import EventKind, Severity


@dataclass(frozen=True)
class NotificationProfile:
    sound: str
    title: str
    body: str
    severity: Severity

    def render_body(self, region: str) -> str:
        return self.body.replace("{region}", region)


@dataclass(frozen=True)
class Settings:
    """Validated settings for air_alert_notifier."""

    region: str
    alert_on: str
    alert_off: str
    data_url: str
    update_interval: int
    request_timeout: float
    raise_profile: NotificationProfile
    clear_profile: NotificationProfile

    def __post_init__(self) -> None:
        # the poll loop relies on these even when Settings is built by hand
        if not self.region.strip():
            raise ValueError("region: must not be empty")
        if not self.data_url.strip():
            raise ValueError("data_url: must not be empty")
        if isinstance(self.update_interval, bool) or not self.update_interval > 0:
            raise ValueError("update_interval: must be greater than 0")
        if not math.isfinite(self.update_interval):
            raise ValueError("update_interval: must be a finite number")
        if not (math.isfinite(self.request_timeout) and self.request_timeout > 0):
            raise ValueError("request_timeout: must be a finite number greater than 0")

    def profile_for(self, kind: EventKind) -> NotificationProfile:
        if kind is EventKind.RAISE:
            return self.raise_profile
        return self.clear_profile
