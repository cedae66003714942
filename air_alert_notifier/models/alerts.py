"""Alert state, event and fetch result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AlertState(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


class EventKind(Enum):
    RAISE = "raise"
    CLEAR = "clear"


class Severity(Enum):
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class AlertEvent:
    kind: EventKind
    region: str

    @classmethod
    def raise_(cls, region: str) -> "AlertEvent":
        return cls(kind=EventKind.RAISE, region=region)

    @classmethod
    def clear(cls, region: str) -> "AlertEvent":
        return cls(kind=EventKind.CLEAR, region=region)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one feed fetch: a status string or a failure reason."""

    status: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status is not None

    @classmethod
    def success(cls, status: str) -> "FetchResult":
        return cls(status=status)

    @classmethod
    def failed(cls, reason: str) -> "FetchResult":
        return cls(error=reason or "unknown error")
