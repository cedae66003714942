"""Alert status definitions and the raise/clear decision."""

from __future__ import annotations

from .models.alerts import AlertEvent, AlertState, EventKind

RAISE_STATUS = "full"
CLEAR_STATUSES: frozenset[str] = frozenset({"null", "no_data"})
KNOWN_STATUSES: frozenset[str] = frozenset({RAISE_STATUS, *CLEAR_STATUSES})


def is_known_status(status: str) -> bool:
    return status in KNOWN_STATUSES


def decide(
    current: AlertState, status: str, region: str
) -> tuple[AlertState, AlertEvent | None]:
    """Map the observed status onto the next alert state.

    Only two transitions exist: INACTIVE -> ACTIVE on "full" and
    ACTIVE -> INACTIVE on "null" or "no_data". Every other combination,
    including statuses outside the known set, keeps the current state and
    emits nothing.

    Args:
        current: State before this poll cycle.
        status: Status string read from the feed for ``region``.
        region: Region identifier carried by the emitted event.

    Returns:
        Tuple of (next_state, event) where event is None when nothing changed.

    Example:
        >>> decide(AlertState.INACTIVE, "full", "kyiv")
        (<AlertState.ACTIVE: 'active'>, AlertEvent(kind=<EventKind.RAISE: 'raise'>, region='kyiv'))
    """
    if current is AlertState.INACTIVE and status == RAISE_STATUS:
        return AlertState.ACTIVE, AlertEvent.raise_(region)
    if current is AlertState.ACTIVE and status in CLEAR_STATUSES:
        return AlertState.INACTIVE, AlertEvent.clear(region)
    return current, None


def describe_event(event: AlertEvent) -> str:
    verb = "raised" if event.kind is EventKind.RAISE else "cleared"
    return f"Alert {verb} for region {event.region}"


__all__ = [
    "RAISE_STATUS",
    "CLEAR_STATUSES",
    "KNOWN_STATUSES",
    "is_known_status",
    "decide",
    "describe_event",
]
