"""Daily schedule of timed events.

A schedule maps a local hour of the day to the labels of everything that
happens at that time: rise and set of the Sun and the Moon, twilights,
seasonal hour boundaries and transitions of categorical values such as
the season or the Moon phase (those happen at 0h).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

# Event families that can be scheduled. A computation emits only the
# families it has been configured for.
SCHEDULE_FAMILIES = (
    "MoonPhaseS",
    "MoonRise",
    "MoonSet",
    "MoonSign",
    "MoonTransit",
    "ObsDate",
    "ObsIsDST",
    "ObsMeteoSeason",
    "ObsPhenoSeason",
    "ObsSeason",
    "ObsSeasonalHr",
    "SunRise",
    "SunSet",
    "SunSign",
    "SunTransit",
    "AstroTwilightEvening",
    "AstroTwilightMorning",
    "CivilTwilightEvening",
    "CivilTwilightMorning",
    "NauticTwilightEvening",
    "NauticTwilightMorning",
    "CustomTwilightEvening",
    "CustomTwilightMorning",
)

# Hour at which the first event of the following day is appended
LOOK_AHEAD_HOUR = 24.0

# The current second already counts as past
_NOW_EPSILON_HOURS = 1.0 / 3600.0


def validate_families(families: Iterable[str]) -> frozenset[str]:
    """Check a schedule filter against the known event families.

    Raises:
        ValueError: If a family is unknown
    """
    selected = frozenset(families)
    unknown = selected.difference(SCHEDULE_FAMILIES)
    if unknown:
        raise ValueError(f"Unknown schedule events: {', '.join(sorted(unknown))}")
    return selected


def event_family(label: str) -> str:
    """Family of a label, e.g. ``ObsSeason`` for ``ObsSeason spring``."""
    return label.split(" ", 1)[0]


@dataclass
class SchedulePartition:
    """A schedule split at the current time."""

    last_time: float | None = None
    last: list[str] = field(default_factory=list)
    next_time: float | None = None
    next: list[str] = field(default_factory=list)
    recent: list[str] = field(default_factory=list)  # Most recent first
    upcoming: list[str] = field(default_factory=list)  # Chronological


class Schedule:
    """Time-ordered mapping of local hours to event labels.

    Labels added for the same hour keep their insertion order.
    """

    def __init__(self, events: Iterable[tuple[float, str]] = ()):
        self._events: dict[float, list[str]] = {}
        for hour, label in events:
            self.add(hour, label)

    def add(self, hour: float | None, label: str) -> None:
        """Add an event. Events that do not occur (``None``) are ignored."""
        if hour is None or hour < 0.0:
            return
        self._events.setdefault(hour, []).append(label)

    def items(self) -> list[tuple[float, list[str]]]:
        """Events sorted by time."""
        return [(hour, list(self._events[hour])) for hour in sorted(self._events)]

    def first(self) -> tuple[float, list[str]] | None:
        """The earliest entry, or None for an empty schedule."""
        if not self._events:
            return None
        hour = min(self._events)
        return hour, list(self._events[hour])

    def labels(self) -> list[str]:
        return [label for _, labels in self.items() for label in labels]

    def __iter__(self) -> Iterator[tuple[float, list[str]]]:
        return iter(self.items())

    def __len__(self) -> int:
        return sum(len(labels) for labels in self._events.values())

    def __bool__(self) -> bool:
        return bool(self._events)

    def __contains__(self, label: str) -> bool:
        return any(label in labels for labels in self._events.values())

    def __repr__(self) -> str:
        return f"Schedule({self.items()!r})"

    def partition(self, now: float, look_ahead: Schedule | None = None) -> SchedulePartition:
        """Split the schedule into what already happened and what is to come.

        Args:
            now: Current local time in hours
            look_ahead: Schedule of the following day; its first entry is
                appended to the upcoming events at 24h

        Returns:
            SchedulePartition with the last and next entries, the recent
            events (most recent first) and the upcoming events in order
        """
        entries = self.items()
        if look_ahead is not None:
            following = look_ahead.first()
            if following is not None:
                entries.append((LOOK_AHEAD_HOUR, following[1]))

        result = SchedulePartition()
        threshold = now + _NOW_EPSILON_HOURS
        for hour, labels in entries:
            if hour <= threshold:
                result.last_time = hour
                result.last = labels
                result.recent = list(reversed(labels)) + result.recent
            else:
                if result.next_time is None:
                    result.next_time = 0.0 if hour == LOOK_AHEAD_HOUR else hour
                    result.next = labels
                result.upcoming.extend(labels)
        return result
