"""Seasonal (temporal) hours and named parts of the day.

Daylight and night are each divided into a configurable number of equal
parts. The current part is a signed index: 1..N during daylight and
-M..-1 during the night, never zero. Night hour -M starts at sunset and
night hour -1 ends at sunrise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from astro_almanac.astronomy.sidereal import mod

_ROMAN_NUMERALS = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)

# Index = 12 + part during the night, 11 + part during the day (12/12 division)
DAY_PHASES = (
    # night
    "dusk",
    "earlyevening",
    "evening",
    "lateevening",
    "earlynight",
    "beforemidnight",
    "midnight",
    "aftermidnight",
    "latenight",
    "cockcrow",
    "firstmorninglight",
    "dawn",
    # day
    "breakingdawn",
    "earlymorning",
    "morning",
    "earlyforenoon",
    "forenoon",
    "lateforenoon",
    "noon",
    "earlyafternoon",
    "afternoon",
    "afternoon",
    "lateafternoon",
    "firstdusk",
)

# Offset so that a boundary instant already counts as the new part
_EPSILON_HOURS = 1.0 / 3600.0


@dataclass(frozen=True)
class SeasonalHours:
    """Seasonal hour partition of one local calendar day."""

    day_parts: int
    night_parts: int
    hours_of_sunlight: float
    hours_of_night: float
    day_part_length: float
    night_part_length: float
    current: int  # Signed index, never 0
    next_boundary: float  # Local hour at which the current part ends
    boundaries: dict[int, float] = field(default_factory=dict)  # Signed index -> start hour

    @property
    def is_day(self) -> bool:
        return self.current > 0


def arabic_to_roman(n: int) -> str:
    """Roman numeral for a positive integer, empty string for 0 or less."""
    if n <= 0:
        return ""
    parts = []
    for value, numeral in _ROMAN_NUMERALS:
        count, n = divmod(n, value)
        parts.append(numeral * count)
    return "".join(parts)


def visible_hours(
    rise: float | None, set_: float | None, above_horizon: bool
) -> tuple[float, float]:
    """Hours above and below the horizon on a local calendar day.

    A missing rise or set is taken to coincide with local midnight. If
    neither occurs the body is up or down all day depending on
    ``above_horizon``. The two values always add up to 24.
    """
    if rise is None and set_ is None:
        visible = 24.0 if above_horizon else 0.0
    elif set_ is None:
        visible = 24.0 - rise
    elif rise is None:
        visible = set_
    else:
        end = set_ + 24.0 if rise > set_ else set_
        visible = end - rise
    return visible, 24.0 - visible


def _part(elapsed: float, length: float, parts: int) -> int:
    if length <= 0.0:
        return parts
    return min(max(math.ceil(elapsed / length), 1), parts)


def seasonal_hours(
    sunrise: float | None,
    sunset: float | None,
    sun_above_horizon: bool,
    time_of_day: float,
    day_parts: int = 12,
    night_parts: int = 12,
) -> SeasonalHours:
    """Partition the local day into seasonal hours.

    Args:
        sunrise: Local hour of sunrise, None if it does not occur
        sunset: Local hour of sunset, None if it does not occur
        sun_above_horizon: Whether the sun is currently up (used when
            neither sunrise nor sunset occur)
        time_of_day: Current local time in hours
        day_parts: Number of parts of daylight (N)
        night_parts: Number of parts of the night (M)

    Returns:
        SeasonalHours with lengths, current signed index, next boundary
        and the start hour of every partition
    """
    sunlight, night = visible_hours(sunrise, sunset, sun_above_horizon)
    day_len = sunlight / day_parts
    night_len = night / night_parts
    now = time_of_day + _EPSILON_HOURS

    boundaries: dict[int, float] = {}

    if sunrise is None and sunset is None:
        # polar day or night: one 24 hour set for whichever state holds
        if sun_above_horizon:
            length = 24.0 / day_parts
            current = _part(now, length, day_parts)
            next_boundary = current * length
            boundaries = {k + 1: k * length for k in range(day_parts)}
        else:
            length = 24.0 / night_parts
            j = _part(now, length, night_parts)
            current = j - (night_parts + 1)
            next_boundary = j * length
            boundaries = {-(night_parts - k): k * length for k in range(night_parts)}
        return SeasonalHours(
            day_parts=day_parts,
            night_parts=night_parts,
            hours_of_sunlight=sunlight,
            hours_of_night=night,
            day_part_length=day_len,
            night_part_length=night_len,
            current=current,
            next_boundary=mod(next_boundary, 24.0),
            boundaries=boundaries,
        )

    day_anchor = 0.0 if sunrise is None else sunrise
    night_anchor = 0.0 if sunset is None else sunset

    if sunset is None:
        is_day = now >= sunrise
    elif sunrise is None:
        is_day = now < sunset
    elif sunset < sunrise:
        # long days: this morning's sunset ends the day that began yesterday
        is_day = not (sunset <= now < sunrise)
        if now < sunset:
            day_anchor = sunrise - 24.0
    else:
        is_day = sunrise <= now < sunset
        if now < sunrise:
            night_anchor = sunset - 24.0

    if is_day:
        current = _part(now - day_anchor, day_len, day_parts)
        next_boundary = day_anchor + current * day_len
    else:
        j = _part(now - night_anchor, night_len, night_parts)
        current = j - (night_parts + 1)
        next_boundary = night_anchor + j * night_len

    day_start = 0.0 if sunrise is None else sunrise
    night_start = 0.0 if sunset is None else sunset
    for k in range(night_parts):
        boundaries[-(night_parts - k)] = mod(night_start + k * night_len, 24.0)
    for k in range(day_parts):
        boundaries[k + 1] = mod(day_start + k * day_len, 24.0)

    return SeasonalHours(
        day_parts=day_parts,
        night_parts=night_parts,
        hours_of_sunlight=sunlight,
        hours_of_night=night,
        day_part_length=day_len,
        night_part_length=night_len,
        current=current,
        next_boundary=mod(next_boundary, 24.0),
        boundaries=dict(sorted(boundaries.items())),
    )


def daytime_phase(
    index: int, day_parts: int, night_parts: int, roman: bool = False
) -> tuple[int, str] | None:
    """Number and name of the part of the day for a signed seasonal hour.

    The 24-entry table applies to the temporal hour convention (12 parts
    of daylight and 12 of night). In Roman mode the night is split into
    four watches ("Vigilia") and the day into twelve hours ("Hora").

    Returns:
        (phase number, phase key or Roman name), or None when the division
        has no naming convention
    """
    if (
        (day_parts == 12 and night_parts == 12)
        or (day_parts == 12 and index > 0 and not roman)
        or (night_parts == 12 and index < 0)
    ):
        number = (12 if index < 0 else 11) + index
        return number, DAY_PHASES[number]
    if roman or (night_parts == 4 and index < 0):
        number = (4 if index < 0 else 3) + index
        if index < 0:
            return number, "Vigilia " + arabic_to_roman(index + night_parts + 1)
        return number, "Hora " + arabic_to_roman(index)
    return None
