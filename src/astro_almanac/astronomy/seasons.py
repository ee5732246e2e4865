"""Astronomical, meteorological and phenological seasons.

The phenological season is estimated for Central Europe only. It models
spring and fall as two wavefronts travelling across the continent at a
constant speed: spring starts in south-west Portugal, fall in southern
Finland. The speeds are based on the phenological clock of the Deutscher
Wetterdienst for the year 2017.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from astro_almanac.astronomy.coordinates import distance_on_earth
from astro_almanac.astronomy.sidereal import is_leap_year

logger = logging.getLogger(__name__)

SEASONS = ("winter", "spring", "summer", "fall")

# First and last day of year, winter wraps across the year end
ASTRONOMICAL_SEASON_DAYS = {
    "winter": (354, 79),
    "spring": (80, 172),  # 21./22.3. - 20.6.
    "summer": (173, 265),  # 21.6. - 21./22.9.
    "fall": (266, 353),  # 22./23.9. - 20./21.12.
}

METEOROLOGICAL_SEASON_MONTHS = {
    "winter": (12, 2),
    "spring": (3, 5),
    "summer": (6, 8),
    "fall": (9, 11),
}

PHENO_SEASONS = (
    "winter",
    "earlyspring",
    "firstspring",
    "fullspring",
    "earlysummer",
    "midsummer",
    "latesummer",
    "earlyfall",
    "fullfall",
    "latefall",
)

# Origins of the wavefronts (latitude, longitude)
EARLY_SPRING_ORIGIN = (37.136633, -8.817837)  # South-West Portugal
EARLY_FALL_ORIGIN = (60.161880, 24.937267)  # South Finland / Helsinki

# Bounding box of the model: lat_min <= lat < lat_max, lon_min <= lon < lon_max
PHENO_LATITUDE = (35.0, 71.0)
PHENO_LONGITUDE = (-11.0, 25.0)

DEFAULT_EARLY_SPRING = "02-22"
DEFAULT_EARLY_FALL = "08-20"

# Speeds of the wavefronts in km/day
SPRING_SPEED_FIRST = 37.5
SPRING_SPEED_FULL = 31.0
SPRING_SPEED_TOTAL = 37.5
FALL_SPEED_FIRST = 35.0
FALL_SPEED_FULL = 29.5
FALL_SPEED_TOTAL = 45.0
FIRST_STAGE_FRACTION = 0.4


def _in_range(value: int, bounds: tuple[int, int]) -> bool:
    first, last = bounds
    if first < last:
        return first <= value <= last
    return value >= first or value <= last


def astronomical_season(day_of_year: int) -> int:
    """Index into SEASONS for a day of the year (1-366)."""
    for index, key in enumerate(SEASONS):
        if _in_range(day_of_year, ASTRONOMICAL_SEASON_DAYS[key]):
            return index
    return 0


def meteorological_season(month: int) -> int:
    """Index into SEASONS for a calendar month (1-12)."""
    for index, key in enumerate(SEASONS):
        if _in_range(month, METEOROLOGICAL_SEASON_MONTHS[key]):
            return index
    return 0


def in_pheno_region(latitude: float, longitude: float) -> bool:
    """Whether the phenological model covers this position."""
    return (
        PHENO_LATITUDE[0] <= latitude < PHENO_LATITUDE[1]
        and PHENO_LONGITUDE[0] <= longitude < PHENO_LONGITUDE[1]
    )


def parse_month_day(value: str) -> tuple[int, int]:
    """Parse a ``MM-DD`` string into (month, day)."""
    month, day = value.split("-")
    return int(month), int(day)


def _cutoff(year: int, value: str) -> date:
    month, day = parse_month_day(value)
    # Feb 29 in a common year rolls over to Mar 1
    return date(year, month, 1) + timedelta(days=day - 1)


def phenological_season(
    latitude: float,
    longitude: float,
    day: date,
    early_spring: str = DEFAULT_EARLY_SPRING,
    early_fall: str = DEFAULT_EARLY_FALL,
) -> int | None:
    """Estimate the phenological season at a position.

    Args:
        latitude: Observer latitude in degrees
        longitude: Observer longitude in degrees
        day: Local calendar date
        early_spring: Start of early spring at the spring origin (MM-DD)
        early_fall: Start of early fall at the fall origin (MM-DD)

    Returns:
        Index into PHENO_SEASONS, or None outside the covered region
    """
    if not in_pheno_region(latitude, longitude):
        logger.debug("Location is out of range to calculate phenological season")
        return None

    pheno = 0
    leap = is_leap_year(day.year)

    if day.month < 6:
        # waiting for summer
        dist_obs = distance_on_earth(latitude, longitude, *EARLY_SPRING_ORIGIN)
        dist_total = distance_on_earth(*EARLY_SPRING_ORIGIN, *EARLY_FALL_ORIGIN)
        begin = _cutoff(day.year, early_spring)
        month, mday = parse_month_day(early_spring)
        if leap and (month == 3 or mday == 29):
            # starts one day earlier after Feb 28 in a leap year
            begin -= timedelta(days=1)
        progress = (day - begin).days

        if progress >= 0:
            pheno = 1  # spring begins
            if dist_obs - progress * SPRING_SPEED_FIRST <= dist_obs * FIRST_STAGE_FRACTION:
                pheno = 2  # spring made 40 % of its way to the observer
                if dist_obs - progress * SPRING_SPEED_FULL <= 0.0:
                    pheno = 3  # spring reached the observer
                    if dist_total - progress * SPRING_SPEED_TOTAL <= 0.0:
                        pheno = 4  # should be early summer already
    elif day.month < 9:
        # fairly simple progress during summer
        pheno = 4
        if day.month >= 7:
            pheno += 1
        if day.month == 8:
            pheno += 1

    if 8 <= day.month < 12:
        # waiting for winter
        dist_obs = distance_on_earth(latitude, longitude, *EARLY_FALL_ORIGIN)
        dist_total = distance_on_earth(*EARLY_FALL_ORIGIN, *EARLY_SPRING_ORIGIN)
        begin = _cutoff(day.year, early_fall)
        if leap:
            begin -= timedelta(days=1)
        progress = (day - begin).days

        if progress >= 0:
            pheno = 7  # fall begins
            if dist_obs - progress * FALL_SPEED_FIRST <= dist_obs * FIRST_STAGE_FRACTION:
                pheno = 8  # fall made 40 % of its way to the observer
                if dist_obs - progress * FALL_SPEED_FULL <= 0.0:
                    pheno = 9  # fall reached the observer
                    if dist_total - progress * FALL_SPEED_TOTAL <= 0.0:
                        pheno = 0  # should be winter already

    return pheno
