"""Astronomical calculations for the Sun, the Moon, days and seasons.

The calculator module (AstroCalculator) depends on the models package and
is imported from ``astro_almanac.astronomy.calculator`` directly.
"""

from astro_almanac.astronomy.bodies import (
    MOON_PHASES,
    ZODIAC,
    MoonCoordinates,
    SunCoordinates,
    moon_phase_index,
    moon_position,
    sun_position,
)
from astro_almanac.astronomy.daytime import (
    DAY_PHASES,
    SeasonalHours,
    arabic_to_roman,
    daytime_phase,
    seasonal_hours,
    visible_hours,
)
from astro_almanac.astronomy.riseset import (
    RiseSetTimes,
    SunEvents,
    moon_rise,
    sun_rise,
)
from astro_almanac.astronomy.seasons import (
    PHENO_SEASONS,
    SEASONS,
    astronomical_season,
    meteorological_season,
    phenological_season,
)
from astro_almanac.astronomy.sidereal import calc_jd, gmst, gmst_to_lmst

__all__ = [
    # Bodies
    "MOON_PHASES",
    "ZODIAC",
    "MoonCoordinates",
    "SunCoordinates",
    "moon_phase_index",
    "moon_position",
    "sun_position",
    # Rise and set
    "RiseSetTimes",
    "SunEvents",
    "moon_rise",
    "sun_rise",
    # Daytime
    "DAY_PHASES",
    "SeasonalHours",
    "arabic_to_roman",
    "daytime_phase",
    "seasonal_hours",
    "visible_hours",
    # Seasons
    "PHENO_SEASONS",
    "SEASONS",
    "astronomical_season",
    "meteorological_season",
    "phenological_season",
    # Time
    "calc_jd",
    "gmst",
    "gmst_to_lmst",
]
