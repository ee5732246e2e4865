"""Domain models for the astronomical almanac."""

from astro_almanac.models.moment import Moment
from astro_almanac.models.observer import (
    Coordinates,
    Observer,
    parse_horizon,
    parse_seasonal_hours,
)
from astro_almanac.models.snapshot import (
    CHANGE_FIELDS,
    ChangeFlag,
    DayReport,
    DaySnapshot,
)

__all__ = [
    # Observer
    "Coordinates",
    "Observer",
    "parse_horizon",
    "parse_seasonal_hours",
    # Moment
    "Moment",
    # Snapshot
    "CHANGE_FIELDS",
    "ChangeFlag",
    "DayReport",
    "DaySnapshot",
]
