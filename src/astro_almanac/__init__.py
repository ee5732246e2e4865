"""Astronomical almanac: Sun, Moon, twilight, seasonal hours and seasons."""

from astro_almanac.astronomy.calculator import AstroCalculator
from astro_almanac.formatting import field_map
from astro_almanac.labels import LabelLookup, identity_labels
from astro_almanac.models import ChangeFlag, DayReport, DaySnapshot, Moment, Observer
from astro_almanac.schedule import Schedule

__version__ = "0.1.0"

__all__ = [
    "AstroCalculator",
    "ChangeFlag",
    "DayReport",
    "DaySnapshot",
    "LabelLookup",
    "Moment",
    "Observer",
    "Schedule",
    "field_map",
    "identity_labels",
]
