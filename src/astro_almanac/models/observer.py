"""Observer models for astronomical computations."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from astro_almanac.astronomy.sidereal import days_of_month


# Regex for parsing coordinates: "latitude,longitude[,altitude]"
# Supports optional +/- prefix for all values
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)"
    r"(?:\s*,\s*(?P<alt>[-+]?\d*\.?\d+))?$"
)

MONTH_DAY_PATTERN = re.compile(r"^(?P<month>\d{2})-(?P<day>\d{2})$")

# "4" selects Roman hours: 12 hours of daylight, 4 night watches
ROMAN_SEASONAL_HOURS = "4"


def parse_horizon(value: str | float) -> tuple[float, float]:
    """Parse a horizon setting into (morning, evening) angles in degrees.

    Examples:
        '0' -> (0.0, 0.0)
        '-6' -> (-6.0, -6.0)
        '-3:-4.5' -> (-3.0, -4.5)
    """
    if isinstance(value, (int, float)):
        return float(value), float(value)
    morning, sep, evening = str(value).strip().partition(":")
    try:
        return float(morning), float(evening if sep else morning)
    except ValueError:
        raise ValueError(
            f"Invalid horizon: '{value}'. Expected 'degrees' or 'morning:evening'"
        ) from None


def parse_seasonal_hours(value: str | int) -> tuple[int, int, bool]:
    """Parse a seasonal hour setting into (day_parts, night_parts, roman).

    Examples:
        '12' -> (12, 12, False)
        '10:14' -> (10, 14, False)
        '4' -> (12, 4, True)
    """
    text = str(value).strip()
    if text == ROMAN_SEASONAL_HOURS:
        return 12, 4, True
    day, sep, night = text.partition(":")
    try:
        day_parts = int(day)
        night_parts = int(night) if sep else day_parts
    except ValueError:
        raise ValueError(
            f"Invalid seasonal hours: '{value}'. Expected 'N' or 'N:M'"
        ) from None
    return day_parts, night_parts, False


def validate_month_day(value: str) -> str:
    """Check a ``MM-DD`` calendar cutoff. February 29 is accepted."""
    match = MONTH_DAY_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid date: '{value}'. Expected format 'MM-DD'")
    month = int(match.group("month"))
    day = int(match.group("day"))
    if not 1 <= month <= 12 or not 1 <= day <= days_of_month(2000, month):
        raise ValueError(f"Invalid date: '{value}' is not a calendar day")
    return f"{month:02d}-{day:02d}"


class Coordinates(BaseModel):
    """Geographic coordinates (latitude/longitude).

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"


class Observer(Coordinates):
    """An observer on the WGS84 ellipsoid plus the calendar conventions used.

    Immutable; one instance is shared by every snapshot of a computation.
    """

    altitude: float = Field(
        default=0.0, description="Height above the WGS84 ellipsoid in meters"
    )
    horizon_morning: float = Field(
        default=0.0, ge=-90, le=90, description="Custom morning horizon in degrees"
    )
    horizon_evening: float = Field(
        default=0.0, ge=-90, le=90, description="Custom evening horizon in degrees"
    )
    day_parts: int = Field(default=12, ge=1, le=24, description="Seasonal hours of daylight")
    night_parts: int = Field(default=12, ge=1, le=24, description="Seasonal hours of night")
    roman_hours: bool = Field(
        default=False, description="Name parts of the day as Roman hours and night watches"
    )
    early_spring: str = Field(default="02-22", description="Start of early spring (MM-DD)")
    early_fall: str = Field(default="08-20", description="Start of early fall (MM-DD)")

    @field_validator("early_spring", "early_fall")
    @classmethod
    def validate_cutoff(cls, v: str) -> str:
        return validate_month_day(v)

    @model_validator(mode="after")
    def validate_roman_hours(self) -> Self:
        """Roman hours always split the day into 12 hours and 4 watches."""
        if self.roman_hours and (self.day_parts, self.night_parts) != (12, 4):
            raise ValueError("Roman hours require 12 day parts and 4 night parts")
        return self

    @classmethod
    def from_string(cls, value: str, **kwargs) -> Self:
        """Parse an observer from 'latitude,longitude[,altitude]'.

        Examples:
            '50.0,10.0' -> 50N 10E at sea level
            '-33.8688,151.2093,58' -> Sydney, 58 m
        """
        match = COORDINATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected format: 'latitude,longitude[,altitude]' (e.g., '50.0,10.0')"
            )
        if match.group("alt") is not None:
            kwargs.setdefault("altitude", float(match.group("alt")))
        return cls(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
            **kwargs,
        )
