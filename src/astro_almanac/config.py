"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
The astronomical core never reads settings itself: it receives an Observer
and a Moment explicitly. Settings only build those at the boundary (CLI).

## Environment Variables

- ASTRO_LATITUDE: Observer latitude in degrees (default: 50.0)
- ASTRO_LONGITUDE: Observer longitude in degrees (default: 10.0)
- ASTRO_ALTITUDE: Height above the WGS84 ellipsoid in meters (default: 0)
- ASTRO_HORIZON: Custom horizon, 'degrees' or 'morning:evening' (default: 0)
- ASTRO_EARLY_SPRING: Start of early spring, MM-DD (default: 02-22)
- ASTRO_EARLY_FALL: Start of early fall, MM-DD (default: 08-20)
- ASTRO_SEASONAL_HOURS: 'N', 'N:M' or '4' for Roman hours (default: 12)
- ASTRO_SCHEDULE: Comma separated event families to schedule (default: all)
- ASTRO_DELTA_T: TT - UT in seconds (default: 65)
- ASTRO_TIMEZONE: IANA timezone identifier (default: UTC)
- ASTRO_LOG_LEVEL: Logging level (default: WARNING)

## Example .env file

```
ASTRO_LATITUDE=52.52
ASTRO_LONGITUDE=13.405
ASTRO_HORIZON=-3:-4.5
ASTRO_TIMEZONE=Europe/Berlin
ASTRO_SCHEDULE=SunRise,SunSet,MoonPhaseS
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from astro_almanac.astronomy.calculator import DEFAULT_DELTA_T
from astro_almanac.models.observer import (
    Observer,
    parse_horizon,
    parse_seasonal_hours,
    validate_month_day,
)
from astro_almanac.schedule import SCHEDULE_FAMILIES, validate_families


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ASTRO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Observer
    latitude: float = Field(default=50.0, ge=-90, le=90)
    longitude: float = Field(default=10.0, ge=-180, le=180)
    altitude: float = Field(default=0.0, description="Meters above the WGS84 ellipsoid")
    horizon: str = Field(default="0", description="'degrees' or 'morning:evening'")

    # Calendar conventions
    early_spring: str = "02-22"
    early_fall: str = "08-20"
    seasonal_hours: str = Field(default="12", description="'N', 'N:M' or '4' for Roman hours")

    # Computation
    schedule: Annotated[list[str], NoDecode] = Field(
        default=list(SCHEDULE_FAMILIES),
        description="Event families put into the daily schedule",
    )
    delta_t: float = Field(default=DEFAULT_DELTA_T, description="TT - UT in seconds")
    timezone: str = "UTC"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("horizon", mode="before")
    @classmethod
    def validate_horizon(cls, v: str | float) -> str:
        parse_horizon(v)
        return str(v)

    @field_validator("seasonal_hours", mode="before")
    @classmethod
    def validate_seasonal_hours(cls, v: str | int) -> str:
        day_parts, night_parts, _ = parse_seasonal_hours(v)
        if not (1 <= day_parts <= 24 and 1 <= night_parts <= 24):
            raise ValueError("Seasonal hours must be between 1 and 24")
        return str(v)

    @field_validator("early_spring", "early_fall")
    @classmethod
    def validate_cutoff(cls, v: str) -> str:
        return validate_month_day(v)

    @field_validator("schedule", mode="before")
    @classmethod
    def split_schedule(cls, v: str | list[str]) -> list[str]:
        """Accept a comma separated string as well as a list."""
        if isinstance(v, str):
            v = [item.strip() for item in v.split(",") if item.strip()]
        return sorted(validate_families(v), key=SCHEDULE_FAMILIES.index)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: '{v}'") from None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def observer(self) -> Observer:
        """Build the Observer described by these settings."""
        morning, evening = parse_horizon(self.horizon)
        day_parts, night_parts, roman = parse_seasonal_hours(self.seasonal_hours)
        return Observer(
            latitude=self.latitude,
            longitude=self.longitude,
            altitude=self.altitude,
            horizon_morning=morning,
            horizon_evening=evening,
            day_parts=day_parts,
            night_parts=night_parts,
            roman_hours=roman,
            early_spring=self.early_spring,
            early_fall=self.early_fall,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
