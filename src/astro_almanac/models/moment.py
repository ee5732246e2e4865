"""The instant a computation refers to, broken into local calendar fields."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from astro_almanac.astronomy.sidereal import calc_jd, days_of_month, is_leap_year


@dataclass(frozen=True)
class Moment:
    """Local calendar date and time of an aware datetime.

    The zone offset is taken from the datetime itself, so it already
    includes daylight saving time and may be fractional.
    """

    timestamp: datetime
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    zone: float  # Offset from UT in hours
    is_dst: bool
    is_dst_noon: bool  # DST state at local noon of the same day
    day_of_year: int
    week_of_year: int  # ISO 8601

    @classmethod
    def from_datetime(cls, dt: datetime) -> Moment:
        """Create a Moment from a timezone-aware datetime.

        Raises:
            ValueError: If the datetime is naive
        """
        offset = dt.utcoffset()
        if offset is None:
            raise ValueError("A timezone-aware datetime is required")

        noon = dt.replace(hour=12, minute=0, second=0, microsecond=0)
        return cls(
            timestamp=dt,
            year=dt.year,
            month=dt.month,
            day=dt.day,
            hour=dt.hour,
            minute=dt.minute,
            second=dt.second,
            zone=offset.total_seconds() / 3600.0,
            is_dst=bool(dt.dst()),
            is_dst_noon=bool(noon.dst()),
            day_of_year=dt.timetuple().tm_yday,
            week_of_year=dt.isocalendar()[1],
        )

    def shifted(self, days: int) -> Moment:
        """The same wall-clock time a number of calendar days later.

        A wall-clock time that does not exist on the target day (inside a
        DST gap) is normalized through UTC.
        """
        if days == 0:
            return self
        tz = self.timestamp.tzinfo
        wall = self.timestamp.replace(tzinfo=None) + timedelta(days=days)
        local = wall.replace(tzinfo=tz).astimezone(timezone.utc).astimezone(tz)
        return Moment.from_datetime(local)

    @property
    def date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def time_of_day(self) -> float:
        """Local time in fractional hours."""
        return self.hour + self.minute / 60.0 + self.second / 3600.0

    @property
    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    @property
    def days_in_year(self) -> int:
        return 366 if self.is_leap_year else 365

    @property
    def year_remain_days(self) -> int:
        return self.days_in_year - self.day_of_year

    @property
    def year_progress(self) -> float:
        return self.day_of_year / self.days_in_year

    @property
    def month_remain_days(self) -> int:
        return days_of_month(self.year, self.month) - self.day

    @property
    def month_progress(self) -> float:
        return self.day / days_of_month(self.year, self.month)

    @property
    def jd0(self) -> float:
        """Julian date of 0h UT on the local calendar date."""
        return calc_jd(self.day, self.month, self.year)

    @property
    def jd(self) -> float:
        """Julian date of this instant (UT)."""
        return self.jd0 + (self.hour - self.zone + self.minute / 60.0 + self.second / 3600.0) / 24.0
