"""Per-day results of the almanac computation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from astro_almanac.astronomy.bodies import MoonCoordinates, SunCoordinates
from astro_almanac.astronomy.daytime import SeasonalHours
from astro_almanac.astronomy.riseset import RiseSetTimes, SunEvents
from astro_almanac.astronomy.seasons import PHENO_SEASONS, SEASONS
from astro_almanac.models.moment import Moment
from astro_almanac.models.observer import Observer
from astro_almanac.schedule import Schedule, SchedulePartition


class ChangeFlag(IntEnum):
    """Transition marker of a categorical value between adjacent days."""

    NONE = 0
    CHANGED_TODAY = 1
    CHANGES_TOMORROW = 2


# Categorical attribute -> schedule family and field name suffix
CHANGE_FIELDS = {
    "season": "ObsSeason",
    "meteo_season": "ObsMeteoSeason",
    "pheno_season": "ObsPhenoSeason",
    "sun_sign": "SunSign",
    "moon_sign": "MoonSign",
    "moon_phase": "MoonPhaseS",
    "dst": "ObsIsDST",
}


@dataclass(frozen=True)
class DaySnapshot:
    """Everything computed for one calendar day, without its neighbours.

    Angles are in radians unless the name says otherwise, times in local
    fractional hours, distances in km.
    """

    offset: int
    observer: Observer
    moment: Moment
    jd: float
    gmst: float  # Hours
    lmst: float  # Hours

    sun: SunCoordinates
    sun_altitude_deg: float  # Apparent, refraction included
    sun_distance_observer: float
    sun_events: SunEvents
    sun_hours_visible: float
    sun_hours_invisible: float

    moon: MoonCoordinates
    moon_altitude_deg: float
    moon_distance_observer: float
    moon_events: RiseSetTimes
    moon_hours_visible: float
    moon_hours_invisible: float

    seasonal: SeasonalHours
    daytime: tuple[int, str] | None
    season: int
    meteo_season: int
    pheno_season: int | None  # None outside Central Europe

    events: tuple[tuple[float, str], ...] = ()

    @property
    def season_key(self) -> str:
        return SEASONS[self.season]

    @property
    def meteo_season_key(self) -> str:
        return SEASONS[self.meteo_season]

    @property
    def pheno_season_key(self) -> str | None:
        if self.pheno_season is None:
            return None
        return PHENO_SEASONS[self.pheno_season]

    def category(self, attribute: str) -> int | str | bool | None:
        """Value of a categorical attribute used for change detection."""
        if attribute == "season":
            return self.season
        if attribute == "meteo_season":
            return self.meteo_season
        if attribute == "pheno_season":
            return self.pheno_season
        if attribute == "sun_sign":
            return self.sun.sign
        if attribute == "moon_sign":
            return self.moon.sign
        if attribute == "moon_phase":
            return self.moon.phase_index
        if attribute == "dst":
            return self.moment.is_dst_noon
        raise KeyError(attribute)

    def change_label(self, attribute: str) -> str:
        """Schedule label announcing this day's value of an attribute."""
        family = CHANGE_FIELDS[attribute]
        if attribute == "season":
            value = self.season_key
        elif attribute == "meteo_season":
            value = self.meteo_season_key
        elif attribute == "pheno_season":
            value = self.pheno_season_key
        elif attribute == "sun_sign":
            value = self.sun.sign
        elif attribute == "moon_sign":
            value = self.moon.sign
        elif attribute == "moon_phase":
            value = self.moon.phase_key
        else:
            value = str(int(self.moment.is_dst))
        return f"{family} {value}"


@dataclass(frozen=True)
class DayReport:
    """A day snapshot completed with what depends on its neighbours."""

    snapshot: DaySnapshot
    changes: dict[str, ChangeFlag]
    schedule: Schedule
    partition: SchedulePartition
    # Start of every seasonal hour; tomorrow's start once today's has passed
    seasonal_hour_times: dict[int, float | None]
    neighbours: dict[int, DayReport] = field(default_factory=dict)

    @property
    def offset(self) -> int:
        return self.snapshot.offset

    def change(self, attribute: str) -> ChangeFlag:
        return self.changes.get(attribute, ChangeFlag.NONE)
