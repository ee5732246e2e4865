"""Almanac computation for an observer and a day.

This module ties the astronomical building blocks together:
- Sun and Moon position, distance and phase
- Rise, set and transit times and twilights
- Seasonal hours and the name of the current part of the day
- Astronomical, meteorological and phenological season
- Changes of categorical values between days and the daily schedule

Every computation covers five consecutive days (the requested day and two
on either side). The snapshots are built first, independently of each
other; a second pass only reads neighbouring snapshots to derive change
flags, schedules and look-ahead values.
"""

from __future__ import annotations

import logging
import math
import threading
from datetime import datetime

from astro_almanac.astronomy.bodies import moon_position, sun_position
from astro_almanac.astronomy.coordinates import equ_polar_to_cart, observer_to_equ_cart
from astro_almanac.astronomy.daytime import daytime_phase, seasonal_hours, visible_hours
from astro_almanac.astronomy.refraction import refraction
from astro_almanac.astronomy.riseset import moon_rise, sun_rise
from astro_almanac.astronomy.seasons import (
    astronomical_season,
    meteorological_season,
    phenological_season,
)
from astro_almanac.astronomy.sidereal import DEG, RAD, gmst, gmst_to_lmst
from astro_almanac.models.moment import Moment
from astro_almanac.models.observer import Observer
from astro_almanac.models.snapshot import CHANGE_FIELDS, ChangeFlag, DayReport, DaySnapshot
from astro_almanac.schedule import SCHEDULE_FAMILIES, Schedule, event_family, validate_families

logger = logging.getLogger(__name__)

# TT - UT in seconds
DEFAULT_DELTA_T = 65.0

# Days computed on either side of the requested day
NEIGHBOUR_DAYS = 2

DAY_OFFSET_WORDS = {"yesterday": -1, "today": 0, "tomorrow": 1}


def resolve_day_offset(day_offset: int | str) -> int:
    """Turn a day offset selector into a number of days.

    Raises:
        ValueError: For an unknown word or a non-numeric string
    """
    if isinstance(day_offset, int):
        return day_offset
    word = day_offset.strip().lower()
    if word in DAY_OFFSET_WORDS:
        return DAY_OFFSET_WORDS[word]
    try:
        return int(word)
    except ValueError:
        raise ValueError(
            f"Invalid day offset: '{day_offset}'. "
            "Expected an integer, 'yesterday' or 'tomorrow'"
        ) from None


def _distance(a: tuple[float, float, float], b: tuple[float, float, float]) -> float:
    return math.sqrt(sum((p - q) ** 2 for p, q in zip(a, b)))


def _differs(earlier: DaySnapshot, later: DaySnapshot, attribute: str) -> bool:
    before = earlier.category(attribute)
    after = later.category(attribute)
    if before is None or after is None:
        return False
    return before != after


class AstroCalculator:
    """Calculator for almanac data of a fixed observer.

    The calculator holds no state between calls except the optional
    cached report for today, which is replaced as a whole by ``refresh``.

    Example:
        ```python
        calc = AstroCalculator(Observer(latitude=50.0, longitude=10.0))

        # Report for right now
        report = calc.compute(datetime.now(ZoneInfo("Europe/Berlin")))
        report.snapshot.sun_events.rise

        # Tomorrow, same wall-clock time
        calc.compute(now, "tomorrow")
        ```
    """

    def __init__(
        self,
        observer: Observer,
        delta_t: float = DEFAULT_DELTA_T,
        schedule: list[str] | tuple[str, ...] | frozenset[str] | None = None,
    ):
        """Initialize calculator for an observer.

        Args:
            observer: Observer position and calendar conventions
            delta_t: TT - UT in seconds
            schedule: Event families to put into the daily schedule
                (default all, see SCHEDULE_FAMILIES)
        """
        self.observer = observer
        self.delta_t = delta_t
        self.schedule_families = validate_families(
            SCHEDULE_FAMILIES if schedule is None else schedule
        )
        self._lock = threading.Lock()
        self._today: DayReport | None = None

    def _scheduled(self, label: str) -> bool:
        return event_family(label) in self.schedule_families

    def snapshot(self, moment: Moment, offset: int = 0) -> DaySnapshot:
        """Compute everything for one day that needs no neighbouring day.

        Args:
            moment: Local date and time of the day to compute
            offset: Offset of this day from the requested day, kept for
                reference only

        Returns:
            DaySnapshot with positions, events, seasons and the day's
            own schedule entries
        """
        obs = self.observer
        lat = obs.latitude * DEG
        lon = obs.longitude * DEG
        height = obs.altitude * 0.001

        jd0 = moment.jd0
        jd = moment.jd
        tdt = jd + self.delta_t / 86400.0

        gmst_hours = gmst(jd)
        lmst_hours = gmst_to_lmst(gmst_hours, lon)
        lmst = lmst_hours * 15.0 * DEG

        # geocentric cartesian coordinates of the observer
        x, y, z, radius = observer_to_equ_cart(lon, lat, height, gmst_hours)
        observer_cart = (x, y, z)

        sun = sun_position(tdt, lat, lmst)
        sun_alt = sun.alt * RAD + refraction(sun.alt)
        sun_cart = equ_polar_to_cart(sun.ra, sun.dec, sun.distance)
        sun_events = sun_rise(
            jd0, self.delta_t, lon, lat, moment.zone, obs.horizon_morning, obs.horizon_evening
        )
        for note in sun_events.notes:
            logger.debug(f"{moment.date.isoformat()}: {note}")
        sun_visible, sun_invisible = visible_hours(sun_events.rise, sun_events.set, sun_alt > 0.0)

        moon = moon_position(sun.lon, sun.anomaly_mean, tdt, lon, lat, radius, lmst)
        moon_alt = moon.alt * RAD + refraction(moon.alt)
        moon_cart = equ_polar_to_cart(
            moon.ra_geocentric, moon.dec_geocentric, moon.distance_geocentric
        )
        moon_events = moon_rise(jd0, self.delta_t, lon, lat, radius, moment.zone)
        moon_visible, moon_invisible = visible_hours(
            moon_events.rise, moon_events.set, moon_alt >= 0.0
        )

        seasonal = seasonal_hours(
            sun_events.rise,
            sun_events.set,
            sun_alt > 0.0,
            moment.time_of_day,
            obs.day_parts,
            obs.night_parts,
        )
        daytime = daytime_phase(seasonal.current, obs.day_parts, obs.night_parts, obs.roman_hours)

        pheno = phenological_season(
            obs.latitude, obs.longitude, moment.date, obs.early_spring, obs.early_fall
        )

        events = [
            (sun_events.transit, "SunTransit"),
            (sun_events.rise, "SunRise"),
            (sun_events.set, "SunSet"),
            (sun_events.civil_twilight_morning, "CivilTwilightMorning"),
            (sun_events.civil_twilight_evening, "CivilTwilightEvening"),
            (sun_events.nautic_twilight_morning, "NauticTwilightMorning"),
            (sun_events.nautic_twilight_evening, "NauticTwilightEvening"),
            (sun_events.astro_twilight_morning, "AstroTwilightMorning"),
            (sun_events.astro_twilight_evening, "AstroTwilightEvening"),
            (sun_events.custom_twilight_morning, "CustomTwilightMorning"),
            (sun_events.custom_twilight_evening, "CustomTwilightEvening"),
            (moon_events.transit, "MoonTransit"),
            (moon_events.rise, "MoonRise"),
            (moon_events.set, "MoonSet"),
            (0.0, f"ObsDate {moment.date.strftime('%d.%m.%Y')}"),
        ]
        events.extend(
            (start, f"ObsSeasonalHr {index}") for index, start in seasonal.boundaries.items()
        )

        return DaySnapshot(
            offset=offset,
            observer=obs,
            moment=moment,
            jd=jd,
            gmst=gmst_hours,
            lmst=lmst_hours,
            sun=sun,
            sun_altitude_deg=sun_alt,
            sun_distance_observer=_distance(sun_cart, observer_cart),
            sun_events=sun_events,
            sun_hours_visible=sun_visible,
            sun_hours_invisible=sun_invisible,
            moon=moon,
            moon_altitude_deg=moon_alt,
            moon_distance_observer=_distance(moon_cart, observer_cart),
            moon_events=moon_events,
            moon_hours_visible=moon_visible,
            moon_hours_invisible=moon_invisible,
            seasonal=seasonal,
            daytime=daytime,
            season=astronomical_season(moment.day_of_year),
            meteo_season=meteorological_season(moment.month),
            pheno_season=pheno,
            events=tuple(
                (hour, label)
                for hour, label in events
                if hour is not None and self._scheduled(label)
            ),
        )

    def _link(self, snapshots: list[DaySnapshot]) -> list[DayReport]:
        """Derive everything that depends on neighbouring days.

        Only reads the snapshots. A value that differs from the next day
        marks the earlier day "changes tomorrow" and the later day
        "changed today"; "changes tomorrow" wins when a day has both.
        """
        count = len(snapshots)
        changes = [dict.fromkeys(CHANGE_FIELDS, ChangeFlag.NONE) for _ in snapshots]
        transitions: list[list[str]] = [[] for _ in snapshots]

        for i in range(count - 1):
            earlier, later = snapshots[i], snapshots[i + 1]
            for attribute in CHANGE_FIELDS:
                if not _differs(earlier, later, attribute):
                    continue
                changes[i][attribute] = ChangeFlag.CHANGES_TOMORROW
                changes[i + 1][attribute] = ChangeFlag.CHANGED_TODAY
                label = later.change_label(attribute)
                if self._scheduled(label):
                    transitions[i + 1].append(label)

        schedules = []
        for snap, labels in zip(snapshots, transitions):
            schedule = Schedule(snap.events)
            for label in labels:
                schedule.add(0.0, label)
            schedules.append(schedule)

        reports = []
        for i, snap in enumerate(snapshots):
            following = snapshots[i + 1] if i + 1 < count else None
            now = snap.moment.time_of_day
            times: dict[int, float | None] = {}
            for index, start in snap.seasonal.boundaries.items():
                if now >= start:
                    # passed already, report the start of tomorrow's
                    start = None if following is None else following.seasonal.boundaries.get(index)
                times[index] = start

            reports.append(
                DayReport(
                    snapshot=snap,
                    changes=changes[i],
                    schedule=schedules[i],
                    partition=schedules[i].partition(
                        now, schedules[i + 1] if i + 1 < count else None
                    ),
                    seasonal_hour_times=times,
                )
            )
        return reports

    def compute(self, when: datetime | Moment, day_offset: int | str = 0) -> DayReport:
        """Compute the almanac report for a day.

        Args:
            when: Timezone-aware datetime (or Moment) defining "today"
            day_offset: Days from today: an integer, "yesterday" or "tomorrow"

        Returns:
            DayReport for the requested day, with the reports of the two
            days before and after under ``neighbours`` (keys -2, -1, 1, 2)

        Raises:
            ValueError: For a naive datetime or an invalid day offset
        """
        offset = resolve_day_offset(day_offset)
        moment = when if isinstance(when, Moment) else Moment.from_datetime(when)
        target = moment.shifted(offset)

        snapshots = [
            self.snapshot(target.shifted(k), k)
            for k in range(-NEIGHBOUR_DAYS, NEIGHBOUR_DAYS + 1)
        ]
        reports = self._link(snapshots)
        center = reports[NEIGHBOUR_DAYS]
        return DayReport(
            snapshot=center.snapshot,
            changes=center.changes,
            schedule=center.schedule,
            partition=center.partition,
            seasonal_hour_times=center.seasonal_hour_times,
            neighbours={r.offset: r for r in reports if r.offset != 0},
        )

    def refresh(self, when: datetime | Moment) -> DayReport:
        """Recompute today's report and replace the cached one."""
        report = self.compute(when)
        with self._lock:
            self._today = report
        logger.info(f"Refreshed almanac for {report.snapshot.moment.date.isoformat()}")
        return report

    @property
    def today(self) -> DayReport | None:
        """The report cached by the last ``refresh``, if any."""
        with self._lock:
            return self._today
