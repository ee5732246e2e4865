"""Flat field map of a day report.

The field map uses the canonical field names (``SunRise``, ``MoonPhaseS``,
``ObsSeasonalHrT-03`` ...). Angles are rounded to one decimal, distances
to whole km and fractions to two decimals. Times are ``HH:MM`` or
``HH:MM:SS`` strings and ``"---"`` stands for an event that does not
occur.
"""

from __future__ import annotations

import math
from typing import Any

from astro_almanac.astronomy.daytime import DAY_PHASES, arabic_to_roman
from astro_almanac.astronomy.sidereal import RAD
from astro_almanac.labels import LabelLookup, identity_labels
from astro_almanac.models.snapshot import CHANGE_FIELDS, DayReport
from astro_almanac.schedule import LOOK_AHEAD_HOUR, event_family

NOT_OCCURRING = "---"

COMPASS_POINTS = (
    "cpn",
    "cpnne",
    "cpne",
    "cpene",
    "cpe",
    "cpese",
    "cpse",
    "cpsse",
    "cps",
    "cpssw",
    "cpsw",
    "cpwsw",
    "cpw",
    "cpwnw",
    "cpnw",
    "cpnnw",
)

# Schedule families whose value is a canonical key
_TRANSLATED_FAMILIES = {
    "ObsSeason",
    "ObsMeteoSeason",
    "ObsPhenoSeason",
    "SunSign",
    "MoonSign",
    "MoonPhaseS",
}

__all__ = [
    "COMPASS_POINTS",
    "NOT_OCCURRING",
    "arabic_to_roman",
    "compass_point",
    "field_map",
    "hhmm",
    "hhmmss",
    "round_half_up",
]


def round_half_up(x: float, n: int = 0) -> float:
    """Round to ``n`` decimals, halves away from minus infinity."""
    factor = 10.0**n
    return math.floor(x * factor + 0.5) / factor


def hhmm(hours: float | None) -> str:
    """Format fractional hours as ``HH:MM`` (minutes truncated)."""
    if hours is None:
        return NOT_OCCURRING
    h = math.floor(hours)
    m = int((hours - h) * 60.0)
    return f"{h:02d}:{m:02d}"


def hhmmss(hours: float | None) -> str:
    """Format fractional hours as ``HH:MM:SS`` (seconds truncated)."""
    if hours is None:
        return NOT_OCCURRING
    h = math.floor(hours)
    minutes = (hours - h) * 60.0
    m = math.floor(minutes)
    s = int((minutes - m) * 60.0)
    return f"{h:02d}:{m:02d}:{s:02d}"


def compass_point(az_deg: float) -> int:
    """Index into COMPASS_POINTS (16 points, 0 = north) for an azimuth."""
    return int(math.floor(((az_deg + 11.25) % 360.0) / 22.5))


def roman_time(hour: int, minute: int, second: int) -> str:
    """Time of day in Roman numerals on a 12-hour clock, e.g. ``IX:XV``."""
    text = arabic_to_roman(hour if hour <= 12 else hour - 12)
    if minute:
        text += ":" + arabic_to_roman(minute)
    if second:
        text += ":" + arabic_to_roman(second)
    return text


def _translate_event(label: str, labels: LabelLookup) -> str:
    family = event_family(label)
    if family in _TRANSLATED_FAMILIES and " " in label:
        return f"{family} {labels(label.split(' ', 1)[1])}"
    return label


def _sched_time(hour: float | None) -> str:
    if hour is None:
        return NOT_OCCURRING
    return hhmmss(0.0 if hour == LOOK_AHEAD_HOUR else hour)


def _join(labels: list[str], translate: LabelLookup) -> str:
    if not labels:
        return NOT_OCCURRING
    return ", ".join(_translate_event(label, translate) for label in labels)


def field_map(report: DayReport, labels: LabelLookup = identity_labels) -> dict[str, Any]:
    """Flatten a day report into canonical fields.

    Args:
        report: Report returned by AstroCalculator.compute
        labels: Lookup turning canonical keys into display labels

    Returns:
        Field name -> value. Reports of neighbouring days are nested
        under their offset as string ("2", "1", "-1", "-2").
    """
    snap = report.snapshot
    obs = snap.observer
    moment = snap.moment
    sun = snap.sun
    moon = snap.moon
    sun_events = snap.sun_events
    seasonal = snap.seasonal

    fields: dict[str, Any] = {
        "ObsLat": obs.latitude,
        "ObsLon": obs.longitude,
        "ObsAlt": obs.altitude,
        "ObsHorMorning": obs.horizon_morning,
        "ObsHorEvening": obs.horizon_evening,
        "ObsJD": round_half_up(snap.jd, 2),
        "ObsGMST": hhmmss(snap.gmst),
        "ObsLMST": hhmmss(snap.lmst),
    }

    sun_az = sun.az * RAD
    sun_cp = COMPASS_POINTS[compass_point(sun_az)]
    fields.update(
        {
            "SunLon": round_half_up(sun.lon * RAD, 1),
            "SunRa": round_half_up(sun.ra * RAD / 15.0, 1),
            "SunDec": round_half_up(sun.dec * RAD, 1),
            "SunAz": round_half_up(sun_az, 1),
            "SunCompassI": compass_point(sun_az),
            "SunCompass": labels(sun_cp),
            "SunCompassS": labels(sun_cp + ".short"),
            "SunAlt": round_half_up(snap.sun_altitude_deg, 1),
            "SunSign": labels(sun.sign),
            "SunDiameter": round_half_up(sun.diameter * RAD * 60.0, 1),
            "SunDistance": int(round_half_up(sun.distance)),
            "SunDistanceObserver": int(round_half_up(snap.sun_distance_observer)),
            "SunTransit": hhmm(sun_events.transit),
            "SunRise": hhmm(sun_events.rise),
            "SunSet": hhmm(sun_events.set),
            "CivilTwilightMorning": hhmm(sun_events.civil_twilight_morning),
            "CivilTwilightEvening": hhmm(sun_events.civil_twilight_evening),
            "NauticTwilightMorning": hhmm(sun_events.nautic_twilight_morning),
            "NauticTwilightEvening": hhmm(sun_events.nautic_twilight_evening),
            "AstroTwilightMorning": hhmm(sun_events.astro_twilight_morning),
            "AstroTwilightEvening": hhmm(sun_events.astro_twilight_evening),
            "CustomTwilightMorning": hhmm(sun_events.custom_twilight_morning),
            "CustomTwilightEvening": hhmm(sun_events.custom_twilight_evening),
            "SunHrsVisible": hhmm(snap.sun_hours_visible),
            "SunHrsInvisible": hhmm(snap.sun_hours_invisible),
        }
    )

    moon_az = moon.az * RAD
    moon_cp = COMPASS_POINTS[compass_point(moon_az)]
    fields.update(
        {
            "MoonLon": round_half_up(moon.lon * RAD, 1),
            "MoonLat": round_half_up(moon.lat * RAD, 1),
            "MoonRa": round_half_up(moon.ra * RAD / 15.0, 1),
            "MoonDec": round_half_up(moon.dec * RAD, 1),
            "MoonAz": round_half_up(moon_az, 1),
            "MoonCompassI": compass_point(moon_az),
            "MoonCompass": labels(moon_cp),
            "MoonCompassS": labels(moon_cp + ".short"),
            "MoonAlt": round_half_up(snap.moon_altitude_deg, 1),
            "MoonSign": labels(moon.sign),
            "MoonDistance": int(round_half_up(moon.distance_geocentric)),
            "MoonDistanceObserver": int(round_half_up(snap.moon_distance_observer)),
            "MoonDiameter": round_half_up(moon.diameter * RAD * 60.0, 1),
            "MoonAge": round_half_up(moon.age * RAD, 1),
            "MoonPhaseN": round_half_up(moon.phase, 2),
            "MoonPhaseI": moon.phase_index,
            "MoonPhaseS": labels(moon.phase_key),
            "MoonTransit": hhmm(snap.moon_events.transit),
            "MoonRise": hhmm(snap.moon_events.rise),
            "MoonSet": hhmm(snap.moon_events.set),
            "MoonHrsVisible": hhmm(snap.moon_hours_visible),
            "MoonHrsInvisible": hhmm(snap.moon_hours_invisible),
        }
    )

    fields.update(
        {
            "ObsDate": moment.date.strftime("%d.%m.%Y"),
            "ObsTime": f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}",
            "ObsTimeR": roman_time(moment.hour, moment.minute, moment.second),
            "ObsTimezone": moment.zone,
            "ObsDayofyear": moment.day_of_year,
            "ObsWeekofyear": moment.week_of_year,
            "ObsIsDST": int(moment.is_dst),
            "ObsIsLeapyear": int(moment.is_leap_year),
            "ObsYearRemainD": moment.year_remain_days,
            "ObsMonthRemainD": moment.month_remain_days,
            "ObsYearProgress": round_half_up(moment.year_progress, 2),
            "ObsMonthProgress": round_half_up(moment.month_progress, 2),
            "ObsSeasonalHrsDay": seasonal.day_parts,
            "ObsSeasonalHrsNight": seasonal.night_parts,
            "ObsSeasonalHrLenDay": hhmmss(seasonal.day_part_length),
            "ObsSeasonalHrLenNight": hhmmss(seasonal.night_part_length),
        }
    )

    width = len(str(max(seasonal.day_parts, seasonal.night_parts)))
    for index, start in report.seasonal_hour_times.items():
        sign = "-" if index < 0 else ""
        fields[f"ObsSeasonalHrT{sign}{abs(index):0{width}d}"] = hhmmss(start)

    current = seasonal.current
    fields["ObsSeasonalHrTNext"] = hhmmss(seasonal.next_boundary)
    fields["ObsSeasonalHr"] = current
    fields["ObsSeasonalHrR"] = arabic_to_roman(
        current if current > 0 else current + seasonal.night_parts + 1
    )

    if snap.daytime is None:
        fields["ObsDaytimeN"] = NOT_OCCURRING
        fields["ObsDaytime"] = NOT_OCCURRING
    else:
        number, name = snap.daytime
        fields["ObsDaytimeN"] = number
        fields["ObsDaytime"] = labels(name) if name in DAY_PHASES else name

    fields["ObsSeason"] = labels(snap.season_key)
    fields["ObsSeasonN"] = snap.season
    fields["ObsMeteoSeason"] = labels(snap.meteo_season_key)
    fields["ObsMeteoSeasonN"] = snap.meteo_season
    if snap.pheno_season is not None:
        fields["ObsPhenoSeason"] = labels(snap.pheno_season_key)
        fields["ObsPhenoSeasonN"] = snap.pheno_season

    for attribute, family in CHANGE_FIELDS.items():
        fields[f"ObsChanged{family.removeprefix('Obs')}"] = int(report.change(attribute))

    partition = report.partition
    fields.update(
        {
            "ObsSchedLast": _join(partition.last, labels),
            "ObsSchedLastT": _sched_time(partition.last_time),
            "ObsSchedNext": _join(partition.next, labels),
            "ObsSchedNextT": _sched_time(partition.next_time),
            "ObsSchedRecent": _join(partition.recent, labels),
            "ObsSchedUpcoming": _join(partition.upcoming, labels),
        }
    )

    for offset in sorted(report.neighbours, reverse=True):
        fields[str(offset)] = field_map(report.neighbours[offset], labels)

    return fields
