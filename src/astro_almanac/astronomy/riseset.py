"""Rise, set and transit times of the Sun and the Moon.

Times are found from the hour angle at which a body crosses a given
altitude, evaluated at two epochs and interpolated in sidereal time.
Results are fractional hours; ``None`` marks an event that does not occur
(the body never crosses that altitude, or the event belongs to another
local calendar day).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from astro_almanac.astronomy.bodies import moon_position, sun_position
from astro_almanac.astronomy.sidereal import DEG, RAD, gmst, gmst_to_ut, mod

logger = logging.getLogger(__name__)

CIVIL_TWILIGHT_DEG = -6.0
NAUTICAL_TWILIGHT_DEG = -12.0
ASTRONOMICAL_TWILIGHT_DEG = -18.0

# Standard refraction at the horizon: 34 arc minutes
HORIZON_REFRACTION = 34.0 / 60.0 * DEG


@dataclass(frozen=True)
class RiseSetTimes:
    """Transit, rise and set in fractional hours (``None`` = does not occur)."""

    transit: float | None
    rise: float | None
    set: float | None


@dataclass(frozen=True)
class SunEvents:
    """Local times of the Sun's daily events and twilight bands."""

    transit: float | None
    rise: float | None
    set: float | None
    civil_twilight_morning: float | None = None
    civil_twilight_evening: float | None = None
    nautic_twilight_morning: float | None = None
    nautic_twilight_evening: float | None = None
    astro_twilight_morning: float | None = None
    astro_twilight_evening: float | None = None
    custom_twilight_morning: float | None = None
    custom_twilight_evening: float | None = None
    notes: tuple[str, ...] = ()


def _clamp(value: float) -> float:
    return max(-1.0, min(1.0, value))


def gmst_rise_set(
    ra: float, dec: float, lon: float, lat: float, altitude: float = 0.0
) -> RiseSetTimes | None:
    """Greenwich sidereal times of transit, rise and set.

    Args:
        ra: Right ascension in radians
        dec: Declination in radians
        lon: Longitude of the observer in radians
        lat: Latitude of the observer in radians
        altitude: Altitude of the body center at the crossing, in radians

    Returns:
        RiseSetTimes in sidereal hours [0, 24), or None if the body never
        reaches that altitude (circumpolar or never visible).
    """
    cos_arc = (math.sin(altitude) - math.sin(lat) * math.sin(dec)) / (
        math.cos(lat) * math.cos(dec)
    )
    if cos_arc > 1.0 or cos_arc < -1.0:
        return None
    arc = math.acos(cos_arc)

    transit = RAD / 15.0 * (ra - lon)
    rise = 24.0 + RAD / 15.0 * (-arc + ra - lon)
    set_ = RAD / 15.0 * (arc + ra - lon)

    # The day number is lost here, callers unwrap across 24h -> 0h
    return RiseSetTimes(transit=mod(transit, 24.0), rise=mod(rise, 24.0), set=mod(set_, 24.0))


def interpolate_gmst(gmst0: float, gmst1: float, gmst2: float, time_factor: float) -> float:
    """Sidereal time of an event interpolated between two epochs.

    ``gmst1`` and ``gmst2`` are the event times computed for the first and
    second epoch, ``gmst0`` the sidereal time at 0h UT and ``time_factor``
    the separation of the epochs in days.
    """
    return (time_factor * 24.07 * gmst1 - gmst0 * (gmst2 - gmst1)) / (
        time_factor * 24.07 + gmst1 - gmst2
    )


def rise_set(
    jd0_ut: float,
    diameter: float,
    parallax: float,
    ra1: float,
    dec1: float,
    ra2: float,
    dec2: float,
    lon: float,
    lat: float,
    time_interval: float,
    altitude: float | None = None,
) -> RiseSetTimes | None:
    """UT times of transit, rise and set between two epochs.

    Without ``altitude`` the crossing is the apparent horizon, corrected
    for semi-diameter, horizontal parallax and standard refraction. With an
    ``altitude`` (e.g. a twilight depression angle in radians) the body
    center crossing that altitude is used as is.

    Args:
        jd0_ut: Julian date at 0h UT
        diameter: Angular diameter of the body in radians
        parallax: Horizontal parallax in radians
        ra1, dec1: Equatorial position at the first epoch
        ra2, dec2: Equatorial position at the second epoch
        lon, lat: Observer position in radians
        time_interval: Separation of the two epochs in days
        altitude: Optional crossing altitude override in radians

    Returns:
        RiseSetTimes in UT hours, or None if there is no crossing
    """
    if altitude is None:
        correction = 0.5 * diameter - parallax + HORIZON_REFRACTION
        crossing = 0.0
    else:
        correction = 0.0
        crossing = altitude

    first = gmst_rise_set(ra1, dec1, lon, lat, crossing)
    second = gmst_rise_set(ra2, dec2, lon, lat, crossing)
    if first is None or second is None:
        return None

    pairs = [
        [first.transit, second.transit],
        [first.rise, second.rise],
        [first.set, second.set],
    ]

    # Unwrap in case the events move across 24h -> 0h between the epochs
    for pair in pairs:
        if pair[0] > pair[1] and abs(pair[0] - pair[1]) > 18.0:
            pair[1] += 24.0

    t0 = gmst(jd0_ut)
    # Greenwich sidereal time for 0h at the observer's longitude
    t02 = t0 - lon * RAD / 15.0 * 1.002738
    if t02 < 0.0:
        t02 += 24.0

    for pair in pairs:
        if pair[0] < t02:
            pair[0] += 24.0
            pair[1] += 24.0

    # Time shift due to refraction, parallax and semi-diameter
    dec_mean = 0.5 * (dec1 + dec2)
    dt = 0.0
    if correction != 0.0:
        psi = math.acos(_clamp(math.sin(lat) / math.cos(dec_mean)))
        sin_psi = math.sin(psi)
        if sin_psi > 0.0:
            y = math.asin(_clamp(math.sin(correction) / sin_psi))
            dt = 240.0 * RAD * y / math.cos(dec_mean) / 3600.0

    transit = gmst_to_ut(jd0_ut, interpolate_gmst(t0, pairs[0][0], pairs[0][1], time_interval))
    rise = gmst_to_ut(jd0_ut, interpolate_gmst(t0, pairs[1][0], pairs[1][1], time_interval) - dt)
    set_ = gmst_to_ut(jd0_ut, interpolate_gmst(t0, pairs[2][0], pairs[2][1], time_interval) + dt)
    return RiseSetTimes(transit=transit, rise=rise, set=set_)


def _sun_rise_set_utc(jd: float, delta_t: float, lon: float, lat: float) -> RiseSetTimes | None:
    jd0_ut = math.floor(jd - 0.5) + 0.5
    sun1 = sun_position(jd0_ut + delta_t / 86400.0)
    sun2 = sun_position(jd0_ut + 1.0 + delta_t / 86400.0)
    return rise_set(
        jd0_ut, sun1.diameter, sun1.parallax, sun1.ra, sun1.dec, sun2.ra, sun2.dec, lon, lat, 1.0
    )


def _to_local(value: float | None, zone: float) -> float | None:
    if value is None:
        return None
    return mod(value + zone, 24.0)


def _anchor_to_local_day(
    events: RiseSetTimes,
    zone: float,
    adjacent: Callable[[int], RiseSetTimes | None],
) -> RiseSetTimes:
    """Pick, per event, the occurrence that falls on the requested local day.

    ``events`` are UT hours counted from 0h UT of the local date. An event
    whose local time ``ut + zone`` is 24 or later belongs to the next local
    day, so the same event of the previous UT day is tried instead; one
    earlier than 0 is replaced by the event of the next UT day. A
    replacement that is not on the local day either leaves the event
    ``None``.

    Args:
        events: Transit, rise and set of the UT day of the local date
        zone: Offset of local time from UT in hours
        adjacent: Computes the events of the UT day ``step`` days away

    Returns:
        RiseSetTimes in local hours within [0, 24)
    """
    days: dict[int, RiseSetTimes | None] = {0: events}

    def local_time(step: int, index: int) -> float | None:
        if step not in days:
            days[step] = adjacent(step)
        times = days[step]
        if times is None:
            return None
        value = (times.transit, times.rise, times.set)[index]
        if value is None:
            return None
        return value + 24.0 * step + zone

    anchored: list[float | None] = []
    for index in range(3):
        local = local_time(0, index)
        if local is not None and local >= 24.0:
            local = local_time(-1, index)
        elif local is not None and local < 0.0:
            local = local_time(1, index)
        if local is not None and not 0.0 <= local < 24.0:
            local = None
        anchored.append(local)
    return RiseSetTimes(transit=anchored[0], rise=anchored[1], set=anchored[2])


def sun_rise(
    jd: float,
    delta_t: float,
    lon: float,
    lat: float,
    zone: float,
    horizon_morning: float = 0.0,
    horizon_evening: float = 0.0,
) -> SunEvents:
    """Local times of sunrise, sunset, transit and twilights.

    Accurate to about 1-2 minutes. Every time returned belongs to the local
    calendar day that starts at ``jd``: an event that would fall on the
    neighbouring local day is replaced by the value computed for the
    adjacent UT day.

    Args:
        jd: Julian date of 0h of the local calendar day
        delta_t: TT - UT in seconds
        lon: Longitude in radians, east positive
        lat: Latitude in radians
        zone: Offset of local time from UT in hours
        horizon_morning: Custom morning horizon in degrees
        horizon_evening: Custom evening horizon in degrees

    Returns:
        SunEvents in local hours; ``None`` for events that do not occur
    """
    jd0_ut = math.floor(jd - 0.5) + 0.5
    sun1 = sun_position(jd0_ut + delta_t / 86400.0)
    sun2 = sun_position(jd0_ut + 1.0 + delta_t / 86400.0)

    def crossing(altitude_deg: float | None) -> RiseSetTimes | None:
        return rise_set(
            jd0_ut,
            sun1.diameter,
            sun1.parallax,
            sun1.ra,
            sun1.dec,
            sun2.ra,
            sun2.dec,
            lon,
            lat,
            1.0,
            None if altitude_deg is None else altitude_deg * DEG,
        )

    notes: list[str] = []
    transit = rise = set_ = None
    main = crossing(None)
    if main is None:
        logger.debug("No sunrise/sunset possible, the sun does not cross the horizon")
        notes.append("sun never crosses the horizon on this date")
    else:
        local = _anchor_to_local_day(
            main, zone, lambda step: _sun_rise_set_utc(jd + step, delta_t, lon, lat)
        )
        transit, rise, set_ = local.transit, local.rise, local.set

    bands: dict[str, tuple[float | None, float | None]] = {}
    for name, altitude_deg in (
        ("civil", CIVIL_TWILIGHT_DEG),
        ("nautic", NAUTICAL_TWILIGHT_DEG),
        ("astro", ASTRONOMICAL_TWILIGHT_DEG),
    ):
        times = crossing(altitude_deg)
        if times is None:
            logger.debug(f"No {name} twilight, the sun never crosses {altitude_deg} degrees")
            notes.append(f"sun never crosses {altitude_deg:g} degrees on this date")
            bands[name] = (None, None)
        else:
            bands[name] = (_to_local(times.rise, zone), _to_local(times.set, zone))

    custom_morning = crossing(horizon_morning)
    custom_evening = crossing(horizon_evening)
    if custom_morning is None:
        notes.append(f"sun never crosses {horizon_morning:g} degrees in the morning")
    if custom_evening is None:
        notes.append(f"sun never crosses {horizon_evening:g} degrees in the evening")

    return SunEvents(
        transit=transit,
        rise=rise,
        set=set_,
        civil_twilight_morning=bands["civil"][0],
        civil_twilight_evening=bands["civil"][1],
        nautic_twilight_morning=bands["nautic"][0],
        nautic_twilight_evening=bands["nautic"][1],
        astro_twilight_morning=bands["astro"][0],
        astro_twilight_evening=bands["astro"][1],
        custom_twilight_morning=None if custom_morning is None else _to_local(custom_morning.rise, zone),
        custom_twilight_evening=None if custom_evening is None else _to_local(custom_evening.set, zone),
        notes=tuple(notes),
    )


def _moon_rise_set_utc(jd: float, delta_t: float, lon: float, lat: float) -> RiseSetTimes | None:
    time_interval = 0.5
    jd0_ut = math.floor(jd - 0.5) + 0.5
    tdt1 = jd0_ut + delta_t / 86400.0
    tdt2 = jd0_ut + time_interval + delta_t / 86400.0
    sun1 = sun_position(tdt1)
    moon1 = moon_position(sun1.lon, sun1.anomaly_mean, tdt1)
    sun2 = sun_position(tdt2)
    moon2 = moon_position(sun2.lon, sun2.anomaly_mean, tdt2)
    return rise_set(
        jd0_ut,
        moon1.diameter,
        moon1.parallax,
        moon1.ra,
        moon1.dec,
        moon2.ra,
        moon2.dec,
        lon,
        lat,
        time_interval,
    )


def moon_rise(
    jd: float,
    delta_t: float,
    lon: float,
    lat: float,
    radius: float,
    zone: float,
) -> RiseSetTimes:
    """Local times of moonrise, moonset and transit.

    Accurate to about 5 minutes. Because the Moon's crossings drift by
    roughly 50 minutes a day, any of the three events may not happen at all
    on a given local day; such events are returned as ``None``.

    Args:
        jd: Julian date of 0h of the local calendar day
        delta_t: TT - UT in seconds
        lon: Longitude in radians, east positive
        lat: Latitude in radians
        radius: Geocentric distance of the observer in km
        zone: Offset of local time from UT in hours
    """
    main = _moon_rise_set_utc(jd, delta_t, lon, lat)
    if main is None:
        logger.debug("No moonrise/moonset possible, the moon does not cross the horizon")
        return RiseSetTimes(transit=None, rise=None, set=None)
    return _anchor_to_local_day(
        main, zone, lambda step: _moon_rise_set_utc(jd + step, delta_t, lon, lat)
    )
