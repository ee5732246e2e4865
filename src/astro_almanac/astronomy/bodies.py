"""Low-precision positions of the Sun and the Moon.

Mean orbital elements referred to the epoch 1990.0 plus a short
perturbation series. The Sun is accurate to about 10 seconds of right
ascension and a few arc minutes of declination, the Moon to about 1/5
degree in ecliptic coordinates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from astro_almanac.astronomy.coordinates import (
    EARTH_EQUATORIAL_RADIUS_KM,
    ecl_to_equ,
    equ_to_altaz,
    geo_equ_to_topo_equ,
)
from astro_almanac.astronomy.sidereal import DEG, RAD, mod, mod2pi

# Julian date of the orbital element epoch 1990.0
EPOCH_1990 = 2447891.5

ZODIAC = (
    "aries",
    "taurus",
    "gemini",
    "cancer",
    "leo",
    "virgo",
    "libra",
    "scorpio",
    "sagittarius",
    "capricorn",
    "aquarius",
    "pisces",
)

MOON_PHASES = (
    "newmoon",
    "waxingcrescent",
    "firstquarter",
    "waxingmoon",
    "fullmoon",
    "waningmoon",
    "lastquarter",
    "waningcrescent",
)

# Principal phases are reported for +/- one day around the exact instant
MAIN_PHASE_WINDOW = 1.0 / 29.53 * 360.0 * DEG
QUARTER = 90.0 * DEG


@dataclass(frozen=True)
class SunCoordinates:
    """Position of the Sun (angles in radians, distance in km)."""

    lon: float  # Ecliptic longitude
    lat: float  # Ecliptic latitude, always 0
    anomaly_mean: float
    ra: float
    dec: float
    diameter: float  # Angular diameter
    distance: float  # Distance to Earth center
    parallax: float  # Horizontal parallax
    sign: str  # Zodiac key
    az: float | None = None
    alt: float | None = None


@dataclass(frozen=True)
class MoonCoordinates:
    """Position and phase of the Moon.

    When observer data was supplied ``ra``/``dec``/``distance`` are
    topocentric and the geocentric values are kept in the ``*_geocentric``
    fields. Without observer data both sets are identical.
    """

    lon: float
    lat: float
    orbit_lon: float  # True orbital longitude
    ra: float
    dec: float
    distance: float
    ra_geocentric: float
    dec_geocentric: float
    distance_geocentric: float
    diameter: float
    parallax: float
    age: float  # Elongation from the Sun: 0 = new moon, pi = full moon
    phase: float  # Illuminated fraction, 0-1
    phase_index: int  # 0-7, index into MOON_PHASES
    sign: str
    az: float | None = None
    alt: float | None = None

    @property
    def phase_key(self) -> str:
        return MOON_PHASES[self.phase_index]


def zodiac_sign(lon: float) -> str:
    """Zodiac key for an ecliptic longitude in radians."""
    return ZODIAC[int(math.floor(mod2pi(lon) * RAD / 30.0)) % 12]


def moon_phase_index(age: float) -> int:
    """Categorical phase bucket 0-7 for a Moon age in radians.

    Ages within one mean synodic day of new moon, first quarter, full moon
    or last quarter snap to that principal phase. Everything in between is
    the intermediate (odd) phase of its quadrant.
    """
    p = mod(age, QUARTER)
    if p < MAIN_PHASE_WINDOW or p > QUARTER - MAIN_PHASE_WINDOW:
        index = 2 * math.floor(age / QUARTER + 0.5)
    else:
        index = 2 * math.floor(age / QUARTER) + 1
    return int(index) % 8


def sun_position(
    tdt: float,
    observer_lat: float | None = None,
    lmst: float | None = None,
) -> SunCoordinates:
    """Calculate coordinates of the Sun.

    Args:
        tdt: Terrestrial dynamical time as Julian date
        observer_lat: Geodetic latitude of the observer in radians
        lmst: Local mean sidereal time in radians

    Returns:
        SunCoordinates; azimuth and altitude are only set when both
        observer latitude and local sidereal time are given.
    """
    d = tdt - EPOCH_1990
    eg = 279.403303 * DEG  # Ecliptic longitude at epoch
    wg = 282.768422 * DEG  # Ecliptic longitude of perigee
    e = 0.016713
    a = 149598500.0  # km
    diameter0 = 0.533128 * DEG

    anomaly_mean = 360.0 * DEG / 365.242191 * d + eg - wg
    nu = anomaly_mean + 360.0 * DEG / math.pi * e * math.sin(anomaly_mean)

    lon = mod2pi(nu + wg)
    lat = 0.0

    rel_distance = (1.0 - e * e) / (1.0 + e * math.cos(nu))  # in AU
    distance = rel_distance * a
    ra, dec = ecl_to_equ(lon, lat, tdt)

    az = alt = None
    if observer_lat is not None and lmst is not None:
        az, alt = equ_to_altaz(ra, dec, tdt, observer_lat, lmst)

    return SunCoordinates(
        lon=lon,
        lat=lat,
        anomaly_mean=anomaly_mean,
        ra=ra,
        dec=dec,
        diameter=diameter0 / rel_distance,
        distance=distance,
        parallax=EARTH_EQUATORIAL_RADIUS_KM / distance,
        sign=zodiac_sign(lon),
        az=az,
        alt=alt,
    )


def moon_position(
    sun_lon: float,
    sun_anomaly_mean: float,
    tdt: float,
    observer_lon: float | None = None,
    observer_lat: float | None = None,
    observer_radius: float | None = None,
    lmst: float | None = None,
) -> MoonCoordinates:
    """Calculate coordinates and phase of the Moon.

    Args:
        sun_lon: Ecliptic longitude of the Sun in radians
        sun_anomaly_mean: Mean anomaly of the Sun in radians
        tdt: Terrestrial dynamical time as Julian date
        observer_lon: Longitude of the observer in radians
        observer_lat: Geodetic latitude of the observer in radians
        observer_radius: Geocentric distance of the observer in km
        lmst: Local mean sidereal time in radians

    Returns:
        MoonCoordinates, topocentric if all observer data is given
    """
    d = tdt - EPOCH_1990

    # Mean orbital elements as of 1990.0
    l0 = 318.351648 * DEG
    p0 = 36.340410 * DEG
    n0 = 318.510107 * DEG
    i = 5.145396 * DEG
    e = 0.054900
    a = 384401.0  # km
    diameter0 = 0.5181 * DEG  # Angular diameter at distance a
    parallax0 = 0.9507 * DEG  # Horizontal parallax at distance a

    l = 13.1763966 * DEG * d + l0
    anomaly = l - 0.1114041 * DEG * d - p0
    node = n0 - 0.0529539 * DEG * d
    c = l - sun_lon
    evection = 1.2739 * DEG * math.sin(2.0 * c - anomaly)
    annual = 0.1858 * DEG * math.sin(sun_anomaly_mean)
    a3 = 0.37 * DEG * math.sin(sun_anomaly_mean)
    anomaly2 = anomaly + evection - annual - a3
    centre = 6.2886 * DEG * math.sin(anomaly2)
    a4 = 0.214 * DEG * math.sin(2.0 * anomaly2)
    l2 = l + evection + centre - annual + a4
    variation = 0.6583 * DEG * math.sin(2.0 * (l2 - sun_lon))
    l3 = l2 + variation

    node2 = node - 0.16 * DEG * math.sin(sun_anomaly_mean)

    lon = mod2pi(node2 + math.atan2(math.sin(l3 - node2) * math.cos(i), math.cos(l3 - node2)))
    lat = math.asin(math.sin(l3 - node2) * math.sin(i))

    ra, dec = ecl_to_equ(lon, lat, tdt)
    rel_distance = (1.0 - e * e) / (1.0 + e * math.cos(anomaly2 + centre))
    distance = rel_distance * a

    ra_geo, dec_geo, distance_geo = ra, dec, distance
    az = alt = None
    if (
        observer_lat is not None
        and observer_lon is not None
        and observer_radius is not None
        and lmst is not None
    ):
        distance, dec, ra = geo_equ_to_topo_equ(
            ra, dec, distance, observer_lon, observer_lat, observer_radius, lmst
        )
        az, alt = equ_to_altaz(ra, dec, tdt, observer_lat, lmst)

    age = mod2pi(l3 - sun_lon)

    return MoonCoordinates(
        lon=lon,
        lat=lat,
        orbit_lon=l3,
        ra=ra,
        dec=dec,
        distance=distance,
        ra_geocentric=ra_geo,
        dec_geocentric=dec_geo,
        distance_geocentric=distance_geo,
        diameter=diameter0 / rel_distance,
        parallax=parallax0 / rel_distance,
        age=age,
        phase=0.5 * (1.0 - math.cos(age)),
        phase_index=moon_phase_index(age),
        sign=zodiac_sign(lon),
        az=az,
        alt=alt,
    )
