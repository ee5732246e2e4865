"""Coordinate transformations.

Conversions between ecliptic, equatorial and horizontal coordinates,
geocentric to topocentric parallax correction and the geodetic position
of the observer on the WGS84 ellipsoid. All angles are in radians and all
distances in kilometers.
"""

from __future__ import annotations

import math

from astro_almanac.astronomy.sidereal import DEG, J2000, mod2pi

EARTH_EQUATORIAL_RADIUS_KM = 6378.137  # WGS84 semi-major axis
EARTH_FLATTENING = 1.0 / 298.257223563  # WGS84 flattening
EARTH_MEAN_RADIUS_KM = 6371.0088  # IUGG mean radius


def obliquity(tdt: float) -> float:
    """Mean obliquity of the ecliptic in radians."""
    t = (tdt - J2000) / 36525.0
    arcsec = t * (-46.815 + t * (-0.0006 + t * 0.00181))
    return (23.0 + (26.0 + 21.45 / 60.0) / 60.0 + arcsec / 3600.0) * DEG


def ecl_to_equ(lon: float, lat: float, tdt: float) -> tuple[float, float]:
    """Ecliptic longitude/latitude to right ascension/declination."""
    eps = obliquity(tdt)
    coseps = math.cos(eps)
    sineps = math.sin(eps)
    sinlon = math.sin(lon)
    ra = mod2pi(math.atan2(sinlon * coseps - math.tan(lat) * sineps, math.cos(lon)))
    dec = math.asin(math.sin(lat) * coseps + math.cos(lat) * sineps * sinlon)
    return ra, dec


def equ_to_altaz(
    ra: float, dec: float, tdt: float, lat: float, lmst: float
) -> tuple[float, float]:
    """Right ascension/declination to azimuth/altitude.

    Refraction is ignored here. Azimuth is measured from north through
    east and lies in [0, 2pi).

    Args:
        ra: Right ascension
        dec: Declination
        tdt: Terrestrial dynamical time (unused, kept for symmetry)
        lat: Geodetic latitude of the observer
        lmst: Local mean sidereal time in radians
    """
    cosdec = math.cos(dec)
    sindec = math.sin(dec)
    lha = lmst - ra
    coslha = math.cos(lha)
    sinlha = math.sin(lha)
    coslat = math.cos(lat)
    sinlat = math.sin(lat)

    n = -cosdec * sinlha
    d = sindec * coslat - cosdec * coslha * sinlat
    az = mod2pi(math.atan2(n, d))
    alt = math.asin(sindec * sinlat + cosdec * coslha * coslat)
    return az, alt


def geo_equ_to_topo_equ(
    ra: float,
    dec: float,
    distance: float,
    lon: float,
    lat: float,
    radius: float,
    lmst: float,
) -> tuple[float, float, float]:
    """Geocentric to topocentric equatorial coordinates.

    Returns:
        (topocentric distance, topocentric declination, topocentric right ascension)
    """
    cosdec = math.cos(dec)
    sindec = math.sin(dec)
    coslst = math.cos(lmst)
    sinlst = math.sin(lmst)
    # geodetic latitude is used as an approximation of the geocentric one
    coslat = math.cos(lat)
    sinlat = math.sin(lat)

    x = distance * cosdec * math.cos(ra) - radius * coslat * coslst
    y = distance * cosdec * math.sin(ra) - radius * coslat * sinlst
    z = distance * sindec - radius * sinlat

    topo_distance = math.sqrt(x * x + y * y + z * z)
    topo_dec = math.asin(z / topo_distance)
    topo_ra = mod2pi(math.atan2(y, x))
    return topo_distance, topo_dec, topo_ra


def equ_polar_to_cart(lon: float, lat: float, distance: float) -> tuple[float, float, float]:
    """Polar (longitude, latitude, distance) to cartesian coordinates."""
    rcd = math.cos(lat) * distance
    return rcd * math.cos(lon), rcd * math.sin(lon), math.sin(lat) * distance


def equ_cart_to_polar(x: float, y: float, z: float) -> tuple[float, float, float]:
    """Cartesian to polar (longitude, latitude, distance) coordinates."""
    distance = math.sqrt(x * x + y * y + z * z)
    if distance == 0.0:
        return 0.0, 0.0, 0.0
    return mod2pi(math.atan2(y, x)), math.asin(z / distance), distance


def observer_to_equ_cart(
    lon: float, lat: float, height: float, gmst_hours: float
) -> tuple[float, float, float, float]:
    """Geocentric cartesian equatorial position of the observer.

    The geodetic position on the WGS84 ellipsoid is converted to geocentric
    latitude and distance, then rotated by the sidereal angle so that the x
    axis points at the vernal equinox.

    Args:
        lon: Geodetic longitude in radians, east positive
        lat: Geodetic latitude in radians
        height: Height above the ellipsoid in km
        gmst_hours: Greenwich mean sidereal time in hours

    Returns:
        (x, y, z, geocentric radius) in km
    """
    co = math.cos(lat)
    si = math.sin(lat) ** 2
    fl = (1.0 - EARTH_FLATTENING) ** 2
    u = 1.0 / math.sqrt(co * co + fl * si)
    a = EARTH_EQUATORIAL_RADIUS_KM * u + height
    b = EARTH_EQUATORIAL_RADIUS_KM * fl * u + height
    radius = math.sqrt(a * a * co * co + b * b * si)
    geocentric_lat = math.acos(min(1.0, a * co / radius))
    if lat < 0.0:
        geocentric_lat = -geocentric_lat

    x, y, z = equ_polar_to_cart(lon, geocentric_lat, radius)

    rotangle = gmst_hours / 24.0 * 2.0 * math.pi
    x2 = x * math.cos(rotangle) - y * math.sin(rotangle)
    y2 = x * math.sin(rotangle) + y * math.cos(rotangle)
    return x2, y2, z, radius


def distance_on_earth(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km between two points given in degrees.

    Uses the spherical law of cosines on the mean Earth radius.
    """
    phi1 = lat1 * DEG
    phi2 = lat2 * DEG
    dlon = (lon2 - lon1) * DEG
    cos_angle = math.sin(phi1) * math.sin(phi2) + math.cos(phi1) * math.cos(phi2) * math.cos(dlon)
    return EARTH_MEAN_RADIUS_KM * math.acos(max(-1.0, min(1.0, cos_angle)))
