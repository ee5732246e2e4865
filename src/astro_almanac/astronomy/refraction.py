"""Atmospheric refraction for a fixed standard atmosphere."""

from __future__ import annotations

import math

from astro_almanac.astronomy.sidereal import DEG, RAD

STANDARD_PRESSURE_HPA = 1015.0
STANDARD_TEMPERATURE_C = 10.0


def refraction(alt: float) -> float:
    """Increase in altitude caused by refraction.

    Args:
        alt: True altitude in radians

    Returns:
        Refraction correction in degrees. Zero below -2 degrees and at or
        above the zenith, where the model does not apply.
    """
    altdeg = alt * RAD
    if altdeg < -2.0 or altdeg >= 90.0:
        return 0.0

    pressure = STANDARD_PRESSURE_HPA
    temperature = STANDARD_TEMPERATURE_C
    if altdeg > 15.0:
        return 0.00452 * pressure / ((273.0 + temperature) * math.tan(alt))

    # Low altitudes: refine the empirical model with three secant steps
    y = alt
    d = 0.0
    p = (pressure - 80.0) / 930.0
    q = 0.0048 * (temperature - 10.0)
    y0 = y
    d0 = d

    for _ in range(3):
        n = y + (7.31 / (y + 4.4))
        n = 1.0 / math.tan(n * DEG)
        d = n * p / (60.0 + q * (n + 39.0))
        n = y - y0
        y0 = d - d0 - n
        if n != 0.0 and y0 != 0.0:
            n = y - n * (alt + d - y) / y0
        else:
            n = alt + d
        y0 = y
        d0 = d
        y = n

    return d
