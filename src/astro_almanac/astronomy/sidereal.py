"""Calendar arithmetic and sidereal time.

Julian dates, leap years and Greenwich/Local Mean Sidereal Time. The
formulas follow "Practical Astronomy with your Calculator" and are valid
for dates between 1900-03-01 and 2100-02-28.
"""

from __future__ import annotations

import math

DEG = math.pi / 180.0
RAD = 180.0 / math.pi

# Julian date of J2000.0 (2000 January 1.5)
J2000 = 2451545.0

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def mod(a: float, b: float) -> float:
    """Floored modulo, result has the sign of ``b``."""
    return a - math.floor(a / b) * b


def mod2pi(x: float) -> float:
    """Normalize an angle in radians to [0, 2pi)."""
    return mod(x, 2.0 * math.pi)


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    if year % 4:
        return False
    if year % 100:
        return True
    return year % 400 == 0


def days_of_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-12) of ``year``."""
    if month == 2:
        return 28 + int(is_leap_year(year))
    return _MONTH_DAYS[month - 1]


def calc_jd(day: int, month: int, year: int) -> float:
    """Julian date at 0h UT of the given Gregorian calendar day.

    Only valid from 1900-03-01 to 2100-02-28, where the century
    corrections of the full Gregorian algorithm cancel out.
    """
    jd = 2415020.5 - 64  # 1900-01-01 with algorithm correction
    if month <= 2:
        year -= 1
        month += 12
    jd += int((year - 1900) * 365.25)
    jd += int(30.6001 * (1 + month))
    return jd + day


def _t0(jd0: float) -> float:
    t = (jd0 - J2000) / 36525.0
    return 6.697374558 + t * (2400.051336 + t * 0.000025862)


def gmst(jd: float) -> float:
    """Greenwich Mean Sidereal Time in hours for a Julian date."""
    ut = (jd - 0.5) - int(jd - 0.5)
    ut *= 24.0
    jd0 = math.floor(jd - 0.5) + 0.5  # JD at 0h UT
    return mod(_t0(jd0) + ut * 1.002737909, 24.0)


def gmst_to_ut(jd: float, gmst_hours: float) -> float:
    """Convert Greenwich Mean Sidereal Time to UT hours on the day of ``jd``."""
    jd0 = math.floor(jd - 0.5) + 0.5
    t0 = mod(_t0(jd0), 24.0)
    return 0.9972695663 * (gmst_hours - t0)


def gmst_to_lmst(gmst_hours: float, lon: float) -> float:
    """Local Mean Sidereal Time in hours.

    Args:
        gmst_hours: Greenwich Mean Sidereal Time in hours
        lon: Geographic longitude in radians, east positive
    """
    return mod(gmst_hours + RAD * lon / 15.0, 24.0)
