"""Tests for Sun and Moon positions."""

import math

import pytest

from astro_almanac.astronomy.bodies import (
    MAIN_PHASE_WINDOW,
    MOON_PHASES,
    QUARTER,
    ZODIAC,
    moon_phase_index,
    moon_position,
    sun_position,
    zodiac_sign,
)
from astro_almanac.astronomy.sidereal import DEG, RAD, calc_jd

DELTA_T_DAYS = 65.0 / 86400.0


def _tdt(day: int, month: int, year: int, hour: float = 0.0) -> float:
    return calc_jd(day, month, year) + hour / 24.0 + DELTA_T_DAYS


class TestZodiac:
    """Tests for the zodiac sign lookup."""

    def test_first_and_last_sign(self):
        assert zodiac_sign(0.0) == "aries"
        assert zodiac_sign(359.0 * DEG) == "pisces"

    def test_negative_longitude_wraps(self):
        assert zodiac_sign(-1.0 * DEG) == "pisces"

    def test_each_sign_spans_30_degrees(self):
        for index, key in enumerate(ZODIAC):
            assert zodiac_sign((index * 30.0 + 15.0) * DEG) == key


class TestMoonPhaseIndex:
    """Tests for the eight phase buckets."""

    @pytest.mark.parametrize(
        "age_deg,expected",
        [
            (0.0, 0),
            (45.0, 1),
            (90.0, 2),
            (135.0, 3),
            (180.0, 4),
            (225.0, 5),
            (270.0, 6),
            (315.0, 7),
        ],
    )
    def test_bucket(self, age_deg: float, expected: int):
        assert moon_phase_index(age_deg * DEG) == expected

    def test_principal_phase_window(self):
        """Within one synodic day of a quarter the principal phase is reported."""
        half = 0.5 * MAIN_PHASE_WINDOW
        assert moon_phase_index(half) == 0
        assert moon_phase_index(90.0 * DEG - half) == 2
        assert moon_phase_index(90.0 * DEG + half) == 2
        assert moon_phase_index(2.0 * math.pi - half) == 0

    @pytest.mark.parametrize(
        "quarter,expected",
        [(0, 0), (1, 2), (2, 4), (3, 6), (4, 0)],
    )
    def test_window_around_each_quarter(self, quarter: int, expected: int):
        """Half a window either side of every quarter gives the principal phase."""
        half = 0.5 * MAIN_PHASE_WINDOW
        instant = quarter * QUARTER
        if quarter > 0:
            assert moon_phase_index(instant - half) == expected
        if quarter < 4:
            assert moon_phase_index(instant + half) == expected

    def test_window_edges_are_intermediate(self):
        """The window is open: ages exactly on its edges fall in the bucket between."""
        assert moon_phase_index(MAIN_PHASE_WINDOW) == 1
        assert moon_phase_index(QUARTER - MAIN_PHASE_WINDOW) == 1

    def test_outside_window_is_intermediate(self):
        outside = 1.5 * MAIN_PHASE_WINDOW
        assert moon_phase_index(outside) == 1
        assert moon_phase_index(180.0 * DEG - outside) == 3
        assert moon_phase_index(180.0 * DEG + outside) == 5

    def test_monotonic_over_a_cycle(self):
        """Over one lunation the buckets run 0 to 7 and wrap back to 0."""
        steps = 720
        indices = [moon_phase_index(2.0 * math.pi * k / steps) for k in range(steps)]
        wrapped = [i if i != 0 or k < steps // 2 else 8 for k, i in enumerate(indices)]
        assert wrapped == sorted(wrapped)
        assert set(indices) == set(range(len(MOON_PHASES)))


class TestSunPosition:
    """Tests for the position of the Sun."""

    def test_june_solstice(self):
        sun = sun_position(_tdt(21, 6, 2024, 12.0))
        assert sun.dec * RAD == pytest.approx(23.44, abs=0.1)
        assert sun.sign == "cancer"

    def test_march_equinox(self):
        sun = sun_position(_tdt(20, 3, 2024, 12.0))
        assert abs(sun.dec * RAD) < 0.5
        assert sun.sign == "aries"

    def test_distance_near_aphelion(self):
        sun = sun_position(_tdt(21, 6, 2024))
        assert 151.8e6 < sun.distance < 152.2e6

    def test_angular_diameter(self):
        sun = sun_position(_tdt(3, 1, 2024))
        assert sun.diameter * RAD == pytest.approx(0.542, abs=0.003)

    def test_no_horizontal_coordinates_without_observer(self):
        sun = sun_position(_tdt(21, 6, 2024))
        assert sun.az is None
        assert sun.alt is None

    def test_horizontal_coordinates_with_observer(self):
        sun = sun_position(_tdt(21, 6, 2024), 50.0 * DEG, 1.0)
        assert sun.az is not None
        assert -math.pi / 2 <= sun.alt <= math.pi / 2

    def test_matches_astropy_declination(self):
        """The low-precision declination is within a few arc minutes."""
        coordinates = pytest.importorskip("astropy.coordinates")
        time = pytest.importorskip("astropy.time")
        expected = coordinates.get_sun(time.Time("2024-04-15T12:00:00", scale="utc"))

        sun = sun_position(_tdt(15, 4, 2024, 12.0))
        assert sun.dec * RAD == pytest.approx(expected.dec.deg, abs=0.3)


class TestMoonPosition:
    """Tests for the position and phase of the Moon."""

    def _moon(self, tdt: float, **kwargs):
        sun = sun_position(tdt)
        return moon_position(sun.lon, sun.anomaly_mean, tdt, **kwargs)

    def test_full_moon(self):
        """Full moon on 2024-06-22 at 01:08 UT."""
        moon = self._moon(_tdt(22, 6, 2024, 1.0))
        assert moon.phase > 0.98
        assert moon.phase_key == "fullmoon"

    def test_new_moon(self):
        """New moon on 2024-01-11 at 11:57 UT."""
        moon = self._moon(_tdt(11, 1, 2024, 12.0))
        assert moon.phase < 0.02
        assert moon.phase_key == "newmoon"

    def test_first_quarter(self):
        """First quarter on 2024-06-14 at 05:18 UT."""
        moon = self._moon(_tdt(14, 6, 2024, 5.0))
        assert moon.phase == pytest.approx(0.5, abs=0.05)
        assert moon.phase_key == "firstquarter"

    def test_distance_range(self):
        for day in range(1, 29):
            moon = self._moon(_tdt(day, 2, 2024))
            assert 355000.0 < moon.distance < 408000.0

    def test_geocentric_without_observer(self):
        moon = self._moon(_tdt(1, 5, 2024))
        assert moon.ra == moon.ra_geocentric
        assert moon.dec == moon.dec_geocentric
        assert moon.distance == moon.distance_geocentric
        assert moon.alt is None

    def test_topocentric_with_observer(self):
        """Parallax shifts the Moon by at most about one degree."""
        moon = self._moon(
            _tdt(1, 5, 2024),
            observer_lon=10.0 * DEG,
            observer_lat=50.0 * DEG,
            observer_radius=6366.0,
            lmst=2.0,
        )
        assert moon.alt is not None
        assert abs(moon.dec - moon.dec_geocentric) * RAD < 1.1
        assert moon.distance != moon.distance_geocentric
        assert abs(moon.distance - moon.distance_geocentric) < 6400.0

    def test_sign_is_known(self):
        moon = self._moon(_tdt(1, 5, 2024))
        assert moon.sign in ZODIAC
        assert 0.0 <= moon.phase <= 1.0
