"""Tests for rise, set, transit and twilight times."""

import math

import pytest

from astro_almanac.astronomy.bodies import moon_position, sun_position
from astro_almanac.astronomy.riseset import (
    RiseSetTimes,
    gmst_rise_set,
    interpolate_gmst,
    moon_rise,
    sun_rise,
)
from astro_almanac.astronomy.sidereal import DEG, RAD, calc_jd, gmst, gmst_to_lmst, mod

DELTA_T = 65.0

# longitude and latitude in radians, zone in hours
LOCATIONS = {
    "new_york": (-74.01 * DEG, 40.71 * DEG, -5.0),
    "sydney": (151.21 * DEG, -33.87 * DEG, 10.0),
    "honolulu": (-157.86 * DEG, 21.31 * DEG, -10.0),
    "lisbon": (-9.14 * DEG, 38.72 * DEG, 0.0),
    "reykjavik": (-21.94 * DEG, 64.15 * DEG, 0.0),
}

# the Moon grazes the horizon for hours at high latitudes
MID_LATITUDES = {name: LOCATIONS[name] for name in ("new_york", "sydney", "honolulu", "lisbon")}


def _winter_moon_days(lon: float, lat: float, zone: float) -> list[RiseSetTimes]:
    """Moon events for every local day of January and February 2024."""
    jd0 = calc_jd(1, 1, 2024)
    return [moon_rise(jd0 + day, DELTA_T, lon, lat, 6370.0, zone) for day in range(60)]


def _moon_geocentric(jd_ut: float, lon: float, lat: float) -> tuple[float, float]:
    """Hour angle in [-180, 180) and altitude of the Moon's center, in degrees."""
    tdt = jd_ut + DELTA_T / 86400.0
    sun = sun_position(tdt)
    moon = moon_position(sun.lon, sun.anomaly_mean, tdt)
    lmst = gmst_to_lmst(gmst(jd_ut), lon) * 15.0 * DEG
    hour_angle = mod(lmst - moon.ra_geocentric + math.pi, 2.0 * math.pi) - math.pi
    altitude = math.asin(
        math.sin(lat) * math.sin(moon.dec_geocentric)
        + math.cos(lat) * math.cos(moon.dec_geocentric) * math.cos(hour_angle)
    )
    return hour_angle * RAD, altitude * RAD


class TestSiderealRiseSet:
    """Tests for the sidereal crossing times."""

    def test_equator_body_on_equator(self):
        """At the equator a body on the celestial equator is up for 12 hours."""
        times = gmst_rise_set(45.0 * DEG, 0.0, 0.0, 0.0)
        assert times.transit == pytest.approx(3.0)
        assert times.rise == pytest.approx(21.0)
        assert times.set == pytest.approx(9.0)

    def test_circumpolar_body(self):
        assert gmst_rise_set(1.0, 80.0 * DEG, 0.0, 50.0 * DEG) is None

    def test_never_rising_body(self):
        assert gmst_rise_set(1.0, -80.0 * DEG, 0.0, 50.0 * DEG) is None

    def test_longitude_shifts_transit(self):
        west = gmst_rise_set(45.0 * DEG, 0.0, 0.0, 0.0)
        east = gmst_rise_set(45.0 * DEG, 0.0, 15.0 * DEG, 0.0)
        assert west.transit - east.transit == pytest.approx(1.0)

    def test_interpolation_of_fixed_event(self):
        assert interpolate_gmst(6.0, 10.0, 10.0, 1.0) == pytest.approx(10.0)


class TestSunRise:
    """Tests for sunrise, sunset and twilights."""

    def test_central_europe_solstice(self):
        """50N 10E on 2024-06-21 (CEST): about 05:11 to 21:33."""
        events = sun_rise(calc_jd(21, 6, 2024), DELTA_T, 10.0 * DEG, 50.0 * DEG, 2.0)
        assert 13.1 < events.transit < 13.6
        assert 4.9 < events.rise < 5.5
        assert 21.2 < events.set < 21.9
        assert (events.rise + events.set) / 2.0 == pytest.approx(events.transit, abs=0.1)

    def test_no_astronomical_night_in_june(self):
        """At 50N the sun stays above -18 degrees around the solstice."""
        events = sun_rise(calc_jd(21, 6, 2024), DELTA_T, 10.0 * DEG, 50.0 * DEG, 2.0)
        assert events.astro_twilight_morning is None
        assert events.astro_twilight_evening is None
        assert events.nautic_twilight_morning is not None
        assert events.notes

    def test_twilight_order_at_equinox(self):
        events = sun_rise(calc_jd(20, 3, 2024), DELTA_T, 10.0 * DEG, 50.0 * DEG, 1.0)
        times = [
            events.astro_twilight_morning,
            events.nautic_twilight_morning,
            events.civil_twilight_morning,
            events.rise,
            events.transit,
            events.set,
            events.civil_twilight_evening,
            events.nautic_twilight_evening,
            events.astro_twilight_evening,
        ]
        assert None not in times
        assert times == sorted(times)
        assert not events.notes

    def test_custom_horizon_matches_civil_twilight(self):
        events = sun_rise(
            calc_jd(20, 3, 2024), DELTA_T, 10.0 * DEG, 50.0 * DEG, 1.0, -6.0, -6.0
        )
        assert events.custom_twilight_morning == events.civil_twilight_morning
        assert events.custom_twilight_evening == events.civil_twilight_evening

    def test_midnight_sun(self):
        events = sun_rise(calc_jd(21, 6, 2024), DELTA_T, 18.96 * DEG, 69.65 * DEG, 2.0)
        assert events.rise is None
        assert events.set is None
        assert events.civil_twilight_morning is None
        assert any("horizon" in note for note in events.notes)

    def test_polar_night(self):
        events = sun_rise(calc_jd(21, 12, 2024), DELTA_T, 18.96 * DEG, 69.65 * DEG, 1.0)
        assert events.rise is None
        assert events.set is None
        # civil twilight still happens around noon
        assert events.civil_twilight_morning is not None
        assert events.civil_twilight_morning < events.civil_twilight_evening

    def test_southern_hemisphere_far_east(self):
        """Sydney on 2024-06-21 (AEST): about 07:00 to 16:54."""
        events = sun_rise(calc_jd(21, 6, 2024), DELTA_T, 151.2093 * DEG, -33.8688 * DEG, 10.0)
        assert 6.6 < events.rise < 7.4
        assert 11.7 < events.transit < 12.2
        assert 16.5 < events.set < 17.3

    def test_all_times_within_day(self):
        events = sun_rise(calc_jd(1, 11, 2024), DELTA_T, -122.42 * DEG, 37.77 * DEG, -7.0)
        for value in (events.rise, events.set, events.transit):
            assert 0.0 <= value < 24.0
        assert events.rise < events.transit < events.set

    def test_zone_ahead_of_solar_time(self):
        """Apia (UTC+13, west of the date line): every UT event lies on the next local day."""
        events = sun_rise(calc_jd(15, 1, 2024), DELTA_T, -171.77 * DEG, -13.83 * DEG, 13.0)
        assert 5.7 < events.rise < 6.7
        assert 12.2 < events.transit < 13.0
        assert 18.5 < events.set < 19.5


class TestMoonRise:
    """Tests for moonrise, moonset and lunar transit."""

    def test_times_within_day_or_missing(self):
        for day in range(1, 31):
            times = moon_rise(calc_jd(day, 6, 2024), DELTA_T, 10.0 * DEG, 50.0 * DEG, 6366.0, 2.0)
            assert isinstance(times, RiseSetTimes)
            for value in (times.transit, times.rise, times.set):
                assert value is None or 0.0 <= value < 24.0

    def test_rises_on_most_days(self):
        """The Moon skips rising on about one day per lunation."""
        risen = 0
        for day in range(1, 31):
            times = moon_rise(calc_jd(day, 4, 2024), DELTA_T, 10.0 * DEG, 50.0 * DEG, 6366.0, 2.0)
            if times.rise is not None:
                risen += 1
        assert risen >= 25

    def test_rise_drifts_later(self):
        """Moonrise is later from one day to the next."""
        first = moon_rise(calc_jd(10, 4, 2024), DELTA_T, 10.0 * DEG, 50.0 * DEG, 6366.0, 2.0)
        second = moon_rise(calc_jd(11, 4, 2024), DELTA_T, 10.0 * DEG, 50.0 * DEG, 6366.0, 2.0)
        assert first.rise is not None and second.rise is not None
        assert second.rise > first.rise

    @pytest.mark.parametrize("lon,lat,zone", LOCATIONS.values(), ids=list(LOCATIONS))
    def test_no_event_on_consecutive_days(self, lon: float, lat: float, zone: float):
        """A moonrise, moonset or transit belongs to exactly one local day."""
        days = _winter_moon_days(lon, lat, zone)
        for day, (today, tomorrow) in enumerate(zip(days, days[1:]), start=1):
            for name in ("transit", "rise", "set"):
                first, second = getattr(today, name), getattr(tomorrow, name)
                if first is not None and second is not None:
                    assert abs(first - second) > 0.01, f"{name} repeated after day {day}"

    @pytest.mark.parametrize("lon,lat,zone", MID_LATITUDES.values(), ids=list(MID_LATITUDES))
    def test_events_happen_on_their_local_day(self, lon: float, lat: float, zone: float):
        """The Moon is on the meridian or the horizon at each reported local time."""
        jd0 = calc_jd(1, 1, 2024)
        for day, times in enumerate(_winter_moon_days(lon, lat, zone)):
            for name in ("transit", "rise", "set"):
                value = getattr(times, name)
                if value is None:
                    continue
                assert 0.0 <= value < 24.0
                hour_angle, altitude = _moon_geocentric(jd0 + day + (value - zone) / 24.0, lon, lat)
                if name == "transit":
                    assert abs(hour_angle) < 4.0, f"transit on day offset {day}"
                else:
                    assert abs(altitude) < 3.0, f"{name} on day offset {day}"
                    assert (hour_angle < 0.0) == (name == "rise"), f"{name} on day offset {day}"

    def test_late_rise_not_carried_into_next_day(self):
        """Lisbon, 2024-01-03: the Moon rises after midnight, so not on the 3rd."""
        lisbon = LOCATIONS["lisbon"]
        third = moon_rise(calc_jd(3, 1, 2024), DELTA_T, lisbon[0], lisbon[1], 6370.0, lisbon[2])
        fourth = moon_rise(calc_jd(4, 1, 2024), DELTA_T, lisbon[0], lisbon[1], 6370.0, lisbon[2])
        assert fourth.rise is not None and fourth.rise < 1.5
        assert third.rise is None or third.rise > 22.0
