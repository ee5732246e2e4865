"""Tests for observer models."""

import pytest

from astro_almanac.models.observer import (
    Coordinates,
    Observer,
    parse_horizon,
    parse_seasonal_hours,
    validate_month_day,
)


class TestCoordinates:
    """Tests for the Coordinates model."""

    def test_valid_coordinates(self):
        """Test creating valid coordinates."""
        coords = Coordinates(latitude=50.0, longitude=10.0)
        assert coords.latitude == 50.0
        assert coords.longitude == 10.0
        assert str(coords) == "50.0,10.0"

    def test_boundary_values(self):
        """Test boundary latitude/longitude values."""
        # North pole
        north = Coordinates(latitude=90, longitude=0)
        assert north.latitude == 90

        # South pole
        south = Coordinates(latitude=-90, longitude=0)
        assert south.latitude == -90

        # Date line
        east = Coordinates(latitude=0, longitude=180)
        west = Coordinates(latitude=0, longitude=-180)
        assert east.longitude == 180
        assert west.longitude == -180

    def test_invalid_latitude(self):
        """Test that invalid latitude raises error."""
        with pytest.raises(ValueError):
            Coordinates(latitude=91, longitude=0)

        with pytest.raises(ValueError):
            Coordinates(latitude=-91, longitude=0)

    def test_invalid_longitude(self):
        """Test that invalid longitude raises error."""
        with pytest.raises(ValueError):
            Coordinates(latitude=0, longitude=181)

    def test_frozen(self):
        """Test that coordinates cannot be changed."""
        coords = Coordinates(latitude=50.0, longitude=10.0)
        with pytest.raises(ValueError):
            coords.latitude = 51.0


class TestObserver:
    """Tests for the Observer model."""

    def test_defaults(self):
        """Test the default calendar conventions."""
        observer = Observer(latitude=50.0, longitude=10.0)
        assert observer.altitude == 0.0
        assert (observer.horizon_morning, observer.horizon_evening) == (0.0, 0.0)
        assert (observer.day_parts, observer.night_parts) == (12, 12)
        assert observer.roman_hours is False
        assert observer.early_spring == "02-22"
        assert observer.early_fall == "08-20"

    def test_from_string(self):
        """Test parsing an observer without altitude."""
        observer = Observer.from_string("50.0,10.0")
        assert observer.latitude == pytest.approx(50.0)
        assert observer.longitude == pytest.approx(10.0)
        assert observer.altitude == 0.0

    def test_from_string_with_altitude(self):
        """Test parsing an observer with altitude in meters."""
        observer = Observer.from_string("-33.8688, 151.2093, 58")
        assert observer.latitude == pytest.approx(-33.8688)
        assert observer.longitude == pytest.approx(151.2093)
        assert observer.altitude == pytest.approx(58.0)

    def test_from_string_with_plus_signs(self):
        """Test parsing coordinates with explicit plus signs."""
        observer = Observer.from_string("+69.65,+18.96")
        assert observer.latitude == pytest.approx(69.65)

    def test_from_string_keyword_overrides(self):
        """Test that extra settings are passed to the model."""
        observer = Observer.from_string("50,10", day_parts=12, night_parts=4, roman_hours=True)
        assert observer.roman_hours is True
        assert observer.night_parts == 4

    def test_from_string_invalid_format(self):
        """Test that invalid format raises error."""
        with pytest.raises(ValueError, match="Invalid coordinate format"):
            Observer.from_string("not,valid")

        with pytest.raises(ValueError):
            Observer.from_string("50.0")  # Missing longitude

    def test_horizon_range(self):
        with pytest.raises(ValueError):
            Observer(latitude=50.0, longitude=10.0, horizon_morning=-91.0)

    def test_parts_range(self):
        with pytest.raises(ValueError):
            Observer(latitude=50.0, longitude=10.0, day_parts=0)
        with pytest.raises(ValueError):
            Observer(latitude=50.0, longitude=10.0, night_parts=25)

    def test_roman_hours_require_12_and_4(self):
        with pytest.raises(ValueError, match="Roman hours"):
            Observer(latitude=50.0, longitude=10.0, roman_hours=True)

    def test_invalid_cutoff(self):
        with pytest.raises(ValueError, match="MM-DD"):
            Observer(latitude=50.0, longitude=10.0, early_spring="22.02.")
        with pytest.raises(ValueError, match="calendar day"):
            Observer(latitude=50.0, longitude=10.0, early_fall="09-31")


class TestParsers:
    """Tests for the setting parsers."""

    def test_single_horizon(self):
        assert parse_horizon("-6") == (-6.0, -6.0)
        assert parse_horizon(0) == (0.0, 0.0)

    def test_split_horizon(self):
        assert parse_horizon("-3:-4.5") == (-3.0, -4.5)

    def test_invalid_horizon(self):
        with pytest.raises(ValueError, match="Invalid horizon"):
            parse_horizon("low")

    def test_seasonal_hours(self):
        assert parse_seasonal_hours("12") == (12, 12, False)
        assert parse_seasonal_hours("10:14") == (10, 14, False)
        assert parse_seasonal_hours(6) == (6, 6, False)

    def test_roman_seasonal_hours(self):
        assert parse_seasonal_hours("4") == (12, 4, True)

    def test_invalid_seasonal_hours(self):
        with pytest.raises(ValueError, match="Invalid seasonal hours"):
            parse_seasonal_hours("twelve")

    def test_month_day(self):
        assert validate_month_day("02-22") == "02-22"
        assert validate_month_day("02-29") == "02-29"

    def test_invalid_month_day(self):
        with pytest.raises(ValueError):
            validate_month_day("13-01")
        with pytest.raises(ValueError):
            validate_month_day("2-22")
