"""Pytest fixtures for astronomical almanac tests.

This module provides test fixtures that ensure:
1. No .env file or ASTRO_* variables of the developer leak into tests
2. Observers and instants are fixed, so results are reproducible
"""

import os
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from astro_almanac.astronomy.calculator import AstroCalculator
from astro_almanac.models.moment import Moment
from astro_almanac.models.observer import Observer


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch, tmp_path):
    """Reset settings cache and environment before each test."""
    from astro_almanac.config import get_settings

    for key in list(os.environ):
        if key.upper().startswith("ASTRO_"):
            monkeypatch.delenv(key, raising=False)
    # Keep a .env in the working directory out of reach
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Observers
# =============================================================================


@pytest.fixture
def berlin_tz() -> ZoneInfo:
    return ZoneInfo("Europe/Berlin")


@pytest.fixture
def central_observer() -> Observer:
    """Observer at 50N 10E (central Germany), sea level."""
    return Observer(latitude=50.0, longitude=10.0)


@pytest.fixture
def arctic_observer() -> Observer:
    """Observer north of the Arctic circle (Tromsø)."""
    return Observer(latitude=69.65, longitude=18.96, altitude=10.0)


@pytest.fixture
def sydney_observer() -> Observer:
    """Observer in the southern hemisphere, outside the phenology region."""
    return Observer(latitude=-33.8688, longitude=151.2093, altitude=58.0)


# =============================================================================
# Instants
# =============================================================================


@pytest.fixture
def solstice_noon(berlin_tz: ZoneInfo) -> datetime:
    """June solstice 2024, local noon in Germany (CEST)."""
    return datetime(2024, 6, 21, 12, 0, 0, tzinfo=berlin_tz)


@pytest.fixture
def winter_evening(berlin_tz: ZoneInfo) -> datetime:
    """A winter evening in Germany (CET)."""
    return datetime(2024, 1, 15, 20, 30, 0, tzinfo=berlin_tz)


@pytest.fixture
def solstice_moment(solstice_noon: datetime) -> Moment:
    return Moment.from_datetime(solstice_noon)


# =============================================================================
# Calculators
# =============================================================================


@pytest.fixture
def central_calculator(central_observer: Observer) -> AstroCalculator:
    return AstroCalculator(central_observer)


@pytest.fixture
def arctic_calculator(arctic_observer: Observer) -> AstroCalculator:
    return AstroCalculator(arctic_observer)
