"""Shared test fixtures."""

from datetime import date

import numpy as np
import pytest

from weighticket.config.schema import Driver, GenerationParameters

# 2025-03-03 is a Monday
MONDAY = date(2025, 3, 3)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def fixed_driver():
    """Driver with no mass variance (deterministic figures)."""
    return Driver(
        name="JUAN PEREZ",
        plates="ABC-123",
        tare_ton=2.0,
        baseline_gross_ton=10.0,
        variance_pct=0.0,
        tickets_per_day=2,
        schedule=("6-8", "12-15"),
    )


@pytest.fixture
def varied_driver():
    return Driver(
        name="MARIA LOPEZ",
        plates="JAL 4521",
        tare_ton=7.35,
        baseline_gross_ton=14.2,
        variance_pct=12.5,
        tickets_per_day=3,
        schedule=("6-8", "9-11"),
    )


@pytest.fixture
def fixed_params():
    """Two weekdays, no spacing or daily-count variance."""
    return GenerationParameters(
        start_date=MONDAY,
        end_date=date(2025, 3, 4),
        last_ticket_number=1000,
        last_ticket_date=date(2025, 3, 2),
        spacing_base=8,
        spacing_range=0,
        daily_count_base=80,
        daily_count_range=0,
        price_per_ton=520.33,
        skip_sundays=False,
    )


@pytest.fixture
def two_week_params():
    return GenerationParameters(
        start_date=MONDAY,
        end_date=date(2025, 3, 16),
        last_ticket_number=52_310,
        last_ticket_date=date(2025, 2, 27),
        spacing_base=8,
        spacing_range=2,
        daily_count_base=80,
        daily_count_range=10,
        price_per_ton=520.33,
        skip_sundays=True,
    )
