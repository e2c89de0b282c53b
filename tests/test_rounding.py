"""Tests for the rounding policy."""

import pytest

from weighticket.tickets.rounding import round_to, round_to_kg, ton_to_kg


class TestRoundTo:
    def test_representation_error_compensated(self):
        """1.005 is stored as 1.00499999...; the epsilon pushes it up."""
        assert round_to(1.005, 2) == 1.01

    def test_half_away_from_zero(self):
        assert round_to(2.5, 0) == 3
        assert round_to(-2.5, 0) == -3
        assert round_to(0.125, 2) == 0.13

    def test_plain_values(self):
        assert round_to(10.0) == 10.0
        assert round_to(123.4549) == 123.45
        assert round_to(0.0) == 0.0

    @pytest.mark.parametrize("x", [
        0.0, 0.1, 1.005, 2.675, 10.0, 123.456, 99999.995, -3.14159, 1e-9, 52310.5,
    ])
    def test_idempotent(self, x):
        once = round_to(x, 2)
        assert round_to(once, 2) == once


class TestConversions:
    def test_ton_to_kg(self):
        assert ton_to_kg(10.0) == 10000.0
        assert ton_to_kg(2) == 2000.0
        assert ton_to_kg(12.34) == 12340.0

    def test_whole_kg(self):
        assert round_to_kg(14910.4) == 14910
        assert round_to_kg(14910.5) == 14911
        assert isinstance(round_to_kg(1.0), int)
