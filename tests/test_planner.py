"""Tests for the ticket sequence planner."""

from datetime import date

from weighticket.tickets.planner import compute_starting_ticket

SATURDAY = date(2025, 3, 1)
MONDAY = date(2025, 3, 3)


class TestComputeStartingTicket:
    def test_same_day_advances_one_spacing(self):
        assert compute_starting_ticket(1000, MONDAY, MONDAY, 8, 80, True) == 1008

    def test_start_before_last_date(self):
        """Overlapping window behaves like the same-day case."""
        assert compute_starting_ticket(1000, date(2025, 3, 5), MONDAY, 8, 80, True) == 1008

    def test_next_day_adds_half_day(self):
        assert compute_starting_ticket(1000, date(2025, 3, 2), MONDAY, 8, 80, False) == 1040

    def test_intermediate_days_add_full_days(self):
        # Mon -> Thu: half of Monday + Tuesday + Wednesday
        result = compute_starting_ticket(1000, MONDAY, date(2025, 3, 6), 8, 80, True)
        assert result == 1000 + 40 + 80 * 2

    def test_sunday_skipped(self):
        # Sat -> Mon: only Sunday lies between
        assert compute_starting_ticket(1000, SATURDAY, MONDAY, 8, 80, True) == 1040

    def test_sunday_counted_when_not_skipped(self):
        assert compute_starting_ticket(1000, SATURDAY, MONDAY, 8, 80, False) == 1120

    def test_week_gap_with_sunday(self):
        # Mon 3/3 -> Mon 3/10: six days between, one of them Sunday
        result = compute_starting_ticket(0, MONDAY, date(2025, 3, 10), 8, 80, True)
        assert result == 40 + 80 * 5

    def test_zero_daily_count_is_flat(self):
        assert compute_starting_ticket(1000, SATURDAY, date(2025, 3, 7), 8, 0, True) == 1000

    def test_fractional_half_day_kept(self):
        assert compute_starting_ticket(1000, date(2025, 3, 2), MONDAY, 8, 81, False) == 1040.5

    def test_no_randomness(self):
        results = {
            compute_starting_ticket(500, SATURDAY, date(2025, 3, 20), 8, 77, True)
            for _ in range(5)
        }
        assert len(results) == 1
