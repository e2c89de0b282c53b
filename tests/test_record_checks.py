"""Tests for the sequence consistency report."""

from dataclasses import replace

import pytest

from weighticket.tickets.synthesizer import synthesize
from weighticket.validation.record_checks import (
    check_derived_masses,
    check_mass_band,
    check_monotonic,
    check_no_sundays,
    verify_records,
)


class TestVerifyRecords:
    @pytest.fixture
    def drivers(self, fixed_driver, varied_driver):
        return [fixed_driver, varied_driver]

    @pytest.fixture
    def records(self, two_week_params, drivers, rng):
        return synthesize(two_week_params, drivers, rng)

    def test_clean_sequence_passes(self, records, two_week_params, drivers):
        report = verify_records(records, two_week_params, drivers)
        assert report.passed
        assert report.n_failed == 0
        assert {r.check for r in report.results} == {
            "monotonic", "mass_band", "derived_masses", "no_sundays", "record_count",
        }

    def test_decreasing_ticket_detected(self, records):
        broken = list(records)
        broken[5] = replace(broken[5], ticket_number=broken[4].ticket_number - 1)
        assert not check_monotonic(broken).passed

    def test_mass_outside_band_detected(self, records, drivers):
        broken = list(records)
        broken[0] = replace(broken[0], gross_ton=broken[0].gross_ton + 5)
        assert not check_mass_band(broken, drivers).passed

    def test_unknown_driver_detected(self, records, fixed_driver):
        assert not check_mass_band(records, [fixed_driver]).passed

    def test_bad_net_detected(self, records):
        broken = [replace(records[0], net_kg=records[0].net_kg + 1)] + list(records[1:])
        assert not check_derived_masses(broken).passed

    def test_bad_gross_detected(self, records):
        broken = [replace(records[0], gross_kg=records[0].gross_kg - 1)] + list(records[1:])
        assert not check_derived_masses(broken).passed

    def test_sunday_detected(self, records):
        sunday = records[0].ticket_date.replace(day=9)
        broken = [replace(records[0], ticket_date=sunday)]
        assert not check_no_sundays(broken).passed

    def test_count_mismatch_fails_report(self, records, two_week_params, drivers):
        report = verify_records(records[:-1], two_week_params, drivers)
        assert not report.passed
        assert "FAIL" in report.summary()

    def test_inactive_namesake_ignored(self, records, drivers, varied_driver):
        namesake = replace(varied_driver, baseline_gross_ton=99.0, active=False)
        assert check_mass_band(records, drivers + [namesake]).passed
