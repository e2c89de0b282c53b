"""Consistency checks over a synthesized ticket sequence."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from weighticket.config.constants import MASS_DECIMALS, SUNDAY
from weighticket.config.schema import Driver, GenerationParameters, TicketRecord
from weighticket.tickets.rounding import round_to, ton_to_kg
from weighticket.tickets.synthesizer import active_drivers, expected_record_count

logger = logging.getLogger(__name__)

# Rounding slack on the mass band
MASS_TOLERANCE = 0.01


@dataclass
class CheckResult:
    check: str
    passed: bool
    message: str = ""


@dataclass
class CheckReport:
    results: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def n_passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def n_failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    def summary(self) -> str:
        lines = [f"Checks: {self.n_passed} passed, {self.n_failed} failed"]
        for r in self.results:
            status = "PASS" if r.passed else "FAIL"
            lines.append(f"  [{status}] {r.check}: {r.message}")
        return "\n".join(lines)


def check_monotonic(records: Sequence[TicketRecord]) -> CheckResult:
    """Ticket numbers never decrease along the sequence."""
    for prev, cur in zip(records, records[1:]):
        if cur.ticket_number < prev.ticket_number:
            return CheckResult(
                "monotonic", False,
                f"ticket {cur.ticket_number} follows {prev.ticket_number}",
            )
    return CheckResult("monotonic", True, f"{len(records)} tickets in order")


def check_mass_band(
    records: Sequence[TicketRecord], drivers: Sequence[Driver],
) -> CheckResult:
    """Product mass stays within the active driver's tolerance band."""
    by_name: Dict[str, Driver] = {d.name: d for d in active_drivers(drivers)}
    worst = 0.0
    for r in records:
        driver = by_name.get(r.driver_name)
        if driver is None:
            return CheckResult("mass_band", False, f"unknown driver {r.driver_name!r}")
        allowed = driver.baseline_gross_ton * driver.variance_pct / 100.0
        excess = abs(r.gross_ton - driver.baseline_gross_ton) - allowed
        worst = max(worst, excess)
        if excess > MASS_TOLERANCE:
            return CheckResult(
                "mass_band", False,
                f"ticket {r.ticket_number}: {r.gross_ton} t outside "
                f"{driver.baseline_gross_ton} ± {allowed:.2f}",
            )
    return CheckResult("mass_band", True, f"max excess {worst:.4f} t")


def check_derived_masses(records: Sequence[TicketRecord]) -> CheckResult:
    """net = gross_ton * 1000 and gross = tare + net, both exactly rounded."""
    for r in records:
        if r.net_kg != ton_to_kg(r.gross_ton):
            return CheckResult(
                "derived_masses", False, f"ticket {r.ticket_number}: net {r.net_kg}",
            )
        if r.gross_kg != round_to(r.tare_kg + r.net_kg, MASS_DECIMALS):
            return CheckResult(
                "derived_masses", False, f"ticket {r.ticket_number}: gross {r.gross_kg}",
            )
    return CheckResult("derived_masses", True, "net/gross consistent")


def check_no_sundays(records: Sequence[TicketRecord]) -> CheckResult:
    sundays = [r for r in records if r.ticket_date.weekday() == SUNDAY]
    if sundays:
        return CheckResult("no_sundays", False, f"{len(sundays)} tickets dated on Sunday")
    return CheckResult("no_sundays", True, "no Sunday tickets")


def check_record_count(
    records: Sequence[TicketRecord],
    params: GenerationParameters,
    drivers: Sequence[Driver],
) -> CheckResult:
    expected = expected_record_count(params, drivers)
    return CheckResult(
        "record_count", len(records) == expected,
        f"expected {expected}, got {len(records)}",
    )


def verify_records(
    records: Sequence[TicketRecord],
    params: GenerationParameters,
    drivers: Sequence[Driver],
) -> CheckReport:
    """Run every sequence check and collect the results."""
    records = list(records)
    report = CheckReport()
    report.results.append(check_monotonic(records))
    report.results.append(check_mass_band(records, drivers))
    report.results.append(check_derived_masses(records))
    if params.skip_sundays:
        report.results.append(check_no_sundays(records))
    report.results.append(check_record_count(records, params, drivers))

    if report.passed:
        logger.info(report.summary())
    else:
        logger.warning(report.summary())
    return report
