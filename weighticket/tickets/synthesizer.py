"""Record synthesizer: walk the date window and emit weigh tickets.

Counter flow:
    compute_starting_ticket()          -> counter before the first date
    every later date                   -> += random_daily_count() / 2
    every ticket slot                  -> += random_spacing(), then emit floor(counter)

The counter stays real-valued for the whole run so half-day bumps on odd
daily counts carry over into later tickets.
"""

import logging
import math
from datetime import date, timedelta
from typing import List, Optional, Sequence

import numpy as np

from weighticket.config.constants import CURRENCY_DECIMALS, MASS_DECIMALS, SUNDAY
from weighticket.config.schema import Driver, GenerationParameters, TicketRecord
from weighticket.tickets.errors import NoActiveDriversError
from weighticket.tickets.planner import compute_starting_ticket
from weighticket.tickets.rounding import round_to, ton_to_kg

logger = logging.getLogger(__name__)


def build_date_list(start: date, end: date, skip_sundays: bool) -> List[date]:
    """Every date in [start, end] in order, without Sundays if requested."""
    n_days = (end - start).days + 1
    days = [start + timedelta(days=i) for i in range(max(n_days, 0))]
    if not skip_sundays:
        return days
    return [d for d in days if d.weekday() != SUNDAY]


def _random_band(rng: np.random.Generator, base: int, spread: int) -> int:
    lo = max(1, int(base) - int(spread))
    hi = max(lo, int(base) + int(spread))
    return int(rng.integers(lo, hi, endpoint=True))


def random_spacing(rng: np.random.Generator, base: int, spread: int) -> int:
    """Ticket increment, uniform in [max(1, base - spread), base + spread]."""
    return _random_band(rng, base, spread)


def random_daily_count(rng: np.random.Generator, base: int, spread: int) -> int:
    """Tickets issued in one day, uniform in [max(1, base - spread), base + spread]."""
    return _random_band(rng, base, spread)


def random_gross_ton(
    rng: np.random.Generator, baseline_ton: float, variance_pct: float,
) -> float:
    """Product mass within ±variance_pct of the baseline, 2 decimals."""
    factor = 1.0 + rng.uniform(-1.0, 1.0) * (variance_pct / 100.0)
    return round_to(baseline_ton * factor, MASS_DECIMALS)


def active_drivers(drivers: Sequence[Driver]) -> List[Driver]:
    """Active drivers, in input order."""
    return [d for d in drivers if d.active]


def count_dates(start: date, end: date, skip_sundays: bool) -> int:
    """len(build_date_list(...)) without building the list."""
    n_days = (end - start).days + 1
    if n_days <= 0:
        return 0
    if not skip_sundays:
        return n_days
    # every full week holds one Sunday; the leftover days start on start.weekday()
    full_weeks, rest = divmod(n_days, 7)
    first = start.weekday()
    sundays = full_weeks + sum(1 for i in range(rest) if (first + i) % 7 == SUNDAY)
    return n_days - sundays


def expected_record_count(params: GenerationParameters, drivers: Sequence[Driver]) -> int:
    """Number of records synthesize() will emit for these inputs."""
    n_dates = count_dates(params.start_date, params.end_date, params.skip_sundays)
    per_day = sum(max(d.tickets_per_day, 0) for d in active_drivers(drivers))
    return n_dates * per_day


def synthesize(
    params: GenerationParameters,
    drivers: Sequence[Driver],
    rng: Optional[np.random.Generator] = None,
) -> List[TicketRecord]:
    """Generate ticket records for the window described by ``params``.

    Records come out ordered by date, then driver input order, then slot index.

    Args:
        params: Generation parameters for this run.
        drivers: Driver list; inactive drivers are ignored.
        rng: Random source. A fresh unseeded generator is used when omitted.

    Returns:
        List of TicketRecord.

    Raises:
        NoActiveDriversError: No driver is active.
    """
    working = active_drivers(drivers)
    if not working:
        raise NoActiveDriversError("No active drivers. Activate or add at least one driver.")

    if rng is None:
        rng = np.random.default_rng()

    dates = build_date_list(params.start_date, params.end_date, params.skip_sundays)

    ticket = compute_starting_ticket(
        params.last_ticket_number,
        params.last_ticket_date,
        params.start_date,
        params.spacing_base,
        params.daily_count_base,
        params.skip_sundays,
    )
    logger.debug(f"Starting counter {ticket} for window {params.start_date}..{params.end_date}")

    unit_price = round_to(params.price_per_ton, CURRENCY_DECIMALS)
    records: List[TicketRecord] = []

    for day_idx, day in enumerate(dates):
        if day_idx > 0:
            ticket += random_daily_count(
                rng, params.daily_count_base, params.daily_count_range,
            ) / 2

        for driver in working:
            if driver.tickets_per_day <= 0:
                continue

            tare_kg = ton_to_kg(driver.tare_ton)

            for i in range(driver.tickets_per_day):
                slot = driver.schedule[i % len(driver.schedule)] if driver.schedule else ""

                ticket += random_spacing(rng, params.spacing_base, params.spacing_range)

                gross_ton = random_gross_ton(
                    rng, driver.baseline_gross_ton, driver.variance_pct,
                )
                net_kg = ton_to_kg(gross_ton)
                gross_kg = round_to(tare_kg + net_kg, MASS_DECIMALS)
                total = round_to(gross_ton * unit_price, CURRENCY_DECIMALS)

                records.append(TicketRecord(
                    ticket_date=day,
                    driver_name=driver.name,
                    plates=driver.plates,
                    slot=slot,
                    ticket_number=math.floor(ticket),
                    certified_scale=params.certified_scale,
                    gross_ton=gross_ton,
                    tare_kg=tare_kg,
                    net_kg=net_kg,
                    gross_kg=gross_kg,
                    unit_price=unit_price,
                    total=total,
                ))

    if records:
        logger.info(
            f"Synthesized {len(records)} tickets over {len(dates)} days "
            f"({len(working)} drivers), tickets {records[0].ticket_number}-{records[-1].ticket_number}"
        )
    else:
        logger.info(f"No tickets synthesized for {params.start_date}..{params.end_date}")

    return records
