"""Ticket sequence planner: seed the counter for a new reporting window."""

from datetime import date, timedelta

from weighticket.config.constants import SUNDAY


def compute_starting_ticket(
    last_ticket_number: int,
    last_ticket_date: date,
    start_date: date,
    spacing_base: float,
    daily_count_base: float,
    skip_sundays: bool,
) -> float:
    """Estimate the ticket counter right before ``start_date``.

    The scale keeps issuing tickets between the last known ticket and the new
    window, so the counter advances by the expected daily throughput:
    half a day for the rest of ``last_ticket_date``, then a full day for every
    date strictly between the two (Sundays contribute nothing when skipped).

    Args:
        last_ticket_number: Last recorded ticket number.
        last_ticket_date: Date of the last recorded ticket.
        start_date: First date of the new window.
        spacing_base: Nominal increment between two tickets.
        daily_count_base: Expected tickets per full day.
        skip_sundays: Whether Sundays are closed days.

    Returns:
        The real-valued counter. Callers truncate per emitted ticket.
    """
    if start_date <= last_ticket_date:
        # Overlapping window: no days elapsed, advance one nominal step
        return last_ticket_number + spacing_base

    days_between = (start_date - last_ticket_date).days

    ticket = last_ticket_number + daily_count_base / 2

    for i in range(1, days_between):
        day = last_ticket_date + timedelta(days=i)
        if skip_sundays and day.weekday() == SUNDAY:
            continue
        ticket += daily_count_base

    return ticket
