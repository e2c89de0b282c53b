"""Validate and normalize an incoming generate request."""

import logging
import math
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from weighticket.config.constants import (
    DEFAULT_COMPANY,
    DEFAULT_SKIP_SUNDAYS,
    MAX_NUMERIC_INPUT,
    MAX_RECORDS_PER_REQUEST,
)
from weighticket.config.schema import AppConfig, CompanySettings, Driver, GenerationParameters
from weighticket.tickets.errors import ValidationError
from weighticket.tickets.synthesizer import expected_record_count

logger = logging.getLogger(__name__)


def _require(payload: Dict[str, Any], key: str) -> Any:
    value = payload.get(key)
    if value is None or value == "":
        raise ValidationError(f"Missing {key}")
    return value


def parse_iso_date(value: Any, field_name: str) -> date:
    """Parse a YYYY-MM-DD string; a trailing 'T...' or ' ...' time part is ignored."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    day_part, time_part = text[:10], text[10:]
    if time_part and time_part[0] not in "T ":
        raise ValidationError(f"{field_name} must be an ISO date (YYYY-MM-DD), got {value!r}")
    try:
        return date.fromisoformat(day_part)
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO date (YYYY-MM-DD), got {value!r}")


def _parse_int(value: Any, field_name: str, minimum: int) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be an integer, got {value!r}")
    if not number.is_integer():
        raise ValidationError(f"{field_name} must be an integer, got {value!r}")
    if number < minimum or number > MAX_NUMERIC_INPUT:
        raise ValidationError(
            f"{field_name} must be between {minimum} and {MAX_NUMERIC_INPUT:.0f}, got {value!r}"
        )
    return int(number)


def _parse_float(value: Any, field_name: str, minimum: float) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    if not math.isfinite(number) or number < minimum or number > MAX_NUMERIC_INPUT:
        raise ValidationError(
            f"{field_name} must be between {minimum} and {MAX_NUMERIC_INPUT:.0f}, got {value!r}"
        )
    return number


def _parse_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false, got {value!r}")
    return value

def parse_driver(data: Any, index: int) -> Driver:
    """Build a Driver from its JSON form, checking every numeric field."""
    if not isinstance(data, dict):
        raise ValidationError(f"drivers[{index}] must be an object")

    label = f"drivers[{index}]"
    name = str(data.get("name") or "").strip()
    if not name:
        raise ValidationError(f"{label}.name is required")

    schedule = data.get("schedule") or []
    if isinstance(schedule, str):
        schedule = [s for s in (part.strip() for part in schedule.split(",")) if s]
    if not isinstance(schedule, (list, tuple)):
        raise ValidationError(f"{label}.schedule must be a list of slot labels")

    return Driver(
        name=name,
        plates=str(data.get("plates") or "").strip(),
        tare_ton=_parse_float(data.get("tareTon", 0), f"{label}.tareTon", 0.0),
        baseline_gross_ton=_parse_float(
            _require(data, "baselineGrossTon"), f"{label}.baselineGrossTon", 0.0,
        ),
        variance_pct=_parse_float(data.get("variancePct", 0), f"{label}.variancePct", 0.0),
        tickets_per_day=_parse_int(data.get("ticketsPerDay", 0), f"{label}.ticketsPerDay", 0),
        schedule=tuple(str(s) for s in schedule),
        active=_parse_bool(data.get("active", True), f"{label}.active"),
    )


def parse_generation_request(
    payload: Dict[str, Any],
    config: Optional[AppConfig] = None,
) -> Tuple[GenerationParameters, List[Driver]]:
    """Turn a generate request into parameters plus the driver list.

    ``drivers``, ``pricePerTon`` and ``skipSundays`` fall back to ``config``
    when the request leaves them out.

    Raises:
        ValidationError: Any field is missing or invalid, or the request would
            produce more than MAX_RECORDS_PER_REQUEST records.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    config = config or AppConfig()

    start = parse_iso_date(_require(payload, "startDate"), "startDate")
    end = parse_iso_date(_require(payload, "endDate"), "endDate")
    if end < start:
        raise ValidationError(f"endDate {end} is before startDate {start}")

    last_number = _parse_int(_require(payload, "lastTicketNumber"), "lastTicketNumber", 0)
    last_date = parse_iso_date(_require(payload, "lastTicketDate"), "lastTicketDate")

    spacing = _parse_int(_require(payload, "spacingVariance"), "spacingVariance", 1)
    spacing_range = _parse_int(
        payload.get("spacingVarianceRange", 0), "spacingVarianceRange", 0,
    )
    daily = _parse_int(_require(payload, "dailyTicketCount"), "dailyTicketCount", 1)
    daily_range = _parse_int(
        payload.get("dailyTicketCountRange", 0), "dailyTicketCountRange", 0,
    )

    price = payload.get("pricePerTon")
    if price is None or price == "":
        price = config.company.price_per_ton
    price = _parse_float(price, "pricePerTon", 0.0)

    skip_sundays = payload.get("skipSundays")
    if skip_sundays is None:
        skip_sundays = config.skip_sundays
    skip_sundays = _parse_bool(skip_sundays, "skipSundays")

    raw_drivers = payload.get("drivers")
    if raw_drivers is None:
        drivers = [parse_driver(d.to_dict(), i) for i, d in enumerate(config.drivers)]
    elif not isinstance(raw_drivers, list):
        raise ValidationError("drivers must be a list")
    else:
        drivers = [parse_driver(d, i) for i, d in enumerate(raw_drivers)]
    if not drivers:
        raise ValidationError("drivers must not be empty")

    params = GenerationParameters(
        start_date=start,
        end_date=end,
        last_ticket_number=last_number,
        last_ticket_date=last_date,
        spacing_base=spacing,
        spacing_range=spacing_range,
        daily_count_base=daily,
        daily_count_range=daily_range,
        price_per_ton=price,
        skip_sundays=skip_sundays,
        certified_scale=config.company.certified_scale,
    )

    n_records = expected_record_count(params, drivers)
    if n_records > MAX_RECORDS_PER_REQUEST:
        raise ValidationError(
            f"Request would generate {n_records} tickets "
            f"(limit {MAX_RECORDS_PER_REQUEST}); shorten the date range"
        )

    if start <= last_date:
        logger.warning(f"startDate {start} is not after lastTicketDate {last_date}")

    return params, drivers


def parse_app_config(data: Any) -> AppConfig:
    """Build an AppConfig from a submitted config document.

    Unlike ``AppConfig.from_dict`` every field is checked, so a bad document
    is refused before it is saved.

    Raises:
        ValidationError: The document or any of its fields is malformed.
    """
    if not isinstance(data, dict):
        raise ValidationError("Config must be a JSON object")

    company = data.get("company") or {}
    rules = data.get("rules") or {}
    if not isinstance(company, dict):
        raise ValidationError("company must be an object")
    if not isinstance(rules, dict):
        raise ValidationError("rules must be an object")

    raw_drivers = data.get("drivers") or []
    if not isinstance(raw_drivers, list):
        raise ValidationError("drivers must be a list")

    return AppConfig(
        company=CompanySettings(
            title=str(company.get("title", DEFAULT_COMPANY["title"])),
            report_title=str(company.get("reportTitle", DEFAULT_COMPANY["reportTitle"])),
            certified_scale=str(company.get("certifiedScale", DEFAULT_COMPANY["certifiedScale"])),
            price_per_ton=_parse_float(
                company.get("pricePerTon", DEFAULT_COMPANY["pricePerTon"]),
                "company.pricePerTon", 0.0,
            ),
        ),
        skip_sundays=_parse_bool(
            rules.get("skipSundays", DEFAULT_SKIP_SUNDAYS), "rules.skipSundays",
        ),
        drivers=[parse_driver(d, i) for i, d in enumerate(raw_drivers)],
    )
