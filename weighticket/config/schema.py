"""Dataclass models for drivers, generation parameters and ticket records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Tuple

from weighticket.config.constants import (
    DEFAULT_COMPANY,
    DEFAULT_DAILY_COUNT_BASE,
    DEFAULT_DAILY_COUNT_RANGE,
    DEFAULT_SKIP_SUNDAYS,
    DEFAULT_SPACING_BASE,
    DEFAULT_SPACING_RANGE,
)


@dataclass(frozen=True)
class Driver:
    """A truck driver taking part in ticket generation."""

    name: str
    plates: str
    tare_ton: float              # Empty-vehicle mass (tons)
    baseline_gross_ton: float    # Expected load (tons)
    variance_pct: float          # ± tolerance around the baseline (%)
    tickets_per_day: int
    schedule: Tuple[str, ...] = ()   # Time-slot labels, assigned round-robin
    active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Driver:
        return cls(
            name=str(data.get("name", "")),
            plates=str(data.get("plates", "")),
            tare_ton=float(data.get("tareTon", 0.0)),
            baseline_gross_ton=float(data.get("baselineGrossTon", 0.0)),
            variance_pct=float(data.get("variancePct", 0.0)),
            tickets_per_day=int(data.get("ticketsPerDay", 0)),
            schedule=tuple(str(s) for s in data.get("schedule") or ()),
            active=bool(data.get("active", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "plates": self.plates,
            "tareTon": self.tare_ton,
            "baselineGrossTon": self.baseline_gross_ton,
            "variancePct": self.variance_pct,
            "ticketsPerDay": self.tickets_per_day,
            "schedule": list(self.schedule),
            "active": self.active,
        }


@dataclass(frozen=True)
class CompanySettings:
    title: str = DEFAULT_COMPANY["title"]
    report_title: str = DEFAULT_COMPANY["reportTitle"]
    certified_scale: str = DEFAULT_COMPANY["certifiedScale"]
    price_per_ton: float = DEFAULT_COMPANY["pricePerTon"]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CompanySettings:
        return cls(
            title=str(data.get("title", DEFAULT_COMPANY["title"])),
            report_title=str(data.get("reportTitle", DEFAULT_COMPANY["reportTitle"])),
            certified_scale=str(data.get("certifiedScale", DEFAULT_COMPANY["certifiedScale"])),
            price_per_ton=float(data.get("pricePerTon", DEFAULT_COMPANY["pricePerTon"])),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "reportTitle": self.report_title,
            "certifiedScale": self.certified_scale,
            "pricePerTon": self.price_per_ton,
        }


@dataclass
class AppConfig:
    """Persisted application configuration (company, rules, drivers)."""

    company: CompanySettings = field(default_factory=CompanySettings)
    skip_sundays: bool = DEFAULT_SKIP_SUNDAYS
    drivers: List[Driver] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        rules = data.get("rules") or {}
        return cls(
            company=CompanySettings.from_dict(data.get("company") or {}),
            skip_sundays=bool(rules.get("skipSundays", DEFAULT_SKIP_SUNDAYS)),
            drivers=[Driver.from_dict(d) for d in data.get("drivers") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company": self.company.to_dict(),
            "rules": {"skipSundays": self.skip_sundays},
            "drivers": [d.to_dict() for d in self.drivers],
        }


@dataclass(frozen=True)
class GenerationParameters:
    """Request-scoped inputs for one generation run."""

    start_date: date
    end_date: date
    last_ticket_number: int
    last_ticket_date: date
    spacing_base: int = DEFAULT_SPACING_BASE
    spacing_range: int = DEFAULT_SPACING_RANGE
    daily_count_base: int = DEFAULT_DAILY_COUNT_BASE
    daily_count_range: int = DEFAULT_DAILY_COUNT_RANGE
    price_per_ton: float = DEFAULT_COMPANY["pricePerTon"]
    skip_sundays: bool = DEFAULT_SKIP_SUNDAYS
    certified_scale: str = DEFAULT_COMPANY["certifiedScale"]


@dataclass(frozen=True)
class TicketRecord:
    """One synthesized weigh ticket."""

    ticket_date: date
    driver_name: str
    plates: str
    slot: str
    ticket_number: int
    certified_scale: str
    gross_ton: float      # Product mass (tons)
    tare_kg: float
    net_kg: float         # gross_ton * 1000
    gross_kg: float       # tare_kg + net_kg
    unit_price: float
    total: float          # gross_ton * unit_price
