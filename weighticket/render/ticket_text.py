"""Plain-text weigh slips, one block per ticket."""

import io
import re
import zipfile
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from weighticket.config.constants import SLIP_HEADER, SLIP_MISSING_PLATES, SLIP_SEPARATOR
from weighticket.config.schema import TicketRecord
from weighticket.render.excel_report import format_date_dmy
from weighticket.tickets.rounding import round_to_kg


@dataclass(frozen=True)
class TicketSlip:
    """Fields printed on a slip."""

    ticket: str
    date_text: str
    driver: str
    plates: str
    tare_kg: float
    net_kg: float
    gross_kg: float


def slip_from_record(record: TicketRecord) -> TicketSlip:
    return TicketSlip(
        ticket=str(record.ticket_number),
        date_text=format_date_dmy(record.ticket_date),
        driver=record.driver_name.strip().upper(),
        plates=record.plates.strip().upper(),
        tare_kg=record.tare_kg,
        net_kg=record.net_kg,
        gross_kg=record.gross_kg,
    )


def format_kg(value: float) -> str:
    """Whole kilograms with thousands separators (14910 -> '14,910')."""
    return f"{round_to_kg(value):,}"


def build_ticket_text(slip: TicketSlip, header: Optional[Dict[str, str]] = None) -> str:
    h = header or SLIP_HEADER
    lines = [
        h["title"],
        h["address"],
        h["city"],
        h["contact"],
        h["rfc"],
        "",
        "",
        f"Sucursal:  {h['branch']}",
        f"Expedido en:  {h['issued_in']}",
        "",
        f"TKT A    {slip.ticket}",
        f"Fecha:   {slip.date_text}",
        f"OPERADOR {slip.driver}",
        "Codigo:Cantidad:Precio:Importe:",
        "Alm. Descripcion del producto:",
        "",
        "",
        f"KG BRUTO {format_kg(slip.gross_kg)} 0.00",
        SLIP_SEPARATOR,
        f"KG TARA  {format_kg(slip.tare_kg)}  0.00",
        SLIP_SEPARATOR,
        f"KG NETO  {format_kg(slip.net_kg)}  0.00",
        "",
        "",
        "TORTON $100.00 1 $100.00 $100.00",
        "",
        "Total :        $100.00",
        "",
        "",
        "CIEN PESOS 00/100 M.N.",
        "Comprobante no deducible de impuestos",
        "",
        "",
        "Observaciones:",
        "",
        "",
        h["company"],
        f"PLACAS: {slip.plates}   CHOFER:{slip.driver}",
        f"CARGA: {h['load']}",
        h["thanks"],
    ]
    return "\n".join(lines) + "\n"


def slips_to_text(slips: Iterable[TicketSlip]) -> str:
    """All slips in one document, separated by a blank line."""
    return "\n\n".join(build_ticket_text(s) for s in slips)


def slip_filename(slip: TicketSlip) -> str:
    name = f"TKT_{slip.ticket}_{slip.plates or SLIP_MISSING_PLATES}.txt"
    return re.sub(r"[^\w.\-]", "_", name, flags=re.ASCII)


def slips_to_zip(slips: Sequence[TicketSlip]) -> bytes:
    """Zip archive with one text file per slip."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for slip in slips:
            zf.writestr(slip_filename(slip), build_ticket_text(slip))
    return buffer.getvalue()


def records_to_slips(records: Sequence[TicketRecord]) -> List[TicketSlip]:
    return [slip_from_record(r) for r in records]
