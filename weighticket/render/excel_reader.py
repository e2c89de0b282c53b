"""Read slip rows back out of a report workbook, locating columns by header."""

import io
import logging
from datetime import datetime
from typing import Any, Dict, List

import pandas as pd
from openpyxl.utils.datetime import from_excel

from weighticket.config.constants import HEADER_SEARCH_ROWS, REPORT_HEADERS, REQUIRED_SLIP_COLUMNS
from weighticket.render.ticket_text import TicketSlip
from weighticket.tickets.errors import ValidationError

logger = logging.getLogger(__name__)

DATE_COLUMN = REPORT_HEADERS[0]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _cell_text(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _cell_number(value: Any) -> float:
    if _is_blank(value):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def format_date_cell(value: Any) -> str:
    """Dates as DD/MM/YYYY HH:MM:SS; text cells pass through unchanged."""
    if _is_blank(value):
        return ""
    if isinstance(value, datetime):
        return value.strftime("%d/%m/%Y %H:%M:%S")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return from_excel(value).strftime("%d/%m/%Y %H:%M:%S")
    return str(value).strip()


def _load_sheet(data: bytes) -> pd.DataFrame:
    try:
        return pd.read_excel(
            io.BytesIO(data), sheet_name=0, header=None, dtype=object, engine="openpyxl",
        )
    except Exception as exc:
        raise ValidationError(f"Could not read spreadsheet: {exc}") from exc


def _find_header(df: pd.DataFrame) -> int:
    for row_idx in range(min(len(df), HEADER_SEARCH_ROWS)):
        if _cell_text(df.iat[row_idx, 0]).upper() == DATE_COLUMN:
            return row_idx
    raise ValidationError(f"Header row not found; expected '{DATE_COLUMN}' in column A")


def read_slips(data: bytes) -> List[TicketSlip]:
    """Parse an uploaded report into slips.

    Raises:
        ValidationError: Unreadable file, missing header row or columns, or no
            row carries a ticket number.
    """
    df = _load_sheet(data)
    if df.empty:
        raise ValidationError("Spreadsheet has no rows")

    header_idx = _find_header(df)

    columns: Dict[str, int] = {}
    for col_idx in range(df.shape[1]):
        key = _cell_text(df.iat[header_idx, col_idx]).upper()
        if key and key not in columns:
            columns[key] = col_idx

    missing = [c for c in REQUIRED_SLIP_COLUMNS if c not in columns]
    if missing:
        raise ValidationError("Missing columns in spreadsheet: " + ", ".join(missing))

    slips: List[TicketSlip] = []
    for row_idx in range(header_idx + 1, len(df)):
        row = df.iloc[row_idx]
        ticket = _cell_text(row.iat[columns["TICKET"]])
        if not ticket:
            continue
        slips.append(TicketSlip(
            ticket=ticket,
            date_text=format_date_cell(row.iat[columns["FECHA PESADA"]]),
            driver=_cell_text(row.iat[columns["CHOFER"]]).upper(),
            plates=_cell_text(row.iat[columns["PLACAS"]]).upper(),
            tare_kg=_cell_number(row.iat[columns["TARA (KG)"]]),
            net_kg=_cell_number(row.iat[columns["KG NETO"]]),
            gross_kg=_cell_number(row.iat[columns["KG BRUTO"]]),
        ))

    if not slips:
        raise ValidationError("No rows with a TICKET value found")

    logger.info(f"Read {len(slips)} slips from spreadsheet (header row {header_idx + 1})")
    return slips
