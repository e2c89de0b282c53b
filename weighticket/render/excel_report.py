"""Render ticket records into the xlsx waste-control report."""

from datetime import date
from pathlib import Path
from typing import List, Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from weighticket.config.constants import (
    COLUMN_WIDTHS,
    CURRENCY_COLUMNS,
    CURRENCY_FORMAT,
    FIRST_DATA_ROW,
    HEADER_ROW,
    MASS_COLUMNS,
    MASS_FORMAT,
    REPORT_HEADERS,
    REPORT_SHEET_NAME,
    REPORT_TITLE_PREFIX,
    TITLE_ROW,
)
from weighticket.config.schema import TicketRecord


def format_date_dmy(day: date) -> str:
    """D/M/YYYY without zero padding."""
    return f"{day.day}/{day.month}/{day.year}"


def format_date_title(day: date) -> str:
    return day.strftime("%d-%m-%Y")


def report_title(start: date, end: date) -> str:
    return f"{REPORT_TITLE_PREFIX} ({format_date_title(start)} - {format_date_title(end)})"


def record_row(record: TicketRecord) -> List[Union[str, int, float]]:
    """One report row, in REPORT_HEADERS order."""
    return [
        format_date_dmy(record.ticket_date),
        record.driver_name,
        record.plates,
        record.slot,
        record.ticket_number,
        record.certified_scale,
        record.gross_ton,
        record.tare_kg,
        record.net_kg,
        record.gross_kg,
        record.unit_price,
        record.total,
    ]


def build_workbook(records: Sequence[TicketRecord], start: date, end: date) -> Workbook:
    """Build the report workbook: title, blank row, headers, one row per ticket."""
    wb = Workbook()
    ws = wb.active
    ws.title = REPORT_SHEET_NAME

    last_col = get_column_letter(len(REPORT_HEADERS))
    ws.merge_cells(f"A{TITLE_ROW}:{last_col}{TITLE_ROW}")
    title_cell = ws.cell(row=TITLE_ROW, column=1, value=report_title(start, end))
    title_cell.font = Font(size=16, bold=True)
    title_cell.alignment = Alignment(vertical="center", horizontal="center")

    for col, header in enumerate(REPORT_HEADERS, 1):
        cell = ws.cell(row=HEADER_ROW, column=col, value=header)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")

    for col, width in enumerate(COLUMN_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(col)].width = width

    for row_idx, record in enumerate(records, FIRST_DATA_ROW):
        for col, value in enumerate(record_row(record), 1):
            cell = ws.cell(row=row_idx, column=col, value=value)
            if col in MASS_COLUMNS:
                cell.number_format = MASS_FORMAT
            elif col in CURRENCY_COLUMNS:
                cell.number_format = CURRENCY_FORMAT

    return wb


def write_excel_report(
    records: Sequence[TicketRecord], start: date, end: date, output_path: Path,
) -> Path:
    """Write the report workbook and return its path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    build_workbook(records, start, end).save(output_path)
    return output_path
