"""Turn a generation request into output files and registry entries.

Records are synthesized once, then rendered as xlsx, txt, zip or parquet.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from weighticket.config.schema import Driver, GenerationParameters, TicketRecord
from weighticket.render.excel_reader import read_slips
from weighticket.render.excel_report import write_excel_report
from weighticket.render.ticket_text import records_to_slips, slips_to_text, slips_to_zip
from weighticket.storage.file_registry import FileRegistry
from weighticket.storage.parquet_writer import ParquetWriter
from weighticket.tickets.synthesizer import synthesize

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("xlsx", "txt", "zip", "parquet")


def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d%H%M%S%f")


class ReportGenerator:
    """Generates ticket reports into an output directory."""

    def __init__(self, output_dir: Path, registry: Optional[FileRegistry] = None):
        self.output_dir = Path(output_dir)
        self.registry = registry

    def generate_records(
        self,
        params: GenerationParameters,
        drivers: Sequence[Driver],
        rng: Optional[np.random.Generator] = None,
    ) -> List[TicketRecord]:
        logger.info(
            f"Generating tickets {params.start_date}..{params.end_date} "
            f"from #{params.last_ticket_number} ({params.last_ticket_date}), "
            f"{sum(1 for d in drivers if d.active)} active drivers"
        )
        return synthesize(params, drivers, rng=rng)

    def _register(self, path: Path, kind: str) -> Path:
        if self.registry is not None:
            self.registry.save(path.name, kind, path)
        logger.info(f"Wrote {kind} file {path}")
        return path

    def write_excel(self, records: Sequence[TicketRecord], start: date, end: date) -> Path:
        path = self.output_dir / f"reporte_{_timestamp()}.xlsx"
        write_excel_report(records, start, end, path)
        return self._register(path, "excel")

    def write_txt(self, records: Sequence[TicketRecord]) -> Path:
        return self._write_text(slips_to_text(records_to_slips(records)))

    def write_zip(self, records: Sequence[TicketRecord]) -> Path:
        return self._write_zip(slips_to_zip(records_to_slips(records)))

    def write_parquet(self, records: Sequence[TicketRecord]) -> Path:
        path = ParquetWriter(self.output_dir).write_records(
            records, f"tickets_{_timestamp()}.parquet",
        )
        return self._register(path, "parquet")

    def render(
        self, fmt: str, records: Sequence[TicketRecord], params: GenerationParameters,
    ) -> Path:
        """Write already synthesized records in one of OUTPUT_FORMATS."""
        if fmt == "xlsx":
            return self.write_excel(records, params.start_date, params.end_date)
        if fmt == "txt":
            return self.write_txt(records)
        if fmt == "zip":
            return self.write_zip(records)
        if fmt == "parquet":
            return self.write_parquet(records)
        raise ValueError(f"Unknown output format {fmt!r}, expected one of {OUTPUT_FORMATS}")

    def generate(
        self,
        fmt: str,
        params: GenerationParameters,
        drivers: Sequence[Driver],
        rng: Optional[np.random.Generator] = None,
    ) -> Path:
        """Synthesize and write in one step."""
        records = self.generate_records(params, drivers, rng)
        return self.render(fmt, records, params)

    def convert_excel(self, data: bytes, as_zip: bool = False) -> Path:
        """Convert an existing report workbook into slips (one txt or a zip)."""
        slips = read_slips(data)
        if as_zip:
            return self._write_zip(slips_to_zip(slips))
        return self._write_text(slips_to_text(slips))

    def _write_text(self, text: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"tickets_{_timestamp()}.txt"
        path.write_text(text, encoding="utf-8")
        return self._register(path, "txt")

    def _write_zip(self, payload: bytes) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"tickets_{_timestamp()}.zip"
        path.write_bytes(payload)
        return self._register(path, "zip")
