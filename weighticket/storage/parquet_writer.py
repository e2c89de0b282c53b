"""Write ticket records to Parquet."""

from dataclasses import asdict
from pathlib import Path
from typing import Sequence

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from weighticket.config.schema import TicketRecord
from weighticket.storage.schema_definition import PARQUET_SCHEMA, RECORD_COLUMNS


def records_to_frame(records: Sequence[TicketRecord]) -> pd.DataFrame:
    """DataFrame with one row per record, columns in RECORD_COLUMNS order."""
    df = pd.DataFrame([asdict(r) for r in records], columns=RECORD_COLUMNS)
    return df[RECORD_COLUMNS]


class ParquetWriter:
    """Writes ticket sequences to Parquet files."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def write_records(self, records: Sequence[TicketRecord], filename: str) -> Path:
        """Write one Parquet file and return its path."""
        df = records_to_frame(records)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / filename

        table = pa.Table.from_pandas(df, schema=PARQUET_SCHEMA, preserve_index=False)
        pq.write_table(table, output_path, compression="snappy")

        return output_path
