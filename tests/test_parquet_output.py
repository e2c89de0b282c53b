"""Tests for Parquet export."""

from datetime import date

import pyarrow.parquet as pq

from weighticket.storage.parquet_writer import ParquetWriter, records_to_frame
from weighticket.storage.schema_definition import PARQUET_SCHEMA, RECORD_COLUMNS
from weighticket.tickets.synthesizer import synthesize


class TestParquetWriter:
    def test_write_and_read_back(self, tmp_path, two_week_params, varied_driver, rng):
        records = synthesize(two_week_params, [varied_driver], rng)
        path = ParquetWriter(tmp_path).write_records(records, "tickets.parquet")

        assert path.exists()
        table = pq.read_table(path)
        assert table.schema.equals(PARQUET_SCHEMA)
        assert table.num_rows == len(records)

        df = table.to_pandas()
        assert list(df.columns) == RECORD_COLUMNS
        assert df["ticket_number"].tolist() == [r.ticket_number for r in records]
        assert df["ticket_date"].iloc[0] == date(2025, 3, 3)

    def test_frame_columns(self, fixed_params, fixed_driver, rng):
        df = records_to_frame(synthesize(fixed_params, [fixed_driver], rng))
        assert list(df.columns) == RECORD_COLUMNS
        assert df["gross_kg"].tolist() == [12000.0] * 4
