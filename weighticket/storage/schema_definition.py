"""PyArrow schema for ticket record Parquet exports."""

import pyarrow as pa

RECORD_COLUMNS = [
    "ticket_date",
    "driver_name",
    "plates",
    "slot",
    "ticket_number",
    "certified_scale",
    "gross_ton",
    "tare_kg",
    "net_kg",
    "gross_kg",
    "unit_price",
    "total",
]


def build_parquet_schema() -> pa.Schema:
    """One row per ticket: 6 identity columns, 6 float64 figures."""
    fields = [
        pa.field("ticket_date", pa.date32()),
        pa.field("driver_name", pa.string()),
        pa.field("plates", pa.string()),
        pa.field("slot", pa.string()),
        pa.field("ticket_number", pa.int64()),
        pa.field("certified_scale", pa.string()),
    ]

    # Masses and money keep full double precision (already rounded to 2 places)
    for col in RECORD_COLUMNS[6:]:
        fields.append(pa.field(col, pa.float64()))

    return pa.schema(fields)


PARQUET_SCHEMA = build_parquet_schema()
