"""Defaults, report layout and slip template constants."""

# =============================================================================
# Ticket numbering defaults
# =============================================================================

# Increment between two consecutive tickets (base ± range)
DEFAULT_SPACING_BASE = 8
DEFAULT_SPACING_RANGE = 2

# Tickets the scale issues in one full day (base ± range)
DEFAULT_DAILY_COUNT_BASE = 80
DEFAULT_DAILY_COUNT_RANGE = 10

# Python weekday() index
SUNDAY = 6

# Upper bound on records produced by one request
MAX_RECORDS_PER_REQUEST = 50_000

# Largest value accepted for any numeric request field (tons, price, counts)
MAX_NUMERIC_INPUT = 1e9

# =============================================================================
# Company defaults
# =============================================================================

DEFAULT_COMPANY = {
    "title": "GRUPO VerdeMex",
    "reportTitle": "REPORTE MENSUAL",
    "certifiedScale": "U202303Z0003992",
    "pricePerTon": 520.33,
}

DEFAULT_SKIP_SUNDAYS = True

# =============================================================================
# Rounding
# =============================================================================

MASS_DECIMALS = 2
CURRENCY_DECIMALS = 2
KG_PER_TON = 1000

# =============================================================================
# Spreadsheet report layout
# =============================================================================

REPORT_SHEET_NAME = "Reporte"
REPORT_TITLE_PREFIX = "CONTROL DE RESIDUOS"

REPORT_HEADERS = [
    "FECHA PESADA",
    "CHOFER",
    "PLACAS",
    "HORARIO",
    "TICKET",
    "BASCULA CERTIFICADA",
    "PESO PRODUCTO (TON)",
    "TARA (KG)",
    "KG NETO",
    "KG BRUTO",
    "PRECIO POR TON",
    "TOTAL",
]

COLUMN_WIDTHS = [14, 18, 12, 10, 10, 20, 18, 12, 12, 12, 14, 14]

# Title row 1, blank row 2, headers row 3
TITLE_ROW = 1
HEADER_ROW = 3
FIRST_DATA_ROW = 4

# 1-based column indexes -> number format
MASS_FORMAT = "0.00"
CURRENCY_FORMAT = '"$"#,##0.00'
MASS_COLUMNS = (7, 8, 9, 10)
CURRENCY_COLUMNS = (11, 12)

# Columns the slip converter needs from an uploaded report
REQUIRED_SLIP_COLUMNS = [
    "FECHA PESADA",
    "CHOFER",
    "PLACAS",
    "TICKET",
    "TARA (KG)",
    "KG NETO",
    "KG BRUTO",
]

HEADER_SEARCH_ROWS = 20

# =============================================================================
# Text slip template
# =============================================================================

SLIP_HEADER = {
    "title": "BASCULA PUBLICA COYULA",
    "address": "PERIFERICO ORIENTE 7390",
    "city": "COYULA, JALISCO",
    "contact": "CP:45400 Tels:3319853306",
    "rfc": "RFC:",
    "branch": "COYULA",
    "issued_in": "JALISCO",
    "company": "VERDEMEX",
    "load": "BASURA ORG",
    "thanks": "Gracias por su compra",
}

SLIP_SEPARATOR = "-" * 40
SLIP_MISSING_PLATES = "SINPLACAS"

# =============================================================================
# Registry / output
# =============================================================================

FILE_KINDS = ("excel", "txt", "zip", "parquet")

DATA_DIR_ENV = "WEIGHTICKET_DATA_DIR"
DEFAULT_DATA_DIR = "data"
CONFIG_FILENAME = "config.json"
REGISTRY_FILENAME = "files.db"
OUTPUT_SUBDIR = "output"
