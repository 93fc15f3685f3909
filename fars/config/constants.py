"""
Configuration constants for the FARS Toolbox.

All column names, sentinel values and file-name templates used across the
toolbox are centralised here so that upstream schema changes need only one
edit.
"""

# ═══════════════════════════════════════════════════════════════════════════════
# Column names (accident archive)
# ═══════════════════════════════════════════════════════════════════════════════

COL_MONTH = "MONTH"
COL_STATE = "STATE"
COL_LONGITUDE = "LONGITUD"   # NB: truncated spelling is in the original data
COL_LATITUDE = "LATITUDE"

# Added by the year aggregator, not present in the archives
COL_YEAR = "year"

# ═══════════════════════════════════════════════════════════════════════════════
# Required columns and their pandas (nullable) dtypes
# ═══════════════════════════════════════════════════════════════════════════════

ACCIDENT_SCHEMA: dict[str, str] = {
    COL_MONTH: "Int64",
    COL_STATE: "Int64",
    COL_LONGITUDE: "Float64",
    COL_LATITUDE: "Float64",
}

VALID_MONTHS = range(1, 13)

# ═══════════════════════════════════════════════════════════════════════════════
# Sentinel coordinates meaning "not recorded"
# ═══════════════════════════════════════════════════════════════════════════════

# LONGITUD >= 900 (999.9999 = unknown)
LONGITUDE_SENTINEL_MIN = 900.0
# LATITUDE > 90
LATITUDE_MAX = 90.0

# ═══════════════════════════════════════════════════════════════════════════════
# File names
# ═══════════════════════════════════════════════════════════════════════════════

ARCHIVE_TEMPLATE = "accident_{year:d}.csv.bz2"

SUMMARY_CSV_NAME = "fars_monthly_summary.csv"
SUMMARY_REPORT_NAME = "fars_summary_report.txt"
MAP_IMAGE_TEMPLATE = "fars_map_{state}_{year}.html"

# plotly geo scope; US state outlines are drawn as its subunits
BASE_MAP_SCOPE = "north america"

# ═══════════════════════════════════════════════════════════════════════════════
# Messages
# ═══════════════════════════════════════════════════════════════════════════════

NO_ACCIDENTS_MESSAGE = "no accidents to plot"

CSV_ENCODING = "utf-8"
