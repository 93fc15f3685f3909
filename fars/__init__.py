"""
FARS Toolbox — Summaries and maps for yearly FARS accident archives.

FARS (Fatality Analysis Reporting System) is the US nationwide census of
fatal motor-vehicle crashes published by NHTSA.  Each year is distributed
as a compressed CSV archive named ``accident_<year>.csv.bz2``.

This toolbox provides:
    - Loading of one yearly archive into a validated table
    - Month × year accident counts across several archives
    - Per-state scatter maps of accident locations
"""

from fars.core.mapping import fars_map_state
from fars.core.years import fars_read_years, fars_summarize_years
from fars.io.readers import fars_read, make_filename

__version__ = "1.0.0"

__all__ = [
    "fars_read",
    "make_filename",
    "fars_read_years",
    "fars_summarize_years",
    "fars_map_state",
]
