"""
Report writers for FARS monthly summaries.

Supports two output formats:
  - **Plain text** — which years loaded, which were skipped, and the
                     month × year table.
  - **CSV**        — the month × year table itself (see
                     :func:`fars.io.readers.save_csv`).
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd

from fars.config.constants import COL_MONTH
from fars.core.years import YearResult


def write_text_report(
    results: list[YearResult],
    summary: pd.DataFrame,
    path: str | Path,
    *,
    title: str = "FARS Monthly Accident Summary",
) -> Path:
    """Write a human-readable plain-text report.

    Parameters
    ----------
    results : list[YearResult]
        Per-year load outcomes, in the order the years were requested.
    summary : pd.DataFrame
        Month × year table from :func:`fars.core.years.summarize_results`.
    path : str or Path
        Output file path.
    title : str
        Report title.

    Returns
    -------
    Path — the written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as fh:
        # Header
        fh.write("=" * 80 + "\n")
        fh.write(f"{title}\n")
        fh.write(f"Generated: {datetime.now():%Y-%m-%d %H:%M:%S}\n")
        fh.write("=" * 80 + "\n\n")

        # Per-year load status
        fh.write("-" * 80 + "\n")
        fh.write(f"{'Year':<8} {'Status':<10} {'Accidents':>10}  {'File / reason'}\n")
        fh.write("-" * 80 + "\n")
        for r in results:
            if r.ok:
                fh.write(f"{r.year!s:<8} ✓ {'loaded':<8} {len(r.data):>10,}  {r.filename}\n")
            else:
                fh.write(f"{r.year!s:<8} ✗ {'skipped':<8} {'':>10}  {r.error}\n")
        fh.write("-" * 80 + "\n\n")

        _write_table(fh, summary)

        fh.write("=" * 80 + "\n")
        fh.write("End of Report\n")
        fh.write("=" * 80 + "\n")

    return path


def _write_table(fh, summary: pd.DataFrame) -> None:
    """Write the month × year table with right-aligned counts."""
    years = [c for c in summary.columns if c != COL_MONTH]
    if not years:
        fh.write("No accidents loaded.\n\n")
        return

    fh.write(f"{'Month':<8}" + "".join(f"{y!s:>10}" for y in years) + "\n")
    for _, row in summary.iterrows():
        cells = []
        for y in years:
            value = row[y]
            cells.append(f"{'-':>10}" if pd.isna(value) else f"{int(value):>10,}")
        fh.write(f"{int(row[COL_MONTH]):<8}" + "".join(cells) + "\n")
    fh.write("\n")
