"""
Multi-year loading and monthly summaries.

This module handles:
  1. Loading several yearly archives, one :class:`YearResult` per year.
  2. Pivoting the loaded years into a month × year accident count table.

A year whose archive is missing or unreadable never aborts the batch: it
is reported through an :class:`~fars.exceptions.InvalidYearWarning` and
contributes nothing to the summary.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from numbers import Number
from pathlib import Path
from typing import Any, Iterable, Optional

import pandas as pd

from fars.config.constants import COL_MONTH, COL_YEAR
from fars.exceptions import InvalidYearWarning
from fars.io.readers import coerce_int, fars_read, make_filename, resolve_archive

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Per-year result container
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class YearResult:
    """Outcome of loading a single year.

    Attributes
    ----------
    year : int or Any
        The coerced year, or the raw input when it could not be coerced.
    filename : str | None
        Archive name derived from the year (``None`` if coercion failed).
    data : pd.DataFrame | None
        ``MONTH`` and ``year`` columns for every accident of the year, or
        ``None`` when loading failed.
    error : str | None
        Reason the year was skipped.
    """

    year: Any
    filename: Optional[str] = None
    data: Optional[pd.DataFrame] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def _as_year_list(years: Any) -> list[Any]:
    """Treat a scalar year as a one-element sequence."""
    if isinstance(years, (str, Number)):
        return [years]
    return list(years)


# ═══════════════════════════════════════════════════════════════════════════════
# Loading
# ═══════════════════════════════════════════════════════════════════════════════

def _load_year(year: Any, data_dir: str | Path | None) -> YearResult:
    filename = None
    try:
        year = coerce_int(year, "year")
        filename = make_filename(year)
        df = fars_read(resolve_archive(year, data_dir))
    except Exception as exc:  # any failure only invalidates this year
        return YearResult(year=year, filename=filename, error=str(exc))

    data = df.assign(**{COL_YEAR: year})[[COL_MONTH, COL_YEAR]]
    logger.debug("Loaded %d accidents for %s", len(data), year)
    return YearResult(year=year, filename=filename, data=data)


def fars_read_years(
    years: Iterable[Any] | Any,
    *,
    data_dir: str | Path | None = None,
) -> list[YearResult]:
    """Load the archive of each year in *years*.

    Parameters
    ----------
    years : iterable of int-like, or a single int-like
        Years to load, e.g. ``range(2013, 2016)``.
    data_dir : str or Path, optional
        Directory holding the archives.  Defaults to the working directory.

    Returns
    -------
    list[YearResult]
        One entry per input year, in input order.  Failed years have
        ``data=None``; each one also emits an ``InvalidYearWarning``.
    """
    results = []
    for year in _as_year_list(years):
        result = _load_year(year, data_dir)
        if not result.ok:
            logger.warning("Skipping year %s: %s", result.year, result.error)
            warnings.warn(
                f"invalid year: {result.year}",
                InvalidYearWarning,
                stacklevel=2,
            )
        results.append(result)
    return results


# ═══════════════════════════════════════════════════════════════════════════════
# Summaries
# ═══════════════════════════════════════════════════════════════════════════════

def summarize_results(
    results: list[YearResult],
    *,
    fill_value: Optional[int] = None,
) -> pd.DataFrame:
    """Pivot loaded years into a month × year count table.

    Parameters
    ----------
    results : list[YearResult]
        Output of :func:`fars_read_years`.  Failed years are ignored.
    fill_value : int, optional
        Value for (month, year) pairs with no accidents.  By default such
        cells are left missing (NaN).

    Returns
    -------
    pd.DataFrame
        A ``MONTH`` column (ascending) followed by one column per year.
        Empty, with only ``MONTH``, when no year loaded.
    """
    frames = [r.data for r in results if r.ok]
    if not frames:
        return pd.DataFrame({COL_MONTH: pd.Series(dtype="Int64")})

    combined = pd.concat(frames, ignore_index=True)
    counts = (
        combined
        .groupby([COL_YEAR, COL_MONTH])
        .size()
        .reset_index(name="n")
    )
    table = counts.pivot(index=COL_MONTH, columns=COL_YEAR, values="n")

    if fill_value is not None:
        table = table.fillna(fill_value).astype("int64")

    table = table.reset_index()
    table.columns.name = None
    return table


def fars_summarize_years(
    years: Iterable[Any] | Any,
    *,
    data_dir: str | Path | None = None,
    fill_value: Optional[int] = None,
) -> pd.DataFrame:
    """Count accidents per month for each of *years*.

    Convenience wrapper: :func:`fars_read_years` followed by
    :func:`summarize_results`.
    """
    results = fars_read_years(years, data_dir=data_dir)
    return summarize_results(results, fill_value=fill_value)
