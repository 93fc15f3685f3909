"""
Readers for FARS accident archives.

All file-name, compression and dtype handling is centralised here.
"""

from __future__ import annotations

import errno
import math
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

import pandas as pd

from fars.config.constants import (
    ACCIDENT_SCHEMA,
    ARCHIVE_TEMPLATE,
    CSV_ENCODING,
    COL_LATITUDE,
    COL_LONGITUDE,
    COL_MONTH,
    COL_STATE,
    VALID_MONTHS,
)
from fars.exceptions import SchemaError, TypeConversionError


# ═══════════════════════════════════════════════════════════════════════════════
# Typed view of one accident row
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AccidentRecord:
    """One fatal accident, restricted to the columns the toolbox uses.

    Attributes
    ----------
    month : int or None
        Month of the crash, 1–12.
    state : int or None
        FARS state code.
    longitude, latitude : float or None
        Crash location; ``None`` when missing in the archive.
    """

    month: Optional[int]
    state: Optional[int]
    longitude: Optional[float] = None
    latitude: Optional[float] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Coercion and file names
# ═══════════════════════════════════════════════════════════════════════════════

def coerce_int(value: Any, what: str = "value") -> int:
    """Coerce a numeric-like value to ``int``, truncating toward zero.

    Accepts ints, floats, numpy scalars and numeric strings such as
    ``"2014"`` or ``"2014.0"``.

    Raises
    ------
    TypeConversionError
        If *value* is not numeric, or is NaN / infinite.
    """
    try:
        if isinstance(value, str):
            value = float(value.strip())
        number = float(value)
        if math.isnan(number) or math.isinf(number):
            raise ValueError(f"non-finite {what}")
        return int(number)
    except (TypeError, ValueError, OverflowError) as exc:
        raise TypeConversionError(value, what) from exc


def make_filename(year: Any) -> str:
    """Return the archive name for *year*, e.g. ``accident_2014.csv.bz2``.

    Pure function, no I/O.
    """
    return ARCHIVE_TEMPLATE.format(year=coerce_int(year, "year"))


def resolve_archive(year: Any, data_dir: str | Path | None = None) -> Path:
    """Return the path of the archive for *year* inside *data_dir*.

    With no *data_dir* the bare file name is returned, which resolves
    against the current working directory.
    """
    filename = make_filename(year)
    if data_dir is None:
        return Path(filename)
    return Path(data_dir) / filename


# ═══════════════════════════════════════════════════════════════════════════════
# Loading and validation
# ═══════════════════════════════════════════════════════════════════════════════

def fars_read(path: str | Path) -> pd.DataFrame:
    """Read one FARS accident archive.

    Compression is inferred from the file suffix (``.bz2`` for the yearly
    archives).  Column-type inference warnings from pandas are silenced;
    structural parse errors still propagate.

    Parameters
    ----------
    path : str or Path
        Absolute or relative path to the archive.

    Returns
    -------
    pd.DataFrame
        Every column of the archive in file order, with the required
        columns coerced by :func:`validate_accidents`.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    SchemaError
        If required columns are missing or hold invalid values.
    OSError, pandas.errors.ParserError
        If the archive is corrupt or its rows are malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            errno.ENOENT, f"file '{path}' does not exist", str(path)
        )

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=pd.errors.DtypeWarning)
        df = pd.read_csv(path, compression="infer", low_memory=False)

    return validate_accidents(df)


def validate_accidents(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce the required accident columns to their schema dtypes.

    ``MONTH`` and ``STATE`` become nullable integers, ``LONGITUD`` and
    ``LATITUDE`` nullable floats.  Non-null months must lie in 1–12.
    Columns outside the schema are returned untouched.
    """
    missing = [col for col in ACCIDENT_SCHEMA if col not in df.columns]
    if missing:
        raise SchemaError(f"missing required columns: {', '.join(missing)}")

    df = df.copy()
    for col, dtype in ACCIDENT_SCHEMA.items():
        try:
            df[col] = pd.to_numeric(df[col], errors="raise").astype(dtype)
        except (TypeError, ValueError) as exc:
            raise SchemaError(f"column {col} is not {dtype}: {exc}") from exc

    months = df[COL_MONTH].dropna()
    bad = months[~months.isin(list(VALID_MONTHS))]
    if len(bad) > 0:
        raise SchemaError(
            f"{len(bad)} rows with {COL_MONTH} outside 1–12 "
            f"(e.g. {int(bad.iloc[0])})"
        )

    return df


def iter_records(df: pd.DataFrame) -> Iterator[AccidentRecord]:
    """Yield an :class:`AccidentRecord` for each row of a validated table."""
    for month, state, lon, lat in df[
        [COL_MONTH, COL_STATE, COL_LONGITUDE, COL_LATITUDE]
    ].itertuples(index=False, name=None):
        yield AccidentRecord(
            month=None if pd.isna(month) else int(month),
            state=None if pd.isna(state) else int(state),
            longitude=None if pd.isna(lon) else float(lon),
            latitude=None if pd.isna(lat) else float(lat),
        )


def save_csv(
    df: pd.DataFrame,
    path: str | Path,
    *,
    encoding: str = CSV_ENCODING,
) -> Path:
    """Write a DataFrame to CSV, creating parent directories as needed.

    Returns
    -------
    Path — the written file path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, encoding=encoding)
    return path
