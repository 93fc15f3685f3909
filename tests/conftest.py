"""Shared fixtures: small bz2 accident archives written with pandas."""

from __future__ import annotations

import bz2
from pathlib import Path

import pandas as pd
import pytest


def make_accidents(year: int, months=range(1, 13)) -> pd.DataFrame:
    """Build ``month + (year - 2013)`` accidents for each month.

    Even-numbered accidents within a month are in state 1, odd ones in
    state 2.  In state 1, the January case has an unknown longitude and the
    February case an unknown latitude.
    """
    rows = []
    case = 10000
    for month in months:
        for i in range(month + (year - 2013)):
            case += 1
            rows.append({
                "STATE": 1 if i % 2 == 0 else 2,
                "ST_CASE": case,
                "MONTH": month,
                "DAY": 1 + i % 28,
                "LATITUDE": 32.0 + month * 0.1 + i * 0.01,
                "LONGITUD": -87.0 + month * 0.1 + i * 0.01,
                "FATALS": 1,
            })
    df = pd.DataFrame(rows)
    first_jan = df.index[(df["MONTH"] == 1) & (df["STATE"] == 1)]
    first_feb = df.index[(df["MONTH"] == 2) & (df["STATE"] == 1)]
    if len(first_jan):
        df.loc[first_jan[0], "LONGITUD"] = 999.9999
    if len(first_feb):
        df.loc[first_feb[0], "LATITUDE"] = 99.9999
    return df


def write_archive(directory: Path, year: int, df: pd.DataFrame) -> Path:
    path = Path(directory) / f"accident_{year}.csv.bz2"
    df.to_csv(path, index=False, compression="bz2")
    return path


def write_corrupt_archive(directory: Path, year: int) -> Path:
    """An archive whose bytes are not a bz2 stream."""
    path = Path(directory) / f"accident_{year}.csv.bz2"
    path.write_bytes(b"not bz2 data")
    return path


def write_malformed_archive(directory: Path, year: int) -> Path:
    """A valid bz2 stream holding a CSV with ragged rows."""
    path = Path(directory) / f"accident_{year}.csv.bz2"
    text = "STATE,MONTH,LATITUDE,LONGITUD\n1,1,32.1,-86.5\n1,2,32.2,-86.6,7,8,9\n"
    path.write_bytes(bz2.compress(text.encode("utf-8")))
    return path


@pytest.fixture
def archive_dir(tmp_path: Path) -> Path:
    """Directory with archives for 2013, 2014 and 2015."""
    for year in (2013, 2014, 2015):
        write_archive(tmp_path, year, make_accidents(year))
    return tmp_path


@pytest.fixture
def in_archive_dir(archive_dir: Path, monkeypatch) -> Path:
    """Run the test from inside ``archive_dir``."""
    monkeypatch.chdir(archive_dir)
    return archive_dir
