"""
Per-state accident maps.

The map path loads one year, keeps the accidents of one state, blanks
out sentinel coordinates and hands the remaining locations to a
:class:`StatePlotter`.  Rendering lives behind that small interface so the
filtering logic can be exercised without a graphics backend;
:class:`PlotlyStatePlotter` is the default implementation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from fars.config.constants import (
    BASE_MAP_SCOPE,
    COL_LATITUDE,
    COL_LONGITUDE,
    COL_STATE,
    LATITUDE_MAX,
    LONGITUDE_SENTINEL_MIN,
    NO_ACCIDENTS_MESSAGE,
)
from fars.exceptions import InvalidStateError
from fars.io.readers import coerce_int, fars_read, iter_records, resolve_archive

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Plotting interface
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MapBounds:
    """Longitude / latitude extent of a map."""

    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    @classmethod
    def from_coordinates(
        cls,
        longitudes: Sequence[float],
        latitudes: Sequence[float],
    ) -> "MapBounds":
        return cls(
            lon_min=float(np.min(longitudes)),
            lon_max=float(np.max(longitudes)),
            lat_min=float(np.min(latitudes)),
            lat_max=float(np.max(latitudes)),
        )


class StatePlotter(Protocol):
    """Anything that can draw a base map and overlay accident points."""

    def draw_base_map(self, bounds: MapBounds) -> None: ...

    def draw_points(
        self,
        longitudes: Sequence[float],
        latitudes: Sequence[float],
    ) -> None: ...


class PlotlyStatePlotter:
    """Render state maps as a plotly geo figure.

    The base map shows country and state (subunit) boundaries from the
    built-in plotly base layers, cropped to the accident extent.
    """

    def __init__(
        self,
        figure: Optional[go.Figure] = None,
        *,
        title: Optional[str] = None,
        pad: float = 0.25,
        color: str = "black",
        marker_size: int = 3,
    ) -> None:
        self.figure = figure if figure is not None else go.Figure()
        self.title = title
        self.pad = pad
        self.color = color
        self.marker_size = marker_size
        self.point_count = 0

    def draw_base_map(self, bounds: MapBounds) -> None:
        self.figure.update_geos(
            scope=BASE_MAP_SCOPE,
            projection_type="mercator",
            showland=True,
            landcolor="white",
            showcountries=True,
            countrycolor="black",
            showsubunits=True,
            subunitcolor="grey",
            showlakes=False,
            lonaxis_range=[bounds.lon_min - self.pad, bounds.lon_max + self.pad],
            lataxis_range=[bounds.lat_min - self.pad, bounds.lat_max + self.pad],
            lonaxis_showgrid=True,
            lataxis_showgrid=True,
        )
        self.figure.update_layout(
            title=self.title,
            showlegend=False,
            margin=dict(l=0, r=0, t=40 if self.title else 10, b=0),
        )

    def draw_points(
        self,
        longitudes: Sequence[float],
        latitudes: Sequence[float],
    ) -> None:
        self.figure.add_trace(go.Scattergeo(
            lon=list(longitudes),
            lat=list(latitudes),
            mode="markers",
            marker=dict(size=self.marker_size, color=self.color),
            hoverinfo="lon+lat",
        ))
        self.point_count += len(longitudes)

    def show(self) -> None:
        self.figure.show()

    def savefig(self, path: str | Path) -> Path:
        """Write the figure to *path* and return it.

        ``.html`` files are self-contained; any other suffix is rendered as
        a static image through kaleido.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() in (".html", ".htm"):
            self.figure.write_html(path, include_plotlyjs=True)
        else:
            self.figure.write_image(path)
        return path


# ═══════════════════════════════════════════════════════════════════════════════
# Filtering and sanitising
# ═══════════════════════════════════════════════════════════════════════════════

def select_state(data: pd.DataFrame, state_num: Any) -> pd.DataFrame:
    """Return the accidents of *state_num*.

    Raises
    ------
    TypeConversionError
        If *state_num* is not integer-like.
    InvalidStateError
        If the state code does not occur in ``data``.
    """
    state_num = coerce_int(state_num, "state")
    states = set(data[COL_STATE].dropna().astype(int))
    if state_num not in states:
        raise InvalidStateError(state_num)
    return data[data[COL_STATE] == state_num].copy()


def sanitize_coordinates(data: pd.DataFrame) -> pd.DataFrame:
    """Replace sentinel coordinates with missing values.

    ``LONGITUD >= 900`` and ``LATITUDE > 90`` mean "not recorded".  Rows
    are kept, only the offending values are blanked.
    """
    data = data.copy()
    lon = data[COL_LONGITUDE]
    lat = data[COL_LATITUDE]
    data[COL_LONGITUDE] = lon.mask((lon >= LONGITUDE_SENTINEL_MIN).fillna(False))
    data[COL_LATITUDE] = lat.mask((lat > LATITUDE_MAX).fillna(False))
    return data


def plot_accidents(
    data: pd.DataFrame,
    plotter: Optional[StatePlotter] = None,
) -> Optional[pd.DataFrame]:
    """Sanitise *data* and draw its accident locations.

    Logs a notice and draws nothing when *data* is empty or no accident
    has a usable location.  Without a *plotter*, a new
    :class:`PlotlyStatePlotter` is drawn and shown.

    Returns
    -------
    pd.DataFrame | None
        The sanitised rows, or ``None`` when there was nothing to plot.
    """
    if len(data) == 0:
        logger.info(NO_ACCIDENTS_MESSAGE)
        return None

    data = sanitize_coordinates(data)
    records = list(iter_records(data))
    lons = [r.longitude for r in records if r.longitude is not None]
    lats = [r.latitude for r in records if r.latitude is not None]
    if not lons or not lats:
        logger.info("%s: no accident has a recorded location", NO_ACCIDENTS_MESSAGE)
        return data

    located = [
        r for r in records if r.longitude is not None and r.latitude is not None
    ]
    show = plotter is None
    if plotter is None:
        plotter = PlotlyStatePlotter()
    plotter.draw_base_map(MapBounds.from_coordinates(lons, lats))
    plotter.draw_points(
        [r.longitude for r in located],
        [r.latitude for r in located],
    )
    logger.debug(
        "Plotted %d of %d accidents (%d without location)",
        len(located), len(records), len(records) - len(located),
    )
    if show:
        plotter.show()
    return data


# ═══════════════════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════════════════

def fars_map_state(
    state_num: Any,
    year: Any,
    *,
    plotter: Optional[StatePlotter] = None,
    data_dir: str | Path | None = None,
) -> Optional[pd.DataFrame]:
    """Map the accidents of one state in one year.

    Parameters
    ----------
    state_num : int-like
        FARS state code.
    year : int-like
        Year whose archive is loaded.
    plotter : StatePlotter, optional
        Drawing target.  Defaults to a new :class:`PlotlyStatePlotter`,
        shown with plotly's default renderer.
    data_dir : str or Path, optional
        Directory holding the archives.  Defaults to the working directory.

    Returns
    -------
    pd.DataFrame | None
        The state's accidents with sentinel coordinates blanked, or
        ``None`` when there were no accidents to plot.

    Raises
    ------
    FileNotFoundError
        If the year's archive does not exist.
    TypeConversionError
        If *year* or *state_num* is not integer-like.
    InvalidStateError
        If the state code does not occur in that year.
    """
    data = fars_read(resolve_archive(year, data_dir))
    subset = select_state(data, state_num)

    return plot_accidents(subset, plotter)
