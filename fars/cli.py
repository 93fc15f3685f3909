"""
FARS Toolbox — Command-line interface.

Usage examples::

    # Archive name for a year
    fars filename 2014

    # Month × year accident counts, archives in the working directory
    fars summarize 2013 2014 2015

    # Same, archives elsewhere, zero-filled, with CSV + text reports
    fars summarize 2013 2014 2015 --data-dir ./data --fill-zero --output-dir ./out

    # Map the accidents of state 1 in 2013
    fars map 1 2013 --output alabama_2013.html
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import List, NoReturn, Optional

import pandas as pd
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from fars.config.constants import (
    COL_MONTH,
    MAP_IMAGE_TEMPLATE,
    SUMMARY_CSV_NAME,
    SUMMARY_REPORT_NAME,
)
from fars.exceptions import FarsError, InvalidYearWarning

app = typer.Typer(
    name="fars",
    help="FARS accident archive summaries and state maps",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show debug logging.",
    ),
):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _fail(exc: Exception) -> NoReturn:
    console.print(f"\n[red]✗ {escape(str(exc))}[/red]\n")
    raise typer.Exit(code=1)


# ─────────────────────────────────────────────────────────────────────────────
#  filename
# ─────────────────────────────────────────────────────────────────────────────

@app.command()
def filename(
    year: str = typer.Argument(..., help="Year, e.g. 2014."),
):
    """Print the archive file name for a year."""
    from fars.io.readers import make_filename

    try:
        console.print(make_filename(year))
    except FarsError as exc:
        _fail(exc)


# ─────────────────────────────────────────────────────────────────────────────
#  summarize
# ─────────────────────────────────────────────────────────────────────────────

@app.command()
def summarize(
    years: List[str] = typer.Argument(..., help="Years to summarize."),
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir", "-d",
        help="Directory holding the accident_<year>.csv.bz2 archives.",
        file_okay=False,
    ),
    fill_zero: bool = typer.Option(
        False, "--fill-zero",
        help="Show months without accidents as 0 instead of blank.",
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o",
        help="If set, write the summary CSV and text report here.",
    ),
):
    """Count accidents per month for each year."""
    from fars.core.years import fars_read_years, summarize_results
    from fars.io.readers import save_csv
    from fars.io.reporters import write_text_report

    console.print(f"\n[bold]Loading {len(years)} year(s)…[/bold]")
    with warnings.catch_warnings():
        # skipped years are logged and shown in the status table
        warnings.simplefilter("ignore", InvalidYearWarning)
        results = fars_read_years(years, data_dir=data_dir)
    summary = summarize_results(results, fill_value=0 if fill_zero else None)

    # ── Load status ───────────────────────────────────────────────────────
    status = Table(title="Years")
    status.add_column("Year", style="cyan")
    status.add_column("Status", justify="center")
    status.add_column("Accidents", justify="right")
    status.add_column("File / reason")
    for r in results:
        if r.ok:
            status.add_row(str(r.year), "[green]✓[/green]", f"{len(r.data):,}", r.filename)
        else:
            status.add_row(str(r.year), "[yellow]⚠[/yellow]", "", escape(r.error))
    console.print(status)

    # ── Month × year table ────────────────────────────────────────────────
    year_cols = [c for c in summary.columns if c != COL_MONTH]
    if not year_cols:
        console.print("\n[yellow]⚠ No year could be loaded.[/yellow]\n")
        raise typer.Exit(code=1)

    table = Table(title="Accidents per month")
    table.add_column("Month", style="cyan", justify="right")
    for y in year_cols:
        table.add_column(str(y), justify="right")
    for _, row in summary.iterrows():
        cells = ["" if pd.isna(row[y]) else f"{int(row[y]):,}" for y in year_cols]
        table.add_row(str(int(row[COL_MONTH])), *cells)
    console.print(table)

    if output_dir is not None:
        output_dir = Path(output_dir)
        csv_path = save_csv(summary, output_dir / SUMMARY_CSV_NAME)
        txt_path = write_text_report(results, summary, output_dir / SUMMARY_REPORT_NAME)
        console.print(f"\n  CSV report:  [cyan]{csv_path}[/cyan]")
        console.print(f"  Text report: [cyan]{txt_path}[/cyan]")

    skipped = sum(1 for r in results if not r.ok)
    if skipped == 0:
        console.print("\n[green]✓ All years loaded.[/green]\n")
    else:
        console.print(f"\n[yellow]⚠ {skipped} year(s) skipped.[/yellow]\n")


# ─────────────────────────────────────────────────────────────────────────────
#  map
# ─────────────────────────────────────────────────────────────────────────────

@app.command("map")
def map_state(
    state: str = typer.Argument(..., help="FARS state code, e.g. 1 for Alabama."),
    year: str = typer.Argument(..., help="Year to map."),
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir", "-d",
        help="Directory holding the accident_<year>.csv.bz2 archives.",
        file_okay=False,
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="File to write, .html or an image suffix "
             "(default: fars_map_<state>_<year>.html).",
    ),
):
    """Plot accident locations for one state and year."""
    from fars.core.mapping import PlotlyStatePlotter, fars_map_state
    from fars.io.readers import coerce_int

    try:
        state_code = coerce_int(state, "state")
        year_num = coerce_int(year, "year")
        plotter = PlotlyStatePlotter(
            title=f"FARS accidents: state {state_code}, {year_num}"
        )
        data = fars_map_state(state_code, year_num, plotter=plotter, data_dir=data_dir)
    except (FarsError, OSError, pd.errors.ParserError) as exc:
        _fail(exc)

    if data is None or plotter.point_count == 0:
        console.print("\n[yellow]⚠ Nothing plotted.[/yellow]\n")
        return

    if output is None:
        output = Path(MAP_IMAGE_TEMPLATE.format(state=state_code, year=year_num))
    out_path = plotter.savefig(output)

    console.print(f"\n  Plotted {plotter.point_count:,} of {len(data):,} accidents")
    console.print(f"  Map: [cyan]{out_path}[/cyan]")
    console.print("\n[green]✓ Map complete.[/green]\n")


# ─────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
