"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import List, NoReturn, Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.timetable_document import ColumnDocument, TimetableDocumentLoader
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import TimetableError
from ..domain.hourly_range import HourlyRange
from ..domain.length_options import LengthOptions
from ..domain.time_codec import format_time
from ..services.timetable_layout import TimetableLayoutService

app = typer.Typer(
    name="fairtimetable",
    help="Inspect timetable ranges, slots and columns",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)

ONE_MINUTE = 1 / 60


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Time-range arithmetic for event timetables.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_or_default(config_path)


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


def _hours(value: float) -> str:
    return f"{value:g} h"


@app.command("range")
def show_range(
    start: Annotated[str, typer.Argument(help="Start time (HH:mm)")],
    end: Annotated[str, typer.Argument(help="End time (HH:mm)")],
):
    """
    Show duration and details of a time range.

    Examples:

        fairtimetable range 11:30 12:30

        fairtimetable range 23:00 01:00
    """
    try:
        time_range = HourlyRange(start_time=start, end_time=end)
    except (TimetableError, ValueError) as e:
        _fail(e)

    info = time_range.get_debug_info()
    crosses_midnight = time_range.end_hour < time_range.start_hour

    console.print(Panel.fit(
        f"[bold]Range:[/bold] {info['time_range']}\n"
        f"[bold]Start hour:[/bold] {info['start_hour']:g}\n"
        f"[bold]End hour:[/bold] {info['end_hour']:g}\n"
        f"[bold]Duration:[/bold] {_hours(info['duration'])} "
        f"({LengthOptions.format_length_label(info['duration'])})"
        + ("\n[yellow]Ends on the following day[/yellow]" if crosses_midnight else ""),
        title="Hourly range"
    ))


@app.command("end-time")
def end_time(
    start: Annotated[str, typer.Argument(help="Start time (HH:mm)")],
    duration: Annotated[float, typer.Argument(help="Duration in decimal hours")],
):
    """
    Calculate the end time for a start time and a duration.
    """
    console.print(HourlyRange.calculate_end_time(start, duration))


@app.command()
def lengths(
    selected: Annotated[Optional[float], typer.Option("--selected", "-s", help="Currently selected length in hours")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
):
    """
    List the timetable length options.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    options = LengthOptions(config.defaults.length_values)
    options.set_value(selected)

    table = Table(title="Length options", show_header=True, header_style="bold cyan")
    table.add_column("Hours", justify="right")
    table.add_column("Label", style="bold yellow")

    for option in options.get_length_options():
        marker = " *" if selected is not None and abs(option["value"] - selected) < 0.01 else ""
        table.add_row(f"{option['value']:g}", f"{option['label']}{marker}")

    console.print(table)


def _column_table(column_document: ColumnDocument, layout: TimetableLayoutService) -> Table:
    column = column_document.column
    titles = {id(slot): title for title, slot in column_document.titled_slots()}

    table = Table(
        title=f"{column_document.title} ({column.get_time_range_string()})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Slot", style="bold yellow")
    table.add_column("Time")
    table.add_column("Duration", justify="right")
    table.add_column("Offset", justify="right")
    table.add_column("Top", justify="right", style="dim")
    table.add_column("Height", justify="right", style="dim")
    table.add_column("Conflicts", style="red")

    for placement in layout.layout_column(column):
        slot = placement.slot
        conflicts = column.get_conflicting_slots(slot)
        table.add_row(
            titles.get(id(slot)) or "-",
            slot.get_time_range_string(),
            _hours(slot.get_duration()),
            _hours(placement.offset_hours),
            f"{placement.top_em:g}em",
            f"{placement.height_em:g}em",
            ", ".join(other.get_time_range_string() for other in conflicts),
        )

    return table


@app.command()
def show(
    timetable_file: Annotated[Path, typer.Argument(help="Timetable file (.yaml, .yml or .json)")],
    hour_height: Annotated[Optional[float], typer.Option("--hour-height", help="Height of one hour in em")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
):
    """
    Render a timetable file with slot offsets, placement and conflicts.
    """
    try:
        config = _load_config(config_file)
        loader = TimetableDocumentLoader(
            default_start_time=config.defaults.start_time,
            default_end_time=config.defaults.end_time,
        )
        document = loader.load(timetable_file)
        layout = TimetableLayoutService(
            hour_height=hour_height or document.hour_height or config.defaults.hour_height
        )
    except (FileNotFoundError, TimetableError, ValueError) as e:
        _fail(e)

    header = document.title or timetable_file.name
    console.print(f"\n[bold cyan]{header}[/bold cyan] {document.start_time}—{document.end_time}\n")

    if not document.columns:
        console.print("[yellow]No columns defined.[/yellow]")
        return

    for column_document in document.columns:
        column = column_document.column
        console.print(_column_table(column_document, layout))

        first_available = format_time(column.get_start_hour() + column.get_used_hours())
        if column.has_space_for_new_slot(config.defaults.min_free_hours):
            next_start, next_end = column.get_next_slot_range(config.defaults.slot_length)
            console.print(
                f"  Free from [bold]{first_available}[/bold], next slot: {next_start}—{next_end} "
                f"(column height {layout.column_height(column):g}em)\n"
            )
        else:
            console.print(
                f"  [yellow]Column is full[/yellow] from {first_available} "
                f"(column height {layout.column_height(column):g}em)\n"
            )


@app.command()
def now(
    timetable_file: Annotated[Path, typer.Argument(help="Timetable file (.yaml, .yml or .json)")],
    at: Annotated[Optional[str], typer.Option("--at", help="Time to check (HH:mm) instead of the current time")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
):
    """
    Show which slots are running now (or at --at).
    """
    try:
        config = _load_config(config_file)
        moment = at or pendulum.now(config.timezone).format("HH:mm")
        window = HourlyRange(
            start_time=moment,
            end_time=HourlyRange.calculate_end_time(moment, ONE_MINUTE),
        )
        document = TimetableDocumentLoader(
            default_start_time=config.defaults.start_time,
            default_end_time=config.defaults.end_time,
        ).load(timetable_file)
    except (FileNotFoundError, TimetableError, ValueError) as e:
        _fail(e)

    running: List[str] = []
    for column_document in document.columns:
        for title, slot in column_document.titled_slots():
            if slot.overlaps_with(window):
                label = title or slot.get_time_range_string()
                running.append(f"{column_document.title}: {label} ({slot.get_time_range_string()})")

    logger.debug("Checked %s against %d column(s)", moment, len(document.columns))

    if not running:
        console.print(f"[yellow]Nothing running at {moment}.[/yellow]")
        return

    console.print(f"[bold green]Running at {moment}:[/bold green]")
    for line in running:
        console.print(f"  {line}")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]fairtimetable[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
