"""Quarterly CLI - quarter/year task timeline."""

import json
import logging
import sys
from datetime import date

import click

from .config import load_config
from .core.navigation import QuarterNavigator
from .core.period import ViewMode, resolve_period
from .core.validation import validate_task_form
from .render import render_timeline, render_weeks
from .workflows import TimelineBuilder, build_store, timeline_to_dict


def _navigator(config, year, quarter, year_view: bool, step: int, today: date) -> QuarterNavigator:
    """Navigator positioned on the requested view, then moved `step` periods."""
    mode = ViewMode.YEAR if year_view else config.default_view
    nav = QuarterNavigator(year, quarter, mode, today=lambda: today, bounds=config.bounds())
    move = nav.next if step > 0 else nav.previous
    for _ in range(abs(step)):
        if not move():
            click.echo(f"Navigation stopped at {nav.label}: outside configured years.", err=True)
            break
    return nav


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Quarterly - quarter/year task timeline."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--year", type=int, help="Year to show (default: this year)")
@click.option("--quarter", type=click.IntRange(1, 4), help="Quarter to show (default: this quarter)")
@click.option("--year-view", is_flag=True, help="Show the whole year")
@click.option("--step", type=int, default=0, help="Move N periods forward (negative: back)")
@click.option("--sample", is_flag=True, help="Include the demo tasks")
@click.option("--task", "task_specs", multiple=True, metavar="NAME|DD.MM.YYYY|DD.MM.YYYY", help="Add a task")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(year, quarter, year_view: bool, step: int, sample: bool, task_specs, as_json: bool):
    """Show the task timeline for a quarter or year."""
    config = load_config()
    today = date.today()

    try:
        store, rejected = build_store(config, task_specs, include_sample=sample, today=today)
        nav = _navigator(config, year, quarter, year_view, step, today)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for spec, errors in rejected.items():
        click.echo(f"Skipped {spec!r}:", err=True)
        for field, message in errors.items():
            click.echo(f"  {field}: {message}", err=True)

    timeline = TimelineBuilder(store, config).build(nav.view, today)

    if as_json:
        click.echo(json.dumps(timeline_to_dict(timeline), indent=2))
    else:
        click.echo(render_timeline(timeline, width=config.chart_width, today=today))


@main.command()
@click.option("--year", type=int, help="Year (default: this year)")
@click.option("--quarter", type=click.IntRange(1, 4), help="Quarter (default: this quarter)")
@click.option("--year-view", is_flag=True, help="List weeks of the whole year")
def weeks(year, quarter, year_view: bool):
    """List the ISO weeks of a quarter or year."""
    config = load_config()
    today = date.today()
    try:
        nav = _navigator(config, year, quarter, year_view, 0, today)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    period = resolve_period(nav.view, today)
    click.echo(f"### {period.label}")
    click.echo(render_weeks(period))


@main.command()
@click.argument("name")
@click.argument("start")
@click.argument("end")
def validate(name: str, start: str, end: str):
    """Check a task's name and DD.MM.YYYY dates."""
    config = load_config()
    errors = validate_task_form(name, start, end, date.today(), window=config.validation_window())
    if not errors:
        click.echo("OK")
        return

    for field, message in errors.items():
        click.echo(f"{field}: {message}", err=True)
    sys.exit(1)
