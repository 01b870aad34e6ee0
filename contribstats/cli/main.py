"""
contribstats CLI - per-category contribution metrics from the command line

Usage:
    contribstats metrics <file> [options]   # raw contributions, grouped here
    contribstats rows <file> [options]      # rows already grouped per category
"""

import sys
import time
from typing import Any, Dict, List, Optional

import click

from contribstats import __version__
from contribstats.cli.formatters import FORMATTERS, get_formatter
from contribstats.core.aggregator import InvalidRowError, aggregate
from contribstats.core.service import ContributionService
from contribstats.core.types import MetricKind, NullHandling
from contribstats.readers.loader import load_contributions, load_records
from contribstats.sources.memory import InMemoryContributionSource

METRIC_CHOICES = ["max", "avg", "total", "count", "all"]


def _selected_metrics(metric: str) -> List[MetricKind]:
    if metric == "all":
        return list(MetricKind)
    return [MetricKind.from_name(metric)]


def build_result_rows(results: Dict[MetricKind, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Merge per-metric mappings into one row per category

    Args:
        results: Mapping from metric to its {category: value} result

    Returns:
        Rows sorted by category, each with a column per metric; a category
        missing from one metric's result gets None there
    """
    categories = sorted({category for values in results.values() for category in values})
    rows = []
    for category in categories:
        row: Dict[str, Any] = {"category": category}
        for metric, values in results.items():
            row[metric.value_field] = values.get(category)
        rows.append(row)
    return rows


def _create_service(source_file: str, backend: str) -> ContributionService:
    contributions = load_contributions(source_file)

    if backend == "pandas":
        from contribstats.sources.pandas_source import DataFrameRowSource

        return ContributionService(DataFrameRowSource.from_contributions(contributions))

    return ContributionService(InMemoryContributionSource(contributions))


def _render(
    rows: List[Dict[str, Any]],
    metrics: List[MetricKind],
    fmt: str,
    output: Optional[str],
    no_color: bool,
    elapsed: Optional[float],
) -> None:
    # Infer format from the output extension when -f was left at its default
    output_format = fmt
    if output and fmt == "table":
        if output.endswith(".json"):
            output_format = "json"
        elif output.endswith(".csv"):
            output_format = "csv"

    formatter = get_formatter(output_format)
    options: Dict[str, Any] = {
        "no_color": no_color or bool(output) or not sys.stdout.isatty(),
        "show_footer": not output,
    }
    if len(metrics) == 1:
        options["value_field"] = metrics[0].value_field
        options["title"] = f"{metrics[0]} per category"

    output_text = formatter.format(rows, **options)

    if elapsed is not None:
        output_text += f"\nProcessed {len(rows)} categories in {elapsed:.3f}s"

    if output:
        with open(output, "w") as f:
            f.write(output_text)
        click.echo(f"Results written to {output} ({output_format} format)", err=True)
    else:
        click.echo(output_text)


def _common_options(func):
    """Options shared by every metrics command"""
    options = [
        click.option(
            "--metric",
            "-m",
            type=click.Choice(METRIC_CHOICES, case_sensitive=False),
            default="all",
            help="Metric to compute (default: all)",
        ),
        click.option(
            "--strict",
            is_flag=True,
            help="Fail on the first row with a null or non-numeric field instead of skipping it",
        ),
        click.option(
            "--format",
            "-f",
            "fmt",
            type=click.Choice(list(FORMATTERS), case_sensitive=False),
            default="table",
            help="Output format (default: table)",
        ),
        click.option(
            "--output",
            "-o",
            type=click.Path(),
            default=None,
            help="Write output to file instead of stdout",
        ),
        click.option("--no-color", is_flag=True, help="Disable colored output"),
        click.option("--time", "-t", "show_time", is_flag=True, help="Show execution time"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="contribstats")
def cli():
    """
    contribstats - per-category contribution metrics

    Computes maximum, average, total and count per category, skipping or
    rejecting malformed rows.
    """


@cli.command()
@click.argument("file", type=str)
@_common_options
@click.option(
    "--backend",
    "-b",
    type=click.Choice(["python", "pandas"], case_sensitive=False),
    default="python",
    help="Grouping backend (default: python)",
)
def metrics(
    file: str,
    metric: str,
    strict: bool,
    fmt: str,
    output: Optional[str],
    no_color: bool,
    show_time: bool,
    backend: str,
):
    """
    Group raw contributions in FILE by category and compute metrics

    FILE is a CSV, JSON or JSONL file with one contribution per record
    (fields: team_name, category, value).

    Examples:

        \b
        # All four metrics as a table
        $ contribstats metrics contributions.csv

        \b
        # Maximum per category as JSON, failing on bad rows
        $ contribstats metrics contributions.jsonl -m max --strict -f json

        \b
        # Group with pandas and save as CSV
        $ contribstats metrics contributions.csv -b pandas -o metrics.csv
    """
    handling = NullHandling.THROW_ON_NULL if strict else NullHandling.SKIP_NULLS
    try:
        start_time = time.time()
        service = _create_service(file, backend.lower())
        selected = _selected_metrics(metric.lower())
        results = {m: service.get_metric(m, handling) for m in selected}
        elapsed = time.time() - start_time if show_time else None
        _render(build_result_rows(results), selected, fmt.lower(), output, no_color, elapsed)

    except FileNotFoundError as e:
        click.echo(f"Error: File not found - {e}", err=True)
        sys.exit(1)
    except (InvalidRowError, ValueError, ImportError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("file", type=str)
@_common_options
def rows(
    file: str,
    metric: str,
    strict: bool,
    fmt: str,
    output: Optional[str],
    no_color: bool,
    show_time: bool,
):
    """
    Collect metrics from rows in FILE that are already grouped by category

    Each record carries a category and the metric's value field
    (maxValue, avgValue, totalValue, countValue). When a category repeats,
    the last row wins.

    Examples:

        \b
        $ contribstats rows grouped.json -m avg
        $ contribstats rows grouped.csv -m max --strict -f csv
    """
    handling = NullHandling.THROW_ON_NULL if strict else NullHandling.SKIP_NULLS
    try:
        start_time = time.time()
        records = load_records(file)
        selected = _selected_metrics(metric.lower())
        results = {m: aggregate(records, m, handling) for m in selected}
        elapsed = time.time() - start_time if show_time else None
        _render(build_result_rows(results), selected, fmt.lower(), output, no_color, elapsed)

    except FileNotFoundError as e:
        click.echo(f"Error: File not found - {e}", err=True)
        sys.exit(1)
    except (InvalidRowError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
