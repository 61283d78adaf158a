"""covremap summary command - coverage totals per file."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from covremap.core.errors import CovRemapError
from covremap.coverage.io import load_coverage
from covremap.coverage.models import CoverageSummary, CoverageTotals
from covremap.coverage.summary import merge_summaries, summarize_file_coverage

_METRICS = ("statements", "branches", "functions", "lines")


def _cell(totals: CoverageTotals) -> str:
    return f"{totals.pct:.2f}% ({totals.covered}/{totals.total})"


def _build_table(per_file: dict[str, CoverageSummary], total: CoverageSummary) -> Table:
    table = Table(show_header=True, box=None, padding=(0, 1), pad_edge=False)
    table.add_column("File", style="cyan")
    for metric in _METRICS:
        table.add_column(metric.capitalize(), justify="right")

    for path, summary in per_file.items():
        table.add_row(path, *(_cell(getattr(summary, m)) for m in _METRICS))
    table.add_row("[bold]All files[/bold]", *(_cell(getattr(total, m)) for m in _METRICS))
    return table


@click.command()
@click.argument("coverage_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def summary_command(coverage_file: Path, as_json: bool) -> None:
    """Show coverage totals for COVERAGE_FILE."""
    try:
        coverage = load_coverage(coverage_file)
    except CovRemapError as e:
        raise click.ClickException(str(e)) from e

    per_file = {path: summarize_file_coverage(fc) for path, fc in sorted(coverage.items())}
    total = merge_summaries(per_file.values())

    if as_json:
        click.echo(
            json.dumps(
                {
                    "total": total.to_dict(),
                    "files": {path: s.to_dict() for path, s in per_file.items()},
                },
                indent=2,
            )
        )
        return

    Console().print(_build_table(per_file, total))
