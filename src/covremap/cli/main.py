"""covremap CLI."""

from pathlib import Path

import click

from covremap.cli.merge import merge_command
from covremap.cli.summary import summary_command
from covremap.config.loader import load_config
from covremap.core.errors import ConfigError
from covremap.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="covremap")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of .covremap/config.yaml",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """covremap - merge coverage from many runs and map it back to original sources."""
    try:
        config = load_config(config_path=config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


cli.add_command(merge_command, name="merge")
cli.add_command(summary_command, name="summary")


if __name__ == "__main__":
    cli()
