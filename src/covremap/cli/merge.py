"""covremap merge command - combine coverage objects into one document."""

import json
from pathlib import Path

import click

from covremap.collector import Collector
from covremap.compiler.babel import BabelCompiler
from covremap.compiler.base import CompileOptions
from covremap.compiler.cache import CompilerCache
from covremap.compiler.registry import SourceMapRegistry
from covremap.config.loader import load_config
from covremap.config.models import CovRemapConfig
from covremap.core.errors import CovRemapError
from covremap.core.logging import get_logger, set_run_id
from covremap.coverage.io import dump_coverage, load_coverage
from covremap.store import STORE_KINDS, create_store

log = get_logger(__name__)


def _config_from(ctx: click.Context) -> CovRemapConfig:
    if ctx.obj and "config" in ctx.obj:
        config: CovRemapConfig = ctx.obj["config"]
        return config
    return load_config()


def _register_map(registry: SourceMapRegistry, spec: str) -> None:
    source, sep, map_file = spec.rpartition("=")
    if not sep or not source or not map_file:
        raise click.BadParameter(f"expected SOURCE=MAP, got {spec!r}", param_hint="--map")
    try:
        with Path(map_file).open(encoding="utf-8") as f:
            source_map = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Cannot read source map {map_file}: {e}") from e
    registry.register(source, source_map)


@click.command()
@click.argument(
    "coverage_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write merged coverage here instead of stdout",
)
@click.option(
    "--map",
    "maps",
    multiple=True,
    metavar="SOURCE=MAP",
    help="Register a source map file for SOURCE (as keyed in the coverage data)",
)
@click.option(
    "--compile",
    "compile_sources",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Compile SOURCE with Babel and register the resulting source map",
)
@click.option(
    "--store",
    type=click.Choice(STORE_KINDS),
    default=None,
    help="Store backend (default from config)",
)
@click.pass_context
def merge_command(
    ctx: click.Context,
    coverage_files: tuple[Path, ...],
    output: Path | None,
    maps: tuple[str, ...],
    compile_sources: tuple[Path, ...],
    store: str | None,
) -> None:
    """Merge COVERAGE_FILES (coverage-final.json documents) into one.

    Records of files with a registered source map are rewritten to original
    source coordinates.
    """
    config = _config_from(ctx)
    set_run_id()

    registry = SourceMapRegistry()
    for spec in maps:
        _register_map(registry, spec)

    try:
        if compile_sources:
            cache = CompilerCache(
                BabelCompiler.from_config(config.compiler),
                registry=registry,
                options=CompileOptions.from_config(config.compiler),
            )
            for source in compile_sources:
                cache.transform(source)

        backend = create_store(store or config.collector.store, tmp_dir=config.collector.tmp_dir)
        with Collector(backend, registry=registry) as collector:
            for coverage_file in coverage_files:
                collector.add(load_coverage(coverage_file), test_name=str(coverage_file))
            final = collector.get_final_coverage()
    except CovRemapError as e:
        log.error("merge_failed", error=e.error_name, details=e.details)
        raise click.ClickException(str(e)) from e

    text = dump_coverage(final, output)
    if output is None:
        click.echo(text)
    click.echo(
        f"Merged {len(coverage_files)} coverage file(s) covering {len(final)} source file(s)",
        err=True,
    )
