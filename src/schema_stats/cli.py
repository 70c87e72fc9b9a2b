"""CLI entry point for schema-stats."""

import json
import logging
import sys
from pathlib import Path

import click

from schema_stats.config import (
    DEFAULT_REPOSITORY,
    DEFAULT_TAG,
    DEFAULT_TIMEOUT,
    REPOSITORY_ENVVAR,
    TAG_ENVVAR,
    TIMEOUT_ENVVAR,
)
from schema_stats.errors import SchemaStatsError
from schema_stats.schema.loader import download_schema, load_schema
from schema_stats.schema.models import PackageSpec
from schema_stats.stats.kinds import KindTracker
from schema_stats.stats.v1 import count_stats
from schema_stats.stats.v2 import v2
from schema_stats.stats.walker import NullVisitor, check_references, walk

logger = logging.getLogger("schema_stats")


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(level=level, format=fmt, handlers=[logging.StreamHandler(sys.stderr)])


def _load(schema_path: Path | None, provider: str | None, repository: str, tag: str, timeout: float) -> PackageSpec:
    """Load the schema from a local file or from the provider's repository."""
    if schema_path is not None:
        return load_schema(schema_path)
    if provider:
        return download_schema(provider, repository=repository, tag=tag, timeout=timeout)
    raise click.UsageError("One of --schema or --provider is required.")


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    logger.info("Report saved to %s", output)


def source_options(f):
    """Options shared by every command that needs a schema."""
    f = click.option("--timeout", default=DEFAULT_TIMEOUT, type=float, envvar=TIMEOUT_ENVVAR, help="Download timeout in seconds.")(f)
    f = click.option("-t", "--tag", default=DEFAULT_TAG, envvar=TAG_ENVVAR, help="Git tag or branch to read the schema from.")(f)
    f = click.option("-r", "--repository", default=DEFAULT_REPOSITORY, envvar=REPOSITORY_ENVVAR, help="Repository base URL to download the schema from.")(f)
    f = click.option("-p", "--provider", default=None, help="The provider whose schema we should analyze.")(f)
    f = click.option("-s", "--schema", "schema_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Local schema file (JSON or YAML).")(f)
    return f


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Schema Stats: documentation and usage statistics for package schemas."""
    _setup_logging(verbose)


@main.command()
@source_options
@click.option("--format", "fmt", default="v1", type=click.Choice(["v1", "v2"]), help="Statistics format.")
@click.option("-d", "--details", is_flag=True, help="Also list all resources and functions.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the report to a file instead of stdout.")
def stats(schema_path: Path | None, provider: str | None, repository: str, tag: str, timeout: float, fmt: str, details: bool, output: Path | None):
    """Get the stats of a schema."""
    try:
        sch = _load(schema_path, provider, repository, tag, timeout)
        report = count_stats(sch) if fmt == "v1" else v2(sch)
    except SchemaStatsError as e:
        raise click.ClickException(str(e)) from e

    lines = []
    if schema_path is None and provider:
        lines.append(f"Provider: {provider}")
    lines.append(report.model_dump_json(indent=2, by_alias=True))

    if details:
        lines.append("\n### All Resources:\n")
        lines.extend(sorted(sch.resources))
        lines.append("\n### All Functions:\n")
        lines.extend(sorted(sch.functions))

    _emit("\n".join(lines), output)


@main.command()
@source_options
@click.option("--strict", is_flag=True, help="Fail on type references with no matching type.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the report to a file instead of stdout.")
def types(schema_path: Path | None, provider: str | None, repository: str, tag: str, timeout: float, strict: bool, output: Path | None):
    """Classify every referenced type as input, output or input&output."""
    try:
        sch = _load(schema_path, provider, repository, tag, timeout)
        tracker = walk(sch, NullVisitor(), KindTracker())
        for token in check_references(sch, tracker, strict=strict):
            logger.warning("Dangling type reference: %s", token)
    except SchemaStatsError as e:
        raise click.ClickException(str(e)) from e

    kinds = {token: kind.value for token, kind in tracker.as_dict().items()}
    _emit(json.dumps(kinds, indent=2), output)
