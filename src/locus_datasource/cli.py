"""locus-datasource command line interface.

Developer tooling for source authors and host operators:

    locus-datasource sources                       # what is registered
    locus-datasource probe -s sources.yaml -q "golang channels" -n 3
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

import typer
from pydantic import ValidationError

from locus_datasource import __version__
from locus_datasource.contracts import DataSourceError, SearchContext, SourceLabel
from locus_datasource.core.config import HostSettings, load_settings

if TYPE_CHECKING:
    from locus_datasource.host import DataSourceHost
    from locus_datasource.sources.manager import SourceManager

__all__ = ["app"]

# Module-level singleton for the source manager
_source_manager_cache: SourceManager | None = None


def _get_source_manager() -> SourceManager:
    """Get the source manager with built-in and entry-point sources registered."""
    global _source_manager_cache

    from locus_datasource.sources.manager import SourceManager

    if _source_manager_cache is None:
        manager = SourceManager()
        manager.register_builtin_sources()
        manager.register_entrypoint_sources()
        _source_manager_cache = manager
    return _source_manager_cache


app = typer.Typer(
    name="locus-datasource",
    help="Inspect and probe Locus data sources.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"locus-datasource version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from a .env file.

    Raises:
        typer.Exit: If an explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(f"Error: .env file not found: {env_file}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs.",
    ),
) -> None:
    """Inspect and probe Locus data sources."""
    from locus_datasource.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "WARNING")
    ctx.obj = {"verbose": verbose, "json_logs": json_logs}

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho("Warning: --env-file ignored because --no-dotenv is set.", fg=typer.colors.YELLOW, err=True)


@app.command()
def sources(
    output_format: Literal["console", "json"] = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format: 'console' or 'json'.",
    ),
) -> None:
    """List registered data sources."""
    specs = _get_source_manager().get_specs()

    if output_format == "json":
        typer.echo(json.dumps([asdict(spec) for spec in specs], indent=2))
        return

    if not specs:
        typer.echo("No data sources registered.")
        return
    for spec in specs:
        typer.echo(f"{spec.name:<20} {spec.version:<10} {spec.class_path}")


def _load_host_settings(path: Path) -> HostSettings:
    try:
        return load_settings(path)
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.secho(f"Invalid settings in {path}:\n{e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None


def _probe_source(
    host: DataSourceHost,
    label: SourceLabel,
    context: SearchContext | None,
    count: int,
    topic_id: int | None,
) -> dict[str, Any]:
    from locus_datasource.host import SourceState

    hosted = host.get(label)
    report: dict[str, Any] = {
        "label": label,
        "source": hosted.source.name,
        "state": str(hosted.state),
    }
    if hosted.state is not SourceState.READY:
        report["error"] = hosted.error
        return report

    report["available"] = host.check_availability(label)

    if context is not None:
        try:
            report["topics"] = [t.to_interchange() for t in host.search_topics(label, count, context)]
        except DataSourceError as e:
            report["search_error"] = str(e)

    if topic_id is not None:
        try:
            report["content"] = [item.to_interchange() for item in host.fetch_content(label, count, topic_id)]
        except DataSourceError as e:
            report["fetch_error"] = str(e)

    return report


@app.command()
def probe(
    ctx: typer.Context,
    settings: Path = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to host settings YAML file.",
    ),
    query: str | None = typer.Option(
        None,
        "--query",
        "-q",
        help="Question text to search for.",
    ),
    tags: list[str] = typer.Option(
        [],
        "--tag",
        "-t",
        help="Search tag (repeatable).",
    ),
    count: int = typer.Option(
        5,
        "--count",
        "-n",
        min=0,
        help="Maximum topics / items per source.",
    ),
    topic_id: int | None = typer.Option(
        None,
        "--topic-id",
        help="Also fetch content for this topic id.",
    ),
    only: str | None = typer.Option(
        None,
        "--source",
        help="Probe only the source with this label.",
    ),
) -> None:
    """Initialize configured sources, check availability, optionally search and fetch.

    Prints a JSON report to stdout. Exits 1 if any probed source failed to
    initialize or any operation failed.
    """
    from locus_datasource.core.logging import configure_logging
    from locus_datasource.host import DataSourceHost, SourceState

    host_settings = _load_host_settings(settings)
    flags = ctx.obj or {}
    configure_logging(
        json_output=flags.get("json_logs", False) or host_settings.logging.json_output,
        level="DEBUG" if flags.get("verbose", False) else host_settings.logging.level,
    )

    labels = [SourceLabel(s.label) for s in host_settings.sources]
    if only is not None:
        if only not in labels:
            typer.secho(f"Error: no source labelled '{only}' in {settings}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        labels = [SourceLabel(only)]

    selected = host_settings.model_copy(update={"sources": [s for s in host_settings.sources if s.label in labels]})
    try:
        host = DataSourceHost.from_settings(selected, _get_source_manager())
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None

    context = SearchContext(question_text=query or "", tags=tuple(tags)) if query is not None or tags else None

    with host:
        host.initialize_all()
        reports = [_probe_source(host, label, context, count, topic_id) for label in labels]

    typer.echo(json.dumps({"sources": reports}, indent=2))

    failed = any(
        r["state"] != SourceState.READY or "search_error" in r or "fetch_error" in r
        for r in reports
    )
    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
