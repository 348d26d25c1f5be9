"""CLI entry point using Typer."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ddscore import __version__
from ddscore.config import ScoringConfig, load_config
from ddscore.errors import PersistenceError, SourceError
from ddscore.models import Blocked, CollectionType, ScoringSnapshot

if TYPE_CHECKING:
    from ddscore.engine import ScoringEngine

app = typer.Typer(
    name="ddscore",
    help="Technical due-diligence scoring — check profile completeness, score, keep snapshots.",
    no_args_is_help=True,
)
console = Console()

ConfigOption = Annotated[Path | None, typer.Option("--config", "-c", help="Config file path")]
DataOption = Annotated[
    Path | None, typer.Option("--data", "-d", help="JSON dataset of profile records")
]
GraphQLOption = Annotated[
    str | None, typer.Option("--graphql-url", help="Data platform GraphQL endpoint")
]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"ddscore {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """ddscore — technical due-diligence scoring engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _resolve_config(
    config: Path | None, data: Path | None, graphql_url: str | None, store: Path | None = None
) -> ScoringConfig:
    cfg = load_config(config)
    if data:
        cfg.data_file = str(data)
    if graphql_url:
        cfg.graphql_url = graphql_url
    if store:
        cfg.store_path = str(store)
    return cfg


def _engine(cfg: ScoringConfig) -> ScoringEngine:
    from ddscore.engine import ScoringEngine
    from ddscore.sources import get_source
    from ddscore.stores import get_store

    try:
        source = get_source(cfg)
    except (ValueError, SourceError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc
    return ScoringEngine(source, get_store(cfg), cfg)


@app.command()
def score(
    solution_id: Annotated[str, typer.Argument(help="Solution to score")],
    env_id: Annotated[str, typer.Argument(help="Environment of the solution")],
    dd: Annotated[
        bool, typer.Option("--dd", help="Record as a due-diligence collection")
    ] = False,
    format: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "terminal",
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Output file path")
    ] = None,
    store: Annotated[
        Path | None, typer.Option("--store", "-s", help="Snapshot log (JSON Lines)")
    ] = None,
    data: DataOption = None,
    graphql_url: GraphQLOption = None,
    config: ConfigOption = None,
) -> None:
    """Score one solution environment and record a snapshot."""
    cfg = _resolve_config(config, data, graphql_url, store)
    engine = _engine(cfg)
    collection = CollectionType.DD if dd else CollectionType.SNAPSHOT

    try:
        outcome = asyncio.run(engine.score(solution_id, env_id, collection))
    except (SourceError, PersistenceError) as exc:
        console.print(f"[red]Scoring failed: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    if isinstance(outcome, Blocked):
        _output_blocked(outcome, format, output)
        raise typer.Exit(2)
    _output_snapshot(outcome.snapshot, format, output)


@app.command()
def check(
    solution_id: Annotated[str, typer.Argument(help="Solution to check")],
    env_id: Annotated[str, typer.Argument(help="Environment of the solution")],
    format: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "terminal",
    data: DataOption = None,
    graphql_url: GraphQLOption = None,
    config: ConfigOption = None,
) -> None:
    """Report every missing field without scoring or recording anything."""
    cfg = _resolve_config(config, data, graphql_url)
    engine = _engine(cfg)

    try:
        readiness = asyncio.run(engine.check(solution_id, env_id))
    except SourceError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    if isinstance(readiness, Blocked):
        _output_blocked(readiness, format, None)
        raise typer.Exit(2)
    console.print(f"[green]{escape(solution_id)} / {escape(env_id)} is ready for scoring.[/green]")


@app.command()
def history(
    solution_id: Annotated[str, typer.Argument(help="Solution")],
    env_id: Annotated[
        str | None, typer.Option("--env", "-e", help="Only this environment")
    ] = None,
    store: Annotated[
        Path | None, typer.Option("--store", "-s", help="Snapshot log (JSON Lines)")
    ] = None,
    config: ConfigOption = None,
) -> None:
    """List recorded snapshots of a solution, oldest first."""
    from ddscore.reporters.terminal import RISK_COLORS
    from ddscore.stores import get_store

    cfg = _resolve_config(config, None, None, store)
    snapshots = asyncio.run(get_store(cfg).list(solution_id, env_id))
    if not snapshots:
        console.print(f"[yellow]No snapshots for {escape(solution_id)}.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Date")
    table.add_column("Env")
    table.add_column("Type")
    table.add_column("Score", justify="right")
    table.add_column("Risk")
    table.add_column("Id")
    for s in snapshots:
        color = RISK_COLORS[s.risk_level]
        table.add_row(
            f"{s.date:%Y-%m-%d %H:%M}",
            escape(s.env_id),
            s.collection_type.value,
            f"{s.global_score:g}",
            f"[{color}]{s.risk_level.value}[/]",
            escape(s.score_id),
        )
    console.print(table)


def _output_snapshot(snapshot: ScoringSnapshot, format: str, output: str | None) -> None:
    if format == "json":
        from ddscore.reporters.json_report import render_json

        text = render_json(snapshot)
    elif format == "markdown":
        from ddscore.reporters.markdown import render_markdown

        text = render_markdown(snapshot)
    elif format == "text":
        text = snapshot.calculation_report
    else:
        from ddscore.reporters.terminal import render_terminal

        render_terminal(snapshot, console)
        return

    _emit(text, output)


def _output_blocked(blocked: Blocked, format: str, output: str | None) -> None:
    if format == "json":
        from ddscore.reporters.json_report import render_json

        text = render_json(blocked)
    elif format == "markdown":
        from ddscore.reporters.markdown import render_blocked_markdown

        text = render_blocked_markdown(blocked)
    else:
        from ddscore.reporters.terminal import render_blocked

        render_blocked(blocked, console)
        return

    _emit(text, output)


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text)
        console.print(f"\n[green]Report saved to {escape(output)}[/green]")
    else:
        console.print(text, markup=False, highlight=False, soft_wrap=True)


@app.command(name="config")
def config_show(config: ConfigOption = None) -> None:
    """Show current configuration."""
    cfg = load_config(config)
    data = cfg.model_dump()
    if data["graphql_token"]:
        data["graphql_token"] = "***"
    console.print_json(json.dumps(data, default=str))
