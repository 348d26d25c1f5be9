"""Rich terminal reporter."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ddscore.models import Blocked, RiskLevel, ScoringSnapshot

RISK_COLORS = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "red",
    RiskLevel.CRITICAL: "bold red",
}


def _pct_color(pct: float) -> str:
    if pct >= 85:
        return "green"
    if pct >= 50:
        return "yellow"
    return "red"


def render_terminal(snapshot: ScoringSnapshot, console: Console) -> None:
    """Render a scoring snapshot to terminal using Rich."""
    console.print()

    color = RISK_COLORS[snapshot.risk_level]
    console.print(Panel(
        f"[{color}]Global score: {snapshot.global_score:g}/100  "
        f"Risk: {snapshot.risk_level.value}[/]",
        title=f"[bold]Scoring — {escape(snapshot.solution_id)} / {escape(snapshot.env_id)}[/]",
        subtitle=f"{escape(snapshot.score_id)} | {snapshot.date:%Y-%m-%d %H:%M UTC}",
    ))

    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("Category", width=14)
    table.add_column("Weight", width=7, justify="right")
    table.add_column("Score", width=7, justify="right")
    table.add_column("Contrib.", width=8, justify="right")
    table.add_column("Weakest component", ratio=3)

    for r in snapshot.calculation_details.categories:
        weakest = r.weakest(1)[0]
        pc = _pct_color(r.percentage)
        table.add_row(
            r.category.label,
            f"{r.weight:.0%}",
            f"[{pc}]{r.percentage:.1f}%[/]",
            f"{r.contribution:.1f}",
            escape(
                f"{weakest.name} {weakest.awarded_value:g}/{weakest.max_value:g}: "
                f"{weakest.rationale}"
            ),
        )

    console.print(table)

    if snapshot.notes:
        console.print(
            Panel(escape(snapshot.notes), title="[bold]Recommendations[/]", border_style="blue")
        )


def render_blocked(blocked: Blocked, console: Console) -> None:
    """List every missing field so they can all be fixed in one pass."""
    console.print(
        f"\n[bold red]Scoring blocked[/] for "
        f"{escape(blocked.solution_id)} / {escape(blocked.env_id)}: "
        f"{len(blocked.missing)} required field(s) missing"
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("Record")
    table.add_column("Field")
    table.add_column("Needed by")
    for m in blocked.missing:
        table.add_row(m.group, m.path, ", ".join(c.label for c in m.categories))
    console.print(table)
