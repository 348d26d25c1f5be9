"""Markdown report generator."""

from __future__ import annotations

from ddscore.models import Blocked, ScoringSnapshot


def render_markdown(snapshot: ScoringSnapshot) -> str:
    """Render a scoring snapshot as Markdown."""
    lines: list[str] = []
    details = snapshot.calculation_details

    lines.append("# Technical Due-Diligence Score")
    lines.append("")
    lines.append(f"- **Solution**: {snapshot.solution_id}")
    lines.append(f"- **Environment**: {snapshot.env_id}")
    lines.append(f"- **Date**: {snapshot.date:%Y-%m-%d %H:%M UTC}")
    lines.append(f"- **Collection**: {snapshot.collection_type.value}")
    lines.append(f"- **Score id**: `{snapshot.score_id}`")
    lines.append("")
    lines.append("## Summary")
    lines.append("")
    lines.append("| Global score | Risk level |")
    lines.append("|-------------:|------------|")
    lines.append(f"| {snapshot.global_score:g} | {snapshot.risk_level.value} |")
    lines.append("")
    lines.append("| Category | Weight | Points | Score | Contribution |")
    lines.append("|----------|-------:|-------:|------:|-------------:|")
    for r in details.categories:
        lines.append(
            f"| {r.category.label} | {r.weight:.0%} | {r.raw_score:g}/{r.max_raw_score:g} | "
            f"{r.percentage:.1f}% | {r.contribution:.1f} |"
        )
    lines.append("")

    lines.append("## Components")
    for r in details.categories:
        lines.append("")
        lines.append(f"### {r.category.label}")
        lines.append("")
        lines.append("| Component | Points | Rationale |")
        lines.append("|-----------|-------:|-----------|")
        for c in r.components:
            lines.append(f"| {c.name} | {c.awarded_value:g}/{c.max_value:g} | {c.rationale} |")
    lines.append("")

    if snapshot.notes:
        lines.append("## Recommendations")
        lines.append("")
        lines.append(snapshot.notes)
        lines.append("")

    return "\n".join(lines)


def render_blocked_markdown(blocked: Blocked) -> str:
    lines = [
        "# Scoring blocked",
        "",
        f"Solution `{blocked.solution_id}`, environment `{blocked.env_id}`: "
        f"{len(blocked.missing)} required field(s) missing.",
        "",
        "| Record | Field | Needed by |",
        "|--------|-------|-----------|",
    ]
    for m in blocked.missing:
        lines.append(f"| {m.group} | {m.path} | {', '.join(c.label for c in m.categories)} |")
    return "\n".join(lines) + "\n"
