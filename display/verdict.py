"""Rich rendering for a single Verdict.

Used by the CLI. Builds renderables only: printing is left to the caller,
so tests can render into a recording Console.
"""

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from schemas.verdict import ActionSignal, Severity, Verdict


# ── Colours ───────────────────────────────────────────────────────────────────

_SEVERITY_COLORS = {
    Severity.HIGH:   "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW:    "dim",
}

_ACTION_LABELS = {
    ActionSignal.ESCALATE: "[bold red]⚠  escalate[/bold red]",
    ActionSignal.REVIEW:   "[bold yellow]●  review[/bold yellow]",
}


def _confidence_color(confidence: float) -> str:
    return "green" if confidence >= 0.8 else "yellow" if confidence >= 0.6 else "red"


# ── Public ────────────────────────────────────────────────────────────────────

def render_verdict(verdict: Verdict) -> Group:
    """Build the full verdict layout: summary panel, evidence table, guidance."""
    return Group(
        _render_summary(verdict),
        _render_evidence(verdict),
        _render_guidance(verdict),
    )


# ── Private ───────────────────────────────────────────────────────────────────

def _render_summary(verdict: Verdict) -> Panel:
    conf_color = _confidence_color(verdict.confidence)
    sev_color = _SEVERITY_COLORS.get(verdict.severity, "dim")

    lines = [
        Text.from_markup(f"confidence  [{conf_color}]{verdict.confidence:.0%}[/{conf_color}]"),
        Text.from_markup(f"severity    [{sev_color}]{verdict.severity.value}[/{sev_color}]"),
        Text.from_markup(f"action      {_ACTION_LABELS[verdict.action_signal]}"),
        Text(""),
        Text(verdict.confidence_rationale, style="dim"),
    ]

    return Panel(
        Group(*lines),
        title=f"[bold]{verdict.category.value}[/bold]",
        border_style=sev_color,
    )


def _render_evidence(verdict: Verdict) -> Table:
    table = Table(title="Evidence", show_lines=False, border_style="bright_black")
    table.add_column("Type",   style="dim",  min_width=18)
    table.add_column("Value",  style="bold", min_width=24)
    table.add_column("Weight", width=8,      justify="right")

    for item in verdict.evidence:
        table.add_row(item.kind.value, item.value, f"{item.weight:.2f}")

    return table


def _render_guidance(verdict: Verdict) -> Group:
    return Group(
        Text(""),
        Text.assemble(("Explanation", "bold"), "  ", verdict.explanation),
        Text.assemble(("Next step", "bold"), "    ", verdict.recommended_next_step),
    )
