"""Terminal report for a SystemHealth, rendered with rich."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from vmhealth.health.explain import explain, explain_details, explain_overall
from vmhealth.health.models import HealthVerdict, ResourceKind, Source, SystemHealth

_HEADINGS = {
    ResourceKind.CPU: "📊 Checking CPU Usage...",
    ResourceKind.MEMORY: "💾 Checking Memory Usage...",
    ResourceKind.DISK: "💿 Checking Disk Usage...",
}

# (details key, label, unit)
_MEMORY_LABELS = [
    ("total_mb", "Total Memory", " MB"),
    ("available_mb", "Available Memory", " MB"),
    ("used_mb", "Used Memory", " MB"),
]
_DISK_LABELS = [
    ("total_gb", "Total Disk Space", " GB"),
    ("used_gb", "Used Disk Space", " GB"),
    ("available_gb", "Available Disk Space", " GB"),
]


def _detail_lines(verdict: HealthVerdict) -> list[str]:
    """Sampling detail lines for one resource."""
    r = verdict.reading
    d = r.details
    pct = r.utilization_percent

    if not r.measured:
        return [
            f"⚠️  [yellow]{r.kind.value} data sources not available[/yellow]",
            f"ℹ️  Assuming {r.kind.value} is healthy",
        ]

    if r.kind == ResourceKind.CPU:
        if r.source == Source.FALLBACK_2:
            return [f"Load average (1min): {d.get('load_avg_1min', '?')}", f"Approximate CPU usage: {pct}%"]
        lines = [f"Current CPU usage: {pct}%"]
        if "idle_percent" in d:
            lines.append(f"CPU idle: {d['idle_percent']}%")
        return lines

    labels = _MEMORY_LABELS if r.kind == ResourceKind.MEMORY else _DISK_LABELS
    lines = [f"{label}: {d[key]}{unit}" for key, label, unit in labels if key in d]
    lines.append(f"{r.kind.value} usage: {pct}%")
    return lines


def _status_line(verdict: HealthVerdict, threshold: int) -> str:
    name = verdict.kind.value
    if verdict.healthy:
        return f"✅ {name} status: [green]HEALTHY[/green] (< {threshold}%)"
    return f"❌ {name} status: [red]UNHEALTHY[/red] (≥ {threshold}%)"


def _render_explanation(console: Console, verdict: HealthVerdict, threshold: int) -> None:
    r = verdict.reading
    console.print(f"[yellow]📝 Explanation for {r.kind.value}:[/yellow]")
    mark = "✅" if verdict.healthy else "❌"
    console.print(f"   {mark} {explain(r.kind, verdict.healthy, r.utilization_percent, threshold)}")
    details = explain_details(r, verdict.healthy)
    if details:
        console.print(f"   ℹ️  Details: {details}")
    console.print()


def _summary_table(health: SystemHealth) -> Table:
    table = Table(title="Component Status", title_justify="left")
    table.add_column("Component")
    table.add_column("Status")
    table.add_column("Usage", justify="right")
    table.add_column("Source", style="dim")
    for v in health.verdicts:
        status = "✅ [green]Healthy[/green]" if v.healthy else "❌ [red]Unhealthy[/red]"
        table.add_row(v.kind.value, status, f"{v.reading.utilization_percent}%", v.reading.source.value)
    return table


def render_report(health: SystemHealth, console: Console, explain_mode: bool = False) -> None:
    """Print detail lines, optional explanations, summary and overall verdict."""
    t = health.threshold
    console.print(Panel("VM Health Check Tool", style="bold blue"))
    console.print("Analyzing VM health status...")
    console.print(f"Threshold: Resources under {t}% are considered healthy")
    console.print()

    for v in health.verdicts:
        console.print(_HEADINGS[v.kind])
        for line in _detail_lines(v):
            console.print(f"  {line}")
        console.print(f"  {_status_line(v, t)}")
        if explain_mode:
            _render_explanation(console, v, t)
        console.print()

    console.print(Panel("📋 HEALTH SUMMARY", style="bold blue"))
    console.print(_summary_table(health))
    console.print()

    if health.overall_healthy:
        console.print("🟢 [green]VM STATUS: HEALTHY[/green]")
    else:
        console.print("🔴 [red]VM STATUS: UNHEALTHY[/red]")

    if not explain_mode:
        return

    overall = explain_overall(health)
    console.print()
    console.print("[yellow]📋 Overall Health Explanation:[/yellow]")
    console.print(f"   {'✅' if overall.healthy else '❌'} {overall.summary}")
    for item in overall.items:
        console.print(f"      • {item}")
    console.print()
    if overall.actions:
        console.print("   ⚠️  Recommended actions:")
        for action in overall.actions:
            console.print(f"      • {action}")
        console.print()
    console.print(f"   ℹ️  {overall.note}")
