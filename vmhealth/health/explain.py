"""Human-readable rationale for verdicts (explain mode only).

Everything here is a pure function of its arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import ResourceKind, ResourceReading, Source, SystemHealth

REMEDIATION: dict[ResourceKind, str] = {
    ResourceKind.CPU: "Consider reducing running processes or upgrading CPU resources",
    ResourceKind.MEMORY: "Close unnecessary applications or add more RAM",
    ResourceKind.DISK: "Clean up files or expand disk storage",
}

# (kind, source) -> (healthy hint, unhealthy hint)
_DETAIL_HINTS: dict[tuple[ResourceKind, Source], tuple[str, str]] = {
    (ResourceKind.CPU, Source.PRECISE): (
        "System has sufficient CPU resources available",
        "High CPU usage may cause performance degradation",
    ),
    (ResourceKind.CPU, Source.FALLBACK_1): (
        "CPU usage obtained from a point-in-time snapshot",
        "High CPU usage detected in a point-in-time snapshot",
    ),
    (ResourceKind.CPU, Source.FALLBACK_2): (
        "Based on system load average",
        "High system load detected",
    ),
    (ResourceKind.MEMORY, Source.PRECISE): (
        "Sufficient memory available for system operations",
        "High memory usage may cause swapping and performance issues",
    ),
    (ResourceKind.DISK, Source.PRECISE): (
        "Adequate disk space available for system operations",
        "Low disk space may cause system instability and application failures",
    ),
}

_UNAVAILABLE_HINTS: dict[ResourceKind, str] = {
    ResourceKind.CPU: "Monitoring tools unavailable, assuming healthy state",
    ResourceKind.MEMORY: "Memory statistics unavailable, assuming healthy",
    ResourceKind.DISK: "Disk usage information unavailable, assuming healthy",
}


def explain(kind: ResourceKind, healthy: bool, percent: int, threshold: int) -> str:
    """State the verdict and the comparison that produced it."""
    if healthy:
        return f"{kind.value} is HEALTHY because usage ({percent}%) is below the {threshold}% threshold"
    return f"{kind.value} is UNHEALTHY because usage ({percent}%) meets or exceeds the {threshold}% threshold"


def explain_details(reading: ResourceReading, healthy: bool) -> str:
    if not reading.measured:
        return _UNAVAILABLE_HINTS[reading.kind]
    hints = _DETAIL_HINTS.get((reading.kind, reading.source))
    if hints is None:
        return ""
    return hints[0] if healthy else hints[1]


@dataclass
class OverallExplanation:
    healthy: bool
    summary: str
    items: list[str] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)
    note: str = ""


def explain_overall(health: SystemHealth) -> OverallExplanation:
    """Aggregate rationale; lists offenders and remediation when unhealthy."""
    t = health.threshold
    if health.overall_healthy:
        return OverallExplanation(
            healthy=True,
            summary=f"The VM is HEALTHY because all monitored resources are below the {t}% threshold:",
            items=[
                f"{v.kind.value} usage: {v.reading.utilization_percent}% (< {t}%)"
                for v in health.verdicts
            ],
            note=(
                "This indicates the system has sufficient resources available and should "
                "perform well under normal operating conditions."
            ),
        )

    offenders = ", ".join(
        f"{v.kind.value} ({v.reading.utilization_percent}%)" for v in health.unhealthy
    )
    return OverallExplanation(
        healthy=False,
        summary=f"The VM is UNHEALTHY because one or more resources meet or exceed the {t}% threshold:",
        items=[f"Problematic resources: {offenders}"],
        actions=[f"{v.kind.value}: {REMEDIATION[v.kind]}" for v in health.unhealthy],
        note="High resource utilization may lead to performance degradation and system instability.",
    )
