"""Per-resource samplers built from ordered strategy chains.

Each strategy returns a ResourceReading or None. The first non-empty result
wins; an exhausted chain yields the 0% "unavailable-assumed-healthy" reading,
so sampling never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from vmhealth.config import Settings, settings
from vmhealth.health import probes
from vmhealth.health.models import ResourceKind, ResourceReading, Source

logger = logging.getLogger(__name__)

Strategy = Callable[[Settings], ResourceReading | None]

_GB = 1024**3


# ── CPU ──────────────────────────────────────────────────────────────────────


def cpu_from_idle_probe(cfg: Settings) -> ResourceReading | None:
    """usage = 100 - idle, measured across the sample interval."""
    idle = probes.idle_percent(cfg.cpu_sample_interval)
    if idle is None:
        return None
    idle = int(idle)
    return ResourceReading(
        kind=ResourceKind.CPU,
        utilization_percent=100 - idle,
        source=Source.PRECISE,
        details={"idle_percent": idle},
    )


def cpu_from_snapshot(cfg: Settings) -> ResourceReading | None:
    """Truncated user-time percentage; zero is not trusted."""
    user = probes.user_percent()
    if user is None:
        return None
    usage = int(user)
    if usage <= 0:
        return None
    return ResourceReading(kind=ResourceKind.CPU, utilization_percent=usage, source=Source.FALLBACK_1)


def cpu_from_loadavg(cfg: Settings) -> ResourceReading | None:
    """Approximate usage as round(load * 100).

    A load of 1.0 counts as one fully busy core. The value is not divided by
    the core count and is not clamped, so multi-core hosts can read above
    100%.
    """
    load = probes.load_average()
    if load is None or load < 0:
        return None
    return ResourceReading(
        kind=ResourceKind.CPU,
        utilization_percent=round(load * 100),
        source=Source.FALLBACK_2,
        details={"load_avg_1min": load},
    )


# ── Memory ───────────────────────────────────────────────────────────────────


def memory_from_virtual_memory(cfg: Settings) -> ResourceReading | None:
    info = probes.memory_kb()
    if info is None:
        return None
    total, available = info
    # A zero total or more available than total means the source is corrupt
    if total <= 0 or available > total:
        return None

    used = total - available
    return ResourceReading(
        kind=ResourceKind.MEMORY,
        utilization_percent=used * 100 // total,
        source=Source.PRECISE,
        details={
            "total_mb": total // 1024,
            "available_mb": available // 1024,
            "used_mb": used // 1024,
        },
    )


# ── Disk ─────────────────────────────────────────────────────────────────────


def disk_from_usage(cfg: Settings) -> ResourceReading | None:
    report = probes.disk_usage(cfg.disk_path)
    if report is None:
        return None
    percent = report.use_percent
    if percent is None:
        return None
    return ResourceReading(
        kind=ResourceKind.DISK,
        utilization_percent=percent,
        source=Source.PRECISE,
        details={
            "total_gb": round(report.total / _GB, 1),
            "used_gb": round(report.used / _GB, 1),
            "available_gb": round(report.free / _GB, 1),
        },
    )


# ── Chains ───────────────────────────────────────────────────────────────────


CPU_STRATEGIES: list[Strategy] = [cpu_from_idle_probe, cpu_from_snapshot, cpu_from_loadavg]
MEMORY_STRATEGIES: list[Strategy] = [memory_from_virtual_memory]
DISK_STRATEGIES: list[Strategy] = [disk_from_usage]


def sample_with_fallback(
    kind: ResourceKind,
    strategies: list[Strategy],
    cfg: Settings | None = None,
) -> ResourceReading:
    """Return the first reading any strategy produces, else the fallback."""
    cfg = cfg or settings
    for strategy in strategies:
        reading = strategy(cfg)
        if reading is not None:
            logger.info(
                "%s: %d%% via %s (%s)",
                kind.value, reading.utilization_percent, strategy.__name__, reading.source.value,
            )
            return reading
        logger.debug("%s: %s yielded no value, falling back", kind.value, strategy.__name__)

    logger.warning("%s: no usable data source, assuming healthy", kind.value)
    return ResourceReading.unavailable(kind)


def sample_cpu(cfg: Settings | None = None) -> ResourceReading:
    return sample_with_fallback(ResourceKind.CPU, CPU_STRATEGIES, cfg)


def sample_memory(cfg: Settings | None = None) -> ResourceReading:
    return sample_with_fallback(ResourceKind.MEMORY, MEMORY_STRATEGIES, cfg)


def sample_disk(cfg: Settings | None = None) -> ResourceReading:
    return sample_with_fallback(ResourceKind.DISK, DISK_STRATEGIES, cfg)


# Fixed sampling order: CPU, Memory, Disk
SAMPLERS: dict[ResourceKind, Callable[[Settings | None], ResourceReading]] = {
    ResourceKind.CPU: sample_cpu,
    ResourceKind.MEMORY: sample_memory,
    ResourceKind.DISK: sample_disk,
}
