"""Readings, verdicts and the aggregate system health for one run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ResourceKind(str, Enum):
    CPU = "CPU"
    MEMORY = "Memory"
    DISK = "Disk"


class Source(str, Enum):
    """Which sampling strategy produced a reading."""

    PRECISE = "precise"
    FALLBACK_1 = "fallback-1"
    FALLBACK_2 = "fallback-2"
    UNAVAILABLE = "unavailable-assumed-healthy"


@dataclass
class ResourceReading:
    """A sampled utilization percentage plus its provenance.

    ``details`` holds display-only values (idle %, load, MB totals, disk
    sizes). Classification never looks at it.
    """

    kind: ResourceKind
    utilization_percent: int
    source: Source
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def measured(self) -> bool:
        return self.source != Source.UNAVAILABLE

    @classmethod
    def unavailable(cls, kind: ResourceKind) -> ResourceReading:
        """Fallback reading for a resource with no usable source."""
        return cls(kind=kind, utilization_percent=0, source=Source.UNAVAILABLE)


@dataclass(frozen=True)
class HealthVerdict:
    kind: ResourceKind
    healthy: bool
    reading: ResourceReading


@dataclass
class SystemHealth:
    """Verdicts for CPU, Memory and Disk, in that order."""

    verdicts: list[HealthVerdict]
    threshold: int

    def __post_init__(self) -> None:
        kinds = [v.kind for v in self.verdicts]
        if kinds != list(ResourceKind):
            raise ValueError(f"Expected verdicts for {[k.value for k in ResourceKind]}, got {kinds}")

    @property
    def overall_healthy(self) -> bool:
        return all(v.healthy for v in self.verdicts)

    @property
    def unhealthy(self) -> list[HealthVerdict]:
        return [v for v in self.verdicts if not v.healthy]

    @property
    def exit_code(self) -> int:
        return 0 if self.overall_healthy else 1
