"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import patch

import pytest

from vmhealth.config import Settings
from vmhealth.health.engine import classify
from vmhealth.health.models import ResourceKind, ResourceReading, Source, SystemHealth

_PROBES = ("idle_percent", "user_percent", "load_average", "memory_kb", "disk_usage")


@pytest.fixture
def cfg() -> Settings:
    return Settings(threshold=60, cpu_sample_interval=0.0, disk_path="/")


@pytest.fixture
def no_sources() -> Generator[dict[str, Any], None, None]:
    """Every probe reports its source as unavailable.

    Yields the mocks by probe name so a test can give one of them a value.
    """
    patchers = {name: patch(f"vmhealth.health.probes.{name}", return_value=None) for name in _PROBES}
    mocks = {name: p.start() for name, p in patchers.items()}
    yield mocks
    for p in patchers.values():
        p.stop()


@pytest.fixture
def make_reading() -> Callable[..., ResourceReading]:
    def _make(
        kind: ResourceKind,
        percent: int,
        source: Source = Source.PRECISE,
        **details: Any,
    ) -> ResourceReading:
        return ResourceReading(kind=kind, utilization_percent=percent, source=source, details=details)

    return _make


@pytest.fixture
def make_health(make_reading: Callable[..., ResourceReading]) -> Callable[..., SystemHealth]:
    """Build a SystemHealth from three percentages."""

    def _make(cpu: int, memory: int, disk: int, threshold: int = 60) -> SystemHealth:
        readings = [
            make_reading(ResourceKind.CPU, cpu, idle_percent=100 - cpu),
            make_reading(ResourceKind.MEMORY, memory, total_mb=7812, available_mb=3906, used_mb=3906),
            make_reading(ResourceKind.DISK, disk, total_gb=50.0, used_gb=22.5, available_gb=27.5),
        ]
        return SystemHealth(verdicts=[classify(r, threshold) for r in readings], threshold=threshold)

    return _make
