"""Tests for classification and the aggregate system verdict."""

from __future__ import annotations

import itertools
from unittest.mock import MagicMock, patch

import pytest

from vmhealth.config import Settings
from vmhealth.health.engine import check_system, classify
from vmhealth.health.models import (
    HealthVerdict,
    ResourceKind,
    ResourceReading,
    Source,
    SystemHealth,
)

# ── classify ─────────────────────────────────────────────────────────────────


class TestClassify:
    @pytest.mark.parametrize("percent,threshold,healthy", [
        (0, 60, True),
        (59, 60, True),
        (60, 60, False),
        (61, 60, False),
        (100, 60, False),
        (342, 60, False),
        (0, 0, False),
        (99, 100, True),
    ])
    def test_strict_less_than(self, make_reading, percent: int, threshold: int, healthy: bool) -> None:
        reading = make_reading(ResourceKind.CPU, percent)
        verdict = classify(reading, threshold)
        assert verdict.healthy is healthy
        assert verdict.kind == ResourceKind.CPU
        assert verdict.reading is reading

    def test_unavailable_reading_is_healthy(self) -> None:
        verdict = classify(ResourceReading.unavailable(ResourceKind.MEMORY), 60)
        assert verdict.healthy
        assert verdict.reading.utilization_percent == 0

    def test_idempotent(self, make_reading) -> None:
        reading = make_reading(ResourceKind.DISK, 45)
        assert classify(reading, 60) == classify(reading, 60)
        assert reading.utilization_percent == 45


# ── SystemHealth ─────────────────────────────────────────────────────────────


class TestSystemHealth:
    @pytest.mark.parametrize("cpu,memory,disk", list(itertools.product([True, False], repeat=3)))
    def test_overall_is_and(self, make_health, cpu: bool, memory: bool, disk: bool) -> None:
        health = make_health(10 if cpu else 90, 10 if memory else 90, 10 if disk else 90)
        expected = cpu and memory and disk
        assert health.overall_healthy is expected
        assert health.exit_code == (0 if expected else 1)
        assert [v.kind for v in health.unhealthy] == [
            kind for kind, ok in zip(ResourceKind, (cpu, memory, disk)) if not ok
        ]

    def test_requires_all_three_in_order(self, make_reading) -> None:
        disk = classify(make_reading(ResourceKind.DISK, 1), 60)
        cpu = classify(make_reading(ResourceKind.CPU, 1), 60)
        with pytest.raises(ValueError):
            SystemHealth(verdicts=[disk, cpu], threshold=60)


# ── check_system ─────────────────────────────────────────────────────────────


def _fixed(kind: ResourceKind, percent: int, source: Source = Source.PRECISE):
    def _sample(cfg: Settings | None = None) -> ResourceReading:
        return ResourceReading(kind=kind, utilization_percent=percent, source=source)
    return _sample


class TestCheckSystem:
    def test_all_healthy(self, cfg: Settings) -> None:
        samplers = {
            ResourceKind.CPU: _fixed(ResourceKind.CPU, 18),
            ResourceKind.MEMORY: _fixed(ResourceKind.MEMORY, 50),
            ResourceKind.DISK: _fixed(ResourceKind.DISK, 45),
        }
        with patch.dict("vmhealth.health.samplers.SAMPLERS", samplers):
            health = check_system(cfg)

        assert [v.kind for v in health.verdicts] == list(ResourceKind)
        assert health.overall_healthy
        assert health.exit_code == 0
        assert health.threshold == 60

    def test_one_unhealthy(self, cfg: Settings) -> None:
        samplers = {
            ResourceKind.CPU: _fixed(ResourceKind.CPU, 73, Source.FALLBACK_2),
            ResourceKind.MEMORY: _fixed(ResourceKind.MEMORY, 50),
            ResourceKind.DISK: _fixed(ResourceKind.DISK, 45),
        }
        with patch.dict("vmhealth.health.samplers.SAMPLERS", samplers):
            health = check_system(cfg)

        assert not health.overall_healthy
        assert health.exit_code == 1
        assert [v.kind for v in health.unhealthy] == [ResourceKind.CPU]

    def test_threshold_from_settings(self, cfg: Settings) -> None:
        strict = cfg.model_copy(update={"threshold": 40})
        samplers = {
            ResourceKind.CPU: _fixed(ResourceKind.CPU, 18),
            ResourceKind.MEMORY: _fixed(ResourceKind.MEMORY, 50),
            ResourceKind.DISK: _fixed(ResourceKind.DISK, 45),
        }
        with patch.dict("vmhealth.health.samplers.SAMPLERS", samplers):
            health = check_system(strict)
        assert health.threshold == 40
        assert [v.kind for v in health.unhealthy] == [ResourceKind.MEMORY, ResourceKind.DISK]

    def test_unmeasurable_host_is_healthy(self, cfg: Settings, no_sources) -> None:
        """psutil can read nothing: everything falls open to 0%."""
        health = check_system(cfg)

        assert health.overall_healthy
        assert health.exit_code == 0
        for verdict in health.verdicts:
            assert isinstance(verdict, HealthVerdict)
            assert verdict.reading.utilization_percent == 0
            assert verdict.reading.source == Source.UNAVAILABLE

    @patch("vmhealth.health.probes.psutil.disk_usage")
    @patch("vmhealth.health.probes.psutil.virtual_memory")
    @patch("vmhealth.health.probes.psutil.cpu_times_percent")
    def test_end_to_end_from_psutil(self, mock_times, mock_vm, mock_du, cfg: Settings) -> None:
        mock_times.return_value = MagicMock(idle=82.0, user=10.0)
        mock_vm.return_value = MagicMock(total=8_000_000 * 1024, available=4_000_000 * 1024)
        mock_du.return_value = MagicMock(total=100, used=81, free=19)

        health = check_system(cfg)

        assert [v.reading.utilization_percent for v in health.verdicts] == [18, 50, 81]
        assert [v.kind for v in health.unhealthy] == [ResourceKind.DISK]
        assert health.exit_code == 1
