"""System data sources, read through psutil.

Every probe is one-shot and read-only. A probe returns ``None`` when psutil
cannot read the source on this host instead of raising.

Sources:
  cpu_times_percent(interval)   idle % measured across the interval
  cpu_times_percent(None)       point-in-time user-time %
  getloadavg()                  1-minute load average
  virtual_memory()              total / available memory
  disk_usage(path)              filesystem size, used, free
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import psutil

logger = logging.getLogger(__name__)


def idle_percent(interval: float) -> float | None:
    """Idle % over ``interval`` seconds.

    psutil takes one sample, waits and takes a second one, so the value
    covers only the interval and never the time since boot.
    """
    try:
        return psutil.cpu_times_percent(interval=interval).idle
    except (psutil.Error, OSError) as e:
        logger.debug("Idle probe failed: %s", e)
        return None


def user_percent() -> float | None:
    """User-time % since the previous CPU-times call (no waiting)."""
    try:
        return psutil.cpu_times_percent(interval=None).user
    except (psutil.Error, OSError) as e:
        logger.debug("CPU snapshot failed: %s", e)
        return None


def load_average() -> float | None:
    try:
        return psutil.getloadavg()[0]
    except (psutil.Error, OSError) as e:
        logger.debug("Load average unavailable: %s", e)
        return None


def memory_kb() -> tuple[int, int] | None:
    """(total, available) memory in kB."""
    try:
        vm = psutil.virtual_memory()
    except (psutil.Error, OSError) as e:
        logger.debug("Memory info unavailable: %s", e)
        return None
    return vm.total // 1024, vm.available // 1024


@dataclass(frozen=True)
class DiskReport:
    total: int
    used: int
    free: int

    @property
    def use_percent(self) -> int | None:
        """Used share of the space available to users, rounded up like df."""
        size = self.used + self.free
        if size <= 0:
            return None
        return -(-self.used * 100 // size)


def disk_usage(path: str) -> DiskReport | None:
    try:
        usage = psutil.disk_usage(path)
    except (psutil.Error, OSError) as e:
        logger.debug("Disk usage for %s unavailable: %s", path, e)
        return None
    return DiskReport(total=usage.total, used=usage.used, free=usage.free)
