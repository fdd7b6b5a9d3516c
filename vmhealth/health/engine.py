"""Health engine: classify readings and compose the system verdict.

One run samples CPU, Memory and Disk in that order, classifies each against
the global threshold and returns a SystemHealth. Samplers always produce a
reading, so nothing here needs error recovery.
"""

from __future__ import annotations

import logging

from vmhealth.config import Settings, settings
from vmhealth.health.models import HealthVerdict, ResourceReading, SystemHealth
from vmhealth.health.samplers import SAMPLERS

logger = logging.getLogger(__name__)


def classify(reading: ResourceReading, threshold: int) -> HealthVerdict:
    """Healthy iff utilization is strictly below the threshold."""
    return HealthVerdict(
        kind=reading.kind,
        healthy=reading.utilization_percent < threshold,
        reading=reading,
    )


def check_system(cfg: Settings | None = None) -> SystemHealth:
    """Sample every resource, classify it and build the aggregate result."""
    cfg = cfg or settings
    verdicts = [classify(sampler(cfg), cfg.threshold) for sampler in SAMPLERS.values()]
    health = SystemHealth(verdicts=verdicts, threshold=cfg.threshold)

    if health.overall_healthy:
        logger.info("System healthy (threshold %d%%)", cfg.threshold)
    else:
        logger.info(
            "System unhealthy: %s",
            ", ".join(f"{v.kind.value}={v.reading.utilization_percent}%" for v in health.unhealthy),
        )
    return health
