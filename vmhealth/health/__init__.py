"""Health subsystem: probes, samplers, classifier, explainer."""

from .engine import check_system, classify
from .explain import OverallExplanation, explain, explain_details, explain_overall
from .models import HealthVerdict, ResourceKind, ResourceReading, Source, SystemHealth
