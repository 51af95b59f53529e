"""
Health check probes and reporting package.
"""

from .models import CheckResult, HealthReport, HealthStatus, format_duration
from .probes import MongoDbPingCheck, ProbeRegistration, mongodb_probe
from .reporter import HealthReporter, no_probes, tagged

__all__ = [
    "CheckResult",
    "HealthReport",
    "HealthStatus",
    "format_duration",
    "MongoDbPingCheck",
    "ProbeRegistration",
    "mongodb_probe",
    "HealthReporter",
    "no_probes",
    "tagged",
]
