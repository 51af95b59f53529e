"""
Health report data models.

A HealthReport is built fresh for every request to a health endpoint and
rendered straight into the response body.
"""

from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field


NO_EXCEPTION = "none"


class HealthStatus(str, Enum):
    """Status reported by a probe, and by a report as a whole."""

    UNHEALTHY = "Unhealthy"
    DEGRADED = "Degraded"
    HEALTHY = "Healthy"

    @property
    def severity(self) -> int:
        """Rank used when aggregating; higher is worse."""
        return _SEVERITY[self]


_SEVERITY = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}


def worst_status(statuses) -> HealthStatus:
    """
    Reduce a collection of statuses to the least healthy one.

    Unhealthy dominates Degraded, which dominates Healthy. An empty
    collection is Healthy.
    """
    worst = HealthStatus.HEALTHY
    for status in statuses:
        if status.severity > worst.severity:
            worst = status
    return worst


def format_duration(duration: timedelta) -> str:
    """
    Render a duration as ``[-][d.]hh:mm:ss[.fffffff]``.

    The fraction has seven digits (100ns ticks) and is left out when zero,
    so 10ms renders as ``00:00:00.0100000``.
    """
    ticks = (
        (duration.days * 86_400 + duration.seconds) * 10_000_000
        + duration.microseconds * 10
    )
    sign = "-" if ticks < 0 else ""
    ticks = abs(ticks)

    total_seconds, fraction = divmod(ticks, 10_000_000)
    total_minutes, seconds = divmod(total_seconds, 60)
    total_hours, minutes = divmod(total_minutes, 60)
    days, hours = divmod(total_hours, 24)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if fraction:
        text = f"{text}.{fraction:07d}"
    return f"{sign}{text}"


class CheckResult(BaseModel):
    """Outcome of a single probe run."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Probe name, unique among registered probes")
    status: HealthStatus = Field(..., description="Status reported for the probe")
    exception: str = Field(
        default=NO_EXCEPTION,
        description="Failure message when the probe raised or timed out",
    )
    duration: timedelta = Field(
        default_factory=timedelta,
        description="Time the probe took to run",
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "exception": self.exception,
            "duration": format_duration(self.duration),
        }


class HealthReport(BaseModel):
    """
    Aggregated result of one health check run.

    ``status`` is always the worst status among ``entries`` (Healthy when
    there are none); use :meth:`from_entries` to build a report.
    """

    model_config = ConfigDict(frozen=True)

    status: HealthStatus = Field(..., description="Overall status")
    entries: Tuple[CheckResult, ...] = Field(
        default=(),
        description="One result per probe that matched the filter",
    )
    total_duration: timedelta = Field(
        default_factory=timedelta,
        description="Wall time for the whole run",
    )

    @classmethod
    def from_entries(
        cls,
        entries: List[CheckResult],
        total_duration: timedelta = timedelta(0),
    ) -> "HealthReport":
        return cls(
            status=worst_status(entry.status for entry in entries),
            entries=tuple(entries),
            total_duration=total_duration,
        )

    def to_response(self) -> Dict[str, Any]:
        """Shape the report as the JSON body returned by the health endpoints."""
        return {
            "status": self.status.value,
            "checks": [entry.to_dict() for entry in self.entries],
        }
