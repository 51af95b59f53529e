"""
Health reporter for the Catalog API.

Runs the registered probes that match a tag predicate and aggregates their
results into a HealthReport. Probe failures are captured as results and
never propagate to the caller.
"""

import asyncio
import logging
import time
from datetime import timedelta
from typing import Callable, FrozenSet, Iterable, Tuple

from .models import CheckResult, HealthReport, HealthStatus
from .probes import READY_TAG, ProbeRegistration


logger = logging.getLogger(__name__)

TagPredicate = Callable[[FrozenSet[str]], bool]


def tagged(tag: str) -> TagPredicate:
    """Predicate matching probes that carry ``tag``."""
    return lambda tags: tag in tags


def no_probes(tags: FrozenSet[str]) -> bool:
    """Predicate matching nothing; used for liveness."""
    return False


def _failure_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class HealthReporter:
    """
    Runs health probes on demand.

    Usage:
        reporter = HealthReporter([
            mongodb_probe(client),
        ])

        report = await reporter.report_ready()
        body = report.to_response()
    """

    def __init__(self, registrations: Iterable[ProbeRegistration] = ()):
        """
        Initialize health reporter.

        Args:
            registrations: Probe definitions built at startup. Names must
                be unique.
        """
        self.registrations: Tuple[ProbeRegistration, ...] = tuple(registrations)

        names = [registration.name for registration in self.registrations]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate probe names: {', '.join(duplicates)}")

    async def _run_probe(self, registration: ProbeRegistration) -> CheckResult:
        """Run one probe, converting errors and timeouts into a result."""
        start = time.perf_counter()
        try:
            if registration.timeout is None:
                status = await registration.check()
            else:
                status = await asyncio.wait_for(
                    registration.check(), timeout=registration.timeout
                )
            status = HealthStatus(status)
            exception = None
        except asyncio.TimeoutError as e:
            status = registration.failure_status
            if registration.timeout is None:
                exception = _failure_message(e)
            else:
                exception = (
                    f"Probe '{registration.name}' timed out after "
                    f"{registration.timeout:g}s"
                )
        except Exception as e:
            status = registration.failure_status
            exception = _failure_message(e)

        duration = timedelta(seconds=time.perf_counter() - start)

        if exception is None:
            logger.debug(
                f"Probe {registration.name} reported {status.value} "
                f"in {duration.total_seconds():.3f}s"
            )
            return CheckResult(
                name=registration.name,
                status=status,
                duration=duration,
            )

        logger.warning(
            f"Probe {registration.name} failed after "
            f"{duration.total_seconds():.3f}s: {exception}"
        )
        return CheckResult(
            name=registration.name,
            status=status,
            exception=exception,
            duration=duration,
        )

    async def run(self, predicate: TagPredicate) -> HealthReport:
        """
        Run every probe whose tags satisfy ``predicate``.

        Probes run concurrently; entries keep registration order.

        Args:
            predicate: Called with each probe's tag set

        Returns:
            Freshly built HealthReport
        """
        selected = [r for r in self.registrations if predicate(r.tags)]

        start = time.perf_counter()
        entries = await asyncio.gather(*(self._run_probe(r) for r in selected))
        total_duration = timedelta(seconds=time.perf_counter() - start)

        report = HealthReport.from_entries(list(entries), total_duration)
        if selected:
            logger.info(
                f"Health check ran {len(selected)} probe(s): {report.status.value} "
                f"({total_duration.total_seconds():.3f}s)"
            )
        return report

    async def report_ready(self) -> HealthReport:
        """Run the probes tagged ``ready``."""
        return await self.run(tagged(READY_TAG))

    async def report_live(self) -> HealthReport:
        """Run no probes; the process answering is the signal."""
        return await self.run(no_probes)
