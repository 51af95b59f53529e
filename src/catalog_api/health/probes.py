"""
Probe definitions.

A probe is a named, tagged async callable that returns a HealthStatus.
Registrations are built once at startup and handed to the HealthReporter.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, FrozenSet, Iterable, Optional

from pymongo import MongoClient

from .models import HealthStatus


logger = logging.getLogger(__name__)

READY_TAG = "ready"
MONGODB_PROBE_NAME = "mongodb"
MONGODB_PROBE_TIMEOUT_SECONDS = 3.0

ProbeCheck = Callable[[], Awaitable[HealthStatus]]


@dataclass(frozen=True)
class ProbeRegistration:
    """A probe plus the metadata the reporter needs to run it."""

    name: str
    check: ProbeCheck
    tags: FrozenSet[str] = field(default_factory=frozenset)
    timeout: Optional[float] = None
    failure_status: HealthStatus = HealthStatus.UNHEALTHY

    def __post_init__(self):
        # Accept any iterable of tags
        object.__setattr__(self, "tags", frozenset(self.tags))
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"Probe {self.name!r} timeout must be positive")


class MongoDbPingCheck:
    """
    Checks that MongoDB answers a ``ping`` command.

    Uses the shared application client; the blocking driver call runs on
    a worker thread so the event loop stays responsive.
    """

    def __init__(self, client: MongoClient, database_name: str = "admin"):
        self.client = client
        self.database_name = database_name

    def _ping(self) -> dict:
        return self.client[self.database_name].command("ping")

    async def __call__(self) -> HealthStatus:
        reply = await asyncio.to_thread(self._ping)
        if reply.get("ok") == 1:
            return HealthStatus.HEALTHY

        logger.warning(f"Unexpected MongoDB ping reply: {reply}")
        return HealthStatus.UNHEALTHY


def mongodb_probe(
    client: MongoClient,
    name: str = MONGODB_PROBE_NAME,
    timeout: float = MONGODB_PROBE_TIMEOUT_SECONDS,
    tags: Iterable[str] = (READY_TAG,),
) -> ProbeRegistration:
    """Build the readiness registration for the document store."""
    return ProbeRegistration(
        name=name,
        check=MongoDbPingCheck(client),
        tags=frozenset(tags),
        timeout=timeout,
    )
