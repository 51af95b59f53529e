"""
Catalog API - item catalog microservice

Serves CRUD endpoints for catalog items backed by MongoDB, plus liveness
and readiness health checks for container orchestrators.

Main modules:
- core: configuration
- items: item models and repositories
- health: probes and the health reporter
- api: FastAPI routers
- cli: catalogctl operational CLI
"""

__version__ = "0.1.0"
__author__ = "Catalog API Team"

__all__ = ["__version__", "__author__"]
