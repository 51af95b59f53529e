"""
Request-scoped access to the collaborators wired up in create_app().
"""

from fastapi import Request

from ..health import HealthReporter
from ..items import ItemsRepository


def get_repository(request: Request) -> ItemsRepository:
    return request.app.state.repository


def get_health_reporter(request: Request) -> HealthReporter:
    return request.app.state.health_reporter
