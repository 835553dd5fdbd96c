"""
Application layer - Orchestration of infrastructure and domain logic.

This layer contains:
- Application services (logic sandwiches over infrastructure wrappers)
- DTOs returned by those services

IMPORT RULES:
- CAN import from: domain, config, infrastructure
"""

from src.application.services import ApplicationService, CounterApp, CounterService

__all__: list[str] = ["ApplicationService", "CounterApp", "CounterService"]
