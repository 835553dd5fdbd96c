"""Application services: orchestration of wrappers and domain logic."""

from src.application.services.base import ApplicationService
from src.application.services.counter_app import CounterApp
from src.application.services.counter_service import CounterService

__all__: list[str] = ["ApplicationService", "CounterApp", "CounterService"]
