"""Application-layer DTOs."""

from src.application.dtos.counter_update import CounterUpdateDTO

__all__: list[str] = ["CounterUpdateDTO"]
