"""Domain models for the reference counter application.

Contains value objects that represent core business concepts. These models
are immutable and contain no infrastructure dependencies.
"""

from src.domain.models.counter import DEFAULT_COUNTER_NAME, Counter

__all__: list[str] = ["Counter", "DEFAULT_COUNTER_NAME"]
