"""Nullable construction framework.

Building blocks for components that can be created live or null:

- NullableComponent, Mode: the create/create_null contract
- Dependency, build_dependencies, walk_graph, verify_graph_mode: graph wiring
- ConfigurableResponses: canned responses for embedded stubs
- CallLog, OutputTracker: output tracking
- StateEventEmitter, Subscription, ANY_EVENT: state events
- InfrastructureWrapper: base class for wrappers of one external capability
"""

from src.infrastructure.nullability.component import Mode, NullableComponent
from src.infrastructure.nullability.event_emitter import (
    ANY_EVENT,
    EventHandler,
    StateEventEmitter,
    Subscription,
)
from src.infrastructure.nullability.graph import (
    Dependency,
    build_dependencies,
    verify_graph_mode,
    walk_graph,
)
from src.infrastructure.nullability.output_tracker import CallLog, OutputTracker
from src.infrastructure.nullability.responses import ConfigurableResponses
from src.infrastructure.nullability.wrapper import InfrastructureWrapper

__all__: list[str] = [
    "ANY_EVENT",
    "CallLog",
    "ConfigurableResponses",
    "Dependency",
    "EventHandler",
    "InfrastructureWrapper",
    "Mode",
    "NullableComponent",
    "OutputTracker",
    "StateEventEmitter",
    "Subscription",
    "build_dependencies",
    "verify_graph_mode",
    "walk_graph",
]
