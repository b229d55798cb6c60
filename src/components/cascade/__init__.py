"""
Cascade component - Token dependency graph and tiered reveal scheduler.
"""

from ._impl import DEFAULT_CONFIG, CascadeConfig, CascadeScheduler, ease_out_cubic
from .component import create_scheduler, run, run_build_graph, run_closure
from .graph import REFERENCE_EDGES, build_graph, downstream_closure, group_by_tier
from .models import (
    TIER_COUNT,
    TIER_LABELS,
    BuildGraphInput,
    CascadeEdge,
    CascadeError,
    CascadeGraph,
    CascadeNode,
    CascadePhase,
    CascadeSnapshot,
    CascadeValidationError,
    ClosureInput,
    ClosureOutput,
    GraphOutput,
    NotACoreNodeError,
    Tier,
    UnknownNodeError,
    edge_key,
)
from .ports import CascadeListener, FramePort, TimerPort

__all__ = [
    # Entry points
    "run",
    "run_build_graph",
    "run_closure",
    "create_scheduler",
    # Graph
    "build_graph",
    "downstream_closure",
    "group_by_tier",
    "edge_key",
    "REFERENCE_EDGES",
    "CascadeGraph",
    "CascadeNode",
    "CascadeEdge",
    "Tier",
    "TIER_COUNT",
    "TIER_LABELS",
    # Scheduler
    "CascadeScheduler",
    "CascadeConfig",
    "DEFAULT_CONFIG",
    "CascadePhase",
    "CascadeSnapshot",
    "ease_out_cubic",
    # Input/output models
    "BuildGraphInput",
    "ClosureInput",
    "GraphOutput",
    "ClosureOutput",
    "CascadeValidationError",
    # Errors
    "CascadeError",
    "UnknownNodeError",
    "NotACoreNodeError",
    # Ports
    "TimerPort",
    "FramePort",
    "CascadeListener",
]
