"""
Cascade component - Token dependency graph and animated fan-out.

Builds the four-tier token graph (core -> semantic -> component ->
platform), answers reachability queries, and wires the scheduler that
reveals a core token's downstream closure tier by tier.

Invariants:
- The graph is a pure function of the semantic colors; rebuilt, never patched
- A closure always contains its start node
- Closure results are sets; edge order has no observable effect
"""

from __future__ import annotations

from src.rules.models import CascadeRules

from ._impl import CascadeConfig, CascadeScheduler
from .graph import build_graph, downstream_closure, group_by_tier
from .models import (
    BuildGraphInput,
    CascadeGraph,
    CascadeValidationError,
    ClosureInput,
    ClosureOutput,
    GraphOutput,
    UnknownNodeError,
)
from .ports import FramePort, TimerPort


def _build_config(rules: CascadeRules | None) -> CascadeConfig:
    """Build cascade config from rules."""
    if rules is None:
        return CascadeConfig()
    return CascadeConfig.from_rules(rules)


def create_scheduler(
    graph: CascadeGraph,
    *,
    timer: TimerPort,
    frames: FramePort,
    rules: CascadeRules | None = None,
) -> CascadeScheduler:
    """Create a cascade scheduler from ports and optional rules."""
    return CascadeScheduler(graph, timer, frames, _build_config(rules))


# --- Component Entry Points ---


def run_build_graph(inp: BuildGraphInput) -> GraphOutput:
    """
    Build the cascade graph for a semantic color set.

    Args:
        inp: Input containing semantic colors and core palette.

    Returns:
        GraphOutput with the immutable graph.
    """
    return GraphOutput(graph=build_graph(inp.semantic, inp.palette))


def run_closure(inp: ClosureInput) -> ClosureOutput:
    """
    Compute a node's downstream closure grouped by tier.

    Args:
        inp: Input containing graph and start node id.

    Returns:
        ClosureOutput with closure and tiers, or an unknown-node error.
    """
    try:
        closure = downstream_closure(inp.graph, inp.node_id)
    except UnknownNodeError as e:
        return ClosureOutput(
            closure=frozenset(),
            tiers={},
            errors=[
                CascadeValidationError(
                    code="node_not_found",
                    message=str(e),
                    node_id=inp.node_id,
                )
            ],
            success=False,
        )

    return ClosureOutput(
        closure=closure,
        tiers=group_by_tier(inp.graph, closure),
    )


def run(inp: BuildGraphInput | ClosureInput) -> GraphOutput | ClosureOutput:
    """
    Main entry point for the cascade component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, BuildGraphInput):
        return run_build_graph(inp)
    elif isinstance(inp, ClosureInput):
        return run_closure(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
