"""
Cascade component models.

Nodes, edges and the immutable graph, the scheduler's phase and state
snapshot, error types, and the entry-point input/output records.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from src.tokens import CORE_PALETTE, CorePalette, SemanticColors

# --- Tiers ---


class Tier(IntEnum):
    CORE = 0
    SEMANTIC = 1
    COMPONENT = 2
    PLATFORM = 3

    @property
    def label(self) -> str:
        return TIER_LABELS[self]


TIER_LABELS = {
    Tier.CORE: "Core Tokens",
    Tier.SEMANTIC: "Semantic Aliases",
    Tier.COMPONENT: "Component Styles",
    Tier.PLATFORM: "Platform Outputs",
}

TIER_COUNT = len(Tier)


# --- Errors ---


class CascadeError(Exception):
    """Base exception for cascade errors."""

    pass


class UnknownNodeError(CascadeError):
    """Node id is not part of the graph."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Unknown cascade node: {node_id}")


class NotACoreNodeError(CascadeError):
    """Only core-tier nodes can start a cascade."""

    def __init__(self, node_id: str, tier: Tier) -> None:
        self.node_id = node_id
        self.tier = tier
        super().__init__(f"Node {node_id} is in tier '{tier.label}', not '{Tier.CORE.label}'")


@dataclass(frozen=True)
class CascadeValidationError:
    """Cascade validation error."""

    code: str
    message: str
    node_id: str | None = None


# --- Graph ---


@dataclass(frozen=True)
class CascadeNode:
    """A token in the cascade diagram. x/y are layout only."""

    id: str
    label: str
    tier: Tier
    color: str
    x: int
    y: int


@dataclass(frozen=True)
class CascadeEdge:
    """`target` is derived from `source`."""

    source: str
    target: str

    @property
    def key(self) -> str:
        return edge_key(self.source, self.target)


def edge_key(source: str, target: str) -> str:
    return f"{source}->{target}"


@dataclass(frozen=True)
class CascadeGraph:
    """
    Immutable layered token graph.

    Rebuilt wholesale when the semantic colors change; never patched.
    """

    nodes: tuple[CascadeNode, ...]
    edges: tuple[CascadeEdge, ...]
    _index: dict[str, CascadeNode] = field(init=False, repr=False, compare=False)
    _adjacency: dict[str, tuple[str, ...]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {node.id: node for node in self.nodes}
        adjacency: dict[str, list[str]] = {}
        for edge in self.edges:
            adjacency.setdefault(edge.source, []).append(edge.target)
        object.__setattr__(self, "_index", index)
        object.__setattr__(
            self, "_adjacency", {k: tuple(v) for k, v in adjacency.items()}
        )

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def node(self, node_id: str) -> CascadeNode:
        try:
            return self._index[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def successors(self, node_id: str) -> tuple[str, ...]:
        return self._adjacency.get(node_id, ())

    def core_nodes(self) -> list[CascadeNode]:
        return [n for n in self.nodes if n.tier == Tier.CORE]

    def edges_into(self, targets: Iterable[str]) -> list[CascadeEdge]:
        wanted = set(targets)
        return [e for e in self.edges if e.target in wanted]


# --- Scheduler state ---


class CascadePhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SETTLING = "settling"


@dataclass(frozen=True)
class CascadeSnapshot:
    """Read-only view of the animation state for one render tick."""

    phase: CascadePhase
    selected_core: str | None
    activated_nodes: frozenset[str]
    activated_edges: frozenset[str]
    leverage_count: int


# --- Input Models ---


@dataclass(frozen=True)
class BuildGraphInput:
    """Input for building the cascade graph."""

    semantic: SemanticColors
    palette: CorePalette = CORE_PALETTE


@dataclass(frozen=True)
class ClosureInput:
    """Input for computing a node's downstream closure."""

    graph: CascadeGraph
    node_id: str


# --- Output Models ---


@dataclass(frozen=True)
class GraphOutput:
    """Output for build graph operation."""

    graph: CascadeGraph
    errors: list[CascadeValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ClosureOutput:
    """Output for closure operation."""

    closure: frozenset[str]
    tiers: dict[Tier, list[str]]
    errors: list[CascadeValidationError] = field(default_factory=list)
    success: bool = True
