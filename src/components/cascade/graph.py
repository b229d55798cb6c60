"""
Cascade graph construction and traversal.

The reference graph has four tiers of five rows each. Edges only run from
one tier to the next, but traversal does not depend on that: it follows
whatever edges exist and never revisits a node.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from src.tokens import CORE_PALETTE, CorePalette, SemanticColors

from .models import CascadeEdge, CascadeGraph, CascadeNode, Tier

# (source, target) pairs, tier by tier
REFERENCE_EDGES: tuple[tuple[str, str], ...] = (
    # Core -> Semantic
    ("brand-300", "sem-primary"),
    ("green-500", "sem-secondary"),
    ("greige-900", "sem-onSurface"),
    ("greige-050", "sem-surface"),
    ("cinnabar-500", "sem-error"),
    # Semantic -> Component
    ("sem-primary", "comp-btnFill"),
    ("sem-secondary", "comp-btnOutline"),
    ("sem-surface", "comp-cardBg"),
    ("sem-onSurface", "comp-inputBorder"),
    ("sem-error", "comp-alertError"),
    # Component -> Platform
    ("comp-btnFill", "plat-web"),
    ("comp-btnFill", "plat-ios"),
    ("comp-btnFill", "plat-android"),
    ("comp-cardBg", "plat-webCard"),
    ("comp-alertError", "plat-iosAlert"),
)


def _column(tier: Tier, rows: list[tuple[str, str, str]]) -> list[CascadeNode]:
    return [
        CascadeNode(id=node_id, label=label, tier=tier, color=color, x=int(tier), y=row)
        for row, (node_id, label, color) in enumerate(rows)
    ]


def build_graph(semantic: SemanticColors, palette: CorePalette = CORE_PALETTE) -> CascadeGraph:
    """
    Build the reference cascade graph for a semantic color set.

    Topology is fixed; only node colors depend on the inputs.
    """
    nodes = [
        *_column(
            Tier.CORE,
            [
                ("brand-300", "brand.300", palette.brand.s300),
                ("green-500", "bottleGreen.500", palette.bottle_green.s500),
                ("greige-900", "greige.900", palette.greige.s900),
                ("greige-050", "greige.050", palette.greige.s050),
                ("cinnabar-500", "cinnabar.500", palette.cinnabar.s500),
            ],
        ),
        *_column(
            Tier.SEMANTIC,
            [
                ("sem-primary", "primary", semantic.primary),
                ("sem-secondary", "secondary", semantic.secondary),
                ("sem-onSurface", "onSurface", semantic.on_surface),
                ("sem-surface", "surface", semantic.surface_secondary),
                ("sem-error", "error", semantic.error),
            ],
        ),
        *_column(
            Tier.COMPONENT,
            [
                ("comp-btnFill", "Button Fill", semantic.primary),
                ("comp-btnOutline", "Button Outline", semantic.secondary),
                ("comp-cardBg", "Card Surface", semantic.surface_secondary),
                ("comp-inputBorder", "Input Border", semantic.border),
                ("comp-alertError", "Alert Error", semantic.error),
            ],
        ),
        *_column(
            Tier.PLATFORM,
            [
                ("plat-web", "Web CSS", semantic.primary),
                ("plat-ios", "iOS UIColor", semantic.primary),
                ("plat-android", "Android XML", semantic.primary),
                ("plat-webCard", "Web Card", semantic.surface_secondary),
                ("plat-iosAlert", "iOS Alert", semantic.error),
            ],
        ),
    ]
    edges = [CascadeEdge(source, target) for source, target in REFERENCE_EDGES]
    return CascadeGraph(nodes=tuple(nodes), edges=tuple(edges))


def downstream_closure(graph: CascadeGraph, start_id: str) -> frozenset[str]:
    """
    All nodes reachable from start_id along derivation edges, start included.

    Breadth-first, O(V+E). Each node is visited at most once, so cycles
    terminate.

    Raises:
        UnknownNodeError: if start_id is not in the graph
    """
    graph.node(start_id)

    visited = {start_id}
    queue = deque([start_id])
    while queue:
        current = queue.popleft()
        for target in graph.successors(current):
            if target not in visited:
                visited.add(target)
                queue.append(target)
    return frozenset(visited)


def group_by_tier(graph: CascadeGraph, ids: Iterable[str]) -> dict[Tier, list[str]]:
    """
    Partition node ids by tier.

    Only populated tiers appear. Ids within a tier keep graph node order.
    """
    wanted = set(ids)
    for node_id in wanted:
        graph.node(node_id)

    tiers: dict[Tier, list[str]] = {}
    for node in graph.nodes:
        if node.id in wanted:
            tiers.setdefault(node.tier, []).append(node.id)
    return dict(sorted(tiers.items()))
