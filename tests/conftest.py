from pathlib import Path

import pytest

from src.adapters.clock import ManualClock
from src.components.cascade import CascadeGraph, CascadeScheduler, build_graph
from src.tokens import SEMANTIC_LIGHT

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def rules_path() -> Path:
    """Path to the real rules.yaml at the project root."""
    return PROJECT_ROOT / "rules.yaml"


@pytest.fixture
def graph() -> CascadeGraph:
    return build_graph(SEMANTIC_LIGHT)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(frame_interval_ms=16.0)


@pytest.fixture
def scheduler(graph: CascadeGraph, clock: ManualClock) -> CascadeScheduler:
    """Scheduler on virtual time with default timing (400ms tiers, 564 target)."""
    return CascadeScheduler(graph, clock, clock)
