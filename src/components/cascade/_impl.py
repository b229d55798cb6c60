"""
CascadeScheduler - Tier-by-tier reveal of a core token's downstream fan-out.

Key behaviors:
- Selecting a core node resets all state, then schedules one reveal per
  populated tier at tier * tier_delay_ms
- Edges into a tier light up together with that tier, never before their
  source tier
- The leverage counter eases from 0 to its target on a separate frame loop
- Every callback carries the generation it was scheduled under; a callback
  from an older generation is a no-op even if cancellation missed it
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from .graph import downstream_closure, group_by_tier
from .models import (
    TIER_COUNT,
    CascadeGraph,
    CascadePhase,
    CascadeSnapshot,
    NotACoreNodeError,
    Tier,
)
from .ports import CascadeListener, FramePort, TimerHandle, TimerPort

if TYPE_CHECKING:
    from src.rules.models import CascadeRules

logger = logging.getLogger(__name__)


# --- Configuration ---


@dataclass(frozen=True)
class CascadeConfig:
    """Cascade animation timing from rules."""

    tier_delay_ms: float = 400
    counter_tail_ms: float = 600
    leverage_target: int = 564

    @property
    def counter_duration_ms(self) -> float:
        return TIER_COUNT * self.tier_delay_ms + self.counter_tail_ms

    @classmethod
    def from_rules(cls, rules: CascadeRules) -> CascadeConfig:
        return cls(
            tier_delay_ms=rules.tier_delay_ms,
            counter_tail_ms=rules.counter_tail_ms,
            leverage_target=rules.leverage_target,
        )


DEFAULT_CONFIG = CascadeConfig()


def ease_out_cubic(progress: float) -> float:
    return 1 - (1 - progress) ** 3


# --- Scheduler ---


class CascadeScheduler:
    """
    Owns the cascade animation state and drives it through timer ports.

    Phases: IDLE -> RUNNING (tier reveals pending) -> SETTLING (all tiers
    shown, counter may still be animating) -> IDLE on reset. Activating a
    new core from any phase cancels the old run and re-enters RUNNING.
    """

    def __init__(
        self,
        graph: CascadeGraph,
        timer: TimerPort,
        frames: FramePort,
        config: CascadeConfig = DEFAULT_CONFIG,
    ) -> None:
        self._graph = graph
        self._timer = timer
        self._frames = frames
        self._config = config

        self._generation = 0
        self._tier_handles: list[TimerHandle] = []
        self._frame_handle: TimerHandle | None = None
        self._pending_tiers = 0
        self._listeners: list[CascadeListener] = []

        self._phase = CascadePhase.IDLE
        self._selected_core: str | None = None
        self._activated_nodes: set[str] = set()
        self._activated_edges: set[str] = set()
        self._leverage_count = 0

    # --- Read access for the view layer ---

    @property
    def graph(self) -> CascadeGraph:
        return self._graph

    @property
    def config(self) -> CascadeConfig:
        return self._config

    @property
    def phase(self) -> CascadePhase:
        return self._phase

    @property
    def selected_core(self) -> str | None:
        return self._selected_core

    @property
    def activated_nodes(self) -> frozenset[str]:
        return frozenset(self._activated_nodes)

    @property
    def activated_edges(self) -> frozenset[str]:
        return frozenset(self._activated_edges)

    @property
    def leverage_count(self) -> int:
        return self._leverage_count

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def counter_in_flight(self) -> bool:
        return self._frame_handle is not None

    def snapshot(self) -> CascadeSnapshot:
        return CascadeSnapshot(
            phase=self._phase,
            selected_core=self._selected_core,
            activated_nodes=frozenset(self._activated_nodes),
            activated_edges=frozenset(self._activated_edges),
            leverage_count=self._leverage_count,
        )

    def subscribe(self, listener: CascadeListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Commands ---

    def activate(self, core_id: str) -> frozenset[str]:
        """
        Start a cascade from a core-tier node.

        Args:
            core_id: Id of a node in the core tier

        Returns:
            The downstream closure being revealed

        Raises:
            UnknownNodeError: core_id is not in the graph (state untouched)
            NotACoreNodeError: core_id is not a core-tier node (state untouched)
        """
        node = self._graph.node(core_id)
        if node.tier != Tier.CORE:
            raise NotACoreNodeError(core_id, node.tier)

        self._cancel_pending()
        self._clear_state()
        generation = self._generation
        graph = self._graph

        self._selected_core = core_id
        closure = downstream_closure(graph, core_id)
        tiers = group_by_tier(graph, closure)

        self._phase = CascadePhase.RUNNING
        self._pending_tiers = len(tiers)
        for tier, members in tiers.items():
            handle = self._timer.call_later(
                tier * self._config.tier_delay_ms,
                partial(self._reveal_tier, generation, graph, tier, tuple(members), closure),
            )
            self._tier_handles.append(handle)

        start_ms = self._timer.now_ms()
        self._frame_handle = self._frames.request_frame(
            partial(self._tick_counter, generation, start_ms)
        )

        logger.info(
            "Cascade started from %s: %d nodes across %d tiers",
            core_id,
            len(closure),
            len(tiers),
        )
        self._notify()
        return closure

    def reset(self) -> None:
        """Cancel any run in flight and clear all animation state."""
        self._cancel_pending()
        self._clear_state()
        logger.debug("Cascade reset (generation %d)", self._generation)
        self._notify()

    def replace_graph(self, graph: CascadeGraph) -> None:
        """Swap in a rebuilt graph (appearance or brand change). Resets first."""
        self.reset()
        self._graph = graph

    # --- Callbacks ---

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug(
                "Dropping callback from generation %d (current %d)",
                generation,
                self._generation,
            )
            return True
        return False

    def _reveal_tier(
        self,
        generation: int,
        graph: CascadeGraph,
        tier: Tier,
        members: tuple[str, ...],
        closure: frozenset[str],
    ) -> None:
        if self._is_stale(generation):
            return

        self._activated_nodes.update(members)
        if tier > Tier.CORE:
            self._activated_edges.update(
                edge.key for edge in graph.edges_into(members) if edge.source in closure
            )

        self._pending_tiers -= 1
        if self._pending_tiers == 0:
            self._phase = CascadePhase.SETTLING
        self._notify()

    def _tick_counter(self, generation: int, start_ms: float, now_ms: float) -> None:
        if self._is_stale(generation):
            return

        duration = self._config.counter_duration_ms
        elapsed = max(now_ms - start_ms, 0.0)
        progress = min(elapsed / duration, 1.0) if duration > 0 else 1.0

        eased = ease_out_cubic(progress)
        self._leverage_count = math.floor(eased * self._config.leverage_target + 0.5)

        if progress < 1:
            self._frame_handle = self._frames.request_frame(
                partial(self._tick_counter, generation, start_ms)
            )
        else:
            self._frame_handle = None
        self._notify()

    # --- Internals ---

    def _cancel_pending(self) -> None:
        self._generation += 1
        for handle in self._tier_handles:
            self._timer.cancel(handle)
        self._tier_handles.clear()
        if self._frame_handle is not None:
            self._frames.cancel_frame(self._frame_handle)
            self._frame_handle = None
        self._pending_tiers = 0

    def _clear_state(self) -> None:
        self._phase = CascadePhase.IDLE
        self._selected_core = None
        self._activated_nodes.clear()
        self._activated_edges.clear()
        self._leverage_count = 0

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Cascade listener failed")
