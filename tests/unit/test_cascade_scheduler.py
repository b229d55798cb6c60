"""
Tests for CascadeScheduler.

- Tier-ordered reveal of nodes and edges
- Leverage counter easing
- Reset / reselect cancellation, including timers that ignore cancel()
- Fail-fast on invalid core ids
- Listener notification
"""

from __future__ import annotations

import logging

import pytest

from src.adapters.clock import ManualClock
from src.components.cascade import (
    CascadeConfig,
    CascadeGraph,
    CascadePhase,
    CascadeScheduler,
    CascadeSnapshot,
    NotACoreNodeError,
    Tier,
    UnknownNodeError,
    build_graph,
    create_scheduler,
    downstream_closure,
    ease_out_cubic,
)
from src.rules.models import CascadeRules
from src.tokens import SEMANTIC_DARK

BRAND_CLOSURE = {"brand-300", "sem-primary", "comp-btnFill", "plat-web", "plat-ios", "plat-android"}
BRAND_EDGES = {
    "brand-300->sem-primary",
    "sem-primary->comp-btnFill",
    "comp-btnFill->plat-web",
    "comp-btnFill->plat-ios",
    "comp-btnFill->plat-android",
}


# --- Mock Implementations ---


class LeakyClock(ManualClock):
    """Clock whose cancel calls do nothing, so stale callbacks still fire."""

    def cancel(self, handle: object) -> None:
        pass

    def cancel_frame(self, handle: object) -> None:
        pass


class SnapshotRecorder:
    def __init__(self) -> None:
        self.snapshots: list[CascadeSnapshot] = []

    def __call__(self, snapshot: CascadeSnapshot) -> None:
        self.snapshots.append(snapshot)


@pytest.fixture
def recorder(scheduler: CascadeScheduler) -> SnapshotRecorder:
    recorder = SnapshotRecorder()
    scheduler.subscribe(recorder)
    return recorder


@pytest.fixture
def leaky_clock() -> LeakyClock:
    return LeakyClock(frame_interval_ms=16.0)


@pytest.fixture
def leaky_scheduler(graph: CascadeGraph, leaky_clock: LeakyClock) -> CascadeScheduler:
    return CascadeScheduler(graph, leaky_clock, leaky_clock)


class TestEasing:
    def test_endpoints(self) -> None:
        assert ease_out_cubic(0.0) == 0.0
        assert ease_out_cubic(1.0) == 1.0

    def test_midpoint(self) -> None:
        assert ease_out_cubic(0.5) == pytest.approx(0.875)


class TestConfig:
    def test_defaults(self) -> None:
        config = CascadeConfig()
        assert config.tier_delay_ms == 400
        assert config.leverage_target == 564
        assert config.counter_duration_ms == 4 * 400 + 600

    def test_from_rules(self) -> None:
        rules = CascadeRules(tier_delay_ms=100, counter_tail_ms=50, leverage_target=42)
        config = CascadeConfig.from_rules(rules)
        assert config == CascadeConfig(tier_delay_ms=100, counter_tail_ms=50, leverage_target=42)
        assert config.counter_duration_ms == 450

    def test_create_scheduler_uses_rules(self, graph: CascadeGraph, clock: ManualClock) -> None:
        scheduler = create_scheduler(
            graph, timer=clock, frames=clock, rules=CascadeRules(leverage_target=7)
        )
        assert scheduler.config.leverage_target == 7


class TestIdle:
    def test_initial_state(self, scheduler: CascadeScheduler) -> None:
        snapshot = scheduler.snapshot()
        assert snapshot.phase is CascadePhase.IDLE
        assert snapshot.selected_core is None
        assert snapshot.activated_nodes == frozenset()
        assert snapshot.activated_edges == frozenset()
        assert snapshot.leverage_count == 0


class TestTierReveal:
    def test_activate_returns_closure(self, scheduler: CascadeScheduler) -> None:
        assert scheduler.activate("brand-300") == BRAND_CLOSURE
        assert scheduler.selected_core == "brand-300"
        assert scheduler.phase is CascadePhase.RUNNING

    def test_core_tier_fires_at_zero(
        self, scheduler: CascadeScheduler, clock: ManualClock
    ) -> None:
        scheduler.activate("brand-300")
        clock.advance(0)
        assert scheduler.activated_nodes == {"brand-300"}
        assert scheduler.activated_edges == frozenset()

    def test_tiers_wait_for_their_delay(
        self, scheduler: CascadeScheduler, clock: ManualClock
    ) -> None:
        scheduler.activate("brand-300")
        clock.advance(399)
        assert scheduler.activated_nodes == {"brand-300"}

        clock.advance(1)
        assert scheduler.activated_nodes == {"brand-300", "sem-primary"}
        assert scheduler.activated_edges == {"brand-300->sem-primary"}

        clock.advance(400)
        assert "comp-btnFill" in scheduler.activated_nodes
        assert "plat-web" not in scheduler.activated_nodes

        clock.advance(400)
        assert scheduler.activated_nodes == BRAND_CLOSURE
        assert scheduler.activated_edges == BRAND_EDGES

    def test_edges_never_precede_their_endpoints(
        self, scheduler: CascadeScheduler, clock: ManualClock, recorder: SnapshotRecorder
    ) -> None:
        scheduler.activate("brand-300")
        clock.run_until_idle()
        for snapshot in recorder.snapshots:
            for key in snapshot.activated_edges:
                source, target = key.split("->")
                assert source in snapshot.activated_nodes
                assert target in snapshot.activated_nodes

    def test_full_run(self, scheduler: CascadeScheduler, clock: ManualClock) -> None:
        scheduler.activate("brand-300")
        clock.run_until_idle()
        snapshot = scheduler.snapshot()
        assert snapshot.activated_nodes == BRAND_CLOSURE
        assert snapshot.activated_edges == BRAND_EDGES
        assert snapshot.leverage_count == 564
        assert snapshot.selected_core == "brand-300"

    def test_only_populated_tiers_scheduled(
        self, graph: CascadeGraph, clock: ManualClock
    ) -> None:
        # green-500 stops at the component tier
        scheduler = CascadeScheduler(graph, clock, clock)
        scheduler.activate("green-500")
        clock.advance(800)
        assert scheduler.phase is CascadePhase.SETTLING
        assert scheduler.activated_nodes == {"green-500", "sem-secondary", "comp-btnOutline"}


class TestPhases:
    def test_running_until_last_tier(
        self, scheduler: CascadeScheduler, clock: ManualClock
    ) -> None:
        scheduler.activate("brand-300")
        clock.advance(1199)
        assert scheduler.phase is CascadePhase.RUNNING
        clock.advance(1)
        assert scheduler.phase is CascadePhase.SETTLING

    def test_counter_still_in_flight_while_settling(
        self, scheduler: CascadeScheduler, clock: ManualClock
    ) -> None:
        scheduler.activate("brand-300")
        clock.advance(1200)
        assert scheduler.phase is CascadePhase.SETTLING
        assert scheduler.counter_in_flight
        assert 0 < scheduler.leverage_count < 564

        clock.run_until_idle()
        assert not scheduler.counter_in_flight
        assert scheduler.phase is CascadePhase.SETTLING

    def test_reset_returns_to_idle(
        self, scheduler: CascadeScheduler, clock: ManualClock
    ) -> None:
        scheduler.activate("brand-300")
        clock.run_until_idle()
        scheduler.reset()
        assert scheduler.phase is CascadePhase.IDLE


class TestLeverageCounter:
    def test_monotonic_to_target(
        self, scheduler: CascadeScheduler, clock: ManualClock, recorder: SnapshotRecorder
    ) -> None:
        scheduler.activate("brand-300")
        clock.run_until_idle()
        counts = [s.leverage_count for s in recorder.snapshots]
        assert counts[0] == 0
        assert counts == sorted(counts)
        assert counts[-1] == 564

    def test_counter_finishes_after_duration(
        self, scheduler: CascadeScheduler, clock: ManualClock
    ) -> None:
        scheduler.activate("brand-300")
        clock.advance(1600)
        assert 0 < scheduler.leverage_count < 564
        clock.advance(616)
        assert scheduler.leverage_count == 564
        assert clock.pending == 0

    def test_zero_duration(self, graph: CascadeGraph, clock: ManualClock) -> None:
        config = CascadeConfig(tier_delay_ms=0, counter_tail_ms=0, leverage_target=10)
        scheduler = CascadeScheduler(graph, clock, clock, config)
        scheduler.activate("brand-300")
        clock.run_until_idle()
        assert scheduler.leverage_count == 10
        assert scheduler.activated_nodes == BRAND_CLOSURE


class TestCancellation:
    def test_reselect_immediately(self, scheduler: CascadeScheduler, clock: ManualClock) -> None:
        scheduler.activate("brand-300")
        scheduler.activate("cinnabar-500")
        clock.run_until_idle()
        assert scheduler.activated_nodes == downstream_closure(scheduler.graph, "cinnabar-500")
        assert scheduler.selected_core == "cinnabar-500"

    def test_reselect_mid_run(self, scheduler: CascadeScheduler, clock: ManualClock) -> None:
        scheduler.activate("brand-300")
        clock.advance(500)
        assert "sem-primary" in scheduler.activated_nodes

        scheduler.activate("cinnabar-500")
        assert scheduler.activated_nodes == frozenset()
        assert scheduler.leverage_count == 0

        clock.run_until_idle()
        assert scheduler.activated_nodes == {
            "cinnabar-500",
            "sem-error",
            "comp-alertError",
            "plat-iosAlert",
        }
        assert all(not key.startswith("brand-300") for key in scheduler.activated_edges)
        assert scheduler.leverage_count == 564

    def test_reselect_with_leaky_timers(
        self, leaky_scheduler: CascadeScheduler, leaky_clock: LeakyClock
    ) -> None:
        """Callbacks that survive cancel() are dropped by the generation check."""
        leaky_scheduler.activate("brand-300")
        leaky_clock.advance(500)
        leaky_scheduler.activate("greige-050")
        leaky_clock.run_until_idle()

        assert leaky_scheduler.activated_nodes == {
            "greige-050",
            "sem-surface",
            "comp-cardBg",
            "plat-webCard",
        }
        assert leaky_scheduler.activated_edges == {
            "greige-050->sem-surface",
            "sem-surface->comp-cardBg",
            "comp-cardBg->plat-webCard",
        }

    def test_reset_cancels_pending(self, scheduler: CascadeScheduler, clock: ManualClock) -> None:
        scheduler.activate("brand-300")
        clock.advance(500)
        scheduler.reset()

        assert clock.pending == 0
        clock.run_until_idle()
        snapshot = scheduler.snapshot()
        assert snapshot.activated_nodes == frozenset()
        assert snapshot.activated_edges == frozenset()
        assert snapshot.selected_core is None
        assert snapshot.leverage_count == 0

    def test_reset_with_leaky_timers(
        self, leaky_scheduler: CascadeScheduler, leaky_clock: LeakyClock
    ) -> None:
        leaky_scheduler.activate("brand-300")
        leaky_clock.advance(100)
        leaky_scheduler.reset()
        leaky_clock.run_until_idle()
        assert leaky_scheduler.activated_nodes == frozenset()
        assert leaky_scheduler.leverage_count == 0
        assert leaky_scheduler.phase is CascadePhase.IDLE

    def test_generation_advances(self, scheduler: CascadeScheduler) -> None:
        start = scheduler.generation
        scheduler.activate("brand-300")
        scheduler.reset()
        assert scheduler.generation == start + 2


class TestInvalidSelection:
    def test_unknown_core_raises_and_keeps_state(
        self, scheduler: CascadeScheduler, clock: ManualClock
    ) -> None:
        scheduler.activate("brand-300")
        clock.run_until_idle()
        before = scheduler.snapshot()

        with pytest.raises(UnknownNodeError):
            scheduler.activate("brand-999")

        assert scheduler.snapshot() == before

    def test_non_core_raises(self, scheduler: CascadeScheduler) -> None:
        with pytest.raises(NotACoreNodeError) as exc_info:
            scheduler.activate("sem-primary")
        assert exc_info.value.tier is Tier.SEMANTIC
        assert scheduler.phase is CascadePhase.IDLE


class TestListeners:
    def test_notified_on_activate(
        self, scheduler: CascadeScheduler, recorder: SnapshotRecorder
    ) -> None:
        scheduler.activate("brand-300")
        assert recorder.snapshots[-1].selected_core == "brand-300"
        assert recorder.snapshots[-1].phase is CascadePhase.RUNNING

    def test_unsubscribe(self, scheduler: CascadeScheduler, clock: ManualClock) -> None:
        recorder = SnapshotRecorder()
        unsubscribe = scheduler.subscribe(recorder)
        unsubscribe()
        scheduler.activate("brand-300")
        clock.run_until_idle()
        assert recorder.snapshots == []

    def test_failing_listener_is_logged(
        self,
        scheduler: CascadeScheduler,
        clock: ManualClock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        def broken(snapshot: CascadeSnapshot) -> None:
            raise RuntimeError("render failed")

        scheduler.subscribe(broken)
        with caplog.at_level(logging.ERROR):
            scheduler.activate("brand-300")
            clock.run_until_idle()

        assert "Cascade listener failed" in caplog.text
        assert scheduler.activated_nodes == BRAND_CLOSURE


class TestReplaceGraph:
    def test_replace_resets_and_swaps(
        self, scheduler: CascadeScheduler, clock: ManualClock
    ) -> None:
        scheduler.activate("brand-300")
        clock.advance(500)

        dark = build_graph(SEMANTIC_DARK)
        scheduler.replace_graph(dark)
        assert scheduler.graph is dark
        assert scheduler.phase is CascadePhase.IDLE

        clock.run_until_idle()
        assert scheduler.activated_nodes == frozenset()
