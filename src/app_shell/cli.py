import argparse
import logging
import sys
from pathlib import Path

from src.adapters.clock import ManualClock, RealtimeLoop
from src.components.C1_DesignSystemKit import (
    annotate_pairings,
    classify,
    contrast_ratio,
    standard_pairings,
)
from src.components.cascade import (
    CascadeError,
    CascadeSnapshot,
    ClosureInput,
    build_graph,
    create_scheduler,
    run_closure,
)
from src.rules.loader import load_rules
from src.rules.models import Rules
from src.tokens import Appearance, semantic_for

logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_rules(path: str) -> Rules:
    if not Path(path).exists():
        logger.error(f"Rules file {path} not found.")
        sys.exit(1)
    return load_rules(Path(path))


def _appearance(rules: Rules, args: argparse.Namespace) -> Appearance:
    return args.appearance or rules.display.appearance


def _backdrop_is_light(rules: Rules, args: argparse.Namespace) -> bool:
    if args.backdrop is None:
        return rules.contrast.default_background_is_light
    return args.backdrop == "light"


def handle_check(rules: Rules, args: argparse.Namespace) -> None:
    ratio = contrast_ratio(args.fg, args.bg, _backdrop_is_light(rules, args))
    print(f"{args.fg} on {args.bg}: {ratio:.2f}:1 {classify(ratio).value}")


def handle_pairings(rules: Rules, args: argparse.Namespace) -> None:
    semantic = semantic_for(_appearance(rules, args))
    annotations = annotate_pairings(
        standard_pairings(semantic),
        background_is_light=_backdrop_is_light(rules, args),
    )
    for a in annotations:
        p = a.pairing
        print(
            f"{p.text_token:<20} on {p.surface_token:<17} "
            f"{a.ratio:>6.2f}:1  {a.rating.value}"
        )


def handle_closure(rules: Rules, args: argparse.Namespace) -> None:
    graph = build_graph(semantic_for(_appearance(rules, args)))
    output = run_closure(ClosureInput(graph=graph, node_id=args.node_id))
    if not output.success:
        for error in output.errors:
            logger.error(error.message)
        sys.exit(1)

    for tier, members in output.tiers.items():
        print(f"{tier.label}: {', '.join(members)}")


def handle_cascade(rules: Rules, args: argparse.Namespace) -> None:
    graph = build_graph(semantic_for(_appearance(rules, args)))
    frame_interval = rules.cascade.frame_interval_ms
    clock = ManualClock(frame_interval_ms=frame_interval) if args.instant else RealtimeLoop(
        frame_interval_ms=frame_interval
    )
    scheduler = create_scheduler(graph, timer=clock, frames=clock, rules=rules.cascade)

    shown: set[str] = set()

    def render(snapshot: CascadeSnapshot) -> None:
        new_nodes = snapshot.activated_nodes - shown
        if new_nodes:
            shown.update(new_nodes)
            ordered = [n.id for n in graph.nodes if n.id in new_nodes]
            print(f"[{clock.now_ms():7.0f}ms] {', '.join(ordered)}")

    scheduler.subscribe(render)
    try:
        scheduler.activate(args.core_id)
    except CascadeError as e:
        logger.error(str(e))
        sys.exit(1)

    clock.run_until_idle()
    snapshot = scheduler.snapshot()
    print(f"Edges: {', '.join(sorted(snapshot.activated_edges))}")
    print(f"1 change -> {snapshot.leverage_count} updates")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Token cascade & contrast CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules YAML")
    parser.add_argument(
        "--appearance", choices=["light", "dark"], help="Override display appearance"
    )
    parser.add_argument(
        "--backdrop", choices=["light", "dark"], help="Backdrop for rgba() compositing"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check
    check_parser = subparsers.add_parser("check", help="Contrast of one color pair")
    check_parser.add_argument("fg", help="Foreground color")
    check_parser.add_argument("bg", help="Background color")

    # pairings
    subparsers.add_parser("pairings", help="Annotate standard text/surface pairings")

    # closure
    closure_parser = subparsers.add_parser("closure", help="Downstream closure of a node")
    closure_parser.add_argument("node_id", help="Cascade node id, e.g. brand-300")

    # cascade
    cascade_parser = subparsers.add_parser("cascade", help="Play the cascade animation")
    cascade_parser.add_argument("core_id", help="Core token node id, e.g. brand-300")
    cascade_parser.add_argument(
        "--instant", action="store_true", help="Run on virtual time instead of wall clock"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    rules = get_rules(args.rules)

    if args.command == "check":
        handle_check(rules, args)
    elif args.command == "pairings":
        handle_pairings(rules, args)
    elif args.command == "closure":
        handle_closure(rules, args)
    elif args.command == "cascade":
        handle_cascade(rules, args)


if __name__ == "__main__":
    main()
