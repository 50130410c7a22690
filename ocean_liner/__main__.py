from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ocean_liner.event_sink import InMemoryEventSink
from ocean_liner.liner import OceanLiner, ServiceContractError
from ocean_liner.reporting import render_summary, render_text_report, summarize_outcomes
from ocean_liner.stream_io import (
    InputFormatError,
    VoyageSpec,
    load_event_stream,
    load_voyage_spec,
    parse_voyage_spec,
    write_event_stream,
)


def _demo_spec() -> VoyageSpec:
    return VoyageSpec(ship="Titanic", decks=10, days=50)


def _apply_overrides(spec: VoyageSpec, args: argparse.Namespace) -> VoyageSpec:
    """Re-validate the spec with any command-line overrides applied."""
    raw = {
        "ship": spec.ship,
        "decks": spec.decks,
        "days": spec.days,
        "emergency_probability": spec.emergency_probability,
        "seed": spec.seed,
        "services": list(spec.services),
    }
    if args.ship is not None:
        raw["ship"] = args.ship
    if args.decks is not None:
        raw["decks"] = args.decks
    if args.days is not None:
        raw["days"] = args.days
    if args.probability is not None:
        raw["emergency_probability"] = args.probability
    if args.seed is not None:
        raw["seed"] = args.seed
    return parse_voyage_spec(raw)


def _cmd_run(args: argparse.Namespace) -> int:
    chosen = sum(1 for v in [bool(args.demo), bool(args.voyage), bool(args.input)] if v)
    if chosen != 1:
        print("ERROR: choose exactly one of --demo, --voyage, or --input.", file=sys.stderr)
        return 2

    if args.input:
        try:
            events = load_event_stream(Path(str(args.input)))
        except InputFormatError as e:
            print(f"ERROR: invalid input stream: {e}", file=sys.stderr)
            return 2
        sys.stdout.write(render_text_report(events))
        if args.summary:
            sys.stdout.write(render_summary(summarize_outcomes(events)))
        return 0

    try:
        spec = load_voyage_spec(Path(str(args.voyage))) if args.voyage else _demo_spec()
        spec = _apply_overrides(spec, args)
    except InputFormatError as e:
        print(f"ERROR: invalid voyage spec: {e}", file=sys.stderr)
        return 2

    sink = InMemoryEventSink()
    liner = OceanLiner(
        spec.ship,
        spec.decks,
        spec.days,
        emergency_probability=spec.emergency_probability,
        seed=spec.seed,
        services=spec.service_types(),
        out=sys.stdout,
        event_sink=sink,
    )

    print(f"Project 'Life of an ocean liner': {spec.ship}")
    try:
        liner.life_onboard()
    except ServiceContractError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.summary:
        sys.stdout.write(render_summary(summarize_outcomes(sink.events)))

    if args.events_out:
        write_event_stream(Path(str(args.events_out)), sink.events)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="ocean_liner",
        description=(
            "Ocean Liner Emergencies: event dispatch simulator.\n"
            "\n"
            "The ship raises emergencies; on-board services handle them in registration order."
        ),
    )

    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Simulate a voyage and print every emergency with service results.")
    run.add_argument("--demo", action="store_true", help="Run the built-in Titanic voyage (10 decks, 50 days).")
    run.add_argument("--voyage", type=str, help="Run a voyage spec JSON.")
    run.add_argument("--input", type=str, help="Render an existing event stream JSON.")
    run.add_argument("--seed", type=int, default=None, help="Seed for a reproducible voyage.")
    run.add_argument("--probability", type=float, default=None, help="Per-deck-per-day emergency probability.")
    run.add_argument("--ship", type=str, default=None, help="Override the ship name.")
    run.add_argument("--decks", type=int, default=None, help="Override the number of decks.")
    run.add_argument("--days", type=int, default=None, help="Override the number of days.")
    run.add_argument("--events-out", type=str, default=None, help="Write the structured event stream to this JSON file.")
    run.add_argument("--summary", action="store_true", help="Print per-service outcome counts after the voyage.")
    run.set_defaults(func=_cmd_run)

    return parser


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
