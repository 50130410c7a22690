from __future__ import annotations

from ocean_liner.event_sink import InMemoryEventSink
from ocean_liner.liner import OceanLiner
from ocean_liner.reporting import render_summary, summarize_outcomes


def main() -> None:
    # Raised probability so a short voyage still sees a few emergencies.
    sink = InMemoryEventSink()
    liner = OceanLiner("Titanic", 10, 50, emergency_probability=0.05, seed=1912, event_sink=sink)

    log = liner.life_onboard()

    print(f"\n{len(log.occurrences)} emergencies over {liner.days} days")
    for occ in log.occurrences:
        handled = sum(1 for svc, r in zip(liner.services, occ.results) if svc.is_success(r))
        print(f"  Day {occ.day:2d} | Deck {occ.deck:2d} | handled {handled}/{len(occ.results)}")

    print()
    print(render_summary(summarize_outcomes(sink.events)), end="")


if __name__ == "__main__":
    main()
