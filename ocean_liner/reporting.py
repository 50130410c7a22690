from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from ocean_liner.events import Event, EventType
from ocean_liner.liner import MESSAGE_ALL_CLEAR, MESSAGE_EMERGENCY


@dataclass(frozen=True, slots=True)
class OccurrenceRow:
    """
    One emergency, represented as an EMERGENCY_RAISED event followed by the
    SERVICE_RESPONDED events it produced.
    """
    ship: str
    deck: int
    day: int
    responses: tuple[Event, ...]

    @property
    def results(self) -> tuple[str, ...]:
        return tuple(str(r.data.get("result", "")) for r in self.responses)


@dataclass(slots=True)
class ServiceTally:
    handled: int = 0
    unhandled: int = 0

    @property
    def total(self) -> int:
        return self.handled + self.unhandled

    @property
    def success_rate(self) -> float:
        return self.handled / self.total if self.total else 0.0


def derive_occurrences(events: Iterable[Event]) -> list[OccurrenceRow]:
    """
    Derive occurrence rows from an ordered event stream.

    Rule:
      - A row begins at EMERGENCY_RAISED
      - Every SERVICE_RESPONDED up to the next non-response event is attached to it
      - SERVICE_RESPONDED events outside a row are ignored
    """
    rows: list[OccurrenceRow] = []

    current: Event | None = None
    responses: list[Event] = []

    def _close() -> None:
        if current is None:
            return
        rows.append(
            OccurrenceRow(
                ship=str(current.data.get("ship", "")),
                deck=int(current.data.get("deck", 0)),
                # The sink day only matches the occurrence day for a single fresh voyage.
                day=int(current.data.get("day", current.day)),
                responses=tuple(responses),
            )
        )

    for e in events:
        if e.type == EventType.SERVICE_RESPONDED:
            if current is not None:
                responses.append(e)
            continue

        _close()
        current = None
        responses = []
        if e.type == EventType.EMERGENCY_RAISED:
            current = e

    _close()
    return rows


def summarize_outcomes(events: Iterable[Event]) -> dict[str, ServiceTally]:
    """Count handled/unhandled responses per service, keyed by actor, in first-seen order."""
    tallies: dict[str, ServiceTally] = {}
    for e in events:
        if e.type != EventType.SERVICE_RESPONDED:
            continue
        tally = tallies.setdefault(str(e.actor), ServiceTally())
        if e.data.get("success"):
            tally.handled += 1
        else:
            tally.unhandled += 1
    return tallies


def render_text_report(events: Iterable[Event]) -> str:
    """
    Rebuild the console text of a voyage from its recorded events.

    Output matches what OceanLiner.life_onboard() prints for the same voyage.
    """
    events = list(events)
    out: list[str] = []
    for row in derive_occurrences(events):
        out.append(MESSAGE_EMERGENCY.format(ship=row.ship, deck=row.deck, day=row.day))
        out.extend(row.results)

    for e in events:
        if e.type == EventType.ALL_CLEAR:
            out.append(MESSAGE_ALL_CLEAR.format(ship=e.data.get("ship", "")))

    if not out:
        return ""
    return "\n".join(out) + "\n"


def render_summary(tallies: Mapping[str, ServiceTally]) -> str:
    if not tallies:
        return "(No service responses were recorded.)\n"

    width = max(len(name) for name in tallies)
    out = ["Service outcomes:"]
    for name, t in tallies.items():
        out.append(
            f"  {name.ljust(width)}  handled={t.handled:3d}  unhandled={t.unhandled:3d}  "
            f"rate={t.success_rate * 100.0:5.1f}%"
        )
    return "\n".join(out) + "\n"
