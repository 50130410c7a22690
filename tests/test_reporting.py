from __future__ import annotations

import io

from ocean_liner.event_sink import InMemoryEventSink
from ocean_liner.events import Event, EventType
from ocean_liner.liner import OceanLiner
from ocean_liner.models import EmergencyEventArgs
from ocean_liner.reporting import (
    ServiceTally,
    derive_occurrences,
    render_summary,
    render_text_report,
    summarize_outcomes,
)


def _run(**kwargs) -> tuple[InMemoryEventSink, str]:
    sink = InMemoryEventSink()
    out = io.StringIO()
    OceanLiner("Titanic", 4, 6, out=out, event_sink=sink, **kwargs).life_onboard()
    return sink, out.getvalue()


def test_report_rebuilt_from_events_matches_live_output() -> None:
    sink, live = _run(emergency_probability=0.3, seed=8)
    assert render_text_report(sink.events) == live


def test_report_for_quiet_voyage_is_the_all_clear_line() -> None:
    sink, live = _run(emergency_probability=0.0, seed=8)
    assert render_text_report(sink.events) == live
    assert live == "On ship Titanic all is calm! There were no emergencies.\n"


def test_derive_occurrences_groups_responses_under_their_emergency() -> None:
    sink, _ = _run(emergency_probability=1.0, seed=2)
    rows = derive_occurrences(sink.events)

    assert len(rows) == 24
    assert (rows[0].day, rows[0].deck) == (1, 1)
    assert (rows[-1].day, rows[-1].deck) == (6, 4)
    assert all(len(r.responses) == 3 for r in rows)
    assert all(r.ship == "Titanic" for r in rows)


def test_orphan_responses_are_ignored() -> None:
    events = [
        Event(day=1, seq=1, type=EventType.DAY_START),
        Event(day=1, seq=2, type=EventType.SERVICE_RESPONDED, actor="security", data={"result": "x"}),
    ]
    assert derive_occurrences(events) == []


def test_summarize_outcomes_counts_each_service() -> None:
    sink, _ = _run(emergency_probability=1.0, seed=5)
    tallies = summarize_outcomes(sink.events)

    assert list(tallies) == ["security", "medical", "engineering"]
    for tally in tallies.values():
        assert tally.total == 24
        assert 0.0 <= tally.success_rate <= 1.0


def test_render_summary() -> None:
    text = render_summary({"security": ServiceTally(handled=1, unhandled=3), "medical": ServiceTally(handled=2)})
    assert text.splitlines() == [
        "Service outcomes:",
        "  security  handled=  1  unhandled=  3  rate= 25.0%",
        "  medical   handled=  2  unhandled=  0  rate=100.0%",
    ]
    assert render_summary({}) == "(No service responses were recorded.)\n"


def test_report_uses_the_occurrence_day_for_a_direct_emergency() -> None:
    """on_emergency() outside a voyage never advances the sink's day counter."""
    sink = InMemoryEventSink()
    out = io.StringIO()
    liner = OceanLiner("Titanic", 10, 50, seed=3, out=out, event_sink=sink)

    results = liner.on_emergency(EmergencyEventArgs(deck=3, day=7))

    assert sink.current_day == 0
    # on_emergency() prints only the occurrence line; results are printed by the voyage loop.
    assert out.getvalue() == "On ship Titanic an emergency occurred! Deck 3. Day 7\n"
    assert render_text_report(sink.events) == out.getvalue() + "".join(f"{r}\n" for r in results)


def test_report_for_a_sink_shared_by_two_voyages() -> None:
    sink = InMemoryEventSink()
    out = io.StringIO()
    for _ in range(2):
        OceanLiner("Titanic", 2, 2, emergency_probability=1.0, seed=9, out=out, event_sink=sink).life_onboard()

    assert sink.current_day == 4
    assert render_text_report(sink.events) == out.getvalue()
    assert [(r.day, r.deck) for r in derive_occurrences(sink.events)] == [
        (1, 1), (1, 2), (2, 1), (2, 2),
    ] * 2


def test_streams_without_a_recorded_day_fall_back_to_the_sink_day() -> None:
    events = [
        Event(day=5, seq=1, type=EventType.EMERGENCY_RAISED, data={"ship": "Olympic", "deck": 2}),
    ]
    assert render_text_report(events) == "On ship Olympic an emergency occurred! Deck 2. Day 5\n"
