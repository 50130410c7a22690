from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ocean_liner.events import Event, EventType


class EventSink(ABC):
    """
    Consumer of structured events.
    The ship must be able to run with event_sink=None (no events).
    """

    @abstractmethod
    def start_day(self) -> int: ...

    @abstractmethod
    def emit(self, event_type: EventType, actor: str | None = None, **data: Any) -> None: ...


@dataclass
class InMemoryEventSink(EventSink):
    """
    Simple sink for tests/demos.
    Owns day/seq numbering. Voyage-level events emitted before the first
    start_day() carry day 0.
    """

    events: list[Event] = field(default_factory=list)
    _day: int = field(default=0, init=False)
    _seq: int = field(default=0, init=False)

    @property
    def current_day(self) -> int:
        return self._day

    def start_day(self) -> int:
        self._day += 1
        self._seq = 0
        return self._day

    def emit(self, event_type: EventType, actor: str | None = None, **data: object) -> None:
        self._seq += 1
        self.events.append(
            Event(
                day=self._day,
                seq=self._seq,
                type=event_type,
                actor=actor,
                data=dict(data),
            )
        )
