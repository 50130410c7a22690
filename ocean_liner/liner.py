from __future__ import annotations

import random
import sys
from dataclasses import dataclass
from typing import Sequence, TextIO

from ocean_liner.event_sink import EventSink
from ocean_liner.events import EventType
from ocean_liner.models import EmergencyEventArgs
from ocean_liner.multicast import EmergencyEvent, EmergencyHandler
from ocean_liner.rng import make_rng
from ocean_liner.services import DEFAULT_SERVICES, Service

EMERGENCY_PROBABILITY = 5e-3

MESSAGE_EMERGENCY = "On ship {ship} an emergency occurred! Deck {deck}. Day {day}"
MESSAGE_ALL_CLEAR = "On ship {ship} all is calm! There were no emergencies."


class ServiceContractError(RuntimeError):
    """Raised when a handler returns without writing a result for the occurrence."""


@dataclass(frozen=True, slots=True)
class Occurrence:
    deck: int
    day: int
    # One entry per handler call, in registration order.
    results: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class VoyageLog:
    ship: str
    occurrences: tuple[Occurrence, ...]

    @property
    def all_clear(self) -> bool:
        return not self.occurrences


def _handler_label(handler: EmergencyHandler) -> str:
    owner = getattr(handler, "__self__", None)
    name = getattr(owner, "name", None)
    if isinstance(name, str):
        return name
    return getattr(handler, "__qualname__", repr(handler))


class OceanLiner:
    """
    Model of an ocean liner whose services react to on-board emergencies.

    The liner is the publisher: services attach to `emergency` and the liner
    invokes them one after another for every occurrence, collecting their
    results in registration order.
    """

    def __init__(
            self,
            name: str,
            decks: int,
            days: int,
            *,
            emergency_probability: float = EMERGENCY_PROBABILITY,
            seed: int | None = None,
            rng: random.Random | None = None,
            services: Sequence[type[Service]] = DEFAULT_SERVICES,
            out: TextIO | None = None,
            event_sink: EventSink | None = None,
    ) -> None:
        self.name = name
        self.decks = int(decks)
        self.days = int(days)
        self.emergency_probability = float(emergency_probability)
        self.emergency = EmergencyEvent()
        self.service_results: list[str] = []
        self.event_sink = event_sink
        self._out = out
        self._rng = rng if rng is not None else make_rng(seed, "liner")

        # Each service gets its own generator; none is shared with the liner.
        self.services: list[Service] = []
        for i, cls in enumerate(services):
            service = cls(self, rng=make_rng(seed, "service", i, cls.name))
            self.services.append(service)
            service.on()

    def _say(self, line: str) -> None:
        print(line, file=self._out if self._out is not None else sys.stdout)

    def _emit(self, event_type: EventType, actor: str | None = None, **data: object) -> None:
        if self.event_sink is not None:
            self.event_sink.emit(event_type, actor=actor, **data)

    def on_emergency(self, e: EmergencyEventArgs) -> list[str]:
        """
        Raise one emergency and collect every service's result.

        Rules:
        - Handlers run synchronously in registration order, all sharing `e`.
        - e.result is cleared before each call and copied out right after it,
          so no handler ever sees another handler's result.
        - With no handlers registered nothing is invoked and the result list is empty.
        """
        self._say(MESSAGE_EMERGENCY.format(ship=self.name, deck=e.deck, day=e.day))
        self._emit(EventType.EMERGENCY_RAISED, ship=self.name, deck=e.deck, day=e.day)

        results: list[str] = []
        for index, handler in enumerate(self.emergency.invocation_list()):
            e.result = None
            handler(self, e)
            if e.result is None:
                raise ServiceContractError(
                    f"handler {_handler_label(handler)} did not set a result "
                    f"(deck={e.deck}, day={e.day})"
                )
            results.append(e.result)

            if self.event_sink is not None:
                owner = getattr(handler, "__self__", None)
                success = owner.is_success(e.result) if isinstance(owner, Service) else None
                self._emit(
                    EventType.SERVICE_RESPONDED,
                    actor=_handler_label(handler),
                    index=index,
                    result=e.result,
                    success=success,
                )

        self.service_results = results
        return results

    def life_onboard(self) -> VoyageLog:
        """
        Simulate the voyage: every deck on every day may see an emergency.

        Each (day, deck) pair consumes exactly one draw from the liner's generator.
        If no emergency fired during the whole voyage, an all-clear line is printed.
        """
        self._emit(
            EventType.VOYAGE_START,
            ship=self.name,
            decks=self.decks,
            days=self.days,
            emergency_probability=self.emergency_probability,
        )

        occurrences: list[Occurrence] = []
        for day in range(1, self.days + 1):
            if self.event_sink is not None:
                self.event_sink.start_day()
            self._emit(EventType.DAY_START)

            for deck in range(1, self.decks + 1):
                if self._rng.random() < self.emergency_probability:
                    e = EmergencyEventArgs(deck, day)
                    results = self.on_emergency(e)
                    occurrences.append(Occurrence(deck=deck, day=day, results=tuple(results)))
                    for line in results:
                        self._say(line)

        if not occurrences:
            self._say(MESSAGE_ALL_CLEAR.format(ship=self.name))
            self._emit(EventType.ALL_CLEAR, ship=self.name)

        self._emit(EventType.VOYAGE_END, occurrences=len(occurrences))
        return VoyageLog(ship=self.name, occurrences=tuple(occurrences))
