from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ocean_liner.models import EmergencyEventArgs

if TYPE_CHECKING:
    from ocean_liner.liner import OceanLiner

DRAW_SIDES = 10


class Service(ABC):
    """
    An on-board service that reacts to the ship's emergencies.

    Outcome rule:
    - draw a uniform integer in [0, 9] from the service's own generator
    - draw > cutoff  -> ok_message
    - otherwise      -> nok_message

    Subclasses only supply name, cutoff and the two messages, as class attributes.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def cutoff(self) -> int: ...

    @property
    @abstractmethod
    def ok_message(self) -> str: ...

    @property
    @abstractmethod
    def nok_message(self) -> str: ...

    def __init__(
            self,
            ship: OceanLiner,
            rng: random.Random | None = None,
            seed: int | None = None,
    ) -> None:
        self.ship = ship
        self._rng = rng if rng is not None else random.Random(seed)

    def on(self) -> None:
        """Start watching the ship's emergencies."""
        self.ship.emergency += self.handle_emergency

    def off(self) -> None:
        """Stop watching the ship's emergencies."""
        self.ship.emergency -= self.handle_emergency

    def outcome_for(self, draw: int) -> str:
        return self.ok_message if draw > self.cutoff else self.nok_message

    def is_success(self, result: str | None) -> bool:
        return result == self.ok_message

    def handle_emergency(self, sender: Any, e: EmergencyEventArgs) -> None:
        e.result = self.outcome_for(self._rng.randrange(0, DRAW_SIDES))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ship={self.ship.name!r})"


class Security(Service):
    # 30% success
    name = "security"
    cutoff = 6
    ok_message = "The cause of the emergency has been found!"
    nok_message = "The cause of the emergency has not been found! The emergency is ongoing."


class Medical(Service):
    # 70% success
    name = "medical"
    cutoff = 2
    ok_message = "The medical staff provided assistance!"
    nok_message = "There are injured! Medical supplies are needed."


class Engineering(Service):
    # 50% success
    name = "engineering"
    cutoff = 4
    ok_message = "The engineers fixed the problem!"
    nok_message = "Equipment failure! Repairs are needed."


SERVICE_TYPES: dict[str, type[Service]] = {
    Security.name: Security,
    Medical.name: Medical,
    Engineering.name: Engineering,
}

DEFAULT_SERVICES: tuple[type[Service], ...] = (Security, Medical, Engineering)


def service_type(name: str) -> type[Service]:
    """Look up a service class by its registry name (case-insensitive)."""
    key = (name or "").strip().lower()
    try:
        return SERVICE_TYPES[key]
    except KeyError:
        known = ", ".join(sorted(SERVICE_TYPES))
        raise KeyError(f"unknown service {name!r} (known: {known})") from None
