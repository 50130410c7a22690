from __future__ import annotations

from typing import Any, Callable, Iterator

from ocean_liner.models import EmergencyEventArgs

EmergencyHandler = Callable[[Any, EmergencyEventArgs], None]


class EmergencyEvent:
    """
    Ordered multicast list of emergency handlers.

    Rules:
    - add() appends; the same handler may be registered more than once and is
      then invoked once per registration.
    - remove() drops the most recent matching registration; removing a handler
      that is not registered does nothing.
    - Invocation order is registration order.
    """

    def __init__(self) -> None:
        self._handlers: list[EmergencyHandler] = []

    def add(self, handler: EmergencyHandler) -> None:
        self._handlers.append(handler)

    def remove(self, handler: EmergencyHandler) -> None:
        # Bound methods compare equal when they wrap the same function and instance.
        for i in range(len(self._handlers) - 1, -1, -1):
            if self._handlers[i] == handler:
                del self._handlers[i]
                return

    def __iadd__(self, handler: EmergencyHandler) -> EmergencyEvent:
        self.add(handler)
        return self

    def __isub__(self, handler: EmergencyHandler) -> EmergencyEvent:
        self.remove(handler)
        return self

    def invocation_list(self) -> tuple[EmergencyHandler, ...]:
        """Snapshot of registered handlers, in invocation order."""
        return tuple(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __bool__(self) -> bool:
        return bool(self._handlers)

    def __iter__(self) -> Iterator[EmergencyHandler]:
        return iter(self.invocation_list())
