from __future__ import annotations


class EmergencyEventArgs:
    """
    Input and output of one emergency occurrence.

    deck and day are fixed at construction. result is the shared output slot:
    each service writes it in turn and the ship copies it out after every call.
    """

    __slots__ = ("_deck", "_day", "result")

    def __init__(self, deck: int, day: int) -> None:
        self._deck = int(deck)
        self._day = int(day)
        self.result: str | None = None

    @property
    def deck(self) -> int:
        return self._deck

    @property
    def day(self) -> int:
        return self._day

    def __repr__(self) -> str:
        return f"EmergencyEventArgs(deck={self._deck}, day={self._day}, result={self.result!r})"
