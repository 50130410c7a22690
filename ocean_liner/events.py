from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """
    Event vocabulary for a voyage.
    Console text can be rebuilt from EMERGENCY_RAISED, SERVICE_RESPONDED and ALL_CLEAR alone.
    """

    VOYAGE_START = "VOYAGE_START"
    DAY_START = "DAY_START"
    EMERGENCY_RAISED = "EMERGENCY_RAISED"
    SERVICE_RESPONDED = "SERVICE_RESPONDED"
    ALL_CLEAR = "ALL_CLEAR"
    VOYAGE_END = "VOYAGE_END"


@dataclass(frozen=True, slots=True)
class Event:
    """
    A structured, orderable fact emitted by the ship (optionally).

    day and seq are owned by the sink (so the ship keeps no numbering state).
    """

    day: int
    seq: int
    type: EventType
    actor: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
