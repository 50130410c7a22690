from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from ocean_liner.events import Event, EventType
from ocean_liner.liner import EMERGENCY_PROBABILITY
from ocean_liner.services import Service, service_type


class InputFormatError(ValueError):
    """Raised when a voyage spec or an event stream fails validation."""


DEFAULT_SERVICE_NAMES: tuple[str, ...] = ("security", "medical", "engineering")


@dataclass(frozen=True)
class VoyageSpec:
    ship: str
    decks: int
    days: int
    emergency_probability: float = EMERGENCY_PROBABILITY
    # Optional: makes the voyage reproducible.
    seed: int | None = None
    # Registration order; repeating a name registers that service again.
    services: tuple[str, ...] = DEFAULT_SERVICE_NAMES

    def service_types(self) -> tuple[type[Service], ...]:
        return tuple(service_type(name) for name in self.services)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise InputFormatError(f"file not found: {path}")
    if not path.is_file():
        raise InputFormatError(f"not a file: {path}")

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InputFormatError(
            f"invalid JSON: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e


def load_voyage_spec(path: Path) -> VoyageSpec:
    """Load and validate a voyage spec.

    Format:
      {
        "ship": "Titanic",
        "decks": 10,
        "days": 50,
        "emergency_probability": 0.005,
        "seed": 1912,
        "services": ["security", "medical", "engineering"]
      }

    Only ship, decks and days are required.
    """
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise InputFormatError("root must be a JSON object")
    return parse_voyage_spec(raw)


def parse_voyage_spec(raw: dict[str, Any]) -> VoyageSpec:
    ship = raw.get("ship")
    if not isinstance(ship, str) or not ship.strip():
        raise InputFormatError("ship must be a non-empty string")

    counts: dict[str, int] = {}
    for key in ("decks", "days"):
        value = raw.get(key)
        # bool is an int subclass; reject it explicitly.
        if not isinstance(value, int) or isinstance(value, bool):
            raise InputFormatError(f"{key} must be an int")
        if value < 0:
            raise InputFormatError(f"{key} must be >= 0 (got {value})")
        counts[key] = value

    probability = raw.get("emergency_probability", EMERGENCY_PROBABILITY)
    if not isinstance(probability, (int, float)) or isinstance(probability, bool):
        raise InputFormatError("emergency_probability must be a number")
    if probability < 0.0 or probability > 1.0:
        raise InputFormatError(
            f"emergency_probability must be in [0, 1] (got {probability})"
        )

    seed = raw.get("seed", None)
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise InputFormatError("seed must be an int when provided")

    services_raw = raw.get("services", None)
    services = DEFAULT_SERVICE_NAMES
    if services_raw is not None:
        if not isinstance(services_raw, list):
            raise InputFormatError("services must be an array when provided")
        parsed: list[str] = []
        for i, name in enumerate(services_raw):
            if not isinstance(name, str) or not name.strip():
                raise InputFormatError(f"services[{i}] must be a non-empty string")
            try:
                parsed.append(service_type(name).name)
            except KeyError as e:
                raise InputFormatError(f"services[{i}]: {e.args[0]}") from None
        services = tuple(parsed)

    return VoyageSpec(
        ship=ship.strip(),
        decks=counts["decks"],
        days=counts["days"],
        emergency_probability=float(probability),
        seed=seed,
        services=services,
    )


def _parse_event(i: int, item: object) -> Event:
    if not isinstance(item, dict):
        raise InputFormatError(f"event[{i}] must be an object")

    day, seq = item.get("day"), item.get("seq")
    for key, value, low in (("day", day, 0), ("seq", seq, 1)):
        if not isinstance(value, int) or isinstance(value, bool) or value < low:
            raise InputFormatError(f"event[{i}].{key} must be an int >= {low}")

    actor = item.get("actor", None)
    if actor is not None and not isinstance(actor, str):
        raise InputFormatError(f"event[{i}].actor must be a string or null")

    data = item.get("data", {})
    if not isinstance(data, dict):
        raise InputFormatError(f"event[{i}].data must be an object")

    etype = item.get("type")
    if not isinstance(etype, str) or etype not in {t.value for t in EventType}:
        raise InputFormatError(f"event[{i}].type is not a valid EventType: {etype!r}")

    return Event(day=day, seq=seq, type=EventType(etype), actor=actor, data=data)


def load_event_stream(path: Path) -> list[Event]:
    """
    Load a recorded event stream (the shape dump_event_stream() produces).

    Events must be strictly increasing by (day, seq); a reused sink keeps counting
    days, so streams of several voyages still satisfy this.
    """
    raw = _read_json(path)
    if not isinstance(raw, list):
        raise InputFormatError("root must be a JSON array of events")

    events = [_parse_event(i, item) for i, item in enumerate(raw)]
    for i, (prev, cur) in enumerate(zip(events, events[1:]), start=1):
        if (cur.day, cur.seq) <= (prev.day, prev.seq):
            raise InputFormatError(
                f"events must be strictly increasing by (day, seq); event[{i}] has "
                f"(day, seq)={(cur.day, cur.seq)} after {(prev.day, prev.seq)}"
            )
    return events


def dump_event_stream(events: list[Event]) -> list[dict[str, Any]]:
    """Return a JSON-serializable event stream (same shape load_event_stream() accepts)."""
    out: list[dict[str, Any]] = []
    for e in events:
        d = asdict(e)
        d["type"] = str(e.type.value)
        out.append(d)
    return out


def write_event_stream(path: Path, events: list[Event]) -> None:
    path.write_text(json.dumps(dump_event_stream(events), indent=2) + "\n", encoding="utf-8")
