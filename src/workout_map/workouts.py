from __future__ import annotations

import re
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Literal

Kind = Literal["running", "cycling"]
Coords = tuple[float, float]

KINDS: tuple[Kind, ...] = ("running", "cycling")

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

ICONS: dict[str, str] = {
    "running": "🏃‍♂️",
    "cycling": "🚴‍♀️",
}

_DIGITS_RE = re.compile(r"[0-9]+")


class ValidationError(ValueError):
    """Raised when form input can't become a workout."""


def is_positive_integer_text(value: str | None) -> bool:
    """Only plain decimal digits with a value above zero pass ("12.5", "-3", "0" don't)."""
    if value is None or not _DIGITS_RE.fullmatch(value):
        return False
    # any non-zero digit makes it positive; avoids int() on huge strings
    return value.strip("0") != ""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_workout_date(when: datetime) -> str:
    return f"{MONTHS[when.month - 1]} {when.day}"


def new_workout_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Workout:
    id: str
    kind: Kind
    coords: Coords
    distance: int  # km
    duration: int  # min
    date: str
    icon: str

    # running
    cadence: int | None = None  # steps per minute
    pace: float | None = None  # min/km

    # cycling
    elevation_gain: int | None = None  # metres
    speed: float | None = None  # km/h

    @property
    def extra(self) -> int | None:
        """The kind-specific input (cadence or elevation gain)."""
        return self.cadence if self.kind == "running" else self.elevation_gain

    @property
    def metric(self) -> float | None:
        """The derived metric (pace or speed)."""
        return self.pace if self.kind == "running" else self.speed

    def to_record(self) -> dict[str, Any]:
        record = asdict(self)
        record["coords"] = list(self.coords)
        drop = ("elevation_gain", "speed") if self.kind == "running" else ("cadence", "pace")
        for key in drop:
            record.pop(key)
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Workout:
        """
        Rebuild a workout from its stored record.

        Values are taken verbatim: nothing is recomputed and the stored date is
        kept as-is. Only the shape is checked (numbers where numbers belong).
        """
        if not isinstance(record, dict):
            raise ValueError(f"Workout record must be an object, got {type(record).__name__}")
        kind = record.get("kind")
        if kind not in KINDS:
            raise ValueError(f"Unknown workout kind: {kind!r}")

        try:
            lat, lng = record["coords"]
            extra_key, metric_key = (
                ("cadence", "pace") if kind == "running" else ("elevation_gain", "speed")
            )
            numbers = (lat, lng, record["distance"], record["duration"])
            numbers += (record[extra_key], record[metric_key])
            if not all(_is_number(v) for v in numbers):
                raise ValueError("coords, distance, duration and metrics must be numbers")
            if not all(isinstance(record[k], str) for k in ("id", "date", "icon")):
                raise ValueError("id, date and icon must be strings")
            common = {
                "id": record["id"],
                "kind": kind,
                "coords": (lat, lng),
                "distance": record["distance"],
                "duration": record["duration"],
                "date": record["date"],
                "icon": record["icon"],
            }
            if kind == "running":
                return cls(**common, cadence=record["cadence"], pace=record["pace"])
            return cls(**common, elevation_gain=record["elevation_gain"], speed=record["speed"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed workout record: {e}") from e


def new_workout(
    kind: str,
    coords: Coords,
    distance: str,
    duration: str,
    extra: str,
    *,
    now: datetime | None = None,
) -> Workout:
    """
    Build a workout from raw form text.

    ``extra`` is the cadence for running and the elevation gain for cycling.
    Raises ValidationError unless every value is a positive whole number
    written in plain digits.
    """
    if kind not in KINDS:
        raise ValidationError(f"Unknown workout kind: {kind!r}")
    if not all(is_positive_integer_text(v) for v in (distance, duration, extra)):
        raise ValidationError("Inputs have to be positive numbers.")

    try:
        dist = int(distance)
        dur = int(duration)
        value = int(extra)
        for n in (dist, dur, value):
            float(n)  # OverflowError past float range
        metric = dur / dist if kind == "running" else dist / (dur / 60)
    except (ValueError, OverflowError) as e:
        # too many digits to convert, or a quotient too large for a float
        raise ValidationError("Inputs have to be positive numbers.") from e

    common = {
        "id": new_workout_id(),
        "kind": kind,
        "coords": (float(coords[0]), float(coords[1])),
        "distance": dist,
        "duration": dur,
        "date": format_workout_date(now or datetime.now()),
        "icon": ICONS[kind],
    }
    if kind == "running":
        return Workout(**common, cadence=value, pace=metric)
    return Workout(**common, elevation_gain=value, speed=metric)


def workout_message(workout: Workout) -> str:
    return f"{workout.icon} {workout.kind[:1].upper()}{workout.kind[1:]} on {workout.date}"
