"""
Workout domain model.

Two variants share one base: Running (cadence, pace) and Cycling
(elevation gain, speed). Derived values (pace, speed, label) are
properties computed from the measured fields, so they can never drift
from their inputs and are never persisted.
"""
import dataclasses
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Mapping
from trackmark_core.date_utilities import as_aware, month_day
from trackmark_core.metrics import calc_pace, calc_speed

Position = tuple[float, float]


class Kind(str, Enum):
    RUNNING = "running"
    CYCLING = "cycling"

    @property
    def display(self) -> str:
        return self.value.capitalize()

    @property
    def icon(self) -> str:
        return "🏃" if self is Kind.RUNNING else "🚴"


def make_workout_id(now: datetime) -> str:
    """ Time derived id: last 10 digits of the epoch in milliseconds """
    return str(int(now.timestamp() * 1000))[-10:]


def as_position(value) -> Position:
    lat, lng = value
    return float(lat), float(lng)


@dataclass(kw_only=True)
class Workout(ABC):
    kind: ClassVar[Kind]
    extra_attr: ClassVar[str]       # attribute holding the kind-specific value
    extra_key: ClassVar[str]        # field name of that value in records and list rows
    metric_key: ClassVar[str]       # field name of the derived metric

    id: str
    created_at: datetime
    position: Position
    distance_km: float
    duration_min: float
    interaction_count: int = 0

    @property
    def label(self) -> str:
        return f"{self.kind.display} on {month_day(self.created_at)}"

    @property
    @abstractmethod
    def metric(self) -> float:
        """ The derived value of the variant, pace for running and speed for cycling """

    @property
    def extra(self) -> float:
        return getattr(self, self.extra_attr)

    def click(self) -> int:
        self.interaction_count += 1
        return self.interaction_count

    def with_measurements(self, distance_km: float, duration_min: float, extra: float) -> "Workout":
        """ New record of the same kind, id, date and position with new measured fields """
        return dataclasses.replace(
            self,
            distance_km=float(distance_km),
            duration_min=float(duration_min),
            **{self.extra_attr: float(extra)},
        )


@dataclass(kw_only=True)
class Running(Workout):
    kind: ClassVar[Kind] = Kind.RUNNING
    extra_attr: ClassVar[str] = "cadence_spm"
    extra_key: ClassVar[str] = "cadence"
    metric_key: ClassVar[str] = "pace"

    cadence_spm: float

    @property
    def pace(self) -> float:
        return calc_pace(self.distance_km, self.duration_min)

    @property
    def metric(self) -> float:
        return self.pace


@dataclass(kw_only=True)
class Cycling(Workout):
    kind: ClassVar[Kind] = Kind.CYCLING
    extra_attr: ClassVar[str] = "elevation_gain_m"
    extra_key: ClassVar[str] = "elevationGain"
    metric_key: ClassVar[str] = "speed"

    elevation_gain_m: float

    @property
    def speed(self) -> float:
        return calc_speed(self.distance_km, self.duration_min)

    @property
    def metric(self) -> float:
        return self.speed


WORKOUT_TYPES: dict[Kind, type[Workout]] = {
    Kind.RUNNING: Running,
    Kind.CYCLING: Cycling,
}


def create_workout(kind: Kind | str, position, distance_km: float, duration_min: float, extra: float, *,
                   workout_id: str | None = None, created_at: datetime | None = None,
                   interaction_count: int = 0) -> Workout:
    """ Builds the variant for kind, assigning id and date from the clock when not given """
    cls = WORKOUT_TYPES[Kind(kind)]
    created_at = created_at or datetime.now().astimezone()
    workout = cls(
        id=workout_id or make_workout_id(created_at),
        created_at=created_at,
        position=as_position(position),
        distance_km=float(distance_km),
        duration_min=float(duration_min),
        interaction_count=interaction_count,
        **{cls.extra_attr: float(extra)},
    )
    logging.debug("🆕 %s [%s] %.1f km in %.1f min", workout.label, workout.id, workout.distance_km, workout.duration_min)
    return workout


def create_running(position, distance_km: float, duration_min: float, cadence_spm: float, *,
                   workout_id: str | None = None, created_at: datetime | None = None) -> Running:
    return create_workout(Kind.RUNNING, position, distance_km, duration_min, cadence_spm,
                          workout_id=workout_id, created_at=created_at)


def create_cycling(position, distance_km: float, duration_min: float, elevation_gain_m: float, *,
                   workout_id: str | None = None, created_at: datetime | None = None) -> Cycling:
    return create_workout(Kind.CYCLING, position, distance_km, duration_min, elevation_gain_m,
                          workout_id=workout_id, created_at=created_at)


# ---------------------- RECORDS ---------------------- #
def workout_to_record(workout: Workout) -> dict[str, Any]:
    """ Flat field map of identity and measured fields, derived values are left out """
    lat, lng = workout.position
    return {
        "id": workout.id,
        "date": workout.created_at.isoformat(),
        "type": workout.kind.value,
        "coords": [lat, lng],
        "distance": workout.distance_km,
        "duration": workout.duration_min,
        "clicks": workout.interaction_count,
        workout.extra_key: workout.extra,
    }


def _created_at_from(raw, tz=None) -> datetime:
    if not isinstance(raw, (str, datetime)):
        raise ValueError(f"date must be an ISO string, got {raw!r}")
    if isinstance(raw, str):
        raw = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if tz is not None or raw.tzinfo is None:
        return as_aware(raw, tz)
    return raw


def _positive(data: Mapping[str, Any], field: str) -> float:
    value = float(data[field])
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{field} must be a positive number, got {data[field]!r}")
    return value


def workout_from_record(data: Mapping[str, Any], tz=None) -> Workout:
    """ Rebuilds a live workout from a persisted record, derived values are recomputed.
        Raises KeyError/ValueError/TypeError on malformed records. """
    kind = Kind(data["type"])
    cls = WORKOUT_TYPES[kind]
    distance, duration = _positive(data, "distance"), _positive(data, "duration")
    extra = float(data[cls.extra_key])
    if not math.isfinite(extra):
        raise ValueError(f"{cls.extra_key} must be finite, got {extra!r}")
    return create_workout(
        kind,
        data["coords"],
        distance,
        duration,
        extra,
        workout_id=str(data["id"]),
        created_at=_created_at_from(data["date"], tz),
        interaction_count=int(data.get("clicks") or 0),
    )
