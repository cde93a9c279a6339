"""Workout records: the running/cycling tagged union and its derived metrics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, List, Tuple, Union

from constants import KIND_ICONS, MONTHS


class WorkoutKind(str, Enum):
    RUNNING = 'running'
    CYCLING = 'cycling'

    @property
    def label(self) -> str:
        return self.value.capitalize()


def describe(kind: WorkoutKind, created_at: datetime) -> str:
    """Build the list/popup title, e.g. 'Running on April 14'."""
    return f"{kind.label} on {MONTHS[created_at.month - 1]} {created_at.day}"


@dataclass(frozen=True)
class WorkoutRecord:
    """
    Common fields of every workout.

    Records are immutable. Derived values (description and the per-kind
    metric) are filled in once by __post_init__ from the constructor fields,
    so a record rebuilt from storage carries the same values it had when it
    was first created.
    """

    kind: ClassVar[WorkoutKind]

    id: int
    created_at: datetime
    coords: Tuple[float, float]
    distance: float  # km
    duration: float  # min
    description: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'coords', (float(self.coords[0]), float(self.coords[1])))
        object.__setattr__(self, 'description', describe(self.kind, self.created_at))


@dataclass(frozen=True)
class RunningRecord(WorkoutRecord):
    kind: ClassVar[WorkoutKind] = WorkoutKind.RUNNING

    cadence: float = 0.0  # spm
    pace: float = field(init=False)  # min/km

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, 'pace', round(self.duration / self.distance, 1))


@dataclass(frozen=True)
class CyclingRecord(WorkoutRecord):
    kind: ClassVar[WorkoutKind] = WorkoutKind.CYCLING

    elevation: float = 0.0  # m
    speed: float = field(init=False)  # km/h

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, 'speed', round(self.distance / (self.duration / 60), 1))


Workout = Union[RunningRecord, CyclingRecord]


def kind_icon(kind: WorkoutKind) -> str:
    return KIND_ICONS[WorkoutKind(kind).value]


def popup_title(record: Workout) -> str:
    return f"{kind_icon(record.kind)} {record.description}"


def metric_value(record: Workout) -> float:
    """Pace (min/km) for runs, speed (km/h) for rides."""
    if record.kind is WorkoutKind.RUNNING:
        return record.pace
    if record.kind is WorkoutKind.CYCLING:
        return record.speed
    raise TypeError(f"Unknown workout kind: {record.kind!r}")


def workout_details(record: Workout) -> List[Tuple[str, float, str]]:
    """Rows of (icon, value, unit) shown on a workout list entry."""
    is_running = record.kind is WorkoutKind.RUNNING
    rows = [
        (kind_icon(record.kind), record.distance, 'km'),
        ('⏱', record.duration, 'min'),
        ('⚡️', metric_value(record), 'min/km' if is_running else 'km/h'),
    ]
    if is_running:
        rows.append(('🦶🏼', record.cadence, 'spm'))
    else:
        rows.append(('⛰', record.elevation, 'm'))
    return rows
