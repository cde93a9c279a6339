"""Build validated workout records from raw form values."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Sequence

from core.errors import ValidationError
from core.workouts import CyclingRecord, RunningRecord, Workout, WorkoutKind


def coerce_number(raw) -> float:
    """
    Convert a raw form value to float.

    Empty or unparsable values become NaN so that validation rejects them
    instead of the conversion raising.
    """
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return math.nan
    try:
        return float(raw)
    except (TypeError, ValueError):
        return math.nan


def _is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _parse_kind(kind) -> WorkoutKind:
    try:
        return WorkoutKind(kind)
    except ValueError:
        raise ValidationError(f"Unknown workout type: {kind!r}") from None


def _parse_coords(coords) -> tuple:
    if not isinstance(coords, (list, tuple)) or len(coords) != 2:
        raise ValidationError(f"Coordinates must be a (lat, lng) pair, got {coords!r}")
    if not all(_is_finite_number(c) for c in coords):
        raise ValidationError(f"Coordinates must be finite numbers, got {coords!r}")
    return float(coords[0]), float(coords[1])


def timestamp_id(created_at: datetime) -> int:
    """Millisecond epoch of the creation time, used as the workout id."""
    return int(created_at.timestamp() * 1000)


def create_workout(
    kind,
    coords: Sequence[float],
    distance,
    duration,
    extra,
    created_at: Optional[datetime] = None,
    workout_id: Optional[int] = None,
) -> Workout:
    """
    Create a RunningRecord or CyclingRecord.

    `extra` is the cadence (spm) for runs and the elevation gain (m) for
    rides. Distance, duration and extra must be finite; distance, duration
    and cadence must also be positive. Raises ValidationError otherwise.
    """
    workout_kind = _parse_kind(kind)
    lat_lng = _parse_coords(coords)

    if not all(_is_finite_number(v) for v in (distance, duration, extra)):
        raise ValidationError("Inputs have to be finite numbers")

    positive = [distance, duration]
    if workout_kind is WorkoutKind.RUNNING:
        positive.append(extra)
    if not all(v > 0 for v in positive):
        raise ValidationError("Inputs have to be positive numbers")

    created_at = created_at or datetime.now()
    if workout_id is None:
        workout_id = timestamp_id(created_at)

    if workout_kind is WorkoutKind.RUNNING:
        return RunningRecord(
            id=int(workout_id),
            created_at=created_at,
            coords=lat_lng,
            distance=float(distance),
            duration=float(duration),
            cadence=float(extra),
        )
    return CyclingRecord(
        id=int(workout_id),
        created_at=created_at,
        coords=lat_lng,
        distance=float(distance),
        duration=float(duration),
        elevation=float(extra),
    )
