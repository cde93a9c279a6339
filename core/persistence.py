"""Serialize the workout collection to and from the blob store."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime, timezone
from typing import Iterable, List

from constants import STORAGE_KEY
from core.errors import PersistenceCorruption, ValidationError
from core.workout_factory import create_workout
from core.workouts import Workout, WorkoutKind

logger = logging.getLogger(__name__)


def workout_to_dict(record: Workout) -> dict:
    """Flatten a record into the stored JSON layout."""
    data = {
        'id': record.id,
        'date': record.created_at.isoformat(),
        'coords': [record.coords[0], record.coords[1]],
        'distance': record.distance,
        'duration': record.duration,
        'type': record.kind.value,
        'description': record.description,
    }
    if record.kind is WorkoutKind.RUNNING:
        data['cadence'] = record.cadence
        data['pace'] = record.pace
    else:
        data['elevation'] = record.elevation
        data['speed'] = record.speed
    return data


def _entry_kind(data: dict) -> WorkoutKind:
    raw_type = data.get('type')
    if raw_type in (WorkoutKind.RUNNING.value, WorkoutKind.CYCLING.value):
        return WorkoutKind(raw_type)
    # Older entries may lack a usable type tag; fall back to field presence.
    if 'cadence' in data and 'elevation' not in data:
        return WorkoutKind.RUNNING
    if 'elevation' in data and 'cadence' not in data:
        return WorkoutKind.CYCLING
    raise PersistenceCorruption(f"Cannot tell workout type of entry {data.get('id')!r}")


def _entry_created_at(data: dict, workout_id: int) -> datetime:
    raw_date = data.get('date')
    if isinstance(raw_date, str) and raw_date:
        try:
            # Browser-written dates end in 'Z'
            parsed = datetime.fromisoformat(raw_date.replace('Z', '+00:00'))
            # Browser descriptions used the local calendar day
            return parsed.astimezone() if parsed.tzinfo else parsed
        except ValueError:
            pass
    # The id is the creation time in epoch milliseconds.
    try:
        return datetime.fromtimestamp(workout_id / 1000, tz=timezone.utc).astimezone()
    except (OverflowError, OSError, ValueError) as exc:
        raise PersistenceCorruption(f"Entry {workout_id!r} has no usable creation date") from exc


def workout_from_dict(data) -> Workout:
    """Rebuild the proper record variant from a stored entry."""
    if not isinstance(data, dict):
        raise PersistenceCorruption(f"Workout entry must be an object, got {type(data).__name__}")

    workout_id = data.get('id')
    if (
        isinstance(workout_id, bool)
        or not isinstance(workout_id, (int, float))
        or not math.isfinite(workout_id)
    ):
        raise PersistenceCorruption(f"Workout entry has invalid id {workout_id!r}")
    workout_id = int(workout_id)

    kind = _entry_kind(data)
    extra = data.get('cadence') if kind is WorkoutKind.RUNNING else data.get('elevation')

    try:
        return create_workout(
            kind,
            data.get('coords'),
            data.get('distance'),
            data.get('duration'),
            extra,
            created_at=_entry_created_at(data, workout_id),
            workout_id=workout_id,
        )
    except ValidationError as exc:
        raise PersistenceCorruption(f"Workout entry {workout_id} is invalid: {exc}") from exc


class WorkoutRepository:
    """Persistence adapter: the whole collection lives in one blob under one key."""

    def __init__(self, store, key=STORAGE_KEY):
        self.store = store
        self.key = key

    def save(self, records: Iterable[Workout]) -> None:
        payload = [workout_to_dict(r) for r in records]
        self.store.set_item(self.key, json.dumps(payload))
        logger.debug("Saved %d workout(s) under '%s'", len(payload), self.key)

    def load(self) -> List[Workout]:
        """Read the stored collection; anything unreadable yields an empty list."""
        raw = self.store.get_item(self.key)
        if raw is None:
            return []

        try:
            entries = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as exc:
            logger.warning("Stored workouts under '%s' are not valid JSON; starting empty: %s", self.key, exc)
            return []
        if not isinstance(entries, list):
            logger.warning("Stored workouts under '%s' are not a list; starting empty", self.key)
            return []

        records = []
        for entry in entries:
            try:
                records.append(workout_from_dict(entry))
            except PersistenceCorruption as exc:
                logger.warning("Skipping stored workout: %s", exc)
        return records

    def clear(self) -> None:
        self.store.remove_item(self.key)
