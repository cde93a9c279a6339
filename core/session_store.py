"""In-memory, ordered collection of the session's workouts."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from core.workouts import Workout


class SessionStore:
    """Single source of truth for workouts while the app is running."""

    def __init__(self):
        self._records: List[Workout] = []

    def append(self, record: Workout) -> None:
        self._records.append(record)

    def find_by_id(self, workout_id: int) -> Optional[Workout]:
        for record in self._records:
            if record.id == workout_id:
                return record
        return None

    def all(self) -> Tuple[Workout, ...]:
        return tuple(self._records)

    def replace_all(self, records: Iterable[Workout]) -> None:
        """Swap contents wholesale, keeping the given order. Used on hydration."""
        self._records = list(records)

    def clear(self) -> None:
        self._records = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Workout]:
        return iter(tuple(self._records))
