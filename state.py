"""Per-app interaction state owned by the workout controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from core.workouts import WorkoutKind


class FormState(str, Enum):
    IDLE = 'idle'
    FORM_OPEN = 'form_open'


@dataclass
class AppState:
    form_state: FormState = FormState.IDLE
    # Map location the open form will attach the workout to.
    pending_coords: Optional[Tuple[float, float]] = None
    form_kind: WorkoutKind = WorkoutKind.RUNNING

    @property
    def form_open(self) -> bool:
        return self.form_state is FormState.FORM_OPEN

    def open_form(self, coords: Tuple[float, float]) -> None:
        self.pending_coords = coords
        self.form_state = FormState.FORM_OPEN

    def close_form(self) -> None:
        self.pending_coords = None
        self.form_state = FormState.IDLE

    def reset(self) -> None:
        self.close_form()
        self.form_kind = WorkoutKind.RUNNING
