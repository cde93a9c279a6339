"""Workout lifecycle controller: map clicks, form submits, list clicks, reset."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Tuple

from constants import (
    DEFAULT_MAP_CENTER,
    GEOLOCATION_TIMEOUT_SEC,
    MAP_ZOOM_LEVEL,
    MOVE_ANIMATION,
    POPUP_OPTIONS,
    TILE_ATTRIBUTION,
    TILE_URL,
    UI_COPY,
)
from core.errors import GeolocationError, ValidationError
from core.export import export_csv
from core.session_store import SessionStore
from core.workout_factory import coerce_number, create_workout
from core.workouts import Workout, WorkoutKind, kind_icon, popup_title
from state import AppState

logger = logging.getLogger(__name__)


class WorkoutController:
    """
    Owns the session's workouts and drives the views in response to events.

    Views are injected so the controller never touches NiceGUI directly:
      - map_view: create_view, add_tile_layer, on_click, add_marker,
        set_view, clear_markers
      - form_view: show, hide, clear, focus_distance, show_fields_for
      - list_view: add_entry, clear
      - repository: save, load, clear
      - geolocator (optional): async current_position(timeout)
      - notify(message, type): user-facing alert
    """

    def __init__(
        self,
        map_view,
        form_view,
        list_view,
        repository,
        *,
        state: Optional[AppState] = None,
        notify: Optional[Callable] = None,
        geolocator=None,
        clock: Callable[[], datetime] = datetime.now,
        zoom: int = MAP_ZOOM_LEVEL,
        default_center: Tuple[float, float] = DEFAULT_MAP_CENTER,
        geolocation_timeout: float = GEOLOCATION_TIMEOUT_SEC,
    ):
        self.map_view = map_view
        self.form_view = form_view
        self.list_view = list_view
        self.repository = repository
        self.state = state or AppState()
        self.store = SessionStore()
        self.notify = notify or (lambda message, type='info': None)
        self.geolocator = geolocator
        self.clock = clock
        self.zoom = zoom
        self.default_center = default_center
        self.geolocation_timeout = geolocation_timeout

    # ── Startup ───────────────────────────────────────────────────────

    def start(self) -> None:
        self.on_map_ready()
        self.load_saved_workouts()

    def on_map_ready(self) -> None:
        self.map_view.create_view(self.default_center, self.zoom)
        self.map_view.add_tile_layer(TILE_URL, TILE_ATTRIBUTION)
        self.map_view.on_click(self.on_map_clicked)

    async def locate_user(self) -> Tuple[float, float]:
        """Center the map on the user's position, or on the default if unavailable."""
        center = self.default_center
        if self.geolocator is not None:
            try:
                center = await self.geolocator.current_position(timeout=self.geolocation_timeout)
            except GeolocationError as exc:
                logger.warning("Could not get your position, using default map center: %s", exc)
                center = self.default_center
        self.map_view.set_view(center, self.zoom, None)
        return center

    def load_saved_workouts(self) -> None:
        """Hydrate the store and replay rendering. Does not write back."""
        records = self.repository.load()
        self.store.replace_all(records)
        for record in self.store:
            self._render(record)
        logger.info("Loaded %d saved workout(s)", len(records))

    # ── Map / form events ─────────────────────────────────────────────

    def on_map_clicked(self, location) -> None:
        lat, lng = location
        self.state.open_form((float(lat), float(lng)))
        self.form_view.show()
        self.form_view.focus_distance()

    def on_form_type_changed(self, kind) -> None:
        try:
            self.state.form_kind = WorkoutKind(kind)
        except ValueError:
            logger.warning("Ignoring unknown workout type %r", kind)
            return
        self.form_view.show_fields_for(self.state.form_kind)

    def on_form_submitted(self, raw_fields: dict) -> Optional[Workout]:
        """
        Validate the form and record a workout at the pending map location.

        Returns the new record, or None when the submission was rejected.
        On rejection the form stays open and nothing is stored.
        """
        if not self.state.form_open or self.state.pending_coords is None:
            logger.warning("Form submitted without a selected map location; ignoring")
            return None

        kind = raw_fields.get('type', self.state.form_kind)
        extra_field = 'elevation' if kind == WorkoutKind.CYCLING.value else 'cadence'

        try:
            record = create_workout(
                kind,
                self.state.pending_coords,
                coerce_number(raw_fields.get('distance')),
                coerce_number(raw_fields.get('duration')),
                coerce_number(raw_fields.get(extra_field)),
                created_at=self.clock(),
            )
        except ValidationError as exc:
            logger.info("Rejected workout input: %s", exc)
            self.notify(UI_COPY['invalid_inputs'], type='warning')
            return None

        self.store.append(record)
        self.repository.save(self.store.all())
        self._render(record)

        self.form_view.clear()
        self.form_view.hide()
        self.state.close_form()
        logger.info("Recorded %s (id=%s)", record.description, record.id)
        return record

    def on_workout_list_clicked(self, workout_id) -> None:
        if workout_id is None:
            return
        record = self.store.find_by_id(workout_id)
        if record is None:
            logger.debug("No workout with id %s; ignoring click", workout_id)
            return
        self.map_view.set_view(record.coords, self.zoom, dict(MOVE_ANIMATION))

    # ── Actions ───────────────────────────────────────────────────────

    def on_reset(self) -> None:
        """Purge stored workouts and return everything to the initial empty state."""
        self.repository.clear()
        self.store.clear()
        self.map_view.clear_markers()
        self.list_view.clear()
        self.form_view.clear()
        self.form_view.hide()
        self.state.reset()
        self.form_view.show_fields_for(self.state.form_kind)
        self.map_view.set_view(self.default_center, self.zoom, None)
        self.load_saved_workouts()
        logger.info("Workouts reset")

    def export_csv(self, destination_dir=None) -> str:
        return export_csv(self.store.all(), destination_dir)

    # ── Rendering ─────────────────────────────────────────────────────

    def _render(self, record: Workout) -> None:
        marker = self.map_view.add_marker(record.coords, kind_icon(record.kind))
        options = dict(POPUP_OPTIONS, className=f'{record.kind.value}-popup')
        marker.bind_popup(popup_title(record), options)
        marker.open_popup()
        self.list_view.add_entry(record)
