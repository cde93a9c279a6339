"""Shared defaults for the map, storage, and UI copy."""

from __future__ import annotations

from typing import Dict, Tuple

# ── Map ───────────────────────────────────────────────────────────────
DEFAULT_MAP_CENTER: Tuple[float, float] = (36.27, 49.99435)
MAP_ZOOM_LEVEL = 17

TILE_URL = 'https://tile.openstreetmap.fr/hot/{z}/{x}/{y}.png'
TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)

MOVE_ANIMATION: Dict[str, object] = {'animate': True, 'duration': 0.5}

# Leaflet popup options; className is filled per workout kind.
POPUP_OPTIONS: Dict[str, object] = {
    'maxWidth': 250,
    'minWidth': 100,
    'autoClose': False,
    'closeOnClick': False,
}

MARKER_ICON_SIZE = (50, 50)
MARKER_ICON_ANCHOR = (23, 55)
MARKER_POPUP_ANCHOR = (0, -50)

GEOLOCATION_TIMEOUT_SEC = 5.0

# ── Storage ───────────────────────────────────────────────────────────
DEFAULT_DB_PATH = 'workout_map.db'
STORAGE_KEY = 'workouts'

# ── Domain ────────────────────────────────────────────────────────────
MONTHS: Tuple[str, ...] = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

KIND_ICONS: Dict[str, str] = {
    'running': '🏃‍♂️',
    'cycling': '🚴‍♀️',
}

KIND_COLORS: Dict[str, str] = {
    'running': '#00c46a',  # Green
    'cycling': '#ffb545',  # Amber
}

# ── UI copy ───────────────────────────────────────────────────────────
UI_COPY: Dict[str, str] = {
    'app_title': 'Workout Map',
    'invalid_inputs': 'Inputs have to be positive numbers!',
    'export_empty': 'No workouts to export',
    'export_done': 'CSV saved! (check your Downloads folder)',
    'reset_done': 'All workouts cleared',
    'unexpected_error': 'Something went wrong: {error}',
}
