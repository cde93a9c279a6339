"""Browser geolocation through NiceGUI's JavaScript bridge."""

from __future__ import annotations

import asyncio
import logging

from nicegui import ui

from core.errors import GeolocationError

logger = logging.getLogger(__name__)

# Resolves (never rejects) so failures come back as an {error: ...} payload.
_GET_POSITION_JS = '''
new Promise((resolve) => {
    if (!navigator.geolocation) {
        resolve({error: "Geolocation is not supported"});
        return;
    }
    navigator.geolocation.getCurrentPosition(
        (pos) => resolve({lat: pos.coords.latitude, lng: pos.coords.longitude}),
        (err) => resolve({error: err.message || "Position unavailable"}),
        {timeout: %d}
    );
})
'''


class BrowserGeolocator:
    """Ask the connected browser for its current position."""

    async def current_position(self, timeout=5.0):
        try:
            result = await ui.run_javascript(
                _GET_POSITION_JS % int(timeout * 1000),
                timeout=timeout + 1.0,
            )
        except (TimeoutError, asyncio.TimeoutError) as exc:
            raise GeolocationError("Timed out waiting for position") from exc

        if not isinstance(result, dict):
            raise GeolocationError(f"Unexpected geolocation result: {result!r}")
        if result.get('error'):
            raise GeolocationError(result['error'])
        try:
            position = float(result['lat']), float(result['lng'])
        except (KeyError, TypeError, ValueError) as exc:
            raise GeolocationError(f"Malformed position: {result!r}") from exc
        logger.debug("Browser position: %s", position)
        return position
