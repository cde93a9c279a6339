"""
components/map_view.py
──────────────────────
Leaflet map service for the workout controller.

Owns:
  • The ui.leaflet element and its tile layer
  • Workout markers and their popups

Does not own:
  • Deciding what to render or when (controller callbacks)
"""
from __future__ import annotations

import json
import logging

from nicegui import ui

from constants import MARKER_ICON_ANCHOR, MARKER_ICON_SIZE, MARKER_POPUP_ANCHOR

logger = logging.getLogger(__name__)


class LeafletMarker:
    """Thin handle over a ui.leaflet marker layer."""

    def __init__(self, layer):
        self.layer = layer

    def bind_popup(self, text, options=None):
        self.layer.run_method('bindPopup', text, options or {})
        return self

    def open_popup(self):
        self.layer.run_method('openPopup')
        return self


class LeafletMapView:
    """Wraps ui.leaflet behind create_view / add_marker / set_view."""

    def __init__(self, container=None):
        self.container = container
        self.map = None
        self.markers = []

    def create_view(self, center, zoom):
        options = {'zoomControl': True, 'attributionControl': True}
        if self.container is not None:
            with self.container:
                self.map = ui.leaflet(center=tuple(center), zoom=zoom, options=options)
        else:
            self.map = ui.leaflet(center=tuple(center), zoom=zoom, options=options)
        self.map.classes('w-full h-full')
        return self.map

    async def initialized(self):
        await self.map.initialized()

    def add_tile_layer(self, url, attribution):
        # Replace the built-in OSM layer
        self.map.clear_layers()
        self.map.tile_layer(
            url_template=url,
            options={'attribution': attribution, 'maxZoom': 19},
        )

    def on_click(self, handler):
        def _on_map_click(e):
            latlng = (e.args or {}).get('latlng') or {}
            if 'lat' not in latlng or 'lng' not in latlng:
                logger.debug("Map click without coordinates: %s", e.args)
                return
            handler((latlng['lat'], latlng['lng']))

        self.map.on('map-click', _on_map_click)

    def add_marker(self, coords, icon):
        layer = self.map.marker(latlng=tuple(coords))
        layer.run_method(':setIcon', self._div_icon(icon))
        marker = LeafletMarker(layer)
        self.markers.append(marker)
        return marker

    def set_view(self, coords, zoom, animation_options=None):
        self.map.run_map_method('setView', list(coords), zoom, animation_options or {})

    def clear_markers(self):
        for marker in self.markers:
            try:
                self.map.remove_layer(marker.layer)
            except (KeyError, ValueError) as ex:
                logger.debug("Marker already removed: %s", ex)
        self.markers = []

    @staticmethod
    def _div_icon(html):
        width, height = MARKER_ICON_SIZE
        anchor_x, anchor_y = MARKER_ICON_ANCHOR
        popup_x, popup_y = MARKER_POPUP_ANCHOR
        return (
            f'L.divIcon({{className:"workout-marker",'
            f'html:{json.dumps(html)},'
            f'iconSize:[{width},{height}],iconAnchor:[{anchor_x},{anchor_y}],'
            f'popupAnchor:[{popup_x},{popup_y}]}})'
        )
