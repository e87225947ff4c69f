from __future__ import annotations

import logging
from collections.abc import Callable

import gi

from workout_map.ports import PopupConfig
from workout_map.workouts import Coords

gi.require_versions({"Gtk": "4.0", "Shumate": "1.0"})
from gi.repository import Gtk, Shumate  # noqa: E402

logger = logging.getLogger(__name__)


class ShumateMapHandle:
    """A live libshumate map with one marker layer for workouts."""

    def __init__(self, simple_map: Shumate.SimpleMap):
        self.simple_map = simple_map
        self.map = simple_map.get_map()
        self.viewport = simple_map.get_viewport()
        self.markers = Shumate.MarkerLayer.new(self.viewport)
        simple_map.add_overlay_layer(self.markers)
        self._click_callbacks: list[Callable[[Coords], None]] = []

        click = Gtk.GestureClick()
        click.connect("released", self._on_released)
        self.map.add_controller(click)

    def _on_released(self, _gesture, n_press: int, x: float, y: float):
        if n_press != 1:
            return
        lat, lon = self.viewport.widget_coords_to_location(self.map, x, y)
        for cb in self._click_callbacks:
            cb((lat, lon))

    def on_click(self, callback: Callable[[Coords], None]) -> None:
        self._click_callbacks.append(callback)

    def add_marker(self, coords: Coords, popup: PopupConfig) -> None:
        # Popups are plain widgets on the marker, so they never auto-close
        box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=2)
        bubble = Gtk.Label(label=popup.message)
        bubble.add_css_class("popup")
        bubble.add_css_class(popup.class_name)
        bubble.set_wrap(True)
        bubble.set_max_width_chars(max(1, popup.max_width // 8))
        bubble.set_size_request(popup.min_width, -1)
        pin = Gtk.Image.new_from_icon_name("mark-location-symbolic")
        pin.set_pixel_size(24)
        box.append(bubble)
        box.append(pin)

        marker = Shumate.Marker()
        marker.set_location(coords[0], coords[1])
        marker.set_child(box)
        self.markers.add_marker(marker)

    def set_view(self, coords: Coords, zoom: int) -> None:
        self.map.go_to_full(coords[0], coords[1], zoom)


class ShumateMap:
    """Builds the map widget on demand and places it in ``container``."""

    def __init__(self, container: Gtk.Box, source_id: str = Shumate.MAP_SOURCE_OSM_MAPNIK):
        self.container = container
        self.source_id = source_id
        self.handle: ShumateMapHandle | None = None

    def initialize(self, coords: Coords, zoom: int) -> ShumateMapHandle:
        registry = Shumate.MapSourceRegistry.new_with_defaults()
        source = registry.get_by_id(self.source_id)
        if source is None:
            logger.warning("Unknown map source %r, using OSM", self.source_id)
            source = registry.get_by_id(Shumate.MAP_SOURCE_OSM_MAPNIK)

        simple_map = Shumate.SimpleMap()
        simple_map.set_map_source(source)
        simple_map.set_vexpand(True)
        simple_map.set_hexpand(True)

        handle = ShumateMapHandle(simple_map)
        handle.viewport.set_zoom_level(zoom)
        handle.map.center_on(coords[0], coords[1])

        # replace the "locating…" placeholder
        child = self.container.get_first_child()
        while child is not None:
            nxt = child.get_next_sibling()
            self.container.remove(child)
            child = nxt
        self.container.append(simple_map)

        self.handle = handle
        return handle
