from __future__ import annotations

import logging

from workout_map.form import FormController
from workout_map.ports import GeolocationCapability, MapCapability, UIPorts
from workout_map.store import WorkoutStore
from workout_map.views import DEFAULT_ZOOM, ViewSynchronizer
from workout_map.workouts import Coords, Workout

logger = logging.getLogger(__name__)

LOCATE_FAILED_MSG = "Can't locate your position"


class WorkoutApp:
    """
    Wires geolocation, map, form, store and list together.

    Workouts restored from storage are listed at startup, but by default
    their markers are never drawn: the snapshot is read before the map
    exists and nothing goes back over it once the map is ready. Set
    ``draw_restored_markers`` to place them when the map comes up.
    """

    def __init__(
        self,
        ports: UIPorts,
        store: WorkoutStore,
        map_capability: MapCapability,
        geolocation: GeolocationCapability | None,
        *,
        zoom: int = DEFAULT_ZOOM,
        draw_restored_markers: bool = False,
    ):
        self.ports = ports
        self.store = store
        self.map_capability = map_capability
        self.geolocation = geolocation
        self.zoom = zoom
        self.draw_restored_markers = draw_restored_markers

        self.views = ViewSynchronizer(store, ports.workout_list, zoom=zoom)
        self.form = FormController(ports.form, store, self.views, ports.alert)
        self.restored: tuple[Workout, ...] = ()

    def start(self) -> None:
        if self.store.reload():
            self.restored = self.store.workouts
            for workout in self.restored:
                self.views.render_list_entry(workout)

        if self.geolocation is None:
            logger.warning("No geolocation available")
            self._on_position_failed()
            return
        self.geolocation.get_current_position(self._load_map, self._on_position_failed)

    def _load_map(self, coords: Coords) -> None:
        logger.info("Centering map on %.5f, %.5f", *coords)
        handle = self.map_capability.initialize(coords, self.zoom)
        self.views.attach_map(handle)
        handle.on_click(self.form.show)

        if self.draw_restored_markers:
            for workout in self.restored:
                self.views.render_map_marker(workout)

    def _on_position_failed(self) -> None:
        self.ports.alert(LOCATE_FAILED_MSG)

    # ---- UI events
    def on_type_changed(self) -> None:
        self.form.toggle_kind_field()

    def on_submit(self) -> Workout | None:
        return self.form.submit()

    def on_list_click(self, workout_id: str | None) -> bool:
        return self.views.resolve_list_click(workout_id)
