from __future__ import annotations

import logging

from workout_map.ports import EntryDetail, ListEntry, ListPort, MapHandle, PopupConfig
from workout_map.store import WorkoutStore
from workout_map.workouts import Workout, workout_message

logger = logging.getLogger(__name__)

DEFAULT_ZOOM = 13

DURATION_ICON = "⏱"
METRIC_ICON = "⚡️"
CADENCE_ICON = "🦶🏼"
ELEVATION_ICON = "⛰"


class MapNotReadyError(RuntimeError):
    """A marker was requested before the map was initialized."""


def list_entry_for(workout: Workout) -> ListEntry:
    if workout.kind == "running":
        metric = EntryDetail(METRIC_ICON, f"{workout.pace:.1f}", "MIN/KM")
        extra = EntryDetail(CADENCE_ICON, str(workout.cadence), "SPM")
    else:
        metric = EntryDetail(METRIC_ICON, f"{workout.speed:.1f}", "KM/H")
        extra = EntryDetail(ELEVATION_ICON, str(workout.elevation_gain), "M")

    return ListEntry(
        workout_id=workout.id,
        kind=workout.kind,
        title=workout_message(workout),
        details=(
            EntryDetail(workout.icon, str(workout.distance), "km"),
            EntryDetail(DURATION_ICON, str(workout.duration), "min"),
            metric,
            extra,
        ),
    )


def popup_for(workout: Workout) -> PopupConfig:
    return PopupConfig(message=workout_message(workout), class_name=f"{workout.kind}-popup")


class ViewSynchronizer:
    """Keeps the map markers and the workout list in step with the store."""

    def __init__(self, store: WorkoutStore, workout_list: ListPort, *, zoom: int = DEFAULT_ZOOM):
        self.store = store
        self.workout_list = workout_list
        self.zoom = zoom
        self.map: MapHandle | None = None

    @property
    def map_ready(self) -> bool:
        return self.map is not None

    def attach_map(self, handle: MapHandle) -> None:
        self.map = handle

    def render_list_entry(self, workout: Workout) -> ListEntry:
        # append-only: rendering twice gives two entries
        entry = list_entry_for(workout)
        self.workout_list.prepend(entry)
        return entry

    def render_map_marker(self, workout: Workout) -> PopupConfig:
        if self.map is None:
            raise MapNotReadyError(f"Map not initialized; can't place marker for {workout.id}")
        popup = popup_for(workout)
        self.map.add_marker(workout.coords, popup)
        return popup

    def resolve_list_click(self, workout_id: str | None) -> bool:
        """Center the map on the clicked entry's workout. False when nothing happened."""
        if workout_id is None:
            return False
        workout = self.store.find(workout_id)
        if workout is None:
            logger.debug("No workout with id %r", workout_id)
            return False
        if self.map is None:
            return False
        self.map.set_view(workout.coords, self.zoom)
        return True
