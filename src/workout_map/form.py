from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from workout_map.ports import FormPort
from workout_map.store import WorkoutStore
from workout_map.views import ViewSynchronizer
from workout_map.workouts import Coords, ValidationError, Workout, new_workout

logger = logging.getLogger(__name__)

INVALID_INPUT_MSG = "Inputs have to be positive numbers."
SAVE_FAILED_MSG = "Could not save workouts."


class FormState(enum.Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


class FormController:
    """
    Hidden until the map is clicked; a valid submission turns the pending
    click position into a stored, rendered workout and hides the form again.
    """

    def __init__(
        self,
        form: FormPort,
        store: WorkoutStore,
        views: ViewSynchronizer,
        alert: Callable[[str], None],
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.form = form
        self.store = store
        self.views = views
        self.alert = alert
        self.clock = clock

        self.state = FormState.HIDDEN
        self.pending_coords: Coords | None = None

    @property
    def visible(self) -> bool:
        return self.state is FormState.VISIBLE

    def show(self, coords: Coords) -> None:
        self.pending_coords = coords
        self.form.show()
        self.form.focus_distance()
        self.state = FormState.VISIBLE

    def toggle_kind_field(self) -> None:
        self.form.show_kind_field(self.form.read_values().kind)

    def hide(self) -> None:
        self.form.clear()
        self.form.hide()
        self.state = FormState.HIDDEN
        self.pending_coords = None

    def submit(self) -> Workout | None:
        if not self.visible or self.pending_coords is None:
            return None

        values = self.form.read_values()
        try:
            workout = new_workout(
                values.kind,
                self.pending_coords,
                values.distance,
                values.duration,
                values.extra,
                now=self.clock(),
            )
        except ValidationError as e:
            logger.info("Rejected workout input: %s", e)
            self.form.clear()
            self.alert(INVALID_INPUT_MSG)
            return None

        self.store.append(workout)
        self.views.render_map_marker(workout)
        self.views.render_list_entry(workout)
        self.hide()

        try:
            self.store.persist()
        except SQLAlchemyError as e:
            logger.error("Saving workouts failed: %s", e)
            self.alert(SAVE_FAILED_MSG)
        return workout
