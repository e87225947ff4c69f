from __future__ import annotations

import json

import pytest
from fakes import FIXED_NOW, Alerts, FakeForm, FakeList, FakeMap
from sqlalchemy.exc import OperationalError
from workout_map.form import INVALID_INPUT_MSG, SAVE_FAILED_MSG, FormController, FormState
from workout_map.store import WorkoutStore
from workout_map.views import ViewSynchronizer


@pytest.fixture
def views(store: WorkoutStore, workout_list: FakeList) -> ViewSynchronizer:
    v = ViewSynchronizer(store, workout_list)
    v.attach_map(FakeMap().initialize((0, 0), 13))
    return v


@pytest.fixture
def controller(form: FakeForm, store: WorkoutStore, views, alerts: Alerts) -> FormController:
    return FormController(form, store, views, alerts, clock=lambda: FIXED_NOW)


def test_starts_hidden(controller: FormController, form: FakeForm) -> None:
    assert controller.state is FormState.HIDDEN
    assert controller.pending_coords is None
    assert not form.visible


def test_map_click_reveals_form_and_focuses_distance(controller, form: FakeForm) -> None:
    controller.show((10, 20))
    assert controller.state is FormState.VISIBLE
    assert controller.pending_coords == (10, 20)
    assert form.visible
    assert form.focused


def test_second_click_replaces_pending_coords(controller) -> None:
    controller.show((10, 20))
    controller.show((30, 40))
    assert controller.pending_coords == (30, 40)


@pytest.mark.parametrize("kind", ["running", "cycling"])
def test_toggle_follows_selected_type(controller, form: FakeForm, store, kind: str) -> None:
    form.fill(kind=kind)
    controller.toggle_kind_field()
    assert form.kind_field == kind
    assert controller.state is FormState.HIDDEN
    assert len(store) == 0


def test_submit_while_hidden_is_ignored(controller, form: FakeForm, store) -> None:
    form.fill("running", "5", "30", "160")
    assert controller.submit() is None
    assert len(store) == 0
    assert form.distance == "5"


def test_running_submission(controller, form, store, database, workout_list, views) -> None:
    controller.show((10, 20))
    form.fill("running", "5", "30", "160")

    workout = controller.submit()

    assert workout is not None
    assert store.workouts == (workout,)
    assert workout.kind == "running"
    assert workout.pace == 6.0
    assert workout.coords == (10.0, 20.0)
    assert workout.date == "October 19"

    # rendered to both views
    [entry] = workout_list.entries
    assert entry.workout_id == workout.id
    assert entry.details[2].value == "6.0"
    assert entry.details[2].unit == "MIN/KM"
    assert views.map.markers[0][0] == (10.0, 20.0)

    # form hidden and cleared
    assert controller.state is FormState.HIDDEN
    assert controller.pending_coords is None
    assert not form.visible
    assert (form.distance, form.duration, form.cadence) == ("", "", "")

    # persisted
    [record] = json.loads(database.get_item("workouts"))
    assert record["id"] == workout.id


def test_cycling_submission(controller, form, store, workout_list) -> None:
    controller.show((10, 20))
    form.fill("cycling", "10", "60", elevation_gain="200")

    workout = controller.submit()

    assert workout.speed == 10.0
    assert workout.elevation_gain == 200
    assert workout_list.entries[0].details[2].unit == "KM/H"


def test_cycling_ignores_cadence_field(controller, form, store) -> None:
    controller.show((10, 20))
    form.fill("cycling", "10", "60", cadence="abc", elevation_gain="200")
    assert controller.submit() is not None


@pytest.mark.parametrize(
    ("kind", "distance", "duration", "cadence", "elevation"),
    [
        ("running", "-1", "30", "150", ""),
        ("running", "0", "30", "150", ""),
        ("running", "5", "3.2", "150", ""),
        ("running", "5", "30", "abc", ""),
        ("running", "5", "30", "", "200"),
        ("cycling", "10", "60", "", "0"),
        ("cycling", "10", "", "", "200"),
    ],
)
def test_invalid_submission_is_rejected(
    controller, form, store, alerts, workout_list, database, kind, distance, duration, cadence, elevation
) -> None:
    controller.show((10, 20))
    form.fill(kind, distance, duration, cadence, elevation)

    assert controller.submit() is None

    assert len(store) == 0
    assert workout_list.entries == []
    assert database.get_item("workouts") is None
    assert alerts == [INVALID_INPUT_MSG]
    # fields cleared, still visible with the same pending click
    assert (form.distance, form.duration, form.cadence, form.elevation_gain) == ("", "", "", "")
    assert controller.state is FormState.VISIBLE
    assert controller.pending_coords == (10, 20)


def test_persist_failure_is_alerted(form, views, alerts) -> None:
    class ReadOnlyStorage:
        def get_item(self, key):
            return None

        def set_item(self, key, value):
            raise OperationalError("INSERT", {}, Exception("readonly database"))

    store = WorkoutStore(ReadOnlyStorage())
    views.store = store
    controller = FormController(form, store, views, alerts, clock=lambda: FIXED_NOW)
    controller.show((1, 2))
    form.fill("running", "5", "30", "160")

    workout = controller.submit()

    assert workout is not None
    assert store.workouts == (workout,)
    assert alerts == [SAVE_FAILED_MSG]


@pytest.mark.parametrize(
    ("kind", "distance", "duration", "extra"),
    [
        # quotient too large for a float
        ("running", "1", "1" + "0" * 400, "160"),
        ("cycling", "1" + "0" * 400, "1", "200"),
        # beyond int()'s digit limit
        ("running", "5" * 5000, "30", "160"),
        ("cycling", "10", "60", "5" * 5000),
    ],
)
def test_oversized_numbers_are_rejected_like_invalid_input(
    controller, form, store, alerts, workout_list, database, kind, distance, duration, extra
) -> None:
    controller.show((10, 20))
    if kind == "running":
        form.fill(kind, distance, duration, cadence=extra)
    else:
        form.fill(kind, distance, duration, elevation_gain=extra)

    assert controller.submit() is None

    assert len(store) == 0
    assert workout_list.entries == []
    assert database.get_item("workouts") is None
    assert alerts == [INVALID_INPUT_MSG]
    assert (form.distance, form.duration, form.cadence, form.elevation_gain) == ("", "", "", "")
    assert controller.state is FormState.VISIBLE
