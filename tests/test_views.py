from __future__ import annotations

import pytest
from fakes import FIXED_NOW, FakeList, FakeMap
from workout_map.ports import EntryDetail
from workout_map.store import WorkoutStore
from workout_map.views import MapNotReadyError, ViewSynchronizer, list_entry_for
from workout_map.workouts import new_workout


@pytest.fixture
def run():
    return new_workout("running", (10, 20), "5", "30", "160", now=FIXED_NOW)


@pytest.fixture
def ride():
    return new_workout("cycling", (48.1, 11.6), "10", "60", "200", now=FIXED_NOW)


@pytest.fixture
def views(store: WorkoutStore, workout_list: FakeList) -> ViewSynchronizer:
    return ViewSynchronizer(store, workout_list)


def test_running_list_entry(run) -> None:
    entry = list_entry_for(run)
    assert entry.workout_id == run.id
    assert entry.kind == "running"
    assert entry.title == "🏃‍♂️ Running on October 19"
    assert entry.details == (
        EntryDetail("🏃‍♂️", "5", "km"),
        EntryDetail("⏱", "30", "min"),
        EntryDetail("⚡️", "6.0", "MIN/KM"),
        EntryDetail("🦶🏼", "160", "SPM"),
    )


def test_cycling_list_entry(ride) -> None:
    entry = list_entry_for(ride)
    assert entry.title == "🚴‍♀️ Cycling on October 19"
    assert entry.details[2] == EntryDetail("⚡️", "10.0", "KM/H")
    assert entry.details[3] == EntryDetail("⛰", "200", "M")


def test_metric_is_shown_with_one_decimal() -> None:
    w = new_workout("running", (0, 0), "3", "20", "150")
    assert list_entry_for(w).details[2].value == "6.7"


def test_list_is_newest_first(views, workout_list, run, ride) -> None:
    views.render_list_entry(run)
    views.render_list_entry(ride)
    assert [e.workout_id for e in workout_list.entries] == [ride.id, run.id]


def test_rendering_twice_gives_two_entries(views, workout_list, run) -> None:
    views.render_list_entry(run)
    views.render_list_entry(run)
    assert [e.workout_id for e in workout_list.entries] == [run.id, run.id]


def test_marker_requires_map(views, run) -> None:
    assert not views.map_ready
    with pytest.raises(MapNotReadyError):
        views.render_map_marker(run)


def test_marker_popup(views, run, ride) -> None:
    handle = FakeMap().initialize((0, 0), 13)
    views.attach_map(handle)

    views.render_map_marker(run)
    views.render_map_marker(ride)

    (run_coords, run_popup), (ride_coords, ride_popup) = handle.markers
    assert run_coords == (10.0, 20.0)
    assert run_popup.message == "🏃‍♂️ Running on October 19"
    assert run_popup.class_name == "running-popup"
    assert run_popup.auto_close is False
    assert run_popup.close_on_click is False
    assert (run_popup.max_width, run_popup.min_width) == (250, 100)
    assert ride_coords == (48.1, 11.6)
    assert ride_popup.class_name == "cycling-popup"


def test_list_click_centers_map(store, views, ride) -> None:
    store.append(ride)
    handle = FakeMap().initialize((0, 0), 5)
    views.attach_map(handle)

    assert views.resolve_list_click(ride.id) is True
    assert handle.center == (48.1, 11.6)
    assert handle.zoom == 13


@pytest.mark.parametrize("workout_id", [None, "missing"])
def test_list_click_misses_are_ignored(store, views, ride, workout_id) -> None:
    store.append(ride)
    handle = FakeMap().initialize((0, 0), 5)
    views.attach_map(handle)

    assert views.resolve_list_click(workout_id) is False
    assert (handle.center, handle.zoom) == ((0, 0), 5)


def test_list_click_before_map_is_ignored(store, views, ride) -> None:
    store.append(ride)
    assert views.resolve_list_click(ride.id) is False
