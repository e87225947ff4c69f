from __future__ import annotations

import pytest
from fakes import Alerts, FakeForm, FakeList
from workout_map.database import DatabaseManager
from workout_map.ports import UIPorts
from workout_map.store import WorkoutStore


@pytest.fixture
def database(tmp_path):
    db = DatabaseManager(f"sqlite:///{tmp_path / 'workouts.db'}")
    yield db
    db.close()


@pytest.fixture
def store(database) -> WorkoutStore:
    return WorkoutStore(database)


@pytest.fixture
def form() -> FakeForm:
    return FakeForm()


@pytest.fixture
def workout_list() -> FakeList:
    return FakeList()


@pytest.fixture
def alerts() -> Alerts:
    return Alerts()


@pytest.fixture
def ports(form, workout_list, alerts) -> UIPorts:
    return UIPorts(form=form, workout_list=workout_list, alert=alerts)
