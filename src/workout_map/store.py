from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from workout_map.workouts import Workout

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "workouts"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class WorkoutStore:
    """
    Ordered collection of workouts (oldest first) with a whole-snapshot
    round trip to durable storage.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._workouts: list[Workout] = []

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[Workout]:
        return iter(list(self._workouts))

    @property
    def workouts(self) -> tuple[Workout, ...]:
        return tuple(self._workouts)

    def append(self, workout: Workout) -> None:
        self._workouts.append(workout)

    def find(self, workout_id: str | None) -> Workout | None:
        if workout_id is None:
            return None
        return next((w for w in self._workouts if w.id == workout_id), None)

    def persist(self) -> None:
        """Overwrite the stored snapshot with the current sequence."""
        payload = json.dumps([w.to_record() for w in self._workouts], ensure_ascii=False)
        self.storage.set_item(self.key, payload)
        logger.info("Saved %d workouts", len(self._workouts))

    def reload(self) -> bool:
        """
        Replace the in-memory sequence with the stored snapshot.

        A missing or unreadable snapshot leaves the sequence untouched and
        returns False; nothing is raised.
        """
        try:
            raw = self.storage.get_item(self.key)
        except SQLAlchemyError as e:
            logger.warning("Could not read stored workouts: %s", e)
            return False

        if not raw:
            logger.debug("No stored workouts under %r", self.key)
            return False

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            workouts = [Workout.from_record(rec) for rec in data]
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning("Ignoring unreadable workout snapshot: %s", e)
            return False

        self._workouts = workouts
        logger.info("Loaded %d workouts", len(workouts))
        return True
