from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from workout_map.workouts import Coords


@dataclass(frozen=True)
class PopupConfig:
    message: str
    class_name: str
    max_width: int = 250
    min_width: int = 100
    auto_close: bool = False  # stays open when another popup opens
    close_on_click: bool = False  # stays open on map clicks


@dataclass(frozen=True)
class EntryDetail:
    icon: str
    value: str
    unit: str


@dataclass(frozen=True)
class ListEntry:
    workout_id: str
    kind: str
    title: str
    details: tuple[EntryDetail, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FormValues:
    kind: str
    distance: str
    duration: str
    cadence: str
    elevation_gain: str

    @property
    def extra(self) -> str:
        return self.cadence if self.kind == "running" else self.elevation_gain


class MapHandle(Protocol):
    def on_click(self, callback: Callable[[Coords], None]) -> None: ...

    def add_marker(self, coords: Coords, popup: PopupConfig) -> None: ...

    def set_view(self, coords: Coords, zoom: int) -> None: ...


class MapCapability(Protocol):
    def initialize(self, coords: Coords, zoom: int) -> MapHandle: ...


class GeolocationCapability(Protocol):
    def get_current_position(
        self,
        on_success: Callable[[Coords], None],
        on_failure: Callable[[], None],
    ) -> None: ...


class FormPort(Protocol):
    def read_values(self) -> FormValues: ...

    def clear(self) -> None: ...

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def focus_distance(self) -> None: ...

    def show_kind_field(self, kind: str) -> None:
        """Show the cadence row for running, the elevation row for cycling."""
        ...


class ListPort(Protocol):
    def prepend(self, entry: ListEntry) -> None: ...


@dataclass
class UIPorts:
    """Widget boundary built once at startup and shared for the whole session."""

    form: FormPort
    workout_list: ListPort
    alert: Callable[[str], None]
