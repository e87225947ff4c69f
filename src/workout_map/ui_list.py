from __future__ import annotations

from collections.abc import Callable

import gi

from workout_map.ports import ListEntry

gi.require_versions({"Gtk": "4.0", "Adw": "1"})
from gi.repository import Gtk  # noqa: E402


class WorkoutListPanel(Gtk.ScrolledWindow):
    """Workout cards, newest on top. Activating a card reports its workout id."""

    def __init__(self, on_entry_clicked: Callable[[str | None], None]) -> None:
        super().__init__()
        self.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        self.set_vexpand(True)

        self._on_entry_clicked = on_entry_clicked
        self._listbox = Gtk.ListBox()
        self._listbox.set_selection_mode(Gtk.SelectionMode.NONE)
        self._listbox.set_activate_on_single_click(True)
        self._listbox.add_css_class("boxed-list")
        self._listbox.connect("row-activated", self._on_row_activated)
        self.set_child(self._listbox)

    def prepend(self, entry: ListEntry) -> None:
        self._listbox.prepend(self._build_row(entry))

    def _build_row(self, entry: ListEntry) -> Gtk.ListBoxRow:
        row = Gtk.ListBoxRow()
        # carries the workout id for click resolution
        row._workout_id = entry.workout_id
        row.add_css_class(f"workout--{entry.kind}")

        card = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        for m in ("top", "bottom", "start", "end"):
            getattr(card, f"set_margin_{m}")(10)

        title = Gtk.Label(label=entry.title)
        title.add_css_class("heading")
        title.set_xalign(0)
        card.append(title)

        details = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=16)
        for detail in entry.details:
            lbl = Gtk.Label(label=f"{detail.icon} {detail.value} {detail.unit}")
            lbl.set_xalign(0)
            details.append(lbl)
        card.append(details)

        row.set_child(card)
        return row

    def _on_row_activated(self, _listbox: Gtk.ListBox, row: Gtk.ListBoxRow):
        self._on_entry_clicked(getattr(row, "_workout_id", None))
