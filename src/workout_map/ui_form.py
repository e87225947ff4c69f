from __future__ import annotations

from collections.abc import Callable

import gi

from workout_map.ports import FormValues

gi.require_versions({"Gtk": "4.0", "Adw": "1"})
from gi.repository import Adw, Gtk  # noqa: E402


class FormPanel(Gtk.Box):
    """
    Workout input form: type selector plus distance, duration, cadence and
    elevation fields. Pressing Enter in any field submits.
    """

    def __init__(
        self,
        on_submit: Callable[[], None],
        on_type_changed: Callable[[], None],
    ) -> None:
        super().__init__(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        for m in ("top", "bottom", "start", "end"):
            getattr(self, f"set_margin_{m}")(12)
        self.add_css_class("card")

        group = Adw.PreferencesGroup()

        self.type_combo = Gtk.ComboBoxText()
        self.type_combo.append("running", "Running")
        self.type_combo.append("cycling", "Cycling")
        self.type_combo.set_active_id("running")
        self.type_combo.connect("changed", lambda *_: on_type_changed())
        self.type_row = self._row("Type", self.type_combo)
        group.add(self.type_row)

        self.distance_entry = self._entry("km", on_submit)
        self.duration_entry = self._entry("min", on_submit)
        self.cadence_entry = self._entry("step/min", on_submit)
        self.elevation_entry = self._entry("meters", on_submit)

        group.add(self._row("Distance", self.distance_entry))
        group.add(self._row("Duration", self.duration_entry))
        self.cadence_row = self._row("Cadence", self.cadence_entry)
        self.elevation_row = self._row("Elev Gain", self.elevation_entry)
        group.add(self.cadence_row)
        group.add(self.elevation_row)

        self.append(group)

        self.show_kind_field("running")
        self.hide()

    @staticmethod
    def _row(title: str, widget: Gtk.Widget) -> Adw.ActionRow:
        row = Adw.ActionRow()
        row.set_title(title)
        widget.set_valign(Gtk.Align.CENTER)
        row.add_suffix(widget)
        return row

    @staticmethod
    def _entry(placeholder: str, on_submit: Callable[[], None]) -> Gtk.Entry:
        entry = Gtk.Entry()
        entry.set_placeholder_text(placeholder)
        entry.set_input_purpose(Gtk.InputPurpose.DIGITS)
        entry.set_width_chars(8)
        entry.connect("activate", lambda *_: on_submit())
        return entry

    # ---- FormPort
    def read_values(self) -> FormValues:
        return FormValues(
            kind=self.type_combo.get_active_id() or "running",
            distance=self.distance_entry.get_text(),
            duration=self.duration_entry.get_text(),
            cadence=self.cadence_entry.get_text(),
            elevation_gain=self.elevation_entry.get_text(),
        )

    def clear(self) -> None:
        for entry in (
            self.distance_entry,
            self.duration_entry,
            self.cadence_entry,
            self.elevation_entry,
        ):
            entry.set_text("")

    def show(self) -> None:
        self.set_visible(True)

    def hide(self) -> None:
        self.set_visible(False)

    def focus_distance(self) -> None:
        self.distance_entry.grab_focus()

    def show_kind_field(self, kind: str) -> None:
        self.cadence_row.set_visible(kind == "running")
        self.cadence_entry.set_sensitive(kind == "running")
        self.elevation_row.set_visible(kind == "cycling")
        self.elevation_entry.set_sensitive(kind == "cycling")
