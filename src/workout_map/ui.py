import contextlib
import logging
import threading

import gi

from workout_map.app import WorkoutApp
from workout_map.config import APP_ID, AppConfig
from workout_map.database import DatabaseManager
from workout_map.geolocation import FixedGeolocation, IPGeolocation
from workout_map.ports import UIPorts
from workout_map.store import WorkoutStore
from workout_map.ui_form import FormPanel
from workout_map.ui_list import WorkoutListPanel
from workout_map.ui_map import ShumateMap

gi.require_versions({"Gtk": "4.0", "Adw": "1"})

from gi.repository import Adw, Gdk, GLib, Gtk  # noqa: E402

logger = logging.getLogger(__name__)

Adw.init()

_PROV = Gtk.CssProvider()
_PROV.load_from_data(b"""
.popup { padding: 4px 10px; border-radius: 6px; background-color: #2d3439; color: white; }
.running-popup { border-left: 5px solid #00c46a; }
.cycling-popup { border-left: 5px solid #ffb545; }
.workout--running { border-left: 5px solid #00c46a; }
.workout--cycling { border-left: 5px solid #ffb545; }
""")
Gtk.StyleContext.add_provider_for_display(
    Gdk.Display.get_default(), _PROV, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION
)


class WorkoutMapUI(Adw.Application):
    def __init__(self, config: AppConfig):
        super().__init__(application_id=APP_ID)
        self.config = config

        self.window = None
        self.toast_overlay = None
        self.workout_app: WorkoutApp | None = None

        # Set up application directory
        self.config.app_dir.mkdir(parents=True, exist_ok=True)
        self.database = DatabaseManager(database_url=self.config.database_url)
        self.store = WorkoutStore(self.database, key=self.config.storage_key)

    def show_toast(self, message: str) -> None:
        logger.warning(message)
        if self.toast_overlay is None:
            return
        toast = Adw.Toast.new(message)
        self.toast_overlay.add_toast(toast)

    def _build_geolocation(self):
        if self.config.geolocation_provider == "fixed":
            return FixedGeolocation(self.config.fixed_coords)

        def _spawn(fn):
            threading.Thread(target=fn, daemon=True).start()

        def _deliver(fn):
            # back on the GTK main loop; returning False runs it once
            GLib.idle_add(lambda: (fn(), False)[1])

        return IPGeolocation(
            url=self.config.geolocation_url,
            timeout=self.config.geolocation_timeout,
            spawn=_spawn,
            deliver=_deliver,
        )

    def do_activate(self):
        if not self.window:
            self._build_ui()
            self.workout_app.start()

        self.window.present()

    def _build_ui(self):
        self.window = Adw.ApplicationWindow(application=self)
        self.window.connect("close-request", lambda *a: (self.quit(), False)[1])
        self.window.set_title("Workout Map")
        self.window.set_default_size(1200, 800)
        self.window.set_resizable(True)
        self.toast_overlay = Adw.ToastOverlay()
        self.window.set_content(self.toast_overlay)

        toolbar_view = Adw.ToolbarView()
        self.toast_overlay.set_child(toolbar_view)

        header_bar = Adw.HeaderBar()
        header_bar.set_show_title(True)
        toolbar_view.add_top_bar(header_bar)

        # Sidebar: form on top, workouts below
        sidebar = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        sidebar.set_size_request(360, -1)

        # Map area shows a placeholder until a position is known
        map_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        map_box.set_hexpand(True)
        map_box.set_vexpand(True)
        placeholder = Adw.StatusPage()
        placeholder.set_icon_name("find-location-symbolic")
        placeholder.set_title("Locating…")
        placeholder.set_vexpand(True)
        map_box.append(placeholder)

        # Handlers are late-bound: workout_app exists before any widget fires
        self.form_panel = FormPanel(
            on_submit=lambda: self.workout_app.on_submit(),
            on_type_changed=lambda: self.workout_app.on_type_changed(),
        )
        self.list_panel = WorkoutListPanel(
            on_entry_clicked=lambda wid: self.workout_app.on_list_click(wid),
        )
        sidebar.append(self.form_panel)
        sidebar.append(self.list_panel)

        paned = Gtk.Paned(orientation=Gtk.Orientation.HORIZONTAL)
        paned.set_start_child(sidebar)
        paned.set_end_child(map_box)
        paned.set_shrink_start_child(False)
        paned.set_resize_start_child(False)
        toolbar_view.set_content(paned)

        ports = UIPorts(
            form=self.form_panel,
            workout_list=self.list_panel,
            alert=self.show_toast,
        )
        self.workout_app = WorkoutApp(
            ports,
            self.store,
            ShumateMap(map_box, source_id=self.config.map_source),
            self._build_geolocation(),
            zoom=self.config.zoom,
            draw_restored_markers=self.config.draw_restored_markers,
        )

    def do_shutdown(self):
        try:
            with contextlib.suppress(Exception):
                self.database.close()
        finally:
            # chain up by calling the base class with self
            Adw.Application.do_shutdown(self)
