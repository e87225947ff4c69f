from __future__ import annotations

from configparser import ConfigParser, Error as ConfigParserError
from dataclasses import dataclass
from pathlib import Path

from workout_map.geolocation import DEFAULT_LOOKUP_URL
from workout_map.store import DEFAULT_STORAGE_KEY
from workout_map.views import DEFAULT_ZOOM

APP_ID = "io.github.WorkoutMap"
APP_DIR = Path(f"~/.local/share/{APP_ID}").expanduser()


@dataclass
class AppConfig:
    app_dir: Path = APP_DIR

    # Map
    zoom: int = DEFAULT_ZOOM
    map_source: str = "osm-mapnik"
    draw_restored_markers: bool = False

    # Geolocation
    geolocation_provider: str = "ip"  # "ip" | "fixed"
    geolocation_url: str = DEFAULT_LOOKUP_URL
    geolocation_timeout: float = 10.0
    latitude: float = 0.0
    longitude: float = 0.0

    # Storage
    database_url: str = ""
    storage_key: str = DEFAULT_STORAGE_KEY

    @property
    def config_file(self) -> Path:
        return self.app_dir / "config.ini"

    @property
    def fixed_coords(self) -> tuple[float, float]:
        return self.latitude, self.longitude


def load_config(config_file: Path | None = None, app_dir: Path = APP_DIR) -> AppConfig:
    """Read config.ini; anything missing keeps its default."""
    conf = AppConfig(app_dir=app_dir)
    conf.database_url = f"sqlite:///{app_dir / 'workouts.db'}"
    config_file = config_file or conf.config_file

    cfg = ConfigParser()
    if config_file.exists():
        try:
            cfg.read(config_file)
        except ConfigParserError as e:
            msg = f"Could not parse {config_file}: {e}"
            raise ValueError(msg) from e

    conf.zoom = cfg.getint("map", "zoom", fallback=conf.zoom)
    conf.map_source = cfg.get("map", "source", fallback=conf.map_source)
    conf.draw_restored_markers = cfg.getboolean(
        "map",
        "draw_restored_markers",
        fallback=conf.draw_restored_markers,
    )

    conf.geolocation_provider = cfg.get(
        "geolocation", "provider", fallback=conf.geolocation_provider
    ).lower()
    if conf.geolocation_provider not in ("ip", "fixed"):
        msg = f"Unknown geolocation provider: {conf.geolocation_provider!r}"
        raise ValueError(msg)
    conf.geolocation_url = cfg.get("geolocation", "url", fallback=conf.geolocation_url)
    conf.geolocation_timeout = cfg.getfloat(
        "geolocation", "timeout", fallback=conf.geolocation_timeout
    )
    conf.latitude = cfg.getfloat("geolocation", "latitude", fallback=conf.latitude)
    conf.longitude = cfg.getfloat("geolocation", "longitude", fallback=conf.longitude)

    conf.database_url = cfg.get("storage", "database_url", fallback=conf.database_url)
    conf.storage_key = cfg.get("storage", "key", fallback=conf.storage_key)
    return conf
