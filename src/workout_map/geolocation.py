from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import requests

from workout_map.workouts import Coords

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_URL = "https://ipapi.co/json/"


class GeolocationUnavailable(Exception):
    """The current position couldn't be determined."""


def _call_now(fn: Callable[[], None]) -> None:
    fn()


@dataclass
class FixedGeolocation:
    """Always reports the configured coordinates."""

    coords: Coords

    def get_current_position(
        self,
        on_success: Callable[[Coords], None],
        on_failure: Callable[[], None],
    ) -> None:
        on_success(self.coords)


@dataclass
class IPGeolocation:
    """
    Approximate position from a JSON IP-lookup service exposing
    ``latitude`` and ``longitude``.

    ``spawn`` runs the lookup (e.g. on a worker thread) and ``deliver`` hands
    the result back (e.g. to the UI main loop). Both call straight through by
    default. A failed lookup is reported once and not retried.
    """

    url: str = DEFAULT_LOOKUP_URL
    timeout: float = 10.0
    session: requests.Session = field(default_factory=requests.Session)
    spawn: Callable[[Callable[[], None]], None] = _call_now
    deliver: Callable[[Callable[[], None]], None] = _call_now

    def lookup(self) -> Coords:
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise GeolocationUnavailable(f"Position lookup failed: {e}") from e

        try:
            return float(payload["latitude"]), float(payload["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeolocationUnavailable(f"Position lookup returned no coordinates: {e}") from e

    def get_current_position(
        self,
        on_success: Callable[[Coords], None],
        on_failure: Callable[[], None],
    ) -> None:
        def _run():
            try:
                coords = self.lookup()
            except GeolocationUnavailable as e:
                logger.warning("%s", e)
                self.deliver(on_failure)
                return
            self.deliver(lambda: on_success(coords))

        self.spawn(_run)
