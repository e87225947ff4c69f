import argparse
import logging
import signal
import sys
from pathlib import Path

from gi.repository import GLib

from workout_map.config import load_config


def main():
    parser = argparse.ArgumentParser(description="Workout Map")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.ini (defaults to the app data directory).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ValueError as e:
        logging.getLogger(__name__).error("Invalid configuration: %s", e)
        sys.exit(2)

    # imported late so --help works without a display
    from workout_map.ui import WorkoutMapUI

    app = WorkoutMapUI(config)

    # Convert Unix signals to a graceful quit so do_shutdown() runs
    GLib.unix_signal_add(GLib.PRIORITY_DEFAULT, signal.SIGINT, lambda *a: (app.quit(), False)[1])
    GLib.unix_signal_add(GLib.PRIORITY_DEFAULT, signal.SIGTERM, lambda *a: (app.quit(), False)[1])

    app.run(None)


if __name__ == "__main__":
    main()
