"""Entry point for tvsteer

Starts the keyboard reader, binding mapper and direction ticker, and logs the
resolved direction vector whenever it changes.
"""
import argparse
import logging
import time

from core.state import KeyState
from mapper import Mapper
from output.ticker import DirectionTicker
from devices.keyboard import KeyboardReader

LOG = logging.getLogger("tvsteer")


def build_parser():
    parser = argparse.ArgumentParser(description="tvsteer: six keys → 3D direction vector")
    parser.add_argument("--profile", default=None, help="YAML binding profile (default: built-in D/A E/Q S/W)")
    parser.add_argument("--hz", type=int, default=60, help="direction sample frequency")
    parser.add_argument("--raw", action="store_true", help="publish un-normalized axis values")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-format", default="%(levelname)s:%(name)s:%(message)s",
                        help="Logging format string (default: %(levelname)s:%(name)s:%(message)s)")
    parser.add_argument("--debug-modules", nargs="*", default=[],
                        help="Modules to set to DEBUG level (e.g., 'keyboard', 'mapper', 'state', 'ticker')")
    return parser


def wire(mapper: Mapper, state: KeyState):
    """Return the reader callback that feeds events into `state`."""
    def on_event(evt):
        if evt.get("focus_lost"):
            LOG.info("input focus lost — releasing all keys")
            mapper.release_all(state)
            return
        mapper.apply_event(evt, state)
    return on_event


def log_changes():
    """Return a ticker callback that logs the direction only when it changes."""
    last = None

    def on_direction(vec):
        nonlocal last
        if vec != last:
            LOG.info("direction %s", vec)
            last = vec
    return on_direction


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=args.log_format)
    for module in args.debug_modules:
        logging.getLogger(f"tvsteer.{module}").setLevel(logging.DEBUG)

    mapper = Mapper.load_profile(args.profile) if args.profile else Mapper.default()
    state = KeyState()
    ticker = DirectionTicker(state, hz=args.hz, normalize=not args.raw)
    keyboard = KeyboardReader()

    keyboard.subscribe(wire(mapper, state))
    ticker.subscribe(log_changes())

    try:
        ticker.start()
        keyboard.start()
        LOG.info("tvsteer running — press Ctrl+C to stop")
        time.sleep(0.5)
        while keyboard.running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        LOG.info("shutdown requested")
    finally:
        keyboard.stop()
        ticker.stop()


if __name__ == "__main__":
    main()
