"""Fixed-rate direction sampler

`DirectionTicker` samples the key tracker once per tick, resolves it into a
DirectionVector and hands the vector to subscribers (the host's movement or
camera system). Sampling per tick rather than per event means several key
changes inside one frame land in the same vector.
"""
import threading
import time
import logging

from core.state import DirectionVector, KeyState
from resolver import compute_direction

LOG = logging.getLogger("tvsteer.ticker")


class DirectionTicker:
    def __init__(self, state: KeyState, hz: int = 60, normalize: bool = True):
        if hz <= 0:
            raise ValueError(f"hz must be positive, got {hz}")
        self.state = state
        self.hz = hz
        self.normalize = normalize
        self.latest = DirectionVector()
        self._subs = []
        self._t = None
        self._stop = threading.Event()

    def subscribe(self, callback):
        self._subs.append(callback)

    def tick(self) -> DirectionVector:
        vec = compute_direction(self.state.snapshot(), normalize=self.normalize)
        if vec != self.latest:
            LOG.debug("direction %s -> %s", self.latest, vec)
        self.latest = vec
        for cb in self._subs:
            try:
                cb(vec)
            except Exception:
                LOG.exception("subscriber callback failed")
        return vec

    def start(self):
        self._stop.clear()
        self._t = threading.Thread(target=self._loop, name="DirectionTicker", daemon=True)
        self._t.start()

    def stop(self):
        self._stop.set()
        if self._t:
            self._t.join(timeout=1.0)

    def _loop(self):
        period = 1.0 / float(self.hz)
        next_tick = time.monotonic()
        while not self._stop.is_set():
            try:
                self.tick()
            except Exception:
                LOG.exception("error in direction ticker loop")
            next_tick += period
            delay = next_tick - time.monotonic()
            if delay < 0:
                # fell behind; resync instead of bursting
                next_tick = time.monotonic()
                delay = 0
            self._stop.wait(delay)
