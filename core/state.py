"""State models: logical keys, axes, the pressed-key tracker and direction vectors"""
import enum
import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

LOG = logging.getLogger("tvsteer.state")


class InvalidStateError(RuntimeError):
    """Raised when key state is read in a way the tracker cannot answer."""


class Key(enum.Enum):
    POS_X = "pos_x"  # D
    NEG_X = "neg_x"  # A
    POS_Y = "pos_y"  # E
    NEG_Y = "neg_y"  # Q
    POS_Z = "pos_z"  # S
    NEG_Z = "neg_z"  # W

    @classmethod
    def from_name(cls, name: str) -> Optional["Key"]:
        """Return the Key for 'pos_x' / 'POS_X' style names, or None."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


class Axis(enum.Enum):
    X = (Key.POS_X, Key.NEG_X)
    Y = (Key.POS_Y, Key.NEG_Y)
    Z = (Key.POS_Z, Key.NEG_Z)

    @property
    def positive(self) -> Key:
        return self.value[0]

    @property
    def negative(self) -> Key:
        return self.value[1]


class KeyState:
    """Tracks which logical keys are held and when each was last pressed.

    The press timestamp only moves on the released -> held transition, so
    key-repeat events for a key that is already down keep its original
    commitment time. A released key's timestamp is stale and is never handed
    out by `press_time`.

    Mutation and `snapshot` share one lock: a reader thread can apply events
    while a tick thread samples a consistent copy.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._held: Dict[Key, bool] = {k: False for k in Key}
        self._pressed_at: Dict[Key, float] = {k: 0.0 for k in Key}

    def press(self, key: Key) -> bool:
        with self._lock:
            if self._held[key]:
                return False
            self._held[key] = True
            self._pressed_at[key] = self._clock()
            LOG.debug("press %s @ %s", key.name, self._pressed_at[key])
            return True

    def release(self, key: Key) -> bool:
        with self._lock:
            was_held = self._held[key]
            self._held[key] = False
        if was_held:
            LOG.debug("release %s", key.name)
        return was_held

    def release_all(self):
        with self._lock:
            for k in Key:
                self._held[k] = False
        LOG.debug("released all keys")

    def is_held(self, key: Key) -> bool:
        return self._held[key]

    def press_time(self, key: Key) -> float:
        if not self._held[key]:
            raise InvalidStateError(f"{key.name} is not held; its press time is stale")
        return self._pressed_at[key]

    def read(self, key: Key) -> Tuple[bool, Optional[float]]:
        """Return (held, pressed_at) as one consistent pair; pressed_at is None when released."""
        with self._lock:
            held = self._held[key]
            return held, (self._pressed_at[key] if held else None)

    def held_keys(self) -> List[Key]:
        return [k for k in Key if self._held[k]]

    def snapshot(self) -> "KeyState":
        """Return an independent copy taken atomically with respect to press/release."""
        copy = KeyState(self._clock)
        with self._lock:
            copy._held = dict(self._held)
            copy._pressed_at = dict(self._pressed_at)
        return copy

    def __repr__(self):
        held = ", ".join(f"{k.name}@{self._pressed_at[k]}" for k in self.held_keys())
        return f"KeyState({held})"


@dataclass(frozen=True)
class DirectionVector:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def as_tuple(self):
        return (self.x, self.y, self.z)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> "DirectionVector":
        if self.is_zero():
            # neutral input passes through untouched
            return DirectionVector(0.0, 0.0, 0.0)
        mag = self.magnitude()
        return DirectionVector(self.x / mag, self.y / mag, self.z / mag)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def __str__(self):
        return f"({self.x:+.3f}, {self.y:+.3f}, {self.z:+.3f})"
