"""Binding engine: load YAML profiles and apply physical key events to a KeyState"""
import yaml
import logging
from core.state import Key, KeyState

LOG = logging.getLogger("tvsteer.mapper")

DEFAULT_BINDINGS = [
    {"input": "keyboard.d", "target": "key:pos_x"},
    {"input": "keyboard.a", "target": "key:neg_x"},
    {"input": "keyboard.e", "target": "key:pos_y"},
    {"input": "keyboard.q", "target": "key:neg_y"},
    {"input": "keyboard.s", "target": "key:pos_z"},
    {"input": "keyboard.w", "target": "key:neg_z"},
]


class Mapper:
    def __init__(self, profile: dict):
        self.profile = profile or {}
        self._table = {}  # (device, key name) -> Key
        self._down = {}  # Key -> set of physical inputs currently held
        for b in self.profile.get("bindings", []) or []:
            self._add_binding(b)
        LOG.debug("loaded %d bindings", len(self._table))

    @staticmethod
    def _split_input(src: str):
        """'keyboard.left shift' -> ('keyboard', 'left shift')."""
        if "." not in src:
            return None, None
        device, name = src.split(".", 1)
        return device.strip().lower(), name.strip().lower()

    def _add_binding(self, b):
        src = b.get("input") if isinstance(b, dict) else None
        tgt = b.get("target") if isinstance(b, dict) else None
        if not src or not tgt:
            LOG.debug("skipping incomplete binding: %s", b)
            return
        if not tgt.startswith("key:"):
            LOG.warning("unsupported target %r in binding %s", tgt, b)
            return
        key = Key.from_name(tgt.split(":", 1)[1])
        if key is None:
            LOG.warning("unknown logical key %r in binding %s", tgt, b)
            return
        device, name = self._split_input(src)
        if not device or not name:
            LOG.warning("malformed input %r in binding %s", src, b)
            return
        if (device, name) in self._table:
            LOG.warning("%s.%s rebound from %s to %s", device, name, self._table[(device, name)].name, key.name)
        self._table[(device, name)] = key

    @classmethod
    def load_profile(cls, path: str):
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls(data)

    @classmethod
    def default(cls):
        return cls({"bindings": list(DEFAULT_BINDINGS)})

    def lookup(self, device: str, key_name: str):
        if not device or not key_name:
            return None
        return self._table.get((device.lower(), key_name.lower()))

    def apply_event(self, event: dict, state: KeyState):
        """Apply one press/release event to `state`; return the logical Key or None.

        A logical key bound to several physical keys is pressed by the first of
        them and released only when the last one goes up.
        """
        device = event.get("device")
        name = event.get("key")
        key = self.lookup(device, name)
        if key is None:
            LOG.debug("ignoring unbound input %s.%s", device, name)
            return None
        phys = (device.lower(), name.lower())
        down = self._down.setdefault(key, set())
        if event.get("pressed"):
            down.add(phys)
            state.press(key)
        else:
            down.discard(phys)
            if not down:
                state.release(key)
        return key

    def release_all(self, state: KeyState):
        self._down.clear()
        state.release_all()
