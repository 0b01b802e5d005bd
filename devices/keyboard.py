"""Keyboard reader using pygame

This module provides a `KeyboardReader` that pumps pygame's event queue and
emits key press/release dictionaries to subscribers.
"""
import threading
import time
import logging

from core.reader import InputReader

try:
    import pygame
except Exception:
    pygame = None

LOG = logging.getLogger("tvsteer.keyboard")


def translate(event):
    """Turn a pygame event into an event dict, or None if it is not keyboard input."""
    if event.type == pygame.KEYDOWN or event.type == pygame.KEYUP:
        return {
            "device": "keyboard",
            "key": pygame.key.name(event.key),
            "pressed": event.type == pygame.KEYDOWN,
        }
    focus_lost = getattr(pygame, "WINDOWFOCUSLOST", None)
    if focus_lost is not None and event.type == focus_lost:
        return {"device": "keyboard", "focus_lost": True}
    return None


class KeyboardReader(InputReader):
    """Reads the keyboard through a small pygame window.

    Emits dictionaries like:
      {'device': 'keyboard', 'key': 'w', 'pressed': True}
      {'device': 'keyboard', 'focus_lost': True}

    Key-repeat is left to the tracker: a repeated KEYDOWN for a held key is
    emitted again and ignored downstream.
    """

    def __init__(self, window_size=(320, 120), poll_hz: int = 240):
        self.window_size = window_size
        self.poll_hz = poll_hz
        self._subs = []
        self._t = None
        self._stop = threading.Event()
        self._ready = False

    def _open_window(self):
        if pygame is None:
            LOG.warning("pygame not available — KeyboardReader disabled")
            return False
        pygame.init()
        pygame.display.set_mode(self.window_size)
        pygame.display.set_caption("tvsteer — focus this window to steer")
        LOG.info("keyboard window opened (%dx%d)", *self.window_size)
        return True

    def subscribe(self, callback):
        self._subs.append(callback)

    def start(self):
        self._stop.clear()
        self._t = threading.Thread(target=self._loop, name="KeyboardReader", daemon=True)
        self._t.start()

    @property
    def running(self) -> bool:
        return self._t is not None and self._t.is_alive()

    def stop(self):
        self._stop.set()
        if self._t:
            self._t.join(timeout=1.0)
        if self._ready and pygame is not None:
            pygame.quit()
            self._ready = False

    def _emit(self, evt):
        LOG.debug("keyboard event -> %s", evt)
        for cb in self._subs:
            try:
                cb(evt)
            except Exception:
                LOG.exception("subscriber callback failed")

    def _loop(self):
        self._ready = self._open_window()
        if not self._ready:
            return
        period = 1.0 / float(self.poll_hz)
        while not self._stop.is_set():
            try:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        LOG.info("keyboard window closed")
                        self._emit({"device": "keyboard", "focus_lost": True})
                        self._stop.set()
                        break
                    evt = translate(event)
                    if evt is not None:
                        self._emit(evt)
                time.sleep(period)
            except Exception:
                LOG.exception("error reading keyboard events")
                time.sleep(0.5)
