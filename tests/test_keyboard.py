from types import SimpleNamespace

import pytest

import devices.keyboard as keyboard


@pytest.fixture
def fake_pygame(monkeypatch):
    names = {100: "d", 97: "a"}
    fake = SimpleNamespace(
        KEYDOWN=768,
        KEYUP=769,
        WINDOWFOCUSLOST=32781,
        QUIT=256,
        key=SimpleNamespace(name=lambda code: names.get(code, "unknown")),
    )
    monkeypatch.setattr(keyboard, "pygame", fake)
    return fake


def test_translate_keydown(fake_pygame):
    evt = keyboard.translate(SimpleNamespace(type=fake_pygame.KEYDOWN, key=100))
    assert evt == {"device": "keyboard", "key": "d", "pressed": True}


def test_translate_keyup(fake_pygame):
    evt = keyboard.translate(SimpleNamespace(type=fake_pygame.KEYUP, key=97))
    assert evt == {"device": "keyboard", "key": "a", "pressed": False}


def test_translate_focus_lost(fake_pygame):
    evt = keyboard.translate(SimpleNamespace(type=fake_pygame.WINDOWFOCUSLOST))
    assert evt == {"device": "keyboard", "focus_lost": True}


def test_translate_other_events(fake_pygame):
    assert keyboard.translate(SimpleNamespace(type=1024)) is None


def test_reader_without_pygame_stays_idle(monkeypatch):
    monkeypatch.setattr(keyboard, "pygame", None)
    r = keyboard.KeyboardReader()
    r.start()
    r.stop()
    assert not r.running


def test_emit_isolates_subscriber_failures():
    seen = []

    def boom(evt):
        raise RuntimeError("boom")

    r = keyboard.KeyboardReader()
    r.subscribe(boom)
    r.subscribe(seen.append)
    r._emit({"device": "keyboard", "key": "d", "pressed": True})
    assert seen == [{"device": "keyboard", "key": "d", "pressed": True}]


def test_loop_pumps_events_until_window_closes(fake_pygame, monkeypatch):
    monkeypatch.setattr(keyboard.time, "sleep", lambda s: None)
    calls = {"get": 0, "quit": 0}

    def get():
        calls["get"] += 1
        if calls["get"] == 1:
            raise RuntimeError("event queue hiccup")
        if calls["get"] == 2:
            return [
                SimpleNamespace(type=fake_pygame.KEYDOWN, key=100),
                SimpleNamespace(type=1024),
                SimpleNamespace(type=fake_pygame.KEYUP, key=100),
                SimpleNamespace(type=fake_pygame.QUIT),
            ]
        return []

    fake_pygame.init = lambda: None
    fake_pygame.quit = lambda: calls.__setitem__("quit", calls["quit"] + 1)
    fake_pygame.display = SimpleNamespace(set_mode=lambda size: None, set_caption=lambda title: None)
    fake_pygame.event = SimpleNamespace(get=get)

    seen = []
    r = keyboard.KeyboardReader()
    r.subscribe(seen.append)
    r.start()
    r._t.join(timeout=2.0)

    assert not r.running
    assert seen == [
        {"device": "keyboard", "key": "d", "pressed": True},
        {"device": "keyboard", "key": "d", "pressed": False},
        {"device": "keyboard", "focus_lost": True},
    ]
    assert calls["get"] == 2
    r.stop()
    assert calls["quit"] == 1
