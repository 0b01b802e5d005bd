import logging

import pytest

import app
from core.state import Key
from mapper import Mapper
from resolver import compute_direction


def test_parser_defaults():
    args = app.build_parser().parse_args([])
    assert args.profile is None
    assert args.hz == 60
    assert args.raw is False
    assert args.log_level == "INFO"


def test_wire_feeds_events_into_state(state, clock):
    on_event = app.wire(Mapper.default(), state)
    clock.at(0.0)
    on_event({"device": "keyboard", "key": "w", "pressed": True})
    clock.at(1.0)
    on_event({"device": "keyboard", "key": "d", "pressed": True})
    clock.at(10.0)
    on_event({"device": "keyboard", "key": "a", "pressed": True})
    vec = compute_direction(state.snapshot())
    assert vec.as_tuple() == pytest.approx((0.3826834, 0.0, -0.9238795), abs=1e-6)


def test_focus_loss_releases_everything(state):
    on_event = app.wire(Mapper.default(), state)
    on_event({"device": "keyboard", "key": "w", "pressed": True})
    on_event({"device": "keyboard", "focus_lost": True})
    assert state.held_keys() == []
    assert not state.is_held(Key.NEG_Z)


def test_log_changes_logs_each_new_direction_once(caplog):
    from core.state import DirectionVector

    on_direction = app.log_changes()
    with caplog.at_level(logging.INFO, logger="tvsteer"):
        on_direction(DirectionVector())
        on_direction(DirectionVector())
        on_direction(DirectionVector(0.0, 0.0, -1.0))
        on_direction(DirectionVector(0.0, 0.0, -1.0))
    lines = [r.getMessage() for r in caplog.records if r.name == "tvsteer"]
    assert lines == ["direction (+0.000, +0.000, +0.000)", "direction (+0.000, +0.000, -1.000)"]
