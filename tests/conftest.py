import pytest

from core.state import KeyState


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def at(self, t):
        self.now = t
        return self


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state(clock):
    return KeyState(clock=clock)
