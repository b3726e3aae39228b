import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from arcade_duel.config import DEFAULT_CONTROLS
from arcade_duel.fighter import KeyState
from arcade_duel.match import Match


class FixedRandom(random.Random):
    """random() always returns the same value; good for pinning AI branches."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class ScriptedRandom(random.Random):
    """random() replays a fixed sequence, then repeats the last value."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)
        self.calls = 0

    def random(self):
        i = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[i]


class PassiveNPC:
    """Opponent that never acts; keeps unit tests on the player's swing."""

    def update(self, me, opp):
        return None


@pytest.fixture
def keys():
    return KeyState()


@pytest.fixture
def controls():
    return DEFAULT_CONTROLS


@pytest.fixture
def passive_match():
    m = Match(rng=random.Random(7), npc=PassiveNPC())
    m.start_round()
    return m
