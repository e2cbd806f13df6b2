import random

import pytest

from surface_mint.fxrand import FXRand, random_hash
from surface_mint.settings import RenderSettings

FIXED_HASH = "oo" + ("abcdefghijk" * 5)[:49]


@pytest.fixture
def fixed_hash():
    return FIXED_HASH


@pytest.fixture
def many_hashes():
    rng = random.Random(1234)
    return [random_hash(rng) for _ in range(300)]


@pytest.fixture
def small_settings():
    return RenderSettings(size=64, segments=8).validated()


class ScriptedRand(FXRand):
    """FXRand whose raw draws come from a fixed list, to pin draw order."""

    def __init__(self, values):
        self.hash = "scripted"
        self._values = list(values)

    def rand(self) -> float:
        return self._values.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._values)


@pytest.fixture
def scripted():
    return ScriptedRand
