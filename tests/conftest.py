import itertools

import pytest


class SequenceRandom:
    """Replays a fixed cycle of values, each reduced into [0, n)."""

    def __init__(self, values):
        self._values = itertools.cycle(values)
        self.calls = []

    def next_uniform(self, n):
        self.calls.append(n)
        return next(self._values) % n


@pytest.fixture
def zero_rng():
    return SequenceRandom([0])


@pytest.fixture
def sequence_rng():
    return SequenceRandom
