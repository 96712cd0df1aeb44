import numpy as np
import pandas as pd
import pytest

from ecgsim.config import SimConfig
from ecgsim.ecg import Record, Quality
from ecgsim.rhythm import Rhythm
from ecgsim.rng import UniformRandomSource, seeded_entropy


class ConstantSource:
    """Random source stub that always draws the same value."""

    def __init__(self, value=0.5):
        self.value = value

    def random(self):
        return self.value

    def uniform(self, low, high):
        return low + self.random() * (high - low)

    def take(self, n):
        return np.full(int(n), self.value)


class ScriptedSource(ConstantSource):
    """Serves `draws` in order through random() and uniform(), then falls back to a constant.

    `takes`, when given, is repeated to fill every take() request.
    """

    def __init__(self, draws, value=0.5, takes=None):
        super().__init__(value)
        self.draws = list(draws)
        self.takes = None if takes is None else np.asarray(takes, dtype=float)

    def take(self, n):
        if self.takes is None:
            return super().take(n)
        return np.resize(self.takes, int(n))

    def random(self):
        return self.draws.pop(0) if self.draws else self.value


@pytest.fixture
def rng():
    return UniformRandomSource(seeded_entropy(1234), batch_size=1000)


@pytest.fixture
def small_cfg():
    return SimConfig(
        sample_rate_hz=50,
        record_duration_s=2,
        total_records=10,
        initial_load_count=4,
        initial_batch_size=2,
        batch_size=3,
        anchor_date="2024-01-01",
    )


def make_record(index, value=0.0, n=10):
    return Record(
        index=index,
        samples=np.full(n, value, dtype=np.float32),
        heart_rate=72,
        diagnosis=Rhythm.NORMAL,
        timestamp=pd.Timestamp("2024-01-01 09:00:00"),
        quality=Quality.GOOD,
    )
