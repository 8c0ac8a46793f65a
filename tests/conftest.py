from __future__ import annotations

import numpy as np
import pytest

from boundarylesson.model.dataset import Dataset


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


def make_separated_dataset(
    weight: float = 2.0,
    bias: float = 0.0,
    count: int = 100,
    low: float = -30.0,
    high: float = 30.0,
    seed: int = 7,
) -> Dataset:
    """Points labeled exactly by the line y = weight * x + bias."""
    xy = np.random.default_rng(seed).uniform(low, high, size=(count, 2))
    labels = weight * xy[:, 0] + bias < xy[:, 1]
    return Dataset(positions=xy, labels=labels)


@pytest.fixture
def separated_dataset() -> Dataset:
    return make_separated_dataset()
