import numpy as np
import pytest

from boundarylesson.config import GeneratorConfig
from boundarylesson.model.dataset import (
    Dataset, DatasetGenerator, GenerationMode, GenerationParams, GroundTruth, Outcome, Point
)


def test_separable_shapes_and_ground_truth(rng):
    generator = DatasetGenerator(rng=rng)
    dataset, weight, bias = generator.generate_separable(500, -30, 30, noise=0)

    assert len(dataset) == 500
    assert dataset.positions.shape == (500, 2)
    assert dataset.labels.dtype == bool
    assert dataset.mode is GenerationMode.SEPARABLE
    assert 0.5 <= abs(weight) <= 3.0
    assert -15.0 <= bias <= 15.0
    assert generator.last_ground_truth == GroundTruth(weight=weight, bias=bias)


def test_noiseless_labels_follow_ground_truth(rng):
    dataset, weight, bias = DatasetGenerator(rng=rng).generate_separable(1000, -30, 30, noise=0)
    np.testing.assert_array_equal(dataset.labels, weight * dataset.x + bias < dataset.y)
    assert np.all(dataset.positions >= -30) and np.all(dataset.positions <= 30)


def test_weight_sign_varies():
    signs = {
        np.sign(DatasetGenerator(rng=np.random.default_rng(seed)).generate_separable(1, -1, 1, 0)[1])
        for seed in range(40)
    }
    assert signs == {-1.0, 1.0}


def test_weight_magnitude_follows_config(rng):
    generator = DatasetGenerator(rng=rng, config=GeneratorConfig(min_weight_magnitude=1.0, max_weight_magnitude=1.0))
    _, weight, _ = generator.generate_separable(10, -30, 30, noise=0)
    assert abs(weight) == 1.0


def test_noise_moves_positions_not_labels():
    clean, _, _ = DatasetGenerator(rng=np.random.default_rng(3)).generate_separable(200, -30, 30, noise=0)
    noisy, _, _ = DatasetGenerator(rng=np.random.default_rng(3)).generate_separable(200, -30, 30, noise=5)

    np.testing.assert_array_equal(clean.labels, noisy.labels)
    assert not np.allclose(clean.positions, noisy.positions)
    assert np.abs(noisy.positions - clean.positions).std() == pytest.approx(5.0, rel=0.2)


def test_xor_labels_and_balance(rng):
    dataset = DatasetGenerator(rng=rng).generate_xor(2000, -30, 30, noise=0)

    assert dataset.mode is GenerationMode.XOR
    np.testing.assert_array_equal(dataset.labels, dataset.x * dataset.y > 0)
    assert abs(dataset.label_balance() - 0.5) < 0.05


def test_generate_dispatches_on_mode(rng):
    generator = DatasetGenerator(rng=rng)
    xor = generator.generate(GenerationParams(count=20, low=-1, high=1, mode=GenerationMode.XOR))
    separable = generator.generate(GenerationParams(count=30, low=-1, high=1))
    assert xor.mode is GenerationMode.XOR and len(xor) == 20
    assert separable.mode is GenerationMode.SEPARABLE and len(separable) == 30


def test_empty_generation(rng):
    dataset = DatasetGenerator(rng=rng).generate_xor(0, -30, 30, noise=10)
    assert len(dataset) == 0
    assert dataset.points() == []
    assert dataset.label_balance() == 0.0


@pytest.mark.parametrize(
    "count, low, high, noise",
    [(-1, -30, 30, 0), (10, 30, 30, 0), (10, 30, -30, 0), (10, -30, 30, -1)],
)
def test_invalid_generation_params_fail_fast(rng, count, low, high, noise):
    generator = DatasetGenerator(rng=rng)
    with pytest.raises(ValueError):
        generator.generate_separable(count, low, high, noise)
    with pytest.raises(ValueError):
        generator.generate_xor(count, low, high, noise)


def test_invalid_generator_config():
    with pytest.raises(ValueError):
        DatasetGenerator(config=GeneratorConfig(min_weight_magnitude=3.0, max_weight_magnitude=1.0))


def test_dataset_is_read_only(separated_dataset):
    with pytest.raises(ValueError):
        separated_dataset.positions[0, 0] = 1.0
    with pytest.raises(ValueError):
        separated_dataset.labels[0] = True


def test_dataset_copies_input():
    xy = np.array([[1.0, 2.0], [3.0, 4.0]])
    dataset = Dataset(positions=xy, labels=[True, False])
    xy[0, 0] = 99.0
    assert dataset.positions[0, 0] == 1.0


@pytest.mark.parametrize(
    "positions",
    [np.zeros((2, 4)), np.zeros(4), np.zeros((2, 2, 2))],
)
def test_dataset_rejects_malformed_positions(positions):
    with pytest.raises(ValueError):
        Dataset(positions=positions, labels=[True] * 4)


def test_empty_dataset_from_empty_lists():
    dataset = Dataset(positions=[], labels=[])
    assert len(dataset) == 0
    assert dataset.positions.shape == (0, 2)


def test_dataset_rejects_mismatched_labels():
    with pytest.raises(ValueError):
        Dataset(positions=[[0.0, 0.0], [1.0, 1.0]], labels=[True])


def test_points_carry_outcomes():
    dataset = Dataset(positions=[[0.0, 1.0], [2.0, 3.0]], labels=[True, False])
    outcomes = np.array([Outcome.CORRECT, Outcome.INCORRECT], dtype=np.int8)

    assert dataset.points(outcomes) == [
        Point(position=(0.0, 1.0), label=True, outcome=Outcome.CORRECT),
        Point(position=(2.0, 3.0), label=False, outcome=Outcome.INCORRECT),
    ]
    assert all(p.outcome is Outcome.UNCLASSIFIED for p in dataset)
