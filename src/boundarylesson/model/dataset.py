"""
Synthetic Datasets
==================
Labeled 2-D point sets for the lesson and the generator that builds them.

Why is this file needed?
------------------------
1. Data: A `Dataset` is the only thing the evaluator and the renderer need to
   know about the points. It is immutable; a new lesson stage gets a new one.
2. Generation: `DatasetGenerator` implements the two generative models
   (a hidden linear boundary, and XOR) with optional Gaussian position noise.

Noise is added to the stored position after the label has been decided, so
a noisy separable dataset has points on the "wrong" side of its own ground
truth.

Classes:
    Outcome: Per-point classification tag.
    Point: One labeled point with its outcome.
    GenerationMode, GenerationParams: What to generate.
    GroundTruth: The hidden boundary of a separable dataset.
    Dataset: Read-only positions and labels.
    DatasetGenerator: Factory for datasets.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Iterator, Optional, Tuple, TYPE_CHECKING

import numpy as np

from boundarylesson.config import GeneratorConfig
from boundarylesson.model.sampling import NormalSampler

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class Outcome(IntEnum):
    """Classification tag; the renderer maps it to a colour."""
    UNCLASSIFIED = 0
    CORRECT = 1
    INCORRECT = 2


class GenerationMode(StrEnum):
    SEPARABLE = "separable"
    XOR = "xor"


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Point:
    position: Tuple[float, float]
    label: bool
    outcome: Outcome = Outcome.UNCLASSIFIED

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


@dataclass(frozen=True)
class GenerationParams:
    count: int
    low: float
    high: float
    noise: float = 0.0
    mode: GenerationMode = GenerationMode.SEPARABLE

    def validate(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}.")
        if self.low >= self.high:
            raise ValueError(f"low ({self.low}) must be smaller than high ({self.high}).")
        if self.noise < 0:
            raise ValueError(f"noise must be non-negative, got {self.noise}.")


@dataclass(frozen=True)
class GroundTruth:
    weight: float
    bias: float


@dataclass(frozen=True, eq=False)
class Dataset:
    """
    Positions of shape (n, 2) and boolean labels of shape (n,).
    Both arrays are copied and made read-only on construction.
    """
    positions: npt.NDArray[np.float64]
    labels: npt.NDArray[np.bool_]
    mode: GenerationMode = GenerationMode.SEPARABLE

    def __post_init__(self) -> None:
        positions = np.array(self.positions, dtype=np.float64)
        if positions.size == 0:
            positions = positions.reshape(0, 2)
        if positions.ndim != 2 or positions.shape[1] != 2:
            raise ValueError(f"Positions must have shape (n, 2), got {positions.shape}.")
        labels = np.array(self.labels, dtype=bool).reshape(-1)
        if positions.shape[0] != labels.shape[0]:
            raise ValueError(
                f"Got {positions.shape[0]} positions but {labels.shape[0]} labels."
            )
        positions.flags.writeable = False
        labels.flags.writeable = False
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "labels", labels)

    @classmethod
    def empty(cls, mode: GenerationMode = GenerationMode.SEPARABLE) -> Dataset:
        return cls(positions=np.empty((0, 2)), labels=np.empty(0, dtype=bool), mode=mode)

    def __len__(self) -> int:
        return self.labels.shape[0]

    @property
    def count(self) -> int:
        return len(self)

    @property
    def x(self) -> npt.NDArray[np.float64]:
        return self.positions[:, 0]

    @property
    def y(self) -> npt.NDArray[np.float64]:
        return self.positions[:, 1]

    def label_balance(self) -> float:
        """Fraction of points labeled True (0.0 for an empty set)."""
        if len(self) == 0:
            return 0.0
        return float(self.labels.mean())

    def points(self, outcomes: Optional[npt.NDArray[np.int8]] = None) -> list[Point]:
        """Materialize the points, optionally tagged with evaluation outcomes."""
        if outcomes is None or len(outcomes) != len(self):
            outcomes = np.zeros(len(self), dtype=np.int8)
        return [
            Point(position=(float(px), float(py)), label=bool(lbl), outcome=Outcome(int(out)))
            for (px, py), lbl, out in zip(self.positions, self.labels, outcomes)
        ]

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points())


# ------------------------------------------------------------------------------
# Generator
# ------------------------------------------------------------------------------
class DatasetGenerator:
    """
    Builds labeled point sets. All randomness comes from the injected
    generator, shared with the normal sampler used for noise.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        config: Optional[GeneratorConfig] = None,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.config = config or GeneratorConfig()
        self.config.validate()
        self.sampler = NormalSampler(self.rng)

        # Hidden boundary of the last separable dataset
        self.last_ground_truth: Optional[GroundTruth] = None

    def generate(self, params: GenerationParams) -> Dataset:
        match params.mode:
            case GenerationMode.SEPARABLE:
                dataset, _, _ = self.generate_separable(params.count, params.low, params.high, params.noise)
                return dataset
            case GenerationMode.XOR:
                return self.generate_xor(params.count, params.low, params.high, params.noise)
            case _:
                raise ValueError(f"Unknown generation mode: {params.mode}")

    def generate_separable(
        self,
        count: int,
        low: float,
        high: float,
        noise: float,
    ) -> Tuple[Dataset, float, float]:
        """
        Points labeled by a random hidden line.

        Returns:
            (dataset, ground_truth_weight, ground_truth_bias)
        """
        GenerationParams(count, low, high, noise, GenerationMode.SEPARABLE).validate()

        cfg = self.config
        weight = self.rng.uniform(cfg.min_weight_magnitude, cfg.max_weight_magnitude)
        if self.rng.random() < 0.5:
            weight = -weight
        bias = self.rng.uniform(low, high) / 2.0
        weight, bias = float(weight), float(bias)

        xy = self._uniform_points(count, low, high)
        labels = weight * xy[:, 0] + bias < xy[:, 1]
        positions = self._perturb(xy, noise)

        self.last_ground_truth = GroundTruth(weight=weight, bias=bias)
        logger.info(
            f"Generated {count} separable points (noise={noise}), "
            f"ground truth weight={weight:.3f}, bias={bias:.3f}."
        )
        return Dataset(positions=positions, labels=labels, mode=GenerationMode.SEPARABLE), weight, bias

    def generate_xor(self, count: int, low: float, high: float, noise: float) -> Dataset:
        """Points labeled True in the first and third quadrants."""
        GenerationParams(count, low, high, noise, GenerationMode.XOR).validate()

        xy = self._uniform_points(count, low, high)
        labels = xy[:, 0] * xy[:, 1] > 0
        positions = self._perturb(xy, noise)

        logger.info(f"Generated {count} XOR points (noise={noise}).")
        return Dataset(positions=positions, labels=labels, mode=GenerationMode.XOR)

    def _uniform_points(self, count: int, low: float, high: float) -> npt.NDArray[np.float64]:
        return self.rng.uniform(low, high, size=(count, 2))

    def _perturb(self, xy: npt.NDArray[np.float64], noise: float) -> npt.NDArray[np.float64]:
        # Independent draw per axis
        return xy + noise * self.sampler.sample(size=xy.shape)
