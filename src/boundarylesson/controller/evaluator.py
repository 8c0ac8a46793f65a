"""
Classifier Evaluation
=====================
Scores the user's boundary against the current dataset once per tick.

Why is this file needed?
------------------------
1. Feedback: It produces the Correct/Incorrect tag of every point, which the
   renderer turns into bright (wrong) and dark (right) dots.
2. Metrics: It computes accuracy and a binary cross-entropy loss and keeps
   the best values seen since the dataset was generated.

The loss feeds the hard 0/1 prediction into the cross-entropy as if it were a
probability. Every wrong point therefore costs exactly 100 through the clamped
log, and the loss equals 100 * (1 - accuracy). It is a teaching simplification,
not a calibrated loss.

Note: This module is pure NumPy and should NOT import PySide6.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from boundarylesson.model.dataset import Dataset, Outcome
from boundarylesson.model.state import Metrics

if TYPE_CHECKING:
    import numpy.typing as npt
    from boundarylesson.model.classifier import ClassifierParams

logger = logging.getLogger(__name__)

LOG_CLAMP = -100.0


def safe_log(x: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
    """
    Natural log clamped to -100 for non-positive input, like the log inside
    PyTorch's BCELoss.
    """
    arr = np.asarray(x, dtype=np.float64)
    positive = arr > 0
    result = np.where(positive, np.log(np.where(positive, arr, 1.0)), LOG_CLAMP)
    if result.ndim == 0:
        return float(result)
    return result


def predict(dataset: Dataset, params: ClassifierParams) -> npt.NDArray[np.bool_]:
    """True for points above the line y = weight * x + bias."""
    return params.weight * dataset.x + params.bias < dataset.y


@dataclass(frozen=True)
class Evaluation:
    outcomes: npt.NDArray[np.int8]
    metrics: Metrics

    @property
    def correct_count(self) -> int:
        return int(np.count_nonzero(self.outcomes == Outcome.CORRECT))


class Evaluator:
    """Stateless; the previous metrics are passed in and new ones returned."""

    def evaluate(self, dataset: Dataset, params: ClassifierParams, previous: Metrics) -> Evaluation:
        """
        Args:
            dataset: Points to score.
            params: Current weight and bias.
            previous: Metrics of the previous tick; supplies the best values.

        Returns:
            Per-point outcomes aligned with the dataset and the updated metrics.
            An empty dataset leaves the metrics untouched.
        """
        count = len(dataset)
        if count == 0:
            return Evaluation(outcomes=np.empty(0, dtype=np.int8), metrics=previous)

        prediction = predict(dataset, params)
        correct = prediction == dataset.labels
        outcomes = np.where(correct, Outcome.CORRECT, Outcome.INCORRECT).astype(np.int8)

        p = prediction.astype(np.float64)
        label = dataset.labels.astype(np.float64)
        total_loss = 0.0
        total_loss -= float(np.sum(label * safe_log(p) + (1.0 - label) * safe_log(1.0 - p)))

        accuracy = float(np.count_nonzero(correct)) / count
        loss = total_loss / count

        metrics = Metrics(
            accuracy=accuracy,
            loss=loss,
            best_accuracy=max(previous.best_accuracy, accuracy),
            best_loss=min(previous.best_loss, loss),
        )
        return Evaluation(outcomes=outcomes, metrics=metrics)
