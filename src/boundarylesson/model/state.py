"""
Lesson State (Data Model)
=========================
This module defines the value records exchanged between the lesson core and
the front-end once per tick.

Why is this file needed?
------------------------
1. State Management: The lesson stage, the metrics and the per-tick input are
   small immutable records. Owners swap them wholesale instead of letting
   callers poke at public fields.
2. Decoupling: The view reads a `LessonSnapshot` and never touches the
   controller's internals; the input source only produces a `TickInput`.

Classes:
    LessonState: The stages of the lesson.
    InstructionKey: Which instruction text the front-end should show.
    Metrics: Current and best accuracy/loss within a stage.
    TickInput: Directional and advance signals sampled for one tick.
    BoundaryLine: Line description for the renderer.
    LessonSnapshot: Everything the external sinks need after a tick.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Optional, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt
    from boundarylesson.model.classifier import ClassifierParams
    from boundarylesson.model.dataset import Dataset, Point


class LessonState(StrEnum):
    """Parts of the lesson, in the order they are played."""
    SHARP = "sharp"
    FUZZY = "fuzzy"
    XOR = "xor"

    @property
    def next(self) -> Optional[LessonState]:
        """The following stage, or None for the terminal one."""
        members = list(LessonState)
        idx = members.index(self)
        if idx + 1 < len(members):
            return members[idx + 1]
        return None

    @property
    def is_terminal(self) -> bool:
        return self.next is None


class InstructionKey(StrEnum):
    FIND_BOUNDARY = "find_boundary"
    CLOSE_ENOUGH = "close_enough"
    XOR = "xor"


@dataclass(frozen=True)
class Metrics:
    """
    Accuracy and loss of the last evaluation plus the best values seen
    since the current dataset was generated.
    """
    accuracy: float = 0.0
    loss: float = math.inf
    best_accuracy: float = 0.0
    best_loss: float = math.inf

    def with_current_reset(self, reset_loss: bool = True) -> Metrics:
        """Clear the current values, keep the best ones."""
        if reset_loss:
            return replace(self, accuracy=0.0, loss=math.inf)
        return replace(self, accuracy=0.0)

    def with_best_reset(self) -> Metrics:
        """Clear the best values, keep the current ones."""
        return replace(self, best_accuracy=0.0, best_loss=math.inf)


@dataclass(frozen=True)
class TickInput:
    """Signals sampled from the input source for a single tick."""
    weight_decrease: bool = False
    weight_increase: bool = False
    bias_decrease: bool = False
    bias_increase: bool = False
    advance: bool = False

    @property
    def weight_delta(self) -> int:
        # Increase wins when both keys of a pair are held
        if self.weight_increase:
            return 1
        if self.weight_decrease:
            return -1
        return 0

    @property
    def bias_delta(self) -> int:
        if self.bias_increase:
            return 1
        if self.bias_decrease:
            return -1
        return 0


@dataclass(frozen=True)
class BoundaryLine:
    """The decision boundary as the renderer draws it."""
    intercept_y: float
    angle_radians: float

    @classmethod
    def from_params(cls, params: ClassifierParams) -> BoundaryLine:
        return cls(intercept_y=params.bias, angle_radians=math.atan(params.weight))

    @property
    def angle_degrees(self) -> float:
        return math.degrees(self.angle_radians)


@dataclass(frozen=True)
class LessonSnapshot:
    """Read-only view of the lesson after a tick, pushed to the sinks."""
    state: LessonState
    instruction: InstructionKey
    params: ClassifierParams
    metrics: Metrics
    dataset: Optional[Dataset]
    outcomes: npt.NDArray[np.int8]

    @property
    def boundary(self) -> BoundaryLine:
        return BoundaryLine.from_params(self.params)

    @property
    def weight(self) -> float:
        return self.params.weight

    @property
    def bias(self) -> float:
        return self.params.bias

    def points(self) -> list[Point]:
        """Dataset points tagged with this tick's outcome."""
        if self.dataset is None:
            return []
        return self.dataset.points(self.outcomes)
