"""
Lesson Controller
=================
Drives the lesson: one `tick()` per frame, stage progression, and dataset
regeneration.

Why is this file needed?
------------------------
1. Orchestration: It owns the dataset, the classifier and the metrics, and
   runs them in a fixed order each tick (integrate input, evaluate, check the
   advance threshold). The order is what keeps the evaluator from ever seeing
   a half-updated classifier.
2. Gating: The user moves from the sharp dataset to the noisy one, then to
   XOR, only once the stage's accuracy threshold is met AND they ask to
   advance.

States:
    SHARP -> FUZZY -> XOR (terminal)
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from boundarylesson.config import DEFAULT_CONFIG, LessonConfig
from boundarylesson.controller.evaluator import Evaluator
from boundarylesson.model.classifier import ClassifierState
from boundarylesson.model.dataset import (
    Dataset, DatasetGenerator, GenerationMode, GenerationParams, GroundTruth
)
from boundarylesson.model.state import (
    InstructionKey, LessonSnapshot, LessonState, Metrics, TickInput
)

logger = logging.getLogger(__name__)

STAGE_MODES: dict[LessonState, GenerationMode] = {
    LessonState.SHARP: GenerationMode.SEPARABLE,
    LessonState.FUZZY: GenerationMode.SEPARABLE,
    LessonState.XOR: GenerationMode.XOR,
}


class LessonController:
    """
    The embedding application calls `start()` once, then `tick()` every
    frame, and pushes the returned snapshot to its renderer and text sinks.
    """

    def __init__(
        self,
        config: Optional[LessonConfig] = None,
        rng: Optional[np.random.Generator] = None,
        generator: Optional[DatasetGenerator] = None,
        evaluator: Optional[Evaluator] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.config.validate()

        self.generator = generator or DatasetGenerator(rng=rng, config=self.config.generator)
        self.evaluator = evaluator or Evaluator()
        self.classifier = ClassifierState()

        self._state = LessonState.SHARP
        self._dataset: Optional[Dataset] = None
        self._metrics = Metrics()
        self._outcomes = np.empty(0, dtype=np.int8)
        self._ground_truth: Optional[GroundTruth] = None

    # --- ACCESSORS ---
    @property
    def state(self) -> LessonState:
        return self._state

    @property
    def dataset(self) -> Optional[Dataset]:
        return self._dataset

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    @property
    def outcomes(self) -> np.ndarray:
        return self._outcomes

    @property
    def is_started(self) -> bool:
        return self._dataset is not None

    @property
    def ground_truth(self) -> Optional[GroundTruth]:
        """Hidden boundary of the current dataset, if it was generated with one."""
        return self._ground_truth

    def threshold_met(self) -> bool:
        """Whether the current accuracy allows moving on."""
        threshold = self.config.recipe(self._state).accuracy_threshold
        if self._state.is_terminal or threshold is None:
            return False
        # Nothing to classify, nothing to have mastered
        if self._dataset is None or len(self._dataset) == 0:
            return False
        return self._metrics.accuracy >= threshold

    @property
    def instruction(self) -> InstructionKey:
        if self._state is LessonState.XOR:
            return InstructionKey.XOR
        if self.threshold_met():
            return InstructionKey.CLOSE_ENOUGH
        return InstructionKey.FIND_BOUNDARY

    # --- LIFECYCLE ---
    def start(self) -> LessonSnapshot:
        """(Re)start the lesson at the first stage."""
        self._state = LessonState.SHARP
        self._metrics = Metrics()
        self._regenerate(self._state)
        logger.info(f"Lesson started at stage '{self._state}'.")
        return self.snapshot()

    def tick(self, tick_input: TickInput, dt: float) -> LessonSnapshot:
        """
        Advance the lesson by one frame.

        Args:
            tick_input: Held directional keys and the advance edge of this frame.
            dt: Seconds since the previous tick.
        """
        if self._dataset is None:
            return self.snapshot()

        cfg = self.config.classifier
        self.classifier.integrate(
            weight_delta=tick_input.weight_delta,
            bias_delta=tick_input.bias_delta,
            dt=dt,
            weight_rate=cfg.weight_sensitivity,
            bias_rate=cfg.bias_sensitivity,
        )

        evaluation = self.evaluator.evaluate(self._dataset, self.classifier.params, self._metrics)
        self._outcomes = evaluation.outcomes
        self._metrics = evaluation.metrics

        if tick_input.advance and self.threshold_met():
            self._advance()

        return self.snapshot()

    def snapshot(self) -> LessonSnapshot:
        return LessonSnapshot(
            state=self._state,
            instruction=self.instruction,
            params=self.classifier.params,
            metrics=self._metrics,
            dataset=self._dataset,
            outcomes=self._outcomes,
        )

    def replace_dataset(self, dataset: Dataset) -> None:
        """
        Swap in a new dataset. The classifier goes back to (0, 0), the best
        metrics restart and every point is unclassified until the next tick.
        The current accuracy belongs to the old dataset and is cleared; the
        loss stays on screen until the next evaluation.
        """
        self._dataset = dataset
        self._ground_truth = None
        self.classifier.reset()
        self._metrics = self._metrics.with_best_reset().with_current_reset(reset_loss=False)
        self._outcomes = np.zeros(len(dataset), dtype=np.int8)
        logger.debug(f"Dataset replaced ({len(dataset)} points, mode '{dataset.mode}').")

    # --- INTERNALS ---
    def _advance(self) -> None:
        next_state = self._state.next
        if next_state is None:
            return

        logger.info(
            f"Advancing from '{self._state}' to '{next_state}' "
            f"(accuracy={self._metrics.accuracy:.3f})."
        )
        # Leaving the sharp stage clears the loss too; leaving fuzzy only the accuracy
        self._metrics = self._metrics.with_current_reset(reset_loss=self._state is LessonState.SHARP)
        self._state = next_state
        self._regenerate(next_state)

    def _regenerate(self, state: LessonState) -> None:
        recipe = self.config.recipe(state)
        params = GenerationParams(
            count=recipe.count,
            low=recipe.low,
            high=recipe.high,
            noise=recipe.noise,
            mode=STAGE_MODES[state],
        )
        self.replace_dataset(self.generator.generate(params))
        if params.mode is GenerationMode.SEPARABLE:
            self._ground_truth = self.generator.last_ground_truth
