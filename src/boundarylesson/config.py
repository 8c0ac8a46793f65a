"""
Lesson Configuration
====================
This module is the central registry for the constants that shape a lesson.

Why is this file needed?
------------------------
1. Abstraction: Point counts, coordinate ranges, noise levels and advance
   thresholds live here instead of being scattered through the controller.
2. Tuning: A lesson can be re-tuned from a JSON file (`load_lesson_config`)
   without touching code. Values are read once, at construction time.

Exports:
    GeneratorConfig, ClassifierConfig, StageRecipe, LessonConfig
    DEFAULT_CONFIG: The lesson as it ships.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, asdict
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from boundarylesson.model.state import LessonState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorConfig:
    """Range of the hidden ground-truth slope."""
    min_weight_magnitude: float = 0.5
    max_weight_magnitude: float = 3.0

    def validate(self) -> None:
        if self.min_weight_magnitude < 0:
            raise ValueError("min_weight_magnitude must be non-negative.")
        if self.min_weight_magnitude > self.max_weight_magnitude:
            raise ValueError(
                f"min_weight_magnitude ({self.min_weight_magnitude}) exceeds "
                f"max_weight_magnitude ({self.max_weight_magnitude})."
            )


@dataclass(frozen=True)
class ClassifierConfig:
    """How fast held keys move the boundary (units per second)."""
    weight_sensitivity: float = 1.0
    bias_sensitivity: float = 10.0


@dataclass(frozen=True)
class StageRecipe:
    """
    Dataset recipe and advance threshold of one lesson stage.
    A threshold of None marks a stage with no way forward.
    """
    count: int
    low: float
    high: float
    noise: float
    accuracy_threshold: Optional[float] = None

    def validate(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}.")
        if self.low >= self.high:
            raise ValueError(f"low ({self.low}) must be smaller than high ({self.high}).")
        if self.noise < 0:
            raise ValueError(f"noise must be non-negative, got {self.noise}.")
        if self.accuracy_threshold is not None and not 0.0 <= self.accuracy_threshold <= 1.0:
            raise ValueError(f"accuracy_threshold must lie in [0, 1], got {self.accuracy_threshold}.")


def _default_stages() -> Dict[LessonState, StageRecipe]:
    return {
        LessonState.SHARP: StageRecipe(count=100, low=-30.0, high=30.0, noise=0.0, accuracy_threshold=0.98),
        LessonState.FUZZY: StageRecipe(count=100, low=-30.0, high=30.0, noise=10.0, accuracy_threshold=0.8),
        LessonState.XOR: StageRecipe(count=100, low=-30.0, high=30.0, noise=15.0, accuracy_threshold=None),
    }


@dataclass(frozen=True)
class LessonConfig:
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    stages: Mapping[LessonState, StageRecipe] = field(default_factory=_default_stages)

    def __post_init__(self) -> None:
        # Read-only view over a private copy
        object.__setattr__(self, "stages", MappingProxyType(dict(self.stages)))

    def recipe(self, state: LessonState) -> StageRecipe:
        return self.stages[state]

    def validate(self) -> None:
        self.generator.validate()
        missing = [s.value for s in LessonState if s not in self.stages]
        if missing:
            raise ValueError(f"Missing stage recipes: {', '.join(missing)}")
        for state, recipe in self.stages.items():
            try:
                recipe.validate()
            except ValueError as e:
                raise ValueError(f"Stage '{state}': {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generator": asdict(self.generator),
            "classifier": asdict(self.classifier),
            "stages": {str(state): asdict(recipe) for state, recipe in self.stages.items()},
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> LessonConfig:
        """Build a config; sections and stages left out keep their defaults."""
        stages = _default_stages()
        try:
            for key, values in data.get("stages", {}).items():
                state = LessonState(key)
                stages[state] = StageRecipe(**{**asdict(stages[state]), **values})

            config = LessonConfig(
                generator=GeneratorConfig(**data.get("generator", {})),
                classifier=ClassifierConfig(**data.get("classifier", {})),
                stages=stages,
            )
        except TypeError as e:
            # Unknown keys in a section
            raise ValueError(f"Invalid lesson config: {e}") from e
        config.validate()
        return config


def load_lesson_config(filepath: str) -> LessonConfig:
    """Read a lesson config from a JSON file."""
    logger.info(f"Loading lesson config from: {filepath}")
    try:
        with open(filepath, mode='r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Lesson config '{filepath}' is not valid JSON: {e}")
        raise ValueError(f"Invalid lesson config file '{filepath}': {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Lesson config '{filepath}' must contain a JSON object.")
    return LessonConfig.from_dict(data)


DEFAULT_CONFIG = LessonConfig()
