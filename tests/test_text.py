from boundarylesson.model.classifier import ClassifierParams
from boundarylesson.model.state import InstructionKey, LessonSnapshot, LessonState, Metrics
from boundarylesson.view.text import format_metrics, instruction_text

import numpy as np


def make_snapshot(params: ClassifierParams, metrics: Metrics) -> LessonSnapshot:
    return LessonSnapshot(
        state=LessonState.SHARP,
        instruction=InstructionKey.FIND_BOUNDARY,
        params=params,
        metrics=metrics,
        dataset=None,
        outcomes=np.empty(0, dtype=np.int8),
    )


def test_format_metrics():
    snapshot = make_snapshot(
        ClassifierParams(weight=1.23456, bias=-10.0),
        Metrics(accuracy=0.97, loss=3.0, best_accuracy=0.985, best_loss=1.5),
    )
    assert format_metrics(snapshot).splitlines() == [
        "Weight: 1.235",
        "Bias: -10",
        "Accuracy: 0.97",
        "Loss: 3",
        "Best accuracy: 0.985",
        "Best loss: 1.5",
    ]


def test_format_metrics_before_first_evaluation():
    text = format_metrics(make_snapshot(ClassifierParams(weight=-0.0001), Metrics()))
    assert "Weight: 0\n" in text
    assert "Loss: ∞" in text
    assert "Best loss: ∞" in text


def test_every_instruction_has_text():
    for key in InstructionKey:
        assert instruction_text(key)
    assert "Press Space to continue" in instruction_text(InstructionKey.CLOSE_ENOUGH)
    assert "Press A or D" in instruction_text(InstructionKey.FIND_BOUNDARY)
