"""Texts shown next to the plot: instructions per stage and the metrics panel."""
from __future__ import annotations

import math

from boundarylesson.model.state import InstructionKey, LessonSnapshot

TASK_TEXT = (
    "Find a line that best separates the red and blue dots. "
    "Bright dots are misclassified."
)

CONTROLS_TEXT = (
    "Controls:\n"
    "Press A or D to decrease or increase weight.\n"
    "Press S or W to decrease or increase bias."
)

INSTRUCTIONS: dict[InstructionKey, str] = {
    InstructionKey.FIND_BOUNDARY: f"{TASK_TEXT}\n{CONTROLS_TEXT}",
    InstructionKey.CLOSE_ENOUGH: f"{TASK_TEXT}\n\nClose enough. Press Space to continue.",
    InstructionKey.XOR: (
        "Now the red and blue dots sit in opposite corners.\n"
        "No single line separates them; see how close you can get.\n"
        f"{CONTROLS_TEXT}\n"
        "Press Escape to quit."
    ),
}


def instruction_text(key: InstructionKey) -> str:
    return INSTRUCTIONS[key]


def _fmt(value: float) -> str:
    """Up to three decimals without trailing zeros, like 0.###."""
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_metrics(snapshot: LessonSnapshot) -> str:
    m = snapshot.metrics
    return (
        f"Weight: {_fmt(snapshot.weight)}\n"
        f"Bias: {_fmt(snapshot.bias)}\n"
        f"Accuracy: {_fmt(m.accuracy)}\n"
        f"Loss: {_fmt(m.loss)}\n"
        f"Best accuracy: {_fmt(m.best_accuracy)}\n"
        f"Best loss: {_fmt(m.best_loss)}"
    )
