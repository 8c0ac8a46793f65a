"""Turns Qt key events into one `TickInput` per frame."""
from __future__ import annotations

from PySide6.QtCore import Qt

from boundarylesson.model.state import TickInput

WEIGHT_DECREASE_KEY = Qt.Key.Key_A
WEIGHT_INCREASE_KEY = Qt.Key.Key_D
BIAS_DECREASE_KEY = Qt.Key.Key_S
BIAS_INCREASE_KEY = Qt.Key.Key_W
ADVANCE_KEY = Qt.Key.Key_Space


class KeyboardInput:
    """
    Tracks held keys between frames. The advance key is edge-triggered:
    one press yields `advance=True` for exactly one tick.
    """

    def __init__(self) -> None:
        self._held: set[Qt.Key] = set()
        self._advance_pending = False

    def press(self, key: Qt.Key, auto_repeat: bool = False) -> None:
        if auto_repeat:
            return
        if key == ADVANCE_KEY and key not in self._held:
            self._advance_pending = True
        self._held.add(key)

    def release(self, key: Qt.Key, auto_repeat: bool = False) -> None:
        if auto_repeat:
            return
        self._held.discard(key)

    def clear(self) -> None:
        """Forget everything, e.g. when the window loses focus."""
        self._held.clear()
        self._advance_pending = False

    def is_held(self, key: Qt.Key) -> bool:
        return key in self._held

    def poll(self) -> TickInput:
        """Sample the current frame's input and consume the advance edge."""
        tick_input = TickInput(
            weight_decrease=WEIGHT_DECREASE_KEY in self._held,
            weight_increase=WEIGHT_INCREASE_KEY in self._held,
            bias_decrease=BIAS_DECREASE_KEY in self._held,
            bias_increase=BIAS_INCREASE_KEY in self._held,
            advance=self._advance_pending,
        )
        self._advance_pending = False
        return tick_input
