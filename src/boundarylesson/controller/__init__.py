"""
Lesson Core
===========
Per-tick evaluation of the user's boundary and the lesson state machine.

Note: This package should be pure Python/NumPy and should NOT import PySide6.
"""
