"""
Main Lesson Window
==================
The GUI container: the scatter plot with the decision line, the instruction
text and the metrics panel.

Why is this file needed?
------------------------
1. Frame Loop: A QTimer calls `LessonController.tick()` once per frame with
   the measured elapsed time and the keyboard state of that frame.
2. Rendering: It maps every point's outcome tag to a colour and draws the
   boundary line from the snapshot. It never changes lesson state itself.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

import pyqtgraph as pg
from pyqtgraph.exporters import ImageExporter
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeyEvent, QFocusEvent
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QLabel, QFileDialog, QMessageBox
)

from boundarylesson.controller.lesson import LessonController
from boundarylesson.model.dataset import Outcome
from boundarylesson.model.state import LessonSnapshot, LessonState
from boundarylesson.view.keyboard import KeyboardInput
from boundarylesson.view.text import format_metrics, instruction_text

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Decision Boundary Lesson"
FRAME_INTERVAL_MS = 16

STAGE_TITLES: dict[LessonState, str] = {
    LessonState.SHARP: "1. Sharp",
    LessonState.FUZZY: "2. Fuzzy",
    LessonState.XOR: "3. XOR",
}

# (label, outcome) -> brush colour. Misclassified dots are bright, correct ones dark.
POINT_COLORS: dict[tuple[bool, Outcome], str] = {
    (False, Outcome.UNCLASSIFIED): '#b0b0b0',
    (True, Outcome.UNCLASSIFIED): '#b0b0b0',
    (False, Outcome.CORRECT): '#8b0000',
    (True, Outcome.CORRECT): '#00008b',
    (False, Outcome.INCORRECT): '#ff6b6b',
    (True, Outcome.INCORRECT): '#6bb5ff',
}


class LessonWindow(QMainWindow):
    def __init__(self, controller: LessonController) -> None:
        super().__init__()
        self.controller = controller
        self.keyboard = KeyboardInput()
        self._last_frame: Optional[float] = None
        self._brushes = {key: pg.mkBrush(color) for key, color in POINT_COLORS.items()}

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 800)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self._build_ui()
        self._create_actions()
        self._create_menus()

        # --- FRAME LOOP ---
        self.timer = QTimer(self)
        self.timer.setInterval(FRAME_INTERVAL_MS)
        self.timer.timeout.connect(self.on_frame)

        if not self.controller.is_started:
            self.controller.start()
        self.show_snapshot(self.controller.snapshot())
        self._fit_view()

    def _build_ui(self) -> None:
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QHBoxLayout(main_widget)

        # --- LEFT SIDE: Texts ---
        left_panel = QWidget()
        left_panel.setMaximumWidth(360)
        left_layout = QVBoxLayout(left_panel)

        self.stage_label = QLabel()
        self.instructions_label = QLabel()
        self.instructions_label.setWordWrap(True)
        self.metrics_label = QLabel()
        self.metrics_label.setStyleSheet("font-family: monospace;")

        left_layout.addWidget(self.stage_label)
        left_layout.addWidget(self.instructions_label)
        left_layout.addSpacing(20)
        left_layout.addWidget(self.metrics_label)
        left_layout.addStretch()
        main_layout.addWidget(left_panel)

        # --- RIGHT SIDE: Plot ---
        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground('w')
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self.plot_widget.setAspectLocked(True)
        self.plot_widget.getAxis('bottom').setPen('k')
        self.plot_widget.getAxis('left').setPen('k')
        self.plot_widget.getAxis('bottom').setTextPen('k')
        self.plot_widget.getAxis('left').setTextPen('k')
        # Keys must reach the window, not the graphics view
        self.plot_widget.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self.scatter = pg.ScatterPlotItem(size=9, pen=None)
        self.plot_widget.addItem(self.scatter)

        self.boundary_line = pg.InfiniteLine(
            pos=(0.0, 0.0),
            angle=0.0,
            movable=False,
            pen=pg.mkPen(color='k', width=2),
        )
        self.plot_widget.addItem(self.boundary_line)

        main_layout.addWidget(self.plot_widget, stretch=1)

    def _create_actions(self) -> None:
        self.act_restart = QAction("Restart Lesson", self)
        self.act_restart.setShortcut("Ctrl+R")
        self.act_restart.triggered.connect(self.on_restart)

        self.act_export = QAction("Export Image...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export_image)

        self.act_exit = QAction("Quit", self)
        self.act_exit.setShortcut("Ctrl+Q")
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        lesson_menu = self.menuBar().addMenu("&Lesson")
        lesson_menu.addAction(self.act_restart)
        lesson_menu.addAction(self.act_export)
        lesson_menu.addSeparator()
        lesson_menu.addAction(self.act_exit)

    # --- FRAME LOOP ---
    def start(self) -> None:
        self._last_frame = None
        self.timer.start()

    def on_frame(self) -> None:
        now = time.perf_counter()
        dt = 0.0 if self._last_frame is None else now - self._last_frame
        self._last_frame = now

        previous_state = self.controller.state
        snapshot = self.controller.tick(self.keyboard.poll(), dt)
        self.show_snapshot(snapshot)
        if snapshot.state != previous_state:
            self._fit_view()

    # --- RENDERING ---
    def show_snapshot(self, snapshot: LessonSnapshot) -> None:
        """Push a snapshot to the plot and the text labels."""
        self.stage_label.setText(f"<h3>{STAGE_TITLES[snapshot.state]}</h3>")
        self.instructions_label.setText(instruction_text(snapshot.instruction))
        self.metrics_label.setText(format_metrics(snapshot))

        boundary = snapshot.boundary
        self.boundary_line.setPos((0.0, boundary.intercept_y))
        self.boundary_line.setAngle(boundary.angle_degrees)

        dataset = snapshot.dataset
        if dataset is None:
            self.scatter.clear()
            return
        brushes = [
            self._brushes[(bool(label), Outcome(int(outcome)))]
            for label, outcome in zip(dataset.labels, snapshot.outcomes)
        ]
        self.scatter.setData(x=dataset.x, y=dataset.y, brush=brushes)

    def _fit_view(self) -> None:
        recipe = self.controller.config.recipe(self.controller.state)
        margin = 0.1 * (recipe.high - recipe.low) + recipe.noise
        self.plot_widget.setXRange(recipe.low - margin, recipe.high + margin, padding=0)
        self.plot_widget.setYRange(recipe.low - margin, recipe.high + margin, padding=0)

    # --- SLOTS ---
    def on_restart(self) -> None:
        logger.info("Restarting lesson.")
        self.keyboard.clear()
        self.show_snapshot(self.controller.start())
        self._fit_view()

    def on_export_image(self) -> None:
        """Export the current plot as an image file."""
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Plot as Image",
            "decision_boundary.png",
            "PNG image (*.png);;JPEG image (*.jpg)"
        )
        if not file_path:
            return

        try:
            exporter = ImageExporter(self.plot_widget.plotItem)
            exporter.parameters()['width'] = 1920
            exporter.export(file_path)
            logger.info(f"Plot exported to {file_path}")
        except Exception as e:
            logger.exception("Failed to export plot")
            QMessageBox.critical(self, "Export Error", f"Could not export the plot:\n{str(e)}")

    # --- EVENTS ---
    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key.Key_Escape:
            self.close()
            return
        self.keyboard.press(Qt.Key(event.key()), event.isAutoRepeat())

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        self.keyboard.release(Qt.Key(event.key()), event.isAutoRepeat())

    def focusOutEvent(self, event: QFocusEvent) -> None:
        self.keyboard.clear()
        super().focusOutEvent(event)

    def closeEvent(self, event) -> None:
        self.timer.stop()
        logger.info(f"Session ended at stage '{self.controller.state}'.")
        super().closeEvent(event)
