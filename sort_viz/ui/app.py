"""PyQt6 UI app for animating sorting runs."""

from __future__ import annotations

import argparse
import json
import logging
import random
import time
from typing import Any, Sequence

import pyqtgraph as pg
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QBrush, QColor
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSlider,
    QSplitter,
    QTableWidget,
    QTableWidgetItem,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from sort_viz.algorithms import ALGORITHM_IDS, get_descriptor, load_catalog
from sort_viz.events import StepEvent, render_handler
from sort_viz.io import ConfigError, ConfigLoader, resolve_sequence
from sort_viz.metrics import MetricsAnalyzer
from sort_viz.model import (
    DEFAULT_SIZE,
    DEFAULT_SPEED,
    SIZE_MAX,
    SIZE_MIN,
    SPEED_MAX,
    SPEED_MIN,
    Counters,
    RunState,
    speed_label,
)
from sort_viz.runtime import generate_sequence

from .worker import SortWorker


logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Bar chart, run controls, live counters and complexity summary."""

    _COLOR_DEFAULT = QColor("#4e79a7")
    _COLOR_COMPARING = QColor("#f2c14e")
    _COLOR_SWAPPING = QColor("#e15759")
    _COLOR_PIVOT = QColor("#b07aa1")
    _COLOR_SORTED = QColor("#59a14f")
    _COLOR_CURRENT_ROW = QColor("#dbe9f6")

    def __init__(self, config_path: str | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Sorting Visualizer (PyQt6)")
        self.resize(1280, 820)

        self._loader = ConfigLoader()
        self._analyzer = MetricsAnalyzer()
        self._worker: SortWorker | None = None
        self._values: list[int] = []
        self._started_at: float | None = None
        self._last_event: StepEvent | None = None
        self._render = render_handler(self._render_bars)

        self._algorithm = QComboBox()
        for algorithm_id in ALGORITHM_IDS:
            descriptor = get_descriptor(algorithm_id)
            self._algorithm.addItem(descriptor.name if descriptor else algorithm_id, algorithm_id)

        self._size_slider = QSlider(Qt.Orientation.Horizontal)
        self._size_slider.setRange(SIZE_MIN, SIZE_MAX)
        self._size_slider.setValue(DEFAULT_SIZE)
        self._size_value = QLabel(str(DEFAULT_SIZE))

        self._speed_slider = QSlider(Qt.Orientation.Horizontal)
        self._speed_slider.setRange(SPEED_MIN, SPEED_MAX)
        self._speed_slider.setValue(DEFAULT_SPEED)
        self._speed_value = QLabel(speed_label(DEFAULT_SPEED))

        self._generate_button = QPushButton("Generate New Array")
        self._sort_button = QPushButton("Sort")
        self._pause_button = QPushButton("Pause")
        self._pause_button.setEnabled(False)
        self._stop_button = QPushButton("Stop")
        self._stop_button.setEnabled(False)

        self._current_algo = QLabel("-")
        self._current_size = QLabel(str(DEFAULT_SIZE))
        self._comparisons = QLabel("0")
        self._swaps = QLabel("0")
        self._time_elapsed = QLabel("0s")
        self._status = QLabel("Ready")
        self._current_operation = QLabel("Ready")
        self._current_operation.setWordWrap(True)

        self._actual_complexity = QLabel("-")
        self._operations_scale = QLabel("-")
        self._efficiency = QLabel("-")

        self._description = QTextEdit()
        self._description.setReadOnly(True)
        self._description.setMaximumHeight(110)

        self._complexity_table = QTableWidget(len(ALGORITHM_IDS), 5)
        self._complexity_table.setHorizontalHeaderLabels(["Algorithm", "Best", "Average", "Worst", "Space"])
        self._complexity_table.verticalHeader().setVisible(False)
        self._complexity_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self._complexity_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)

        self._plot = pg.PlotWidget(title="Sequence")
        self._plot.setMouseEnabled(x=False, y=False)
        self._plot.hideAxis("left")
        self._plot.setYRange(0, 105)
        self._bars = pg.BarGraphItem(x=[0], height=[0], width=0.8, brush=QBrush(self._COLOR_DEFAULT))
        self._plot.addItem(self._bars)

        self._timer = QTimer(self)
        self._timer.setInterval(1000)

        self._build_layout()
        self._populate_complexity_table()
        self._connect_signals()
        self._on_algorithm_changed()

        if config_path:
            self._load_file(config_path)
        else:
            self._generate_array()

    def _build_layout(self) -> None:
        root = QWidget(self)
        root_layout = QVBoxLayout(root)

        toolbar = QHBoxLayout()
        toolbar.addWidget(QLabel("Algorithm"))
        toolbar.addWidget(self._algorithm)
        toolbar.addWidget(QLabel("Size"))
        toolbar.addWidget(self._size_slider)
        toolbar.addWidget(self._size_value)
        toolbar.addWidget(QLabel("Speed"))
        toolbar.addWidget(self._speed_slider)
        toolbar.addWidget(self._speed_value)
        toolbar.addWidget(self._generate_button)
        toolbar.addWidget(self._sort_button)
        toolbar.addWidget(self._pause_button)
        toolbar.addWidget(self._stop_button)
        root_layout.addLayout(toolbar)

        stats_box = QGroupBox("Statistics")
        stats_form = QFormLayout(stats_box)
        stats_form.addRow("Algorithm", self._current_algo)
        stats_form.addRow("Array size", self._current_size)
        stats_form.addRow("Comparisons", self._comparisons)
        stats_form.addRow("Swaps", self._swaps)
        stats_form.addRow("Time", self._time_elapsed)
        stats_form.addRow("Status", self._status)
        stats_form.addRow("Operation", self._current_operation)

        perf_box = QGroupBox("Performance")
        perf_form = QFormLayout(perf_box)
        perf_form.addRow("Actual complexity", self._actual_complexity)
        perf_form.addRow("Operations scale", self._operations_scale)
        perf_form.addRow("Efficiency", self._efficiency)

        side = QWidget()
        side_layout = QVBoxLayout(side)
        side_layout.addWidget(stats_box)
        side_layout.addWidget(perf_box)
        side_layout.addWidget(self._description)
        side_layout.addWidget(self._complexity_table)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self._plot)
        splitter.addWidget(side)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)
        root_layout.addWidget(splitter)

        self.setCentralWidget(root)

    def _connect_signals(self) -> None:
        self._algorithm.currentIndexChanged.connect(self._on_algorithm_changed)
        self._size_slider.valueChanged.connect(self._on_size_changed)
        self._speed_slider.valueChanged.connect(self._on_speed_changed)
        self._generate_button.clicked.connect(self._on_generate)
        self._sort_button.clicked.connect(self._on_sort)
        self._pause_button.clicked.connect(self._on_pause)
        self._stop_button.clicked.connect(self._on_stop)
        self._timer.timeout.connect(self._on_tick)

    def _populate_complexity_table(self) -> None:
        for row, descriptor in enumerate(load_catalog().values()):
            table = descriptor.complexities
            for col, text in enumerate(
                [descriptor.name, table.best.time, table.average.time, table.worst.time, table.worst.space]
            ):
                item = QTableWidgetItem(text)
                item.setData(Qt.ItemDataRole.UserRole, descriptor.id)
                self._complexity_table.setItem(row, col, item)

    def _highlight_current_algorithm(self, algorithm_id: str) -> None:
        for row in range(self._complexity_table.rowCount()):
            first = self._complexity_table.item(row, 0)
            current = first is not None and first.data(Qt.ItemDataRole.UserRole) == algorithm_id
            brush = QBrush(self._COLOR_CURRENT_ROW) if current else QBrush()
            for col in range(self._complexity_table.columnCount()):
                item = self._complexity_table.item(row, col)
                if item is not None:
                    item.setBackground(brush)

    @property
    def _algorithm_id(self) -> str:
        return str(self._algorithm.currentData())

    @property
    def _sorting(self) -> bool:
        return self._worker is not None

    def _load_file(self, path: str) -> None:
        try:
            spec = self._loader.load(path)
        except ConfigError as exc:
            QMessageBox.critical(self, "Load failed", str(exc))
            self._generate_array()
            return
        index = self._algorithm.findData(spec.algorithm)
        if index >= 0:
            self._algorithm.setCurrentIndex(index)
        self._speed_slider.setValue(spec.animation.speed)
        values = resolve_sequence(spec)
        self._size_slider.blockSignals(True)
        self._size_slider.setValue(max(SIZE_MIN, len(values)))
        self._size_slider.blockSignals(False)
        self._size_value.setText(str(len(values)))
        self._set_values(values)

    def _generate_array(self) -> None:
        self._set_values(generate_sequence(self._size_slider.value(), random.Random()))

    def _set_values(self, values: Sequence[int]) -> None:
        self._values = list(values)
        self._current_size.setText(str(len(self._values)))
        self._reset_stats()
        self._render_bars(tuple(self._values), (), (), None, False)

    def _reset_stats(self) -> None:
        self._comparisons.setText("0")
        self._swaps.setText("0")
        self._time_elapsed.setText("0s")
        self._status.setText("Ready")
        self._current_operation.setText("Ready")
        self._actual_complexity.setText("-")
        self._operations_scale.setText("-")
        self._efficiency.setText("-")
        self._timer.stop()
        self._started_at = None

    def _render_bars(
        self,
        sequence: tuple[int, ...],
        highlight: tuple[int, ...],
        sorted_indices: tuple[int, ...],
        pivot_index: int | None,
        swapping: bool,
    ) -> None:
        self._bars.setVisible(bool(sequence))
        if not sequence:
            return
        sorted_set = set(sorted_indices)
        highlight_set = set(highlight)
        brushes = []
        for index in range(len(sequence)):
            if index in sorted_set:
                color = self._COLOR_SORTED
            elif index == pivot_index:
                color = self._COLOR_PIVOT
            elif swapping and index in highlight_set:
                color = self._COLOR_SWAPPING
            elif index in highlight_set:
                color = self._COLOR_COMPARING
            else:
                color = self._COLOR_DEFAULT
            brushes.append(QBrush(color))
        self._bars.setOpts(x=list(range(len(sequence))), height=list(sequence), width=0.8, brushes=brushes)
        self._plot.setXRange(-1, max(1, len(sequence)), padding=0)

    def _set_controls_running(self, running: bool) -> None:
        self._sort_button.setEnabled(not running)
        self._algorithm.setEnabled(not running)
        self._pause_button.setEnabled(running)
        self._stop_button.setEnabled(running)
        if not running:
            self._pause_button.setText("Pause")

    def _stop_worker(self) -> None:
        worker = self._worker
        if worker is None:
            return
        for signal in (worker.steps_batch, worker.state_changed, worker.finished_report, worker.failed):
            signal.disconnect()
        worker.stop()
        worker.wait(2000)
        self._worker = None
        self._timer.stop()
        self._set_controls_running(False)

    def _on_algorithm_changed(self, *args: Any) -> None:  # noqa: ARG002
        descriptor = get_descriptor(self._algorithm_id)
        if descriptor is None:
            return
        self._current_algo.setText(descriptor.name)
        self._description.setHtml(f"<p><b>{descriptor.name}</b> {descriptor.description}</p>")
        self._highlight_current_algorithm(descriptor.id)
        if not self._sorting:
            self._reset_stats()

    def _on_size_changed(self, value: int) -> None:
        self._size_value.setText(str(value))
        self._current_size.setText(str(value))
        self._stop_worker()
        self._generate_array()

    def _on_speed_changed(self, value: int) -> None:
        self._speed_value.setText(speed_label(value))
        if self._worker is not None:
            self._worker.set_speed(value)

    def _on_generate(self) -> None:
        self._stop_worker()
        self._generate_array()

    def _on_sort(self) -> None:
        if self._sorting:
            return
        self._reset_stats()
        self._last_event = None
        self._worker = SortWorker(self._values, self._algorithm_id, speed=self._speed_slider.value())
        self._worker.steps_batch.connect(self._on_steps_batch)
        self._worker.state_changed.connect(self._on_state_changed)
        self._worker.finished_report.connect(self._on_finished)
        self._worker.failed.connect(self._on_failed)
        self._worker.start()

        self._started_at = time.monotonic()
        self._timer.start()
        self._set_controls_running(True)
        self._status.setText("Sorting...")

    def _on_pause(self) -> None:
        if self._worker is not None:
            self._worker.toggle_pause()

    def _on_stop(self) -> None:
        if self._worker is not None:
            self._worker.stop()
        self._status.setText("Stopping...")

    def _on_tick(self) -> None:
        if self._started_at is None:
            return
        self._time_elapsed.setText(f"{int(time.monotonic() - self._started_at)}s")

    def _on_steps_batch(self, rows: list[dict[str, Any]]) -> None:
        if not rows:
            return
        event = StepEvent.model_validate(rows[-1])
        self._last_event = event
        self._render(event)
        self._comparisons.setText(str(event.comparisons))
        self._swaps.setText(str(event.swaps))
        if event.operation:
            self._current_operation.setText(event.operation)

    def _on_state_changed(self, state: str) -> None:
        if state == RunState.PAUSED.value:
            self._pause_button.setText("Resume")
            self._status.setText("Paused")
            self._current_operation.setText("Paused")
        elif state == RunState.RUNNING.value:
            self._pause_button.setText("Pause")
            self._status.setText("Sorting...")

    def _release_worker(self) -> None:
        # The signal is emitted at the end of run(); let the thread exit before it is dropped.
        if self._worker is not None:
            self._worker.wait(2000)
        self._worker = None
        self._timer.stop()
        self._set_controls_running(False)

    def _on_finished(self, report: dict[str, Any], tail: list[dict[str, Any]]) -> None:
        self._on_steps_batch(tail)
        self._on_tick()
        self._release_worker()

        # A cancelled merge restores its buffers after the last event, so the
        # reported sequence is authoritative.
        final = report.get("sequence")
        if final is not None:
            self._values = list(final)
            self._render_bars(tuple(self._values), (), (), None, False)

        state = report.get("state")
        if state == RunState.FINISHED.value:
            self._status.setText("Sorted")
            self._render_bars(tuple(self._values), (), tuple(range(len(self._values))), None, False)
            complexity = report.get("complexity") or self._analyzer.analyze(
                Counters(report.get("comparisons", 0), report.get("swaps", 0)),
                report.get("n", 0),
                get_descriptor(self._algorithm_id),
            ).to_dict()
            self._actual_complexity.setText(complexity["label"])
            self._operations_scale.setText(complexity["operations_scale"])
            self._efficiency.setText(complexity["efficiency"])
        else:
            self._status.setText("Stopped")
            self._current_operation.setText("Cancelled")
        logger.debug("run report: %s", json.dumps(report, ensure_ascii=False))

    def _on_failed(self, error_message: str) -> None:
        QMessageBox.critical(self, "Sort failed", error_message)
        self._status.setText("Failed")
        self._release_worker()

    def closeEvent(self, event: Any) -> None:  # noqa: ANN401, N802
        self._stop_worker()
        super().closeEvent(event)


def run_ui(config_path: str | None = None) -> None:
    app = QApplication.instance() or QApplication([])
    window = MainWindow(config_path=config_path)
    window.show()
    app.exec()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="sort-viz-ui")
    parser.add_argument("-c", "--config", default=None, help="initial run config path")
    args = parser.parse_args(argv)
    run_ui(args.config)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
