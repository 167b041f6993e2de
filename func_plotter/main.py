"""
Function Plotter: type y = f(x), see the curve and its notable points.

Pipeline
--------
1.  Normalise + validate the text              expression.compile_function
2.  Sample 801 points over [x_min, x_max]      sampling.sample_function
3.  Split into polylines at invalid samples    sampling.split_segments
4.  Endpoints + value at x = 0                 points.find_points / calc_zero_point
5.  Stroke, mark and label                     PlotterApp (pyqtgraph)
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import QTimer
from PySide6.QtGui import QResizeEvent
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QDialog,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from func_plotter.expression import InvalidExpressionError
from func_plotter.geometry import Viewport, calc_step, generate_grid_values
from func_plotter.numeric import format_number
from func_plotter.plotting import CurvePlot, PlotController, PlotResult
from func_plotter.registry import FunctionEntry
from func_plotter.settings import (
    AXIS_COLOR,
    CURVE_WIDTH,
    ERROR_TIMEOUT_MS,
    LABEL_COLOR,
    LABEL_OFFSET,
    MARKER_OUTLINE,
    MARKER_RADIUS,
    SUCCESS_TIMEOUT_MS,
    DomainError,
    PlotSettings,
    setup_logging,
)

logger = logging.getLogger(__name__)


# ===========================================================================
# Settings dialog
# ===========================================================================

class SettingsDialog(QDialog):

    def __init__(self, settings: PlotSettings, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Axis Bounds")
        self._settings = settings
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QGridLayout(self)

        self._x_min_edit = QLineEdit(format_number(self._settings.x_min))
        self._x_max_edit = QLineEdit(format_number(self._settings.x_max))
        self._y_min_edit = QLineEdit(format_number(self._settings.y_min))
        self._y_max_edit = QLineEdit(format_number(self._settings.y_max))

        fields: list[tuple[str, QWidget]] = [
            ("X Min:", self._x_min_edit),
            ("X Max:", self._x_max_edit),
            ("Y Min:", self._y_min_edit),
            ("Y Max:", self._y_max_edit),
        ]
        for row, (label, widget) in enumerate(fields):
            layout.addWidget(QLabel(label), row, 0)
            layout.addWidget(widget, row, 1)

        btn_row = QHBoxLayout()
        ok_btn = QPushButton("OK")
        cancel_btn = QPushButton("Cancel")
        ok_btn.clicked.connect(self.accept)
        cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(ok_btn)
        btn_row.addWidget(cancel_btn)
        layout.addLayout(btn_row, len(fields), 0, 1, 2)

    def get_settings(self) -> PlotSettings:
        """Raises ``DomainError`` when the bounds are unusable."""
        return PlotSettings.from_text(
            self._x_min_edit.text(),
            self._x_max_edit.text(),
            self._y_min_edit.text(),
            self._y_max_edit.text(),
        )


# ===========================================================================
# Main window
# ===========================================================================

class PlotterApp(QMainWindow):

    def __init__(self, controller: Optional[PlotController] = None) -> None:
        super().__init__()
        self.setWindowTitle("Function Plotter")
        self.setGeometry(100, 100, 1200, 760)

        self._controller = controller if controller is not None else PlotController()
        self._last_result: Optional[PlotResult] = None

        self._message_timer = QTimer(self)
        self._message_timer.setSingleShot(True)

        self._build_ui()
        self._configure_plot()
        self._refresh_function_list()

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)

        left = QVBoxLayout()
        self._plot_widget = pg.PlotWidget()
        left.addWidget(self._plot_widget)

        input_row = QHBoxLayout()
        self._input_edit = QLineEdit()
        self._input_edit.setPlaceholderText("y = 2 * (x + 1)   or   y = x^2")
        self._add_btn = QPushButton("Add")
        self._plot_btn = QPushButton("Plot")
        self._settings_btn = QPushButton("Settings")

        self._input_edit.returnPressed.connect(self.add_function)
        self._add_btn.clicked.connect(self.add_function)
        self._plot_btn.clicked.connect(lambda: self.plot_graphs(announce=True))
        self._settings_btn.clicked.connect(self.show_settings)

        for widget in (self._input_edit, self._add_btn, self._plot_btn, self._settings_btn):
            input_row.addWidget(widget)
        left.addLayout(input_row)

        self._status_lbl = QLabel("")
        self._message_timer.timeout.connect(self._status_lbl.clear)
        left.addWidget(self._status_lbl)
        root.addLayout(left, 3)

        right = QVBoxLayout()

        funcs_group = QGroupBox("Functions")
        self._functions_layout = QVBoxLayout()
        self._functions_layout.setSpacing(2)
        funcs_group.setLayout(self._functions_layout)
        right.addWidget(funcs_group)

        right.addWidget(QLabel("Significant points:"))
        self._points_output = QTextEdit()
        self._points_output.setReadOnly(True)
        right.addWidget(self._points_output)
        root.addLayout(right, 1)

        vb = self._plot_widget.plotItem.vb
        vb.setMenuEnabled(False)
        vb.setMouseEnabled(x=False, y=False)

    def _configure_plot(self) -> None:
        s = self._controller.settings
        self._plot_widget.setLabel("left", "y")
        self._plot_widget.setLabel("bottom", "x")
        self._plot_widget.plotItem.vb.disableAutoRange()
        self._plot_widget.setXRange(s.x_min, s.x_max, padding=0)
        self._plot_widget.setYRange(s.y_min, s.y_max, padding=0)

        for axis_name, lo, hi in (("bottom", s.x_min, s.x_max), ("left", s.y_min, s.y_max)):
            ticks = generate_grid_values(lo, hi, calc_step(lo, hi))
            self._plot_widget.getAxis(axis_name).setTicks([[(v, format_number(v)) for v in ticks], []])
        self._plot_widget.showGrid(x=True, y=True, alpha=0.3)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def _show_message(self, text: str, error: bool) -> None:
        color = "#c0392b" if error else "#27ae60"
        self._status_lbl.setStyleSheet(f"color: {color}; font-style: italic;")
        self._status_lbl.setText(text)
        self._message_timer.start(ERROR_TIMEOUT_MS if error else SUCCESS_TIMEOUT_MS)

    def show_error(self, text: str) -> None:
        self._show_message(text, error=True)

    def show_success(self, text: str) -> None:
        self._show_message(text, error=False)

    # ------------------------------------------------------------------
    # Registry actions
    # ------------------------------------------------------------------

    def add_function(self) -> None:
        text = self._input_edit.text().strip()
        try:
            self._controller.registry.add(text)
        except InvalidExpressionError as exc:
            if not text:
                self.show_error(str(exc))
            else:
                self.show_error("Enter the function in a valid format, "
                                "e.g. y = 2 * (x + 1) or y = x^2")
            return
        self._input_edit.clear()
        self._refresh_function_list()
        self.plot_graphs()

    def remove_function(self, index: int) -> None:
        self._controller.registry.remove(index)
        self._refresh_function_list()
        self.plot_graphs()

    def toggle_function(self, index: int, checked: bool) -> None:
        self._controller.registry.toggle(index, checked)
        self.plot_graphs()

    def _refresh_function_list(self) -> None:
        while self._functions_layout.count():
            item = self._functions_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        entries = self._controller.registry.entries
        if not entries:
            empty = QLabel("No functions added")
            empty.setStyleSheet("color: #6c757d;")
            self._functions_layout.addWidget(empty)
        for idx, entry in enumerate(entries):
            self._functions_layout.addWidget(self._create_function_row(idx, entry))

        self._plot_btn.setEnabled(bool(entries))

    def _create_function_row(self, idx: int, entry: FunctionEntry) -> QWidget:
        row = QWidget()
        hl = QHBoxLayout(row)
        hl.setContentsMargins(2, 1, 2, 1)
        hl.setSpacing(6)

        swatch = QLabel()
        swatch.setFixedSize(14, 14)
        swatch.setStyleSheet(f"background-color: {entry.color}; border-radius: 3px;")

        cb = QCheckBox()
        cb.setChecked(entry.enabled)
        cb.toggled.connect(lambda state, i=idx: self.toggle_function(i, state))

        delete_btn = QPushButton("×")
        delete_btn.setFixedWidth(24)
        delete_btn.setToolTip("Remove function")
        delete_btn.clicked.connect(lambda _=False, i=idx: self.remove_function(i))

        hl.addWidget(swatch)
        hl.addWidget(QLabel(entry.expression))
        hl.addStretch(1)
        hl.addWidget(cb)
        hl.addWidget(delete_btn)
        return row

    # ------------------------------------------------------------------
    # Plotting
    # ------------------------------------------------------------------

    def plot_graphs(self, announce: bool = False) -> None:
        try:
            result = self._controller.plot()
        except DomainError as exc:
            logger.warning("Plot aborted: %s", exc)
            self.show_error("Axis minimum values must be less than the maximum values")
            return

        self._last_result = result
        self._draw(result)
        self._display_points_info(result)
        if announce:
            self.show_success("Graphs plotted")

    def _draw(self, result: PlotResult) -> None:
        item = self._plot_widget.plotItem
        item.clear()
        self._draw_axes(result.settings)

        viewport = Viewport(self._plot_widget.width(), self._plot_widget.height())
        for curve in result.curves:
            pen = pg.mkPen(curve.color, width=CURVE_WIDTH)
            for seg in curve.segments:
                item.plot(seg[:, 0], seg[:, 1], pen=pen)
            self._draw_markers(curve, result.settings, viewport)

    def _draw_axes(self, settings: PlotSettings) -> None:
        pen = pg.mkPen(AXIS_COLOR, width=2)
        item = self._plot_widget.plotItem
        if settings.x_min <= 0 <= settings.x_max:
            item.addItem(pg.InfiniteLine(pos=0, angle=90, pen=pen))
        if settings.y_min <= 0 <= settings.y_max:
            item.addItem(pg.InfiniteLine(pos=0, angle=0, pen=pen))

    def _draw_markers(self, curve: CurvePlot, settings: PlotSettings,
                      viewport: Viewport) -> None:
        visible = [p for p in curve.points
                   if viewport.contains(*viewport.to_device(p.x, p.y, settings))]
        if not visible:
            return

        item = self._plot_widget.plotItem
        scatter = pg.ScatterPlotItem(
            x=np.asarray([p.x for p in visible], dtype=np.float64),
            y=np.asarray([p.y for p in visible], dtype=np.float64),
            size=MARKER_RADIUS * 2,
            brush=pg.mkBrush(curve.color),
            pen=pg.mkPen("w", width=MARKER_OUTLINE),
        )
        item.addItem(scatter)

        # label sits LABEL_OFFSET device pixels above its marker
        lift = 0.0
        if viewport.inner_height > 0:
            lift = LABEL_OFFSET * settings.domain_height / viewport.inner_height
        for p in visible:
            text = pg.TextItem(p.label(), color=LABEL_COLOR, anchor=(0.5, 0.5))
            text.setPos(p.x, p.y + lift)
            item.addItem(text)

    def _display_points_info(self, result: PlotResult) -> None:
        blocks = [
            f"{expression}:\n    " + ", ".join(p.label(", ") for p in points)
            for expression, points in result.significant_points if points
        ]
        self._points_output.setPlainText(
            "\n\n".join(blocks) if blocks else "No significant points found"
        )

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802
        super().resizeEvent(event)
        if self._last_result is not None:
            self.plot_graphs()

    def show_settings(self) -> None:
        dlg = SettingsDialog(self._controller.settings, self)
        if dlg.exec():
            try:
                self._controller.settings = dlg.get_settings()
            except DomainError as exc:
                logger.warning("Rejected bounds: %s", exc)
                self.show_error("Axis minimum values must be less than the maximum values")
                return
            self._configure_plot()
            self.plot_graphs()


# ===========================================================================
# Entry point
# ===========================================================================

def main() -> None:
    setup_logging()
    pg.setConfigOptions(antialias=True, background="w", foreground="k")
    app = QApplication(sys.argv)
    window = PlotterApp()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
