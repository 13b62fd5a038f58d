"""ControlPanel — board action and navigation buttons."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QVBoxLayout, QWidget


class ControlPanel(QWidget):
    """Buttons for reset, flip, history stepping, random game and analysis."""

    reset_clicked = pyqtSignal()
    flip_clicked = pyqtSignal()
    back_clicked = pyqtSignal()
    forward_clicked = pyqtSignal()
    random_clicked = pyqtSignal()
    analyze_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _button(self, text: str, tooltip: str) -> QPushButton:
        btn = QPushButton(text)
        btn.setFont(QFont("Inter", 10))
        btn.setMinimumHeight(36)
        btn.setToolTip(tooltip)
        return btn

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        row1 = QHBoxLayout()
        self._btn_back = self._button("◀", "Previous move (Left)")
        self._btn_back.clicked.connect(self.back_clicked)
        row1.addWidget(self._btn_back)

        self._btn_forward = self._button("▶", "Next move (Right)")
        self._btn_forward.clicked.connect(self.forward_clicked)
        row1.addWidget(self._btn_forward)

        self._btn_flip = self._button("Flip", "Flip the board")
        self._btn_flip.clicked.connect(self.flip_clicked)
        row1.addWidget(self._btn_flip)

        self._btn_reset = self._button("Reset", "Back to the starting position")
        self._btn_reset.clicked.connect(self.reset_clicked)
        row1.addWidget(self._btn_reset)
        layout.addLayout(row1)

        row2 = QHBoxLayout()
        self._btn_random = self._button("Random game", "Play random legal moves")
        self._btn_random.clicked.connect(self.random_clicked)
        row2.addWidget(self._btn_random)

        self._btn_analyze = self._button("Analyze", "Ask the coach about this game")
        self._btn_analyze.setStyleSheet(
            "QPushButton { background-color: #1d4ed8; }"
            "QPushButton:hover { background-color: #2563eb; }"
        )
        self._btn_analyze.clicked.connect(self.analyze_clicked)
        row2.addWidget(self._btn_analyze)
        layout.addLayout(row2)

    def set_navigation(self, can_back: bool, can_forward: bool) -> None:
        self._btn_back.setEnabled(can_back)
        self._btn_forward.setEnabled(can_forward)

    def set_analyze_enabled(self, enabled: bool) -> None:
        self._btn_analyze.setEnabled(enabled)

    @property
    def is_analyze_enabled(self) -> bool:
        return self._btn_analyze.isEnabled()
