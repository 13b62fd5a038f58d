"""AnalysisPanel — shows the coach's feedback on the game.

States: idle (hint text), running (busy bar), result (summary, key
learnings, suggestions) and error.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QFrame,
    QLabel,
    QProgressBar,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from nimbus.analysis.models import AnalysisResult

IDLE_TEXT = "Play some moves, then press Analyze for coach feedback."


def _numbered(items: tuple[str, ...]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


class AnalysisPanel(QWidget):
    """Coach feedback display embedded in the main window."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._result: AnalysisResult | None = None
        self._setup_ui()
        self.show_idle()

    def _section(self, title: str) -> tuple[QLabel, QLabel]:
        header = QLabel(title)
        header.setFont(QFont("Inter", 10, QFont.Weight.Bold))
        header.setStyleSheet("color: #c0c0c0;")
        body = QLabel()
        body.setWordWrap(True)
        body.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self._content_layout.addWidget(header)
        self._content_layout.addWidget(body)
        return header, body

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        title = QLabel("Coach")
        title.setFont(QFont("Inter", 12, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        self._status = QLabel()
        self._status.setWordWrap(True)
        self._status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._status)

        self._progress = QProgressBar()
        self._progress.setRange(0, 0)  # busy indicator
        self._progress.setTextVisible(False)
        self._progress.setFixedHeight(6)
        layout.addWidget(self._progress)

        content = QWidget()
        self._content_layout = QVBoxLayout(content)
        self._content_layout.setContentsMargins(0, 0, 0, 0)
        self._summary_header, self._summary = self._section("Summary")
        self._learnings_header, self._learnings = self._section("Key learnings")
        self._suggestions_header, self._suggestions = self._section("Suggestions")
        self._content_layout.addStretch(1)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setFrameShape(QFrame.Shape.NoFrame)
        self._scroll.setWidget(content)
        layout.addWidget(self._scroll, stretch=1)

    # ── State switching ──────────────────────────────────────────────────

    @property
    def result(self) -> AnalysisResult | None:
        return self._result

    @property
    def status_text(self) -> str:
        return self._status.text()

    @property
    def is_busy(self) -> bool:
        return not self._progress.isHidden()

    def show_idle(self) -> None:
        self._result = None
        self._set_status(IDLE_TEXT, "#71717a")
        self._progress.setVisible(False)
        self._scroll.setVisible(False)

    def show_running(self) -> None:
        self._result = None
        self._set_status("Analyzing your game…", "#a1a1aa")
        self._progress.setVisible(True)
        self._scroll.setVisible(False)

    def show_error(self, message: str) -> None:
        self._result = None
        self._set_status(message, "#f87171")
        self._progress.setVisible(False)
        self._scroll.setVisible(False)

    def show_result(self, result: AnalysisResult) -> None:
        self._result = result
        content = result.content
        self._progress.setVisible(False)
        source = " · ".join(p for p in (result.provider, result.model_name) if p)
        self._set_status(source, "#71717a")

        self._summary.setText(content.summary)
        self._learnings.setText(_numbered(content.key_learnings))
        self._suggestions.setText(_numbered(content.suggestions))
        self._learnings_header.setVisible(bool(content.key_learnings))
        self._learnings.setVisible(bool(content.key_learnings))
        self._suggestions_header.setVisible(bool(content.suggestions))
        self._suggestions.setVisible(bool(content.suggestions))
        self._scroll.setVisible(True)

    def _set_status(self, text: str, color: str) -> None:
        self._status.setText(text)
        self._status.setStyleSheet(f"color: {color};")
        self._status.setVisible(bool(text))
