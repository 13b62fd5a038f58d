"""Visual theme constants and QSS styles for Nimbus."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    selected: QColor  # ring around the selected piece
    target_dot: QColor  # legal move onto an empty square
    target_capture: QColor  # legal move onto an enemy piece
    last_move: QColor
    check: QColor  # king in check
    piece_white: QColor
    piece_black: QColor
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(209, 213, 219),  # gray-300
            dark_square=QColor(75, 85, 99),  # gray-600
            selected=QColor(59, 130, 246),  # blue-500
            target_dot=QColor(59, 130, 246, 128),
            target_capture=QColor(239, 68, 68),  # red-500
            last_move=QColor(155, 199, 0, 105),
            check=QColor(255, 0, 0, 120),
            piece_white=QColor(250, 250, 250),
            piece_black=QColor(17, 17, 17),
            coord_light=QColor(75, 85, 99),
            coord_dark=QColor(209, 213, 219),
        )

    @classmethod
    def walnut(cls) -> BoardTheme:
        return cls(
            light_square=QColor(228, 210, 184),
            dark_square=QColor(118, 74, 47),
            selected=QColor(255, 235, 59),
            target_dot=QColor(0, 0, 0, 60),
            target_capture=QColor(200, 40, 40),
            last_move=QColor(155, 199, 0, 105),
            check=QColor(255, 0, 0, 120),
            piece_white=QColor(250, 250, 250),
            piece_black=QColor(17, 17, 17),
            coord_light=QColor(118, 74, 47),
            coord_dark=QColor(228, 210, 184),
        )


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #000000;
}

QLabel {
    color: #e0e0e0;
    font-family: "Inter", "Helvetica Neue", sans-serif;
}

QListWidget {
    background: #1e1e1e;
    color: #d4d4d4;
    border: 1px solid #3c3c3c;
    font-size: 13px;
}

QPushButton {
    background: #27272a;
    color: #e0e0e0;
    border: 1px solid #3f3f46;
    border-radius: 6px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #3f3f46;
}
QPushButton:pressed {
    background: #1d4ed8;
}
QPushButton:disabled {
    color: #666;
    background: #18181b;
}

QStatusBar {
    color: #a1a1aa;
}
"""
