"""MovePanel — move list grouped in numbered white/black pairs."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QSizePolicy,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from nimbus.core.enums import Side
from nimbus.game.history import Ply

EMPTY_TEXT = "No moves yet. Start playing!"

# White = outline, black = filled
_FIGURINE: dict[Side, dict[str, str]] = {
    Side.WHITE: {"K": "♔", "Q": "♕", "R": "♖", "B": "♗", "N": "♘"},
    Side.BLACK: {"K": "♚", "Q": "♛", "R": "♜", "B": "♝", "N": "♞"},
}

_BUTTON_STYLE = """
QToolButton {
    background: transparent;
    color: #d4d4d4;
    border: 1px solid transparent;
    border-radius: 4px;
    padding: 2px 8px;
    text-align: left;
    font-size: 13px;
}
QToolButton:hover {
    background: #3c3c3c;
    border-color: #555;
}
QToolButton[activeMove="true"] {
    background: #1d4ed8;
    border-color: #3b82f6;
    color: #f0f6ff;
}
"""


def figurine_san(san: str, side: Side) -> str:
    """Replace piece letters in *san* with figurines for *side*."""
    table = _FIGURINE[side]

    if san and san[0] in table:
        san = table[san[0]] + san[1:]

    # e8=Q → e8=♕
    if "=" in san:
        prefix, _, promo = san.partition("=")
        if promo:
            san = prefix + "=" + table.get(promo[0], promo[0]) + promo[1:]

    return san


def pair_plies(plies: list[Ply] | tuple[Ply, ...]) -> list[tuple[int, Ply, Ply | None]]:
    """Group plies as ``(move_number, white, black_or_None)`` rows."""
    rows: list[tuple[int, Ply, Ply | None]] = []
    for idx in range(0, len(plies), 2):
        black = plies[idx + 1] if idx + 1 < len(plies) else None
        rows.append((plies[idx].move_number, plies[idx], black))
    return rows


class MovePanel(QWidget):
    """Clickable move history.

    Signals:
        move_clicked(int): index of the ply the user picked.
    """

    move_clicked = pyqtSignal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._plies: list[Ply] = []
        self._move_buttons: dict[int, QToolButton] = {}
        self._active_ply: int | None = None
        self._use_figurine_notation = True
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        header = QLabel("Moves")
        header.setFont(QFont("Inter", 12, QFont.Weight.Bold))
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(header)

        self._empty = QLabel(EMPTY_TEXT)
        self._empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty.setStyleSheet("color: #71717a;")
        layout.addWidget(self._empty)

        self._list = QListWidget()
        self._list.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        self._list.setFont(QFont("Inter", 12))
        layout.addWidget(self._list)
        self._list.setVisible(False)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def active_ply(self) -> int | None:
        return self._active_ply

    @property
    def is_empty(self) -> bool:
        return not self._plies

    def button_text(self, index: int) -> str:
        return self._move_buttons[index].text()

    def set_history(self, plies: list[Ply] | tuple[Ply, ...], cursor: int) -> None:
        """Rebuild the list from *plies* and mark *cursor* active."""
        self._plies = list(plies)
        self._active_ply = cursor if cursor >= 0 else None
        self._rebuild_list()

    def add_ply(self, ply: Ply) -> None:
        self._plies.append(ply)
        self._active_ply = len(self._plies) - 1
        self._rebuild_list()

    def clear(self) -> None:
        self._plies.clear()
        self._active_ply = None
        self._rebuild_list()

    def set_active_ply(self, cursor: int) -> None:
        """Highlight ply *cursor* (``-1`` = none)."""
        self._set_active_ply(cursor if cursor >= 0 else None)

    def set_use_figurine_notation(self, enabled: bool) -> None:
        """Toggle between figurines and SAN letters."""
        if self._use_figurine_notation == enabled:
            return
        self._use_figurine_notation = enabled
        self._rebuild_list()

    # ── Internals ────────────────────────────────────────────────────────

    def _format_san(self, ply: Ply) -> str:
        if self._use_figurine_notation:
            return figurine_san(ply.san, ply.side)
        return ply.san

    def _create_move_button(self, text: str, index: int) -> QToolButton:
        btn = QToolButton()
        btn.setText(text)
        btn.setCursor(Qt.CursorShape.PointingHandCursor)
        btn.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        btn.setProperty("activeMove", False)
        btn.setStyleSheet(_BUTTON_STYLE)
        btn.clicked.connect(
            lambda _checked=False, ply_index=index: self._on_move_clicked(ply_index)
        )
        return btn

    def _set_active_ply(self, index: int | None) -> None:
        self._active_ply = index
        for ply_index, btn in self._move_buttons.items():
            btn.setProperty("activeMove", ply_index == index)
            style = btn.style()
            if style is not None:
                style.unpolish(btn)
                style.polish(btn)
            btn.update()

    def _on_move_clicked(self, index: int) -> None:
        self.move_clicked.emit(index)

    def _rebuild_list(self) -> None:
        self._list.clear()
        self._move_buttons.clear()
        self._empty.setVisible(not self._plies)
        self._list.setVisible(bool(self._plies))

        for row_idx, (number, white, black) in enumerate(pair_plies(self._plies)):
            white_index = row_idx * 2
            row_widget = QWidget()
            row_layout = QHBoxLayout(row_widget)
            row_layout.setContentsMargins(6, 2, 6, 2)
            row_layout.setSpacing(8)

            num_label = QLabel(f"{number}.")
            num_label.setFixedWidth(28)
            num_label.setAlignment(
                Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            )
            row_layout.addWidget(num_label)

            white_btn = self._create_move_button(self._format_san(white), white_index)
            row_layout.addWidget(white_btn, 1)
            self._move_buttons[white_index] = white_btn

            if black is not None:
                black_btn = self._create_move_button(
                    self._format_san(black), white_index + 1
                )
                row_layout.addWidget(black_btn, 1)
                self._move_buttons[white_index + 1] = black_btn
            else:
                spacer = QWidget()
                spacer.setSizePolicy(
                    QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed
                )
                row_layout.addWidget(spacer, 1)

            item = QListWidgetItem()
            item.setSizeHint(row_widget.sizeHint())
            self._list.addItem(item)
            self._list.setItemWidget(item, row_widget)

        if self._active_ply is not None and self._active_ply >= len(self._plies):
            self._active_ply = len(self._plies) - 1 if self._plies else None
        self._set_active_ply(self._active_ply)
        self._list.scrollToBottom()
