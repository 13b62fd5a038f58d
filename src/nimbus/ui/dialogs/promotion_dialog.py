"""Promotion dialog — lets user pick the promotion piece."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from nimbus.core.enums import PROMOTION_KINDS, PieceKind, Side
from nimbus.ui.board.piece_item import GLYPHS


class PromotionDialog(QDialog):
    """Modal dialog to select promotion piece type."""

    def __init__(self, side: Side, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setFixedSize(340, 130)
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )
        self.setWindowTitle("Promotion")

        self._selected: PieceKind = PieceKind.QUEEN
        self._buttons: dict[PieceKind, QPushButton] = {}

        layout = QVBoxLayout(self)
        label = QLabel("Promote pawn to:")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        label.setFont(QFont("Inter", 11))
        layout.addWidget(label)

        colour = "#fafafa" if side is Side.WHITE else "#111111"
        btn_row = QHBoxLayout()
        for kind in PROMOTION_KINDS:
            btn = QPushButton(GLYPHS[kind])
            btn.setFont(QFont("DejaVu Sans", 30))
            btn.setFixedSize(68, 68)
            btn.setStyleSheet(f"QPushButton {{ color: {colour}; }}")
            btn.setToolTip(kind.name.capitalize())
            btn.clicked.connect(lambda _checked=False, k=kind: self._choose(k))
            btn_row.addWidget(btn)
            self._buttons[kind] = btn

        layout.addLayout(btn_row)

    def _choose(self, kind: PieceKind) -> None:
        self._selected = kind
        self.accept()

    @property
    def selected(self) -> PieceKind:
        return self._selected

    @staticmethod
    def ask(side: Side, parent: QWidget | None = None) -> PieceKind | None:
        """Show the dialog and return the chosen piece kind, or ``None`` on cancel."""
        dlg = PromotionDialog(side, parent)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            return dlg.selected
        return None
