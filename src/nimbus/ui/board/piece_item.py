"""PieceItem — a chess piece drawn as a Unicode glyph on the scene."""

from __future__ import annotations

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QBrush, QColor, QCursor, QFont, QPen
from PyQt6.QtWidgets import QGraphicsSimpleTextItem

from nimbus.core.enums import PieceKind, Side
from nimbus.core.types import PieceDescriptor, Square

# Filled glyphs for both sides; colour comes from the brush.
GLYPHS: dict[PieceKind, str] = {
    PieceKind.KING: "♚",
    PieceKind.QUEEN: "♛",
    PieceKind.ROOK: "♜",
    PieceKind.BISHOP: "♝",
    PieceKind.KNIGHT: "♞",
    PieceKind.PAWN: "♟",
}


class PieceItem(QGraphicsSimpleTextItem):
    """A single chess piece on the board.

    Stores its logical *square* and follows the pointer while dragged.
    """

    _FONT_RATIO = 0.78

    def __init__(
        self,
        piece: PieceDescriptor,
        square: Square,
        tile_size: int,
        *,
        white: QColor,
        black: QColor,
    ) -> None:
        super().__init__(GLYPHS[piece.kind])
        self.piece = piece
        self.square = square
        self._tile_size = tile_size
        self._drag_origin: QPointF | None = None

        fill = white if piece.side is Side.WHITE else black
        outline = black if piece.side is Side.WHITE else white
        self.setBrush(QBrush(fill))
        self.setPen(QPen(outline, 1.2))
        self.setFont(QFont("DejaVu Sans", max(8, int(tile_size * self._FONT_RATIO))))
        self.setCursor(QCursor(Qt.CursorShape.OpenHandCursor))
        self.setZValue(1)

    def place_in_tile(self, top_left: QPointF) -> None:
        """Centre the glyph inside the tile whose corner is *top_left*."""
        rect = self.boundingRect()
        self.setPos(
            top_left.x() + (self._tile_size - rect.width()) / 2,
            top_left.y() + (self._tile_size - rect.height()) / 2,
        )

    def centre_on(self, point: QPointF) -> None:
        rect = self.boundingRect()
        self.setPos(point.x() - rect.width() / 2, point.y() - rect.height() / 2)

    @property
    def is_dragging(self) -> bool:
        return self._drag_origin is not None

    def start_drag(self) -> None:
        """Called at the beginning of a drag gesture."""
        self._drag_origin = self.pos()
        self.setZValue(10)  # bring to front
        self.setCursor(QCursor(Qt.CursorShape.ClosedHandCursor))
        self.setOpacity(0.85)

    def cancel_drag(self) -> None:
        """Snap back to original position."""
        if self._drag_origin is not None:
            self.setPos(self._drag_origin)
        self._drag_origin = None
        self.setZValue(1)
        self.setCursor(QCursor(Qt.CursorShape.OpenHandCursor))
        self.setOpacity(1.0)
