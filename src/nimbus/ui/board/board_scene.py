"""BoardScene — QGraphicsScene that draws the chessboard and routes input.

The scene holds no game state of its own.  Pointer and key events are
turned into :class:`InputMapper` gestures; everything it draws comes
from :class:`BoardController` events.
"""

from __future__ import annotations

import chess
from PyQt6.QtCore import QObject, QPointF, QRectF, Qt, QTimer
from PyQt6.QtGui import QBrush, QColor, QFont, QKeyEvent, QPen
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from nimbus.core import rules
from nimbus.core.enums import BoardOrientation
from nimbus.core.types import Square, file_of, from_chess_square, rank_of
from nimbus.game.promotion import PromotionRequest
from nimbus.interaction.mapper import (
    BoardGeometry,
    InputMapper,
    square_from_coordinates,
    square_origin,
)
from nimbus.ui.board.piece_item import PieceItem
from nimbus.ui.dialogs.promotion_dialog import PromotionDialog
from nimbus.ui.styles.theme import BoardTheme

_KEY_NAMES: dict[Qt.Key, str] = {
    Qt.Key.Key_Left: "left",
    Qt.Key.Key_Right: "right",
    Qt.Key.Key_Home: "home",
    Qt.Key.Key_End: "end",
}


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, highlights, and piece items."""

    TILE = 64  # px per square

    def __init__(self, mapper: InputMapper, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._mapper = mapper
        self._controller = mapper.controller
        self._theme = BoardTheme.default()
        self._board: chess.Board = self._controller.viewing_state
        self._show_coordinates = True
        self._show_legal_moves = True

        # Visual layers
        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []
        self._piece_items: dict[Square, PieceItem] = {}
        self._selection_items: list[QGraphicsItem] = []
        self._last_move_items: list[QGraphicsRectItem] = []
        self._check_items: list[QGraphicsRectItem] = []
        self._drag_item: PieceItem | None = None

        events = self._controller.events
        events.on_view_changed.append(self._on_view_changed)
        events.on_orientation_changed.append(self._on_orientation_changed)
        events.on_promotion_requested.append(self._on_promotion_requested)
        self._mapper.on_selection_changed.append(self._on_selection_changed)

        self._redraw()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def geometry(self) -> BoardGeometry:
        side = 8 * self.TILE
        return BoardGeometry(0.0, 0.0, float(side), float(side))

    @property
    def orientation(self) -> BoardOrientation:
        return self._controller.orientation

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._redraw()

    def set_show_coordinates(self, visible: bool) -> None:
        """Show or hide rank/file coordinate labels."""
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        """Show or hide legal-move target markers."""
        self._show_legal_moves = visible
        self._on_selection_changed(
            self._mapper.selected_square, self._mapper.selectable_moves
        )

    # ── Board drawing ────────────────────────────────────────────────────

    def _redraw(self) -> None:
        self._draw_board()
        self._sync_pieces()
        self._highlight_last_move()
        self._highlight_check()
        self._on_selection_changed(
            self._mapper.selected_square, self._mapper.selectable_moves
        )

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        self._clear_items(self._coord_items)

        t = self.TILE
        font = QFont("Inter", max(8, t // 7))

        for square in chess.SQUARE_NAMES:
            f, r = file_of(square), rank_of(square)
            origin = self._tile_origin(square)
            is_dark = (f + r) % 2 == 0
            color = self._theme.dark_square if is_dark else self._theme.light_square
            rect = QGraphicsRectItem(origin.x(), origin.y(), t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[square] = rect

            text_color = self._theme.coord_dark if is_dark else self._theme.coord_light
            on_left_edge = f == (7 if self.orientation is BoardOrientation.FROM_BLACK else 0)
            on_bottom_edge = r == (7 if self.orientation is BoardOrientation.FROM_BLACK else 0)
            if on_left_edge:
                self._add_coord(square[1], origin + QPointF(2, 1), font, text_color)
            if on_bottom_edge:
                self._add_coord(square[0], origin + QPointF(t - 11, t - 16), font, text_color)

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    def _add_coord(self, label: str, pos: QPointF, font: QFont, color: QColor) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(pos)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the viewed position."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()
        self._drag_item = None

        for square in chess.SQUARE_NAMES:
            piece = rules.piece_at(self._board, square)
            if piece is None:
                continue
            item = PieceItem(
                piece,
                square,
                self.TILE,
                white=self._theme.piece_white,
                black=self._theme.piece_black,
            )
            self.addItem(item)
            item.place_in_tile(self._tile_origin(square))
            self._piece_items[square] = item

    # ── Controller / mapper events ───────────────────────────────────────

    def _on_view_changed(self, board: chess.Board, _cursor: int) -> None:
        self._board = board
        self._sync_pieces()
        self._highlight_last_move()
        self._highlight_check()

    def _on_orientation_changed(self, _orientation: BoardOrientation) -> None:
        self._mapper.cancel()
        self._redraw()

    def _on_promotion_requested(self, _request: PromotionRequest) -> None:
        # Ask once the current input handler has returned.
        QTimer.singleShot(0, self._ask_promotion)

    def _ask_promotion(self) -> None:
        request = self._controller.pending_promotion
        if request is None:
            return
        parent = self.views()[0] if self.views() else None
        kind = PromotionDialog.ask(request.side, parent)
        if kind is None:
            self._controller.cancel_promotion()
        else:
            self._controller.resolve_promotion(kind)

    def _on_selection_changed(
        self, square: Square | None, targets: frozenset[Square]
    ) -> None:
        self._clear_items(self._selection_items)
        if square is None:
            return

        ring = self._make_ring(square, self._theme.selected)
        self._selection_items.append(ring)
        if not self._show_legal_moves:
            return
        for target in targets:
            if target in self._piece_items:
                marker = self._make_ring(target, self._theme.target_capture)
            else:
                marker = self._make_dot(target, self._theme.target_dot)
            self._selection_items.append(marker)

    # ── Mouse / keyboard interaction ─────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return super().mousePressEvent(event)

        pos = event.scenePos()
        square = self._square_at(pos)
        if square is None:
            self._mapper.cancel()
            return

        if self._mapper.press(square, (pos.x(), pos.y())):
            item = self._piece_items.get(square)
            if item is not None:
                item.start_drag()
                self._drag_item = item
            event.accept()
            return

        self._mapper.click(square)
        event.accept()

    def mouseMoveEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is not None and self._mapper.drag.active:
            pos = event.scenePos()
            self._mapper.move(pos.x(), pos.y())
            if self._drag_item is not None:
                self._drag_item.centre_on(pos)
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is None or not self._mapper.drag.active:
            return super().mouseReleaseEvent(event)

        pos = event.scenePos()
        self._mapper.release(pos.x(), pos.y(), self.geometry, self.orientation)
        # A committed move re-synced the pieces; anything left snaps back.
        if self._drag_item is not None:
            self._drag_item.cancel_drag()
            self._drag_item = None
        event.accept()

    def keyPressEvent(self, event: QKeyEvent | None) -> None:
        if event is not None:
            name = _KEY_NAMES.get(Qt.Key(event.key()))
            if name is not None and self._mapper.key(name):
                event.accept()
                return
        super().keyPressEvent(event)

    # ── Highlights ───────────────────────────────────────────────────────

    def _highlight_last_move(self) -> None:
        self._clear_items(self._last_move_items)
        cursor = self._controller.cursor
        if cursor < 0 or cursor >= len(self._controller.plies):
            return
        move = chess.Move.from_uci(self._controller.plies[cursor].uci)
        for sq in (move.from_square, move.to_square):
            rect = self._make_fill(from_chess_square(sq), self._theme.last_move)
            rect.setZValue(0.5)
            self._last_move_items.append(rect)

    def _highlight_check(self) -> None:
        self._clear_items(self._check_items)
        if not self._board.is_check():
            return
        king = self._board.king(self._board.turn)
        if king is None:
            return
        rect = self._make_fill(from_chess_square(king), self._theme.check)
        rect.setZValue(0.6)
        self._check_items.append(rect)

    def _clear_items(self, items: list) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _tile_origin(self, square: Square) -> QPointF:
        x, y = square_origin(square, self.geometry, self.orientation)
        return QPointF(x, y)

    def _square_at(self, pos: QPointF) -> Square | None:
        """Scene position → board square."""
        return square_from_coordinates(pos.x(), pos.y(), self.geometry, self.orientation)

    def _make_fill(self, square: Square, color: QColor) -> QGraphicsRectItem:
        origin = self._tile_origin(square)
        rect = QGraphicsRectItem(origin.x(), origin.y(), self.TILE, self.TILE)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        self.addItem(rect)
        return rect

    def _make_ring(self, square: Square, color: QColor) -> QGraphicsRectItem:
        origin = self._tile_origin(square)
        inset = 1.5
        rect = QGraphicsRectItem(
            QRectF(
                origin.x() + inset,
                origin.y() + inset,
                self.TILE - 2 * inset,
                self.TILE - 2 * inset,
            )
        )
        rect.setBrush(QBrush(Qt.BrushStyle.NoBrush))
        rect.setPen(QPen(color, 3))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect

    def _make_dot(self, square: Square, color: QColor) -> QGraphicsEllipseItem:
        origin = self._tile_origin(square)
        size = self.TILE / 4
        offset = (self.TILE - size) / 2
        dot = QGraphicsEllipseItem(origin.x() + offset, origin.y() + offset, size, size)
        dot.setBrush(QBrush(color))
        dot.setPen(QPen(Qt.PenStyle.NoPen))
        dot.setZValue(0.8)
        self.addItem(dot)
        return dot
