"""DragSession — ephemeral state of one press-to-release gesture."""

from __future__ import annotations

from dataclasses import dataclass

from nimbus.core.types import PieceDescriptor, Square


@dataclass
class DragSession:
    source_square: Square | None = None
    piece: PieceDescriptor | None = None
    cursor_position: tuple[float, float] | None = None
    active: bool = False

    def start(
        self,
        square: Square,
        piece: PieceDescriptor,
        position: tuple[float, float] | None = None,
    ) -> None:
        self.source_square = square
        self.piece = piece
        self.cursor_position = position
        self.active = True

    def move_to(self, x: float, y: float) -> None:
        """Track the pointer; ignored when no drag is running."""
        if self.active:
            self.cursor_position = (x, y)

    def clear(self) -> None:
        self.source_square = None
        self.piece = None
        self.cursor_position = None
        self.active = False
