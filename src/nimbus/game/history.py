"""Append-only ply history."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from nimbus.core.enums import Side


def move_number_for(index: int) -> int:
    """Full-move number shared by the white and black ply of a move."""
    return index // 2 + 1


def side_for(index: int) -> Side:
    return Side.WHITE if index % 2 == 0 else Side.BLACK


@dataclass(frozen=True)
class Ply:
    """A single committed half-move."""

    move_number: int
    side: Side
    san: str
    uci: str
    resulting_position: str  # FEN right after this ply


class MoveHistory:
    """Ordered plies in game order.

    Only two mutations exist: :meth:`append` after a committed move and
    :meth:`clear` on reset.  Plies themselves are frozen.
    """

    __slots__ = ("_plies",)

    def __init__(self) -> None:
        self._plies: list[Ply] = []

    def append(self, san: str, uci: str, resulting_position: str) -> Ply:
        index = len(self._plies)
        ply = Ply(
            move_number=move_number_for(index),
            side=side_for(index),
            san=san,
            uci=uci,
            resulting_position=resulting_position,
        )
        self._plies.append(ply)
        return ply

    def clear(self) -> None:
        self._plies.clear()

    @property
    def plies(self) -> tuple[Ply, ...]:
        return tuple(self._plies)

    @property
    def last_index(self) -> int:
        """Index of the newest ply, ``-1`` when empty."""
        return len(self._plies) - 1

    def moves_up_to(self, index: int) -> list[str]:
        """UCI moves of plies ``0..index`` inclusive."""
        return [ply.uci for ply in self._plies[: index + 1]]

    def __len__(self) -> int:
        return len(self._plies)

    def __getitem__(self, index: int) -> Ply:
        return self._plies[index]

    def __iter__(self) -> Iterator[Ply]:
        return iter(self._plies)
