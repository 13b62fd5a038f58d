"""Promotion sub-flow: a two-state machine guarding a deferred pawn move."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from nimbus.core.enums import PROMOTION_KINDS, PieceKind, Side
from nimbus.core.types import Square


class PromotionPhase(IntEnum):
    IDLE = auto()
    AWAITING_CHOICE = auto()


@dataclass(frozen=True)
class PromotionRequest:
    """A pawn move suspended until the user names the new piece."""

    from_sq: Square
    to_sq: Square
    side: Side


class PromotionFlow:
    """Holds at most one pending :class:`PromotionRequest`."""

    __slots__ = ("_request",)

    def __init__(self) -> None:
        self._request: PromotionRequest | None = None

    @property
    def phase(self) -> PromotionPhase:
        if self._request is None:
            return PromotionPhase.IDLE
        return PromotionPhase.AWAITING_CHOICE

    @property
    def is_pending(self) -> bool:
        return self._request is not None

    @property
    def request(self) -> PromotionRequest | None:
        return self._request

    def begin(self, request: PromotionRequest) -> None:
        if self._request is not None:
            raise RuntimeError("A promotion choice is already pending")
        self._request = request

    def choose(self, kind: PieceKind) -> PromotionRequest:
        """Leave ``AWAITING_CHOICE`` and return the request to re-execute.

        Raises:
            ValueError: *kind* is not a promotion piece.
            RuntimeError: nothing is pending.
        """
        if kind not in PROMOTION_KINDS:
            raise ValueError(f"Cannot promote to {kind.name.lower()}")
        return self._take()

    def cancel(self) -> PromotionRequest | None:
        """Drop the pending request, if any."""
        request = self._request
        self._request = None
        return request

    def _take(self) -> PromotionRequest:
        if self._request is None:
            raise RuntimeError("No promotion choice is pending")
        request = self._request
        self._request = None
        return request
