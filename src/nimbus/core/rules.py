"""Rule-engine adapter over python-chess.

Everything chess-specific (move generation, legality, SAN, FEN, PGN) is
delegated to the ``chess`` package.  Functions here never mutate the
board they are given; each applied move yields a fresh board.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

import chess
import chess.pgn

from nimbus.core.enums import PieceKind, Side
from nimbus.core.types import (
    PieceDescriptor,
    Square,
    from_chess_square,
    rank_of,
    terminal_rank,
    to_chess_square,
)

STARTING_FEN = chess.STARTING_FEN

_START_ALIASES = ("", "start", "startpos")


class InvalidPositionError(ValueError):
    """The position string cannot be parsed into a playable position."""


class IllegalMoveError(ValueError):
    """The rule engine refused a move."""


@dataclass(frozen=True)
class AppliedMove:
    """Result of applying one move."""

    san: str
    uci: str
    board: chess.Board


@dataclass(frozen=True)
class LegalTarget:
    """A legal destination from some origin square."""

    to: Square
    promotion: PieceKind | None = None


def parse_position(text: str | None) -> chess.Board:
    """Parse a FEN string (or a start alias) into a board.

    Raises:
        InvalidPositionError: python-chess rejects the FEN, or the
            position it describes is not a legal chess position.
    """
    if text is None or text.strip().lower() in _START_ALIASES:
        return chess.Board()
    try:
        board = chess.Board(text.strip())
    except ValueError as exc:
        raise InvalidPositionError(f"Invalid position {text!r}: {exc}") from exc
    if not board.is_valid():
        raise InvalidPositionError(
            f"Invalid position {text!r}: status {board.status()!r}"
        )
    return board


def serialize(board: chess.Board) -> str:
    """Board → FEN."""
    return board.fen()


def turn_to_move(board: chess.Board) -> Side:
    return Side.from_chess(board.turn)


def piece_at(board: chess.Board, square: Square) -> PieceDescriptor | None:
    piece = board.piece_at(to_chess_square(square))
    if piece is None:
        return None
    return PieceDescriptor(PieceKind(piece.piece_type), Side.from_chess(piece.color))


def legal_moves(board: chess.Board, square: Square) -> list[LegalTarget]:
    """All legal moves starting on *square* (one entry per promotion piece)."""
    origin = to_chess_square(square)
    targets: list[LegalTarget] = []
    for move in board.legal_moves:
        if move.from_square != origin:
            continue
        promotion = PieceKind(move.promotion) if move.promotion else None
        targets.append(LegalTarget(from_chess_square(move.to_square), promotion))
    return targets


def is_promotion_move(board: chess.Board, from_sq: Square, to_sq: Square) -> bool:
    """Would moving *from_sq* → *to_sq* need a promotion piece?

    True only for a pawn of the side to move heading for its terminal
    rank when at least one promotion between the squares is legal.
    """
    piece = piece_at(board, from_sq)
    if piece is None or piece.kind is not PieceKind.PAWN:
        return False
    if piece.side is not turn_to_move(board):
        return False
    if rank_of(to_sq) != terminal_rank(piece.side):
        return False
    return any(
        target.to == to_sq and target.promotion is not None
        for target in legal_moves(board, from_sq)
    )


def apply_move(
    board: chess.Board,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceKind | None = None,
) -> AppliedMove:
    """Apply a move to a copy of *board*.

    A promotion piece supplied for a move that is not a promotion is
    ignored.

    Raises:
        IllegalMoveError: malformed squares or an illegal move.
    """
    try:
        origin = to_chess_square(from_sq)
        target = to_chess_square(to_sq)
    except ValueError as exc:
        raise IllegalMoveError(str(exc)) from exc

    if promotion is not None and not is_promotion_move(board, from_sq, to_sq):
        promotion = None

    move = chess.Move(origin, target, promotion=int(promotion) if promotion else None)
    if not board.is_legal(move):
        raise IllegalMoveError(f"Illegal move {move.uci()} in {board.fen()}")

    san = board.san(move)
    after = board.copy()
    after.push(move)
    return AppliedMove(san=san, uci=move.uci(), board=after)


def replay(start_fen: str, moves: Iterable[str]) -> chess.Board:
    """Rebuild a board by pushing UCI *moves* onto *start_fen*."""
    board = parse_position(start_fen)
    for uci in moves:
        board.push_uci(uci)
    return board


def random_legal_move(
    board: chess.Board,
    choice: Callable[[list[chess.Move]], chess.Move],
) -> tuple[Square, Square, PieceKind | None] | None:
    """Pick one legal move with *choice* (e.g. ``random.Random.choice``)."""
    moves = list(board.legal_moves)
    if not moves:
        return None
    move = choice(moves)
    promotion = PieceKind(move.promotion) if move.promotion else None
    return (
        from_chess_square(move.from_square),
        from_chess_square(move.to_square),
        promotion,
    )


def outcome_text(board: chess.Board) -> str | None:
    """Short description of a finished game, or ``None`` while in progress."""
    outcome = board.outcome()
    if outcome is None:
        return None
    reason = outcome.termination.name.replace("_", " ").lower()
    if outcome.winner is None:
        return f"Draw by {reason}"
    winner = "White" if outcome.winner == chess.WHITE else "Black"
    return f"{winner} wins by {reason}"


def export_pgn(
    start_fen: str,
    moves: Iterable[str],
    headers: Mapping[str, str] | None = None,
) -> str:
    """PGN text for UCI *moves* played from *start_fen*."""
    board = parse_position(start_fen)
    game = chess.pgn.Game()
    if start_fen != STARTING_FEN:
        game.setup(board)
    for key, value in (headers or {}).items():
        game.headers[key] = value

    node: chess.pgn.GameNode = game
    for uci in moves:
        node = node.add_variation(chess.Move.from_uci(uci))
    game.headers["Result"] = node.board().result(claim_draw=False)
    return str(game)
