from __future__ import annotations

from enum import Enum
from typing import Optional

import chess

from .errors import IllegalMoveError


class GameStatus(str, Enum):
    """Display status of a position, checked in declaration order."""

    CHECKMATE = "checkmate"
    DRAW = "draw"
    CHECK = "check"
    NONE = "none"


_STATUS_TEXT = {
    GameStatus.CHECKMATE: "Checkmate!",
    GameStatus.DRAW: "Draw!",
    GameStatus.CHECK: "Check!",
    GameStatus.NONE: "",
}


def new_board(fen: Optional[str] = None) -> chess.Board:
    if fen is not None and not isinstance(fen, str):
        raise ValueError(f"FEN must be a string, got {type(fen).__name__}")
    return chess.Board(fen=fen) if fen else chess.Board()


def parse_move(
    board: chess.Board,
    from_square: str,
    to_square: str,
    promotion: Optional[str] = "q",
) -> chess.Move:
    """Turn a drag-style ``from``/``to`` pair into a legal move on ``board``.

    The promotion piece only applies when a pawn reaches the last rank, so a
    queen default can be sent with every move.
    """
    try:
        from_sq = chess.parse_square(str(from_square).lower())
        to_sq = chess.parse_square(str(to_square).lower())
    except ValueError as exc:
        raise IllegalMoveError(f"Malformed square: {from_square!r} -> {to_square!r}") from exc

    promotion_type: Optional[int] = None
    piece = board.piece_at(from_sq)
    if piece and piece.piece_type == chess.PAWN:
        to_rank = chess.square_rank(to_sq)
        if (piece.color == chess.WHITE and to_rank == 7) or (
            piece.color == chess.BLACK and to_rank == 0
        ):
            promotion_type = _parse_promotion(promotion)

    move = chess.Move(from_sq, to_sq, promotion=promotion_type)

    if move not in board.legal_moves:
        raise IllegalMoveError(f"Illegal move: {move.uci()}")
    return move


def _parse_promotion(symbol: Optional[str]) -> int:
    if not symbol:
        return chess.QUEEN
    try:
        piece_type = chess.PIECE_SYMBOLS.index(str(symbol).lower())
    except ValueError as exc:
        raise IllegalMoveError(f"Malformed promotion piece: {symbol!r}") from exc
    if piece_type not in (chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.QUEEN):
        raise IllegalMoveError(f"Cannot promote to {symbol!r}")
    return piece_type


def apply_move(board: chess.Board, move: chess.Move) -> chess.Board:
    """Return a new board with ``move`` played; ``board`` itself is untouched."""
    result = board.copy()
    result.push(move)
    return result


def has_legal_moves(board: chess.Board) -> bool:
    return any(board.legal_moves)


def is_draw(board: chess.Board) -> bool:
    # Same draw conditions the browser board uses: no claim is needed for
    # repetition or the fifty-move rule.
    return (
        board.is_stalemate()
        or board.is_insufficient_material()
        or board.is_repetition(3)
        or board.halfmove_clock >= 100
    )


def is_terminal(board: chess.Board) -> bool:
    return board.is_checkmate() or is_draw(board) or not has_legal_moves(board)


def game_status(board: chess.Board) -> GameStatus:
    if board.is_checkmate():
        return GameStatus.CHECKMATE
    if is_draw(board):
        return GameStatus.DRAW
    if board.is_check():
        return GameStatus.CHECK
    return GameStatus.NONE


def status_text(status: GameStatus) -> str:
    return _STATUS_TEXT[status]


def result_of(board: chess.Board) -> Optional[str]:
    """``'1-0'``, ``'0-1'`` or ``'1/2-1/2'`` for a finished game, else None."""
    if board.is_checkmate():
        return "0-1" if board.turn == chess.WHITE else "1-0"
    if is_terminal(board):
        return "1/2-1/2"
    return None
