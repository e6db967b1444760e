from __future__ import annotations

from typing import Dict

import chess


class Evaluator:
    """Static material evaluation for chess positions.

    Positive scores favor White, negative scores favor Black. Units are pawns.
    There are no positional terms; equal material always scores 0.
    """

    MATERIAL_VALUES: Dict[chess.PieceType, int] = {
        chess.PAWN: 1,
        chess.KNIGHT: 3,
        chess.BISHOP: 3,
        chess.ROOK: 5,
        chess.QUEEN: 9,
        chess.KING: 0,
    }

    @classmethod
    def evaluate(cls, board: chess.Board) -> int:
        score = 0
        for piece in board.piece_map().values():
            value = cls.MATERIAL_VALUES[piece.piece_type]
            score += value if piece.color == chess.WHITE else -value
        return score
