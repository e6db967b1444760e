from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Dict, List, Optional, Union

import chess

from .errors import NoLegalMoveError
from .evaluator import Evaluator
from .position import apply_move

_log = logging.getLogger(__name__)


class Difficulty(str, Enum):
    EASY = "easy"
    AMATEUR = "amateur"
    PRO = "pro"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r} (expected one of: {choices})") from None

    @property
    def depth(self) -> int:
        return NOMINAL_DEPTH[self]

    @property
    def noise(self) -> float:
        return NOISE_BY_DEPTH.get(self.depth, 0.0)


# Nominal lookahead per level. Only the noise scale depends on it; the search
# itself is always a single ply.
NOMINAL_DEPTH: Dict[Difficulty, int] = {
    Difficulty.EASY: 0,
    Difficulty.AMATEUR: 2,
    Difficulty.PRO: 4,
}

NOISE_BY_DEPTH: Dict[int, float] = {
    2: 2.0,
    4: 0.5,
}


class MoveSelector:
    """Chooses the computer's move for a difficulty level.

    ``easy`` plays a uniformly random legal move. ``amateur`` and ``pro``
    play the move whose resulting material score plus uniform noise is
    highest; ``pro`` adds less noise so material swings decide more often.
    All randomness comes from ``rng`` so a seeded generator makes choices
    reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def select_move(self, board: chess.Board, difficulty: Union[Difficulty, str]) -> chess.Move:
        difficulty = Difficulty.parse(difficulty)
        moves = list(board.legal_moves)
        if not moves:
            raise NoLegalMoveError(f"No legal moves in position {board.fen()}")

        if difficulty is Difficulty.EASY:
            move = self.rng.choice(moves)
        else:
            move = self._greedy(board, moves, difficulty.noise)

        _log.debug("Selected %s at %s for %s", move.uci(), difficulty.value, board.fen())
        return move

    def _greedy(self, board: chess.Board, moves: List[chess.Move], noise: float) -> chess.Move:
        best_move = moves[0]
        best_value = float("-inf")
        for move in moves:
            value = Evaluator.evaluate(apply_move(board, move)) + self.rng.random() * noise
            # Strictly greater: the earliest move in generation order wins ties.
            if value > best_value:
                best_value = value
                best_move = move
        return best_move
