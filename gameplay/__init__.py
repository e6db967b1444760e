"""Chess gameplay package: evaluation, computer move selection and game flow.

Modules:
- position: Rules helpers and status derivation atop python-chess
- evaluator: Material evaluation of positions
- selector: Difficulty levels and the computer's move choice
- controller: Player-versus-computer state machine with hints
"""

from .controller import GameController, Hint, Phase
from .errors import GameplayError, IllegalMoveError, NoLegalMoveError
from .evaluator import Evaluator
from .position import GameStatus
from .selector import Difficulty, MoveSelector

__all__ = [
    "Difficulty",
    "Evaluator",
    "GameController",
    "GameStatus",
    "GameplayError",
    "Hint",
    "IllegalMoveError",
    "MoveSelector",
    "NoLegalMoveError",
    "Phase",
]
