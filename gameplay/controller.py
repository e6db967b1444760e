"""GameController: the player-versus-computer state machine.

The controller owns the one committed board. Every commit replaces the board
with a new one from :func:`gameplay.position.apply_move`; nothing mutates a
committed board in place. Listeners subscribe to state changes so a rendering
layer never holds game logic of its own.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

import chess

from . import position
from .errors import IllegalMoveError
from .position import GameStatus
from .selector import Difficulty, MoveSelector

_log = logging.getLogger(__name__)

DEFAULT_HINT_DURATION_S = 2.0


class Phase(str, Enum):
    AWAITING_PLAYER_MOVE = "awaiting_player_move"
    APPLYING_OPPONENT_MOVE = "applying_opponent_move"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class Hint:
    move: chess.Move
    san: str
    expires_at: float


Listener = Callable[["GameController"], None]


class GameController:
    """Alternates player and computer moves over a python-chess board.

    A successful player move leaves the controller in
    ``APPLYING_OPPONENT_MOVE`` until :meth:`run_opponent_step` commits the
    reply. Player moves and hint requests are refused in that phase, so at
    most one move is in flight at a time.
    """

    def __init__(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.EASY,
        selector: Optional[MoveSelector] = None,
        fen: Optional[str] = None,
        hint_duration_s: float = DEFAULT_HINT_DURATION_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.selector = selector if selector is not None else MoveSelector()
        self.hint_duration_s = hint_duration_s
        self._clock = clock
        self._listeners: List[Listener] = []
        self._difficulty = Difficulty.parse(difficulty)
        self._board = position.new_board(fen)
        self._hint: Optional[Hint] = None
        self._phase = self._settled_phase()

    @property
    def board(self) -> chess.Board:
        return self._board

    @property
    def fen(self) -> str:
        return self._board.fen()

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def status(self) -> GameStatus:
        return position.game_status(self._board)

    @property
    def hint(self) -> Optional[Hint]:
        if self._hint is not None and self._clock() >= self._hint.expires_at:
            self._hint = None
        return self._hint

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def submit_player_move(
        self,
        from_square: str,
        to_square: str,
        promotion: Optional[str] = "q",
    ) -> bool:
        if self._phase is not Phase.AWAITING_PLAYER_MOVE:
            _log.debug("Rejected %s%s: phase is %s", from_square, to_square, self._phase.value)
            return False
        try:
            move = position.parse_move(self._board, from_square, to_square, promotion)
        except IllegalMoveError as exc:
            _log.debug("Rejected player move: %s", exc)
            return False

        self._commit(move)
        self._hint = None
        self._phase = Phase.APPLYING_OPPONENT_MOVE
        _log.info("Player played %s", move.uci())
        self._notify()
        return True

    def run_opponent_step(self) -> Optional[chess.Move]:
        """Play the computer's reply if one is pending.

        A finished or moveless position moves the controller to ``TERMINAL``
        without touching the board.
        """
        if position.is_terminal(self._board):
            if self._phase is not Phase.TERMINAL:
                self._phase = Phase.TERMINAL
                self._notify()
            return None
        if self._phase is not Phase.APPLYING_OPPONENT_MOVE:
            return None

        move = self.selector.select_move(self._board, self._difficulty)
        self._commit(move)
        self._phase = self._settled_phase()
        _log.info("Computer played %s at %s", move.uci(), self._difficulty.value)
        self._notify()
        return move

    def request_hint(self) -> Optional[chess.Move]:
        if self._phase is not Phase.AWAITING_PLAYER_MOVE:
            return None
        if not position.has_legal_moves(self._board):
            return None
        move = self.selector.select_move(self._board, self._difficulty)
        self._hint = Hint(
            move=move,
            san=self._board.san(move),
            expires_at=self._clock() + self.hint_duration_s,
        )
        self._notify()
        return move

    def reset(
        self,
        difficulty: Union[Difficulty, str, None] = None,
        fen: Optional[str] = None,
    ) -> None:
        """Start a new game, from the standard position unless ``fen`` is given."""
        board = position.new_board(fen)
        if difficulty is not None:
            self._difficulty = Difficulty.parse(difficulty)
        self._board = board
        self._hint = None
        self._phase = self._settled_phase()
        _log.info("New game at %s", self._difficulty.value)
        self._notify()

    def snapshot(self) -> Dict[str, object]:
        board = self._board
        last_uci: Optional[str] = None
        if board.move_stack:
            last_uci = board.move_stack[-1].uci()

        check_square: Optional[str] = None
        if board.is_check():
            king_sq = board.king(board.turn)
            if king_sq is not None:
                check_square = chess.SQUARE_NAMES[king_sq]

        hint = self.hint
        status = self.status
        return {
            "fen": board.fen(),
            "turn": "white" if board.turn == chess.WHITE else "black",
            "phase": self._phase.value,
            "difficulty": self._difficulty.value,
            "status": status.value,
            "status_text": position.status_text(status),
            "game_over": position.is_terminal(board),
            "result": position.result_of(board),
            "legal_moves": [move.uci() for move in board.legal_moves],
            "last_move": last_uci,
            "check_square": check_square,
            "hint": {"move": hint.move.uci(), "san": hint.san} if hint else None,
        }

    def _commit(self, move: chess.Move) -> None:
        self._board = position.apply_move(self._board, move)

    def _settled_phase(self) -> Phase:
        if position.is_terminal(self._board):
            return Phase.TERMINAL
        return Phase.AWAITING_PLAYER_MOVE

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
