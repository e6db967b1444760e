from __future__ import annotations

import chess

from gameplay import Evaluator


def test_starting_position_is_level():
    assert Evaluator.evaluate(chess.Board()) == 0


def test_material_is_signed_by_color():
    # White: K, Q, R. Black: K, N, 2 pawns.
    board = chess.Board("4k3/pp6/2n5/8/8/8/8/R2QK3 w - - 0 1")
    assert Evaluator.evaluate(board) == (9 + 5) - (3 + 1 + 1)


def test_kings_only_is_zero():
    assert Evaluator.evaluate(chess.Board("8/8/8/4k3/8/8/8/4K3 w - - 0 1")) == 0


def test_evaluation_ignores_side_to_move_and_placement():
    white_to_move = chess.Board("4k3/8/8/8/8/8/4P3/4K3 w - - 0 1")
    black_to_move = chess.Board("4k3/8/8/8/P7/8/8/4K3 b - - 0 1")
    assert Evaluator.evaluate(white_to_move) == Evaluator.evaluate(black_to_move) == 1


def test_evaluate_does_not_touch_board():
    board = chess.Board()
    board.push_uci("e2e4")
    fen = board.fen()
    Evaluator.evaluate(board)
    assert board.fen() == fen
    assert len(board.move_stack) == 1
