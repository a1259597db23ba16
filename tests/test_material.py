import pytest

from chesseval import evaluators
from chesseval.board import Board
from chesseval.endgames import EndgameCode
from chesseval.material import MaterialEntry, MaterialTable, imbalance, probe
from chesseval.types import (
    PHASE_ENDGAME,
    PHASE_MIDGAME,
    SCORE_ZERO,
    Color,
    ScaleFactor,
    Score,
)

START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def test_start_position_is_midgame_and_balanced():
    entry = probe(Board.from_fen(START))
    assert entry.game_phase == PHASE_MIDGAME
    assert entry.imbalance == SCORE_ZERO
    assert not entry.specialized_eval_exists()


def test_kpk_uses_registered_evaluation():
    board = Board.from_fen("8/8/8/8/8/4k3/4P3/4K3 w - - 0 1")
    entry = probe(board)
    assert entry.specialized_eval_exists()
    assert entry.evaluation_function.code == EndgameCode.KPK
    assert entry.game_phase == PHASE_ENDGAME
    assert entry.evaluate(board) == evaluators.evaluate_kpk(board, Color.WHITE)


def test_krk_falls_back_to_kxk():
    board = Board.from_fen("8/8/8/8/8/4k3/8/R3K3 w - - 0 1")
    entry = probe(board)
    assert entry.evaluation_function.code == EndgameCode.KXK
    assert entry.evaluation_function.strong_side == Color.WHITE
    assert entry.evaluate(board) == evaluators.evaluate_kxk(board, Color.WHITE)


def test_kxk_for_black():
    board = Board.from_fen("4k3/8/8/8/8/8/8/q3K3 w - - 0 1")
    entry = probe(board)
    assert entry.evaluation_function.code == EndgameCode.KXK
    assert entry.evaluation_function.strong_side == Color.BLACK


def test_evaluate_without_function_raises():
    entry = probe(Board.from_fen(START))
    with pytest.raises(ValueError):
        entry.evaluate(Board.from_fen(START))


def test_registered_scaling_function_for_strong_side_only():
    board = Board.from_fen("8/8/3k4/3r4/8/3P4/3R4/3K4 w - - 0 1")
    entry = probe(board)
    assert entry.scaling_functions[Color.WHITE].code == EndgameCode.KRPKR
    assert entry.scaling_functions[Color.BLACK] is None


def test_generic_kbpsk_scaling():
    board = Board.from_fen("4k3/8/8/8/8/8/PP6/2B1K3 w - - 0 1")
    entry = probe(board)
    assert entry.scaling_functions[Color.WHITE].code == EndgameCode.KBPsK
    assert entry.scaling_functions[Color.BLACK] is None


def test_kpsk_scaling_for_pawns_only():
    board = Board.from_fen("4k3/8/8/8/8/8/PP6/4K3 w - - 0 1")
    entry = probe(board)
    assert entry.scaling_functions[Color.WHITE].code == EndgameCode.KPsK
    assert entry.scaling_functions[Color.BLACK] is None


def test_kpkp_scaling_for_both_sides():
    board = Board.from_fen("4k3/p7/8/8/8/8/7P/4K3 w - - 0 1")
    entry = probe(board)
    assert entry.scaling_functions[Color.WHITE].code == EndgameCode.KPKP
    assert entry.scaling_functions[Color.BLACK].code == EndgameCode.KPKP
    assert entry.scaling_functions[Color.BLACK].strong_side == Color.BLACK


def test_lone_bishop_is_a_draw_for_both():
    board = Board.from_fen("8/8/8/8/8/4k3/8/2B1K3 w - - 0 1")
    entry = probe(board)
    assert entry.scale_factor(board, Color.WHITE) == ScaleFactor.DRAW
    assert entry.scale_factor(board, Color.BLACK) == ScaleFactor.DRAW


def test_krbkr_factor():
    board = Board.from_fen("4k3/4r3/8/8/8/8/8/R1B1K3 w - - 0 1")
    entry = probe(board)
    assert entry.factor[Color.WHITE] == 14
    assert entry.scale_factor(board, Color.WHITE) == 14


def test_pawns_keep_normal_factor():
    entry = probe(Board.from_fen(START))
    board = Board.from_fen(START)
    assert entry.scale_factor(board, Color.WHITE) == ScaleFactor.NORMAL
    assert entry.scale_factor(board, Color.BLACK) == ScaleFactor.NORMAL


def test_imbalance_of_nothing_is_zero():
    counts = ((0, 0, 0, 0, 0, 0), (0, 0, 0, 0, 0, 0))
    assert imbalance(counts, Color.WHITE) == SCORE_ZERO


def test_imbalance_single_pawn_uses_table_entry():
    counts = ((0, 1, 0, 0, 0, 0), (0, 0, 0, 0, 0, 0))
    assert imbalance(counts, Color.WHITE) == Score(37, 39)


def test_imbalance_is_colour_symmetric():
    counts = ((1, 5, 1, 2, 1, 1), (0, 6, 2, 1, 2, 0))
    swapped = (counts[1], counts[0])
    assert imbalance(counts, Color.WHITE) == imbalance(swapped, Color.BLACK)


def test_mirrored_position_negates_imbalance():
    white = probe(Board.from_fen("4k3/pppp4/8/8/8/8/PPPPPP2/R1B1K1N1 w - - 0 1"))
    black = probe(Board.from_fen("r1b1k1n1/pppppp2/8/8/8/8/PPPP4/4K3 w - - 0 1"))
    assert white.imbalance == -black.imbalance
    assert white.game_phase == black.game_phase


def test_table_caches_entries():
    table = MaterialTable()
    first = table.probe(Board.from_fen(START))
    second = table.probe(Board.from_fen("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"))
    assert first is second
    assert isinstance(first, MaterialEntry)
    assert first.game_phase == PHASE_MIDGAME