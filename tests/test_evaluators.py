import pytest

from chesseval.board import Board
from chesseval.evaluators import (
    evaluate_kbnk,
    evaluate_knnk,
    evaluate_knnkp,
    evaluate_kpk,
    evaluate_kqkp,
    evaluate_kqkr,
    evaluate_krkb,
    evaluate_krkn,
    evaluate_krkp,
    evaluate_kxk,
    normalize,
    push_away,
    push_close,
    push_to_corner,
    push_to_edge,
)
from chesseval.types import (
    PAWN_VALUE_EG,
    QUEEN_VALUE_EG,
    ROOK_VALUE_EG,
    SQ_A1,
    SQ_A8,
    SQ_D2,
    SQ_D4,
    SQ_D5,
    SQ_D7,
    SQ_E2,
    SQ_H1,
    SQ_H8,
    VALUE_DRAW,
    VALUE_KNOWN_WIN,
    VALUE_TB_WIN_IN_MAX_PLY,
    Color,
)


def board(fen):
    return Board.from_fen(fen)


def test_push_to_corner_documented_range():
    assert push_to_corner(SQ_A1) == push_to_corner(SQ_H8) == 7
    assert push_to_corner(SQ_A8) == push_to_corner(SQ_H1) == 0
    assert all(0 <= push_to_corner(s) <= 7 for s in range(64))


def test_push_close_and_away_are_complementary():
    assert push_close(SQ_D4, SQ_D4) == 140
    assert all(push_close(a, b) + push_away(a, b) == 120
               for a in range(0, 64, 7) for b in range(64))


def test_normalize_flips_right_half_pawn():
    b = board("4k3/8/8/8/8/8/4P3/4K3 w - - 0 1")
    assert normalize(b, Color.WHITE, SQ_E2) == SQ_D2


def test_normalize_black_strong_side_flips_rank():
    b = board("4k3/3p4/8/8/8/8/8/4K3 b - - 0 1")
    assert normalize(b, Color.BLACK, SQ_D7) == SQ_D2


def test_normalize_needs_one_pawn():
    with pytest.raises(ValueError):
        normalize(board("4k3/8/8/8/8/8/8/4K3 w - - 0 1"), Color.WHITE, SQ_D5)


def test_kxk_stalemate_is_draw():
    assert evaluate_kxk(board("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"), Color.WHITE) == VALUE_DRAW


def test_kxk_strong_to_move_is_known_win_below_tablebase_range():
    v = evaluate_kxk(board("7k/5Q2/6K1/8/8/8/8/8 w - - 0 1"), Color.WHITE)
    assert VALUE_KNOWN_WIN < v <= VALUE_TB_WIN_IN_MAX_PLY - 1


def test_kxk_lone_knight_gets_no_win_bonus():
    v = evaluate_kxk(board("7k/8/8/8/8/8/8/KN6 w - - 0 1"), Color.WHITE)
    assert 0 < v < VALUE_KNOWN_WIN


def test_kxk_rejects_weak_side_with_pawn():
    with pytest.raises(ValueError):
        evaluate_kxk(board("7k/6p1/8/8/8/8/8/KQ6 w - - 0 1"), Color.WHITE)


def test_kbnk_prefers_bishop_colour_corner():
    right = evaluate_kbnk(board("k7/8/8/8/8/8/8/KBN5 w - - 0 1"), Color.WHITE)
    wrong = evaluate_kbnk(board("7k/8/8/8/8/8/8/KBN5 w - - 0 1"), Color.WHITE)
    assert right > wrong > VALUE_KNOWN_WIN


def test_kpk_win_and_sign():
    white = evaluate_kpk(board("3k4/8/3K4/3P4/8/8/8/8 w - - 0 1"), Color.WHITE)
    black = evaluate_kpk(board("3k4/8/3K4/3P4/8/8/8/8 b - - 0 1"), Color.WHITE)
    assert white > VALUE_KNOWN_WIN
    assert black < -VALUE_KNOWN_WIN


def test_kpk_file_mirror_is_equal():
    d_file = evaluate_kpk(board("3k4/8/3K4/3P4/8/8/8/8 w - - 0 1"), Color.WHITE)
    e_file = evaluate_kpk(board("4k3/8/4K3/4P3/8/8/8/8 w - - 0 1"), Color.WHITE)
    assert d_file == e_file


def test_kpk_colour_mirror_is_equal():
    white = evaluate_kpk(board("3k4/8/3K4/3P4/8/8/8/8 w - - 0 1"), Color.WHITE)
    black = evaluate_kpk(board("8/8/8/8/3p4/3k4/8/3K4 b - - 0 1"), Color.BLACK)
    assert white == black


def test_kpk_rook_pawn_corner_draw():
    assert evaluate_kpk(board("k7/8/K7/P7/8/8/8/8 w - - 0 1"), Color.WHITE) == VALUE_DRAW


def test_krkp_king_in_front_of_pawn():
    v = evaluate_krkp(board("4k3/8/8/8/8/3p4/3K4/R7 w - - 0 1"), Color.WHITE)
    assert ROOK_VALUE_EG - 7 <= v <= ROOK_VALUE_EG


def test_krkp_side_to_move_flips_sign():
    fen = "8/8/8/8/1K6/8/2kp4/7R {} - - 0 1"
    w = evaluate_krkp(board(fen.format("w")), Color.WHITE)
    b = evaluate_krkp(board(fen.format("b")), Color.WHITE)
    assert w > 0
    assert b < 0


def test_krkb_equals_edge_bonus():
    v = evaluate_krkb(board("7k/8/8/8/8/8/b7/R3K3 w - - 0 1"), Color.WHITE)
    assert v == push_to_edge(SQ_H8)
    centre = evaluate_krkb(board("8/8/8/3k4/8/8/b7/R3K3 w - - 0 1"), Color.WHITE)
    assert centre < v


def test_krkn_rewards_separated_knight():
    far = evaluate_krkn(board("7k/8/8/8/8/8/n7/R3K3 w - - 0 1"), Color.WHITE)
    near = evaluate_krkn(board("7k/6n1/8/8/8/8/8/R3K3 w - - 0 1"), Color.WHITE)
    assert far > near


def test_kqkp_rook_pawn_on_seventh_is_drawish():
    drawish = evaluate_kqkp(board("Q7/8/8/8/8/8/pk6/7K w - - 0 1"), Color.WHITE)
    winning = evaluate_kqkp(board("Q7/8/8/8/8/8/1pk5/7K w - - 0 1"), Color.WHITE)
    assert drawish < QUEEN_VALUE_EG - PAWN_VALUE_EG < winning


def test_kqkr_sign_and_colour_symmetry():
    white = evaluate_kqkr(board("8/8/8/3k4/8/8/3r4/Q3K3 w - - 0 1"), Color.WHITE)
    white_other = evaluate_kqkr(board("8/8/8/3k4/8/8/3r4/Q3K3 b - - 0 1"), Color.WHITE)
    black = evaluate_kqkr(board("q3k3/3R4/8/8/3K4/8/8/8 b - - 0 1"), Color.BLACK)
    assert white == -white_other
    assert white == black
    assert white > 0


def test_kqkr_rejects_wrong_material():
    with pytest.raises(ValueError):
        evaluate_kqkr(board("8/8/8/3k4/8/8/3b4/Q3K3 w - - 0 1"), Color.WHITE)


def test_knnkp_prefers_less_advanced_pawn():
    back = evaluate_knnkp(board("7k/8/8/3p4/8/8/8/NN2K3 w - - 0 1"), Color.WHITE)
    forward = evaluate_knnkp(board("7k/8/8/8/8/3p4/8/NN2K3 w - - 0 1"), Color.WHITE)
    assert back > forward


def test_knnk_is_draw():
    assert evaluate_knnk(board("7k/8/8/8/8/8/8/NN2K3 w - - 0 1"), Color.WHITE) == VALUE_DRAW