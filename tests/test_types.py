import pytest

from chesseval.types import (
    MOVE_NONE,
    MOVE_NULL,
    NORTH,
    SCORE_ZERO,
    SQ_A1,
    SQ_A8,
    SQ_H1,
    SQ_H8,
    SQ_NONE,
    VALUE_MATE,
    Color,
    MoveType,
    Piece,
    PieceType,
    Score,
    color_of,
    file_of,
    flip_file,
    flip_rank,
    from_sq,
    from_to,
    is_ok,
    is_ok_move,
    make,
    make_key,
    make_move,
    make_piece,
    make_square,
    mate_in,
    mated_in,
    move_type,
    parse_square,
    pawn_push,
    promotion_type,
    rank_of,
    relative_rank,
    relative_rank_of,
    relative_square,
    reverse_move,
    square_name,
    to_sq,
    type_of,
)

REAL_TYPES = [PieceType.PAWN, PieceType.KNIGHT, PieceType.BISHOP,
              PieceType.ROOK, PieceType.QUEEN, PieceType.KING]


def test_color_flip_is_involution():
    assert Color.WHITE.flip() is Color.BLACK
    assert Color.BLACK.flip().flip() is Color.BLACK


@pytest.mark.parametrize("color", list(Color))
@pytest.mark.parametrize("pt", REAL_TYPES)
def test_piece_round_trip(color, pt):
    piece = make_piece(color, pt)
    assert type_of(piece) == pt
    assert color_of(piece) == color
    assert piece.flip() == make_piece(color.flip(), pt)


def test_piece_flip_known_pair():
    assert Piece.W_KNIGHT.flip() is Piece.B_KNIGHT
    assert Piece.B_KING.flip() is Piece.W_KING


def test_color_of_empty_raises():
    with pytest.raises(ValueError):
        color_of(Piece.NO_PIECE)


def test_empty_square_has_no_piece_type():
    assert type_of(Piece.NO_PIECE) == PieceType.ALL_PIECES


def test_square_round_trip_over_board():
    for sq in range(64):
        assert make_square(file_of(sq), rank_of(sq)) == sq
        assert parse_square(square_name(sq)) == sq
        assert is_ok(sq)
    assert not is_ok(SQ_NONE)
    assert not is_ok(-1)


def test_square_names_of_corners():
    assert square_name(SQ_A1) == "a1"
    assert square_name(SQ_H8) == "h8"


@pytest.mark.parametrize("bad", ["", "a", "i1", "a9", "a10", "A1"])
def test_parse_square_rejects(bad):
    with pytest.raises(ValueError):
        parse_square(bad)


def test_square_name_rejects_off_board():
    with pytest.raises(ValueError):
        square_name(SQ_NONE)


def test_flips():
    assert flip_rank(SQ_A1) == SQ_A8
    assert flip_file(SQ_A1) == SQ_H1
    for sq in range(64):
        assert flip_rank(flip_rank(sq)) == sq
        assert flip_file(flip_file(sq)) == sq
        assert file_of(flip_rank(sq)) == file_of(sq)
        assert rank_of(flip_file(sq)) == rank_of(sq)


def test_relative_square_and_rank():
    for sq in range(64):
        assert relative_square(Color.WHITE, sq) == sq
        assert relative_square(Color.BLACK, sq) == flip_rank(sq)
        assert relative_rank_of(Color.BLACK, sq) == rank_of(flip_rank(sq))
    assert relative_rank(Color.BLACK, relative_rank(Color.BLACK, 2)) == 2


def test_pawn_push():
    assert pawn_push(Color.WHITE) == NORTH
    assert pawn_push(Color.BLACK) == -NORTH


def test_mate_values():
    assert mate_in(0) == VALUE_MATE
    for ply in range(10):
        assert mate_in(ply) + mated_in(ply) == 0
        assert mate_in(ply) > mate_in(ply + 1)


def test_move_round_trip():
    e2, e4 = parse_square("e2"), parse_square("e4")
    m = make_move(e2, e4)
    assert from_sq(m) == e2
    assert to_sq(m) == e4
    assert from_to(m) == m
    assert move_type(m) is MoveType.NORMAL
    assert is_ok_move(m)
    assert reverse_move(reverse_move(m)) == m
    assert from_sq(reverse_move(m)) == e4


@pytest.mark.parametrize("pt", [PieceType.KNIGHT, PieceType.BISHOP,
                                PieceType.ROOK, PieceType.QUEEN])
def test_promotion_move(pt):
    frm, to = parse_square("b7"), parse_square("b8")
    m = make(MoveType.PROMOTION, frm, to, pt)
    assert move_type(m) is MoveType.PROMOTION
    assert promotion_type(m) == pt
    assert from_sq(m) == frm and to_sq(m) == to


def test_castling_and_en_passant_types():
    assert move_type(make(MoveType.CASTLING, SQ_A1, SQ_H1)) is MoveType.CASTLING
    assert move_type(make(MoveType.EN_PASSANT, SQ_A1, SQ_H1)) is MoveType.EN_PASSANT


def test_special_moves_not_ok():
    assert not is_ok_move(MOVE_NONE)
    assert not is_ok_move(MOVE_NULL)


def test_make_key():
    assert make_key(0) == 1442695040888963407
    assert 0 <= make_key(2**70 + 12345) < 2**64


def test_score_arithmetic():
    a = Score(30, -12)
    b = Score(-5, 40)
    assert (a + b) - b == a
    assert a - a == SCORE_ZERO
    assert -(-a) == a
    assert a * 3 == a + a + a
    assert 2 * a == a + a
    assert a * True == a
    assert a * False == SCORE_ZERO


def test_score_divide_truncates_toward_zero():
    assert Score(-7, 7).divide(2) == -Score(7, -7).divide(2)
    assert Score(40, -40).divide(4) * 4 == Score(40, -40)


def test_score_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        Score(1, 1).divide(0)


def test_score_times_score_rejected():
    with pytest.raises(TypeError):
        Score(1, 2) * Score(3, 4)