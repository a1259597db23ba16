"""Evaluation functions for specific endgame material configurations."""

from __future__ import annotations

from .bitbase import probe as probe_bitbase
from .bitboard import (
    DARK_SQUARES,
    FILE_B_BB,
    FILE_D_BB,
    FILE_E_BB,
    FILE_G_BB,
    attacks_bb,
    distance,
    edge_distance,
    forward_file_bb,
    iter_squares,
    opposite_colors,
    pawn_attacks_bb,
    pseudo_attacks,
)
from .board import Board
from .types import (
    BISHOP_VALUE_MG,
    FILE_E,
    KNIGHT_VALUE_MG,
    PAWN_VALUE_EG,
    QUEEN_VALUE_EG,
    QUEEN_VALUE_MG,
    RANK_3,
    RANK_4,
    RANK_7,
    RANK_8,
    ROOK_VALUE_EG,
    ROOK_VALUE_MG,
    SQ_A1,
    VALUE_DRAW,
    VALUE_KNOWN_WIN,
    VALUE_TB_WIN_IN_MAX_PLY,
    VALUE_ZERO,
    Color,
    PieceType,
    file_of,
    flip_file,
    flip_rank,
    make_square,
    pawn_push,
    rank_of,
    relative_rank,
    relative_rank_of,
)

_P, _N, _B, _R, _Q, _K = (PieceType.PAWN, PieceType.KNIGHT, PieceType.BISHOP,
                          PieceType.ROOK, PieceType.QUEEN, PieceType.KING)


def push_to_edge(square: int) -> int:
    """Bonus for driving a king to the edge: 27 in the centre, 90 in corners."""
    rd = edge_distance(rank_of(square))
    fd = edge_distance(file_of(square))
    return 90 - (7 * fd * fd // 2 + 7 * rd * rd // 2)


def push_to_corner(square: int) -> int:
    """0 on the a8-h1 diagonal up to 7 in the a1 and h8 corners."""
    return abs(7 - rank_of(square) - file_of(square))


def push_close(s1: int, s2: int) -> int:
    return 140 - 20 * distance(s1, s2)


def push_away(s1: int, s2: int) -> int:
    return 120 - push_close(s1, s2)


def _verify(board: Board, color: Color, npm: int, pawns: int) -> None:
    if board.non_pawn_material(color) != npm or board.count(color, _P) != pawns:
        raise ValueError(f"material of {color.name} does not fit this endgame")


def _from_mover(board: Board, strong_side: Color, result: int) -> int:
    return result if board.side_to_move == strong_side else -result


def normalize(board: Board, strong_side: int, square: int) -> int:
    """Map a square as if strong_side were white with its pawn on files a-d."""
    strong_side = Color(strong_side)
    if board.count(strong_side, _P) != 1:
        raise ValueError("the strong side must have exactly one pawn")
    if file_of(board.square(strong_side, _P)) >= FILE_E:
        square = flip_file(square)
    return square if strong_side == Color.WHITE else flip_rank(square)


def _has_king_move(board: Board, color: Color) -> bool:
    """Whether a lone king of the given colour has a legal move."""
    them = color.flip()
    ksq = board.square(color, _K)
    occupied = board.occupied() & ~(1 << ksq)
    attacked = pawn_attacks_bb(them, board.pieces(them, _P))
    for pt in (_N, _B, _R, _Q, _K):
        for s in iter_squares(board.pieces(them, pt)):
            attacked |= attacks_bb(pt, s, occupied)
    return bool(pseudo_attacks(_K, ksq) & ~board.pieces(color) & ~attacked)


def evaluate_kxk(board: Board, strong_side: int) -> int:
    """King and plenty of material against a lone king."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, weak_side, VALUE_ZERO, 0)

    if board.side_to_move == weak_side and not _has_king_move(board, weak_side):
        return VALUE_DRAW

    strong_king = board.square(strong_side, _K)
    weak_king = board.square(weak_side, _K)

    result = (board.non_pawn_material(strong_side)
              + board.count(strong_side, _P) * PAWN_VALUE_EG
              + push_to_edge(weak_king)
              + push_close(strong_king, weak_king))

    bishops = board.pieces(strong_side, _B)
    if (board.count(strong_side, _Q) or board.count(strong_side, _R)
            or (board.count(strong_side, _B) and board.count(strong_side, _N))
            or (bishops & ~DARK_SQUARES and bishops & DARK_SQUARES)):
        result = min(result + VALUE_KNOWN_WIN, VALUE_TB_WIN_IN_MAX_PLY - 1)

    return _from_mover(board, strong_side, result)


def evaluate_kbnk(board: Board, strong_side: int) -> int:
    """KBN vs K: drive the king to a corner the bishop controls."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, KNIGHT_VALUE_MG + BISHOP_VALUE_MG, 0)
    _verify(board, weak_side, VALUE_ZERO, 0)

    strong_king = board.square(strong_side, _K)
    strong_bishop = board.square(strong_side, _B)
    weak_king = board.square(weak_side, _K)

    target = flip_file(weak_king) if opposite_colors(strong_bishop, SQ_A1) else weak_king
    result = (VALUE_KNOWN_WIN + 3520
              + push_close(strong_king, weak_king)
              + 420 * push_to_corner(target))
    return _from_mover(board, strong_side, result)


def evaluate_kpk(board: Board, strong_side: int) -> int:
    """KP vs K, looked up in the bitbase."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, VALUE_ZERO, 1)
    _verify(board, weak_side, VALUE_ZERO, 0)

    strong_king = normalize(board, strong_side, board.square(strong_side, _K))
    strong_pawn = normalize(board, strong_side, board.square(strong_side, _P))
    weak_king = normalize(board, strong_side, board.square(weak_side, _K))

    us = Color.WHITE if strong_side == board.side_to_move else Color.BLACK
    if not probe_bitbase(strong_king, strong_pawn, weak_king, us):
        return VALUE_DRAW

    result = VALUE_KNOWN_WIN + PAWN_VALUE_EG + rank_of(strong_pawn)
    return _from_mover(board, strong_side, result)


def evaluate_krkp(board: Board, strong_side: int) -> int:
    """KR vs KP: drawish when the pawn is far advanced and supported."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, ROOK_VALUE_MG, 0)
    _verify(board, weak_side, VALUE_ZERO, 1)

    strong_king = board.square(strong_side, _K)
    weak_king = board.square(weak_side, _K)
    strong_rook = board.square(strong_side, _R)
    weak_pawn = board.square(weak_side, _P)
    queening = make_square(file_of(weak_pawn), relative_rank(weak_side, RANK_8))
    stm = board.side_to_move

    if forward_file_bb(strong_side, strong_king) & (1 << weak_pawn):
        result = ROOK_VALUE_EG - distance(strong_king, weak_pawn)
    elif (distance(weak_king, weak_pawn) >= 3 + (stm == weak_side)
          and distance(weak_king, strong_rook) >= 3):
        result = ROOK_VALUE_EG - distance(strong_king, weak_pawn)
    elif (relative_rank_of(strong_side, weak_king) <= RANK_3
          and distance(weak_king, weak_pawn) == 1
          and relative_rank_of(strong_side, strong_king) >= RANK_4
          and distance(strong_king, weak_pawn) > 2 + (stm == strong_side)):
        result = 80 - 8 * distance(strong_king, weak_pawn)
    else:
        front = weak_pawn + pawn_push(weak_side)
        result = 200 - 8 * (distance(strong_king, front)
                             - distance(weak_king, front)
                             - distance(weak_pawn, queening))

    return _from_mover(board, strong_side, result)


def evaluate_krkb(board: Board, strong_side: int) -> int:
    """KR vs KB: drawish, slightly better with the king near the edge."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, ROOK_VALUE_MG, 0)
    _verify(board, weak_side, BISHOP_VALUE_MG, 0)

    result = push_to_edge(board.square(weak_side, _K))
    return _from_mover(board, strong_side, result)


def evaluate_krkn(board: Board, strong_side: int) -> int:
    """KR vs KN: better when the defending king and knight are apart."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, ROOK_VALUE_MG, 0)
    _verify(board, weak_side, KNIGHT_VALUE_MG, 0)

    weak_king = board.square(weak_side, _K)
    weak_knight = board.square(weak_side, _N)
    result = push_to_edge(weak_king) + push_away(weak_king, weak_knight)
    return _from_mover(board, strong_side, result)


def evaluate_kqkp(board: Board, strong_side: int) -> int:
    """KQ vs KP: a win except for some supported pawns on the 7th."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, QUEEN_VALUE_MG, 0)
    _verify(board, weak_side, VALUE_ZERO, 1)

    strong_king = board.square(strong_side, _K)
    weak_king = board.square(weak_side, _K)
    weak_pawn = board.square(weak_side, _P)

    result = push_close(strong_king, weak_king)
    if (relative_rank_of(weak_side, weak_pawn) != RANK_7
            or distance(weak_king, weak_pawn) != 1
            or (FILE_B_BB | FILE_D_BB | FILE_E_BB | FILE_G_BB) & (1 << weak_pawn)):
        result += QUEEN_VALUE_EG - PAWN_VALUE_EG

    return _from_mover(board, strong_side, result)


def evaluate_kqkr(board: Board, strong_side: int) -> int:
    """KQ vs KR: drive the king to the edge and keep the kings close."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, QUEEN_VALUE_MG, 0)
    _verify(board, weak_side, ROOK_VALUE_MG, 0)

    strong_king = board.square(strong_side, _K)
    weak_king = board.square(weak_side, _K)
    result = (QUEEN_VALUE_EG - ROOK_VALUE_EG
              + push_to_edge(weak_king)
              + push_close(strong_king, weak_king))
    return _from_mover(board, strong_side, result)


def evaluate_knnkp(board: Board, strong_side: int) -> int:
    """KNN vs KP: drawish, with chances if the king is pressed early."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, 2 * KNIGHT_VALUE_MG, 0)
    _verify(board, weak_side, VALUE_ZERO, 1)

    weak_king = board.square(weak_side, _K)
    weak_pawn = board.square(weak_side, _P)
    result = (PAWN_VALUE_EG
              + 2 * push_to_edge(weak_king)
              - 10 * relative_rank_of(weak_side, weak_pawn))
    return _from_mover(board, strong_side, result)


def evaluate_knnk(board: Board, strong_side: int) -> int:
    """KNN vs K is a trivial draw."""
    return VALUE_DRAW