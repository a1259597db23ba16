"""Scaling functions for endgames whose evaluation should be damped."""

from __future__ import annotations

from .bitbase import probe as probe_bitbase
from .bitboard import (
    FILE_A_BB,
    FILE_B_BB,
    FILE_G_BB,
    FILE_H_BB,
    attacks_bb,
    distance,
    file_distance,
    forward_file_bb,
    frontmost_sq,
    lsb,
    more_than_one,
    msb,
    opposite_colors,
    passed_pawn_span,
    pawn_attacks_from,
    pseudo_attacks,
    rank_distance,
)
from .board import Board
from .evaluators import normalize
from .types import (
    BISHOP_VALUE_MG,
    FILE_A,
    FILE_D,
    KNIGHT_VALUE_MG,
    NORTH,
    QUEEN_VALUE_MG,
    RANK_1,
    RANK_2,
    RANK_3,
    RANK_4,
    RANK_5,
    RANK_6,
    RANK_7,
    RANK_8,
    ROOK_VALUE_MG,
    SQ_A7,
    SQ_A8,
    SQ_G7,
    SQ_H5,
    SQ_H7,
    VALUE_ZERO,
    Color,
    PieceType,
    ScaleFactor,
    file_of,
    make_square,
    pawn_push,
    rank_of,
    relative_rank_of,
    relative_square,
)

_P, _N, _B, _R, _Q, _K = (PieceType.PAWN, PieceType.KNIGHT, PieceType.BISHOP,
                          PieceType.ROOK, PieceType.QUEEN, PieceType.KING)


def _verify(board: Board, color: Color, npm: int, pawns: int) -> None:
    if board.non_pawn_material(color) != npm or board.count(color, _P) != pawns:
        raise ValueError(f"material of {color.name} does not fit this endgame")


def _bit(square: int) -> int:
    return 1 << square


def scale_kbpsk(board: Board, strong_side: int) -> int:
    """KB and pawns vs K: detect rook pawns with the wrong bishop."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    if (board.non_pawn_material(strong_side) != BISHOP_VALUE_MG
            or board.count(strong_side, _P) < 1):
        raise ValueError("the strong side must have one bishop and pawns")

    strong_pawns = board.pieces(strong_side, _P)
    all_pawns = board.pieces_of_type(_P)
    strong_bishop = board.square(strong_side, _B)
    weak_king = board.square(weak_side, _K)
    strong_king = board.square(strong_side, _K)

    # All strong pawns on a single rook file
    if not strong_pawns & ~FILE_A_BB or not strong_pawns & ~FILE_H_BB:
        queening = relative_square(strong_side,
                                   make_square(file_of(lsb(strong_pawns)), RANK_8))
        if (opposite_colors(queening, strong_bishop)
                and distance(queening, weak_king) <= 1):
            return ScaleFactor.DRAW

    # All pawns on the b or g file
    if ((not all_pawns & ~FILE_B_BB or not all_pawns & ~FILE_G_BB)
            and board.non_pawn_material(weak_side) == 0
            and board.count(weak_side, _P) >= 1):
        weak_pawn = frontmost_sq(strong_side, board.pieces(weak_side, _P))
        if (relative_rank_of(strong_side, weak_pawn) == RANK_7
                and strong_pawns & _bit(weak_pawn + pawn_push(weak_side))
                and (opposite_colors(strong_bishop, weak_pawn)
                     or not more_than_one(strong_pawns))):
            strong_king_dist = distance(weak_pawn, strong_king)
            weak_king_dist = distance(weak_pawn, weak_king)
            if (relative_rank_of(strong_side, weak_king) >= RANK_7
                    and weak_king_dist <= 2
                    and weak_king_dist <= strong_king_dist):
                return ScaleFactor.DRAW

    return ScaleFactor.NONE


def scale_kqkrps(board: Board, strong_side: int) -> int:
    """KQ vs KR and pawns: third-rank fortress defended by a pawn."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, QUEEN_VALUE_MG, 0)
    if board.count(weak_side, _R) != 1 or board.count(weak_side, _P) < 1:
        raise ValueError("the weak side must have one rook and pawns")

    strong_king = board.square(strong_side, _K)
    weak_king = board.square(weak_side, _K)
    weak_rook = board.square(weak_side, _R)

    if (relative_rank_of(weak_side, weak_king) <= RANK_2
            and relative_rank_of(weak_side, strong_king) >= RANK_4
            and relative_rank_of(weak_side, weak_rook) == RANK_3
            and (board.pieces(weak_side, _P)
                 & pseudo_attacks(_K, weak_king)
                 & pawn_attacks_from(strong_side, weak_rook))):
        return ScaleFactor.DRAW

    return ScaleFactor.NONE


def scale_krpkr(board: Board, strong_side: int) -> int:
    """KRP vs KR: recognise the main classes of drawn positions."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, ROOK_VALUE_MG, 1)
    _verify(board, weak_side, ROOK_VALUE_MG, 0)

    strong_king = normalize(board, strong_side, board.square(strong_side, _K))
    strong_rook = normalize(board, strong_side, board.square(strong_side, _R))
    strong_pawn = normalize(board, strong_side, board.square(strong_side, _P))
    weak_king = normalize(board, strong_side, board.square(weak_side, _K))
    weak_rook = normalize(board, strong_side, board.square(weak_side, _R))

    pawn_file = file_of(strong_pawn)
    pawn_rank = rank_of(strong_pawn)
    queening = make_square(pawn_file, RANK_8)
    tempo = int(board.side_to_move == strong_side)

    # Third-rank defence
    if (pawn_rank <= RANK_5
            and distance(weak_king, queening) <= 1
            and strong_king <= SQ_H5
            and (rank_of(weak_rook) == RANK_6
                 or (pawn_rank <= RANK_3 and rank_of(strong_rook) != RANK_6))):
        return ScaleFactor.DRAW

    # Checking from behind with the pawn on the 6th
    if (pawn_rank == RANK_6
            and distance(weak_king, queening) <= 1
            and rank_of(strong_king) + tempo <= RANK_6
            and (rank_of(weak_rook) == RANK_1
                 or (not tempo and file_distance(weak_rook, strong_pawn) >= 3))):
        return ScaleFactor.DRAW

    if (pawn_rank >= RANK_6
            and weak_king == queening
            and rank_of(weak_rook) == RANK_1
            and (not tempo or distance(strong_king, strong_pawn) >= 2)):
        return ScaleFactor.DRAW

    # Pawn a7, rook a8, defending king on g7 or h7 and rook behind the pawn
    if (strong_pawn == SQ_A7
            and strong_rook == SQ_A8
            and weak_king in (SQ_H7, SQ_G7)
            and file_of(weak_rook) == FILE_A
            and (rank_of(weak_rook) <= RANK_3
                 or file_of(strong_king) >= FILE_D
                 or rank_of(strong_king) <= RANK_5)):
        return ScaleFactor.DRAW

    # Defending king blocks the pawn and the attacking king is far away
    if (pawn_rank <= RANK_5
            and weak_king == strong_pawn + NORTH
            and distance(strong_king, strong_pawn) - tempo >= 2
            and distance(strong_king, weak_rook) - tempo >= 2):
        return ScaleFactor.DRAW

    # Pawn on the seventh with the rook behind it
    if (pawn_rank == RANK_7
            and pawn_file != FILE_A
            and file_of(strong_rook) == pawn_file
            and strong_rook != queening
            and distance(strong_king, queening) < distance(weak_king, queening) - 2 + tempo
            and distance(strong_king, queening) < distance(weak_king, strong_rook) + tempo):
        return ScaleFactor.MAX - 2 * distance(strong_king, queening)

    # The same with the pawn further back
    front = strong_pawn + NORTH
    if (pawn_file != FILE_A
            and file_of(strong_rook) == pawn_file
            and strong_rook < strong_pawn
            and distance(strong_king, queening) < distance(weak_king, queening) - 2 + tempo
            and distance(strong_king, front) < distance(weak_king, front) - 2 + tempo
            and (distance(weak_king, strong_rook) + tempo >= 3
                 or (distance(strong_king, queening) < distance(weak_king, strong_rook) + tempo
                     and distance(strong_king, front) < distance(weak_king, strong_pawn) + tempo))):
        return (ScaleFactor.MAX
                - 8 * distance(strong_pawn, queening)
                - 2 * distance(strong_king, queening))

    # Defending king somewhere in the path of a pawn not far advanced
    if pawn_rank <= RANK_4 and weak_king > strong_pawn:
        if file_of(weak_king) == file_of(strong_pawn):
            return 10
        if (file_distance(weak_king, strong_pawn) == 1
                and distance(strong_king, weak_king) > 2):
            return 24 - 2 * distance(strong_king, weak_king)

    return ScaleFactor.NONE


def scale_krpkb(board: Board, strong_side: int) -> int:
    """KRP vs KB: fortress chances with a rook pawn."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, ROOK_VALUE_MG, 1)
    _verify(board, weak_side, BISHOP_VALUE_MG, 0)

    if board.pieces_of_type(_P) & (FILE_A_BB | FILE_H_BB):
        weak_king = board.square(weak_side, _K)
        weak_bishop = board.square(weak_side, _B)
        strong_king = board.square(strong_side, _K)
        strong_pawn = board.square(strong_side, _P)
        pawn_rank = relative_rank_of(strong_side, strong_pawn)
        push = pawn_push(strong_side)

        if pawn_rank == RANK_5 and not opposite_colors(weak_bishop, strong_pawn):
            d = distance(strong_pawn + 3 * push, weak_king)
            if d <= 2 and not (d == 0 and weak_king == strong_king + 2 * push):
                return 24
            return 48

        if (pawn_rank == RANK_6
                and distance(strong_pawn + 2 * push, weak_king) <= 1
                and pseudo_attacks(_B, weak_bishop) & _bit(strong_pawn + push)
                and file_distance(weak_bishop, strong_pawn) >= 2):
            return 8

    return ScaleFactor.NONE


def scale_krppkrp(board: Board, strong_side: int) -> int:
    """KRPP vs KRP: drawish without passed pawns and with an active king."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, ROOK_VALUE_MG, 2)
    _verify(board, weak_side, ROOK_VALUE_MG, 1)

    pawns = board.pieces(strong_side, _P)
    pawn1, pawn2 = lsb(pawns), msb(pawns)
    weak_king = board.square(weak_side, _K)

    if board.pawn_passed(strong_side, pawn1) or board.pawn_passed(strong_side, pawn2):
        return ScaleFactor.NONE

    pawn_rank = max(relative_rank_of(strong_side, pawn1),
                    relative_rank_of(strong_side, pawn2))

    if (file_distance(weak_king, pawn1) <= 1
            and file_distance(weak_king, pawn2) <= 1
            and relative_rank_of(strong_side, weak_king) > pawn_rank):
        return 7 * pawn_rank

    return ScaleFactor.NONE


def scale_kpsk(board: Board, strong_side: int) -> int:
    """K and pawns vs K: rook-file pawns blocked by the king are a draw."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    if (board.non_pawn_material(strong_side) != VALUE_ZERO
            or board.count(strong_side, _P) < 2):
        raise ValueError("the strong side must have only two or more pawns")
    _verify(board, weak_side, VALUE_ZERO, 0)

    weak_king = board.square(weak_side, _K)
    strong_pawns = board.pieces(strong_side, _P)

    if (not strong_pawns & ~(FILE_A_BB | FILE_H_BB)
            and not strong_pawns & ~passed_pawn_span(weak_side, weak_king)):
        return ScaleFactor.DRAW

    return ScaleFactor.NONE


def scale_kbpkb(board: Board, strong_side: int) -> int:
    """KBP vs KB: blockading king or opposite-coloured bishops."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, BISHOP_VALUE_MG, 1)
    _verify(board, weak_side, BISHOP_VALUE_MG, 0)

    strong_pawn = board.square(strong_side, _P)
    strong_bishop = board.square(strong_side, _B)
    weak_bishop = board.square(weak_side, _B)
    weak_king = board.square(weak_side, _K)

    if (forward_file_bb(strong_side, strong_pawn) & _bit(weak_king)
            and (opposite_colors(weak_king, strong_bishop)
                 or relative_rank_of(strong_side, weak_king) <= RANK_6)):
        return ScaleFactor.DRAW

    if opposite_colors(strong_bishop, weak_bishop):
        return ScaleFactor.DRAW

    return ScaleFactor.NONE


def scale_kbppkb(board: Board, strong_side: int) -> int:
    """KBPP vs KB: basic draws with opposite-coloured bishops."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, BISHOP_VALUE_MG, 2)
    _verify(board, weak_side, BISHOP_VALUE_MG, 0)

    strong_bishop = board.square(strong_side, _B)
    weak_bishop = board.square(weak_side, _B)

    if not opposite_colors(strong_bishop, weak_bishop):
        return ScaleFactor.NONE

    weak_king = board.square(weak_side, _K)
    pawns = board.pieces(strong_side, _P)
    pawn1, pawn2 = lsb(pawns), msb(pawns)

    if relative_rank_of(strong_side, pawn1) > relative_rank_of(strong_side, pawn2):
        block1 = pawn1 + pawn_push(strong_side)
        block2 = make_square(file_of(pawn2), rank_of(pawn1))
    else:
        block1 = pawn2 + pawn_push(strong_side)
        block2 = make_square(file_of(pawn1), rank_of(pawn2))

    files_apart = file_distance(pawn1, pawn2)
    weak_bishops = board.pieces(weak_side, _B)
    occupied = board.occupied()

    if files_apart == 0:
        if (file_of(weak_king) == file_of(block1)
                and relative_rank_of(strong_side, weak_king) >= relative_rank_of(strong_side, block1)
                and opposite_colors(weak_king, strong_bishop)):
            return ScaleFactor.DRAW
        return ScaleFactor.NONE

    if files_apart == 1:
        if (weak_king == block1
                and opposite_colors(weak_king, strong_bishop)
                and (weak_bishop == block2
                     or attacks_bb(_B, block2, occupied) & weak_bishops
                     or rank_distance(pawn1, pawn2) >= 2)):
            return ScaleFactor.DRAW
        if (weak_king == block2
                and opposite_colors(weak_king, strong_bishop)
                and (weak_bishop == block1
                     or attacks_bb(_B, block1, occupied) & weak_bishops)):
            return ScaleFactor.DRAW
        return ScaleFactor.NONE

    return ScaleFactor.NONE


def scale_kbpkn(board: Board, strong_side: int) -> int:
    """KBP vs KN: a draw if the king stands in the pawn's path."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, BISHOP_VALUE_MG, 1)
    _verify(board, weak_side, KNIGHT_VALUE_MG, 0)

    strong_pawn = board.square(strong_side, _P)
    strong_bishop = board.square(strong_side, _B)
    weak_king = board.square(weak_side, _K)

    if (file_of(weak_king) == file_of(strong_pawn)
            and relative_rank_of(strong_side, strong_pawn) < relative_rank_of(strong_side, weak_king)
            and (opposite_colors(weak_king, strong_bishop)
                 or relative_rank_of(strong_side, weak_king) <= RANK_6)):
        return ScaleFactor.DRAW

    return ScaleFactor.NONE


def scale_kpkp(board: Board, strong_side: int) -> int:
    """KP vs KP: probe the KPK bitbase with the weaker side's pawn removed."""
    strong_side = Color(strong_side)
    weak_side = strong_side.flip()
    _verify(board, strong_side, VALUE_ZERO, 1)
    _verify(board, weak_side, VALUE_ZERO, 1)

    strong_king = normalize(board, strong_side, board.square(strong_side, _K))
    weak_king = normalize(board, strong_side, board.square(weak_side, _K))
    strong_pawn = normalize(board, strong_side, board.square(strong_side, _P))

    us = Color.WHITE if strong_side == board.side_to_move else Color.BLACK

    if rank_of(strong_pawn) >= RANK_5 and file_of(strong_pawn) != FILE_A:
        return ScaleFactor.NONE

    if probe_bitbase(strong_king, strong_pawn, weak_king, us):
        return ScaleFactor.NONE
    return ScaleFactor.DRAW