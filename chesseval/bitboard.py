"""Bitboard constants, attack tables and helpers for 64-square boards."""

from __future__ import annotations

from collections.abc import Iterator
from functools import lru_cache

from .types import (
    EAST,
    FILE_A,
    FILE_H,
    NORTH,
    NORTH_EAST,
    NORTH_WEST,
    RANK_1,
    RANK_8,
    SOUTH,
    SOUTH_EAST,
    SOUTH_WEST,
    WEST,
    Color,
    PieceType,
    file_of,
    is_ok,
    make_square,
    rank_of,
    relative_rank_of,
)

BB_MASK = (1 << 64) - 1

ALL_SQUARES = BB_MASK
DARK_SQUARES = 0xAA55AA55AA55AA55

FILE_A_BB = 0x0101010101010101
FILE_B_BB = FILE_A_BB << 1
FILE_C_BB = FILE_A_BB << 2
FILE_D_BB = FILE_A_BB << 3
FILE_E_BB = FILE_A_BB << 4
FILE_F_BB = FILE_A_BB << 5
FILE_G_BB = FILE_A_BB << 6
FILE_H_BB = FILE_A_BB << 7

RANK_1_BB = 0xFF
RANK_2_BB = RANK_1_BB << (8 * 1)
RANK_3_BB = RANK_1_BB << (8 * 2)
RANK_4_BB = RANK_1_BB << (8 * 3)
RANK_5_BB = RANK_1_BB << (8 * 4)
RANK_6_BB = RANK_1_BB << (8 * 5)
RANK_7_BB = RANK_1_BB << (8 * 6)
RANK_8_BB = RANK_1_BB << (8 * 7)

QUEEN_SIDE = FILE_A_BB | FILE_B_BB | FILE_C_BB | FILE_D_BB
CENTER_FILES = FILE_C_BB | FILE_D_BB | FILE_E_BB | FILE_F_BB
KING_SIDE = FILE_E_BB | FILE_F_BB | FILE_G_BB | FILE_H_BB
CENTER = (FILE_D_BB | FILE_E_BB) & (RANK_4_BB | RANK_5_BB)

KING_FLANK = (
    QUEEN_SIDE ^ FILE_D_BB, QUEEN_SIDE, QUEEN_SIDE,
    CENTER_FILES, CENTER_FILES,
    KING_SIDE, KING_SIDE, KING_SIDE ^ FILE_E_BB,
)

_ROOK_DIRECTIONS = (NORTH, SOUTH, EAST, WEST)
_BISHOP_DIRECTIONS = (NORTH_EAST, SOUTH_EAST, SOUTH_WEST, NORTH_WEST)
_KING_STEPS = (-9, -8, -7, -1, 1, 7, 8, 9)
_KNIGHT_STEPS = (-17, -15, -10, -6, 6, 10, 15, 17)


def square_bb(square: int) -> int:
    """Return the bitboard holding only the given square."""
    if not is_ok(square):
        raise ValueError(f"not a square on the board: {square!r}")
    return 1 << square


def more_than_one(b: int) -> bool:
    return bool(b & (b - 1))


def opposite_colors(s1: int, s2: int) -> bool:
    """True if the two squares are of different colours."""
    return bool((s1 + rank_of(s1) + s2 + rank_of(s2)) & 1)


def rank_bb(rank: int) -> int:
    return RANK_1_BB << (8 * rank)


def file_bb(file: int) -> int:
    return FILE_A_BB << file


def shift(b: int, direction: int) -> int:
    """Move every square of a bitboard one or two steps in a direction."""
    if direction == NORTH:
        result = b << 8
    elif direction == SOUTH:
        result = b >> 8
    elif direction == NORTH + NORTH:
        result = b << 16
    elif direction == SOUTH + SOUTH:
        result = b >> 16
    elif direction == EAST:
        result = (b & ~FILE_H_BB) << 1
    elif direction == WEST:
        result = (b & ~FILE_A_BB) >> 1
    elif direction == NORTH_EAST:
        result = (b & ~FILE_H_BB) << 9
    elif direction == NORTH_WEST:
        result = (b & ~FILE_A_BB) << 7
    elif direction == SOUTH_EAST:
        result = (b & ~FILE_H_BB) >> 7
    elif direction == SOUTH_WEST:
        result = (b & ~FILE_A_BB) >> 9
    else:
        result = 0
    return result & BB_MASK


def pawn_attacks_bb(color: int, b: int) -> int:
    """Squares attacked by pawns of the given colour standing on b."""
    if color == Color.WHITE:
        return shift(b, NORTH_WEST) | shift(b, NORTH_EAST)
    return shift(b, SOUTH_WEST) | shift(b, SOUTH_EAST)


def pawn_double_attacks_bb(color: int, b: int) -> int:
    """Squares attacked twice by pawns of the given colour standing on b."""
    if color == Color.WHITE:
        return shift(b, NORTH_WEST) & shift(b, NORTH_EAST)
    return shift(b, SOUTH_WEST) & shift(b, SOUTH_EAST)


def adjacent_files_bb(square: int) -> int:
    f = file_bb(file_of(square))
    return shift(f, EAST) | shift(f, WEST)


def forward_ranks_bb(color: int, square: int) -> int:
    """Squares on the ranks in front of the square, seen from color."""
    if color == Color.WHITE:
        return ((~RANK_1_BB & BB_MASK) << (8 * relative_rank_of(Color.WHITE, square))) & BB_MASK
    return (~RANK_8_BB & BB_MASK) >> (8 * relative_rank_of(Color.BLACK, square))


def forward_file_bb(color: int, square: int) -> int:
    return forward_ranks_bb(color, square) & file_bb(file_of(square))


def pawn_attack_span(color: int, square: int) -> int:
    return forward_ranks_bb(color, square) & adjacent_files_bb(square)


def passed_pawn_span(color: int, square: int) -> int:
    return pawn_attack_span(color, square) | forward_file_bb(color, square)


def file_distance(s1: int, s2: int) -> int:
    return abs(file_of(s1) - file_of(s2))


def rank_distance(s1: int, s2: int) -> int:
    return abs(rank_of(s1) - rank_of(s2))


def distance(s1: int, s2: int) -> int:
    """Number of king steps between two squares."""
    return max(file_distance(s1, s2), rank_distance(s1, s2))


def edge_distance(index: int) -> int:
    """Distance of a file or rank from the nearest board edge."""
    return min(index, 7 - index)


def _safe_destination(square: int, step: int) -> int:
    to = square + step
    return 1 << to if is_ok(to) and distance(square, to) <= 2 else 0


def sliding_attack(piece_type: int, square: int, occupied: int) -> int:
    """Attacks of a rook or bishop, computed ray by ray."""
    directions = _ROOK_DIRECTIONS if piece_type == PieceType.ROOK else _BISHOP_DIRECTIONS
    attacks = 0
    for d in directions:
        s = square
        while _safe_destination(s, d) and not occupied & (1 << s):
            s += d
            attacks |= 1 << s
    return attacks


def popcount(b: int) -> int:
    return b.bit_count()


def lsb(b: int) -> int:
    if not b:
        raise ValueError("empty bitboard has no least significant square")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    if not b:
        raise ValueError("empty bitboard has no most significant square")
    return b.bit_length() - 1


def iter_squares(b: int) -> Iterator[int]:
    """Yield the squares of a bitboard from least to most significant."""
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


def least_significant_square_bb(b: int) -> int:
    if not b:
        raise ValueError("empty bitboard has no least significant square")
    return b & -b


def frontmost_sq(color: int, b: int) -> int:
    """Most advanced square of a non-empty bitboard for the given colour."""
    return msb(b) if color == Color.WHITE else lsb(b)


def _relevant_mask(piece_type: int, square: int) -> int:
    edges = (((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(square)))
             | ((FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(square))))
    return sliding_attack(piece_type, square, 0) & ~edges & BB_MASK


def _build_pseudo_attacks() -> dict[int, tuple[int, ...]]:
    king, knight, bishop, rook, queen = [], [], [], [], []
    for s in range(64):
        k = 0
        for step in _KING_STEPS:
            k |= _safe_destination(s, step)
        n = 0
        for step in _KNIGHT_STEPS:
            n |= _safe_destination(s, step)
        b = sliding_attack(PieceType.BISHOP, s, 0)
        r = sliding_attack(PieceType.ROOK, s, 0)
        king.append(k)
        knight.append(n)
        bishop.append(b)
        rook.append(r)
        queen.append(b | r)
    return {
        PieceType.KNIGHT: tuple(knight),
        PieceType.BISHOP: tuple(bishop),
        PieceType.ROOK: tuple(rook),
        PieceType.QUEEN: tuple(queen),
        PieceType.KING: tuple(king),
    }


_PSEUDO_ATTACKS = _build_pseudo_attacks()
_PAWN_ATTACKS = tuple(
    tuple(pawn_attacks_bb(c, 1 << s) for s in range(64)) for c in Color
)
_RELEVANT = {
    pt: tuple(_relevant_mask(pt, s) for s in range(64))
    for pt in (PieceType.BISHOP, PieceType.ROOK)
}


def _build_lines() -> tuple[list[list[int]], list[list[int]]]:
    lines = [[0] * 64 for _ in range(64)]
    between = [[0] * 64 for _ in range(64)]
    for s1 in range(64):
        for pt in (PieceType.BISHOP, PieceType.ROOK):
            empty1 = _PSEUDO_ATTACKS[pt][s1]
            for s2 in range(64):
                if empty1 & (1 << s2):
                    lines[s1][s2] = (empty1 & _PSEUDO_ATTACKS[pt][s2]) | (1 << s1) | (1 << s2)
                    between[s1][s2] = (sliding_attack(pt, s1, 1 << s2)
                                       & sliding_attack(pt, s2, 1 << s1))
                between[s1][s2] |= 1 << s2
    return lines, between


_LINE_BB, _BETWEEN_BB = _build_lines()


def pawn_attacks_from(color: int, square: int) -> int:
    """Squares attacked by a pawn of the given colour on the square."""
    if not is_ok(square):
        raise ValueError(f"not a square on the board: {square!r}")
    return _PAWN_ATTACKS[color][square]


def line_bb(s1: int, s2: int) -> int:
    """The full board-edge-to-edge line through both squares, or 0."""
    return _LINE_BB[s1][s2]


def between_bb(s1: int, s2: int) -> int:
    """Squares from s1 (excluded) to s2 (included); just s2 if not aligned."""
    return _BETWEEN_BB[s1][s2]


def aligned(s1: int, s2: int, s3: int) -> bool:
    return bool(line_bb(s1, s2) & (1 << s3))


def pseudo_attacks(piece_type: int, square: int) -> int:
    """Attacks of a non-pawn piece on an empty board."""
    if not is_ok(square):
        raise ValueError(f"not a square on the board: {square!r}")
    try:
        table = _PSEUDO_ATTACKS[piece_type]
    except KeyError:
        raise ValueError(f"no pseudo attacks for piece type {piece_type!r}") from None
    return table[square]


@lru_cache(maxsize=None)
def _slider_attacks(piece_type: int, square: int, relevant: int) -> int:
    return sliding_attack(piece_type, square, relevant)


def attacks_bb(piece_type: int, square: int, occupied: int = 0) -> int:
    """Attacks of a non-pawn piece given the occupied squares."""
    if not is_ok(square):
        raise ValueError(f"not a square on the board: {square!r}")
    if piece_type == PieceType.BISHOP or piece_type == PieceType.ROOK:
        pt = PieceType(piece_type)
        return _slider_attacks(pt, square, occupied & _RELEVANT[pt][square])
    if piece_type == PieceType.QUEEN:
        return (attacks_bb(PieceType.BISHOP, square, occupied)
                | attacks_bb(PieceType.ROOK, square, occupied))
    return pseudo_attacks(piece_type, square)


def pretty(b: int) -> str:
    """ASCII drawing of a bitboard, rank 8 at the top."""
    border = "+---+---+---+---+---+---+---+---+\n"
    parts = [border]
    for r in range(RANK_8, RANK_1 - 1, -1):
        for f in range(FILE_A, FILE_H + 1):
            parts.append("| X " if b & (1 << make_square(f, r)) else "|   ")
        parts.append(f"| {r + 1}\n{border}")
    parts.append("  a   b   c   d   e   f   g   h\n")
    return "".join(parts)