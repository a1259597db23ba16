"""Core chess types: colours, pieces, squares, moves, values and scores."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

MAX_MOVES = 256
MAX_PLY = 246

_KEY_MASK = (1 << 64) - 1

# Values (in internal units, where a pawn in the endgame is worth 208).
VALUE_ZERO = 0
VALUE_DRAW = 0
VALUE_KNOWN_WIN = 10000
VALUE_MATE = 32000
VALUE_INFINITE = 32001
VALUE_NONE = 32002

VALUE_TB_WIN_IN_MAX_PLY = VALUE_MATE - 2 * MAX_PLY
VALUE_TB_LOSS_IN_MAX_PLY = -VALUE_TB_WIN_IN_MAX_PLY
VALUE_MATE_IN_MAX_PLY = VALUE_MATE - MAX_PLY
VALUE_MATED_IN_MAX_PLY = -VALUE_MATE_IN_MAX_PLY

PAWN_VALUE_MG, PAWN_VALUE_EG = 126, 208
KNIGHT_VALUE_MG, KNIGHT_VALUE_EG = 781, 854
BISHOP_VALUE_MG, BISHOP_VALUE_EG = 825, 915
ROOK_VALUE_MG, ROOK_VALUE_EG = 1276, 1380
QUEEN_VALUE_MG, QUEEN_VALUE_EG = 2538, 2682

MIDGAME_LIMIT = 15258
ENDGAME_LIMIT = 3915

# Game phases
PHASE_ENDGAME = 0
PHASE_MIDGAME = 128
MG = 0
EG = 1

# Search depths
DEPTH_QS_CHECKS = 0
DEPTH_QS_NO_CHECKS = -1
DEPTH_QS_RECAPTURES = -5
DEPTH_NONE = -6
DEPTH_OFFSET = -7

# Special moves
MOVE_NONE = 0
MOVE_NULL = 65

# Files and ranks
FILE_A, FILE_B, FILE_C, FILE_D, FILE_E, FILE_F, FILE_G, FILE_H = range(8)
FILE_NB = 8
RANK_1, RANK_2, RANK_3, RANK_4, RANK_5, RANK_6, RANK_7, RANK_8 = range(8)
RANK_NB = 8

# Squares, numbered a1 = 0 ... h8 = 63
(SQ_A1, SQ_B1, SQ_C1, SQ_D1, SQ_E1, SQ_F1, SQ_G1, SQ_H1,
 SQ_A2, SQ_B2, SQ_C2, SQ_D2, SQ_E2, SQ_F2, SQ_G2, SQ_H2,
 SQ_A3, SQ_B3, SQ_C3, SQ_D3, SQ_E3, SQ_F3, SQ_G3, SQ_H3,
 SQ_A4, SQ_B4, SQ_C4, SQ_D4, SQ_E4, SQ_F4, SQ_G4, SQ_H4,
 SQ_A5, SQ_B5, SQ_C5, SQ_D5, SQ_E5, SQ_F5, SQ_G5, SQ_H5,
 SQ_A6, SQ_B6, SQ_C6, SQ_D6, SQ_E6, SQ_F6, SQ_G6, SQ_H6,
 SQ_A7, SQ_B7, SQ_C7, SQ_D7, SQ_E7, SQ_F7, SQ_G7, SQ_H7,
 SQ_A8, SQ_B8, SQ_C8, SQ_D8, SQ_E8, SQ_F8, SQ_G8, SQ_H8) = range(64)
SQ_NONE = 64
SQUARE_NB = 64

# Directions as square offsets
NORTH = 8
EAST = 1
SOUTH = -NORTH
WEST = -EAST
NORTH_EAST = NORTH + EAST
SOUTH_EAST = SOUTH + EAST
SOUTH_WEST = SOUTH + WEST
NORTH_WEST = NORTH + WEST

_FILE_CHARS = "abcdefgh"
_RANK_CHARS = "12345678"


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    def flip(self) -> Color:
        """Return the opposite colour."""
        return Color(self ^ 1)


COLOR_NB = 2


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6
    ALL_PIECES = 0


PIECE_TYPE_NB = 8


class Piece(IntEnum):
    NO_PIECE = 0
    W_PAWN = 1
    W_KNIGHT = 2
    W_BISHOP = 3
    W_ROOK = 4
    W_QUEEN = 5
    W_KING = 6
    B_PAWN = 9
    B_KNIGHT = 10
    B_BISHOP = 11
    B_ROOK = 12
    B_QUEEN = 13
    B_KING = 14

    def flip(self) -> Piece:
        """Return the same piece type of the other colour."""
        return Piece(self ^ 8)


PIECE_NB = 16


class MoveType(IntEnum):
    NORMAL = 0
    PROMOTION = 1 << 14
    EN_PASSANT = 2 << 14
    CASTLING = 3 << 14


class CastlingRights(IntFlag):
    NO_CASTLING = 0
    WHITE_OO = 1
    WHITE_OOO = 2
    BLACK_OO = 4
    BLACK_OOO = 8

    KING_SIDE = WHITE_OO | BLACK_OO
    QUEEN_SIDE = WHITE_OOO | BLACK_OOO
    WHITE_CASTLING = WHITE_OO | WHITE_OOO
    BLACK_CASTLING = BLACK_OO | BLACK_OOO
    ANY_CASTLING = WHITE_CASTLING | BLACK_CASTLING


CASTLING_RIGHT_NB = 16


class ScaleFactor(IntEnum):
    DRAW = 0
    NORMAL = 64
    MAX = 128
    NONE = 255


class Bound(IntEnum):
    NONE = 0
    UPPER = 1
    LOWER = 2
    EXACT = 3


_MG_VALUES = (VALUE_ZERO, PAWN_VALUE_MG, KNIGHT_VALUE_MG, BISHOP_VALUE_MG,
              ROOK_VALUE_MG, QUEEN_VALUE_MG, VALUE_ZERO, VALUE_ZERO)
_EG_VALUES = (VALUE_ZERO, PAWN_VALUE_EG, KNIGHT_VALUE_EG, BISHOP_VALUE_EG,
              ROOK_VALUE_EG, QUEEN_VALUE_EG, VALUE_ZERO, VALUE_ZERO)

# PIECE_VALUE[phase][piece]
PIECE_VALUE = (_MG_VALUES * 2, _EG_VALUES * 2)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@dataclass(frozen=True)
class Score:
    """A pair of middlegame and endgame values."""

    mg: int = 0
    eg: int = 0

    def __add__(self, other):
        if not isinstance(other, Score):
            return NotImplemented
        return Score(self.mg + other.mg, self.eg + other.eg)

    def __sub__(self, other):
        if not isinstance(other, Score):
            return NotImplemented
        return Score(self.mg - other.mg, self.eg - other.eg)

    def __neg__(self):
        return Score(-self.mg, -self.eg)

    def __mul__(self, factor):
        if isinstance(factor, Score):
            raise TypeError("scores cannot be multiplied by each other")
        if not isinstance(factor, int):
            return NotImplemented
        return Score(self.mg * factor, self.eg * factor)

    __rmul__ = __mul__

    def divide(self, divisor: int) -> Score:
        """Divide both terms by an integer, rounding toward zero."""
        return Score(_trunc_div(self.mg, divisor), _trunc_div(self.eg, divisor))


SCORE_ZERO = Score()


def make_piece(color: int, piece_type: int) -> Piece:
    return Piece((int(color) << 3) + int(piece_type))


def type_of(piece: int) -> PieceType:
    return PieceType(int(piece) & 7)


def color_of(piece: int) -> Color:
    if piece == Piece.NO_PIECE:
        raise ValueError("an empty square has no colour")
    return Color(int(piece) >> 3)


def make_square(file: int, rank: int) -> int:
    return (rank << 3) + file


def file_of(square: int) -> int:
    return square & 7


def rank_of(square: int) -> int:
    return square >> 3


def is_ok(square: int) -> bool:
    return SQ_A1 <= square <= SQ_H8


def flip_rank(square: int) -> int:
    """Mirror a square vertically (a1 <-> a8)."""
    return square ^ SQ_A8


def flip_file(square: int) -> int:
    """Mirror a square horizontally (a1 <-> h1)."""
    return square ^ SQ_H1


def relative_square(color: int, square: int) -> int:
    return square ^ (int(color) * 56)


def relative_rank(color: int, rank: int) -> int:
    return rank ^ (int(color) * 7)


def relative_rank_of(color: int, square: int) -> int:
    return relative_rank(color, rank_of(square))


def pawn_push(color: int) -> int:
    return NORTH if color == Color.WHITE else SOUTH


def mate_in(ply: int) -> int:
    return VALUE_MATE - ply


def mated_in(ply: int) -> int:
    return -VALUE_MATE + ply


def make_move(from_square: int, to_square: int) -> int:
    return (from_square << 6) + to_square


def make(move_type: int, from_square: int, to_square: int,
         piece_type: int = PieceType.KNIGHT) -> int:
    """Build a move of the given type; piece_type is the promotion piece."""
    return (int(move_type) + ((int(piece_type) - PieceType.KNIGHT) << 12)
            + (from_square << 6) + to_square)


def from_sq(move: int) -> int:
    return (move >> 6) & 0x3F


def to_sq(move: int) -> int:
    return move & 0x3F


def from_to(move: int) -> int:
    return move & 0xFFF


def move_type(move: int) -> MoveType:
    return MoveType(move & (3 << 14))


def promotion_type(move: int) -> PieceType:
    return PieceType(((move >> 12) & 3) + PieceType.KNIGHT)


def reverse_move(move: int) -> int:
    return make_move(to_sq(move), from_sq(move))


def is_ok_move(move: int) -> bool:
    """False for the null and empty moves, whose origin equals destination."""
    return from_sq(move) != to_sq(move)


def make_key(seed: int) -> int:
    """Linear congruential step producing a 64-bit key."""
    return (seed * 6364136223846793005 + 1442695040888963407) & _KEY_MASK


def square_name(square: int) -> str:
    if not is_ok(square):
        raise ValueError(f"not a square on the board: {square!r}")
    return _FILE_CHARS[file_of(square)] + _RANK_CHARS[rank_of(square)]


def parse_square(name: str) -> int:
    if (len(name) != 2 or name[0] not in _FILE_CHARS
            or name[1] not in _RANK_CHARS):
        raise ValueError(f"not a square name: {name!r}")
    return make_square(_FILE_CHARS.index(name[0]), _RANK_CHARS.index(name[1]))