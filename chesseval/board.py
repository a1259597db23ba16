"""A minimal chess board holding piece placement and the side to move."""

from __future__ import annotations

from collections.abc import Mapping

from .bitboard import lsb, passed_pawn_span, popcount
from .types import (
    MG,
    PIECE_VALUE,
    RANK_2,
    RANK_7,
    Color,
    Piece,
    PieceType,
    is_ok,
    make_piece,
    make_square,
)

_REAL_TYPES = (PieceType.PAWN, PieceType.KNIGHT, PieceType.BISHOP,
               PieceType.ROOK, PieceType.QUEEN, PieceType.KING)
_NON_PAWN_TYPES = (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)
_MATERIAL_TYPES = (PieceType.PAWN,) + _NON_PAWN_TYPES

_LETTER_TYPES = {
    "p": PieceType.PAWN, "n": PieceType.KNIGHT, "b": PieceType.BISHOP,
    "r": PieceType.ROOK, "q": PieceType.QUEEN, "k": PieceType.KING,
}
_SIDES = {"w": Color.WHITE, "b": Color.BLACK}


def _expand(piece_types: tuple[int, ...]) -> tuple[PieceType, ...]:
    if not piece_types or PieceType.ALL_PIECES in piece_types:
        return _REAL_TYPES
    return tuple(PieceType(pt) for pt in piece_types)


class Board:
    """Pieces on squares plus the side to move."""

    def __init__(self, placement: Mapping[int, int] | None = None,
                 side_to_move: int = Color.WHITE) -> None:
        self.side_to_move = Color(side_to_move)
        self._squares: dict[int, Piece] = {}
        self._by_piece: dict[Piece, int] = {}
        for square, piece in (placement or {}).items():
            if not is_ok(square):
                raise ValueError(f"not a square on the board: {square!r}")
            piece = Piece(piece)
            if piece == Piece.NO_PIECE:
                continue
            self._squares[square] = piece
            self._by_piece[piece] = self._by_piece.get(piece, 0) | (1 << square)

    @classmethod
    def from_fen(cls, fen: str) -> Board:
        """Read the placement and side-to-move fields of a FEN string."""
        fields = fen.split()
        if not fields:
            raise ValueError("empty FEN string")
        rows = fields[0].split("/")
        if len(rows) != 8:
            raise ValueError(f"FEN placement needs 8 ranks: {fields[0]!r}")
        placement: dict[int, Piece] = {}
        for rank, row in zip(range(7, -1, -1), rows):
            file = 0
            for char in row:
                if char.isdigit():
                    file += int(char)
                elif char.lower() in _LETTER_TYPES:
                    if file > 7:
                        raise ValueError(f"too many squares in rank {row!r}")
                    color = Color.WHITE if char.isupper() else Color.BLACK
                    placement[make_square(file, rank)] = make_piece(color, _LETTER_TYPES[char.lower()])
                    file += 1
                else:
                    raise ValueError(f"unknown piece letter {char!r}")
            if file != 8:
                raise ValueError(f"rank does not have 8 squares: {row!r}")
        side = fields[1] if len(fields) > 1 else "w"
        if side not in _SIDES:
            raise ValueError(f"unknown side to move {side!r}")
        return cls(placement, _SIDES[side])

    @classmethod
    def from_code(cls, code: str, strong_side: int) -> Board:
        """Build a board with the material of an endgame code such as "KBPKB".

        The first king's pieces go to strong_side, the rest to the other side.
        """
        strong_side = Color(strong_side)
        weak_start = code.find("K", 1)
        if not code.startswith("K") or weak_start < 0:
            raise ValueError(f"not an endgame code: {code!r}")
        parts = (code[:weak_start], code[weak_start:])
        for part in parts:
            if len(part) > 8 or part.count("K") != 1 or any(
                    c.lower() not in _LETTER_TYPES or not c.isupper() for c in part):
                raise ValueError(f"not an endgame code: {code!r}")
        ranks = (RANK_2, RANK_7) if strong_side == Color.WHITE else (RANK_7, RANK_2)
        placement: dict[int, Piece] = {}
        for color, part, rank in zip((strong_side, strong_side.flip()), parts, ranks):
            for file, letter in enumerate(part):
                placement[make_square(file, rank)] = make_piece(color, _LETTER_TYPES[letter.lower()])
        return cls(placement)

    def pieces(self, color: int, *args: int) -> int:
        """Bitboard of the colour's pieces of the given types (all if none)."""
        return self._union((Color(color),), _expand(args))

    def pieces_of_type(self, *args: int) -> int:
        """Bitboard of both colours' pieces of the given types (all if none)."""
        return self._union(tuple(Color), _expand(args))

    def occupied(self) -> int:
        return self._union(tuple(Color), _REAL_TYPES)

    def _union(self, colors: tuple[Color, ...], types: tuple[PieceType, ...]) -> int:
        result = 0
        for color in colors:
            for pt in types:
                result |= self._by_piece.get(make_piece(color, pt), 0)
        return result

    def count(self, color: int, piece_type: int) -> int:
        return popcount(self.pieces(color, piece_type))

    def square(self, color: int, piece_type: int) -> int:
        """The square of the colour's only piece of this type."""
        bb = self.pieces(color, piece_type)
        if popcount(bb) != 1:
            raise ValueError(f"expected exactly one {PieceType(piece_type).name} "
                             f"for {Color(color).name}")
        return lsb(bb)

    def piece_on(self, square: int) -> Piece:
        if not is_ok(square):
            raise ValueError(f"not a square on the board: {square!r}")
        return self._squares.get(square, Piece.NO_PIECE)

    def non_pawn_material(self, color: int | None = None) -> int:
        """Middlegame value of knights, bishops, rooks and queens."""
        colors = tuple(Color) if color is None else (Color(color),)
        return sum(PIECE_VALUE[MG][pt] * self.count(c, pt)
                   for c in colors for pt in _NON_PAWN_TYPES)

    def pawn_passed(self, color: int, square: int) -> bool:
        """True if no enemy pawn can stop or capture a pawn on the square."""
        color = Color(color)
        return not self.pieces(color.flip(), PieceType.PAWN) & passed_pawn_span(color, square)

    def material_key(self) -> tuple[int, ...]:
        """Hashable key identifying the material configuration."""
        return tuple(self.count(c, pt) for c in Color for pt in _MATERIAL_TYPES)