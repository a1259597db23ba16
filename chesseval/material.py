"""Material configuration analysis: imbalance, game phase and endgame hooks."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
from functools import lru_cache

from .bitboard import more_than_one
from .board import Board
from .endgames import Endgame, EndgameCode, EndgameRegistry, default_registry
from .types import (
    BISHOP_VALUE_MG,
    ENDGAME_LIMIT,
    MIDGAME_LIMIT,
    PHASE_MIDGAME,
    QUEEN_VALUE_MG,
    ROOK_VALUE_MG,
    SCORE_ZERO,
    VALUE_ZERO,
    Color,
    PieceType,
    ScaleFactor,
    Score,
)

_S = Score
_Z = SCORE_ZERO

# Quadratic imbalance terms for pairs (our piece, another of our pieces).
# Index 0 stands for the bishop pair, then pawn, knight, bishop, rook, queen.
_QUADRATIC_OURS = (
    (_S(1419, 1455), _Z, _Z, _Z, _Z, _Z),
    (_S(101, 28), _S(37, 39), _Z, _Z, _Z, _Z),
    (_S(57, 64), _S(249, 187), _S(-49, -62), _Z, _Z, _Z),
    (_S(0, 0), _S(118, 137), _S(10, 27), _S(0, 0), _Z, _Z),
    (_S(-63, -68), _S(-5, 3), _S(100, 81), _S(132, 118), _S(-246, -244), _Z),
    (_S(-210, -211), _S(37, 14), _S(147, 141), _S(161, 105), _S(-158, -174), _S(-9, -31)),
)

# Quadratic imbalance terms for pairs (our piece, their piece).
_QUADRATIC_THEIRS = (
    (_Z, _Z, _Z, _Z, _Z, _Z),
    (_S(33, 30), _Z, _Z, _Z, _Z, _Z),
    (_S(46, 18), _S(106, 84), _Z, _Z, _Z, _Z),
    (_S(75, 35), _S(59, 44), _S(60, 15), _Z, _Z, _Z),
    (_S(26, 35), _S(6, 22), _S(38, 39), _S(-12, -2), _Z, _Z),
    (_S(97, 93), _S(100, 163), _S(-58, -91), _S(112, 192), _S(276, 225), _Z),
)

_P, _N, _B, _R, _Q = (PieceType.PAWN, PieceType.KNIGHT, PieceType.BISHOP,
                      PieceType.ROOK, PieceType.QUEEN)


@dataclass
class MaterialEntry:
    """What is known about one material configuration."""

    key: Hashable
    imbalance: Score = SCORE_ZERO
    game_phase: int = PHASE_MIDGAME
    evaluation_function: Endgame | None = None
    scaling_functions: list[Endgame | None] = field(default_factory=lambda: [None, None])
    factor: list[int] = field(
        default_factory=lambda: [int(ScaleFactor.NORMAL), int(ScaleFactor.NORMAL)])

    def specialized_eval_exists(self) -> bool:
        return self.evaluation_function is not None

    def evaluate(self, board: Board) -> int:
        """Run the specialised evaluation function on the board."""
        if self.evaluation_function is None:
            raise ValueError("no specialised evaluation for this material")
        return self.evaluation_function(board)

    def scale_factor(self, board: Board, color: int) -> int:
        """Scale factor for the colour, from its scaling function or the default."""
        color = Color(color)
        function = self.scaling_functions[color]
        sf = function(board) if function is not None else ScaleFactor.NONE
        return int(sf) if sf != ScaleFactor.NONE else self.factor[color]


def _is_kxk(board: Board, us: Color) -> bool:
    return (not more_than_one(board.pieces(us.flip()))
            and board.non_pawn_material(us) >= ROOK_VALUE_MG)


def _is_kbpsk(board: Board, us: Color) -> bool:
    return (board.non_pawn_material(us) == BISHOP_VALUE_MG
            and board.count(us, _P) >= 1)


def _is_kqkrps(board: Board, us: Color) -> bool:
    them = us.flip()
    return (not board.count(us, _P)
            and board.non_pawn_material(us) == QUEEN_VALUE_MG
            and board.count(them, _R) == 1
            and board.count(them, _P) >= 1)


def imbalance(piece_count: Sequence[Sequence[int]], us: int) -> Score:
    """Second-degree polynomial material imbalance for one side.

    piece_count[color] holds the bishop-pair flag followed by the counts of
    pawns, knights, bishops, rooks and queens.
    """
    us = Color(us)
    ours = piece_count[us]
    theirs = piece_count[us.flip()]
    bonus = SCORE_ZERO
    for pt1, count1 in enumerate(ours):
        if not count1:
            continue
        v = _QUADRATIC_OURS[pt1][pt1] * count1
        for pt2 in range(pt1):
            v = (v + _QUADRATIC_OURS[pt1][pt2] * ours[pt2]
                 + _QUADRATIC_THEIRS[pt1][pt2] * theirs[pt2])
        bonus = bonus + v * count1
    return bonus


@lru_cache(maxsize=1)
def _shared_registry() -> EndgameRegistry:
    return default_registry()


def probe(board: Board, registry: EndgameRegistry | None = None) -> MaterialEntry:
    """Compute the material entry for the board's material configuration."""
    if registry is None:
        registry = _shared_registry()

    key = board.material_key()
    entry = MaterialEntry(key)

    npm_w = board.non_pawn_material(Color.WHITE)
    npm_b = board.non_pawn_material(Color.BLACK)
    npm = min(max(npm_w + npm_b, ENDGAME_LIMIT), MIDGAME_LIMIT)
    entry.game_phase = ((npm - ENDGAME_LIMIT) * PHASE_MIDGAME) // (MIDGAME_LIMIT - ENDGAME_LIMIT)

    # A fixed-configuration evaluation first, then the generic KX vs K one
    entry.evaluation_function = registry.probe_value(key)
    if entry.evaluation_function is not None:
        return entry

    for color in Color:
        if _is_kxk(board, color):
            entry.evaluation_function = Endgame(EndgameCode.KXK, color)
            return entry

    sf = registry.probe_scale(key)
    if sf is not None:
        entry.scaling_functions[sf.strong_side] = sf
        return entry

    # Generic scaling functions that cover more than one material distribution
    for color in Color:
        if _is_kbpsk(board, color):
            entry.scaling_functions[color] = Endgame(EndgameCode.KBPsK, color)
        elif _is_kqkrps(board, color):
            entry.scaling_functions[color] = Endgame(EndgameCode.KQKRPs, color)

    if npm_w + npm_b == VALUE_ZERO and board.pieces_of_type(_P):
        white_pawns = board.count(Color.WHITE, _P)
        black_pawns = board.count(Color.BLACK, _P)
        if not black_pawns:
            entry.scaling_functions[Color.WHITE] = Endgame(EndgameCode.KPsK, Color.WHITE)
        elif not white_pawns:
            entry.scaling_functions[Color.BLACK] = Endgame(EndgameCode.KPsK, Color.BLACK)
        elif white_pawns == 1 and black_pawns == 1:
            entry.scaling_functions[Color.WHITE] = Endgame(EndgameCode.KPKP, Color.WHITE)
            entry.scaling_functions[Color.BLACK] = Endgame(EndgameCode.KPKP, Color.BLACK)

    # Without pawns a small material edge is hard to convert
    if not board.count(Color.WHITE, _P) and npm_w - npm_b <= BISHOP_VALUE_MG:
        entry.factor[Color.WHITE] = (int(ScaleFactor.DRAW) if npm_w < ROOK_VALUE_MG
                                     else 4 if npm_b <= BISHOP_VALUE_MG else 14)
    if not board.count(Color.BLACK, _P) and npm_b - npm_w <= BISHOP_VALUE_MG:
        entry.factor[Color.BLACK] = (int(ScaleFactor.DRAW) if npm_b < ROOK_VALUE_MG
                                     else 4 if npm_w <= BISHOP_VALUE_MG else 14)

    piece_count = tuple(
        (int(board.count(c, _B) > 1), board.count(c, _P), board.count(c, _N),
         board.count(c, _B), board.count(c, _R), board.count(c, _Q))
        for c in Color
    )
    entry.imbalance = (imbalance(piece_count, Color.WHITE)
                       - imbalance(piece_count, Color.BLACK)).divide(16)
    return entry


class MaterialTable:
    """Cache of material entries keyed by material configuration."""

    def __init__(self, registry: EndgameRegistry | None = None) -> None:
        self._registry = registry
        self._entries: dict[Hashable, MaterialEntry] = {}

    def probe(self, board: Board) -> MaterialEntry:
        """Return the cached entry for the board's material, computing it once."""
        key = board.material_key()
        entry = self._entries.get(key)
        if entry is None:
            entry = probe(board, self._registry)
            self._entries[key] = entry
        return entry