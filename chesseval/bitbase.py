"""KP vs K bitbase: exact win/draw knowledge built by retrograde analysis."""

from __future__ import annotations

from enum import IntEnum
from functools import lru_cache

from .bitboard import distance, iter_squares, pawn_attacks_from, pseudo_attacks
from .types import (
    FILE_D,
    NORTH,
    RANK_2,
    RANK_7,
    Color,
    PieceType,
    file_of,
    is_ok,
    make_square,
    rank_of,
)

# side to move * pawn squares (files a-d, ranks 2-7) * white king * black king
MAX_INDEX = 2 * 24 * 64 * 64

_STM_BIT = 0x1000
_BLACK_KING_BITS = 0x0FC0
_ONE_RANK = 1 << 15
_RANK_2_STEPS = RANK_7 - RANK_2


class Result(IntEnum):
    INVALID = 0
    UNKNOWN = 1
    DRAW = 2
    WIN = 4


def index(stm: int, bksq: int, wksq: int, psq: int) -> int:
    """Pack a KPK position into its bitbase index.

    Bits 0-5 hold the white king, 6-11 the black king, 12 the side to move,
    13-14 the pawn file and 15-17 the distance of the pawn from the 7th rank.
    """
    return (wksq | (bksq << 6) | (int(stm) << 12) | (file_of(psq) << 13)
            | ((RANK_7 - rank_of(psq)) << 15))


def _initial_result(idx: int, king: tuple[int, ...], white_pawn: tuple[int, ...]) -> int:
    wk = idx & 0x3F
    bk = (idx >> 6) & 0x3F
    white_to_move = not (idx >> 12) & 1
    psq = make_square((idx >> 13) & 0x3, RANK_7 - ((idx >> 15) & 0x7))

    # Two pieces on one square, or a king that can be captured
    if (distance(wk, bk) <= 1 or wk == psq or bk == psq
            or (white_to_move and white_pawn[psq] >> bk & 1)):
        return Result.INVALID

    # The pawn promotes without being captured
    push = psq + NORTH
    if (white_to_move and rank_of(psq) == RANK_7 and wk != push
            and (distance(bk, push) > 1 or distance(wk, push) == 1)):
        return Result.WIN

    # Stalemate, or the black king takes the pawn
    if not white_to_move and (
            not (king[bk] & ~(king[wk] | white_pawn[psq]))
            or king[bk] & ~king[wk] & (1 << psq)):
        return Result.DRAW

    return Result.UNKNOWN


@lru_cache(maxsize=1)
def _table() -> bytes:
    king = tuple(pseudo_attacks(PieceType.KING, s) for s in range(64))
    white_pawn = tuple(pawn_attacks_from(Color.WHITE, s) for s in range(64))
    white_moves = tuple(tuple(iter_squares(b)) for b in king)
    black_moves = tuple(tuple(to << 6 for to in moves) for moves in white_moves)

    db = bytearray(_initial_result(idx, king, white_pawn) for idx in range(MAX_INDEX))
    win, draw, unknown_value = Result.WIN, Result.DRAW, Result.UNKNOWN

    unknown = [idx for idx, result in enumerate(db) if result == unknown_value]
    while unknown:
        remaining = []
        for idx in unknown:
            r = 0
            if idx & _STM_BIT:
                base = idx & ~(_BLACK_KING_BITS | _STM_BIT)
                for to in black_moves[(idx >> 6) & 0x3F]:
                    r |= db[base | to]
                result = draw if r & draw else unknown_value if r & unknown_value else win
            else:
                wk = idx & 0x3F
                base = (idx & ~0x3F) | _STM_BIT
                for to in white_moves[wk]:
                    r |= db[base | to]
                steps = idx >> 15
                if steps:
                    r |= db[(idx | _STM_BIT) - _ONE_RANK]
                if steps == _RANK_2_STEPS:
                    up = make_square((idx >> 13) & 0x3, RANK_2) + NORTH
                    if up != wk and up != (idx >> 6) & 0x3F:
                        r |= db[(idx | _STM_BIT) - 2 * _ONE_RANK]
                result = win if r & win else unknown_value if r & unknown_value else draw
            if result == unknown_value:
                remaining.append(idx)
            else:
                db[idx] = result
        if len(remaining) == len(unknown):
            break
        unknown = remaining

    return bytes(db)


def probe(wksq: int, wpsq: int, bksq: int, stm: int) -> bool:
    """True if white wins the KPK position; the pawn must be on files a to d."""
    for square in (wksq, wpsq, bksq):
        if not is_ok(square):
            raise ValueError(f"not a square on the board: {square!r}")
    if file_of(wpsq) > FILE_D:
        raise ValueError("the pawn must stand on files a to d")
    if not RANK_2 <= rank_of(wpsq) <= RANK_7:
        raise ValueError("the pawn must stand on ranks 2 to 7")
    return _table()[index(stm, bksq, wksq, wpsq)] == Result.WIN