"""Endgame codes and the registry mapping material keys to endgame functions."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import IntEnum

from . import evaluators, scaling
from .board import Board
from .types import Color


class EndgameCode(IntEnum):
    EVALUATION_FUNCTIONS = 0
    KNNK = 1
    KNNKP = 2
    KXK = 3
    KBNK = 4
    KPK = 5
    KRKP = 6
    KRKB = 7
    KRKN = 8
    KQKP = 9
    KQKR = 10

    SCALING_FUNCTIONS = 11
    KBPsK = 12
    KQKRPs = 13
    KRPKR = 14
    KRPKB = 15
    KRPPKRP = 16
    KPsK = 17
    KBPKB = 18
    KBPPKB = 19
    KBPKN = 20
    KPKP = 21

    def is_scaling(self) -> bool:
        """True for codes that return a scale factor rather than a value."""
        return self > EndgameCode.SCALING_FUNCTIONS


_FUNCTIONS: dict[EndgameCode, Callable[[Board, Color], int]] = {
    EndgameCode.KNNK: evaluators.evaluate_knnk,
    EndgameCode.KNNKP: evaluators.evaluate_knnkp,
    EndgameCode.KXK: evaluators.evaluate_kxk,
    EndgameCode.KBNK: evaluators.evaluate_kbnk,
    EndgameCode.KPK: evaluators.evaluate_kpk,
    EndgameCode.KRKP: evaluators.evaluate_krkp,
    EndgameCode.KRKB: evaluators.evaluate_krkb,
    EndgameCode.KRKN: evaluators.evaluate_krkn,
    EndgameCode.KQKP: evaluators.evaluate_kqkp,
    EndgameCode.KQKR: evaluators.evaluate_kqkr,
    EndgameCode.KBPsK: scaling.scale_kbpsk,
    EndgameCode.KQKRPs: scaling.scale_kqkrps,
    EndgameCode.KRPKR: scaling.scale_krpkr,
    EndgameCode.KRPKB: scaling.scale_krpkb,
    EndgameCode.KRPPKRP: scaling.scale_krppkrp,
    EndgameCode.KPsK: scaling.scale_kpsk,
    EndgameCode.KBPKB: scaling.scale_kbpkb,
    EndgameCode.KBPPKB: scaling.scale_kbppkb,
    EndgameCode.KBPKN: scaling.scale_kbpkn,
    EndgameCode.KPKP: scaling.scale_kpkp,
}


@dataclass(frozen=True)
class Endgame:
    """An endgame function bound to the side that holds the advantage."""

    code: EndgameCode
    strong_side: Color

    def __post_init__(self) -> None:
        code = EndgameCode(self.code)
        if code not in _FUNCTIONS:
            raise ValueError(f"{code.name} is not an endgame function")
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "strong_side", Color(self.strong_side))

    @property
    def weak_side(self) -> Color:
        return self.strong_side.flip()

    def __call__(self, board: Board) -> int:
        return _FUNCTIONS[self.code](board, self.strong_side)


class EndgameRegistry:
    """Endgame functions indexed by the material key they apply to."""

    def __init__(self) -> None:
        self._values: dict[Hashable, Endgame] = {}
        self._scales: dict[Hashable, Endgame] = {}

    def add(self, code: EndgameCode, name: str) -> None:
        """Register code for the material of name, for both colours."""
        code = EndgameCode(code)
        table = self._scales if code.is_scaling() else self._values
        for color in Color:
            endgame = Endgame(code, color)
            table[Board.from_code(name, color).material_key()] = endgame

    def probe_value(self, key: Hashable) -> Endgame | None:
        return self._values.get(key)

    def probe_scale(self, key: Hashable) -> Endgame | None:
        return self._scales.get(key)


def default_registry() -> EndgameRegistry:
    """A registry holding the standard set of specialised endgames."""
    registry = EndgameRegistry()
    for code, name in (
        (EndgameCode.KPK, "KPK"),
        (EndgameCode.KNNK, "KNNK"),
        (EndgameCode.KBNK, "KBNK"),
        (EndgameCode.KRKP, "KRKP"),
        (EndgameCode.KRKB, "KRKB"),
        (EndgameCode.KRKN, "KRKN"),
        (EndgameCode.KQKP, "KQKP"),
        (EndgameCode.KQKR, "KQKR"),
        (EndgameCode.KNNKP, "KNNKP"),
        (EndgameCode.KRPKR, "KRPKR"),
        (EndgameCode.KRPKB, "KRPKB"),
        (EndgameCode.KBPKB, "KBPKB"),
        (EndgameCode.KBPKN, "KBPKN"),
        (EndgameCode.KBPPKB, "KBPPKB"),
        (EndgameCode.KRPPKRP, "KRPPKRP"),
    ):
        registry.add(code, name)
    return registry