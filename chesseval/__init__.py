"""Chess types, bitboards, a KPK bitbase, specialised endgame functions and material imbalance."""

__version__ = "0.1.0"

__all__ = [
    "benchmark",
    "bitbase",
    "bitboard",
    "board",
    "endgames",
    "evaluators",
    "material",
    "scaling",
    "types",
]