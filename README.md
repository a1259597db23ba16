# chesseval

Pure-Python building blocks for evaluating chess endgames and material
configurations. The package uses only the standard library.

## Modules

- `chesseval.types`: colours (`Color`), piece types (`PieceType`), pieces
  (`Piece`), move types, castling rights, `ScaleFactor`, `Bound`, the value
  constants, and `Score`, which is a frozen pair of a middlegame value and an
  endgame value. Scores can be added, subtracted, negated and multiplied by an
  integer. `Score.divide` divides both terms and rounds toward zero. The module
  also has square and move helpers: `make_square`, `file_of`, `rank_of`,
  `relative_rank`, `relative_rank_of`, `flip_file`, `flip_rank`, `make_move`,
  `make`, `from_sq`, `to_sq`, `promotion_type`, `make_key`, and
  `square_name` / `parse_square`.
- `chesseval.bitboard`: bitboards are plain integers below 2**64. The module
  has file, rank and flank constants, `shift`, `pawn_attacks_bb`,
  `pawn_attacks_from`, `line_bb`, `between_bb`, `forward_file_bb`,
  `passed_pawn_span` and `distance`. It computes attacks with
  `sliding_attack`, `pseudo_attacks` and `attacks_bb` (knight, bishop, rook,
  queen, king). It also has `popcount`, `lsb`, `msb`, `iter_squares`,
  `frontmost_sq`, and `pretty`, which draws a board in ASCII.
- `chesseval.bitbase`: a bitbase for king and pawn against king, built by
  retrograde analysis the first time it is probed. Building it takes a
  noticeable moment. `probe(wksq, wpsq, bksq, stm)` returns `True` when
  white wins. It raises `ValueError` unless the pawn stands on files a to d
  and ranks 2 to 7.
- `chesseval.board`: `Board` holds piece placement and the side to move.
  Build one with `Board.from_fen`, which reads only the placement field and
  the side-to-move field, or with `Board.from_code`, which takes a material
  code such as `"KRPKR"`. A board provides `pieces`, `pieces_of_type`,
  `occupied`, `count`, `square`, `piece_on`, `non_pawn_material`,
  `pawn_passed` and `material_key`.
- `chesseval.evaluators`: evaluation functions for particular endgames, each
  called as `f(board, strong_side)`. They are `evaluate_kxk`,
  `evaluate_kbnk`, `evaluate_kpk`, `evaluate_krkp`, `evaluate_krkb`,
  `evaluate_krkn`, `evaluate_kqkp`, `evaluate_kqkr`, `evaluate_knnkp` and
  `evaluate_knnk`. Each returns a value from the side to move's point of
  view. Each raises `ValueError` when the material does not match the
  endgame.
- `chesseval.scaling`: scaling functions that return a scale factor. They are
  `scale_kbpsk`, `scale_kqkrps`, `scale_krpkr`, `scale_krpkb`,
  `scale_krppkrp`, `scale_kpsk`, `scale_kbpkb`, `scale_kbppkb`,
  `scale_kbpkn` and `scale_kpkp`. A result of `ScaleFactor.NONE` means no
  specific scaling applies.
- `chesseval.endgames`: `EndgameCode`, `Endgame` and `EndgameRegistry`.
  `Endgame` binds a code to the strong side and is callable on a board.
  `EndgameRegistry` is keyed by material key. `default_registry()` returns a
  registry with the standard specialised endgames registered for both
  colours.
- `chesseval.material`: `probe(board, registry=None)` returns a
  `MaterialEntry`. The entry holds the imbalance `Score`, the game phase
  (0 to 128), any specialised evaluation function, the scaling functions and
  the fallback scale factors. `MaterialTable` caches entries by material key.
  `imbalance(piece_count, us)` exposes the quadratic imbalance polynomial on
  its own.
- `chesseval.benchmark`: `setup_bench(current_fen, args)` returns the list
  of engine command strings for a benchmark run. The optional arguments are,
  in order: hash size, threads, limit, position source (`default`, `current`
  or a path to a file of FENs), limit type and evaluation type. It raises
  `OSError` if the file cannot be opened.

## Examples

Probe the KPK bitbase:

```python
from chesseval.bitbase import probe
from chesseval.types import Color, parse_square

wins = probe(parse_square("e1"), parse_square("d2"), parse_square("e8"), Color.WHITE)
```

Evaluate a position with a specialised endgame function:

```python
from chesseval.board import Board
from chesseval.endgames import default_registry
from chesseval.material import probe

board = Board.from_fen("8/8/8/8/8/2k5/8/KQ6 w - - 0 1")
entry = probe(board, default_registry())
if entry.specialized_eval_exists():
    print(entry.evaluate(board))
```

Draw a bitboard:

```python
from chesseval.bitboard import attacks_bb, pretty
from chesseval.types import PieceType, parse_square

print(pretty(attacks_bb(PieceType.ROOK, parse_square("d4"), 0)))
```

Build benchmark commands with the defaults (hash 16, 1 thread, depth 13,
built-in positions):

```python
from chesseval.benchmark import setup_bench

commands = setup_bench("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", [])
```

## Conventions

Squares are integers from 0 (a1) to 63 (h8). Values are in internal units,
where a pawn in the endgame is worth 208.

## What this package does not do

The package has no move generator and no search. It has no engine command
loop and no command-line program. It does not give a full evaluation of
arbitrary middlegame positions. `setup_bench` only produces the command
strings and does not run them. `Board` does not track castling rights,
en passant or move clocks.