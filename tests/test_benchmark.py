import pytest

from chesseval.benchmark import DEFAULT_POSITIONS, setup_bench

START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
NNUE_OFF = "setoption name Use NNUE value false"
NNUE_ON = "setoption name Use NNUE value true"


def test_defaults():
    cmds = setup_bench(START)
    assert cmds[0] == "setoption name Threads value 1"
    assert cmds[1] == "setoption name Hash value 16"
    assert cmds[2] == "ucinewgame"
    assert cmds[-1] == NNUE_ON
    positions = [c for c in cmds if c.startswith("position fen ")]
    fens = [f for f in DEFAULT_POSITIONS if "setoption" not in f]
    assert positions == [f"position fen {f}" for f in fens]
    assert cmds.count("go depth 13") == len(fens)


def test_default_setoption_lines_kept_in_order():
    cmds = setup_bench(START, "")
    options = [f for f in DEFAULT_POSITIONS if "setoption" in f]
    kept = [c for c in cmds if c in options]
    assert kept == options


def test_mixed_alternates_evaluation():
    cmds = setup_bench(START)
    toggles = [cmds[i - 1] for i, c in enumerate(cmds) if c.startswith("position fen ")]
    assert toggles[0::2] == [NNUE_OFF] * len(toggles[0::2])
    assert toggles[1::2] == [NNUE_ON] * len(toggles[1::2])


def test_current_position():
    fen = "8/8/8/8/8/6k1/6p1/6K1 w - -"
    cmds = setup_bench(fen, ["64", "4", "5000", "current", "movetime"])
    assert cmds == [
        "setoption name Threads value 4",
        "setoption name Hash value 64",
        "ucinewgame",
        NNUE_OFF,
        f"position fen {fen}",
        "go movetime 5000",
        NNUE_ON,
    ]


def test_eval_limit_type():
    cmds = setup_bench(START, "16 1 1 current eval NNUE")
    assert cmds[3:] == [NNUE_ON, f"position fen {START}", "eval", NNUE_ON]


def test_file_positions_classical(tmp_path):
    second = "7k/7P/6K1/8/3B4/8/8/8 b - -"
    option = "setoption name UCI_Chess960 value true"
    path = tmp_path / "fens.txt"
    path.write_text(f"{START}\n\n{option}\n{second}\n", encoding="utf-8")
    cmds = setup_bench(START, ["32", "2", "7", str(path), "nodes", "classical"])
    assert cmds == [
        "setoption name Threads value 2",
        "setoption name Hash value 32",
        "ucinewgame",
        NNUE_OFF,
        f"position fen {START}",
        "go nodes 7",
        option,
        NNUE_OFF,
        f"position fen {second}",
        "go nodes 7",
        NNUE_ON,
    ]


def test_unknown_eval_type_adds_no_toggles():
    cmds = setup_bench(START, "16 1 5 current perft other")
    assert cmds[3:] == [f"position fen {START}", "go perft 5", NNUE_ON]


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        setup_bench(START, [str(1), str(1), str(1), str(tmp_path / "absent.fen")])