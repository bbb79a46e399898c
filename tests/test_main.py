from __future__ import annotations

import logging

from tetris_brain.__main__ import main, parse_args


def test_parse_args_defaults() -> None:
    args = parse_args([])
    assert args.width == 10
    assert args.height == 20
    assert args.brain == "Simple Brain"


def test_main_prints_board_and_logs_summary(capsys, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="tetris_brain.__main__"):
        main(["--pieces", "5", "--seed", "3", "--width", "6", "--height", "12"])
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 12 + 4
    assert all(len(line) == 6 for line in out)
    assert "rows cleared" in caplog.text
