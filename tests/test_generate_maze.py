import pytest

from generate_maze import main, parse_args
from grid_text import read_map


def test_prints_maze_and_summary(capsys):
    main(["--width", "21", "--height", "15", "--seed", "3", "--no-rewall"])
    out = capsys.readouterr().out.splitlines()
    maze, summary = out[:15], out[15]
    assert all(len(line) == 21 for line in maze)
    assert maze[0] == "#" * 21
    text = "".join(maze)
    # exit is stamped last, so it always shows
    assert text.count("E") == 1
    assert text.count("C") == 1
    assert text.count("S") <= 1
    assert summary.startswith("21x15 | start=(1, 13)")
    assert "candy->exit=" in summary


def test_even_size_rounded_up(capsys):
    main(["--width", "20", "--height", "10", "--seed", "1"])
    summary = capsys.readouterr().out.splitlines()[-1]
    assert summary.startswith("21x11 |")


def test_seed_is_reproducible(capsys):
    main(["--seed", "12"])
    first = capsys.readouterr().out
    main(["--seed", "12"])
    assert capsys.readouterr().out == first


def test_writes_map_file(tmp_path, capsys):
    out = tmp_path / "levels" / "maze.map"
    main(["--seed", "4", "--strict", "--out", str(out)])
    printed = capsys.readouterr().out
    assert f"Wrote {out}" in printed
    grid, markers = read_map(out)
    assert (grid.width, grid.height) == (41, 29)
    assert {"C", "E"} <= set(markers)


def test_rejects_tiny_sizes():
    with pytest.raises(SystemExit):
        parse_args(["--width", "2"])
