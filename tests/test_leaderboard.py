"""Tests for the leaderboard and its JSON storage."""

import json

import pytest

from skifree.sim.leaderboard import HighScore, Leaderboard
from skifree.simulator.scores import load_leaderboard, save_leaderboard


def test_empty_board_takes_any_positive_score():
    board = Leaderboard(size=3)
    assert board.qualifies(1)
    assert not board.qualifies(0)
    assert board.best == 0


def test_entries_sorted_and_capped():
    board = Leaderboard(size=3)
    for name, score in [("A", 100), ("B", 300), ("C", 200), ("D", 50)]:
        board.submit(name, score)

    assert [e.score for e in board.entries] == [300, 200, 100]
    assert board.best == 300


def test_full_board_needs_to_beat_last_place():
    board = Leaderboard(size=2, entries=[HighScore("A", 500), HighScore("B", 400)])

    assert not board.qualifies(400)
    assert not board.submit("C", 400)
    assert board.qualifies(401)
    assert board.submit("C", 401)
    assert [e.name for e in board.entries] == ["A", "C"]


def test_ties_keep_the_earlier_entry_first():
    board = Leaderboard(size=5)
    board.submit("FIRST", 100)
    board.submit("SECOND", 100)
    assert [e.name for e in board.entries] == ["FIRST", "SECOND"]


def test_names_are_cleaned():
    board = Leaderboard()
    board.submit("  AVERYLONGSKIERNAME  ", 10)
    board.submit("   ", 5)
    assert [e.name for e in board.entries] == ["AVERYLONGSKI", "ANON"]


def test_size_must_be_positive():
    with pytest.raises(ValueError):
        Leaderboard(size=0)


def test_malformed_rows_are_skipped():
    board = Leaderboard.from_dicts([
        {"name": "OK", "score": 10},
        {"name": "NOSCORE"},
        {"name": "BAD", "score": "lots"},
    ])
    assert board.to_dicts() == [{"name": "OK", "score": 10}]


def test_saved_board_loads_back(tmp_path):
    path = tmp_path / "scores" / "board.json"
    board = Leaderboard(size=5)
    board.submit("ZED", 900)
    board.submit("AMY", 1200)

    assert save_leaderboard(board, path)
    loaded = load_leaderboard(path, size=5)

    assert loaded.entries == board.entries
    assert json.loads(path.read_text())[0] == {"name": "AMY", "score": 1200}


def test_missing_or_broken_file_gives_empty_board(tmp_path):
    assert load_leaderboard(tmp_path / "nope.json").entries == []

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert load_leaderboard(broken).entries == []

    wrong_shape = tmp_path / "dict.json"
    wrong_shape.write_text('{"name": "A"}')
    assert load_leaderboard(wrong_shape).entries == []
