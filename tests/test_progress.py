from events import (
    COLLECTIBLE_ACQUIRED,
    MAZE_FINISHED,
    MOVE_REJECTED_EXIT_LOCKED,
    EventBus,
)
from models import KeyCells
from progress import ProgressState, ProgressTracker

KEYS = KeyCells(start=(1, 1), exit=(7, 7), candy=(7, 1))


def recording_tracker():
    bus = EventBus()
    seen = []
    for name in (COLLECTIBLE_ACQUIRED, MAZE_FINISHED, MOVE_REJECTED_EXIT_LOCKED):
        bus.subscribe(name, lambda cell, _name=name: seen.append((_name, cell)))
    return ProgressTracker(bus), seen


def test_exit_locked_without_candy():
    tracker, seen = recording_tracker()
    assert tracker.enter_cell((7, 7), KEYS) is ProgressState.AWAITING_CANDY
    assert seen == [(MOVE_REJECTED_EXIT_LOCKED, (7, 7))]
    assert not tracker.has_candy


def test_candy_collected_once():
    tracker, seen = recording_tracker()
    tracker.enter_cell((7, 1), KEYS)
    tracker.enter_cell((6, 1), KEYS)
    tracker.enter_cell((7, 1), KEYS)
    assert tracker.state is ProgressState.CANDY_COLLECTED
    assert seen == [(COLLECTIBLE_ACQUIRED, (7, 1))]


def test_exit_after_candy_finishes():
    tracker, seen = recording_tracker()
    tracker.enter_cell((7, 1), KEYS)
    assert tracker.enter_cell((7, 7), KEYS) is ProgressState.FINISHED
    assert tracker.finished
    assert seen[-1] == (MAZE_FINISHED, (7, 7))


def test_finished_is_terminal():
    tracker, seen = recording_tracker()
    tracker.enter_cell((7, 1), KEYS)
    tracker.enter_cell((7, 7), KEYS)
    count = len(seen)
    tracker.enter_cell((7, 1), KEYS)
    tracker.enter_cell((7, 7), KEYS)
    assert tracker.state is ProgressState.FINISHED
    assert len(seen) == count


def test_ordinary_cells_do_nothing():
    tracker, seen = recording_tracker()
    tracker.enter_cell((3, 3), KEYS)
    assert tracker.state is ProgressState.AWAITING_CANDY
    assert seen == []


def test_reset_returns_to_awaiting():
    tracker, _ = recording_tracker()
    tracker.enter_cell((7, 1), KEYS)
    tracker.enter_cell((7, 7), KEYS)
    tracker.reset()
    assert tracker.state is ProgressState.AWAITING_CANDY
    assert not tracker.finished
