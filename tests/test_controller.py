from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game import Board, DropResult, PieceController, PieceRandomizer, PieceType, create_piece

from helpers import FixedChoice, SequenceChoice


def _controller(letter: str = "I", board: Board | None = None) -> PieceController:
    return PieceController(board or Board(), PieceRandomizer(FixedChoice(letter)))


@pytest.mark.parametrize("kind", list(PieceType))
def test_spawn_centers_piece_on_top_row(kind):
    controller = _controller(kind.name)
    assert controller.spawn()
    width = create_piece(kind).shape[1]
    assert controller.x == 10 // 2 - width // 2
    assert controller.y == 0
    assert np.array_equal(controller.shape, create_piece(kind))


def test_spawn_promotes_preview_piece():
    controller = PieceController(Board(), PieceRandomizer(SequenceChoice("OTL")))
    controller.spawn()
    assert np.array_equal(controller.shape, create_piece("O"))
    assert controller.next_type is PieceType.T
    controller.spawn()
    assert np.array_equal(controller.shape, create_piece("T"))
    assert controller.next_type is PieceType.L


def test_spawn_into_filled_cells_reports_blocked():
    board = Board()
    board.grid[0:2, :] = 1
    controller = _controller("O", board)
    assert not controller.spawn()


def test_move_commits_when_free():
    controller = _controller("O")
    controller.spawn()
    assert controller.move(-1)
    assert controller.x == 3
    assert controller.move(1)
    assert controller.x == 4


def test_move_into_wall_is_a_no_op():
    controller = _controller("O")
    controller.spawn()
    for _ in range(20):
        controller.move(-1)
    assert controller.x == 0
    assert not controller.move(-1)
    assert controller.x == 0


def test_move_into_settled_cells_is_a_no_op():
    board = Board()
    board.grid[0, 6] = 2
    controller = _controller("O", board)
    controller.spawn()
    assert not controller.move(1)
    assert controller.x == 4


def test_soft_drop_falls_then_locks_on_floor():
    controller = _controller("I")
    controller.spawn()
    for _ in range(16):
        assert controller.soft_drop() is DropResult.FALLING
    assert controller.y == 16
    assert controller.soft_drop() is DropResult.LOCKED
    assert controller.y == 16


def test_hard_drop_reports_rows_travelled():
    controller = _controller("O")
    controller.spawn()
    assert controller.hard_drop() == 18
    assert controller.y == 18
    controller.lock()
    assert controller.board.grid[18:20, 4:6].tolist() == [[2, 2], [2, 2]]


def test_rotate_in_open_space_keeps_column():
    controller = _controller("T")
    controller.spawn()
    controller.y = 5
    assert controller.rotate(1)
    assert controller.x == 4
    assert np.array_equal(controller.shape, np.array([[0, 1, 0], [1, 1, 0], [0, 1, 0]]))


def test_rotation_blocked_at_wall_kicks_right_by_one():
    controller = _controller("I")
    controller.spawn()
    controller.x = -1  # vertical bar sits in column 0
    controller.y = 5
    assert not controller.board.collides(controller.shape, -1, 5)
    assert controller.rotate(1)
    assert controller.x == 0
    assert controller.shape[1].tolist() == [5, 5, 5, 5]


def test_rotation_against_right_wall_kicks_left():
    controller = _controller("I")
    controller.spawn()
    controller.x = 7  # vertical bar sits in column 8
    controller.y = 5
    assert controller.rotate(1)
    # Shifts of 0 and +1 still overlap the wall, -1 from the start fits
    assert controller.x == 6
    assert not controller.board.collides(controller.shape, controller.x, controller.y)


def test_bar_flush_right_rotates_on_last_allowed_shift():
    controller = _controller("I")
    controller.spawn()
    controller.x = 8  # vertical bar sits in column 9
    controller.y = 5
    # Shifts +1, -2, +3 from the start all overlap the wall, -4 lands at x=6
    assert controller.rotate(1)
    assert controller.x == 6
    assert controller.shape[1].tolist() == [5, 5, 5, 5]


def test_kick_search_stops_past_piece_width():
    board = Board()
    board.grid[6, :] = 1
    board.grid[6, 0:4] = 0  # horizontal bar only fits at x=0
    board.grid[6, 7] = 0  # column of the vertical bar
    controller = _controller("I", board)
    controller.spawn()
    controller.y = 5
    controller.x = 6  # cumulative shifts reach x=4 at most
    before = controller.shape.copy()
    assert not controller.rotate(1)
    assert controller.x == 6
    assert np.array_equal(controller.shape, before)


def test_rotation_with_no_room_is_fully_reverted():
    board = Board()
    board.grid[8:16, :] = 1
    board.grid[8:16, 4] = 0  # a one-wide well
    controller = _controller("I", board)
    controller.spawn()
    controller.y = 10
    assert not board.collides(controller.shape, controller.x, controller.y)
    before_shape = controller.shape.copy()
    before_x = controller.x

    assert not controller.rotate(1)
    assert np.array_equal(controller.shape, before_shape)
    assert controller.x == before_x

    assert not controller.rotate(-1)
    assert np.array_equal(controller.shape, before_shape)
    assert controller.x == before_x


def test_four_rotations_return_piece_to_start():
    controller = _controller("L")
    controller.spawn()
    controller.y = 8
    start = controller.shape.copy()
    for _ in range(4):
        assert controller.rotate(1)
    assert np.array_equal(controller.shape, start)
    assert controller.x == 4


def test_actions_before_spawn_raise():
    controller = _controller()
    with pytest.raises(RuntimeError):
        controller.move(1)


def test_reset_forgets_piece_and_preview():
    controller = _controller("S")
    controller.spawn()
    controller.reset()
    assert controller.shape is None
    assert controller.next_type is None
    assert controller.cells().size == 0
