"""
Unit tests for Board class.

Tests mine generation, reveal and flood behavior, flags, win/lose
conditions, events and observation generation.
"""
import random

import numpy as np
import pytest
from minesweeper import Board, BoardConfig, CellKind, EventBus, GameState


def count_mines(board: Board) -> int:
    return sum(
        1 for x in range(board.width) for y in range(board.height)
        if board.get_cell(x, y).is_mine
    )


def revealed_positions(board: Board) -> set:
    return {
        (x, y) for x in range(board.width) for y in range(board.height)
        if board.get_cell(x, y).revealed
    }


# ============================================================================
# Generation Tests
# ============================================================================

class TestBoardGeneration:
    """Test grid allocation, mine placement and numbering."""

    def test_new_board_all_cells_hidden(self, default_board: Board) -> None:
        """All cells should be hidden on a new board."""
        for x in range(9):
            for y in range(9):
                cell = default_board.get_cell(x, y)
                assert cell.is_hidden is True
                assert cell.position == (x, y)
        assert default_board.game_state == GameState.PLAYING

    @pytest.mark.parametrize("width,height,mines", [
        (9, 9, 10), (1, 1, 1), (3, 3, 9), (15, 15, 31), (4, 7, 0), (2, 2, 40),
    ])
    def test_mine_count_matches_clamped_config(
        self, width: int, height: int, mines: int
    ) -> None:
        """Placed mines equal the clamped configured count."""
        for seed in range(5):
            board = Board(BoardConfig(width, height, mines), rng=random.Random(seed))
            expected = max(0, min(mines, width * height))
            assert count_mines(board) == expected
            assert board.total_mines == expected

    def test_numbers_match_neighbors(self) -> None:
        """Every number equals the mines among its in-grid neighbors."""
        for seed in range(10):
            board = Board(BoardConfig(8, 6, 12), rng=random.Random(seed))
            for x in range(8):
                for y in range(6):
                    cell = board.get_cell(x, y)
                    if cell.is_mine:
                        continue
                    expected = sum(
                        1 for dx in (-1, 0, 1) for dy in (-1, 0, 1)
                        if (dx or dy) and board.get_cell(x + dx, y + dy).is_mine
                    )
                    assert cell.number == expected
                    assert cell.kind == (
                        CellKind.NUMBER if expected else CellKind.EMPTY
                    )

    def test_collisions_probe_in_row_order(self, scripted_rng) -> None:
        """A taken cell moves the mine right, then down, then to the origin."""
        rng = scripted_rng([1, 0, 1, 0, 2, 1, 2, 1])
        board = Board(BoardConfig(3, 2, 4), rng=rng)
        mines = {
            (x, y) for x in range(3) for y in range(2)
            if board.get_cell(x, y).is_mine
        }
        assert mines == {(1, 0), (2, 0), (2, 1), (0, 0)}

    def test_same_seed_same_board(self) -> None:
        """Placement is deterministic for a seed."""
        first = Board(BoardConfig(9, 9, 10), rng=random.Random(11))
        second = Board(BoardConfig(9, 9, 10), rng=random.Random(11))
        assert np.array_equal(
            first.get_observation(), second.get_observation()
        )
        assert [c.kind for col in first.snapshot() for c in col] == [
            c.kind for col in second.snapshot() for c in col
        ]

    def test_explicit_mine_positions(self) -> None:
        """Explicit positions skip duplicates and out-of-grid entries."""
        board = Board(
            BoardConfig(3, 3, 1), mine_positions=[(0, 0), (0, 0), (5, 5)]
        )
        assert count_mines(board) == 1
        assert board.total_mines == 1

    def test_explicit_mine_positions_update_config(self) -> None:
        """The board config reports the mines actually placed."""
        board = Board(BoardConfig(3, 3, 1), mine_positions=[(0, 0), (2, 2)])
        assert board.total_mines == 2
        assert board.config.mines_count == 2
        assert (board.config.width, board.config.height) == (3, 3)


# ============================================================================
# Reveal Tests
# ============================================================================

class TestReveal:
    """Test cell revealing behavior."""

    def test_reveal_number_cell_reveals_only_it(
        self, center_mine_board: Board, recorder
    ) -> None:
        """A number cell opens alone and does not end the game."""
        assert center_mine_board.reveal(0, 0) is True
        assert revealed_positions(center_mine_board) == {(0, 0)}
        assert center_mine_board.get_cell(0, 0).number == 1
        mine = center_mine_board.get_cell(1, 1)
        assert mine.revealed is False
        assert mine.flagged is False
        assert center_mine_board.is_playing is True
        assert recorder.received == []

    def test_every_border_cell_is_one(self, center_mine_board: Board) -> None:
        """Each cell around a lone center mine reads 1."""
        for x in range(3):
            for y in range(3):
                if (x, y) == (1, 1):
                    continue
                assert center_mine_board.reveal(x, y) is True
                assert center_mine_board.get_cell(x, y).number == 1
        assert center_mine_board.is_won is True

    def test_reveal_same_cell_twice_returns_false(
        self, center_mine_board: Board
    ) -> None:
        """Revealing same cell twice should fail."""
        center_mine_board.reveal(0, 0)
        assert center_mine_board.reveal(0, 0) is False

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (3, 0), (0, 3), (100, 100)])
    def test_reveal_out_of_bounds_is_noop(
        self, center_mine_board: Board, x: int, y: int
    ) -> None:
        """Revealing invalid position should fail silently."""
        assert center_mine_board.reveal(x, y) is False
        assert revealed_positions(center_mine_board) == set()

    def test_out_of_bounds_cell_is_invalid(self, default_board: Board) -> None:
        """Positions outside the grid resolve to an invalid cell."""
        cell = default_board.get_cell(-1, 4)
        assert cell.kind == CellKind.INVALID
        assert cell.is_mine is False

    def test_reveal_flagged_cell_returns_false(
        self, center_mine_board: Board
    ) -> None:
        """Cannot reveal a flagged cell."""
        center_mine_board.toggle_flag(0, 0)
        assert center_mine_board.reveal(0, 0) is False
        assert center_mine_board.get_cell(0, 0).revealed is False


# ============================================================================
# Flood Reveal Tests
# ============================================================================

class TestFloodReveal:
    """Test empty cell cascade behavior."""

    def test_empty_board_reveals_everything(self, empty_board: Board) -> None:
        """Revealing any cell of a mine-free board opens it all."""
        empty_board.reveal(2, 2)
        assert len(revealed_positions(empty_board)) == 25
        assert empty_board.is_won is True

    def test_flood_stops_at_number_border(self, events: EventBus) -> None:
        """A wall of mines bounds the flood at its numbered border."""
        wall = [(2, y) for y in range(5)]
        board = Board(BoardConfig(5, 5, 5), events=events, mine_positions=wall)
        board.reveal(0, 0)

        expected = {(x, y) for x in (0, 1) for y in range(5)}
        assert revealed_positions(board) == expected
        for y in range(5):
            assert board.get_cell(1, y).is_number is True
        assert all(not board.get_cell(*p).revealed for p in wall)
        assert board.is_playing is True

    def test_flood_processes_each_cell_once(self, corner_mine_board: Board) -> None:
        """Every revealed position appears once in the flood result."""
        opened = corner_mine_board.flood_reveal(0, 0)
        assert len(opened) == len(set(opened)) == 24
        assert (4, 4) not in opened

    def test_flood_from_revealed_cell_does_nothing(
        self, corner_mine_board: Board
    ) -> None:
        """Already revealed cells stop the fill."""
        corner_mine_board.flood_reveal(0, 0)
        assert corner_mine_board.flood_reveal(0, 0) == []

    def test_flood_opens_wrongly_flagged_cells(
        self, corner_mine_board: Board, recorder
    ) -> None:
        """A flagged safe cell inside the region is opened and the game won."""
        corner_mine_board.toggle_flag(0, 4)
        corner_mine_board.reveal(0, 0)

        cell = corner_mine_board.get_cell(0, 4)
        assert cell.revealed is True
        assert cell.flagged is False
        assert len(revealed_positions(corner_mine_board)) == 24
        assert corner_mine_board.is_won is True
        assert recorder.named("game-won") == [(True,)]
        assert recorder.named("mine-marked") == []

    def test_large_flood_does_not_recurse(self) -> None:
        """A big open board floods without hitting recursion limits."""
        board = Board(BoardConfig(200, 200, 0))
        board.reveal(0, 0)
        assert board.is_won is True


# ============================================================================
# Flag Tests
# ============================================================================

class TestFlag:
    """Test flagging behavior."""

    def test_flag_mine_updates_counter(
        self, center_mine_board: Board, recorder
    ) -> None:
        """Flagging a mine counts it and emits mine-marked."""
        assert center_mine_board.toggle_flag(1, 1) is True
        assert center_mine_board.marked_mines == 1
        assert center_mine_board.remaining_mines == 0
        assert recorder.named("mine-marked") == [(True,)]

    def test_unflag_mine_restores_counter(
        self, center_mine_board: Board, recorder
    ) -> None:
        """Flagging twice returns the cell and counter to the start."""
        center_mine_board.toggle_flag(1, 1)
        center_mine_board.toggle_flag(1, 1)
        assert center_mine_board.get_cell(1, 1).is_hidden is True
        assert center_mine_board.marked_mines == 0
        assert recorder.named("mine-marked") == [(True,), (False,)]

    def test_flag_safe_cell_emits_nothing(
        self, center_mine_board: Board, recorder
    ) -> None:
        """Only mines affect the marked counter."""
        assert center_mine_board.toggle_flag(0, 0) is True
        assert center_mine_board.get_cell(0, 0).flagged is True
        assert center_mine_board.marked_mines == 0
        assert recorder.received == []

    def test_flag_revealed_cell_fails(
        self, center_mine_board: Board, recorder
    ) -> None:
        """Cannot flag a revealed cell."""
        center_mine_board.reveal(0, 0)
        assert center_mine_board.toggle_flag(0, 0) is False
        assert center_mine_board.get_cell(0, 0).flagged is False
        assert recorder.received == []

    def test_flag_out_of_bounds_is_noop(self, center_mine_board: Board) -> None:
        """Flagging outside the grid does nothing."""
        assert center_mine_board.toggle_flag(-1, -1) is False


# ============================================================================
# Win/Lose Condition Tests
# ============================================================================

class TestGameEndConditions:
    """Test win and lose conditions."""

    def test_reveal_mine_loses_game(
        self, center_mine_board: Board, recorder
    ) -> None:
        """Revealing a mine ends the game and marks only it exploded."""
        assert center_mine_board.reveal(1, 1) is True
        assert center_mine_board.is_lost is True
        assert center_mine_board.is_game_over is True
        assert recorder.received == [("game-over", (True,))]
        exploded = [
            (x, y) for x in range(3) for y in range(3)
            if center_mine_board.get_cell(x, y).exploded
        ]
        assert exploded == [(1, 1)]

    def test_explosion_reveals_all_mines(self, events: EventBus, recorder) -> None:
        """Every mine is shown after a loss, only the trigger exploded."""
        mines = [(0, 0), (3, 3), (2, 0)]
        board = Board(BoardConfig(4, 4, 3), events=events, mine_positions=mines)
        board.reveal(3, 3)
        for position in mines:
            cell = board.get_cell(*position)
            assert cell.revealed is True
            assert cell.exploded is (position == (3, 3))
        assert board.get_cell(1, 1).revealed is False

    def test_second_reveal_after_loss_is_noop(
        self, center_mine_board: Board, recorder
    ) -> None:
        """No duplicate events once the game is lost."""
        center_mine_board.reveal(1, 1)
        assert center_mine_board.reveal(1, 1) is False
        assert center_mine_board.reveal(0, 0) is False
        assert center_mine_board.toggle_flag(0, 0) is False
        assert len(recorder.named("game-over")) == 1

    def test_win_emits_once_and_flags_mines(
        self, corner_mine_board: Board, recorder
    ) -> None:
        """Clearing the board wins once and flags every mine."""
        corner_mine_board.reveal(0, 0)
        assert corner_mine_board.is_won is True
        assert recorder.named("game-won") == [(True,)]
        assert corner_mine_board.get_cell(4, 4).flagged is True
        assert corner_mine_board.get_cell(4, 4).revealed is False
        assert corner_mine_board.marked_mines == 0

        assert corner_mine_board.check_win_condition() is True
        assert len(recorder.named("game-won")) == 1

    def test_no_win_while_safe_cells_hidden(
        self, center_mine_board: Board, recorder
    ) -> None:
        """Win check fails while a safe cell is closed."""
        center_mine_board.reveal(0, 0)
        assert center_mine_board.check_win_condition() is False
        assert recorder.named("game-won") == []

    def test_all_mine_board_loses_on_any_reveal(self) -> None:
        """A board made only of mines loses on the first reveal."""
        board = Board(BoardConfig(2, 2, 4))
        board.reveal(1, 0)
        assert board.is_lost is True


# ============================================================================
# Query Tests
# ============================================================================

class TestQueries:
    """Test snapshots, observations and valid actions."""

    def test_snapshot_is_a_copy(self, center_mine_board: Board) -> None:
        """Mutating the snapshot leaves the board alone."""
        snapshot = center_mine_board.snapshot()
        assert len(snapshot) == 3 and len(snapshot[0]) == 3
        snapshot[0][0].revealed = True
        assert center_mine_board.get_cell(0, 0).revealed is False

    def test_observation_shape_is_height_by_width(self) -> None:
        """Observation rows are y, columns are x."""
        board = Board(BoardConfig(4, 2, 0))
        obs = board.get_observation()
        assert obs.shape == (2, 4)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)

    def test_observation_codes(self, center_mine_board: Board) -> None:
        """Flags, numbers and the exploded mine show their codes."""
        center_mine_board.toggle_flag(2, 0)
        center_mine_board.reveal(0, 0)
        center_mine_board.reveal(1, 1)
        obs = center_mine_board.get_observation()
        assert obs[0, 2] == -2
        assert obs[0, 0] == 1
        assert obs[1, 1] == 10
        assert obs[2, 2] == -1

    def test_valid_actions(self, center_mine_board: Board) -> None:
        """Revealed and flagged cells are not valid actions."""
        center_mine_board.reveal(0, 0)
        center_mine_board.toggle_flag(2, 2)
        actions = center_mine_board.get_valid_actions()
        assert len(actions) == 7
        assert (0, 0) not in actions
        assert (2, 2) not in actions

    def test_initialize_replaces_grid(self, center_mine_board: Board) -> None:
        """Re-initializing resets state and counters."""
        center_mine_board.toggle_flag(1, 1)
        center_mine_board.reveal(0, 0)
        center_mine_board.initialize(BoardConfig(2, 2, 0))
        assert center_mine_board.is_playing is True
        assert center_mine_board.marked_mines == 0
        assert center_mine_board.total_mines == 0
        assert revealed_positions(center_mine_board) == set()
