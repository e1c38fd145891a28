import pytest

from util import grid
from util.grid import GridLayout, calculate_columns, move_down, move_down_grid, move_left, move_right, move_up, move_up_grid


@pytest.mark.parametrize(
    "usable_width, expected",
    [(0, 1), (17, 1), (18, 1), (36, 1), (37, 2), (39, 2), (56, 3), (200, 10)],
)
def test_calculate_columns(usable_width, expected):
    assert calculate_columns(usable_width, 18, 1) == expected


def test_calculate_columns_never_below_one():
    for width in range(0, 300):
        for min_card in (1, 5, 18, 40):
            assert calculate_columns(width, min_card, 1) >= 1


def test_move_left_stops_at_row_start():
    assert move_left(4, 3) == 3
    assert move_left(3, 3) == 3
    assert move_left(0, 3) == 0
    assert move_left(5, 0) == 5


def test_move_right_stops_at_row_end_and_last_item():
    assert move_right(0, 3, 7) == 1
    assert move_right(2, 3, 7) == 2
    assert move_right(6, 3, 7) == 6  # last item sits mid-row
    assert move_right(0, 0, 7) == 0
    assert move_right(0, 3, 0) == 0


def test_move_up_grid():
    assert move_up_grid(4, 3) == 1
    assert move_up_grid(2, 3) == 2
    assert move_up_grid(3, 0) == 3


def test_move_down_grid_full_rows():
    assert move_down_grid(1, 3, 7) == 4


def test_move_down_grid_short_last_row_clamps_to_last_item():
    assert move_down_grid(4, 3, 7) == 6
    assert move_down_grid(5, 3, 7) == 6


def test_move_down_grid_same_column_in_short_row():
    # 3 columns, 8 items: last row holds 6 and 7
    assert move_down_grid(4, 3, 8) == 7


def test_move_down_grid_on_last_row_is_noop():
    assert move_down_grid(6, 3, 7) == 6
    assert move_down_grid(7, 3, 8) == 7


def test_move_down_grid_degenerate_inputs():
    assert move_down_grid(0, 0, 5) == 0
    assert move_down_grid(0, 3, 0) == 0


@pytest.mark.parametrize("columns", [1, 2, 3, 4, 7])
@pytest.mark.parametrize("total", [1, 2, 5, 7, 13])
def test_grid_moves_never_leave_bounds(columns, total):
    moves = (
        lambda i: move_left(i, columns),
        lambda i: move_right(i, columns, total),
        lambda i: move_up_grid(i, columns),
        lambda i: move_down_grid(i, columns, total),
    )
    for start in range(total):
        for first in moves:
            index = first(start)
            for second in moves:
                result = second(index)
                assert 0 <= result < total


def test_list_moves():
    assert move_down(0, 3) == 1
    assert move_down(2, 3) == 2
    assert move_down(0, 0) == 0
    assert move_up(2) == 1
    assert move_up(0) == 0
    assert move_up(0, 0) == 0


def test_scroll_to_show():
    assert grid.scroll_to_show(2, 5, 10) == 2
    assert grid.scroll_to_show(14, 0, 10) == 5
    assert grid.scroll_to_show(4, 0, 10) == 0
    assert grid.scroll_to_show(4, 3, 0) == 3


class TestGridLayout:
    def test_for_width_spreads_cards(self):
        layout = GridLayout.for_width(56)
        assert layout.columns == 3
        assert layout.card_width == 18

    def test_card_origin_and_hit_test_agree(self):
        layout = GridLayout.for_width(60)
        for index in range(8):
            x, y = layout.card_origin(index)
            assert layout.index_at(x, y, 8) == index
            assert layout.index_at(x + layout.card_width - 1, y + layout.card_height - 1, 8) == index

    def test_hit_test_past_last_item(self):
        layout = GridLayout.for_width(56)
        assert layout.index_at(40, 4, 4) is None
        assert layout.index_at(-1, 0, 4) is None
        assert layout.index_at(0, 0, 0) is None

    def test_hit_test_right_of_last_column(self):
        layout = GridLayout(columns=2, card_width=18)
        assert layout.index_at(2 * 19 + 1, 0, 4) is None

    def test_rows_and_scroll(self):
        layout = GridLayout(columns=3, card_width=18)
        assert layout.rows_for(7) == 3
        assert layout.scroll_to_show(6, 0, 8) == 4
        assert layout.scroll_to_show(0, 4, 8) == 0
