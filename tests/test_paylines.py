import pytest

from spinpool.core.catalog import get_symbol
from spinpool.core.paylines import (
    ASCENDING_DIAGONAL,
    DESCENDING_DIAGONAL,
    PAYLINES,
    evaluate,
    winning_symbol,
)

from tests.helpers import ALL_CHERRY_GRID, LOSING_GRID, MIDDLE_CHERRY_GRID, make_grid


def test_five_paylines_in_fixed_order():
    assert len(PAYLINES) == 5
    assert PAYLINES[0] == ((0, 0), (1, 0), (2, 0))
    assert PAYLINES[DESCENDING_DIAGONAL] == ((0, 0), (1, 1), (2, 2))
    assert PAYLINES[ASCENDING_DIAGONAL] == ((0, 2), (1, 1), (2, 0))


def test_uniform_grid_wins_every_line():
    assert evaluate(ALL_CHERRY_GRID) == [0, 1, 2, 3, 4]


def test_all_distinct_grid_wins_nothing():
    assert evaluate(LOSING_GRID) == []


def test_single_row_win():
    assert evaluate(MIDDLE_CHERRY_GRID) == [1]


def test_symbol_on_both_diagonals_only():
    # A forms an X through the centre; no row matches
    grid = make_grid(
        [
            ["seven", "coin", "seven"],
            ["clover", "seven", "fire"],
            ["seven", "star", "seven"],
        ]
    )
    assert evaluate(grid) == [DESCENDING_DIAGONAL, ASCENDING_DIAGONAL]


def test_descending_diagonal_alone():
    grid = make_grid(
        [
            ["seven", "coin", "cherry"],
            ["clover", "seven", "fire"],
            ["lightning", "star", "seven"],
        ]
    )
    assert evaluate(grid) == [DESCENDING_DIAGONAL]


def test_rows_and_diagonal_together():
    grid = make_grid(
        [
            ["crown", "crown", "crown"],
            ["crown", "crown", "coin"],
            ["crown", "fire", "crown"],
        ]
    )
    assert evaluate(grid) == [0, 3, 4]


def test_match_is_exact_not_by_rarity():
    # seven, crown and diamond share the jackpot tier but are different symbols
    grid = make_grid(
        [
            ["seven", "cherry", "coin"],
            ["crown", "clover", "fire"],
            ["diamond", "star", "lightning"],
        ]
    )
    assert evaluate(grid) == []


def test_winning_symbol_for_rows_reads_first_reel():
    grid = make_grid(
        [
            ["coin", "fire", "star"],
            ["coin", "fire", "star"],
            ["coin", "fire", "star"],
        ]
    )
    assert winning_symbol(grid, 0) == get_symbol("coin")
    assert winning_symbol(grid, 1) == get_symbol("fire")
    assert winning_symbol(grid, 2) == get_symbol("star")


def test_winning_symbol_for_both_diagonals_reads_centre():
    grid = make_grid(
        [
            ["diamond", "coin", "diamond"],
            ["clover", "diamond", "fire"],
            ["diamond", "star", "diamond"],
        ]
    )
    assert winning_symbol(grid, DESCENDING_DIAGONAL) == get_symbol("diamond")
    assert winning_symbol(grid, ASCENDING_DIAGONAL) == get_symbol("diamond")


def test_winning_symbol_rejects_unknown_line():
    with pytest.raises(IndexError):
        winning_symbol(ALL_CHERRY_GRID, 5)


def test_evaluate_rejects_wrong_shape():
    with pytest.raises(ValueError):
        evaluate(ALL_CHERRY_GRID[:2])
