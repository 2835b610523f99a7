"""
Shared fixtures-as-code for the slot tests: deterministic RNG streams,
fixed grids and a ledger/engine factory.
"""

import itertools
from decimal import Decimal

from spinpool.core.catalog import get_symbol
from spinpool.core.engine import SpinEngine
from spinpool.core.ledger import Ledger

WALLET = "0xabcdef0123456789abcdef0123456789abcdef01"
OTHER_WALLET = "0x9999888877776666555544443333222211110000"


class FixedRNG:
    """Replays the given floats in order, cycling when exhausted."""

    def __init__(self, *values):
        self._values = itertools.cycle(values)
        self.calls = 0

    def random_float(self) -> float:
        self.calls += 1
        return next(self._values)


class FixedReels:
    """Reel generator stand-in that always lands on the same grid."""

    def __init__(self, grid):
        self.grid = grid

    def generate(self):
        return self.grid


class BrokenReels:
    def generate(self):
        raise RuntimeError("reel motor jammed")


def make_grid(columns):
    """Build a grid from symbol ids laid out as columns: columns[col][row]."""
    return tuple(tuple(get_symbol(symbol_id) for symbol_id in column) for column in columns)


# Every row and diagonal mixed
LOSING_GRID = make_grid(
    [
        ["cherry", "coin", "clover"],
        ["lightning", "fire", "star"],
        ["seven", "crown", "diamond"],
    ]
)

# Three cherries across the middle row only
MIDDLE_CHERRY_GRID = make_grid(
    [
        ["coin", "cherry", "clover"],
        ["fire", "cherry", "star"],
        ["crown", "cherry", "diamond"],
    ]
)

ALL_CHERRY_GRID = make_grid([["cherry"] * 3] * 3)


def make_engine(grid=None, starting_balance="1.5", reels=None, **ledger_kwargs):
    ledger = Ledger(starting_balance=Decimal(starting_balance), **ledger_kwargs)
    if reels is None and grid is not None:
        reels = FixedReels(grid)
    return SpinEngine(ledger, reels=reels)
