from typing import Sequence, Tuple

from spinpool.core.catalog import SYMBOLS, Symbol
from spinpool.core.rng import rng as default_rng

REEL_COUNT = 3
ROW_COUNT = 3

# grid[column][row]
Column = Tuple[Symbol, Symbol, Symbol]
Grid = Tuple[Column, Column, Column]


class WeightedSampler:
    """
    Draws one symbol at a time with probability proportional to its weight.
    The catalog is static, so the total weight is computed once.
    """

    def __init__(self, symbols: Sequence[Symbol] = SYMBOLS, rng=None):
        if not symbols:
            raise ValueError("Cannot sample from an empty catalog")
        self._symbols = tuple(symbols)
        self._total_weight = sum(symbol.weight for symbol in self._symbols)
        self._rng = rng or default_rng

    @property
    def total_weight(self) -> float:
        return self._total_weight

    def draw(self) -> Symbol:
        remainder = self._rng.random_float() * self._total_weight

        for symbol in self._symbols:
            remainder -= symbol.weight
            if remainder <= 0:
                return symbol

        # Rounding left a sliver above zero: settle on the last entry
        return self._symbols[-1]


class ReelGenerator:
    """Three independent reels, three visible rows each."""

    def __init__(self, sampler: WeightedSampler = None):
        self._sampler = sampler or WeightedSampler()

    def _spin_reel(self) -> Column:
        return tuple(self._sampler.draw() for _ in range(ROW_COUNT))

    def generate(self) -> Grid:
        return tuple(self._spin_reel() for _ in range(REEL_COUNT))
