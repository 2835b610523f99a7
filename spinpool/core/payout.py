from decimal import Decimal
from typing import NamedTuple, Sequence

from spinpool.core.catalog import Rarity
from spinpool.core.paylines import winning_symbol
from spinpool.core.reels import Grid


class Payout(NamedTuple):
    amount: Decimal
    multiplier: Decimal
    is_jackpot: bool


NO_WIN = Payout(Decimal(0), Decimal(0), False)


def calculate_payout(grid: Grid, winning_lines: Sequence[int], bet: Decimal) -> Payout:
    """
    Calculate payout for a resolved grid.

    Multipliers of simultaneous winning lines are summed, then applied to
    the bet once. The jackpot flag is set if any winning line is made of a
    jackpot-tier symbol. The amount is not capped here; the ledger decides
    whether money can move.

    Returns: (amount, multiplier, is_jackpot)
    """
    if not winning_lines:
        return NO_WIN

    total_multiplier = Decimal(0)
    is_jackpot = False

    for line_index in winning_lines:
        symbol = winning_symbol(grid, line_index)
        total_multiplier += symbol.multiplier
        if symbol.rarity == Rarity.JACKPOT:
            is_jackpot = True

    return Payout(bet * total_multiplier, total_multiplier, is_jackpot)
