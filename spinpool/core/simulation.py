"""
Offline return-to-player checks for the paytable.
"""

from decimal import Decimal
from typing import Dict

from spinpool.core.catalog import SYMBOLS
from spinpool.core.engine import SpinEngine
from spinpool.core.ledger import Ledger
from spinpool.core.paylines import PAYLINES
from spinpool.core.reels import ReelGenerator, WeightedSampler
from spinpool.core.rng import SeededRNG


def theoretical_rtp() -> float:
    """Expected return per unit staked: every line pays independently, so sum them."""
    total_weight = sum(symbol.weight for symbol in SYMBOLS)
    per_line = sum(
        (symbol.weight / total_weight) ** 3 * float(symbol.multiplier) for symbol in SYMBOLS
    )
    return per_line * len(PAYLINES)


def simulate(spins: int = 100_000, bet=Decimal("0.1"), seed=None) -> Dict:
    """
    Play `spins` rounds against a throwaway ledger funded so it never runs dry.

    Returns:
        Dict with hit/jackpot frequencies and the observed RTP
    """
    bet = Decimal(str(bet))
    bankroll = bet * spins
    ledger = Ledger(starting_balance=bankroll, capacity=20, visible=10)
    engine = SpinEngine(
        ledger,
        reels=ReelGenerator(WeightedSampler(rng=SeededRNG(seed))),
        min_bet=bet,
        max_bet=bet,
    )

    wallet = "simulation"
    hits = 0
    jackpots = 0
    returned = Decimal(0)

    for _ in range(spins):
        result = engine.spin(wallet, bet).result
        if result.win_amount > 0:
            hits += 1
            returned += result.win_amount
        if result.is_jackpot:
            jackpots += 1

    return {
        "spins": spins,
        "bet": float(bet),
        "hit_rate": hits / spins,
        "jackpot_rate": jackpots / spins,
        "rtp": float(returned / (bet * spins)),
        "final_balance": float(ledger.get_balance(wallet)),
        "theoretical_rtp": theoretical_rtp(),
    }
