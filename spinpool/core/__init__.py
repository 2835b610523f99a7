"""Spin resolution engine: catalog, reels, paylines, payouts and the ledger."""

from .catalog import SYMBOLS, Rarity, Symbol, SymbolId, get_symbol
from .engine import SpinEngine, SpinOutcome, SpinResult, build_engine
from .exceptions import InsufficientBalance, InternalFailure, InvalidBet, SlotError
from .ledger import Ledger, PoolStats, RecentWin
from .reels import ReelGenerator, WeightedSampler

__all__ = [
    "SYMBOLS",
    "Rarity",
    "Symbol",
    "SymbolId",
    "get_symbol",
    "SpinEngine",
    "SpinOutcome",
    "SpinResult",
    "build_engine",
    "InsufficientBalance",
    "InternalFailure",
    "InvalidBet",
    "SlotError",
    "Ledger",
    "PoolStats",
    "RecentWin",
    "ReelGenerator",
    "WeightedSampler",
]
