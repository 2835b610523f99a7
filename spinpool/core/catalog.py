"""
Symbol catalog for the 3x3 machine.
Order matters: the weighted sampler walks symbols in the order listed here.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Tuple


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    JACKPOT = "jackpot"


class SymbolId(str, Enum):
    CHERRY = "cherry"
    COIN = "coin"
    CLOVER = "clover"
    LIGHTNING = "lightning"
    FIRE = "fire"
    STAR = "star"
    SEVEN = "seven"
    CROWN = "crown"
    DIAMOND = "diamond"


@dataclass(frozen=True)
class Symbol:
    id: SymbolId
    name: str
    rarity: Rarity
    multiplier: Decimal
    weight: float
    color: str

    def __post_init__(self):
        if self.weight <= 0:
            raise ValueError(f"{self.id.value}: weight must be positive")
        if self.multiplier <= 0:
            raise ValueError(f"{self.id.value}: multiplier must be positive")

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["id"] = self.id.value
        data["rarity"] = self.rarity.value
        data["multiplier"] = float(self.multiplier)
        return data


SYMBOLS: Tuple[Symbol, ...] = (
    Symbol(SymbolId.CHERRY, "Cherry", Rarity.COMMON, Decimal(2), 25, "#dc2626"),
    Symbol(SymbolId.COIN, "Coin", Rarity.COMMON, Decimal(3), 22, "#fbbf24"),
    Symbol(SymbolId.CLOVER, "Lucky Clover", Rarity.COMMON, Decimal(4), 20, "#22c55e"),
    Symbol(SymbolId.LIGHTNING, "Lightning", Rarity.RARE, Decimal(8), 12, "#3b82f6"),
    Symbol(SymbolId.FIRE, "Fire", Rarity.RARE, Decimal(10), 10, "#f97316"),
    Symbol(SymbolId.STAR, "Star", Rarity.RARE, Decimal(15), 6, "#eab308"),
    Symbol(SymbolId.SEVEN, "Lucky 7", Rarity.JACKPOT, Decimal(25), 3, "#dc2626"),
    Symbol(SymbolId.CROWN, "Crown", Rarity.JACKPOT, Decimal(50), 1.5, "#a855f7"),
    Symbol(SymbolId.DIAMOND, "Diamond", Rarity.JACKPOT, Decimal(100), 0.5, "#06b6d4"),
)

_BY_ID: Dict[SymbolId, Symbol] = {symbol.id: symbol for symbol in SYMBOLS}


def get_symbol(symbol_id) -> Symbol:
    """Look up a symbol by id (enum member or its string value)."""
    return _BY_ID[SymbolId(symbol_id)]


def all_symbols() -> List[Symbol]:
    return list(SYMBOLS)
